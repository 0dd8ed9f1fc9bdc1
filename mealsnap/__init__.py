"""mealsnap - photo to nutrition capture workflow."""

__version__ = "0.1.0"
