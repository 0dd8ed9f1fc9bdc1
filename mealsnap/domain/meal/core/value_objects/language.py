"""Language value object.

Locale sent to the analysis service so names and descriptions come back
in the user's language.
"""

from enum import Enum


class Language(str, Enum):
    """Supported analysis languages."""

    ENGLISH = "en"
    HEBREW = "he"

    @classmethod
    def from_code(cls, code: str) -> "Language":
        """
        Parse a language code.

        Args:
            code: ISO code, case-insensitive ("en", "HE", ...)

        Returns:
            Matching Language

        Raises:
            ValueError: If the code is not supported
        """
        normalized = code.strip().lower()
        for language in cls:
            if language.value == normalized:
                return language
        supported = ", ".join(lang.value for lang in cls)
        raise ValueError(f"Unsupported language '{code}' (expected one of: {supported})")

    def is_rtl(self) -> bool:
        """Right-to-left script."""
        return self is Language.HEBREW
