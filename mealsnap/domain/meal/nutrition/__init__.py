"""Nutrition computations."""
