"""Ingredient editing."""
