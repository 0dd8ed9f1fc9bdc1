"""Meal capture domain."""
