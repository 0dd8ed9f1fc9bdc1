"""Meal capture use cases."""
