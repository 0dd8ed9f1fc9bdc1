"""Meal workflow adapters."""
