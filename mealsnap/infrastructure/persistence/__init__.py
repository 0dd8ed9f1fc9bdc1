"""Meal store implementations."""
