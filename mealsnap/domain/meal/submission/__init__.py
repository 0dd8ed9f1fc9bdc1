"""Meal submission domain."""
