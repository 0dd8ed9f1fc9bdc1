"""Shared domain abstractions."""
