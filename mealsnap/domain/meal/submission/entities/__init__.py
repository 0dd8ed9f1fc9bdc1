"""Submission entities."""
