"""Image capture domain."""
