"""AI analysis domain."""
