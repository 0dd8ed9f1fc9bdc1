"""AI service adapters."""
