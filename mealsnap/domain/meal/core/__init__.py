"""Core meal capture domain: entities, value objects, events, exceptions."""
