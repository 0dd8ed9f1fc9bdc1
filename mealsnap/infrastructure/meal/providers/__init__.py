"""Image sources, stub gateway and provider factory."""
