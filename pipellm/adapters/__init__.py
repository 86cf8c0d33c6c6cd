"""User-facing adapters."""
