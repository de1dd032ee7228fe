"""Request forms."""
