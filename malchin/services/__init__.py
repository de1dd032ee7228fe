"""Marketplace services used by the blueprints and the CLI."""
