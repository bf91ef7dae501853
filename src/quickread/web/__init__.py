"""HTTP API for QuickRead."""
