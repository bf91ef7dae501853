"""Format-specific text extraction."""
