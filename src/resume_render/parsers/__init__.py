"""Text extraction from rendered artifacts."""
