"""Text measurement, wrapping and pagination."""
