"""Progress module for tracking lesson completion."""
