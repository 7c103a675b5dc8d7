"""Application review workflow."""
