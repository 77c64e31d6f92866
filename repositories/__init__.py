"""In-memory state containers for customers (no persistence)."""
