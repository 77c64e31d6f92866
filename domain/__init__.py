"""Pure domain model for customer lead scoring (no I/O, no frameworks)."""
