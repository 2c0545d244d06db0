"""Domain validators."""
