"""Construction project budget tracker backend."""
