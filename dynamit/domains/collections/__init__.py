"""Table list domain."""
