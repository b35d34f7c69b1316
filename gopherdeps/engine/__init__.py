"""Project-wide aggregation of per-file import results."""
