"""HTTP API for the earnings engine."""
