"""HTTP API for phone lists."""
