"""HTTP API for the forum karma service."""
