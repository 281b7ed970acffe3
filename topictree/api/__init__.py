"""HTTP API for topic clustering."""
