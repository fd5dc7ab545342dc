"""HTTP API over a live play session."""
