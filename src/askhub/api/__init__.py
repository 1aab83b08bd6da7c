"""HTTP API for the AskHub application."""
