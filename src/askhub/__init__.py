"""AskHub: Q&A community API."""

__version__ = "0.1.0"
