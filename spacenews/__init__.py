"""Space news snapshot job: fetch four space APIs, store the combined result."""

__version__ = "1.0.0"
