"""Docker Engine dashboard: renders engine version and container state as HTML."""

__version__ = "0.1.0"
