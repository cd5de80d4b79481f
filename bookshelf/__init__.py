"""Client-side state manager for a remote book catalog."""

__version__ = "0.1.0"
