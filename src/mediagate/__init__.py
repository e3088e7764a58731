"""MediaGate - access authorization for media resources."""

__version__ = "0.1.0"
