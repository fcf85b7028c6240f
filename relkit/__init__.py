"""GitHub release automation for packaged projects."""

__version__ = "0.1.0"
