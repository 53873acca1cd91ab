"""Version information for pass-authz."""

__version__ = "0.1.0"
