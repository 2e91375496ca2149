"""Version information for artifact-migrator."""

__version__ = "1.0.0"
