"""Authentication models and the installer that scaffolds them into an app."""

__version__ = "0.1.0"
