"""SpaceBio: space-biology research dashboard backend."""

__version__ = "0.1.0"
