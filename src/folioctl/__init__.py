"""folioctl — content and stylesheet toolkit for a static portfolio site."""

__version__ = "0.3.0"
