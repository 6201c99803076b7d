"""BoxForge — metadata-driven admin screens and meta boxes."""

__version__ = "0.1.0"
