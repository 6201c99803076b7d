"""Screen configuration module — admin screens and hook-name resolution."""

from boxforge.screens.types import ScreenConfig
from boxforge.screens.loader import ScreenConfigLoader
from boxforge.screens.resolver import ScreenResolver, sanitize_screen_id

__all__ = ["ScreenConfig", "ScreenConfigLoader", "ScreenResolver", "sanitize_screen_id"]
