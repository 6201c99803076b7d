"""Resolve hook names to screen configurations."""

import logging
import re

from boxforge.core.diagnostics import doing_it_wrong
from boxforge.screens.loader import ScreenConfigLoader
from boxforge.screens.types import ScreenConfig

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^a-z0-9_\-]")


def sanitize_screen_id(name: str) -> str:
    """Lowercase a hook name and drop everything outside [a-z0-9_-]."""
    return _UNSAFE_CHARS.sub("", name.lower())


class ScreenResolver:
    """Converts a hook name into a screen via the screen directory.

    Names the directory does not know become ad-hoc screens (source
    "auto"), so plugins can target screens that have no metadata.
    """

    def __init__(self, directory: ScreenConfigLoader | None):
        self.directory = directory

    def resolve(self, hook_name: str) -> ScreenConfig | None:
        """Resolve a hook name to a screen.

        Returns:
            The matching screen, an ad-hoc screen for unknown names, or None
            when the name is unusable or the directory is not initialized.
        """
        if self.directory is None:
            doing_it_wrong(
                "ScreenResolver.resolve(), MetaBoxRegistry.add()",
                "The screen directory is not initialized. Register meta boxes "
                "from a meta box provider instead of at import time.",
            )
            return None

        screen_id = sanitize_screen_id(hook_name)
        if not screen_id:
            logger.debug("Hook name %r does not name a screen", hook_name)
            return None

        screen = self.directory.get_screen(screen_id)
        if screen is not None:
            return screen

        return ScreenConfig(id=screen_id, name=hook_name, type="custom", source="auto")
