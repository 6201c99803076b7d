"""Meta box layout service for BoxForge.

Builds the meta box registry for one screen request: declared boxes from
screen metadata first, then plugin providers, then declared removals and
finally the user's saved ordering.
"""

import logging
from typing import Any

from boxforge.metaboxes.providers import MetaBoxProviders
from boxforge.metaboxes.registry import MetaBoxRegistry
from boxforge.metaboxes.renderers import RendererRegistry
from boxforge.metaboxes.types import Priority
from boxforge.screens.loader import ScreenConfigLoader
from boxforge.screens.resolver import ScreenResolver
from boxforge.screens.types import ScreenConfig

logger = logging.getLogger(__name__)


class MetaBoxService:
    """Builds per-request meta box registries for screens."""

    def __init__(self, screen_loader: ScreenConfigLoader | None):
        self.screen_loader = screen_loader

    def build(
        self,
        screen: ScreenConfig,
        saved_order: dict[str, list[str]] | None = None,
    ) -> MetaBoxRegistry:
        """Build a fresh registry for a screen.

        Args:
            screen: The screen being displayed (becomes the current screen)
            saved_order: Optional user ordering, context → box ids

        Returns:
            A registry holding every box registered for the request.
        """
        registry = MetaBoxRegistry(
            resolver=ScreenResolver(self.screen_loader),
            current_screen=screen,
        )

        self._add_declared(registry, screen)
        self._run_providers(registry, screen)

        for removal in screen.removed_meta_boxes:
            registry.remove(removal.id, screen, removal.context)

        if saved_order:
            self.apply_saved_order(registry, screen, saved_order)

        return registry

    def apply_saved_order(
        self,
        registry: MetaBoxRegistry,
        screen: ScreenConfig,
        saved_order: dict[str, list[str]],
    ) -> None:
        """Move boxes into the sorted bucket of the contexts a user chose.

        Boxes keep the title, callback and args they were registered with.
        """
        for context, box_ids in saved_order.items():
            for box_id in box_ids:
                if not box_id:
                    continue
                registry.add(box_id, None, None, screen, context, Priority.SORTED)

    def layout(self, registry: MetaBoxRegistry, screen_id: str) -> dict[str, Any]:
        """Displayable boxes of a screen grouped by context, in render order."""
        return {
            "screen": screen_id,
            "contexts": {
                context: [box.to_dict() for box in registry.boxes(screen_id, context)]
                for context in registry.contexts(screen_id)
            },
        }

    def _add_declared(self, registry: MetaBoxRegistry, screen: ScreenConfig) -> None:
        for definition in screen.meta_boxes:
            try:
                callback = RendererRegistry.get(definition.callback)
            except ValueError:
                logger.warning(
                    "Meta box '%s' on screen '%s' uses unregistered renderer '%s', skipping",
                    definition.id,
                    screen.id,
                    definition.callback,
                )
                continue

            registry.add(
                definition.id,
                definition.title,
                callback,
                screen,
                definition.context,
                definition.priority,
                definition.args,
            )

    def _run_providers(self, registry: MetaBoxRegistry, screen: ScreenConfig) -> None:
        for name, provider in MetaBoxProviders.items():
            try:
                provider(registry, screen)
            except Exception as e:
                logger.error("Meta box provider '%s' failed: %s", name, e)
                continue
