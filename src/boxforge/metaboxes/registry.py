"""Meta box registry for BoxForge.

Holds every meta box registered during one request, keyed as
screen id → context → priority → box id. A registry is created per
request (see MetaBoxService) and read once by layout code.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from boxforge.core.diagnostics import doing_it_wrong
from boxforge.metaboxes.types import (
    CONFLICT_ORDER,
    DEFAULT_CONTEXT,
    REMOVED,
    RENDER_ORDER,
    MetaBox,
    MetaBoxCallback,
    Priority,
    Slot,
    coerce_priority,
)

if TYPE_CHECKING:
    from boxforge.screens.resolver import ScreenResolver
    from boxforge.screens.types import ScreenConfig

logger = logging.getLogger(__name__)

# Screen argument accepted by add()/remove(): empty (current screen),
# a hook name, a screen object, or a sequence of those.
ScreenRef = Any

_SEQUENCE_TYPES = (list, tuple, set, frozenset)


class MetaBoxRegistry:
    """Registry of meta boxes for the screens of one request.

    Example:
        registry = MetaBoxRegistry(resolver, current_screen=screen)
        registry.add("submitdiv", "Publish", submit_box, context="side", priority="core")
        registry.remove("commentsdiv", "post", "normal")
        for box in registry.boxes("post", "side"):
            ...
    """

    def __init__(
        self,
        resolver: ScreenResolver | None = None,
        current_screen: ScreenConfig | None = None,
    ):
        if resolver is None:
            from boxforge.screens.resolver import ScreenResolver

            resolver = ScreenResolver(None)
        self.resolver = resolver
        self.current_screen = current_screen
        self._boxes: dict[str, dict[str, dict[Priority, dict[str, Slot]]]] = {}

    def add(
        self,
        box_id: str,
        title: str | None,
        callback: MetaBoxCallback | None,
        screen: ScreenRef = None,
        context: str = DEFAULT_CONTEXT,
        priority: Priority | str | None = Priority.DEFAULT,
        callback_args: dict[str, Any] | None = None,
    ) -> None:
        """Add a meta box to one or more screens.

        An id lives in only one high/core/default/low bucket per screen, so
        adding an id that is already registered there moves it. Sorted
        placements are not looked at. Special cases:
        - priority "core" never overrides an existing registration; it only
          promotes one sitting in the "default" bucket to "core"
        - priority "core" or "sorted" never brings back a removed box
        - an empty priority keeps the existing registration's priority
        - priority "sorted" keeps the existing title, callback and args

        An unknown priority name is reported through doing_it_wrong() and
        nothing is registered.

        Args:
            box_id: Meta box ID
            title: Title shown in the box heading
            callback: Callable that fills the box
            screen: Screen(s) to add the box to. Defaults to the current screen
            context: Region of the screen (e.g., "normal", "side", "advanced")
            priority: Bucket within the context. Empty matches an existing
                registration, falling back to "low"
            callback_args: Data passed to the callback as box args
        """
        try:
            requested = coerce_priority(priority)
        except ValueError as exc:
            doing_it_wrong("MetaBoxRegistry.add()", str(exc))
            return

        if _is_sequence(screen) and screen:
            for single_screen in screen:
                self.add(
                    box_id, title, callback, single_screen, context, requested, callback_args
                )
            return

        screen_id = self._resolve_screen_id(screen)
        if not screen_id:
            return

        contexts = self._boxes.setdefault(screen_id, {})
        contexts.setdefault(context, {})

        for a_context in list(contexts):
            buckets = contexts[a_context]
            for a_priority in CONFLICT_ORDER:
                bucket = buckets.get(a_priority)
                if bucket is None or box_id not in bucket:
                    continue
                existing = bucket[box_id]

                # A removed box is never brought back by core or sorted adds
                if requested in (Priority.CORE, Priority.SORTED) and existing is REMOVED:
                    return

                if requested is Priority.CORE:
                    # Keep a plugin's default-priority copy in core sort order
                    if a_priority is Priority.DEFAULT:
                        buckets.setdefault(Priority.CORE, {})[box_id] = bucket.pop(box_id)
                    return

                if requested is None:
                    requested = a_priority
                elif requested is Priority.SORTED and isinstance(existing, MetaBox):
                    title = existing.title
                    callback = existing.callback
                    callback_args = existing.args

                if requested is not a_priority or context != a_context:
                    del bucket[box_id]

        if requested is None:
            requested = Priority.LOW

        contexts[context].setdefault(requested, {})[box_id] = MetaBox(
            id=box_id,
            title=title,
            callback=callback,
            args=callback_args,
        )

    def remove(self, box_id: str, screen: ScreenRef, context: str) -> None:
        """Remove a meta box from one or more screens.

        Leaves a tombstone in the high, core, default and low buckets of the
        context so later "core" and "sorted" adds of the same id are ignored.
        A sorted placement of the id in that context is dropped.
        """
        if _is_sequence(screen) and screen:
            for single_screen in screen:
                self.remove(box_id, single_screen, context)
            return

        screen_id = self._resolve_screen_id(screen)
        if not screen_id:
            return

        buckets = self._boxes.setdefault(screen_id, {}).setdefault(context, {})
        for a_priority in CONFLICT_ORDER:
            buckets.setdefault(a_priority, {})[box_id] = REMOVED
        buckets.get(Priority.SORTED, {}).pop(box_id, None)

    def find(self, screen_id: str, box_id: str) -> tuple[str, Priority, Slot] | None:
        """Return (context, priority, slot) of the first occurrence of a box."""
        for context, buckets in self._boxes.get(screen_id, {}).items():
            for a_priority in RENDER_ORDER:
                bucket = buckets.get(a_priority, {})
                if box_id in bucket:
                    return context, a_priority, bucket[box_id]
        return None

    def is_removed(self, screen_id: str, box_id: str) -> bool:
        """Check whether a box has been removed anywhere on the screen."""
        for buckets in self._boxes.get(screen_id, {}).values():
            for bucket in buckets.values():
                if bucket.get(box_id) is REMOVED:
                    return True
        return False

    def screens(self) -> list[str]:
        return list(self._boxes)

    def contexts(self, screen_id: str) -> list[str]:
        """List contexts of a screen in the order they were first used."""
        return list(self._boxes.get(screen_id, {}))

    def boxes(self, screen_id: str, context: str) -> list[MetaBox]:
        """List displayable boxes of a context in render order.

        Removed boxes and untitled sorted placeholders are skipped. A box
        that is both sorted and registered again afterwards is listed once,
        at its first position.
        """
        buckets = self._boxes.get(screen_id, {}).get(context, {})
        result: list[MetaBox] = []
        seen: set[str] = set()
        for a_priority in RENDER_ORDER:
            for box_id, slot in buckets.get(a_priority, {}).items():
                if box_id in seen or not isinstance(slot, MetaBox) or not slot.title:
                    continue
                seen.add(box_id)
                result.append(slot)
        return result

    def to_dict(self) -> dict[str, Any]:
        """Dump the registry. Removed boxes appear as False."""
        return {
            screen_id: {
                context: {
                    a_priority.value: {
                        box_id: slot.to_dict() if isinstance(slot, MetaBox) else False
                        for box_id, slot in bucket.items()
                    }
                    for a_priority, bucket in buckets.items()
                }
                for context, buckets in contexts.items()
            }
            for screen_id, contexts in self._boxes.items()
        }

    def clear(self) -> None:
        self._boxes.clear()

    def _resolve_screen_id(self, screen: ScreenRef) -> str | None:
        """Turn a screen argument into a screen id, or None if unresolvable."""
        if not screen:
            screen = self.current_screen
        elif isinstance(screen, str):
            screen = self.resolver.resolve(screen)

        screen_id = getattr(screen, "id", None)
        if not screen_id:
            logger.debug("Skipping meta box registration: no screen resolved")
            return None
        return screen_id


def _is_sequence(value: Any) -> bool:
    return isinstance(value, _SEQUENCE_TYPES)
