"""Renderer registry for BoxForge.

Screen metadata refers to meta box callbacks by name. Renderers must be
registered under that name before a screen using them is built.
Follows the same pattern as MetaBoxProviders.
"""

from collections.abc import Callable

from boxforge.metaboxes.types import MetaBoxCallback


class RendererRegistry:
    """Registry for named meta box callbacks.

    Example:
        @meta_box_renderer("submitBox")
        def submit_box(screen, box):
            ...
    """

    _renderers: dict[str, MetaBoxCallback] = {}

    @classmethod
    def register(cls, name: str, renderer: MetaBoxCallback) -> None:
        """Register a renderer by name.

        Idempotent — re-registering the same name is a no-op.
        """
        if name in cls._renderers:
            return
        cls._renderers[name] = renderer

    @classmethod
    def get(cls, name: str) -> MetaBoxCallback:
        """Get a registered renderer by name.

        Raises:
            ValueError: If renderer is not registered
        """
        if name not in cls._renderers:
            raise ValueError(
                f"Meta box renderer '{name}' is not registered. "
                "Renderers must be registered before screens are built."
            )
        return cls._renderers[name]

    @classmethod
    def is_registered(cls, name: str) -> bool:
        return name in cls._renderers

    @classmethod
    def list_registered(cls) -> list[str]:
        """List all registered renderer names."""
        return sorted(cls._renderers.keys())

    @classmethod
    def clear(cls) -> None:
        """Clear all registrations. Primarily for testing."""
        cls._renderers.clear()


def meta_box_renderer(name: str) -> Callable[[MetaBoxCallback], MetaBoxCallback]:
    """Decorator to register a meta box renderer."""

    def decorator(fn: MetaBoxCallback) -> MetaBoxCallback:
        RendererRegistry.register(name, fn)
        return fn

    return decorator
