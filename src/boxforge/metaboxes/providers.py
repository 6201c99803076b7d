"""Meta box providers for BoxForge.

A provider is plugin code that adds or removes meta boxes whenever a
screen is built. Providers run in registration order against a fresh
registry whose current screen is the screen being built, so they can
call registry.add() without naming a screen.
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from boxforge.metaboxes.registry import MetaBoxRegistry
    from boxforge.screens.types import ScreenConfig

logger = logging.getLogger(__name__)

# Provider signature: (registry, screen) -> None
ProviderFn = Callable[["MetaBoxRegistry", "ScreenConfig"], None]


class MetaBoxProviders:
    """Registry for meta box providers.

    Example:
        @meta_box_provider("seo")
        def add_seo_box(registry, screen):
            registry.add("seo", "SEO", render_seo, ["post", "page"], "normal")
    """

    _providers: dict[str, ProviderFn] = {}

    @classmethod
    def register(cls, name: str, provider: ProviderFn) -> None:
        """Register a provider by name.

        Idempotent — re-registering the same name is a no-op.
        """
        if name in cls._providers:
            return
        cls._providers[name] = provider

    @classmethod
    def items(cls) -> list[tuple[str, ProviderFn]]:
        """Providers as (name, fn) pairs in registration order."""
        return list(cls._providers.items())

    @classmethod
    def list_registered(cls) -> list[str]:
        return list(cls._providers.keys())

    @classmethod
    def clear(cls) -> None:
        """Clear all registrations. Primarily for testing."""
        cls._providers.clear()


def meta_box_provider(name: str) -> Callable[[ProviderFn], ProviderFn]:
    """Decorator to register a meta box provider.

    Usage:
        @meta_box_provider("seo")
        def add_seo_box(registry, screen):
            ...
    """

    def decorator(fn: ProviderFn) -> ProviderFn:
        MetaBoxProviders.register(name, fn)
        return fn

    return decorator


def load_plugins(module_names: list[str]) -> list[str]:
    """Import plugin modules so their providers and renderers register.

    Returns:
        Names of the modules that imported successfully. Failures are
        logged and skipped.
    """
    loaded = []
    for module_name in module_names:
        try:
            importlib.import_module(module_name)
        except ImportError as e:
            logger.error("Failed to load meta box plugin '%s': %s", module_name, e)
            continue
        logger.info("Loaded meta box plugin '%s'", module_name)
        loaded.append(module_name)
    return loaded
