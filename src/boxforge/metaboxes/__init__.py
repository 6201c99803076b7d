"""BoxForge meta box system.

Meta boxes are named panels placed in a context (screen region) and a
priority bucket of an admin screen:
- Priority buckets render in order: high, sorted, core, default, low
- A box id lives in one high/core/default/low bucket per screen; sorted
  placements from a saved ordering are tracked separately
- Removed boxes leave a tombstone that blocks core and sorted re-adds

Usage:
    from boxforge.metaboxes import meta_box_provider

    @meta_box_provider("seo")
    def add_seo_box(registry, screen):
        registry.add("seo", "SEO", render_seo, ["post", "page"], "normal", "high")
"""

from boxforge.metaboxes.builtins import register_builtin_renderers
from boxforge.metaboxes.providers import MetaBoxProviders, load_plugins, meta_box_provider
from boxforge.metaboxes.registry import MetaBoxRegistry
from boxforge.metaboxes.renderers import RendererRegistry, meta_box_renderer
from boxforge.metaboxes.types import (
    CONFLICT_ORDER,
    DEFAULT_CONTEXT,
    REMOVED,
    RENDER_ORDER,
    MetaBox,
    MetaBoxDefinition,
    MetaBoxRemoval,
    Priority,
    coerce_priority,
)

__all__ = [
    "CONFLICT_ORDER",
    "DEFAULT_CONTEXT",
    "MetaBox",
    "MetaBoxDefinition",
    "MetaBoxProviders",
    "MetaBoxRegistry",
    "MetaBoxRemoval",
    "Priority",
    "REMOVED",
    "RENDER_ORDER",
    "RendererRegistry",
    "coerce_priority",
    "load_plugins",
    "meta_box_provider",
    "meta_box_renderer",
    "register_builtin_renderers",
]
