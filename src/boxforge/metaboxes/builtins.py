"""Stock meta box renderers shipped with BoxForge.

Renderers receive the screen being built and the MetaBox record, and
return the box body as text. Screen metadata refers to them by name.
"""

from typing import Any

from boxforge.metaboxes.renderers import RendererRegistry
from boxforge.metaboxes.types import MetaBox


def submit_box(screen: Any, box: MetaBox) -> str:
    """Publish controls: status and the save button."""
    status = (box.args or {}).get("status", "draft")
    return f"Status: {status}"


def excerpt_box(screen: Any, box: MetaBox) -> str:
    return "Excerpts are optional hand-crafted summaries of your content."


def discussion_box(screen: Any, box: MetaBox) -> str:
    allow = (box.args or {}).get("allowComments", True)
    return "Comments are open." if allow else "Comments are closed."


def activity_box(screen: Any, box: MetaBox) -> str:
    limit = (box.args or {}).get("limit", 5)
    return f"Showing the {limit} most recent items."


_BUILTINS = {
    "submitBox": submit_box,
    "excerptBox": excerpt_box,
    "discussionBox": discussion_box,
    "activityBox": activity_box,
}


def register_builtin_renderers() -> None:
    """Register framework-provided renderers. Called at application startup."""
    for name, renderer in _BUILTINS.items():
        RendererRegistry.register(name, renderer)
