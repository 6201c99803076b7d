"""Meta box types for BoxForge.

Defines the data structures held by the meta box registry:
- Priority: ordering bucket within a screen context
- MetaBox: a registered panel (id, title, callback, args)
- REMOVED: tombstone marking a box as permanently removed from a context
- MetaBoxDefinition / MetaBoxRemoval: declarative entries from screen YAML
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any


class Priority(str, Enum):
    """Ordering bucket within a context.

    SORTED holds boxes placed by a user-saved ordering. When passed to
    MetaBoxRegistry.add() it also means "keep whatever payload is already
    registered for this id".
    """

    HIGH = "high"
    SORTED = "sorted"
    CORE = "core"
    DEFAULT = "default"
    LOW = "low"


# Buckets in the order layout code reads them
RENDER_ORDER: tuple[Priority, ...] = (
    Priority.HIGH,
    Priority.SORTED,
    Priority.CORE,
    Priority.DEFAULT,
    Priority.LOW,
)

# Buckets checked for an existing id on add; sorted placements are not
CONFLICT_ORDER: tuple[Priority, ...] = (
    Priority.HIGH,
    Priority.CORE,
    Priority.DEFAULT,
    Priority.LOW,
)

DEFAULT_CONTEXT = "advanced"

MetaBoxCallback = Callable[..., Any]


class _Removed:
    """Tombstone stored in a registry slot after a box is removed."""

    _instance: "_Removed | None" = None

    def __new__(cls) -> "_Removed":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "REMOVED"


REMOVED = _Removed()


@dataclass
class MetaBox:
    """A meta box registered against a screen.

    Attributes:
        id: Box identifier, unique per screen
        title: Heading shown above the box (None for sorted placeholders)
        callback: Callable that fills the box
        args: Extra data passed to the callback
    """

    id: str
    title: str | None
    callback: MetaBoxCallback | None
    args: dict[str, Any] | None = None

    @property
    def callback_name(self) -> str | None:
        if self.callback is None:
            return None
        return getattr(self.callback, "__qualname__", repr(self.callback))

    def to_dict(self) -> dict[str, Any]:
        """Convert to API response dict."""
        return {
            "id": self.id,
            "title": self.title,
            "callback": self.callback_name,
            "args": self.args,
        }


Slot = MetaBox | _Removed


def coerce_priority(value: "Priority | str | None") -> Priority | None:
    """Normalize a priority argument. Empty values mean "unspecified".

    Raises:
        ValueError: If value is not a known priority name
    """
    if value is None or value == "":
        return None
    if isinstance(value, Priority):
        return value
    try:
        return Priority(value)
    except ValueError:
        valid = ", ".join(p.value for p in Priority)
        raise ValueError(
            f"Unknown meta box priority '{value}'. Expected one of: {valid}"
        ) from None


@dataclass
class MetaBoxDefinition:
    """A meta box declared in screen metadata.

    Attributes:
        id: Box identifier
        title: Box heading
        callback: Registered renderer name (see RendererRegistry)
        context: Screen region (e.g., "normal", "side", "advanced")
        priority: Bucket name, or None to match an existing registration
        args: Extra data passed to the renderer
    """

    id: str
    title: str
    callback: str
    context: str = DEFAULT_CONTEXT
    priority: Priority | None = Priority.DEFAULT
    args: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MetaBoxDefinition":
        """Create MetaBoxDefinition from YAML/JSON dict."""
        return cls(
            id=data["id"],
            title=data["title"],
            callback=data["callback"],
            context=data.get("context", DEFAULT_CONTEXT),
            priority=coerce_priority(data.get("priority", Priority.DEFAULT)),
            args=data.get("args"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "callback": self.callback,
            "context": self.context,
            "priority": self.priority.value if self.priority else None,
            "args": self.args,
        }


@dataclass
class MetaBoxRemoval:
    """A meta box removal declared in screen metadata."""

    id: str
    context: str = DEFAULT_CONTEXT

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MetaBoxRemoval":
        return cls(id=data["id"], context=data.get("context", DEFAULT_CONTEXT))

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "context": self.context}
