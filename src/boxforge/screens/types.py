"""Screen configuration types."""

from dataclasses import dataclass, field
from typing import Any

from boxforge.metaboxes.types import MetaBoxDefinition, MetaBoxRemoval


@dataclass
class ScreenConfig:
    """An admin screen that meta boxes can be registered against."""

    id: str  # screen id, also the registry key
    name: str  # display name
    type: str = "edit"  # "edit" | "dashboard" | "settings" | "custom"
    meta_boxes: list[MetaBoxDefinition] = field(default_factory=list)
    removed_meta_boxes: list[MetaBoxRemoval] = field(default_factory=list)
    source: str = "yaml"  # "yaml" | "auto"

    def to_dict(self) -> dict[str, Any]:
        """Convert to API response dict."""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "metaBoxes": [d.to_dict() for d in self.meta_boxes],
            "removeMetaBoxes": [r.to_dict() for r in self.removed_meta_boxes],
            "source": self.source,
        }
