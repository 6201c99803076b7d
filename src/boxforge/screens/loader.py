"""Load screen configurations from YAML files."""

from pathlib import Path

import yaml

from boxforge.metaboxes.types import MetaBoxDefinition, MetaBoxRemoval
from boxforge.screens.types import ScreenConfig


class ScreenConfigLoader:
    """Loads screen configuration from metadata/screens/*.yaml files.

    A loaded ScreenConfigLoader is the screen directory that hook names
    are resolved against.
    """

    def __init__(self, screens_path: Path):
        self.screens_path = screens_path
        self.screens: dict[str, ScreenConfig] = {}

    def load_all(self) -> None:
        """Load all screen configs from YAML files."""
        if not self.screens_path.exists():
            return

        for yaml_file in sorted(self.screens_path.glob("*.yaml")):
            with open(yaml_file) as f:
                data = yaml.safe_load(f)
                if data and "screen" in data:
                    config = self._parse_screen(data["screen"])
                    self.screens[config.id] = config

    def _parse_screen(self, data: dict) -> ScreenConfig:
        """Parse a screen YAML into a ScreenConfig."""
        return ScreenConfig(
            id=data["id"],
            name=data["name"],
            type=data.get("type", "edit"),
            meta_boxes=[
                MetaBoxDefinition.from_dict(item) for item in data.get("metaBoxes", [])
            ],
            removed_meta_boxes=[
                MetaBoxRemoval.from_dict(item) for item in data.get("removeMetaBoxes", [])
            ],
            source="yaml",
        )

    def add_screen(self, config: ScreenConfig) -> None:
        """Register a screen defined in code."""
        self.screens[config.id] = config

    def get_screen(self, screen_id: str) -> ScreenConfig | None:
        """Get a screen by id."""
        return self.screens.get(screen_id)

    def list_screens(self) -> list[ScreenConfig]:
        """List all loaded screens."""
        return list(self.screens.values())
