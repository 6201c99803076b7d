"""Shared fixtures for BoxForge tests."""

from pathlib import Path

import pytest

from boxforge.metaboxes import MetaBoxProviders, RendererRegistry
from boxforge.screens import ScreenConfig, ScreenConfigLoader, ScreenResolver


@pytest.fixture(autouse=True)
def clear_class_registries():
    """Clear provider and renderer registries before and after each test."""
    MetaBoxProviders.clear()
    RendererRegistry.clear()
    yield
    MetaBoxProviders.clear()
    RendererRegistry.clear()


@pytest.fixture
def directory(tmp_path: Path) -> ScreenConfigLoader:
    """A screen directory with 'post' and 'page' screens."""
    loader = ScreenConfigLoader(tmp_path / "screens")
    loader.add_screen(ScreenConfig(id="post", name="Edit Post"))
    loader.add_screen(ScreenConfig(id="page", name="Edit Page"))
    return loader


@pytest.fixture
def resolver(directory: ScreenConfigLoader) -> ScreenResolver:
    return ScreenResolver(directory)
