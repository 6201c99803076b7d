"""Tests for the meta box registry — add, remove, and read side."""

import logging

import pytest

from boxforge.metaboxes import REMOVED, MetaBox, MetaBoxRegistry, Priority
from boxforge.screens import ScreenConfig


def render_a(screen, box):
    return "a"


def render_b(screen, box):
    return "b"


@pytest.fixture
def registry(resolver) -> MetaBoxRegistry:
    return MetaBoxRegistry(resolver)


def live_locations(registry: MetaBoxRegistry, screen_id: str, box_id: str) -> list[tuple]:
    """Every (context, priority) holding a live record for box_id."""
    locations = []
    for context, buckets in registry.to_dict().get(screen_id, {}).items():
        for priority, bucket in buckets.items():
            if bucket.get(box_id):
                locations.append((context, priority))
    return locations


# =============================================================================
# Registering new boxes
# =============================================================================


class TestAddNewBox:
    def test_defaults_to_advanced_context_and_default_priority(self, registry):
        registry.add("my_box", "Title", render_a, "post")

        context, priority, slot = registry.find("post", "my_box")
        assert context == "advanced"
        assert priority is Priority.DEFAULT
        assert slot == MetaBox(id="my_box", title="Title", callback=render_a, args=None)

    def test_empty_priority_defaults_to_low(self, registry):
        registry.add("a", "A", render_a, "post", "side", "")
        registry.add("b", "B", render_a, "post", "side", None)

        assert registry.find("post", "a")[:2] == ("side", Priority.LOW)
        assert registry.find("post", "b")[:2] == ("side", Priority.LOW)

    def test_priority_accepts_enum_and_string(self, registry):
        registry.add("a", "A", render_a, "post", "side", Priority.HIGH)
        registry.add("b", "B", render_a, "post", "side", "high")

        assert registry.find("post", "a")[1] is Priority.HIGH
        assert registry.find("post", "b")[1] is Priority.HIGH

    def test_stores_callback_args(self, registry):
        registry.add("a", "A", render_a, "post", "normal", "high", {"limit": 3})
        assert registry.find("post", "a")[2].args == {"limit": 3}

    def test_unknown_priority_warns_and_skips(self, registry, caplog):
        with caplog.at_level(logging.WARNING, logger="boxforge.core.diagnostics"):
            registry.add("a", "A", render_a, "post", "side", "urgent")
            registry.add("b", "B", render_a, ["post", "page"], "side", "urgent")

        assert registry.to_dict() == {}
        assert len(caplog.records) == 2
        message = caplog.records[0].getMessage()
        assert "MetaBoxRegistry.add() was called incorrectly" in message
        assert "Unknown meta box priority 'urgent'" in message

    def test_missing_levels_are_created(self, registry):
        registry.add("a", "A", render_a, "post", "normal", "high")
        registry.add("b", "B", render_a, "post", "normal", "low")
        registry.add("c", "C", render_a, "post", "side", "core")

        assert registry.contexts("post") == ["normal", "side"]
        assert [b.id for b in registry.boxes("post", "normal")] == ["a", "b"]


# =============================================================================
# Re-registering an existing id
# =============================================================================


class TestMoveExistingBox:
    def test_second_add_moves_box(self, registry):
        registry.add("my_box", "Title", render_a, "post")
        registry.add("my_box", "Title2", render_b, "post", "side", "high")

        context, priority, slot = registry.find("post", "my_box")
        assert (context, priority) == ("side", Priority.HIGH)
        assert slot.title == "Title2"
        assert slot.callback is render_b
        assert registry.to_dict()["post"]["advanced"]["default"] == {}
        assert live_locations(registry, "post", "my_box") == [("side", "high")]

    def test_same_location_overwrites_record(self, registry):
        registry.add("a", "Old", render_a, "post", "normal", "high")
        registry.add("a", "New", render_b, "post", "normal", "high")

        assert live_locations(registry, "post", "a") == [("normal", "high")]
        assert registry.find("post", "a")[2].title == "New"

    def test_empty_priority_keeps_existing_priority(self, registry):
        registry.add("a", "A", render_a, "post", "normal", "high")
        registry.add("a", "A2", render_a, "post", "side", None)

        assert live_locations(registry, "post", "a") == [("side", "high")]

    def test_empty_priority_in_same_context_keeps_location(self, registry):
        registry.add("a", "A", render_a, "post", "normal", "core")
        registry.add("a", "A2", render_b, "post", "normal", "")

        assert live_locations(registry, "post", "a") == [("normal", "core")]
        assert registry.find("post", "a")[2].title == "A2"

    def test_ids_are_scoped_per_screen(self, registry):
        registry.add("a", "Post A", render_a, "post", "normal", "high")
        registry.add("a", "Page A", render_a, "page", "side", "low")

        assert live_locations(registry, "post", "a") == [("normal", "high")]
        assert live_locations(registry, "page", "a") == [("side", "low")]


class TestCorePriority:
    def test_core_promotes_default_entry(self, registry):
        registry.add("a", "Plugin Title", render_a, "post", "normal")
        registry.add("a", "Core Title", render_b, "post", "normal", "core")

        context, priority, slot = registry.find("post", "a")
        assert (context, priority) == ("normal", Priority.CORE)
        # The stored record is kept, not replaced by the core call's payload
        assert slot.title == "Plugin Title"
        assert slot.callback is render_a
        assert live_locations(registry, "post", "a") == [("normal", "core")]

    def test_core_promotes_within_existing_context(self, registry):
        registry.add("a", "Plugin Title", render_a, "post", "side")
        registry.add("a", "Core Title", render_b, "post", "normal", "core")

        assert live_locations(registry, "post", "a") == [("side", "core")]
        assert registry.boxes("post", "normal") == []

    def test_core_leaves_non_default_entry_alone(self, registry):
        registry.add("a", "Plugin Title", render_a, "post", "normal", "high")
        before = registry.to_dict()

        registry.add("a", "Core Title", render_b, "post", "normal", "core")

        assert registry.to_dict() == before

    def test_core_adds_new_box_when_absent(self, registry):
        registry.add("a", "Core Title", render_b, "post", "normal", "core")

        assert live_locations(registry, "post", "a") == [("normal", "core")]


class TestRemovedBoxes:
    def test_remove_writes_tombstone_in_every_placed_bucket(self, registry):
        registry.remove("a", "post", "normal")

        buckets = registry.to_dict()["post"]["normal"]
        assert set(buckets) == {"high", "core", "default", "low"}
        assert all(bucket["a"] is False for bucket in buckets.values())
        assert registry.is_removed("post", "a")

    def test_core_does_not_resurrect_removed_box(self, registry):
        registry.add("a", "A", render_a, "post", "normal", "core")
        registry.remove("a", "post", "normal")
        before = registry.to_dict()

        registry.add("a", "A", render_a, "post", "normal", "core")

        assert registry.to_dict() == before
        assert registry.boxes("post", "normal") == []

    def test_sorted_does_not_resurrect_removed_box(self, registry):
        registry.remove("a", "post", "normal")
        before = registry.to_dict()

        registry.add("a", None, None, "post", "side", "sorted")

        assert registry.to_dict() == before

    def test_core_blocked_by_tombstone_in_other_context(self, registry):
        registry.remove("a", "post", "normal")
        registry.add("a", "A", render_a, "post", "side", "core")

        assert registry.boxes("post", "side") == []

    def test_plain_add_replaces_tombstone(self, registry):
        registry.remove("a", "post", "normal")
        registry.add("a", "A", render_a, "post", "normal", "default")

        context, priority, slot = registry.find("post", "a")
        assert (context, priority) == ("normal", Priority.DEFAULT)
        assert isinstance(slot, MetaBox)
        assert not registry.is_removed("post", "a")

    def test_find_returns_tombstone(self, registry):
        registry.remove("a", "post", "normal")
        assert registry.find("post", "a") == ("normal", Priority.HIGH, REMOVED)

    def test_remove_fans_out(self, registry):
        registry.remove("a", ["post", "page"], "side")

        assert registry.is_removed("post", "a")
        assert registry.is_removed("page", "a")

    def test_remove_keeps_live_box_in_other_context(self, registry):
        registry.add("a", "A", render_a, "post", "side", "high")
        registry.remove("a", "post", "normal")

        assert [b.id for b in registry.boxes("post", "side")] == ["a"]


class TestSortedPriority:
    def test_sorted_copies_existing_payload(self, registry):
        registry.add("a", "A", render_a, "post", "normal", "high", {"x": 1})
        registry.add("a", "Ignored", render_b, "post", "side", "sorted", {"y": 2})

        context, priority, slot = registry.find("post", "a")
        assert (context, priority) == ("side", Priority.SORTED)
        assert slot == MetaBox(id="a", title="A", callback=render_a, args={"x": 1})
        assert live_locations(registry, "post", "a") == [("side", "sorted")]

    def test_sorted_unknown_box_is_not_displayed(self, registry):
        registry.add("ghost", None, None, "post", "side", "sorted")

        assert registry.find("post", "ghost")[:2] == ("side", Priority.SORTED)
        assert registry.boxes("post", "side") == []

    def test_later_add_keeps_sorted_placement(self, registry):
        registry.add("a", "A", render_a, "post", "normal")
        registry.add("a", None, None, "post", "side", "sorted")
        registry.add("a", "A2", render_b, "post", "normal", "high")

        d = registry.to_dict()["post"]
        assert d["side"]["sorted"]["a"]["title"] == "A"
        assert live_locations(registry, "post", "a") == [("normal", "high"), ("side", "sorted")]

    def test_core_adds_entry_alongside_sorted_placement(self, registry):
        registry.add("a", "A", render_a, "post", "normal")
        registry.add("a", None, None, "post", "side", "sorted")
        registry.add("a", "Core", render_b, "post", "normal", "core")

        assert "a" in registry.to_dict()["post"]["normal"]["core"]
        assert live_locations(registry, "post", "a") == [("normal", "core"), ("side", "sorted")]

    def test_resorting_within_context_lists_box_once(self, registry):
        registry.add("a", "A", render_a, "post", "normal", "high")
        registry.add("a", None, None, "post", "normal", "sorted")
        registry.add("a", "A2", render_b, "post", "normal", "low")

        boxes = registry.boxes("post", "normal")
        assert [b.id for b in boxes] == ["a"]
        assert boxes[0].title == "A"

    def test_remove_drops_sorted_placement(self, registry):
        registry.add("a", "A", render_a, "post", "normal")
        registry.add("a", None, None, "post", "side", "sorted")
        registry.remove("a", "post", "side")

        assert registry.boxes("post", "side") == []
        assert "a" not in registry.to_dict()["post"]["side"]["sorted"]


# =============================================================================
# Screen arguments
# =============================================================================


class TestScreenArguments:
    def test_sequence_registers_each_screen(self, registry):
        registry.add("a", "A", render_a, ["post", "page", "link"], "side", "high")

        assert registry.screens() == ["post", "page", "link"]
        for screen_id in ("post", "page", "link"):
            assert live_locations(registry, screen_id, "a") == [("side", "high")]

    def test_sequence_entries_resolve_independently(self, registry):
        registry.add("a", "A", render_a, "page", "normal", "high")
        registry.add("a", "A2", render_b, ("post", "page"), "normal", None)

        assert live_locations(registry, "post", "a") == [("normal", "low")]
        assert live_locations(registry, "page", "a") == [("normal", "high")]

    def test_screen_object_used_directly(self, registry):
        screen = ScreenConfig(id="settings", name="Settings", type="settings")
        registry.add("a", "A", render_a, screen, "normal")

        assert registry.screens() == ["settings"]

    def test_empty_screen_uses_current_screen(self, registry):
        registry.current_screen = ScreenConfig(id="dashboard", name="Dashboard")
        registry.add("a", "A", render_a)
        registry.add("b", "B", render_a, [])

        assert [b.id for b in registry.boxes("dashboard", "advanced")] == ["a", "b"]

    def test_no_current_screen_is_noop(self, registry):
        registry.add("a", "A", render_a)
        assert registry.to_dict() == {}

    def test_unresolvable_name_is_noop(self, registry):
        registry.add("a", "A", render_a, "!!!")
        assert registry.to_dict() == {}

    def test_hook_name_is_sanitized(self, registry):
        registry.add("a", "A", render_a, "Post")
        assert registry.screens() == ["post"]

    def test_registry_without_directory_warns_and_skips(self, caplog):
        registry = MetaBoxRegistry()

        with caplog.at_level(logging.WARNING):
            registry.add("a", "A", render_a, "post")

        assert registry.to_dict() == {}
        assert "called incorrectly" in caplog.text
        assert "MetaBoxRegistry.add()" in caplog.text


# =============================================================================
# Read side
# =============================================================================


class TestReadSide:
    def test_boxes_in_render_order(self, registry):
        registry.add("low", "Low", render_a, "post", "normal", "low")
        registry.add("default", "Default", render_a, "post", "normal", "default")
        registry.add("core", "Core", render_a, "post", "normal", "core")
        registry.add("high", "High", render_a, "post", "normal", "high")
        registry.add("sorted", "Sorted", render_a, "post", "side")
        registry.add("sorted", None, None, "post", "normal", "sorted")

        ids = [b.id for b in registry.boxes("post", "normal")]
        assert ids == ["high", "sorted", "core", "default", "low"]

    def test_boxes_of_unknown_screen_is_empty(self, registry):
        assert registry.boxes("nope", "normal") == []
        assert registry.contexts("nope") == []
        assert registry.find("nope", "a") is None
        assert not registry.is_removed("nope", "a")

    def test_to_dict_names_callbacks(self, registry):
        registry.add("a", "A", render_a, "post", "normal", "high", {"x": 1})

        box = registry.to_dict()["post"]["normal"]["high"]["a"]
        assert box == {"id": "a", "title": "A", "callback": "render_a", "args": {"x": 1}}

    def test_clear(self, registry):
        registry.add("a", "A", render_a, "post")
        registry.clear()
        assert registry.to_dict() == {}
