import logging
from collections.abc import Hashable
from typing import Optional

import pytest

from loadout.catalog import Catalog
from loadout.core import SelectionController, SelectionView
from loadout.models import AttachmentItem, AttachmentType, Rarity, SlotLayout


class RecordingView(SelectionView):
    """Collects every notification together with the controller state it saw."""

    def __init__(self, controller: Optional[SelectionController] = None):
        self.controller = controller
        self.events: list[tuple] = []

    def render_layout(self, layout: SlotLayout) -> None:
        self.events.append(("layout", layout))

    def preview_changed(self, item: Optional[AttachmentItem]) -> None:
        seen = self.controller.preview_item if self.controller else None
        self.events.append(("preview", item, seen))

    def apply_visibility(self, visibility: dict[Hashable, bool]) -> None:
        self.events.append(("visibility", dict(visibility)))

    def open_panel(self) -> None:
        self.events.append(("open",))

    def close_panel(self) -> None:
        self.events.append(("close",))

    def kinds(self) -> list[str]:
        return [event[0] for event in self.events]

    def last(self, kind: str) -> tuple:
        for event in reversed(self.events):
            if event[0] == kind:
                return event
        raise AssertionError(f"no {kind} event recorded")


def make_item(item_id: str, attachment_type: AttachmentType, rarity: Rarity, representation=None) -> AttachmentItem:
    return AttachmentItem(
        id=item_id,
        type=attachment_type,
        rarity=rarity,
        icon=f"icons/{item_id}.png",
        representation=representation if representation is not None else f"mesh/{item_id}",
    )


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture
def scenario_items() -> list[AttachmentItem]:
    return [
        make_item("A", AttachmentType.SIGHT, Rarity.COMMON),
        make_item("B", AttachmentType.SIGHT, Rarity.RARE),
        make_item("C", AttachmentType.MAGAZINE, Rarity.DEFAULT),
    ]


@pytest.fixture
def controller(scenario_items) -> SelectionController:
    return SelectionController(Catalog(scenario_items))


@pytest.fixture
def recorded(controller) -> RecordingView:
    view = RecordingView(controller)
    controller.attach(view)
    return view
