from loadout.core import build_layout, first_available, group_by_rarity
from loadout.models import AttachmentType, Rarity

from conftest import make_item


def _slots(count):
    return lambda rarity: count


def test_rows_in_ascending_rarity_and_empty_tiers_hidden():
    items = [
        make_item("leg", AttachmentType.SIGHT, Rarity.LEGENDARY),
        make_item("com", AttachmentType.SIGHT, Rarity.COMMON),
        make_item("mag", AttachmentType.MAGAZINE, Rarity.RARE),
    ]
    layout = build_layout(items, AttachmentType.SIGHT, _slots(4))
    assert [row.rarity for row in layout.rows] == [Rarity.COMMON, Rarity.LEGENDARY]
    assert layout.row_for(Rarity.RARE) is None
    assert [item.id for item in layout.items()] == ["com", "leg"]


def test_row_keeps_catalog_order_and_pads_empty_slots():
    items = [
        make_item("second", AttachmentType.STOCK, Rarity.EPIC),
        make_item("other", AttachmentType.BARREL, Rarity.EPIC),
        make_item("third", AttachmentType.STOCK, Rarity.EPIC),
    ]
    row = build_layout(items, AttachmentType.STOCK, _slots(3)).row_for(Rarity.EPIC)
    assert [(slot.index, slot.item.id if slot.item else None) for slot in row.slots] == [
        (0, "second"),
        (1, "third"),
        (2, None),
    ]
    assert row.omitted == 0


def test_full_row_places_first_n_items():
    items = [make_item(f"sight_{i}", AttachmentType.SIGHT, Rarity.COMMON) for i in range(7)]
    layout = build_layout(items, AttachmentType.SIGHT, _slots(4))
    row = layout.row_for(Rarity.COMMON)
    assert [item.id for item in row.items] == ["sight_0", "sight_1", "sight_2", "sight_3"]
    assert row.omitted == 3
    assert all(not slot.is_empty for slot in row.slots)


def test_per_rarity_capacity():
    items = [make_item(f"r{i}", AttachmentType.SIGHT, rarity) for i, rarity in enumerate([Rarity.RARE] * 3 + [Rarity.EPIC] * 3)]
    capacities = {Rarity.RARE: 1, Rarity.EPIC: 5}
    layout = build_layout(items, AttachmentType.SIGHT, capacities.__getitem__)
    assert len(layout.row_for(Rarity.RARE).slots) == 1
    assert len(layout.row_for(Rarity.EPIC).slots) == 5
    assert layout.row_for(Rarity.RARE).omitted == 2


def test_as_dict_maps_rarity_to_indexed_slots():
    item = make_item("a", AttachmentType.TACTICAL, Rarity.DEFAULT)
    layout = build_layout([item], AttachmentType.TACTICAL, _slots(2))
    assert layout.as_dict() == {Rarity.DEFAULT: [(0, item), (1, None)]}


def test_empty_category_has_empty_layout():
    layout = build_layout([], AttachmentType.BARREL, _slots(3))
    assert layout.is_empty
    assert layout.category is AttachmentType.BARREL


def test_group_by_rarity_filters_category():
    items = [
        make_item("s1", AttachmentType.SIGHT, Rarity.RARE),
        make_item("m1", AttachmentType.MAGAZINE, Rarity.RARE),
        make_item("s2", AttachmentType.SIGHT, Rarity.RARE),
    ]
    grouped = group_by_rarity(items, AttachmentType.SIGHT)
    assert list(grouped) == [Rarity.RARE]
    assert [item.id for item in grouped[Rarity.RARE]] == ["s1", "s2"]


def test_first_available():
    items = [
        make_item("rare", AttachmentType.SIGHT, Rarity.RARE),
        make_item("default", AttachmentType.SIGHT, Rarity.DEFAULT),
        make_item("mag", AttachmentType.MAGAZINE, Rarity.DEFAULT),
    ]
    assert first_available(items, AttachmentType.SIGHT).id == "default"
    assert first_available(items, AttachmentType.STOCK) is None


def test_rarity_ordering():
    assert Rarity.DEFAULT < Rarity.COMMON < Rarity.RARE < Rarity.EPIC < Rarity.LEGENDARY
    assert sorted([Rarity.EPIC, Rarity.DEFAULT, Rarity.RARE]) == [Rarity.DEFAULT, Rarity.RARE, Rarity.EPIC]
    assert Rarity.LEGENDARY.rank == 4
