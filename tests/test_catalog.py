import json

import pytest

from loadout.catalog import (
    DEFAULT_CATALOG_RECORDS,
    Catalog,
    catalog_from_records,
    default_catalog,
    load_catalog,
    parse_attachment_type,
)
from loadout.errors import CatalogError
from loadout.models import AttachmentType, Rarity

from conftest import make_item


def _write(tmp_path, data):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_load_catalog_preserves_order_and_fields(tmp_path):
    path = _write(tmp_path, {"items": [
        {"id": "holo", "type": "Sight", "rarity": "Common", "icon": "holo.png",
         "representation": "mesh/holo", "name": "Holo Sight"},
        {"id": "drum", "type": "MAGAZINE", "rarity": "epic"},
    ]})
    catalog = load_catalog(path)
    assert [item.id for item in catalog] == ["holo", "drum"]
    holo = catalog.get("holo")
    assert holo.type is AttachmentType.SIGHT
    assert holo.rarity is Rarity.COMMON
    assert holo.icon == "holo.png"
    assert holo.representation == "mesh/holo"
    assert holo.label == "Holo Sight"
    drum = catalog.get("drum")
    assert drum.representation is None
    assert drum.label == "drum"


def test_load_catalog_accepts_bare_list(tmp_path):
    path = _write(tmp_path, [{"id": "x", "type": "barrel", "rarity": "rare"}])
    assert len(load_catalog(path)) == 1


@pytest.mark.parametrize(
    "records,message",
    [
        ([{"type": "sight", "rarity": "rare"}], "missing an id"),
        ([{"id": "x", "type": "grip", "rarity": "rare"}], "Unknown attachment type"),
        ([{"id": "x", "type": "sight", "rarity": "mythic"}], "Unknown rarity"),
        ([{"id": "x", "type": "sight"}, {"id": "x", "type": "stock"}], "Duplicate item id"),
        (["not an object"], "must be an object"),
        ([{"id": "x", "type": "sight", "representation": ["mesh", "x"]}], "representation must be a string"),
        ([{"id": "x", "type": "sight", "representation": {"mesh": "x"}}], "representation must be a string"),
    ],
)
def test_bad_records_raise_catalog_error(records, message):
    with pytest.raises(CatalogError, match=message):
        catalog_from_records(records)


def test_bad_record_reports_entry_index():
    with pytest.raises(CatalogError, match="Entry 1"):
        catalog_from_records([{"id": "ok", "type": "sight"}, {"id": "bad", "type": "nope"}])


def test_missing_rarity_defaults_to_default():
    catalog = catalog_from_records([{"id": "x", "type": "stock"}])
    assert catalog.get("x").rarity is Rarity.DEFAULT


def test_load_catalog_errors(tmp_path):
    with pytest.raises(CatalogError, match="not found"):
        load_catalog(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(CatalogError, match="Malformed"):
        load_catalog(broken)

    with pytest.raises(CatalogError, match="list of items"):
        load_catalog(_write(tmp_path, {"items": {"id": "x"}}))


def test_catalog_lookup_and_membership():
    item = make_item("a", AttachmentType.SIGHT, Rarity.RARE)
    catalog = Catalog([item, make_item("b", AttachmentType.STOCK, Rarity.RARE)])
    assert "a" in catalog
    assert item in catalog
    assert make_item("a", AttachmentType.SIGHT, Rarity.EPIC) not in catalog
    assert catalog.get("zzz") is None
    assert [i.id for i in catalog.items_of(AttachmentType.STOCK)] == ["b"]


def test_parse_attachment_type_accepts_names_and_values():
    assert parse_attachment_type("Tactical") is AttachmentType.TACTICAL
    assert parse_attachment_type(" barrel ") is AttachmentType.BARREL
    with pytest.raises(CatalogError):
        parse_attachment_type("")


def test_default_catalog_covers_every_type():
    catalog = default_catalog()
    assert len(catalog) == len(DEFAULT_CATALOG_RECORDS)
    for attachment_type in AttachmentType:
        assert catalog.items_of(attachment_type)
