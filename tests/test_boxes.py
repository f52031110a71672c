import dataclasses

import pytest

from shipment_app.data import load_catalog
from shipment_core.boxes import Box
from shipment_core.models import (
    BoxType,
    Item,
    Material,
    PackingMode,
    ProductCategory,
    SpecialHandlingFlag,
)


def make_item(item_id="a", length=30, width=20, quantity=1, **overrides):
    fields = dict(
        id=item_id,
        category=ProductCategory.PAPER_PRINT,
        material=Material.GLASS,
        length=length,
        width=width,
        quantity=quantity,
    )
    fields.update(overrides)
    return Item(**fields)


def make_box(box_type=BoxType.STANDARD, mode=PackingMode.BY_MEDIUM):
    return Box(box_type, load_catalog(), mode=mode, box_id="box-1")


def test_by_medium_respects_category_limit():
    box = make_box()
    box.add_item(make_item("a", quantity=4))
    assert box.can_accommodate(make_item("b", quantity=2))
    box.add_item(make_item("b", quantity=2))
    assert not box.can_accommodate(make_item("c"))
    assert box.piece_count == 6


def test_by_medium_keeps_one_category():
    box = make_box()
    box.add_item(make_item("a", category=ProductCategory.METAL_PRINT))
    assert not box.can_accommodate(make_item("b", category=ProductCategory.PAPER_PRINT))
    assert box.current_category is ProductCategory.METAL_PRINT


def test_mirror_limit_is_one_per_standard_box():
    box = make_box()
    assert not box.can_accommodate(
        make_item(quantity=2, category=ProductCategory.MIRROR, material=Material.MIRROR)
    )


def test_by_strictest_uses_tightest_limit():
    box = make_box(mode=PackingMode.BY_STRICTEST)
    box.add_item(make_item("canvas", quantity=3, category=ProductCategory.CANVAS_FLOAT_FRAME))
    assert box.can_accommodate(make_item("print", quantity=1))
    box.add_item(make_item("print", quantity=1))
    assert not box.can_accommodate(make_item("print-2", quantity=1))
    assert box.effective_capacity() == 4


def test_by_depth_uses_inner_height():
    box = make_box(mode=PackingMode.BY_DEPTH)
    box.add_item(make_item("a", quantity=5))
    assert box.can_accommodate(make_item("b", quantity=1))
    box.add_item(make_item("b", quantity=1))
    assert not box.can_accommodate(make_item("c", quantity=1, depth=0.5))
    assert box.required_dimensions().height == pytest.approx(12.0)


def test_count_mode_height_is_inner_height():
    box = make_box()
    box.add_item(make_item(quantity=2))
    dims = box.required_dimensions()
    assert (dims.length, dims.width, dims.height) == (30, 20, 12)


def test_box_types_reject_items_that_do_not_fit():
    assert not make_box(BoxType.LARGE).can_accommodate(make_item(length=55, width=31))
    assert not make_box(BoxType.STANDARD).can_accommodate(make_item(length=43, width=43))
    assert make_box(BoxType.LARGE).can_accommodate(make_item(length=43, width=43))
    assert not make_box(BoxType.SMALL_PARCEL).can_accommodate(make_item(length=40, width=20))


def test_custom_packaging_items_are_never_accommodated():
    assert not make_box(BoxType.LARGE).can_accommodate(make_item(length=44, width=44))


def test_add_item_raises_when_full():
    box = make_box()
    with pytest.raises(ValueError):
        box.add_item(make_item(quantity=7))


def test_special_handling_notes():
    box = make_box()
    box.add_item(make_item(flags={SpecialHandlingFlag.TACTILE_PANEL}))
    assert len(box.notes) == 1
    assert "Tactile panel" in box.notes[0]


def test_telescoping_length():
    box = make_box()
    box.add_item(make_item(length=55, width=31))
    assert box.telescoping_length() == pytest.approx(55)

    short = make_box()
    short.add_item(make_item(length=30, width=20))
    assert short.telescoping_length() is None

    large = make_box(BoxType.LARGE)
    large.add_item(make_item(length=43, width=43))
    assert large.telescoping_length() is None


def test_weights_round_up_with_tare():
    box = make_box()
    box.add_item(make_item(length=33, width=43, quantity=2))
    assert box.content_weight() == 28
    assert box.total_weight() == 30


def test_snapshot_is_immutable():
    box = make_box()
    box.add_item(make_item("a", quantity=2))
    snap = box.snapshot()
    box.add_item(make_item("b", quantity=1))

    assert snap.piece_count == 2
    assert [item.id for item in snap.items] == ["a"]
    assert snap.label == "Standard box"
    with pytest.raises(dataclasses.FrozenInstanceError):
        snap.piece_count = 5
