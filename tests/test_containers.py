import dataclasses

import pytest

from shipment_app.data import load_catalog
from shipment_core.boxes import Box
from shipment_core.containers import OuterContainer
from shipment_core.models import BoxType, ContainerType, Item, Material, ProductCategory


def make_item(item_id="a", length=33, width=43, quantity=2):
    return Item(
        id=item_id,
        category=ProductCategory.PAPER_PRINT,
        material=Material.GLASS,
        length=length,
        width=width,
        quantity=quantity,
    )


def make_box_snapshot(box_id, box_type=BoxType.STANDARD, catalog=None, item=None):
    box = Box(box_type, catalog or load_catalog(), box_id=box_id)
    box.add_item(item or make_item(box_id))
    return box.snapshot()


def tall_catalog():
    catalog = load_catalog()
    spec = dataclasses.replace(catalog.boxes[BoxType.STANDARD], inner_height=30.0)
    return dataclasses.replace(catalog, boxes={**catalog.boxes, BoxType.STANDARD: spec})


def test_allow_list_rejects_large_boxes_on_standard_pallet():
    pallet = OuterContainer(ContainerType.STANDARD_PALLET, load_catalog())
    large = make_box_snapshot(
        "box-1", BoxType.LARGE, item=make_item(length=43, width=43, quantity=1)
    )
    assert not pallet.can_accommodate(large)

    oversize = OuterContainer(ContainerType.OVERSIZE_PALLET, load_catalog())
    assert oversize.can_accommodate(large)


def test_max_box_count():
    pallet = OuterContainer(ContainerType.STANDARD_PALLET, load_catalog())
    for n in range(4):
        pallet.add_box(make_box_snapshot(f"box-{n}"))
    assert not pallet.can_accommodate(make_box_snapshot("box-5"))
    with pytest.raises(ValueError):
        pallet.add_box(make_box_snapshot("box-5"))


def test_stack_height_limit():
    catalog = tall_catalog()
    crate = OuterContainer(ContainerType.STANDARD_CRATE, catalog)
    crate.add_box(make_box_snapshot("box-1", catalog=catalog))
    crate.add_box(make_box_snapshot("box-2", catalog=catalog))
    assert crate.stack_height() == pytest.approx(60.0)
    assert not crate.can_accommodate(make_box_snapshot("box-3", catalog=catalog))


def test_crate_accepts_any_box_type():
    crate = OuterContainer(ContainerType.STANDARD_CRATE, load_catalog())
    crate.add_box(make_box_snapshot("box-1"))
    crate.add_box(
        make_box_snapshot("box-2", BoxType.LARGE, item=make_item(length=43, width=43, quantity=1))
    )
    assert crate.box_count == 2


def test_total_weight_is_tare_plus_boxes():
    pallet = OuterContainer(ContainerType.STANDARD_PALLET, load_catalog(), container_id="p1")
    pallet.add_box(make_box_snapshot("box-1"))
    pallet.add_box(make_box_snapshot("box-2"))
    # two boxes of 28 lbs artwork plus 2 lbs tare each
    assert pallet.total_weight() == 120

    snap = pallet.snapshot()
    assert snap.weight == 120
    assert snap.box_count == 2
    assert snap.label == "Standard pallet"
    assert snap.nominal_dimensions == "48x40"


def test_footprint_caps_height():
    catalog = tall_catalog()
    pallet = OuterContainer(ContainerType.OVERSIZE_PALLET, catalog)
    pallet.add_box(make_box_snapshot("box-1", catalog=catalog))
    pallet.add_box(
        make_box_snapshot("box-2", catalog=catalog, item=make_item("b", length=55, width=31, quantity=1))
    )
    dims = pallet.snapshot().footprint(84.0)
    assert (dims.length, dims.width, dims.height) == (55, 33, 60)
    assert pallet.snapshot().footprint(50.0).height == 50.0
