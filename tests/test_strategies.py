import pytest

from shipment_app.data import load_catalog
from shipment_core.models import BoxType, Item, Material, ProductCategory
from shipment_core.strategies import (
    DEFAULT_STRATEGY_ID,
    ByDepthStrategy,
    ByMediumStrategy,
    ByStrictestStrategy,
    available_strategies,
    create_strategy,
)

STRATEGY_IDS = ["first-fit", "balanced", "minimize-boxes"]


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


def pack(items, strategy_id="first-fit"):
    return create_strategy(strategy_id, load_catalog()).pack(items)


def test_registry():
    assert [meta.id for meta in available_strategies()] == STRATEGY_IDS
    assert DEFAULT_STRATEGY_ID == "first-fit"
    assert isinstance(create_strategy("first-fit", load_catalog()), ByMediumStrategy)
    assert isinstance(create_strategy("balanced", load_catalog()), ByStrictestStrategy)
    assert isinstance(create_strategy("minimize-boxes", load_catalog()), ByDepthStrategy)


def test_unknown_strategy_id():
    with pytest.raises(ValueError, match="first-fit"):
        create_strategy("best-guess", load_catalog())


@pytest.mark.parametrize(
    "quantity,expected", [(6, [6]), (7, [6, 1]), (12, [6, 6]), (13, [6, 6, 1])]
)
def test_by_medium_splits_paper_prints(quantity, expected):
    result = pack([make_item(quantity=quantity)])
    assert [box.piece_count for box in result.boxes] == expected
    assert not result.unassigned


def test_by_medium_canvas_limit():
    result = pack([make_item(quantity=5, category=ProductCategory.CANVAS_FLOAT_FRAME)])
    assert [box.piece_count for box in result.boxes] == [4, 1]


@pytest.mark.parametrize(
    "length,width,box_type",
    [(36, 36, BoxType.STANDARD), (43, 43, BoxType.LARGE), (83, 35.5, BoxType.STANDARD)],
)
def test_box_type_selection(length, width, box_type):
    result = pack([make_item(length=length, width=width)])
    assert [box.box_type for box in result.boxes] == [box_type]


@pytest.mark.parametrize("length,width", [(44, 44), (85, 43)])
def test_custom_packaging_items_are_unassigned(length, width):
    result = pack([make_item(length=length, width=width, quantity=2)])
    assert result.boxes == []
    assert len(result.unassigned) == 1
    assert "custom packaging" in result.unassigned[0].reason
    assert result.unassigned[0].item.quantity == 2


def test_item_fitting_no_box_is_unassigned_after_splitting():
    result = pack([make_item(length=50, width=40)])
    assert result.boxes == []
    assert result.unassigned[0].reason == "Cannot accommodate even after splitting"


@pytest.mark.parametrize("quantity,boxes", [(3, 1), (4, 2)])
def test_large_items_three_per_box(quantity, boxes):
    result = pack([make_item(length=43, width=43, quantity=quantity)])
    assert len(result.boxes) == boxes
    assert all(box.box_type is BoxType.LARGE for box in result.boxes)


def test_standard_pieces_join_large_box_of_same_medium():
    result = pack(
        [make_item("large", length=43, width=43), make_item("small", length=30, width=20, quantity=2)]
    )
    assert len(result.boxes) == 1
    assert result.boxes[0].box_type is BoxType.LARGE
    assert result.boxes[0].piece_count == 3


def test_six_standard_and_six_large_pieces_need_three_boxes():
    result = pack(
        [make_item("std", quantity=6), make_item("big", length=43, width=43, quantity=6)]
    )
    assert len(result.boxes) == 3
    assert sorted(box.box_type.value for box in result.boxes) == ["large", "large", "standard"]


def test_split_ids_recorded_in_assignments():
    result = pack([make_item("art", quantity=7)])
    assert result.assignments == {"art-split-0": "box-1", "art-split-1": "box-2"}
    assert result.box_for("art-split-1").piece_count == 1


def test_by_medium_keeps_mediums_apart_but_balanced_mixes():
    items = [
        make_item("canvas", quantity=2, category=ProductCategory.CANVAS_FLOAT_FRAME),
        make_item("print", quantity=2),
    ]
    assert len(pack(items, "first-fit").boxes) == 2
    mixed = pack(items, "balanced")
    assert len(mixed.boxes) == 1
    assert mixed.boxes[0].capacity == 4


def test_balanced_respects_strictest_limit():
    items = [
        make_item("canvas", quantity=3, category=ProductCategory.CANVAS_FLOAT_FRAME),
        make_item("print", quantity=2),
    ]
    result = pack(items, "balanced")
    assert [box.piece_count for box in result.boxes] == [3, 2]


def test_by_depth_fills_by_thickness():
    items = [make_item(f"p{n}") for n in range(12)]
    result = pack(items, "minimize-boxes")
    assert [box.piece_count for box in result.boxes] == [6, 6]
    assert result.boxes[0].height == pytest.approx(12.0)


def test_by_depth_packs_large_items_first():
    items = [
        make_item("standard", length=43.4, width=30),
        make_item("large", length=43, width=43),
    ]
    result = pack(items, "minimize-boxes")
    assert len(result.boxes) == 1
    assert result.boxes[0].box_type is BoxType.LARGE
    assert [item.id for item in result.boxes[0].items] == ["large", "standard"]


def test_by_depth_splits_thick_stacks():
    result = pack([make_item(quantity=10)], "minimize-boxes")
    assert [box.piece_count for box in result.boxes] == [6, 4]


@pytest.mark.parametrize("strategy_id", STRATEGY_IDS)
def test_quantities_are_conserved(strategy_id):
    items = [
        make_item("a", length=33, width=43, quantity=11),
        make_item("b", length=31, width=55),
        make_item("c", length=44, width=46, quantity=2),
        make_item("d", length=43, width=43, quantity=5),
        make_item("e", length=20, width=16, quantity=9, category=ProductCategory.MIRROR),
        make_item("f", length=50, width=40, quantity=3),
        make_item("g", length=24, width=24, quantity=7, category=ProductCategory.CANVAS_FLOAT_FRAME),
    ]
    result = pack(items, strategy_id)
    packed = sum(box.piece_count for box in result.boxes)
    rejected = sum(entry.item.quantity for entry in result.unassigned)
    assert packed + rejected == sum(item.quantity for item in items)
    for box in result.boxes:
        if box.capacity is not None:
            assert box.piece_count <= box.capacity
        else:
            assert box.stack_depth <= box.inner_height


@pytest.mark.parametrize("strategy_id", STRATEGY_IDS)
def test_packing_is_deterministic(strategy_id):
    items = [
        make_item("a", length=30, width=20, quantity=4),
        make_item("b", length=20, width=30, quantity=5),
        make_item("c", length=43, width=40, quantity=2),
        make_item("d", length=30, width=20, quantity=3, category=ProductCategory.METAL_PRINT),
    ]
    first = pack(items, strategy_id)
    second = pack(items, strategy_id)
    assert first.assignments == second.assignments
    assert [[i.id for i in box.items] for box in first.boxes] == [
        [i.id for i in box.items] for box in second.boxes
    ]
