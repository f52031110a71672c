from shipment_app.data import load_catalog
from shipment_core.advisor import SelectionCriteria, recommend_containers
from shipment_core.classifier import Classifier
from shipment_core.models import (
    ContainerKind,
    DeliveryCapabilities,
    Item,
    Material,
    ProductCategory,
    SpecialHandlingFlag,
)
from shipment_core.weights import WeightEngine


def criteria_for(items, capabilities):
    catalog = load_catalog()
    return SelectionCriteria.from_items(
        items, capabilities, WeightEngine(catalog), Classifier(catalog.thresholds)
    )


def make_item(**overrides):
    fields = dict(
        id="a",
        category=ProductCategory.PAPER_PRINT,
        material=Material.ACRYLIC,
        length=30,
        width=20,
        quantity=1,
    )
    fields.update(overrides)
    return Item(**fields)


def test_only_accepted_kinds_are_recommended():
    criteria = criteria_for([make_item()], DeliveryCapabilities(accepts_pallets=True))
    assert [rec.kind for rec in recommend_containers(criteria)] == [ContainerKind.PALLET]

    criteria = criteria_for(
        [make_item()], DeliveryCapabilities(accepts_pallets=False, accepts_crates=False)
    )
    assert recommend_containers(criteria) == []


def test_dock_favours_pallets():
    capabilities = DeliveryCapabilities(
        accepts_pallets=True, accepts_crates=True, has_loading_dock=True
    )
    ranked = recommend_containers(criteria_for([make_item()], capabilities))
    assert ranked[0].kind is ContainerKind.PALLET
    assert "Loading dock available for efficient pallet handling" in ranked[0].reasoning


def test_fragile_inside_delivery_favours_crates():
    capabilities = DeliveryCapabilities(
        accepts_pallets=True, accepts_crates=True, needs_inside_delivery=True
    )
    items = [make_item(flags={SpecialHandlingFlag.TACTILE_PANEL})]
    ranked = recommend_containers(criteria_for(items, capabilities))
    assert [rec.kind for rec in ranked] == [ContainerKind.CRATE, ContainerKind.PALLET]


def test_criteria_from_items():
    items = [make_item(length=24, width=12, quantity=6, material=Material.GLASS)]
    criteria = criteria_for(items, DeliveryCapabilities())
    assert criteria.total_weight == 18
    assert criteria.total_volume == 24 * 12 * 2 * 6 / 1728
    assert criteria.requires_special_handling
    assert not criteria.has_fragile_items
