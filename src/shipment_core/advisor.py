from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List

from .classifier import Classifier
from .models import ContainerKind, DeliveryCapabilities, Item, SpecialHandlingFlag
from .weights import WeightEngine

CUBIC_INCHES_PER_CUBIC_FOOT = 1728.0

CRATE_BASE_PRIORITY = 50
PALLET_BASE_PRIORITY = 60


@dataclass(frozen=True)
class SelectionCriteria:
    capabilities: DeliveryCapabilities
    total_weight: int
    total_volume: float
    has_fragile_items: bool
    requires_special_handling: bool

    @classmethod
    def from_items(
        cls,
        items: Iterable[Item],
        capabilities: DeliveryCapabilities,
        weights: WeightEngine,
        classifier: Classifier,
    ) -> "SelectionCriteria":
        items = list(items)
        volume = sum(i.length * i.width * i.depth * i.quantity for i in items)
        return cls(
            capabilities=capabilities,
            total_weight=weights.total_weight(items),
            total_volume=volume / CUBIC_INCHES_PER_CUBIC_FOOT,
            has_fragile_items=any(SpecialHandlingFlag.TACTILE_PANEL in i.flags for i in items),
            requires_special_handling=any(classifier.requires_special_handling(i) for i in items),
        )


@dataclass(frozen=True)
class ContainerRecommendation:
    kind: ContainerKind
    priority: int
    reasoning: List[str] = field(default_factory=list)


def evaluate_crates(criteria: SelectionCriteria) -> ContainerRecommendation:
    caps = criteria.capabilities
    reasoning: List[str] = []
    priority = CRATE_BASE_PRIORITY
    if criteria.has_fragile_items:
        reasoning.append("Crates provide better protection for fragile items")
        priority += 20
    if criteria.requires_special_handling:
        reasoning.append("Crates allow custom padding for special handling items")
        priority += 15
    if not caps.has_loading_dock:
        reasoning.append("Crates are easier to handle without a loading dock")
        priority += 10
    if caps.needs_inside_delivery:
        reasoning.append("Crates are more manageable for inside delivery")
        priority += 15
    if criteria.total_weight < 500:
        reasoning.append("Lower weight shipment suitable for crate handling")
        priority += 5
    elif criteria.total_weight > 1500:
        reasoning.append("Heavy shipment may be challenging for crate handling")
        priority -= 10
    if caps.requires_liftgate:
        reasoning.append("Crates compatible with liftgate delivery")
        priority += 5
    return ContainerRecommendation(ContainerKind.CRATE, priority, reasoning)


def evaluate_pallets(criteria: SelectionCriteria) -> ContainerRecommendation:
    caps = criteria.capabilities
    reasoning: List[str] = []
    priority = PALLET_BASE_PRIORITY
    if caps.has_loading_dock:
        reasoning.append("Loading dock available for efficient pallet handling")
        priority += 25
    else:
        reasoning.append("No loading dock makes pallet handling difficult")
        priority -= 25
    if criteria.total_weight > 1000:
        reasoning.append("Heavy shipment well-suited for pallet transport")
        priority += 20
    if caps.needs_inside_delivery:
        reasoning.append("Inside delivery challenging with pallets")
        priority -= 20
    else:
        reasoning.append("Dock delivery optimal for pallet shipments")
        priority += 15
    if criteria.total_volume > 50:
        reasoning.append("Large volume shipment benefits from pallet efficiency")
        priority += 10
    if criteria.has_fragile_items and not criteria.requires_special_handling:
        reasoning.append("Standard pallet may not adequately protect fragile items")
        priority -= 10
    if caps.requires_liftgate and criteria.total_weight > 2000:
        reasoning.append("Heavy pallet may exceed liftgate capacity")
        priority -= 15
    return ContainerRecommendation(ContainerKind.PALLET, priority, reasoning)


def recommend_containers(criteria: SelectionCriteria) -> List[ContainerRecommendation]:
    """Container kinds the site accepts, best first."""
    options: List[ContainerRecommendation] = []
    if criteria.capabilities.accepts_crates:
        options.append(evaluate_crates(criteria))
    if criteria.capabilities.accepts_pallets:
        options.append(evaluate_pallets(criteria))
    return sorted(options, key=lambda rec: -rec.priority)
