from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence

from .boxes import BoxSnapshot
from .classifier import Classifier
from .consolidation import ContainerPackingResult
from .containers import ContainerSnapshot
from .models import BoxType, ContainerKind, Dimensions, Item, Material, ProductCategory
from .splitting import PackingResult
from .units import format_dims, format_inches, round_up
from .weights import WeightEngine

NO_CLIENT_RULES = "Standard packing (no client restrictions)"
LARGE_BOX_RECOMMENDATION = "Requires large box"

MEDIUM_FLAGS = {
    ProductCategory.WALL_DECOR: "Wall Decor – include item URL for documentation",
    ProductCategory.METAL_PRINT: "Metal Prints – verify protective wrapping",
}

RISK_NONE = "No high-risk items detected"
RISK_GLASS = "Handle glass-framed pieces with caution"
RISK_MIRROR = "Mirror items require crate review"


@dataclass(frozen=True)
class OversizedGroup:
    dimensions: str
    quantity: int
    weight: int


@dataclass(frozen=True)
class WorkOrderSummary:
    total_pieces: int
    standard_pieces: int
    oversized_pieces: int
    oversized_breakdown: List[OversizedGroup] = field(default_factory=list)


@dataclass(frozen=True)
class ContainerTally:
    count: int
    weight: int


@dataclass(frozen=True)
class WeightSummary:
    total_artwork: int
    glass: int
    oversized: int
    packaging: int
    final: int
    pallets: ContainerTally
    crates: ContainerTally


@dataclass(frozen=True)
class RequirementLine:
    label: str
    dimensions: str
    count: int


@dataclass(frozen=True)
class PackedContainerLine:
    container_id: str
    dimensions: str
    weight: int


@dataclass(frozen=True)
class HardwareLine:
    label: str
    total_pieces: int
    art_quantity: int


@dataclass(frozen=True)
class HardwareSummary:
    line_items: List[HardwareLine]
    totals_by_type: Dict[str, int]
    total_pieces: int


@dataclass(frozen=True)
class PackingSummary:
    boxes: List[RequirementLine]
    containers: List[RequirementLine]
    packed_containers: List[PackedContainerLine]
    hardware: HardwareSummary


@dataclass(frozen=True)
class OversizedItemFlag:
    dimensions: str
    quantity: int
    recommendation: str = LARGE_BOX_RECOMMENDATION


@dataclass(frozen=True)
class BusinessIntelligenceSummary:
    client_rules_applied: List[str]
    oversized_items: List[OversizedItemFlag]
    mediums_to_flag: List[str]
    risk_flags: List[str]
    special_handling_summary: str
    alternative_recommendations: List[str]


def _inch_dims(*values: float) -> str:
    return "x".join(f'{format_inches(v)}"' for v in values)


def build_work_order(
    items: Sequence[Item], classifier: Classifier, weights: WeightEngine
) -> WorkOrderSummary:
    total = 0
    standard = 0
    oversized = 0
    groups: Dict[str, List[int]] = {}
    for item in items:
        total += item.quantity
        if not classifier.is_oversized(item):
            standard += item.quantity
            continue
        oversized += item.quantity
        fp = item.footprint
        key = format_dims(math.ceil(fp.long_side), math.ceil(fp.short_side))
        entry = groups.setdefault(key, [0, 0])
        entry[0] += item.quantity
        entry[1] += weights.weight(item)
    breakdown = [OversizedGroup(key, qty, weight) for key, (qty, weight) in groups.items()]
    return WorkOrderSummary(total, standard, oversized, breakdown)


def _tally(containers: Iterable[ContainerSnapshot]) -> ContainerTally:
    containers = list(containers)
    return ContainerTally(
        count=len(containers),
        weight=round_up(sum(c.tare_weight for c in containers)),
    )


def build_weight_summary(
    items: Sequence[Item],
    containers: ContainerPackingResult,
    classifier: Classifier,
    weights: WeightEngine,
) -> WeightSummary:
    artwork = weights.total_weight(items)
    glass = weights.total_weight(i for i in items if i.material == Material.GLASS)
    oversized = weights.total_weight(i for i in items if classifier.is_oversized(i))
    pallets = _tally(containers.of_kind(ContainerKind.PALLET))
    crates = _tally(containers.of_kind(ContainerKind.CRATE))
    packaging = pallets.weight + crates.weight
    return WeightSummary(
        total_artwork=artwork,
        glass=glass,
        oversized=oversized,
        packaging=packaging,
        final=artwork + packaging,
        pallets=pallets,
        crates=crates,
    )


def summarize_boxes(boxes: Iterable[BoxSnapshot]) -> List[RequirementLine]:
    groups: Dict[BoxType, List] = {}
    for box in boxes:
        if box.box_type not in groups:
            nominal = box.nominal_dimensions
            groups[box.box_type] = [box.label, _inch_dims(*nominal.as_tuple()), 0]
        groups[box.box_type][2] += 1
    return [RequirementLine(label, dims, count) for label, dims, count in groups.values()]


def _container_dims(dimensions: str) -> str:
    parts = dimensions.split("x")
    if len(parts) < 2:
        return dimensions
    return "x".join(f'{part.strip()}"' for part in parts)


def summarize_containers(containers: Iterable[ContainerSnapshot]) -> List[RequirementLine]:
    groups: Dict = {}
    for container in containers:
        if container.container_type not in groups:
            groups[container.container_type] = [
                container.label,
                _container_dims(container.nominal_dimensions),
                0,
            ]
        groups[container.container_type][2] += 1
    return [RequirementLine(label, dims, count) for label, dims, count in groups.values()]


def packed_container_lines(
    containers: Iterable[ContainerSnapshot], max_stack_height: float
) -> List[PackedContainerLine]:
    lines = []
    for container in containers:
        dims = container.footprint(max_stack_height).rounded()
        lines.append(
            PackedContainerLine(
                container_id=container.container_id,
                dimensions=_inch_dims(*dims.as_tuple()),
                weight=container.weight,
            )
        )
    return lines


def summarize_hardware(items: Iterable[Item]) -> HardwareSummary:
    lines: Dict[str, List[int]] = {}
    for item in items:
        if not item.hardware_label:
            continue
        entry = lines.setdefault(item.hardware_label, [0, 0])
        entry[0] += item.hardware_pieces_total
        entry[1] += item.quantity
    line_items = [HardwareLine(label, pieces, qty) for label, (pieces, qty) in lines.items()]
    totals = {line.label: line.total_pieces for line in line_items}
    return HardwareSummary(line_items, totals, sum(totals.values()))


def build_packing_summary(
    packing: PackingResult, containers: ContainerPackingResult, max_stack_height: float
) -> PackingSummary:
    hardware_items = packing.assigned_items() + packing.unassigned_items
    return PackingSummary(
        boxes=summarize_boxes(packing.boxes),
        containers=summarize_containers(containers.containers),
        packed_containers=packed_container_lines(containers.containers, max_stack_height),
        hardware=summarize_hardware(hardware_items),
    )


def oversized_item_flags(boxes: Iterable[BoxSnapshot]) -> List[OversizedItemFlag]:
    groups: Dict[str, int] = {}
    for box in boxes:
        if box.box_type != BoxType.LARGE:
            continue
        dims: Dimensions = box.dimensions.rounded()
        key = _inch_dims(dims.length, dims.width)
        groups[key] = groups.get(key, 0) + box.piece_count
    return [OversizedItemFlag(key, qty) for key, qty in groups.items()]


def mediums_to_flag(items: Iterable[Item]) -> List[str]:
    flagged: List[str] = []
    for item in items:
        note = MEDIUM_FLAGS.get(item.category)
        if note and note not in flagged:
            flagged.append(note)
    return flagged


def risk_flags(items: Iterable[Item]) -> List[str]:
    items = list(items)
    has_glass = any(item.material == Material.GLASS for item in items)
    has_mirror = any(item.category == ProductCategory.MIRROR for item in items)
    if not has_glass and not has_mirror:
        return [RISK_NONE]
    flags = []
    if has_glass:
        flags.append(RISK_GLASS)
    if has_mirror:
        flags.append(RISK_MIRROR)
    return flags


def special_handling_summary(items: Iterable[Item], classifier: Classifier) -> str:
    special = [item for item in items if classifier.requires_special_handling(item)]
    if not special:
        return ""
    pieces = sum(item.quantity for item in special)
    counts = [
        (
            sum(i.quantity for i in special if i.category == ProductCategory.MIRROR),
            "mirrors",
        ),
        (sum(i.quantity for i in special if i.material == Material.GLASS), "glass items"),
        (
            sum(
                i.quantity
                for i in special
                if i.category
                in (ProductCategory.ACOUSTIC_PANEL, ProductCategory.ACOUSTIC_PANEL_FRAMED)
            ),
            "acoustic panels",
        ),
    ]
    details = ", ".join(f"{count} {label}" for count, label in counts if count > 0)
    message = f"{pieces} items require special handling"
    return f"{message}: {details}" if details else message


def alternative_recommendations(
    packing: PackingResult,
    containers: ContainerPackingResult,
    box_efficiency: float,
    accepts_crates: bool,
    advice: Sequence = (),
) -> List[str]:
    kinds = {c.kind for c in containers.containers}
    if kinds == {ContainerKind.PALLET}:
        current = "Current method: pallets only"
    elif kinds == {ContainerKind.CRATE}:
        current = "Current method: crates only"
    elif kinds:
        current = "Current method: pallets and crates"
    else:
        current = "Current method: no outer containers"
    recommendations = [current]
    if ContainerKind.PALLET in kinds and not accepts_crates:
        recommendations.append("Alternative: mix pallets + crates if destination accepts crates")
    if packing.unassigned or containers.unassigned_boxes:
        recommendations.extend(
            [
                "Custom packaging for oversized items",
                "Freight shipping for large items",
                "Multiple shipment approach",
            ]
        )
    if box_efficiency < 0.8:
        recommendations.extend(["Optimize box sizes", "Consolidate similar items"])
    if advice:
        best = advice[0]
        reason = f" ({best.reasoning[0]})" if best.reasoning else ""
        recommendations.append(f"Preferred container: {best.kind.value}{reason}")
    return recommendations


def build_business_intelligence(
    packing: PackingResult,
    containers: ContainerPackingResult,
    classifier: Classifier,
    *,
    box_efficiency: float,
    accepts_crates: bool,
    advice: Sequence = (),
) -> BusinessIntelligenceSummary:
    packed = packing.assigned_items()
    return BusinessIntelligenceSummary(
        client_rules_applied=[NO_CLIENT_RULES],
        oversized_items=oversized_item_flags(packing.boxes),
        mediums_to_flag=mediums_to_flag(packed),
        risk_flags=risk_flags(packed),
        special_handling_summary=special_handling_summary(packed, classifier),
        alternative_recommendations=alternative_recommendations(
            packing, containers, box_efficiency, accepts_crates, advice
        ),
    )
