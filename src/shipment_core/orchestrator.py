from __future__ import annotations

import logging
import time
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from .advisor import ContainerRecommendation, SelectionCriteria, recommend_containers
from .catalog import PackingCatalog
from .classifier import Classifier
from .consolidation import ContainerPackingResult, pack_containers
from .freight import FreightExportSummary, build_freight_export
from .metrics import (
    LOW_EFFICIENCY_THRESHOLD,
    compute_box_efficiency,
    compute_container_efficiency,
    compute_fill_ratio,
    heavy_containers,
)
from .models import DeliveryCapabilities, Item, total_quantity
from .sanity import SanityPolicy, plan_flags
from .splitting import PackingResult
from .strategies import DEFAULT_STRATEGY_ID, create_strategy
from .summaries import (
    BusinessIntelligenceSummary,
    PackingSummary,
    WeightSummary,
    WorkOrderSummary,
    build_business_intelligence,
    build_packing_summary,
    build_weight_summary,
    build_work_order,
)
from .units import format_inches, round_up
from .weights import WeightEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PackagingRequest:
    items: Sequence[Item]
    capabilities: DeliveryCapabilities = field(default_factory=DeliveryCapabilities)
    strategy_id: str = DEFAULT_STRATEGY_ID
    client_name: str = ""
    job_site: str = ""
    service_type: str = ""
    pickup_location: str = ""


@dataclass(frozen=True)
class RunMetadata:
    strategy_id: str
    processing_time_ms: float
    timestamp: str
    warnings: List[str]
    errors: List[str]
    box_efficiency: float
    container_efficiency: float
    container_fill_ratio: float


@dataclass(frozen=True)
class PackagingResponse:
    work_order: WorkOrderSummary
    weights: WeightSummary
    packing: PackingSummary
    business_intelligence: BusinessIntelligenceSummary
    freight_export: FreightExportSummary
    metadata: RunMetadata
    packing_result: PackingResult
    container_result: ContainerPackingResult
    container_advice: List[ContainerRecommendation] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        """Plain data for serializers; enums become their values."""
        return _plain(asdict(self))


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {_plain(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if isinstance(value, (set, frozenset)):
        return sorted(_plain(v) for v in value)
    return value


def telescoping_warnings(packing: PackingResult, max_length: float) -> List[str]:
    warnings = []
    for index, box in enumerate(packing.boxes, start=1):
        if box.telescoping_length is not None:
            warnings.append(
                f'Box {index} telescoped to {round_up(box.telescoping_length)}" '
                f'(max {format_inches(max_length)}")'
            )
    return warnings


def run_errors(packing: PackingResult, containers: ContainerPackingResult) -> List[str]:
    errors = []
    if packing.unassigned:
        errors.append(f"{len(packing.unassigned)} item(s) require custom handling or crates.")
    if containers.unassigned_boxes:
        errors.append(
            f"{len(containers.unassigned_boxes)} box(es) could not be assigned to pallets."
        )
    return errors


def package_everything(
    request: PackagingRequest, catalog: Optional[PackingCatalog] = None
) -> PackagingResponse:
    """Pack items into boxes, boxes into containers, and summarize the shipment."""

    started = time.perf_counter()
    if catalog is None:
        from shipment_app.data import load_catalog

        catalog = load_catalog()
    items = list(request.items)
    classifier = Classifier(catalog.thresholds)
    weights = WeightEngine(catalog)
    thresholds = catalog.thresholds

    strategy = create_strategy(request.strategy_id, catalog)
    logger.info(
        "Packing %d item(s) / %d piece(s) with strategy %s",
        len(items),
        total_quantity(items),
        strategy.id,
    )
    packing = strategy.pack(items)
    containers = pack_containers(packing.boxes, request.capabilities, catalog)

    work_order = build_work_order(items, classifier, weights)
    weight_summary = build_weight_summary(items, containers, classifier, weights)
    packing_summary = build_packing_summary(packing, containers, thresholds.max_stack_height)

    box_efficiency = compute_box_efficiency(packing, work_order.total_pieces)
    container_efficiency = compute_container_efficiency(containers, len(packing.boxes))
    advice = recommend_containers(
        SelectionCriteria.from_items(items, request.capabilities, weights, classifier)
    )
    intelligence = build_business_intelligence(
        packing,
        containers,
        classifier,
        box_efficiency=box_efficiency,
        accepts_crates=request.capabilities.accepts_crates,
        advice=advice,
    )
    freight = build_freight_export(
        containers,
        request.capabilities,
        weight_summary.final,
        thresholds.max_stack_height,
        client_name=request.client_name,
        job_site=request.job_site,
        pickup_location=request.pickup_location,
        service_type=request.service_type,
    )

    warnings = telescoping_warnings(packing, thresholds.telescoping_max)
    if box_efficiency < LOW_EFFICIENCY_THRESHOLD:
        warnings.append(f"Low box packing efficiency: {box_efficiency * 100:.1f}%")
    if container_efficiency < LOW_EFFICIENCY_THRESHOLD:
        warnings.append(f"Low container packing efficiency: {container_efficiency * 100:.1f}%")
    heavy = heavy_containers(containers)
    if heavy:
        warnings.append(f"{len(heavy)} containers exceed 2000 lbs - may require special handling")
    flags = plan_flags(
        packing, containers, items, SanityPolicy(max_stack_height=thresholds.max_stack_height)
    )
    for flag in sorted(flags):
        logger.warning("Packing plan failed sanity check: %s", flag)
        warnings.append(f"Sanity check failed: {flag}")

    elapsed_ms = (time.perf_counter() - started) * 1000.0
    metadata = RunMetadata(
        strategy_id=strategy.id,
        processing_time_ms=round(elapsed_ms, 3),
        timestamp=datetime.now(timezone.utc).isoformat(),
        warnings=warnings,
        errors=run_errors(packing, containers),
        box_efficiency=box_efficiency,
        container_efficiency=container_efficiency,
        container_fill_ratio=compute_fill_ratio(containers),
    )
    logger.info(
        "Packed %d box(es) into %d container(s); final weight %d lbs",
        len(packing.boxes),
        len(containers.containers),
        weight_summary.final,
    )
    return PackagingResponse(
        work_order=work_order,
        weights=weight_summary,
        packing=packing_summary,
        business_intelligence=intelligence,
        freight_export=freight,
        metadata=metadata,
        packing_result=packing,
        container_result=containers,
        container_advice=advice,
    )
