from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List

from .consolidation import ContainerPackingResult
from .containers import ContainerSnapshot
from .models import DeliveryCapabilities
from .units import format_dims


@dataclass(frozen=True)
class FreightLine:
    container_id: str
    dimensions: str
    weight: int

    def describe(self) -> str:
        return f"{self.dimensions} @ {self.weight} lbs"


@dataclass(frozen=True)
class FreightExportSummary:
    subject: str
    lines: List[FreightLine] = field(default_factory=list)
    details: List[str] = field(default_factory=list)


def freight_line(container: ContainerSnapshot, max_stack_height: float) -> FreightLine:
    dims = container.footprint(max_stack_height).rounded()
    return FreightLine(
        container_id=container.container_id,
        dimensions=format_dims(dims.length, dims.width, dims.height),
        weight=container.weight,
    )


def describe_capabilities(capabilities: DeliveryCapabilities) -> str:
    flags = []
    if capabilities.has_loading_dock:
        flags.append("Loading dock")
    if capabilities.requires_liftgate:
        flags.append("Liftgate")
    if capabilities.needs_inside_delivery:
        flags.append("Inside delivery")
    return ", ".join(flags) if flags else "None"


def _describe_pieces(containers: Iterable[ContainerSnapshot]) -> str:
    counts = {}
    for container in containers:
        counts[container.kind.value] = counts.get(container.kind.value, 0) + 1
    if not counts:
        return "0 containers"
    return ", ".join(
        f"{count} {kind}{'s' if count != 1 else ''}" for kind, count in counts.items()
    )


def build_freight_export(
    containers: ContainerPackingResult,
    capabilities: DeliveryCapabilities,
    final_weight: int,
    max_stack_height: float,
    *,
    client_name: str = "",
    job_site: str = "",
    pickup_location: str = "",
    service_type: str = "",
) -> FreightExportSummary:
    lines = [freight_line(c, max_stack_height) for c in containers.containers]
    dimensions = ", ".join(line.describe() for line in lines) or "None"
    details = [
        f"Total Weight: {final_weight} lbs",
        f"Pieces: {_describe_pieces(containers.containers)}",
        f"Dimensions: {dimensions}",
        f"Pickup: {pickup_location or 'TBD'}",
        f"Delivery: {job_site or 'TBD'}",
        f"Service: {service_type or 'TBD'}",
        f"Special Requirements: {describe_capabilities(capabilities)}",
    ]
    return FreightExportSummary(
        subject=f"Quote Request - {client_name} - {job_site}",
        lines=lines,
        details=details,
    )
