from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .boxes import BoxSnapshot
from .catalog import PackingCatalog
from .containers import ContainerSnapshot, OuterContainer
from .models import BoxType, ContainerKind, ContainerType, DeliveryCapabilities

logger = logging.getLogger(__name__)


@dataclass
class ContainerPackingResult:
    containers: List[ContainerSnapshot] = field(default_factory=list)
    unassigned_boxes: List[BoxSnapshot] = field(default_factory=list)

    def of_kind(self, kind: ContainerKind) -> List[ContainerSnapshot]:
        return [c for c in self.containers if c.kind == kind]


def pallet_option_cost(box_count: int, container_type: ContainerType, catalog: PackingCatalog) -> tuple:
    spec = catalog.container_spec(container_type)
    pallets = math.ceil(box_count / spec.max_boxes) if box_count else 0
    return (pallets * spec.tare_weight, pallets)


def choose_pallet_type(box_count: int, catalog: PackingCatalog) -> ContainerType:
    """Lowest total tare for the standard boxes; ties go to fewer pallets, then standard."""
    options = []
    for preference, container_type in enumerate(
        (ContainerType.STANDARD_PALLET, ContainerType.OVERSIZE_PALLET)
    ):
        weight, pallets = pallet_option_cost(box_count, container_type, catalog)
        options.append((weight, pallets, preference, container_type))
    choice = min(options)
    logger.debug(
        "Pallet options for %d standard boxes: %s -> %s",
        box_count,
        [(o[3].value, o[0], o[1]) for o in options],
        choice[3].value,
    )
    return choice[3]


class _ContainerRun:
    def __init__(self, catalog: PackingCatalog) -> None:
        self.catalog = catalog
        self.containers: List[OuterContainer] = []
        self._counts: Dict[ContainerType, int] = {}

    def _new_container(self, container_type: ContainerType) -> OuterContainer:
        number = self._counts.get(container_type, 0) + 1
        label = self.catalog.container_spec(container_type).label
        return OuterContainer(
            container_type, self.catalog, container_id=f"{label} {number}"
        )

    def place_existing(
        self, box: BoxSnapshot, container_type: Optional[ContainerType] = None
    ) -> bool:
        for container in self.containers:
            if container_type is not None and container.container_type != container_type:
                continue
            if container.can_accommodate(box):
                container.add_box(box)
                return True
        return False

    def place_new(self, box: BoxSnapshot, container_type: ContainerType) -> bool:
        container = self._new_container(container_type)
        if not container.can_accommodate(box):
            return False
        self._counts[container_type] = self._counts.get(container_type, 0) + 1
        self.containers.append(container)
        container.add_box(box)
        return True

    def first_fit(self, box: BoxSnapshot, container_type: ContainerType) -> bool:
        return self.place_existing(box, container_type) or self.place_new(box, container_type)

    def result(self, unassigned: List[BoxSnapshot]) -> ContainerPackingResult:
        return ContainerPackingResult(
            containers=[container.snapshot() for container in self.containers],
            unassigned_boxes=list(unassigned),
        )


def _pack_pallets(boxes: List[BoxSnapshot], run: _ContainerRun) -> List[BoxSnapshot]:
    standard = [box for box in boxes if box.box_type == BoxType.STANDARD]
    large = [box for box in boxes if box.box_type == BoxType.LARGE]
    failed = [box for box in boxes if box.box_type not in (BoxType.STANDARD, BoxType.LARGE)]

    pallet_type = choose_pallet_type(len(standard), run.catalog)
    for box in standard:
        if not run.first_fit(box, pallet_type):
            failed.append(box)
    for box in large:
        if not (run.place_existing(box) or run.place_new(box, ContainerType.OVERSIZE_PALLET)):
            failed.append(box)

    unassigned: List[BoxSnapshot] = []
    for box in failed:
        if run.first_fit(box, ContainerType.OVERSIZE_PALLET):
            logger.debug("Box %s placed on an oversize pallet on retry", box.box_id)
        else:
            unassigned.append(box)
    return unassigned


def pack_containers(
    boxes: Iterable[BoxSnapshot],
    capabilities: DeliveryCapabilities,
    catalog: PackingCatalog,
) -> ContainerPackingResult:
    """Consolidate boxes onto pallets or into crates the site can receive."""
    boxes = list(boxes)
    run = _ContainerRun(catalog)
    if capabilities.accepts_pallets:
        unassigned = _pack_pallets(boxes, run)
    elif capabilities.accepts_crates:
        unassigned = []
        for box in boxes:
            if not run.first_fit(box, ContainerType.STANDARD_CRATE):
                unassigned.append(box)
    else:
        unassigned = list(boxes)
        if boxes:
            logger.warning("Delivery site accepts neither pallets nor crates")

    for box in unassigned:
        logger.warning("Box %s could not be assigned to a container", box.box_id)
    return run.result(unassigned)
