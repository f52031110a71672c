from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from .boxes import BoxSnapshot
from .catalog import ContainerSpec, PackingCatalog
from .models import ContainerKind, ContainerType, Dimensions
from .units import INCH, round_up


@dataclass(frozen=True)
class ContainerSnapshot:
    container_id: str
    container_type: ContainerType
    kind: ContainerKind
    label: str
    nominal_dimensions: str
    max_boxes: int
    boxes: Tuple[BoxSnapshot, ...]
    stack_height: INCH
    tare_weight: float
    weight: int

    @property
    def box_count(self) -> int:
        return len(self.boxes)

    def footprint(self, max_stack_height: INCH) -> Dimensions:
        """Bounding size of the loaded container as quoted for freight."""
        if not self.boxes:
            return Dimensions(0.0, 0.0, 0.0)
        return Dimensions(
            max(box.dimensions.length for box in self.boxes),
            max(box.dimensions.width for box in self.boxes),
            min(self.stack_height, max_stack_height),
        )


class OuterContainer:
    """Mutable builder stacking boxes onto one pallet or into one crate."""

    def __init__(
        self,
        container_type: ContainerType,
        catalog: PackingCatalog,
        *,
        container_id: str = "",
    ) -> None:
        self.container_type = container_type
        self.spec: ContainerSpec = catalog.container_spec(container_type)
        self.max_stack_height = catalog.thresholds.max_stack_height
        self.container_id = container_id
        self._boxes: List[BoxSnapshot] = []
        self._box_weight = 0

    @property
    def boxes(self) -> Tuple[BoxSnapshot, ...]:
        return tuple(self._boxes)

    @property
    def box_count(self) -> int:
        return len(self._boxes)

    def stack_height(self) -> INCH:
        return sum(box.height for box in self._boxes)

    def can_accommodate(self, box: BoxSnapshot) -> bool:
        if not self.spec.allows(box.box_type):
            return False
        if len(self._boxes) >= self.spec.max_boxes:
            return False
        return self.stack_height() + box.height <= self.max_stack_height

    def add_box(self, box: BoxSnapshot) -> None:
        if not self.can_accommodate(box):
            raise ValueError(
                f"{self.spec.label} {self.container_id} cannot accommodate {box.box_id}"
            )
        self._boxes.append(box)
        self._box_weight += box.weight

    def total_weight(self) -> int:
        return round_up(self.spec.tare_weight + self._box_weight)

    def snapshot(self) -> ContainerSnapshot:
        return ContainerSnapshot(
            container_id=self.container_id,
            container_type=self.container_type,
            kind=self.spec.kind,
            label=self.spec.label,
            nominal_dimensions=self.spec.dimensions,
            max_boxes=self.spec.max_boxes,
            boxes=tuple(self._boxes),
            stack_height=self.stack_height(),
            tare_weight=self.spec.tare_weight,
            weight=self.total_weight(),
        )
