from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .catalog import PackingCatalog
from .classifier import Classifier
from .models import BoxType, Dimensions, Item, PackingMode, ProductCategory, SpecialHandlingFlag
from .units import INCH, round_up
from .weights import WeightEngine

FLAG_NOTES = {
    SpecialHandlingFlag.TACTILE_PANEL: "Tactile panel: pack face up with foam separators",
    SpecialHandlingFlag.RAISED_FLOAT: "Raised float mount: protect standoffs",
    SpecialHandlingFlag.MANUAL_REVIEW: "Manual review requested before packing",
}


@dataclass(frozen=True)
class BoxSnapshot:
    box_id: str
    box_type: BoxType
    label: str
    mode: PackingMode
    items: Tuple[Item, ...]
    piece_count: int
    capacity: Optional[int]
    stack_depth: INCH
    inner_height: INCH
    dimensions: Dimensions
    nominal_dimensions: Dimensions
    telescoping_length: Optional[INCH]
    content_weight: int
    tare_weight: float
    weight: int
    notes: Tuple[str, ...]

    @property
    def height(self) -> INCH:
        return self.dimensions.height

    @property
    def categories(self) -> Tuple[ProductCategory, ...]:
        seen: List[ProductCategory] = []
        for item in self.items:
            if item.category not in seen:
                seen.append(item.category)
        return tuple(seen)


class Box:
    """Mutable builder grouping items into one box for a single packing run."""

    def __init__(
        self,
        box_type: BoxType,
        catalog: PackingCatalog,
        *,
        mode: PackingMode = PackingMode.BY_MEDIUM,
        classifier: Classifier | None = None,
        weights: WeightEngine | None = None,
        box_id: str = "",
    ) -> None:
        self.box_type = box_type
        self.catalog = catalog
        self.spec = catalog.box_spec(box_type)
        self.mode = mode
        self.classifier = classifier or Classifier(catalog.thresholds)
        self.weights = weights or WeightEngine(catalog)
        self.box_id = box_id
        self._contents: List[Item] = []
        self._notes: List[str] = []

    @property
    def contents(self) -> Tuple[Item, ...]:
        return tuple(self._contents)

    @property
    def notes(self) -> Tuple[str, ...]:
        return tuple(self._notes)

    @property
    def piece_count(self) -> int:
        return sum(item.quantity for item in self._contents)

    @property
    def stack_depth(self) -> INCH:
        return sum(item.stack_depth for item in self._contents)

    @property
    def current_category(self) -> Optional[ProductCategory]:
        if not self._contents:
            return None
        return self._contents[0].category

    def is_empty(self) -> bool:
        return not self._contents

    def limit_for(self, item: Item) -> int:
        return self.catalog.capacity_limit(
            item.category,
            self.box_type,
            oversize=self.classifier.requires_oversize_box(item),
        )

    def effective_capacity(self, candidate: Item | None = None) -> Optional[int]:
        """Strictest per-category limit over the contents and the candidate."""
        if self.mode == PackingMode.BY_DEPTH:
            return None
        pool = list(self._contents)
        if candidate is not None:
            pool.append(candidate)
        if not pool:
            return self.spec.nominal_capacity
        return min(self.limit_for(item) for item in pool)

    def can_accommodate(self, item: Item) -> bool:
        if self.classifier.needs_custom_packaging(item):
            return False
        if not self.classifier.fits_box(item, self.box_type, self.spec):
            return False
        if self.mode == PackingMode.BY_DEPTH:
            return self.stack_depth + item.stack_depth <= self.spec.inner_height
        if self.mode == PackingMode.BY_MEDIUM and self._contents:
            if item.category != self.current_category:
                return False
        capacity = self.effective_capacity(item)
        return self.piece_count + item.quantity <= capacity

    def add_item(self, item: Item) -> None:
        if not self.can_accommodate(item):
            raise ValueError(f"{self.spec.label} {self.box_id} cannot accommodate item {item.id}")
        self._contents.append(item)
        for flag in sorted(item.flags, key=lambda f: f.value):
            note = f"{item.id}: {FLAG_NOTES[flag]}"
            if note not in self._notes:
                self._notes.append(note)

    def required_dimensions(self) -> Dimensions:
        if not self._contents:
            return Dimensions(0.0, 0.0, 0.0)
        length = max(item.footprint.long_side for item in self._contents)
        width = max(item.footprint.short_side for item in self._contents)
        if self.mode == PackingMode.BY_DEPTH:
            height = self.stack_depth
        else:
            height = self.spec.inner_height
        return Dimensions(length, width, height)

    def telescoping_length(self) -> Optional[INCH]:
        if not self.spec.telescoping or not self._contents:
            return None
        dims = self.required_dimensions()
        if dims.length <= self.spec.length:
            return None
        if dims.width > self.spec.width:
            return None
        if dims.length > self.catalog.thresholds.telescoping_max:
            return None
        return dims.length

    def content_weight(self) -> int:
        return self.weights.total_weight(self._contents)

    def total_weight(self) -> int:
        return round_up(self.content_weight() + self.spec.tare_weight)

    def snapshot(self) -> BoxSnapshot:
        return BoxSnapshot(
            box_id=self.box_id,
            box_type=self.box_type,
            label=self.spec.label,
            mode=self.mode,
            items=tuple(self._contents),
            piece_count=self.piece_count,
            capacity=self.effective_capacity(),
            stack_depth=self.stack_depth,
            inner_height=self.spec.inner_height,
            dimensions=self.required_dimensions(),
            nominal_dimensions=Dimensions(
                self.spec.length, self.spec.width, self.spec.inner_height
            ),
            telescoping_length=self.telescoping_length(),
            content_weight=self.content_weight(),
            tare_weight=self.spec.tare_weight,
            weight=self.total_weight(),
            notes=tuple(self._notes),
        )
