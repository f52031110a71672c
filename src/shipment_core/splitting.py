from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from .boxes import Box, BoxSnapshot
from .catalog import PackingCatalog
from .classifier import Classifier
from .models import BoxType, Item, PackingMode
from .weights import WeightEngine

logger = logging.getLogger(__name__)

REASON_CUSTOM_PACKAGING = 'Requires custom packaging (both sides exceed 43.5")'
REASON_CRATE_ONLY = "Crate-only item; palletization handled later"
REASON_AFTER_SPLIT = "Cannot accommodate even after splitting"


@dataclass(frozen=True)
class UnassignedItem:
    item: Item
    reason: str


@dataclass
class PackingResult:
    boxes: List[BoxSnapshot] = field(default_factory=list)
    unassigned: List[UnassignedItem] = field(default_factory=list)
    assignments: Dict[str, str] = field(default_factory=dict)

    @property
    def unassigned_items(self) -> List[Item]:
        return [entry.item for entry in self.unassigned]

    def assigned_items(self) -> List[Item]:
        return [item for box in self.boxes for item in box.items]

    def box_for(self, item_id: str) -> BoxSnapshot | None:
        box_id = self.assignments.get(item_id)
        for box in self.boxes:
            if box.box_id == box_id:
                return box
        return None


def split_item(item: Item, max_pieces: int) -> List[Item]:
    """Break ``item`` into records of at most ``max_pieces`` each.

    Split records get ids ``<id>-split-<n>`` counting from 0 and keep every
    other attribute; their quantities add up to the original quantity.
    """
    limit = max(1, int(max_pieces))
    if item.quantity <= limit:
        return [item]
    splits: List[Item] = []
    remaining = item.quantity
    index = 0
    while remaining > 0:
        quantity = min(remaining, limit)
        splits.append(item.with_quantity(f"{item.id}-split-{index}", quantity))
        remaining -= quantity
        index += 1
    return splits


def resolve_max_pieces(
    item: Item,
    box_type: BoxType,
    catalog: PackingCatalog,
    classifier: Classifier,
    mode: PackingMode = PackingMode.BY_MEDIUM,
) -> int:
    limit = catalog.capacity_limit(
        item.category, box_type, oversize=classifier.requires_oversize_box(item)
    )
    if mode == PackingMode.BY_DEPTH and item.depth > 0:
        inner_height = catalog.box_spec(box_type).inner_height
        limit = min(limit, int(math.floor(inner_height / item.depth)))
    return max(1, limit)


def sort_items(items: Sequence[Item]) -> List[Item]:
    """Largest footprint first; ``sorted`` is stable so ties keep input order."""
    return sorted(
        items,
        key=lambda item: (-item.footprint.long_side, -item.footprint.short_side),
    )


class PackingRun:
    """Boxes, assignments and rejections of one strategy invocation."""

    def __init__(
        self,
        catalog: PackingCatalog,
        classifier: Classifier,
        weights: WeightEngine,
        mode: PackingMode,
    ) -> None:
        self.catalog = catalog
        self.classifier = classifier
        self.weights = weights
        self.mode = mode
        self.boxes: List[Box] = []
        self.unassigned: List[UnassignedItem] = []
        self.assignments: Dict[str, str] = {}

    def new_box(self, box_type: BoxType) -> Box:
        return Box(
            box_type,
            self.catalog,
            mode=self.mode,
            classifier=self.classifier,
            weights=self.weights,
            box_id=f"box-{len(self.boxes) + 1}",
        )

    def assign(self, item: Item, box: Box) -> None:
        box.add_item(item)
        self.assignments[item.id] = box.box_id
        logger.debug("Placed %s (x%d) in %s", item.id, item.quantity, box.box_id)

    def place_in_new_box(self, item: Item, box_type: BoxType) -> bool:
        box = self.new_box(box_type)
        if not box.can_accommodate(item):
            return False
        self.boxes.append(box)
        self.assign(item, box)
        return True

    def reject(self, item: Item, reason: str) -> None:
        self.unassigned.append(UnassignedItem(item, reason))
        logger.warning("Item %s (x%d) unassigned: %s", item.id, item.quantity, reason)

    def result(self) -> PackingResult:
        return PackingResult(
            boxes=[box.snapshot() for box in self.boxes],
            unassigned=list(self.unassigned),
            assignments=dict(self.assignments),
        )
