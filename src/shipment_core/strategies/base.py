from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from ..boxes import Box
from ..catalog import PackingCatalog
from ..classifier import Classifier
from ..models import BoxType, Item, PackingMode
from ..splitting import (
    REASON_AFTER_SPLIT,
    REASON_CRATE_ONLY,
    REASON_CUSTOM_PACKAGING,
    PackingResult,
    PackingRun,
    resolve_max_pieces,
    sort_items,
    split_item,
)
from ..weights import WeightEngine


@dataclass(frozen=True)
class StrategyMetadata:
    id: str
    name: str
    description: str
    best_for: str
    algorithm_name: str


class PackingStrategy(ABC):
    """Assigns items to boxes.

    Subclasses choose the packing mode, the order items are visited in and
    where an item may go among the boxes already open. Every call to
    :meth:`pack` starts from an empty run, so one instance can be reused.
    """

    metadata: StrategyMetadata
    mode: PackingMode

    def __init__(self, catalog: PackingCatalog) -> None:
        self.catalog = catalog
        self.classifier = Classifier(catalog.thresholds)
        self.weights = WeightEngine(catalog)

    @property
    def id(self) -> str:
        return self.metadata.id

    def pack(self, items: Iterable[Item]) -> PackingResult:
        run = PackingRun(self.catalog, self.classifier, self.weights, self.mode)
        for item in self.order(list(items)):
            self.place(run, item)
        return run.result()

    def order(self, items: Sequence[Item]) -> List[Item]:
        return sort_items(items)

    def max_pieces(self, item: Item, box_type: BoxType) -> int:
        return resolve_max_pieces(item, box_type, self.catalog, self.classifier, self.mode)

    def place(self, run: PackingRun, item: Item) -> None:
        if self.classifier.needs_custom_packaging(item):
            run.reject(item, REASON_CUSTOM_PACKAGING)
            return
        if self.classifier.requires_crate_only(item):
            run.reject(item, REASON_CRATE_ONLY)
            return

        preferred = self.classifier.preferred_box_type(item)
        box = self.find_box(run.boxes, item, preferred)
        if box is not None:
            run.assign(item, box)
            return
        if run.place_in_new_box(item, preferred):
            return

        for unit in split_item(item, self.max_pieces(item, preferred)):
            box = self.find_box(run.boxes, unit, preferred)
            if box is not None:
                run.assign(unit, box)
            elif not run.place_in_new_box(unit, preferred):
                run.reject(unit, REASON_AFTER_SPLIT)

    @abstractmethod
    def find_box(
        self, boxes: Sequence[Box], item: Item, preferred: BoxType
    ) -> Optional[Box]:
        """Return an open box that takes the whole item, or ``None``."""
