from __future__ import annotations

import logging
import math
from typing import Iterable

from .catalog import DataError, PackingCatalog
from .models import Item

logger = logging.getLogger(__name__)

__all__ = ["DataError", "WeightEngine"]


class WeightEngine:
    """Shipping weight of artwork from material factor and raw footprint.

    Each piece is rounded up on its own before the quantity is applied, so
    ``weight`` is ``ceil(area * factor) * quantity`` and never
    ``ceil(area * factor * quantity)``.
    """

    def __init__(self, catalog: PackingCatalog) -> None:
        self.catalog = catalog

    def piece_weight(self, item: Item) -> int:
        factor = self.catalog.material_factor(item.material)
        if factor == 0:
            logger.warning(
                "Item %s uses material %s with no weight factor; weighing 0 lbs",
                item.id,
                getattr(item.material, "value", item.material),
            )
        return max(0, int(math.ceil(item.length * item.width * factor)))

    def weight(self, item: Item) -> int:
        return self.piece_weight(item) * item.quantity

    def total_weight(self, items: Iterable[Item]) -> int:
        return sum(self.weight(item) for item in items)
