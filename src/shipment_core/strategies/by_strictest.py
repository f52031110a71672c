from __future__ import annotations

from typing import Optional, Sequence

from ..boxes import Box
from ..models import BoxType, Item, PackingMode
from .base import PackingStrategy, StrategyMetadata


class ByStrictestStrategy(PackingStrategy):
    """Mixed boxes capped by the tightest limit among their categories."""

    metadata = StrategyMetadata(
        id="balanced",
        name="Pack by Strictest Constraint",
        description=(
            "Uses the most restrictive packing limit when mixing art types. "
            "Ensures all items fit safely within the tightest constraint."
        ),
        best_for=(
            "Mixed orders where you want to maximize box utilization while "
            "respecting all constraints"
        ),
        algorithm_name="Pack by Strictest Constraint",
    )
    mode = PackingMode.BY_STRICTEST

    def find_box(
        self, boxes: Sequence[Box], item: Item, preferred: BoxType
    ) -> Optional[Box]:
        for box in boxes:
            if box.box_type == preferred and box.can_accommodate(item):
                return box
        for box in boxes:
            if box.box_type != preferred and box.can_accommodate(item):
                return box
        return None
