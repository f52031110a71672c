from __future__ import annotations

from typing import List, Optional, Sequence

from ..boxes import Box
from ..models import BoxType, Item, PackingMode
from .base import PackingStrategy, StrategyMetadata


class ByDepthStrategy(PackingStrategy):
    """Physical stacking depth decides what fits; large items go first."""

    metadata = StrategyMetadata(
        id="minimize-boxes",
        name="Pack by Depth",
        description=(
            "Considers actual physical depth when stacking items. Checks if "
            "items will physically fit based on their thickness."
        ),
        best_for=(
            "When you need realistic physical packing that accounts for item thickness"
        ),
        algorithm_name="Pack by Depth (Physical Fit)",
    )
    mode = PackingMode.BY_DEPTH

    def order(self, items: Sequence[Item]) -> List[Item]:
        ordered = super().order(items)
        large = [item for item in ordered if self.classifier.requires_oversize_box(item)]
        standard = [item for item in ordered if not self.classifier.requires_oversize_box(item)]
        return large + standard

    def find_box(
        self, boxes: Sequence[Box], item: Item, preferred: BoxType
    ) -> Optional[Box]:
        # Most recent box first, any type: a standard item may top up a large box.
        for box in reversed(boxes):
            if box.can_accommodate(item):
                return box
        return None
