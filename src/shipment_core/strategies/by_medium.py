from __future__ import annotations

from typing import Optional, Sequence

from ..boxes import Box
from ..models import BoxType, Item, PackingMode
from .base import PackingStrategy, StrategyMetadata


class ByMediumStrategy(PackingStrategy):
    """First fit, one product category per box."""

    metadata = StrategyMetadata(
        id="first-fit",
        name="Pack by Medium",
        description=(
            "Keeps different art types separate. Each box contains only one "
            "medium (e.g., only paper prints or only canvas)."
        ),
        best_for="When you need strict separation of art types for handling or delivery",
        algorithm_name="Pack by Medium (No Mixed Mediums)",
    )
    mode = PackingMode.BY_MEDIUM

    def find_box(
        self, boxes: Sequence[Box], item: Item, preferred: BoxType
    ) -> Optional[Box]:
        for box in boxes:
            if box.box_type == preferred and box.can_accommodate(item):
                return box
        if preferred == BoxType.STANDARD:
            for box in boxes:
                if (
                    box.box_type == BoxType.LARGE
                    and box.current_category == item.category
                    and box.can_accommodate(item)
                ):
                    return box
        return None
