from __future__ import annotations

from typing import List

from .consolidation import ContainerPackingResult
from .splitting import PackingResult

LOW_EFFICIENCY_THRESHOLD = 0.7
HEAVY_CONTAINER_LBS = 2000


def compute_box_efficiency(result: PackingResult, total_pieces: int) -> float:
    """Share of input pieces that ended up in a box."""
    if total_pieces <= 0:
        return 1.0
    packed = sum(box.piece_count for box in result.boxes)
    return packed / total_pieces


def compute_container_efficiency(result: ContainerPackingResult, total_boxes: int) -> float:
    """Share of boxes that ended up on a pallet or in a crate."""
    if total_boxes <= 0:
        return 1.0
    placed = sum(container.box_count for container in result.containers)
    return placed / total_boxes


def compute_fill_ratio(result: ContainerPackingResult) -> float:
    """Average used box slots per container."""
    if not result.containers:
        return 0.0
    ratios = [c.box_count / c.max_boxes for c in result.containers if c.max_boxes > 0]
    if not ratios:
        return 0.0
    return sum(ratios) / len(ratios)


def heavy_containers(result: ContainerPackingResult, limit: int = HEAVY_CONTAINER_LBS) -> List[str]:
    return [c.container_id for c in result.containers if c.weight > limit]
