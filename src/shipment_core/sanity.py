from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .consolidation import ContainerPackingResult
from .models import Item, total_quantity
from .splitting import PackingResult


@dataclass(frozen=True)
class SanityPolicy:
    max_stack_height: float = 84.0
    check_quantities: bool = True
    eps: float = 1e-6


DEFAULT_SANITY_POLICY = SanityPolicy()


def box_flags(result: PackingResult, eps: float = 1e-6) -> set[str]:
    flags: set[str] = set()
    for box in result.boxes:
        if box.capacity is not None and box.piece_count > box.capacity:
            flags.add("box_over_capacity")
        if box.capacity is None and box.stack_depth > box.inner_height + eps:
            flags.add("box_over_capacity")
        if not box.items:
            flags.add("empty_box")
    return flags


def container_flags(
    result: ContainerPackingResult, max_stack_height: float, eps: float = 1e-6
) -> set[str]:
    flags: set[str] = set()
    seen: set[str] = set()
    for container in result.containers:
        if container.box_count > container.max_boxes:
            flags.add("container_over_count")
        if container.stack_height > max_stack_height + eps:
            flags.add("stack_height_exceeded")
        for box in container.boxes:
            if box.box_id in seen:
                flags.add("box_reused")
            seen.add(box.box_id)
    for box in result.unassigned_boxes:
        if box.box_id in seen:
            flags.add("box_reused")
    return flags


def quantity_conserved(items: Iterable[Item], result: PackingResult) -> bool:
    packed = total_quantity(result.assigned_items())
    rejected = total_quantity(result.unassigned_items)
    return total_quantity(items) == packed + rejected


def plan_flags(
    packing: PackingResult,
    containers: ContainerPackingResult,
    items: Optional[Iterable[Item]] = None,
    policy: SanityPolicy | None = None,
) -> set[str]:
    if policy is None:
        policy = DEFAULT_SANITY_POLICY
    flags = box_flags(packing, eps=policy.eps)
    flags |= container_flags(containers, policy.max_stack_height, eps=policy.eps)
    if items is not None and policy.check_quantities:
        if not quantity_conserved(items, packing):
            flags.add("quantity_mismatch")
    return flags


def is_sane(
    packing: PackingResult,
    containers: ContainerPackingResult,
    items: Optional[Iterable[Item]] = None,
    policy: SanityPolicy | None = None,
) -> bool:
    return not plan_flags(packing, containers, items, policy)
