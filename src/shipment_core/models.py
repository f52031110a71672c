from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import FrozenSet, Iterable, Optional, Tuple, Union

from .units import INCH

DEFAULT_DEPTH: INCH = 2.0


class ProductCategory(str, Enum):
    PAPER_PRINT = "paper_print"
    PAPER_PRINT_WITH_TITLE_PLATE = "paper_print_with_title_plate"
    CANVAS_FLOAT_FRAME = "canvas_float_frame"
    WALL_DECOR = "wall_decor"
    ACOUSTIC_PANEL = "acoustic_panel"
    ACOUSTIC_PANEL_FRAMED = "acoustic_panel_framed"
    METAL_PRINT = "metal_print"
    MIRROR = "mirror"
    PATIENT_BOARD = "patient_board"


class Material(str, Enum):
    GLASS = "glass"
    ACRYLIC = "acrylic"
    CANVAS_FRAMED = "canvas_framed"
    CANVAS_GALLERY = "canvas_gallery"
    MIRROR = "mirror"
    ACOUSTIC_PANEL = "acoustic_panel"
    ACOUSTIC_PANEL_FRAMED = "acoustic_panel_framed"
    PATIENT_BOARD = "patient_board"
    NO_GLAZING = "no_glazing"
    UNKNOWN = "unknown"


class SpecialHandlingFlag(str, Enum):
    TACTILE_PANEL = "tactile_panel"
    RAISED_FLOAT = "raised_float"
    MANUAL_REVIEW = "manual_review"


class BoxType(str, Enum):
    STANDARD = "standard"
    LARGE = "large"
    SMALL_PARCEL = "small_parcel"
    LARGE_PARCEL = "large_parcel"


class ContainerKind(str, Enum):
    PALLET = "pallet"
    CRATE = "crate"


class ContainerType(str, Enum):
    STANDARD_PALLET = "standard_pallet"
    OVERSIZE_PALLET = "oversize_pallet"
    GLASS_SMALL_PALLET = "glass_small_pallet"
    STANDARD_CRATE = "standard_crate"


class PackingMode(str, Enum):
    BY_MEDIUM = "by_medium"
    BY_STRICTEST = "by_strictest"
    BY_DEPTH = "by_depth"


@dataclass(frozen=True)
class Footprint:
    """Planar dimensions sorted as (long side, short side)."""

    long_side: INCH
    short_side: INCH

    @classmethod
    def of(cls, length: INCH, width: INCH) -> "Footprint":
        return cls(max(length, width), min(length, width))


@dataclass(frozen=True)
class Dimensions:
    length: INCH
    width: INCH
    height: INCH

    def rounded(self) -> "Dimensions":
        return Dimensions(
            float(math.ceil(self.length)),
            float(math.ceil(self.width)),
            float(math.ceil(self.height)),
        )

    def as_tuple(self) -> Tuple[INCH, INCH, INCH]:
        return (self.length, self.width, self.height)


def _is_count(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _coerce_material(value: Union[Material, str]) -> Union[Material, str]:
    if isinstance(value, Material):
        return value
    try:
        return Material(str(value).strip().lower())
    except ValueError:
        # Left as text; the weight engine reports it as a data error.
        return str(value)


@dataclass(frozen=True)
class Item:
    """One line of artwork: a piece description and how many of it ship."""

    id: str
    category: ProductCategory
    material: Union[Material, str]
    length: INCH
    width: INCH
    depth: INCH = DEFAULT_DEPTH
    quantity: int = 1
    flags: FrozenSet[SpecialHandlingFlag] = field(default_factory=frozenset)
    description: Optional[str] = None
    final_medium_label: Optional[str] = None
    glazing_label: Optional[str] = None
    hardware_label: Optional[str] = None
    hardware_pieces_per_item: int = 0

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("item id must not be empty")
        if not _is_count(self.quantity) or self.quantity < 1:
            raise ValueError(
                f"item {self.id}: quantity must be a positive integer, got {self.quantity!r}"
            )
        if self.length < 0 or self.width < 0 or self.depth < 0:
            raise ValueError(f"item {self.id}: dimensions must be non-negative")
        if not _is_count(self.hardware_pieces_per_item) or self.hardware_pieces_per_item < 0:
            raise ValueError(f"item {self.id}: hardware pieces must be a non-negative integer")
        object.__setattr__(self, "category", ProductCategory(self.category))
        object.__setattr__(self, "material", _coerce_material(self.material))
        object.__setattr__(
            self, "flags", frozenset(SpecialHandlingFlag(flag) for flag in self.flags)
        )

    @property
    def footprint(self) -> Footprint:
        return Footprint.of(self.length, self.width)

    @property
    def dimensions(self) -> Dimensions:
        return Dimensions(self.length, self.width, self.depth)

    @property
    def rounded_dimensions(self) -> Dimensions:
        return self.dimensions.rounded()

    @property
    def stack_depth(self) -> INCH:
        return self.depth * self.quantity

    @property
    def hardware_pieces_total(self) -> int:
        return self.hardware_pieces_per_item * self.quantity

    def with_quantity(self, item_id: str, quantity: int) -> "Item":
        return replace(self, id=item_id, quantity=quantity)


@dataclass(frozen=True)
class DeliveryCapabilities:
    accepts_pallets: bool = True
    accepts_crates: bool = False
    has_loading_dock: bool = False
    requires_liftgate: bool = False
    needs_inside_delivery: bool = False


def total_quantity(items: Iterable[Item]) -> int:
    return sum(item.quantity for item in items)
