from __future__ import annotations

from .catalog import BoxSpec, Thresholds
from .models import BoxType, Item, Material, ProductCategory

SPECIAL_HANDLING_CATEGORIES = frozenset(
    {
        ProductCategory.MIRROR,
        ProductCategory.WALL_DECOR,
        ProductCategory.ACOUSTIC_PANEL_FRAMED,
    }
)

CRATE_ONLY_CATEGORIES: frozenset = frozenset()


class Classifier:
    """Container eligibility rules evaluated on an item's raw footprint."""

    def __init__(self, thresholds: Thresholds | None = None) -> None:
        self.thresholds = thresholds or Thresholds()

    def needs_custom_packaging(self, item: Item) -> bool:
        fp = item.footprint
        t = self.thresholds
        both_exceed_large = fp.long_side > t.large_box and fp.short_side > t.large_box
        return both_exceed_large or fp.long_side > t.telescoping_max

    def requires_crate_only(self, item: Item) -> bool:
        return item.category in CRATE_ONLY_CATEGORIES

    def requires_oversize_box(self, item: Item) -> bool:
        fp = item.footprint
        t = self.thresholds
        return (
            fp.short_side > t.standard_box
            and fp.long_side > t.standard_box
            and fp.long_side <= t.large_box
        )

    def fits_telescoping_box(self, item: Item) -> bool:
        fp = item.footprint
        return (
            fp.short_side <= self.thresholds.standard_box
            and fp.long_side <= self.thresholds.telescoping_max
        )

    def is_oversized(self, item: Item) -> bool:
        return item.footprint.long_side > self.thresholds.oversized_report

    def requires_special_handling(self, item: Item) -> bool:
        return (
            bool(item.flags)
            or item.category in SPECIAL_HANDLING_CATEGORIES
            or item.material == Material.GLASS
        )

    def preferred_box_type(self, item: Item) -> BoxType:
        return BoxType.LARGE if self.requires_oversize_box(item) else BoxType.STANDARD

    def fits_box(self, item: Item, box_type: BoxType, spec: BoxSpec) -> bool:
        """Whether the footprint can physically go into a box of this type."""
        fp = item.footprint
        if box_type == BoxType.STANDARD:
            return self.fits_telescoping_box(item)
        if box_type == BoxType.LARGE:
            return fp.long_side <= self.thresholds.large_box
        if spec.telescoping:
            return fp.short_side <= spec.width and fp.long_side <= self.thresholds.telescoping_max
        return fp.long_side <= spec.length and fp.short_side <= spec.width

