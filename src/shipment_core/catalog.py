from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Mapping, Optional, Union

from .models import BoxType, ContainerKind, ContainerType, Material, ProductCategory
from .units import INCH, LB

DEFAULT_OVERSIZE_PIECES_PER_BOX = 3


class DataError(ValueError):
    """Input data references something the catalog does not know."""


@dataclass(frozen=True)
class Thresholds:
    standard_box: INCH = 36.0
    large_box: INCH = 43.5
    telescoping_max: INCH = 84.0
    oversized_report: INCH = 43.0
    max_stack_height: INCH = 84.0


@dataclass(frozen=True)
class BoxSpec:
    label: str
    length: INCH
    width: INCH
    inner_height: INCH
    tare_weight: LB
    nominal_capacity: int
    telescoping: bool = False


@dataclass(frozen=True)
class ContainerSpec:
    label: str
    kind: ContainerKind
    tare_weight: LB
    max_boxes: int
    allowed_box_types: Optional[FrozenSet[BoxType]] = None
    dimensions: str = "Custom"

    def allows(self, box_type: BoxType) -> bool:
        return self.allowed_box_types is None or box_type in self.allowed_box_types


@dataclass(frozen=True)
class PackingCatalog:
    """Immutable lookup tables handed to the engine at construction."""

    material_factors: Mapping[Material, float]
    boxes: Mapping[BoxType, BoxSpec]
    containers: Mapping[ContainerType, ContainerSpec]
    capacities: Mapping[BoxType, Mapping[ProductCategory, int]] = field(
        default_factory=dict
    )
    thresholds: Thresholds = field(default_factory=Thresholds)
    oversize_pieces_per_box: int = DEFAULT_OVERSIZE_PIECES_PER_BOX

    def material_factor(self, material: Union[Material, str]) -> float:
        try:
            return self.material_factors[Material(material)]
        except (KeyError, ValueError):
            raise DataError(f"Unknown material: {material!r}") from None

    def box_spec(self, box_type: BoxType) -> BoxSpec:
        try:
            return self.boxes[box_type]
        except KeyError:
            raise DataError(f"No box spec for {box_type.value!r}") from None

    def container_spec(self, container_type: ContainerType) -> ContainerSpec:
        try:
            return self.containers[container_type]
        except KeyError:
            raise DataError(f"No container spec for {container_type.value!r}") from None

    def product_limit(self, category: ProductCategory, box_type: BoxType) -> Optional[int]:
        return self.capacities.get(box_type, {}).get(category)

    def capacity_limit(
        self, category: ProductCategory, box_type: BoxType, *, oversize: bool
    ) -> int:
        limit = self.product_limit(category, box_type)
        if limit is not None:
            return limit
        if oversize:
            return self.oversize_pieces_per_box
        spec = self.boxes.get(box_type)
        if spec is not None and spec.nominal_capacity > 0:
            return spec.nominal_capacity
        return 1

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PackingCatalog":
        """Build a catalog from the parsed YAML document."""

        if not isinstance(data, Mapping):
            raise ValueError("catalog document must be a mapping")
        for section in ("material_factors", "boxes", "containers"):
            if section not in data:
                raise ValueError(f"catalog is missing the '{section}' section")
        try:
            thresholds = Thresholds(
                **{key: float(value) for key, value in (data.get("thresholds") or {}).items()}
            )
            factors = {
                Material(name): float(value)
                for name, value in data["material_factors"].items()
            }
            boxes = {
                BoxType(name): _box_spec(name, raw) for name, raw in data["boxes"].items()
            }
            containers = {
                ContainerType(name): _container_spec(name, raw)
                for name, raw in data["containers"].items()
            }
            capacities: Dict[BoxType, Dict[ProductCategory, int]] = {}
            for box_name, table in (data.get("capacities") or {}).items():
                capacities[BoxType(box_name)] = {
                    ProductCategory(category): int(limit)
                    for category, limit in (table or {}).items()
                }
            oversize = int(
                data.get("oversize_pieces_per_box", DEFAULT_OVERSIZE_PIECES_PER_BOX)
            )
        except (TypeError, ValueError, KeyError, AttributeError) as e:
            raise ValueError(f"Invalid catalog data: {e}") from e
        return cls(
            material_factors=factors,
            boxes=boxes,
            containers=containers,
            capacities=capacities,
            thresholds=thresholds,
            oversize_pieces_per_box=oversize,
        )


def _box_spec(name: str, raw: Mapping[str, Any]) -> BoxSpec:
    return BoxSpec(
        label=str(raw.get("label", name)),
        length=float(raw["length"]),
        width=float(raw["width"]),
        inner_height=float(raw["inner_height"]),
        tare_weight=float(raw.get("tare_weight", 0)),
        nominal_capacity=int(raw.get("nominal_capacity", 1)),
        telescoping=bool(raw.get("telescoping", False)),
    )


def _container_spec(name: str, raw: Mapping[str, Any]) -> ContainerSpec:
    allowed = raw.get("allowed_box_types")
    return ContainerSpec(
        label=str(raw.get("label", name)),
        kind=ContainerKind(raw["kind"]),
        tare_weight=float(raw["tare_weight"]),
        max_boxes=int(raw["max_boxes"]),
        allowed_box_types=(
            None if allowed is None else frozenset(BoxType(value) for value in allowed)
        ),
        dimensions=str(raw.get("dimensions", "Custom")),
    )
