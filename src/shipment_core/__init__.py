"""Artwork shipment packing engine."""

from .boxes import Box, BoxSnapshot
from .catalog import BoxSpec, ContainerSpec, DataError, PackingCatalog, Thresholds
from .classifier import Classifier
from .consolidation import ContainerPackingResult, choose_pallet_type, pack_containers
from .containers import ContainerSnapshot, OuterContainer
from .models import (
    BoxType,
    ContainerKind,
    ContainerType,
    DeliveryCapabilities,
    Item,
    Material,
    PackingMode,
    ProductCategory,
    SpecialHandlingFlag,
)
from .orchestrator import PackagingRequest, PackagingResponse, package_everything
from .splitting import PackingResult, UnassignedItem, split_item
from .strategies import (
    DEFAULT_STRATEGY_ID,
    PackingStrategy,
    StrategyMetadata,
    available_strategies,
    create_strategy,
)
from .weights import WeightEngine

__all__ = [
    "Box",
    "BoxSnapshot",
    "BoxSpec",
    "BoxType",
    "Classifier",
    "ContainerKind",
    "ContainerPackingResult",
    "ContainerSnapshot",
    "ContainerSpec",
    "ContainerType",
    "DataError",
    "DEFAULT_STRATEGY_ID",
    "DeliveryCapabilities",
    "Item",
    "Material",
    "OuterContainer",
    "PackagingRequest",
    "PackagingResponse",
    "PackingCatalog",
    "PackingMode",
    "PackingResult",
    "PackingStrategy",
    "ProductCategory",
    "SpecialHandlingFlag",
    "StrategyMetadata",
    "Thresholds",
    "UnassignedItem",
    "WeightEngine",
    "available_strategies",
    "choose_pallet_type",
    "create_strategy",
    "pack_containers",
    "package_everything",
    "split_item",
]
