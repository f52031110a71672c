from __future__ import annotations

from typing import Dict, List, Optional, Type

from ..catalog import PackingCatalog
from .base import PackingStrategy, StrategyMetadata
from .by_depth import ByDepthStrategy
from .by_medium import ByMediumStrategy
from .by_strictest import ByStrictestStrategy

STRATEGIES: Dict[str, Type[PackingStrategy]] = {
    cls.metadata.id: cls
    for cls in (ByMediumStrategy, ByStrictestStrategy, ByDepthStrategy)
}

DEFAULT_STRATEGY_ID = ByMediumStrategy.metadata.id


def create_strategy(
    strategy_id: str = DEFAULT_STRATEGY_ID, catalog: Optional[PackingCatalog] = None
) -> PackingStrategy:
    try:
        cls = STRATEGIES[strategy_id]
    except KeyError:
        known = ", ".join(STRATEGIES)
        raise ValueError(f"Unknown packing strategy {strategy_id!r}; expected one of: {known}") from None
    if catalog is None:
        from shipment_app.data import load_catalog

        catalog = load_catalog()
    return cls(catalog)


def available_strategies() -> List[StrategyMetadata]:
    return [cls.metadata for cls in STRATEGIES.values()]


__all__ = [
    "PackingStrategy",
    "StrategyMetadata",
    "ByMediumStrategy",
    "ByStrictestStrategy",
    "ByDepthStrategy",
    "STRATEGIES",
    "DEFAULT_STRATEGY_ID",
    "create_strategy",
    "available_strategies",
]
