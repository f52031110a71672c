import copy
import os
from functools import lru_cache
from typing import Optional

import yaml

from shipment_core.catalog import PackingCatalog

from .paths import catalog_yaml_path


def _load_yaml(path: str) -> dict:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Catalog file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in catalog file {path}: {e}")
    if not isinstance(loaded, dict):
        raise ValueError(f"Catalog file {path} must contain a mapping")
    return loaded


@lru_cache(maxsize=None)
def _cached_document(path: Optional[str] = None) -> dict:
    return _load_yaml(path or catalog_yaml_path())


def load_catalog_document(path: Optional[str] = None) -> dict:
    """Return a private copy of the raw catalog document as parsed from YAML."""
    return copy.deepcopy(_cached_document(path))


@lru_cache(maxsize=None)
def load_catalog(path: Optional[str] = None) -> PackingCatalog:
    """Return the packing catalog built from ``catalog.yaml``."""
    return PackingCatalog.from_mapping(_cached_document(path))
