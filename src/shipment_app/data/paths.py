import os

DATA_DIR = os.path.dirname(os.path.abspath(__file__))
CATALOG_ENV_VAR = "SHIPMENT_CATALOG_PATH"


def catalog_yaml_path() -> str:
    override = os.environ.get(CATALOG_ENV_VAR)
    if override:
        return override
    return os.path.join(DATA_DIR, "catalog.yaml")
