"""Services initialization."""
from georules.services.errors import ConfigurationError
from georules.services.rules_engine import RulesEngine, get_rules_engine, run
from georules.services.block_catalog import BlockCatalog, get_block_catalog

__all__ = [
    "ConfigurationError",
    "RulesEngine",
    "get_rules_engine",
    "run",
    "BlockCatalog",
    "get_block_catalog",
]
