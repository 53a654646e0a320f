"""
KubeScan - Core Module

This module contains the runtime resolution layer: catalog loading,
binary and config file resolution, version gating and placeholder
substitution.
"""

from .catalog import (
    Component,
    ComponentCatalog,
    catalog_exists,
    list_available_catalogs,
    load_catalog,
)
from .errors import (
    BinaryNotFoundError,
    CatalogError,
    ConfigLookupError,
    NoRunningCandidateError,
    ResolutionError,
)
from .process import ProcessInspector
from .binaries import BinaryResolver
from .configs import ConfigResolver
from .version import VersionGate, VersionInfo, check_version, parse_version
from .substitution import SubstitutionEngine, make_substitutions
from .runtime import RuntimeResolution, resolve_runtime

__all__ = [
    "Component",
    "ComponentCatalog",
    "catalog_exists",
    "list_available_catalogs",
    "load_catalog",
    "BinaryNotFoundError",
    "CatalogError",
    "ConfigLookupError",
    "NoRunningCandidateError",
    "ResolutionError",
    "ProcessInspector",
    "BinaryResolver",
    "ConfigResolver",
    "VersionGate",
    "VersionInfo",
    "check_version",
    "parse_version",
    "SubstitutionEngine",
    "make_substitutions",
    "RuntimeResolution",
    "resolve_runtime",
]
