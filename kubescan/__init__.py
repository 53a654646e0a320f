"""
KubeScan

Runtime resolution for Kubernetes benchmark audits: discovers which
components are running on the host, where their configuration lives,
and whether kubectl reports the expected Kubernetes version.
"""

__version__ = "0.3.0"
__author__ = "KubeScan Project"

from .core.catalog import (
    Component,
    ComponentCatalog,
    load_catalog,
    list_available_catalogs,
    catalog_exists,
)
from .core.errors import (
    ResolutionError,
    BinaryNotFoundError,
    ConfigLookupError,
    CatalogError,
)
from .core.runtime import RuntimeResolution, resolve_runtime
from .core.substitution import SubstitutionEngine

__all__ = [
    "Component",
    "ComponentCatalog",
    "load_catalog",
    "list_available_catalogs",
    "catalog_exists",
    "ResolutionError",
    "BinaryNotFoundError",
    "ConfigLookupError",
    "CatalogError",
    "RuntimeResolution",
    "resolve_runtime",
    "SubstitutionEngine",
]
