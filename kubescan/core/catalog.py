"""
Component catalog loading for runtime resolution.

The catalog lists the Kubernetes components under audit and, for each one,
the ordered candidate binaries and config files to try. Built-in catalogs
live in ``kubescan/catalogs/`` as JSON; ``base.json`` is always loaded first
and the selected target is deep-merged over it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import json
from pathlib import Path
from typing import Any, Optional

from .errors import CatalogError


_CATALOGS_DIR = Path(__file__).resolve().parent.parent / "catalogs"

DEFAULT_TARGET = "master"


@dataclass(frozen=True)
class Component:
    """A component under audit and its resolution candidates."""

    name: str
    bins: tuple[str, ...] = ()
    confs: tuple[str, ...] = ()
    optional: bool = False
    default_conf: Optional[str] = None


@dataclass
class ComponentCatalog:
    """Components and version baseline loaded from catalog documents."""

    components: list[Component]
    version: dict[str, str] = field(default_factory=dict)
    source: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: str = "") -> "ComponentCatalog":
        """Build a catalog from a decoded catalog document.

        Component names listed under ``components`` without a matching
        sub-section are skipped.

        Args:
            data: Decoded catalog document
            source: Where the document came from, for diagnostics

        Returns:
            ComponentCatalog instance

        Raises:
            CatalogError: If the document is not shaped like a catalog
        """
        names = data.get("components", [])
        if not isinstance(names, list):
            raise CatalogError(f"{source or 'catalog'}: 'components' must be a list")

        components: list[Component] = []
        seen: set[str] = set()
        for raw_name in names:
            name = str(raw_name)
            section = data.get(name)
            if not isinstance(section, dict) or name in seen:
                continue
            seen.add(name)
            components.append(_component_from_section(name, section, source))

        version = data.get("version", {})
        if not isinstance(version, dict):
            raise CatalogError(f"{source or 'catalog'}: 'version' must be an object")

        return cls(
            components=components,
            version={str(k): str(v) for k, v in version.items()},
            source=source,
        )

    @property
    def names(self) -> list[str]:
        """Component names in catalog order."""
        return [c.name for c in self.components]

    def get(self, name: str) -> Optional[Component]:
        """Get a component by name."""
        for component in self.components:
            if component.name == name:
                return component
        return None

    def select(self, names: list[str]) -> "ComponentCatalog":
        """Return a catalog restricted to the named components.

        Args:
            names: Component names to keep

        Raises:
            CatalogError: If a name is not in the catalog
        """
        unknown = [n for n in names if self.get(n) is None]
        if unknown:
            raise CatalogError(
                f"Unknown component(s): {', '.join(unknown)}. "
                f"Available components: {', '.join(self.names)}"
            )
        wanted = set(names)
        return ComponentCatalog(
            components=[c for c in self.components if c.name in wanted],
            version=dict(self.version),
            source=self.source,
        )

    @property
    def expected_version(self) -> tuple[str, str]:
        """Expected kubectl (major, minor), empty strings when unset."""
        return self.version.get("major", ""), self.version.get("minor", "")


def list_available_catalogs(include_base: bool = False) -> list[str]:
    """List built-in catalog targets.

    Args:
        include_base: Whether to include the shared base catalog

    Returns:
        Sorted list of target names
    """
    if not _CATALOGS_DIR.exists():
        return []

    targets: list[str] = []
    for path in _CATALOGS_DIR.glob("*.json"):
        if path.stem == "base" and not include_base:
            continue
        targets.append(path.stem)

    return sorted(targets)


def catalog_exists(target: str) -> bool:
    """Check whether a built-in catalog exists for a target."""
    if not target:
        return False
    return (_CATALOGS_DIR / f"{target}.json").exists()


def load_catalog(
    target: Optional[str] = None,
    config_path: Optional[str] = None,
) -> ComponentCatalog:
    """Load the component catalog.

    Args:
        target: Built-in catalog target (e.g. "master", "node")
        config_path: Explicit catalog file, takes precedence over target

    Returns:
        ComponentCatalog with base defaults merged in

    Raises:
        CatalogError: If the selected catalog is missing or malformed
    """
    base = _load_catalog_file(_CATALOGS_DIR / "base.json", required=False)

    if config_path:
        selected_path = Path(config_path)
    else:
        selected = target or DEFAULT_TARGET
        if not catalog_exists(selected):
            available = ", ".join(list_available_catalogs())
            raise CatalogError(
                f"Unknown catalog target '{selected}'. Available targets: {available}"
            )
        selected_path = _CATALOGS_DIR / f"{selected}.json"

    selected_data = _load_catalog_file(selected_path, required=True)
    return ComponentCatalog.from_dict(
        _deep_merge(base, selected_data),
        source=str(selected_path),
    )


def _component_from_section(name: str, section: dict[str, Any], source: str) -> Component:
    """Build a Component from its catalog sub-section."""
    bins = section.get("bins", [])
    confs = section.get("confs", [])
    if not isinstance(bins, list) or not isinstance(confs, list):
        raise CatalogError(
            f"{source or 'catalog'}: '{name}' bins and confs must be lists"
        )

    optional = section.get("optional", False)
    if not isinstance(optional, bool):
        raise CatalogError(
            f"{source or 'catalog'}: '{name}' optional must be true or false"
        )

    default_conf = section.get("defaultconf")
    return Component(
        name=name,
        bins=tuple(str(b) for b in bins),
        confs=tuple(str(c) for c in confs),
        optional=optional,
        default_conf=str(default_conf) if default_conf is not None else None,
    )


def _load_catalog_file(path: Path, required: bool) -> dict[str, Any]:
    """Load a catalog JSON document."""
    if not path.exists():
        if required:
            raise CatalogError(f"Catalog file not found: {path}")
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CatalogError(f"Cannot read catalog file {path}: {e}") from e

    if not isinstance(data, dict):
        raise CatalogError(f"Catalog file {path} must contain a JSON object")
    return data


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge two dictionaries."""
    merged: dict[str, Any] = dict(base)

    for key, value in override.items():
        if (
            key in merged
            and isinstance(merged[key], dict)
            and isinstance(value, dict)
        ):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value

    return merged
