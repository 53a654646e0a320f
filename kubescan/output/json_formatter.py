"""
KubeScan - JSON Output Formatter

This module renders the runtime resolution outcome as JSON.
"""

import json
import socket
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from ..core.catalog import ComponentCatalog
from ..core.runtime import RuntimeResolution


class DateTimeEncoder(json.JSONEncoder):
    """Custom JSON encoder to handle datetime serialization."""

    def default(self, o: Any) -> Any:
        """Convert datetime objects to ISO format strings."""
        if isinstance(o, datetime):
            return o.isoformat()
        return super().default(o)


class JSONFormatter:
    """Formatter for runtime resolution results in JSON format.

    Example:
        formatter = JSONFormatter(pretty=True)
        resolution = resolve_runtime(catalog, reporter)
        print(formatter.format(resolution, catalog, warnings=reporter.warnings))
    """

    SCHEMA_VERSION = "1.0"

    def __init__(self, pretty: bool = False) -> None:
        """Initialize the JSON formatter.

        Args:
            pretty: If True, output formatted JSON with indentation
        """
        self._pretty = pretty

    def format(
        self,
        resolution: RuntimeResolution,
        catalog: Optional[ComponentCatalog] = None,
        rendered: Optional[list[dict[str, str]]] = None,
        warnings: Optional[list[str]] = None,
    ) -> str:
        """Format a resolution as JSON.

        Args:
            resolution: Resolved binaries and config files
            catalog: Catalog the resolution was made from
            rendered: Templates and their substituted commands
            warnings: Recoverable warnings reported during resolution

        Returns:
            JSON string
        """
        output = {
            "metadata": self._build_metadata(resolution, catalog),
            "binaries": dict(resolution.binaries),
            "configs": dict(resolution.configs),
            "rendered": rendered or [],
            "warnings": warnings or [],
        }

        if self._pretty:
            return json.dumps(output, cls=DateTimeEncoder, indent=2, sort_keys=False)
        else:
            return json.dumps(output, cls=DateTimeEncoder, separators=(',', ':'))

    def _build_metadata(
        self,
        resolution: RuntimeResolution,
        catalog: Optional[ComponentCatalog],
    ) -> dict[str, Any]:
        """Build the metadata section."""
        baseline = resolution.expected_version
        if baseline is None and catalog is not None:
            baseline = catalog.expected_version
        major, minor = baseline or ("", "")
        expected = f"{major}.{minor}" if major and minor else None

        return {
            "schema_version": self.SCHEMA_VERSION,
            "timestamp": datetime.now(timezone.utc),
            "hostname": socket.gethostname(),
            "catalog": catalog.source if catalog else "unknown",
            "components": catalog.names if catalog else sorted(
                set(resolution.binaries) | set(resolution.configs)
            ),
            "expected_version": expected,
            "version_checked": resolution.version_checked,
        }

    def write_to_file(self, content: str, output_path: Path) -> None:
        """Write formatted JSON to a file."""
        output_path.write_text(content, encoding='utf-8')

    def write_to_stdout(self, content: str) -> None:
        """Write formatted JSON to stdout."""
        sys.stdout.write(content)
        if self._pretty:
            sys.stdout.write('\n')
