"""
KubeScan - Runtime Resolution

Runs the binary and config resolvers over a catalog and the version
gate, collecting everything the check engine needs to materialize
check commands.
"""

from dataclasses import dataclass, field
from typing import Optional, TYPE_CHECKING

from .binaries import BinaryResolver
from .catalog import ComponentCatalog
from .configs import ConfigResolver, StatFunc
from .process import ProcessQuery
from .substitution import SubstitutionEngine
from .version import VersionGate

if TYPE_CHECKING:
    from ..output.reporter import Reporter


@dataclass
class RuntimeResolution:
    """Outcome of resolving a catalog against the current host.

    Attributes:
        binaries: Component name to running binary
        configs: Component name to config file or placeholder
        version_warnings: Messages from the version gate
        version_checked: Whether the version gate ran
        expected_version: (major, minor) baseline in effect, if any
    """
    binaries: dict[str, str]
    configs: dict[str, str]
    version_warnings: list[str] = field(default_factory=list)
    version_checked: bool = False
    expected_version: Optional[tuple[str, str]] = None

    def substitution_engine(self) -> SubstitutionEngine:
        """Build a substitution engine over the resolved maps."""
        return SubstitutionEngine(self.binaries, self.configs)


def resolve_runtime(
    catalog: ComponentCatalog,
    reporter: Optional["Reporter"] = None,
    process_query: Optional[ProcessQuery] = None,
    stat: Optional[StatFunc] = None,
    version_gate: Optional[VersionGate] = None,
    expected_version: Optional[tuple[str, str]] = None,
    check_version: bool = True,
) -> RuntimeResolution:
    """Resolve binaries, config files and check the Kubernetes version.

    Args:
        catalog: Components to resolve
        reporter: Receives recoverable warnings
        process_query: Process table query for binary verification
        stat: Existence check for config candidates
        version_gate: Version gate to use (built from reporter if omitted)
        expected_version: (major, minor) overriding the catalog baseline
        check_version: Run the version gate at all

    Returns:
        RuntimeResolution with both resolved maps

    Raises:
        BinaryNotFoundError: A non-optional component is not running
        ConfigLookupError: A config candidate could not be checked
    """
    binaries = BinaryResolver(process_query).resolve_all(catalog.components)
    configs = ConfigResolver(reporter, stat).resolve_all(catalog.components)
    resolution = RuntimeResolution(binaries=binaries, configs=configs)

    major, minor = expected_version or catalog.expected_version
    # No baseline to compare against
    if not (major and minor):
        return resolution

    resolution.expected_version = (major, minor)
    if check_version:
        gate = version_gate or VersionGate(reporter)
        resolution.version_warnings = gate.verify(major, minor)
        resolution.version_checked = True

    return resolution
