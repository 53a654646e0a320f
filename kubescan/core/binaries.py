"""
KubeScan - Binary Resolution

Finds which of each component's candidate executables is actually running.
"""

import logging
import re
from typing import Iterable, Optional

from .catalog import Component
from .errors import BinaryNotFoundError, NoRunningCandidateError
from .process import ProcessInspector, ProcessQuery

logger = logging.getLogger(__name__)


def binary_pattern(candidate: str) -> "re.Pattern[str]":
    """Build the ps line pattern for a candidate binary.

    The candidate must start the line, optionally preceded by a path:
    ``kubelet`` matches ``/usr/bin/kubelet --v=2`` but ``apiserver`` does
    not match ``kube-apiserver``.
    """
    return re.compile(r"^(?:\S*/)?" + re.escape(candidate))


class BinaryResolver:
    """Resolves the running binary for every component in a catalog.

    Example:
        resolver = BinaryResolver()
        binaries = resolver.resolve_all(catalog.components)
        # {"apiserver": "kube-apiserver", "etcd": "etcd", ...}
    """

    def __init__(self, process_query: Optional[ProcessQuery] = None) -> None:
        """Initialize the resolver.

        Args:
            process_query: Returns ps command lines for a program name
        """
        self._process_query = process_query or ProcessInspector()

    def verify_binary(self, candidate: str) -> bool:
        """Check whether a candidate binary is running.

        A candidate may be several words (``hyperkube apiserver``). The
        process table is searched by its first word, then every returned
        line is matched against the whole candidate.

        Args:
            candidate: Candidate binary as written in the catalog

        Returns:
            True if at least one process line matches
        """
        binary = candidate.strip("'\"")
        words = binary.split()
        if not words:
            return False

        output = self._process_query(words[0])
        pattern = binary_pattern(binary)
        return any(pattern.match(line) for line in output.split("\n"))

    def find_executable(self, candidates: Iterable[str]) -> str:
        """Find the first running candidate in declared order.

        Args:
            candidates: Ordered candidate binaries

        Returns:
            The winning candidate, as written in the catalog

        Raises:
            NoRunningCandidateError: If none of the candidates are running
        """
        tried: list[str] = []
        for candidate in candidates:
            if self.verify_binary(candidate):
                return candidate
            logger.info("executable '%s' not running", candidate)
            tried.append(candidate)

        raise NoRunningCandidateError(tried)

    def resolve(self, component: Component) -> str:
        """Resolve the binary for a single component.

        Raises:
            BinaryNotFoundError: If a non-optional component is not running
        """
        try:
            binary = self.find_executable(component.bins)
        except NoRunningCandidateError:
            if not component.optional:
                raise BinaryNotFoundError(component.name) from None
            # Substitute the component name so templates still render
            logger.debug("Component %s not running", component.name)
            return component.name

        logger.debug("Component %s uses running binary %s", component.name, binary)
        return binary

    def resolve_all(self, components: Iterable[Component]) -> dict[str, str]:
        """Resolve binaries for all components that declare candidates.

        Args:
            components: Catalog components, in catalog order

        Returns:
            Mapping of component name to resolved binary

        Raises:
            BinaryNotFoundError: On the first non-optional component with
                no running candidate
        """
        binaries: dict[str, str] = {}
        for component in components:
            if not component.bins:
                continue
            binaries[component.name] = self.resolve(component)
        return binaries
