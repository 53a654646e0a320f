"""
KubeScan - Kubernetes Version Gate

Compares the client and server versions reported by ``kubectl version``
with the version the benchmark was written for. Every problem here is
reported as a warning; the version check never stops a run.
"""

from dataclasses import dataclass
import logging
import re
import shutil
import subprocess
from typing import Callable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..output.reporter import Reporter

logger = logging.getLogger(__name__)

ROLES = ("Client", "Server")

# Returns (captured output, error description or None).
VersionQuery = Callable[[], tuple[str, Optional[str]]]

_FIELD_PATTERNS = {
    "Major": re.compile(r'Major:"([0-9]+)"'),
    "Minor": re.compile(r'Minor:"([0-9]+)"'),
}


@dataclass(frozen=True)
class VersionInfo:
    """Major/minor version reported for one role."""

    role: str
    major: Optional[str] = None
    minor: Optional[str] = None

    @property
    def complete(self) -> bool:
        return bool(self.major) and bool(self.minor)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"


def find_version_segment(role: str, text: str) -> str:
    """Find the ``<Role> Version: version.Info{...}`` segment of the output.

    Args:
        role: "Client" or "Server"
        text: Raw kubectl version output

    Returns:
        The matched segment, or "" if absent
    """
    pattern = re.compile(re.escape(role) + r" Version: version\.Info\{(.*)\}")
    match = pattern.search(text)
    return match.group(0) if match else ""


def extract_field(field: str, segment: str) -> str:
    """Extract a quoted numeric field (Major or Minor) from a version segment.

    Returns:
        The field's digits, or "" if absent
    """
    match = _FIELD_PATTERNS[field].search(segment)
    return match.group(1) if match else ""


def parse_version(role: str, text: str) -> VersionInfo:
    """Parse the version of one role out of kubectl version output."""
    segment = find_version_segment(role, text)
    return VersionInfo(
        role=role,
        major=extract_field("Major", segment) or None,
        minor=extract_field("Minor", segment) or None,
    )


def check_version(role: str, text: str, expected_major: str, expected_minor: str) -> str:
    """Compare one role's version with the expected major/minor.

    Versions are compared as strings: "01" and "1" differ.

    Args:
        role: "Client" or "Server"
        text: Raw kubectl version output
        expected_major: Expected major version
        expected_minor: Expected minor version

    Returns:
        A warning message, or "" if the version is as expected
    """
    info = parse_version(role, text)
    if not info.complete:
        return f"Couldn't find {role} version from kubectl output '{text}'"

    if info.major != expected_major or info.minor != expected_minor:
        return f"Unexpected {role} version {info}"

    return ""


class KubectlVersionQuery:
    """Runs ``kubectl version`` and captures its output."""

    def __init__(
        self,
        executable: str = "kubectl",
        which: Optional[Callable[[str], Optional[str]]] = None,
        timeout: Optional[int] = None,
    ) -> None:
        self.executable = executable
        self._which = which or shutil.which
        self._timeout = timeout

    def available(self) -> bool:
        """Check whether the executable is on the search path."""
        return self._which(self.executable) is not None

    def __call__(self) -> tuple[str, Optional[str]]:
        command = [self.executable, "version"]
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired as e:
            output = e.stdout or ""
            if isinstance(output, bytes):
                output = output.decode("utf-8", errors="replace")
            return output, str(e)
        except OSError as e:
            return "", str(e)

        if result.returncode != 0:
            return result.stdout, f"exit status {result.returncode}"
        return result.stdout, None


class VersionGate:
    """Warns when kubectl reports an unexpected Kubernetes version.

    Example:
        gate = VersionGate(reporter)
        gate.verify("1", "21")
    """

    def __init__(
        self,
        reporter: Optional["Reporter"] = None,
        query: Optional[VersionQuery] = None,
        available: Optional[Callable[[], bool]] = None,
    ) -> None:
        """Initialize the gate.

        Args:
            reporter: Receives the warnings
            query: Produces kubectl version output (defaults to running kubectl)
            available: Whether the version tool can be run at all
        """
        self._reporter = reporter
        if query is None:
            kubectl = KubectlVersionQuery()
            query = kubectl
            if available is None:
                available = kubectl.available
        self._query = query
        self._available = available or (lambda: True)

    def verify(self, expected_major: str, expected_minor: str) -> list[str]:
        """Check client and server versions against the expected baseline.

        Args:
            expected_major: Expected major version
            expected_minor: Expected minor version

        Returns:
            Warning messages emitted, empty if the versions are as expected
        """
        messages: list[str] = []

        if not self._available():
            logger.debug("kubectl not found on the search path")
            self._warn("Kubernetes version check skipped", messages)
            return messages

        output, error = self._query()
        if error:
            logger.debug("kubectl version: %s", error)
            self._warn(f"Kubernetes version check skipped with error {error}", messages)
            if not output:
                return messages

        for role in ROLES:
            msg = check_version(role, output, expected_major, expected_minor)
            if msg:
                self._warn(msg, messages)

        return messages

    def _warn(self, message: str, messages: list[str]) -> None:
        messages.append(message)
        if self._reporter is not None:
            self._reporter.warn(message)
        else:
            logger.warning(message)
