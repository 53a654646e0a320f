"""
KubeScan - Resolution Errors

Fatal conditions raised by the resolvers. Recoverable conditions are
reported where they are detected and never raised.
"""

from typing import Optional


class ResolutionError(Exception):
    """Base class for errors that abort the whole run."""


class CatalogError(ResolutionError):
    """The component catalog could not be loaded."""


class BinaryNotFoundError(ResolutionError):
    """A non-optional component has no running candidate binary.

    Attributes:
        component: Name of the component that could not be resolved
    """

    def __init__(self, component: str) -> None:
        self.component = component
        super().__init__(
            f"need {component} executable but none of the candidates are running"
        )


class ConfigLookupError(ResolutionError):
    """A config candidate could not be checked for a reason other than absence.

    Attributes:
        path: Candidate path being checked
        error: Underlying OS error
    """

    def __init__(self, path: str, error: Optional[OSError] = None) -> None:
        self.path = path
        self.error = error
        super().__init__(f"error looking for file {path}: {error}")


class NoRunningCandidateError(Exception):
    """None of the candidate executables are running."""

    def __init__(self, candidates: list[str]) -> None:
        self.candidates = list(candidates)
        super().__init__("no candidates running")
