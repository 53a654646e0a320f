"""
KubeScan - Diagnostic Reporter

Severity-tagged messages on stderr. Colors are applied only when the
stream is a terminal.
"""

import sys
from enum import Enum
from typing import Callable, Optional, TextIO


class State(Enum):
    """Result states used to tag messages."""
    PASS = "PASS"
    FAIL = "FAIL"
    WARN = "WARN"
    INFO = "INFO"


# ANSI color codes
COLORS = {
    "green": "\033[92m",
    "red": "\033[91m",
    "yellow": "\033[93m",
    "blue": "\033[94m",
    "reset": "\033[0m",
}

STATE_COLORS = {
    State.PASS: "green",
    State.FAIL: "red",
    State.WARN: "yellow",
    State.INFO: "blue",
}

Formatter = Callable[[str], str]


def build_formatters(use_colors: bool) -> dict[State, Formatter]:
    """Build the state-to-formatter mapping.

    Args:
        use_colors: Wrap tags in ANSI color codes

    Returns:
        Mapping of State to a function that renders its tag
    """
    def colorize(color: str) -> Formatter:
        def render(text: str) -> str:
            return f"{COLORS[color]}{text}{COLORS['reset']}"
        return render

    def plain(text: str) -> str:
        return text

    return {
        state: colorize(color) if use_colors else plain
        for state, color in STATE_COLORS.items()
    }


class Reporter:
    """Writes severity-tagged diagnostics and remembers the warnings.

    Example:
        reporter = Reporter()
        reporter.warn("Missing config file for apiserver")
        # stderr: [WARN] Missing config file for apiserver
    """

    def __init__(
        self,
        file: Optional[TextIO] = None,
        formatters: Optional[dict[State, Formatter]] = None,
    ) -> None:
        """Initialize the reporter.

        Args:
            file: Output stream (defaults to sys.stderr)
            formatters: State-to-formatter mapping; colored when the
                stream is a TTY if not given
        """
        self.file = file or sys.stderr
        if formatters is None:
            is_tty = hasattr(self.file, "isatty") and self.file.isatty()
            formatters = build_formatters(use_colors=is_tty)
        self._formatters = formatters
        self._warnings: list[str] = []

    def format(self, state: State, message: str) -> str:
        """Render ``[STATE] message``."""
        tag = self._formatters.get(state, str)(state.value)
        return f"[{tag}] {message}"

    def emit(self, state: State, message: str) -> None:
        """Write a tagged message to the output stream."""
        print(self.format(state, message), file=self.file)

    def warn(self, message: str) -> None:
        """Report a recoverable problem."""
        self._warnings.append(message)
        self.emit(State.WARN, message)

    def info(self, message: str) -> None:
        """Report an informational message."""
        self.emit(State.INFO, message)

    def error(self, error: BaseException) -> None:
        """Report a fatal error, untagged, on its own paragraph."""
        print(f"\n{error}", file=self.file)

    @property
    def warnings(self) -> list[str]:
        """Warnings reported so far."""
        return self._warnings.copy()

    @property
    def has_warnings(self) -> bool:
        """Check whether any warning has been reported."""
        return len(self._warnings) > 0
