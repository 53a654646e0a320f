"""
KubeScan - Process Inspection

Queries the process table for the command lines of a named program.
"""

import logging
import subprocess
from typing import Callable, Optional

logger = logging.getLogger(__name__)

# Takes a program name, returns newline-delimited command lines.
ProcessQuery = Callable[[str], str]


class ProcessInspector:
    """Lists the command lines of running processes by program name.

    Wraps ``ps -C <name> -o cmd --no-headers``. An instance is callable,
    so it can be handed to anything expecting a ProcessQuery.
    """

    def __init__(self, ps_command: str = "ps", timeout: Optional[int] = None) -> None:
        """Initialize the inspector.

        Args:
            ps_command: Process listing executable
            timeout: Seconds to wait for ps, None to wait indefinitely
        """
        self._ps_command = ps_command
        self._timeout = timeout

    def build_command(self, program_name: str) -> list[str]:
        """Build the ps invocation for a program name."""
        return [self._ps_command, "-C", program_name, "-o", "cmd", "--no-headers"]

    def query_running(self, program_name: str) -> str:
        """Get command lines of processes running the named program.

        Failures are never raised: an empty result means "not running".

        Args:
            program_name: Exact program name to look for

        Returns:
            Raw ps output, one command line per line
        """
        command = self.build_command(program_name)
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except (subprocess.TimeoutExpired, OSError) as e:
            logger.debug("%s: %s", command, e)
            return ""

        # ps exits 1 when nothing matched
        if result.returncode != 0:
            logger.debug("%s: exit status %d", command, result.returncode)

        return result.stdout

    def __call__(self, program_name: str) -> str:
        return self.query_running(program_name)
