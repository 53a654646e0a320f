"""
KubeScan - Output

Diagnostic reporting and JSON output for runtime resolution.
"""

from .json_formatter import JSONFormatter, DateTimeEncoder
from .reporter import Reporter, State, build_formatters

__all__ = [
    "JSONFormatter",
    "DateTimeEncoder",
    "Reporter",
    "State",
    "build_formatters",
]
