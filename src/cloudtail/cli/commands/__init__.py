"""cloudtail command functions.

Each command is exported as a single function with a signature that matches the CLI interface.
"""

from .logs import tail_logs

__all__ = ["tail_logs"]
