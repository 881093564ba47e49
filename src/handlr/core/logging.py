"""
Logging and debug output for handlr.
Debug messages go to stderr, gated by the debug level held in GlobalConfig.

Levels used across the package:
    1: resolution decisions, recovered I/O failures
    2: each step of the precedence chain, selector runs
    3: per-file detail while scanning desktop entries
    4: as 3, plus tracebacks for logged exceptions

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

from handlr.core.global_config import GlobalConfig


def debug_print(msg, level=1, exc=None):
    """
    Print msg to stderr if the current debug level is >= level.

    Args:
        msg: Message to print
        level: Debug level threshold
        exc: Exception being handled; its traceback is printed at debug level 4
    """
    GlobalConfig.debug_print(msg, level=level, exc=exc)
