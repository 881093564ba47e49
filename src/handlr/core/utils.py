"""
Utility functions for handlr.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import os
import re
import shlex
import subprocess
from typing import List

from handlr.core.errors import BadCmd
from handlr.core.global_config import GlobalConfig


def wildcard_regex(pattern: str):
    """
    Compile a glob pattern where `*` is the only wildcard token.

    Every other character, including `?` and brackets, matches literally,
    and `*` may span the `/` separating type and subtype.
    """
    parts = (re.escape(part) for part in pattern.split('*'))
    return re.compile('.*'.join(parts), re.DOTALL)


def wildcard_match(pattern: str, text: str) -> bool:
    """
    Check whether the whole of text matches a `*` glob pattern.

    Args:
        pattern: Glob pattern, e.g. 'video/*'
        text: String to test

    Returns:
        True if the pattern matches text entirely
    """
    return wildcard_regex(pattern).fullmatch(text) is not None


def split_command(cmd: str) -> List[str]:
    """
    Split a command line the way a POSIX shell would.

    Raises:
        BadCmd: If the string has unbalanced quotes or contains no words
    """
    try:
        words = shlex.split(cmd)
    except ValueError as e:
        raise BadCmd(cmd) from e
    if not words:
        raise BadCmd(cmd)
    return words


def applications_dirs() -> List[str]:
    """
    Directories holding desktop entries, most important first.
    """
    return [os.path.join(d, 'applications') for d in GlobalConfig.get_data_dirs()]


def ensure_dir_exists(path: str) -> None:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path
    """
    if path and not os.path.exists(path):
        os.makedirs(path, exist_ok=True)


def notify(title: str, msg: str) -> None:
    """
    Show a desktop notification through notify-send.

    Raises:
        OSError: If notify-send cannot be started
        subprocess.CalledProcessError: If notify-send fails
    """
    from handlr.core.logging import debug_print
    debug_print(f"notify: {title}: {msg}", level=2)
    subprocess.run(['notify-send', '-t', '10000', title, msg], check=True)
