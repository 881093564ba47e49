"""
Interactive selection for handlr.
Asks an external menu program (rofi, dmenu, fzf, ...) to pick one
handler when several are tied.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import subprocess
from typing import Iterable

from handlr.core.errors import Cancelled, SelectorError
from handlr.core.logging import debug_print
from handlr.core.utils import split_command


def select(selector: str, options: Iterable[str]) -> str:
    """
    Run the selector command and return the option the user picked.

    The options are written to the selector's standard input, one per
    line. The call blocks until the selector exits.

    Args:
        selector: Command line of the selector
        options: Candidate names

    Returns:
        The selector's output with trailing whitespace removed

    Raises:
        BadCmd: If the selector command cannot be split
        SelectorError: If the selector cannot be started
        Cancelled: If the selector printed nothing
    """
    cmd = split_command(selector)
    payload = "\n".join(options).encode()
    debug_print(f"select: running {cmd}", level=2)

    try:
        process = subprocess.Popen(cmd, stdin=subprocess.PIPE, stdout=subprocess.PIPE)
    except OSError as e:
        raise SelectorError(selector) from e

    with process:
        # communicate() tolerates a selector that exits before reading all options
        stdout, _ = process.communicate(payload)
    output = stdout.decode(errors='replace').rstrip()

    if not output:
        raise Cancelled()
    return output
