"""
Handlers package for handlr.
Contains the desktop-file and regex handler implementations.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

from .desktop_handler import DesktopHandler
from .regex_handler import RegexApps, RegexHandler

__all__ = ['DesktopHandler', 'RegexHandler', 'RegexApps']
