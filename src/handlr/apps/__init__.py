"""
Association stores for handlr: the system-wide index of installed desktop
entries and the user's mimeapps.list.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

from .mime_apps import DesktopList, MimeApps
from .system_apps import SystemApps

__all__ = ['DesktopList', 'MimeApps', 'SystemApps']
