"""
Shared fixtures for the handlr tests.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import os
import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

import pytest

from handlr.core.global_config import GlobalConfig


class Sandbox:
    """Temporary XDG data and config directories."""

    def __init__(self, root):
        self.root = str(root)
        self.data_dir = os.path.join(self.root, "data")
        self.apps_dir = os.path.join(self.data_dir, "applications")
        self.config_home = os.path.join(self.root, "config")
        self.mimeapps_path = os.path.join(self.config_home, "mimeapps.list")
        self.config_path = os.path.join(self.config_home, "handlr", "handlr.toml")
        os.makedirs(self.apps_dir)
        os.makedirs(self.config_home)

    def desktop(self, file_name, name=None, exec_line=None, mimes=(), categories=(), terminal=False,
                apps_dir=None):
        """Write a desktop entry and return its path."""
        lines = [
            "[Desktop Entry]",
            "Type=Application",
            f"Name={name or file_name.replace('.desktop', '').title()}",
            f"Exec={exec_line or file_name.replace('.desktop', '') + ' %U'}",
            f"Terminal={'true' if terminal else 'false'}",
        ]
        if mimes:
            lines.append("MimeType=" + ";".join(mimes) + ";")
        if categories:
            lines.append("Categories=" + ";".join(categories) + ";")
        path = os.path.join(apps_dir or self.apps_dir, file_name)
        with open(path, "w", encoding="utf-8") as f:
            f.write("\n".join(lines) + "\n")
        return path

    def write_mimeapps(self, text):
        with open(self.mimeapps_path, "w", encoding="utf-8") as f:
            f.write(text)

    def read_mimeapps(self):
        with open(self.mimeapps_path, encoding="utf-8") as f:
            return f.read()


@pytest.fixture
def sandbox(tmp_path):
    box = Sandbox(tmp_path)
    GlobalConfig.set("data_dirs", [box.data_dir])
    GlobalConfig.set("config_home", box.config_home)
    # Allow debug level to be set via environment variable for tests
    debug_level = os.environ.get('HANDLR_DEBUG_LEVEL')
    if debug_level is not None:
        GlobalConfig.set_debug_level(int(debug_level))
    yield box
    GlobalConfig.reset()


class RecordingLauncher:
    """Launcher stand-in that records what would be executed."""

    def __init__(self):
        self.calls = []

    def exec(self, apps_config, entry, mode, args, selector="", use_selector=False):
        self.calls.append((entry, mode, list(args)))


@pytest.fixture
def launcher():
    return RecordingLauncher()
