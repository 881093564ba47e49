"""
Unit tests for the index of installed desktop entries.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import io
import os
import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

from handlr.apps.system_apps import SystemApps
from handlr.core.global_config import GlobalConfig
from handlr.core.mime import MimeType
from handlr.handlers.desktop_handler import DesktopHandler


def test_populate(sandbox):
    sandbox.desktop("mpv.desktop", mimes=["video/mp4", "video/webm"])
    sandbox.desktop("zathura.desktop", mimes=["application/pdf"])
    apps = SystemApps.populate()

    assert apps.get_handler(MimeType("application/pdf")) == DesktopHandler("zathura.desktop")
    assert apps.get_handlers(MimeType("video/webm")) == [DesktopHandler("mpv.desktop")]
    assert apps.get_handler(MimeType("text/plain")) is None
    assert apps.get_handlers(MimeType("text/plain")) is None
    assert len(apps) == 3


def test_several_handlers_for_one_mime(sandbox):
    sandbox.desktop("mpv.desktop", mimes=["video/mp4"])
    sandbox.desktop("vlc.desktop", mimes=["video/mp4"])
    handlers = SystemApps.populate().get_handlers(MimeType("video/mp4"))
    assert sorted(handlers) == [DesktopHandler("mpv.desktop"), DesktopHandler("vlc.desktop")]


def test_get_handlers_returns_a_copy(sandbox):
    sandbox.desktop("mpv.desktop", mimes=["video/mp4"])
    apps = SystemApps.populate()
    apps.get_handlers(MimeType("video/mp4")).clear()
    assert apps.get_handler(MimeType("video/mp4")) == DesktopHandler("mpv.desktop")


def test_skips_broken_and_foreign_files(sandbox):
    sandbox.desktop("mpv.desktop", mimes=["video/mp4"])
    with open(os.path.join(sandbox.apps_dir, "broken.desktop"), "w") as f:
        f.write("garbage\n")
    with open(os.path.join(sandbox.apps_dir, "README"), "w") as f:
        f.write("[Desktop Entry]\nExec=readme\nMimeType=text/plain;\n")
    os.makedirs(os.path.join(sandbox.apps_dir, "dir.desktop"))

    names = [name for name, _ in SystemApps.get_entries()]
    assert names == ["mpv.desktop"]


def test_higher_priority_directory_shadows(sandbox, tmp_path):
    user_apps = tmp_path / "user" / "applications"
    user_apps.mkdir(parents=True)
    GlobalConfig.set("data_dirs", [str(tmp_path / "user"), sandbox.data_dir])

    sandbox.desktop("mpv.desktop", name="System mpv", mimes=["video/mp4"])
    sandbox.desktop("mpv.desktop", name="User mpv", mimes=["video/webm"], apps_dir=str(user_apps))

    entries = dict(SystemApps.get_entries())
    assert entries["mpv.desktop"].name == "User mpv"
    apps = SystemApps.populate()
    assert apps.get_handler(MimeType("video/webm")) == DesktopHandler("mpv.desktop")
    assert apps.get_handler(MimeType("video/mp4")) is None


def test_missing_data_dir_is_ignored(sandbox, tmp_path):
    GlobalConfig.set("data_dirs", [str(tmp_path / "nowhere"), sandbox.data_dir])
    sandbox.desktop("mpv.desktop", mimes=["video/mp4"])
    assert len(SystemApps.populate()) == 1


def test_list_handlers(sandbox):
    sandbox.desktop("mpv.desktop", name="mpv Media Player")
    out = io.StringIO()
    SystemApps.list_handlers(out)
    assert out.getvalue() == "mpv.desktop\tmpv Media Player\n"
