"""
Unit tests for the user association file.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import os
import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

import pytest

import handlr.apps.mime_apps as mime_apps_module
from handlr.apps.mime_apps import (DesktopList, MimeApps, decode_associations,
                                   encode_associations)
from handlr.core.errors import Cancelled, NotFound, StorageError
from handlr.core.mime import MimeType
from handlr.handlers.desktop_handler import DesktopHandler

SAMPLE = """\
[Added Associations]
text/html=firefox.desktop;

[Default Applications]
video/*=mpv.desktop;vlc.desktop;
x-scheme-handler/https=firefox.desktop;
"""


@pytest.fixture
def apps(sandbox):
    for name in ("mpv.desktop", "vlc.desktop", "firefox.desktop", "brave.desktop"):
        sandbox.desktop(name)
    return sandbox


def handler(name):
    return DesktopHandler.assume_valid(name)


def test_decode_skips_comments_and_blanks():
    lines = ["# comment", "", "[Default Applications]", " video/mp4 = mpv.desktop; "]
    assert decode_associations(lines) == [("Default Applications", "video/mp4", "mpv.desktop;")]


@pytest.mark.parametrize("lines", [
    ["video/mp4=mpv.desktop;"],
    ["[Default Applications]", "no equals sign"],
])
def test_decode_malformed(lines):
    with pytest.raises(ValueError):
        decode_associations(lines)


def test_encode_groups_sections():
    text = encode_associations([
        ("Default Applications", "video/mp4", "mpv.desktop;"),
        ("Added Associations", "text/html", "firefox.desktop;"),
        ("Default Applications", "video/webm", "brave.desktop;"),
    ])
    assert text == ("[Default Applications]\nvideo/mp4=mpv.desktop;\nvideo/webm=brave.desktop;\n"
                    "\n[Added Associations]\ntext/html=firefox.desktop;\n")


def test_desktop_list(apps):
    handlers = DesktopList.from_str("mpv.desktop;missing.desktop;vlc.desktop;mpv.desktop;")
    assert handlers == [handler("mpv.desktop"), handler("vlc.desktop")]
    assert handlers.front() == handler("mpv.desktop")
    assert str(handlers) == "mpv.desktop;vlc.desktop;"
    assert DesktopList().front() is None


def test_read_creates_missing_file(apps):
    mime_apps = MimeApps.read()
    assert os.path.isfile(apps.mimeapps_path)
    assert mime_apps.default_apps == {}
    assert mime_apps.added_associations == {}


def test_round_trip(apps):
    apps.write_mimeapps(SAMPLE)
    MimeApps.read().save()
    assert apps.read_mimeapps() == SAMPLE


def test_read_drops_unknown_handlers_and_prunes(apps):
    apps.write_mimeapps(
        "[Default Applications]\n"
        "video/mp4=gone.desktop;\n"
        "video/webm=gone.desktop;brave.desktop;brave.desktop;\n"
        "not-a-mime=mpv.desktop;\n"
        "\n[Some Other Section]\nvideo/mp4=vlc.desktop;\n"
    )
    mime_apps = MimeApps.read()
    assert mime_apps.default_apps == {MimeType("video/webm"): [handler("brave.desktop")]}
    mime_apps.save()
    assert apps.read_mimeapps() == "[Default Applications]\nvideo/webm=brave.desktop;\n"


def test_read_malformed(apps):
    apps.write_mimeapps("video/mp4=mpv.desktop;\n")
    with pytest.raises(StorageError):
        MimeApps.read()


def test_add_set_unset(apps):
    mime = MimeType("video/mp4")
    mime_apps = MimeApps()
    mime_apps.add_handler(mime, handler("mpv.desktop"))
    mime_apps.add_handler(mime, handler("vlc.desktop"))
    assert mime_apps.default_apps[mime] == [handler("mpv.desktop"), handler("vlc.desktop")]

    mime_apps.set_handler(mime, handler("brave.desktop"))
    assert mime_apps.default_apps[mime] == [handler("brave.desktop")]

    assert mime_apps.unset_handler(mime) == [handler("brave.desktop")]
    assert mime not in mime_apps.default_apps
    assert mime_apps.unset_handler(mime) is None


def test_remove_handler(apps):
    mime = MimeType("video/mp4")
    mime_apps = MimeApps(default_apps={mime: DesktopList([handler("mpv.desktop"), handler("vlc.desktop")])})
    assert mime_apps.remove_handler(mime, handler("mpv.desktop")) == handler("mpv.desktop")
    assert mime_apps.default_apps[mime] == [handler("vlc.desktop")]
    assert mime_apps.remove_handler(mime, handler("mpv.desktop")) is None


def test_remove_from_missing_mime_is_pruned_on_read(apps):
    mime = MimeType("text/plain")
    mime_apps = MimeApps.read()
    assert mime_apps.remove_handler(mime, handler("mpv.desktop")) is None
    assert mime_apps.default_apps[mime] == []
    mime_apps.save()
    assert MimeApps.read().default_apps == {}


def test_exact_beats_wildcard(apps):
    mime_apps = MimeApps(default_apps={
        MimeType("video/*"): DesktopList([handler("mpv.desktop")]),
        MimeType("video/webm"): DesktopList([handler("brave.desktop")]),
    })
    assert mime_apps.get_handler_from_user(MimeType("video/webm")) == handler("brave.desktop")
    assert mime_apps.get_handler_from_user(MimeType("video/mp4")) == handler("mpv.desktop")
    with pytest.raises(NotFound):
        mime_apps.get_handler_from_user(MimeType("audio/mp3"))


def test_longest_wildcard_wins(apps):
    mime_apps = MimeApps(default_apps={
        MimeType("*/*"): DesktopList([handler("vlc.desktop")]),
        MimeType("video/*"): DesktopList([handler("mpv.desktop")]),
        MimeType("video/x-*"): DesktopList([handler("brave.desktop")]),
    })
    assert mime_apps.get_handler_from_user(MimeType("video/x-matroska")) == handler("brave.desktop")
    assert mime_apps.get_handler_from_user(MimeType("video/mp4")) == handler("mpv.desktop")
    assert mime_apps.get_handler_from_user(MimeType("text/plain")) == handler("vlc.desktop")


def test_wildcard_ties_are_lexicographic(apps):
    mime_apps = MimeApps(default_apps={
        MimeType("video/m*"): DesktopList([handler("vlc.desktop")]),
        MimeType("video/*4"): DesktopList([handler("mpv.desktop")]),
    })
    # '*' sorts before 'm'
    assert mime_apps.get_handler_from_user(MimeType("video/mp4")) == handler("mpv.desktop")


def test_empty_exact_list_falls_back_to_wildcard(apps):
    mime_apps = MimeApps(default_apps={
        MimeType("video/mp4"): DesktopList(),
        MimeType("video/*"): DesktopList([handler("mpv.desktop")]),
    })
    assert mime_apps.get_handler_from_user(MimeType("video/mp4")) == handler("mpv.desktop")


def test_selector_picks_by_name(apps, monkeypatch):
    apps.desktop("mpv.desktop", name="mpv Media Player")
    apps.desktop("vlc.desktop", name="VLC media player")
    seen = []

    def fake_select(selector, options):
        seen.append((selector, list(options)))
        return "VLC media player"

    monkeypatch.setattr(mime_apps_module, "select", fake_select)
    mime = MimeType("video/mp4")
    mime_apps = MimeApps(default_apps={mime: DesktopList([handler("mpv.desktop"), handler("vlc.desktop")])})

    assert mime_apps.get_handler_from_user(mime, "fzf", use_selector=True) == handler("vlc.desktop")
    assert seen == [("fzf", ["mpv Media Player", "VLC media player"])]
    # Without the flag the front of the list is used
    assert mime_apps.get_handler_from_user(mime, "fzf") == handler("mpv.desktop")


def test_selector_not_used_for_single_candidate(apps, monkeypatch):
    def fail_select(selector, options):
        raise AssertionError("selector should not run")

    monkeypatch.setattr(mime_apps_module, "select", fail_select)
    mime = MimeType("video/mp4")
    mime_apps = MimeApps(default_apps={mime: DesktopList([handler("mpv.desktop")])})
    assert mime_apps.get_handler_from_user(mime, "fzf", use_selector=True) == handler("mpv.desktop")


def test_selector_cancel_and_unknown_choice(apps, monkeypatch):
    mime = MimeType("video/mp4")
    mime_apps = MimeApps(default_apps={mime: DesktopList([handler("mpv.desktop"), handler("vlc.desktop")])})

    def cancel(selector, options):
        raise Cancelled()

    monkeypatch.setattr(mime_apps_module, "select", cancel)
    with pytest.raises(Cancelled):
        mime_apps.get_handler_from_user(mime, "fzf", use_selector=True)

    monkeypatch.setattr(mime_apps_module, "select", lambda selector, options: "Something Else")
    with pytest.raises(NotFound):
        mime_apps.get_handler_from_user(mime, "fzf", use_selector=True)


def test_save_writes_through_symlink(apps, tmp_path):
    dotfiles = tmp_path / "dotfiles"
    dotfiles.mkdir()
    real = dotfiles / "mimeapps.list"
    real.write_text("")
    os.symlink(str(real), apps.mimeapps_path)

    mime_apps = MimeApps.read()
    mime_apps.set_handler(MimeType("video/mp4"), handler("mpv.desktop"))
    mime_apps.save()

    assert os.path.islink(apps.mimeapps_path)
    assert real.read_text() == "[Default Applications]\nvideo/mp4=mpv.desktop;\n"


def test_save_keeps_permissions(apps):
    apps.write_mimeapps(SAMPLE)
    os.chmod(apps.mimeapps_path, 0o640)
    MimeApps.read().save()
    assert os.stat(apps.mimeapps_path).st_mode & 0o777 == 0o640
    assert apps.read_mimeapps() == SAMPLE


def test_save_new_file_is_readable(apps):
    mime_apps = MimeApps(default_apps={MimeType("video/mp4"): DesktopList([handler("mpv.desktop")])})
    mime_apps.save(apps.mimeapps_path)
    assert os.stat(apps.mimeapps_path).st_mode & 0o777 == 0o644
