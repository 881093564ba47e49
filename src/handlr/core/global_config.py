"""
global_config.py
Central configuration for handlr: debug level and the locations of the
XDG directories and files the resolver reads and writes.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import os
import sys


class GlobalConfig:
    _defaults = {
        "debug_level": 0,
        # None means use the XDG base directories
        "data_dirs": None,
        "config_home": None,
        "mimeapps_path": None,
        "config_path": None,
    }
    _settings = _defaults.copy()

    @classmethod
    def set(cls, key, value):
        cls._settings[key] = value

    @classmethod
    def get(cls, key):
        return cls._settings.get(key, cls._defaults.get(key))

    @classmethod
    def reset(cls, key=None):
        if key is None:
            cls._settings = cls._defaults.copy()
        else:
            if key in cls._defaults:
                cls._settings[key] = cls._defaults[key]
            else:
                cls._settings.pop(key, None)

    @classmethod
    def set_debug_level(cls, value: int):
        cls.set("debug_level", int(value))

    @classmethod
    def get_debug_level(cls) -> int:
        return cls.get("debug_level")

    @classmethod
    def debug_print(cls, msg, level=1, exc=None):
        debug_level = cls.get_debug_level()
        if debug_level >= level:
            print(f"[HANDLR-DEBUG-{level}] {msg}", file=sys.stderr)
            if exc is not None and debug_level >= 4:
                import traceback
                print(traceback.format_exc(), file=sys.stderr)

    @classmethod
    def get_data_dirs(cls):
        """
        Data directories searched for `applications/`, most important first.
        """
        dirs = cls.get("data_dirs")
        if dirs is not None:
            return [str(d) for d in dirs]
        import xdg.BaseDirectory
        return [xdg.BaseDirectory.xdg_data_home] + [
            d for d in xdg.BaseDirectory.xdg_data_dirs
            if d != xdg.BaseDirectory.xdg_data_home
        ]

    @classmethod
    def get_config_home(cls) -> str:
        home = cls.get("config_home")
        if home is not None:
            return str(home)
        import xdg.BaseDirectory
        return xdg.BaseDirectory.xdg_config_home

    @classmethod
    def get_mimeapps_path(cls) -> str:
        path = cls.get("mimeapps_path")
        if path is not None:
            return str(path)
        return os.path.join(cls.get_config_home(), "mimeapps.list")

    @classmethod
    def get_config_path(cls) -> str:
        path = cls.get("config_path")
        if path is not None:
            return str(path)
        return os.path.join(cls.get_config_home(), "handlr", "handlr.toml")
