"""
MIME type values for handlr.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import mimetypes
import os
import re

from handlr.core.errors import BadMime
from handlr.core.utils import wildcard_match

_TOKEN = r"[a-z0-9!#$&^_.+*-]+"
_MIME_RE = re.compile(rf"^({_TOKEN})/({_TOKEN})$")

DIRECTORY = "inode/directory"
OCTET_STREAM = "application/octet-stream"


class MimeType:
    """
    A normalized `type/subtype` content type.

    Parameters such as `; charset=utf-8` are dropped and the type is
    lower-cased, so equality and hashing are structural. The subtype (or
    the whole string) may contain `*` wildcards.
    """

    __slots__ = ("_essence",)

    def __init__(self, value):
        if isinstance(value, MimeType):
            essence = value._essence
        else:
            essence = str(value).split(';', 1)[0].strip().lower()
            if not _MIME_RE.match(essence):
                raise BadMime(str(value))
        object.__setattr__(self, "_essence", essence)

    def __setattr__(self, key, value):
        raise AttributeError("MimeType is immutable")

    @property
    def type_(self) -> str:
        return self._essence.split('/', 1)[0]

    @property
    def subtype(self) -> str:
        return self._essence.split('/', 1)[1]

    @property
    def is_wildcard(self) -> bool:
        return '*' in self._essence

    def type_wildcard(self) -> "MimeType":
        """The `type/*` MIME covering this type's whole family."""
        return MimeType(f"{self.type_}/*")

    def matches(self, pattern) -> bool:
        """Check whether this MIME is matched by a `*` glob pattern."""
        return wildcard_match(str(pattern), self._essence)

    def __eq__(self, other):
        if isinstance(other, MimeType):
            return self._essence == other._essence
        return NotImplemented

    def __lt__(self, other):
        if isinstance(other, MimeType):
            return self._essence < other._essence
        return NotImplemented

    def __hash__(self):
        return hash(self._essence)

    def __len__(self):
        return len(self._essence)

    def __str__(self):
        return self._essence

    def __repr__(self):
        return f"MimeType('{self._essence}')"

    @classmethod
    def from_scheme(cls, scheme: str) -> "MimeType":
        """MIME used for URLs, e.g. `x-scheme-handler/https`."""
        return cls(f"x-scheme-handler/{scheme}")

    @classmethod
    def from_extension(cls, name: str) -> "MimeType":
        """
        Guess a MIME type from a file name or bare extension such as '.pdf'.

        Raises:
            BadMime: If nothing is registered for the extension
        """
        file_name = name if name.strip('.') and not name.startswith('.') else f"file{name}"
        import xdg.Mime
        mt = xdg.Mime.get_type_by_name(file_name)
        if mt:
            return cls(str(mt))
        guessed, _ = mimetypes.guess_type(file_name, strict=False)
        if guessed:
            return cls(guessed)
        raise BadMime(name)

    @classmethod
    def from_path(cls, path: str) -> "MimeType":
        """
        Detect the MIME type of a local file.

        Directories are `inode/directory`. Otherwise the shared MIME
        database is consulted (file name globs, then content), falling
        back to the name-based guess of the mimetypes module.
        """
        if os.path.isdir(path):
            return cls(DIRECTORY)
        import xdg.Mime
        mt = xdg.Mime.get_type2(path)
        if mt and str(mt) != OCTET_STREAM:
            return cls(str(mt))
        guessed, _ = mimetypes.guess_type(path, strict=False)
        if guessed:
            return cls(guessed)
        return cls(OCTET_STREAM)

    @classmethod
    def parse_user_input(cls, value: str) -> "MimeType":
        """
        Interpret a MIME given on the command line.

        Anything shaped like a file name or extension ('.pdf', 'a.mp4')
        is converted by extension.
        """
        if '/' not in value and '.' in value:
            return cls.from_extension(value)
        return cls(value)
