"""Line-oriented codec for ``vars.properties`` files.

Format: one ``key=value`` entry per line, keys sorted, UTF-8 text. On read,
blank lines and lines starting with ``#`` are ignored, as are lines without
an ``=``. Newline and carriage-return characters in values are stored as the
two-character sequences ``\\n`` and ``\\r``.

Known limitation: a value that already contains a literal backslash followed
by ``n`` or ``r`` does not survive a round trip, because unescaping cannot
tell it apart from an escaped line break. The format is kept as is so that
existing files stay readable.
"""
from __future__ import annotations
from typing import Dict, Iterable, Mapping, Protocol


class Serializer(Protocol):
    """Serialize/deserialize a mapping to the bytes stored on disk."""

    def dump(self, value: Mapping[str, str]) -> bytes: ...

    def load(self, data: bytes) -> Dict[str, str]: ...


def escape(value: str) -> str:
    return value.replace("\n", "\\n").replace("\r", "\\r")


def unescape(value: str) -> str:
    return value.replace("\\n", "\n").replace("\\r", "\r")


def parse_lines(lines: Iterable[str]) -> Dict[str, str]:
    """Build a mapping from property lines; later duplicates win."""
    data: Dict[str, str] = {}
    for raw in lines:
        line = raw.rstrip("\r\n")
        if line.startswith("#") or not line.strip():
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        data[key.strip()] = unescape(value.strip())
    return data


def loads(text: str) -> Dict[str, str]:
    return parse_lines(text.split("\n"))


def dumps(data: Mapping[str, str]) -> str:
    return "".join(f"{key}={escape(data[key])}\n" for key in sorted(data))


class PropertiesSerializer:
    """`Serializer` for the properties format (UTF-8)."""

    extension = ".properties"

    def dump(self, value: Mapping[str, str]) -> bytes:
        return dumps(value).encode("utf-8")

    def load(self, data: bytes) -> Dict[str, str]:
        return loads(data.decode("utf-8"))
