"""src/tagnorm/features/metadata/adapters/riff_info.py
What: In-memory RIFF ``LIST/INFO`` tag plus load/save against WAV files via mutagen's chunk reader.
Why: mutagen exposes RIFF chunks but no tag object for INFO text fields.
"""

from __future__ import annotations

import struct
from collections.abc import Iterable, Iterator, MutableMapping
from typing import IO, Final, override

from mutagen._iff import is_valid_chunk_id
from mutagen._riff import RiffFile, RiffListChunk

__all__ = ["INFO_LIST_TYPE", "RiffInfoTag"]

INFO_LIST_TYPE: Final[str] = "INFO"
_LIST_CHUNK_ID: Final[str] = "LIST"
_SUBCHUNK_HEADER: Final[struct.Struct] = struct.Struct("<4sI")


def _decode_text(data: bytes) -> str:
    text = data.split(b"\x00", 1)[0]
    try:
        return text.decode("utf-8")
    except UnicodeDecodeError:
        return text.decode("latin-1")


class RiffInfoTag(MutableMapping[str, str]):
    """RIFF INFO text fields keyed by four-character chunk id (``INAM``, ``IART``...)."""

    def __init__(self, items: Iterable[tuple[str, str]] | None = None) -> None:
        self._fields: dict[str, str] = {}
        for key, value in items or ():
            self[key] = value

    @staticmethod
    def _check_key(key: str) -> str:
        if len(key) != 4 or not is_valid_chunk_id(key):
            raise KeyError(f"{key!r} is not a valid RIFF chunk id")
        return key

    @override
    def __getitem__(self, key: str) -> str:
        return self._fields[self._check_key(key)]

    @override
    def __setitem__(self, key: str, value: str) -> None:
        self._fields[self._check_key(key)] = value

    @override
    def __delitem__(self, key: str) -> None:
        del self._fields[self._check_key(key)]

    @override
    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    @override
    def __len__(self) -> int:
        return len(self._fields)

    @override
    def __repr__(self) -> str:
        return f"RiffInfoTag({self._fields!r})"

    @classmethod
    def from_chunk_data(cls, data: bytes) -> RiffInfoTag:
        """Parse the payload of a ``LIST`` chunk whose list type is ``INFO``.

        Truncated or malformed subchunks end parsing; fields read so far are kept.
        """
        tag = cls()
        if data[:4] == INFO_LIST_TYPE.encode("ascii"):
            data = data[4:]
        offset = 0
        while offset + _SUBCHUNK_HEADER.size <= len(data):
            raw_id, size = _SUBCHUNK_HEADER.unpack_from(data, offset)
            offset += _SUBCHUNK_HEADER.size
            if offset + size > len(data):
                break
            try:
                chunk_id = raw_id.decode("ascii")
            except UnicodeDecodeError:
                break
            if is_valid_chunk_id(chunk_id) and len(chunk_id) == 4:
                tag[chunk_id] = _decode_text(data[offset : offset + size])
            offset += size + (size % 2)
        return tag

    def render(self) -> bytes:
        """Render the ``LIST`` payload (list type plus subchunks); empty values are skipped."""
        parts = [INFO_LIST_TYPE.encode("ascii")]
        for key, value in self._fields.items():
            if not value:
                continue
            payload = value.encode("utf-8") + b"\x00"
            parts.append(_SUBCHUNK_HEADER.pack(key.encode("ascii"), len(payload)))
            parts.append(payload)
            if len(payload) % 2:
                parts.append(b"\x00")
        return b"".join(parts)

    @staticmethod
    def _find_info_chunk(riff: RiffFile) -> RiffListChunk | None:
        for chunk in riff.root.subchunks():
            if isinstance(chunk, RiffListChunk) and chunk.name == INFO_LIST_TYPE:
                return chunk
        return None

    @classmethod
    def load(cls, fileobj: IO[bytes]) -> RiffInfoTag | None:
        """Read the INFO list of a RIFF file, ``None`` when the file has none."""
        riff = RiffFile(fileobj)
        chunk = cls._find_info_chunk(riff)
        if chunk is None:
            return None
        return cls.from_chunk_data(chunk.read())

    def save(self, fileobj: IO[bytes]) -> None:
        """Replace the INFO list of a RIFF file opened for reading and writing."""
        riff = RiffFile(fileobj)
        chunk = self._find_info_chunk(riff)
        if chunk is not None:
            chunk.delete()
        if any(self._fields.values()):
            _ = riff.insert_chunk(_LIST_CHUNK_ID, self.render())
