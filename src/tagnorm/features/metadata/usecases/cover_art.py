"""src/tagnorm/features/metadata/usecases/cover_art.py
Where: Metadata feature usecases layer.
What: Pick the best embedded cover image per dialect, including deprecated storage forms.
Why: Files often embed several pictures; the front cover should win when it decodes.
"""

from __future__ import annotations

import base64
import binascii
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Final

from mutagen._vorbis import VCommentDict
from mutagen.apev2 import BINARY, APEv2
from mutagen.flac import Picture
from mutagen.flac import error as FLACError
from mutagen.id3 import ID3, PictureType
from mutagen.mp4 import MP4Tags
from PIL.Image import Image

from ..adapters.image_decoder import PillowImageDecoder
from ..domain.diagnostics import DiagnosticEvent, Diagnostics
from .ports import ImageDecoderPort

__all__ = [
    "EmbeddedPicture",
    "PREFERRED_PICTURE_TYPES",
    "import_cover_image_from_ape_tag",
    "import_cover_image_from_id3v2_tag",
    "import_cover_image_from_mp4_tag",
    "import_cover_image_from_vorbis_comment_picture_list",
    "import_cover_image_from_vorbis_comment_tag",
    "select_cover_image",
]

PREFERRED_PICTURE_TYPES: Final[tuple[PictureType, ...]] = (
    PictureType.COVER_FRONT,
    PictureType.MEDIA,
    PictureType.ILLUSTRATION,
    PictureType.OTHER,
)

APE_COVER_ART_FRONT: Final[str] = "COVER ART (FRONT)"
VORBIS_PICTURE_FIELD: Final[str] = "METADATA_BLOCK_PICTURE"
VORBIS_LEGACY_COVERART_FIELD: Final[str] = "COVERART"
MP4_COVER_ATOM: Final[str] = "covr"


@dataclass(frozen=True, slots=True)
class EmbeddedPicture:
    """Picture bytes plus the purpose the tag assigns to them."""

    picture_type: int
    data: bytes
    mime: str = ""
    description: str = ""


def _decode(
    picture: EmbeddedPicture,
    decoder: ImageDecoderPort,
    diagnostics: Diagnostics,
) -> Image | None:
    image = decoder.decode(picture.data)
    if image is None:
        _ = diagnostics.emit(
            DiagnosticEvent.COVER_ART_DECODE_FAILED,
            f"Failed to load image from picture of type {picture.picture_type}",
            level=logging.DEBUG,
            picture_type=picture.picture_type,
            mime=picture.mime,
        )
    return image


def select_cover_image(
    pictures: Sequence[EmbeddedPicture],
    decoder: ImageDecoderPort | None = None,
    diagnostics: Diagnostics | None = None,
) -> Image | None:
    """Return the first decodable picture of the most preferred purpose.

    Purposes are tried in ``PREFERRED_PICTURE_TYPES`` order. When none of
    them yields an image, the first decodable picture of any purpose wins.
    Never raises for undecodable data.
    """
    if not pictures:
        return None
    decoder = decoder or PillowImageDecoder()
    sink = Diagnostics.ensure(diagnostics)
    attempted: dict[int, Image | None] = {}

    def decode_at(index: int) -> Image | None:
        if index not in attempted:
            attempted[index] = _decode(pictures[index], decoder, sink)
        return attempted[index]

    for picture_type in PREFERRED_PICTURE_TYPES:
        for index, picture in enumerate(pictures):
            if picture.picture_type == picture_type:
                image = decode_at(index)
                if image is not None:
                    return image

    for index in range(len(pictures)):
        image = decode_at(index)
        if image is not None:
            return image
    return None


def _from_flac_pictures(pictures: Iterable[Picture]) -> list[EmbeddedPicture]:
    return [
        EmbeddedPicture(
            picture_type=int(picture.type),
            data=bytes(picture.data),
            mime=picture.mime,
            description=picture.desc,
        )
        for picture in pictures
    ]


def _b64decode(text: str) -> bytes | None:
    try:
        return base64.b64decode("".join(text.split()), validate=True)
    except (binascii.Error, ValueError):
        return None


def import_cover_image_from_id3v2_tag(
    tag: ID3,
    decoder: ImageDecoderPort | None = None,
    diagnostics: Diagnostics | None = None,
) -> Image | None:
    """Select a cover image from the ``APIC`` frames of an ID3v2 tag."""
    pictures = [
        EmbeddedPicture(
            picture_type=int(frame.type),
            data=bytes(frame.data),
            mime=frame.mime,
            description=frame.desc,
        )
        for frame in tag.getall("APIC")
    ]
    return select_cover_image(pictures, decoder, diagnostics)


def import_cover_image_from_vorbis_comment_picture_list(
    pictures: Iterable[Picture],
    decoder: ImageDecoderPort | None = None,
    diagnostics: Diagnostics | None = None,
) -> Image | None:
    """Select a cover image from FLAC picture blocks."""
    return select_cover_image(_from_flac_pictures(pictures), decoder, diagnostics)


def import_cover_image_from_vorbis_comment_tag(
    tag: VCommentDict,
    pictures: Iterable[Picture] = (),
    decoder: ImageDecoderPort | None = None,
    diagnostics: Diagnostics | None = None,
) -> Image | None:
    """Select a cover image for a Vorbis comment tag.

    Picture blocks are tried first, then base64 ``METADATA_BLOCK_PICTURE``
    fields, then the deprecated base64 ``COVERART`` field.
    """
    decoder = decoder or PillowImageDecoder()
    sink = Diagnostics.ensure(diagnostics)

    image = import_cover_image_from_vorbis_comment_picture_list(pictures, decoder, sink)
    if image is not None:
        return image

    if VORBIS_PICTURE_FIELD in tag:
        _ = sink.emit(
            DiagnosticEvent.COVER_ART_LEGACY_FIELD,
            f"Reading cover art from Vorbis comment field {VORBIS_PICTURE_FIELD}",
            level=logging.DEBUG,
            field=VORBIS_PICTURE_FIELD,
        )
        legacy_pictures: list[Picture] = []
        for encoded in tag[VORBIS_PICTURE_FIELD]:
            raw = _b64decode(encoded)
            if raw is None:
                continue
            try:
                legacy_pictures.append(Picture(raw))
            except (FLACError, ValueError):
                _ = sink.emit(
                    DiagnosticEvent.COVER_ART_DECODE_FAILED,
                    "Failed to parse picture from Vorbis comment metadata block",
                    level=logging.DEBUG,
                    field=VORBIS_PICTURE_FIELD,
                )
        image = select_cover_image(_from_flac_pictures(legacy_pictures), decoder, sink)
        if image is not None:
            return image

    if VORBIS_LEGACY_COVERART_FIELD in tag:
        _ = sink.emit(
            DiagnosticEvent.COVER_ART_LEGACY_FIELD,
            f"Reading cover art from deprecated Vorbis comment field {VORBIS_LEGACY_COVERART_FIELD}",
            level=logging.WARNING,
            field=VORBIS_LEGACY_COVERART_FIELD,
        )
        for encoded in tag[VORBIS_LEGACY_COVERART_FIELD]:
            raw = _b64decode(encoded)
            if raw is None:
                continue
            image = decoder.decode(raw)
            if image is not None:
                return image
    return None


def import_cover_image_from_ape_tag(
    tag: APEv2,
    decoder: ImageDecoderPort | None = None,
    diagnostics: Diagnostics | None = None,
) -> Image | None:
    """Decode the ``COVER ART (FRONT)`` item: a file name, NUL, then image bytes."""
    item = tag.get(APE_COVER_ART_FRONT)
    if item is None or item.kind != BINARY:
        return None
    _, separator, data = bytes(item.value).partition(b"\x00")
    if not separator:
        return None
    picture = EmbeddedPicture(picture_type=PictureType.COVER_FRONT, data=data)
    return _decode(picture, decoder or PillowImageDecoder(), Diagnostics.ensure(diagnostics))


def import_cover_image_from_mp4_tag(
    tag: MP4Tags,
    decoder: ImageDecoderPort | None = None,
    diagnostics: Diagnostics | None = None,
) -> Image | None:
    """Return the first decodable ``covr`` image; MP4 has no picture purposes."""
    decoder = decoder or PillowImageDecoder()
    sink = Diagnostics.ensure(diagnostics)
    for cover in tag.get(MP4_COVER_ATOM, []):
        image = _decode(EmbeddedPicture(PictureType.OTHER, bytes(cover)), decoder, sink)
        if image is not None:
            return image
    return None
