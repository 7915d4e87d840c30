"""Deck metadata helpers: cover discovery, field cleaning and JSON output."""

from __future__ import annotations

import json
import os
import zipfile
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import PurePath, PurePosixPath
from typing import Any

SUPPORTED_IMAGE_EXTENSIONS = frozenset({"png", "jpg", "jpeg", "webp", "gif"})
DROPPED_COVER_ALT = "Deck cover image"
DECK_ENTRY_NAME = "deck.json"


@dataclass(frozen=True)
class CoverChoice:
    """Where a deck's cover comes from, in order of preference."""

    model_path: str | None = None
    raw_json_path: str | None = None
    discovered_path: str | None = None

    @property
    def active(self) -> str | None:
        """The cover path to show: model field, then schema text, then package scan."""
        for path in (self.model_path, self.raw_json_path, self.discovered_path):
            if path is not None:
                return path
        return None

    @property
    def can_adopt(self) -> bool:
        """True when the shown cover was only found inside the package, not set on the deck."""
        return (
            self.model_path is None
            and self.discovered_path is not None
            and self.active == self.discovered_path
        )


def is_supported_image_extension(ext: str) -> bool:
    """True for the lower-case extensions accepted as a cover image."""
    return ext in SUPPORTED_IMAGE_EXTENSIONS


def _extension(name: str | os.PathLike[str], *, posix: bool = False) -> str:
    path = PurePosixPath(name) if posix else PurePath(name)
    return path.suffix[1:].lower()


def root_media_src(raw_json: str, key: str) -> str | None:
    """The ``src`` of the media object stored under ``key`` at the root of a JSON text."""
    try:
        value = json.loads(raw_json)
    except (ValueError, TypeError):
        return None
    if not isinstance(value, dict):
        return None
    media = value.get(key)
    if not isinstance(media, dict):
        return None
    src = media.get("src")
    if not isinstance(src, str) or not src.strip():
        return None
    return src


def discover_cover_media(deck_path: str | os.PathLike[str] | None) -> str | None:
    """Find the most likely cover image inside a zipped deck package."""
    if deck_path is None:
        return None
    text_path = os.fspath(deck_path)
    if text_path.endswith(".json"):
        return None
    try:
        with zipfile.ZipFile(text_path) as archive:
            names = archive.namelist()
    except (OSError, zipfile.BadZipFile, ValueError):
        return None

    images = []
    for name in names:
        lower = name.lower()
        if lower == DECK_ENTRY_NAME or lower.endswith("/"):
            continue
        if is_supported_image_extension(_extension(lower, posix=True)):
            images.append(name)

    def priority(name: str) -> int:
        lower = name.lower()
        if "cover" in lower:
            return 0
        if "thumbnail" in lower or "thumb" in lower:
            return 1
        if "/" not in lower:
            return 2
        return 3

    images.sort(key=priority)
    return images[0] if images else None


def resolve_cover(
    deck: Mapping[str, Any] | None,
    raw_json: str,
    deck_path: str | os.PathLike[str] | None,
) -> CoverChoice:
    """Work out the deck cover from the model, the schema text and the package contents."""
    model_path = None
    if deck is not None:
        cover = deck.get("cover")
        if cover is not None:
            model_path = cover.get("src", "")
    raw_json_path = root_media_src(raw_json, "cover")
    discovered = None
    if model_path is None and raw_json_path is None:
        discovered = discover_cover_media(deck_path)
    return CoverChoice(model_path, raw_json_path, discovered)


def cover_media(src: str, alt: str | None = None) -> dict[str, Any]:
    """A media record for a deck cover image."""
    return {
        "id": None,
        "src": src,
        "type": "image",
        "role": "cover",
        "alt": alt,
        "description": None,
    }


def clean_optional(text: str) -> str | None:
    """Strip ``text``; blank text becomes None."""
    stripped = text.strip()
    return stripped or None


def parse_tags(text: str) -> list[str]:
    """Split a comma-separated tag list, dropping blanks."""
    return [tag for tag in (part.strip() for part in text.split(",")) if tag]


def deck_to_json(deck: Any) -> str:
    """Pretty-printed JSON text of a deck."""
    return json.dumps(deck, indent=2, ensure_ascii=False)


def dropped_cover_path(paths: Iterable[str | os.PathLike[str] | None]) -> str | None:
    """The first dropped file that is a supported image, as a string path."""
    for path in paths:
        if path is None:
            continue
        if is_supported_image_extension(_extension(path)):
            return os.fspath(path)
    return None