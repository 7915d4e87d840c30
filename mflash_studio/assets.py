"""Asset references attached to deck cards: classification, filtering and summaries."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, MutableMapping
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath
from typing import Any

TILE_WIDTH = 180.0
TILE_HEIGHT = 178.0
TILE_GAP_X = 8.0
TILE_GAP_Y = 8.0
THUMB_SIZE = 82.0

UNTITLED = "(Untitled)"
ALL_FILTER = "all"


class AssetCategory(Enum):
    """Broad category of an attached media file."""

    IMAGE = "image"
    GIF = "gif"
    SVG = "svg"
    AUDIO = "audio"
    VIDEO = "video"
    FONT = "font"
    DATA = "data"
    FILE = "file"
    OTHER = "other"


_LABELS = {
    AssetCategory.IMAGE: "Image",
    AssetCategory.GIF: "GIF",
    AssetCategory.SVG: "SVG",
    AssetCategory.AUDIO: "Audio",
    AssetCategory.VIDEO: "Video",
    AssetCategory.FONT: "Font",
    AssetCategory.DATA: "Data",
    AssetCategory.FILE: "File",
}

_ICONS = {
    AssetCategory.IMAGE: "🖼",
    AssetCategory.GIF: "🎞",
    AssetCategory.SVG: "◇",
    AssetCategory.AUDIO: "♪",
    AssetCategory.VIDEO: "▶",
    AssetCategory.FONT: "Aa",
    AssetCategory.DATA: "{}",
    AssetCategory.FILE: "□",
    AssetCategory.OTHER: "?",
}

_FILTER_KEYS = {
    AssetCategory.IMAGE: "images",
    AssetCategory.GIF: "gifs",
    AssetCategory.SVG: "svgs",
    AssetCategory.AUDIO: "audio",
    AssetCategory.VIDEO: "video",
    AssetCategory.FONT: "fonts",
    AssetCategory.DATA: "data",
    AssetCategory.FILE: "files",
    AssetCategory.OTHER: "other",
}

_EXTENSIONS = {
    **dict.fromkeys(("png", "jpg", "jpeg", "webp", "bmp", "tiff", "avif"), AssetCategory.IMAGE),
    "gif": AssetCategory.GIF,
    "svg": AssetCategory.SVG,
    **dict.fromkeys(("mp3", "wav", "ogg", "flac", "m4a", "aac"), AssetCategory.AUDIO),
    **dict.fromkeys(("mp4", "webm", "mov", "mkv", "avi"), AssetCategory.VIDEO),
    **dict.fromkeys(("ttf", "otf", "woff", "woff2"), AssetCategory.FONT),
    **dict.fromkeys(("json", "toml", "yaml", "yml", "xml"), AssetCategory.DATA),
    "": AssetCategory.FILE,
}

FILTER_OPTIONS = (
    ("all", "All"),
    ("images", "Images"),
    ("gifs", "GIFs"),
    ("svgs", "SVGs"),
    ("audio", "Audio"),
    ("video", "Video"),
    ("fonts", "Fonts"),
    ("data", "Data"),
    ("files", "Files"),
    ("other", "Other"),
)


@dataclass(frozen=True)
class AssetKind:
    """The kind of an asset; ``extension`` is kept only for unrecognised files."""

    category: AssetCategory
    extension: str = ""

    def label(self) -> str:
        if self.category is AssetCategory.OTHER:
            return self.extension.upper()
        return _LABELS[self.category]

    def icon(self) -> str:
        return _ICONS[self.category]

    def can_thumbnail(self) -> bool:
        return self.category in (AssetCategory.IMAGE, AssetCategory.GIF)

    def filter_key(self) -> str:
        return _FILTER_KEYS[self.category]


@dataclass(frozen=True)
class AssetRow:
    """One media reference on one card."""

    card_index: int
    media_index: int
    src: str
    kind: AssetKind
    card_term: str


def classify_asset(src: str) -> AssetKind:
    """Classify a media source path by its file extension."""
    extension = PurePosixPath(src).suffix[1:].lower() if src else ""
    category = _EXTENSIONS.get(extension)
    if category is None:
        return AssetKind(AssetCategory.OTHER, extension)
    return AssetKind(category)


def asset_file_name(src: str) -> str:
    """Return the last path component of ``src``, or ``src`` itself if it has none."""
    name = PurePosixPath(src).name if src else ""
    if name in ("", ".."):
        return src
    return name


def truncate_middle(text: str, max_chars: int) -> str:
    """Shorten ``text`` to ``max_chars`` characters by replacing its middle with '...'."""
    if len(text) <= max_chars:
        return text
    if max_chars <= 3:
        return "..."
    left_count = (max_chars - 3) // 2
    right_count = max_chars - 3 - left_count
    right = text[len(text) - right_count:] if right_count else ""
    return f"{text[:left_count]}...{right}"


def format_card_label(card_index: int, card_term: str) -> str:
    """One-based card number followed by the shortened term."""
    return f"{card_index + 1}: {truncate_middle(card_term, 18)}"


def collect_assets(deck: Mapping[str, Any] | None) -> list[AssetRow]:
    """List every media reference of every card, in card then media order."""
    if deck is None:
        return []
    rows = []
    for card_index, card in enumerate(deck.get("cards") or []):
        term = card.get("term")
        card_term = UNTITLED if term is None else term
        for media_index, media in enumerate(card.get("media") or []):
            src = media.get("src", "")
            rows.append(
                AssetRow(
                    card_index=card_index,
                    media_index=media_index,
                    src=src,
                    kind=classify_asset(src),
                    card_term=card_term,
                )
            )
    return rows


def matches_filter(asset: AssetRow, kind_filter: str) -> bool:
    """True if the asset passes the kind filter ('all' lets everything through)."""
    return kind_filter == ALL_FILTER or asset.kind.filter_key() == kind_filter


def matches_search(asset: AssetRow, query: str) -> bool:
    """Case-insensitive match of the query against path, kind label and card term."""
    needle = query.strip().lower()
    if not needle:
        return True
    return (
        needle in asset.src.lower()
        or needle in asset.kind.label().lower()
        or needle in asset.card_term.lower()
    )


def filter_assets(
    assets: Iterable[AssetRow], kind_filter: str = ALL_FILTER, query: str = ""
) -> list[AssetRow]:
    """Keep the assets that pass both the kind filter and the search query."""
    return [
        asset
        for asset in assets
        if matches_filter(asset, kind_filter) and matches_search(asset, query)
    ]


def summarize_assets(assets: Iterable[AssetRow]) -> dict[str, int]:
    """Count assets per kind label, keyed in sorted label order."""
    counts: dict[str, int] = {}
    for asset in assets:
        label = asset.kind.label()
        counts[label] = counts.get(label, 0) + 1
    return dict(sorted(counts.items()))


def remove_asset_reference(
    deck: MutableMapping[str, Any] | None, card_index: int, media_index: int
) -> bool:
    """Remove one media reference from a card; return whether anything was removed."""
    if deck is None:
        return False
    cards = deck.get("cards") or []
    if not 0 <= card_index < len(cards):
        return False
    media = cards[card_index].get("media") or []
    if not 0 <= media_index < len(media):
        return False
    del media[media_index]
    return True


def reference_count_label(count: int) -> str:
    """Human text for the number of asset references."""
    return f"{count} asset reference{'' if count == 1 else 's'}"