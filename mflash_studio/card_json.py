"""Card records and their mirror in the deck's raw schema JSON text."""

from __future__ import annotations

import json
import os
import time
from collections.abc import Iterable, Mapping
from datetime import datetime
from enum import Enum
from typing import Any

from mflash_studio.cards import CardKind
from mflash_studio.deck_meta import dropped_cover_path

ILLUSTRATION_ROLE = "illustration"

_OPTIONAL_TEXT_FIELDS = ("prompt", "answer", "term_lang", "def_lang", "notes")


def to_pretty_json(value: Any) -> str:
    """Pretty-printed JSON text with object keys in sorted order."""
    return json.dumps(value, indent=2, sort_keys=True, ensure_ascii=False)


def new_card(card_id: str) -> dict[str, Any]:
    """A blank basic card with the given id."""
    return {
        "id": card_id,
        "kind": CardKind.BASIC.value,
        "term": "",
        "definition": "",
        "prompt": None,
        "answer": None,
        "term_lang": None,
        "def_lang": None,
        "lexical": None,
        "notes": None,
        "media": [],
        "tags": [],
        "examples": [],
        "occlusion": None,
    }


def new_card_id(now: datetime | None = None) -> str:
    """An id of the form ``card_<milliseconds since the epoch>``."""
    seconds = time.time() if now is None else now.timestamp()
    return f"card_{max(0, int(seconds * 1000))}"


def _load(raw_json: str) -> Any:
    try:
        return json.loads(raw_json)
    except (ValueError, TypeError):
        return None


def _cards(document: Any) -> list[Any] | None:
    if not isinstance(document, dict):
        return None
    cards = document.get("cards")
    return cards if isinstance(cards, list) else None


def _card_object(document: Any, index: int) -> dict[str, Any] | None:
    cards = _cards(document)
    if cards is None or not 0 <= index < len(cards):
        return None
    card = cards[index]
    return card if isinstance(card, dict) else None


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    return value


def append_card(raw_json: str, card: Mapping[str, Any]) -> str:
    """Add a card to the ``cards`` array of the schema text.

    Text that does not parse as JSON is returned unchanged.
    """
    document = _load(raw_json)
    if document is None and raw_json.strip() != "null":
        return raw_json
    cards = _cards(document)
    if cards is not None:
        cards.append({key: _plain(value) for key, value in card.items()})
    return to_pretty_json(document)


def sync_card(raw_json: str, index: int, card: Mapping[str, Any]) -> str:
    """Write the edited fields of a card into card ``index`` of the schema text.

    Fields the editor does not touch, such as ``media``, are left as they are.
    Text that does not parse as JSON is returned unchanged.
    """
    document = _load(raw_json)
    if document is None and raw_json.strip() != "null":
        return raw_json
    target = _card_object(document, index)
    if target is not None:
        target["kind"] = _plain(card.get("kind", CardKind.BASIC))
        target["term"] = card.get("term") or ""
        target["definition"] = card.get("definition") or ""
        for key in _OPTIONAL_TEXT_FIELDS:
            target[key] = card.get(key)
        target["lexical"] = card.get("lexical")
        target["occlusion"] = card.get("occlusion")
        target["tags"] = list(card.get("tags") or [])
        target["examples"] = list(card.get("examples") or [])
    return to_pretty_json(document)


def image_media(path: str) -> dict[str, Any]:
    """A media record for an illustration image dropped onto a card."""
    return {
        "id": None,
        "src": path,
        "type": "image",
        "role": ILLUSTRATION_ROLE,
        "alt": None,
        "description": None,
    }


def set_card_image(raw_json: str, index: int, path: str) -> str:
    """Replace the media of card ``index`` in the schema text with a single image.

    The ``alt`` of the card's first existing media entry is carried over.
    Text that does not parse as JSON is returned unchanged.
    """
    document = _load(raw_json)
    if document is None and raw_json.strip() != "null":
        return raw_json
    target = _card_object(document, index)
    if target is not None:
        media: dict[str, Any] = {
            "id": None,
            "src": path,
            "type": "image",
            "role": ILLUSTRATION_ROLE,
        }
        existing = target.get("media")
        if isinstance(existing, list) and existing and isinstance(existing[0], dict):
            if "alt" in existing[0]:
                media["alt"] = existing[0]["alt"]
        target["media"] = [media]
    return to_pretty_json(document)


def find_dropped_image(paths: Iterable[str | os.PathLike[str] | None]) -> str | None:
    """The first dropped file that is a supported image, as a string path."""
    return dropped_cover_path(paths)