"""Card browsing: search filtering and grid layout arithmetic."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

TILE_WIDTH = 170.0
TILE_HEIGHT = 28.0
TILE_GAP_X = 8.0
TILE_GAP_Y = 6.0

UNTITLED = "(Untitled)"


def grid_columns(
    available_width: float, tile_width: float = TILE_WIDTH, gap_x: float = TILE_GAP_X
) -> int:
    """Number of tiles that fit side by side; always at least one."""
    width = max(available_width, tile_width)
    return max(1, math.floor((width + gap_x) / (tile_width + gap_x)))


def row_count(item_count: int, columns: int) -> int:
    """Rows needed to lay out ``item_count`` items in ``columns`` columns."""
    if columns < 1:
        raise ValueError("columns must be at least 1")
    return -(-item_count // columns)


def filter_card_indices(deck: Mapping[str, Any] | None, query: str) -> list[int]:
    """Indices of cards whose term contains the query, case-insensitively."""
    if deck is None:
        return []
    needle = query.strip().lower()
    return [
        index
        for index, card in enumerate(deck.get("cards") or [])
        if not needle or needle in (card.get("term") or "").lower()
    ]


def card_tile_label(card_index: int, card: Mapping[str, Any]) -> str:
    """One-based card number and term, as shown on a browse tile."""
    term = card.get("term")
    return f"{card_index + 1}: {UNTITLED if term is None else term}"


def shown_summary(card_count: int, columns: int) -> str:
    """Status line describing how many cards are shown in how many columns."""
    cards = "card" if card_count == 1 else "cards"
    cols = "column" if columns == 1 else "columns"
    return f"{card_count} {cards} shown · {columns} {cols}"