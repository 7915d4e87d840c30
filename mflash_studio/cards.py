"""Card editing: kinds, examples, field updates and speech planning."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from mflash_studio.deck_meta import clean_optional, parse_tags

DEFAULT_LANGUAGE = "English"
LEXICAL_FIELDS = ("phonetic", "part_of_speech")

# Edited verbatim; every other text field is stripped and blank becomes None.
_RAW_FIELDS = frozenset({"term", "definition"})


class CardKind(Enum):
    """The layouts a card can have, keyed by their stored names."""

    BASIC = "basic"
    IMAGE_OCCLUSION = "image_occlusion"
    LISTENING = "listening"
    MEDIA_PROMPT = "media_prompt"
    CLOZE = "cloze"

    def label(self) -> str:
        """Name shown in the card type selector."""
        return _KIND_LABELS[self]


_KIND_LABELS = {
    CardKind.BASIC: "Basic (Term/Def)",
    CardKind.IMAGE_OCCLUSION: "Image Occlusion",
    CardKind.LISTENING: "Listening",
    CardKind.MEDIA_PROMPT: "Media Prompt",
    CardKind.CLOZE: "Cloze / Fill-in-the-blank",
}


@dataclass(frozen=True)
class Utterance:
    """One piece of text to speak, with its language and whether it interrupts."""

    text: str
    lang: str
    interrupt: bool


@dataclass(frozen=True)
class SpeechPlan:
    """What pressing Speak does: play an attached audio file, or speak text aloud."""

    audio_src: str | None = None
    utterances: list[Utterance] = field(default_factory=list)

    @property
    def is_silent(self) -> bool:
        return self.audio_src is None and not self.utterances


def example_text(example: str | Mapping[str, Any]) -> str:
    """The text of an example, whether stored as a plain string or a detailed record."""
    if isinstance(example, str):
        return example
    return example.get("text", "")


def _examples(card: MutableMapping[str, Any]) -> list[Any]:
    examples = card.get("examples")
    if examples is None:
        examples = []
        card["examples"] = examples
    return examples


def set_example_text(card: MutableMapping[str, Any], index: int, text: str) -> None:
    """Replace the text of one example, keeping a detailed record's other fields."""
    examples = _examples(card)
    example = examples[index]
    if isinstance(example, str):
        examples[index] = text
    else:
        example["text"] = text


def add_example(card: MutableMapping[str, Any]) -> None:
    """Append an empty example to the card."""
    _examples(card).append("")


def remove_example(card: MutableMapping[str, Any], index: int) -> None:
    """Remove the example at ``index``; raises IndexError if there is none."""
    examples = _examples(card)
    if not 0 <= index < len(examples):
        raise IndexError(f"no example at index {index}")
    del examples[index]


def set_card_field(card: MutableMapping[str, Any], key: str, text: str) -> None:
    """Store an edited text field; term and definition are kept verbatim."""
    card[key] = text if key in _RAW_FIELDS else clean_optional(text)


def _empty_lexical() -> dict[str, Any]:
    return {
        "phonetic": None,
        "part_of_speech": None,
        "forms": [],
        "synonyms": [],
        "antonyms": [],
    }


def set_lexical_field(card: MutableMapping[str, Any], key: str, text: str) -> None:
    """Store phonetic or part-of-speech text, creating the lexical record if needed."""
    if key not in LEXICAL_FIELDS:
        raise KeyError(key)
    lexical = card.get("lexical")
    if lexical is None:
        lexical = _empty_lexical()
        card["lexical"] = lexical
    lexical[key] = clean_optional(text)


def set_card_tags(card: MutableMapping[str, Any], text: str) -> None:
    """Replace the card's tags with a comma-separated list."""
    card["tags"] = parse_tags(text)


def empty_occlusion() -> dict[str, Any]:
    """An occlusion record with a blank image and no masks."""
    return {
        "image": {
            "id": None,
            "src": "",
            "type": "image",
            "role": "occlusion_image",
            "alt": None,
            "description": None,
        },
        "masks": [],
    }


def card_position_label(selected_index: int, total_cards: int) -> str:
    """The 'Card n of m' text of the top bar."""
    return f"Card {selected_index + 1} of {total_cards}"


def plan_speech(
    card: Mapping[str, Any],
    term_fallback: str,
    def_fallback: str,
    enable_media_audio: bool = True,
    enable_tts: bool = True,
) -> SpeechPlan:
    """Prefer an attached audio file; otherwise speak term then definition."""
    if enable_media_audio:
        for media in card.get("media") or []:
            if media.get("type") == "audio":
                return SpeechPlan(audio_src=media.get("src", ""))
    if not enable_tts:
        return SpeechPlan()
    term_lang = card.get("term_lang") or term_fallback
    def_lang = card.get("def_lang") or def_fallback
    return SpeechPlan(
        utterances=[
            Utterance(card.get("term") or "", term_lang, True),
            Utterance(card.get("definition") or "", def_lang, False),
        ]
    )


def deck_language_fallbacks(deck: Mapping[str, Any] | None) -> tuple[str, str]:
    """The deck's default term and definition languages, English when unset."""
    if deck is None:
        return DEFAULT_LANGUAGE, DEFAULT_LANGUAGE
    term = deck.get("default_term_lang")
    definition = deck.get("default_def_lang")
    return (
        DEFAULT_LANGUAGE if term is None else term,
        DEFAULT_LANGUAGE if definition is None else definition,
    )


def reader_examples(card: Mapping[str, Any]) -> list[str]:
    """Example lines as shown in reader mode."""
    return [f'• "{example_text(example)}"' for example in card.get("examples") or []]