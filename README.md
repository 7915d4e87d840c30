# mflash_studio

The editing logic behind a local-first studio for `.mflash` flashcard decks.
A deck is handled as plain JSON-shaped data: dicts and lists, with cards
under `"cards"` and each card's attachments under `"media"`. The package
gives you the operations the studio performs on that data. It has no
runtime dependencies.

## Installing

```
pip install .
```

## Modules

### `mflash_studio.assets`

- `collect_assets(deck)` lists every media reference of every card as
  `AssetRow` records (`card_index`, `media_index`, `src`, `kind`,
  `card_term`). Cards without a term are shown as `(Untitled)`.
- `classify_asset(src)` turns a file extension into an `AssetKind`, whose
  `category` is an `AssetCategory` (image, GIF, SVG, audio, video, font,
  data, file, other). `AssetKind` has `label()`, `icon()`,
  `can_thumbnail()` and `filter_key()`.
- `matches_filter`, `matches_search` and `filter_assets(assets, kind_filter,
  query)` narrow the list by kind (`"all"`, `"images"`, `"audio"`, ...) and by
  a case-insensitive search over path, kind label and card term.
- `summarize_assets(assets)` counts assets per kind label, in sorted order.
- `remove_asset_reference(deck, card_index, media_index)` deletes one
  reference and returns whether anything was removed.
- `asset_file_name`, `truncate_middle`, `format_card_label` and
  `reference_count_label` produce display text.

### `mflash_studio.browse`

- `filter_card_indices(deck, query)` gives the indices of cards whose term
  contains the query, ignoring case.
- `grid_columns(available_width, tile_width, gap_x)` and
  `row_count(item_count, columns)` do the grid arithmetic;
  `row_count` raises `ValueError` for fewer than one column.
- `card_tile_label` and `shown_summary` produce tile and status text.

### `mflash_studio.deck_meta`

- `resolve_cover(deck, raw_json, deck_path)` returns a `CoverChoice`: the
  cover from the deck's `cover` field, else from the raw JSON text, else an
  image found inside the zipped `.mflash` package. `CoverChoice.active` is
  the path to show; `CoverChoice.can_adopt` says whether it was only found
  in the package.
- `discover_cover_media(deck_path)` scans the archive, preferring names with
  `cover`, then `thumbnail`/`thumb`, then top-level files.
- `root_media_src(raw_json, key)`, `cover_media(src, alt)`,
  `is_supported_image_extension(ext)` and `dropped_cover_path(paths)` help
  with cover images (png, jpg, jpeg, webp, gif).
- `clean_optional(text)` strips text and turns blanks into `None`;
  `parse_tags(text)` splits a comma-separated list; `deck_to_json(deck)`
  pretty-prints a deck.

### `mflash_studio.find_replace`

- `FindState` holds a query, `case_sensitive` and `use_regex` options, the
  current matches and the selected one. `update(text)` recomputes matches,
  `next()` and `previous()` wrap round, `status()` gives `"n of m"`,
  `"Invalid regex"` or `"No results"`, and `replace_current` /
  `replace_all` return the new text. Regex replacements accept `$1`,
  `$name`, `${name}` and `$$`.
- `find_matches(text, query, case_sensitive, use_regex)`, `build_regex`
  and `replace_all_case_insensitive_ascii` are the underlying functions;
  plain case-insensitive search folds ASCII letters only.
- `SchemaFormat` names the formats JSON, TOML, YAML and XML.
- `format_json(text)` pretty-prints JSON (raising `ValueError` if it does
  not parse); `line_count`, `cut_range` and `insert_text` are small
  text-editing helpers.

### `mflash_studio.cards`

- `CardKind` (basic, image occlusion, listening, media prompt, cloze) with
  `label()` for the selector text.
- `set_card_field`, `set_lexical_field`, `set_card_tags`, `example_text`,
  `set_example_text`, `add_example`, `remove_example` and
  `empty_occlusion` edit a card in place.
- `plan_speech(card, term_fallback, def_fallback, enable_media_audio,
  enable_tts)` returns a `SpeechPlan`: the attached audio file to play, or
  the term and definition to speak with their languages.
  `deck_language_fallbacks(deck)` gives the deck defaults, English when
  unset.
- `card_position_label` and `reader_examples` produce display text.

### `mflash_studio.card_json`

Keeps the deck's raw JSON text in step with edited cards. Text that does
not parse is returned unchanged; output is pretty-printed with sorted keys
(`to_pretty_json`).

- `append_card(raw_json, card)` with `new_card(card_id)` and
  `new_card_id(now)` (`card_<milliseconds>`).
- `sync_card(raw_json, index, card)` writes the edited fields of one card,
  leaving its `media` alone.
- `set_card_image(raw_json, index, path)` replaces a card's media with one
  illustration image, keeping the old first entry's `alt`;
  `image_media(path)` builds such a record and `find_dropped_image(paths)`
  picks the first supported image from dropped files.

## Example

```python
from mflash_studio.assets import collect_assets, filter_assets, summarize_assets

deck = {
    "cards": [
        {"term": "perro", "media": [{"src": "media/dog.png", "type": "image"}]},
        {"term": "gato", "media": [{"src": "media/meow.mp3", "type": "audio"}]},
    ]
}

assets = collect_assets(deck)
print(summarize_assets(assets))            # {'Audio': 1, 'Image': 1}
print(filter_assets(assets, "audio", ""))  # the gato recording only
```

```python
from mflash_studio.find_replace import FindState

state = FindState(query="cat")
state.update("cat, Cat, CAT")
print(state.status())  # "1 of 3"
```

## What it does not do

This is a library of editing operations only. It has no window or screens,
no command to run, and it does not open, parse into a model, or save decks:
you load and store the deck data yourself. Apart from reading a package's
file list to find a cover image, it touches no files. `plan_speech` only
decides what should be played or spoken; nothing here plays audio or does
text-to-speech. Converting a deck between JSON, TOML, YAML and XML is not
provided either; `SchemaFormat` only names those formats.

## Running the tests

```
pip install ".[test]"
pytest
```