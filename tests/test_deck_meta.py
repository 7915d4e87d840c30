import json
import zipfile

import pytest

from mflash_studio.deck_meta import (
    CoverChoice,
    clean_optional,
    cover_media,
    deck_to_json,
    discover_cover_media,
    dropped_cover_path,
    is_supported_image_extension,
    parse_tags,
    resolve_cover,
    root_media_src,
)


def _make_package(path, names):
    with zipfile.ZipFile(path, "w") as archive:
        for name in names:
            if name.endswith("/"):
                archive.writestr(zipfile.ZipInfo(name), b"")
            else:
                archive.writestr(name, b"data")
    return path


@pytest.mark.parametrize("ext", ["png", "jpg", "jpeg", "webp", "gif"])
def test_supported_extensions(ext):
    assert is_supported_image_extension(ext) is True


@pytest.mark.parametrize("ext", ["PNG", "bmp", "svg", ""])
def test_unsupported_extensions(ext):
    assert is_supported_image_extension(ext) is False


def test_root_media_src_found():
    raw = json.dumps({"cover": {"src": "img/cover.png"}})
    assert root_media_src(raw, "cover") == "img/cover.png"


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        json.dumps([1, 2]),
        json.dumps({"cover": None}),
        json.dumps({"cover": {"src": "   "}}),
        json.dumps({"cover": {"src": 3}}),
        json.dumps({"other": {"src": "a.png"}}),
    ],
)
def test_root_media_src_missing(raw):
    assert root_media_src(raw, "cover") is None


def test_discover_prefers_cover_name(tmp_path):
    pkg = _make_package(
        tmp_path / "d.mflash",
        ["deck.json", "media/a.png", "top.jpg", "media/thumb.webp", "media/my_cover.gif"],
    )
    assert discover_cover_media(pkg) == "media/my_cover.gif"


def test_discover_prefers_thumbnail_then_root(tmp_path):
    pkg = _make_package(tmp_path / "d.mflash", ["media/a.png", "top.jpg", "media/thumb.webp"])
    assert discover_cover_media(pkg) == "media/thumb.webp"
    pkg2 = _make_package(tmp_path / "e.mflash", ["media/a.png", "top.jpg"])
    assert discover_cover_media(pkg2) == "top.jpg"


def test_discover_ignores_non_images_and_dirs(tmp_path):
    pkg = _make_package(tmp_path / "d.mflash", ["deck.json", "cover/", "notes.txt", "cover.svg"])
    assert discover_cover_media(pkg) is None


def test_discover_json_path_and_missing_file(tmp_path):
    assert discover_cover_media(tmp_path / "deck.mflash.json") is None
    assert discover_cover_media(tmp_path / "absent.mflash") is None
    bad = tmp_path / "bad.mflash"
    bad.write_bytes(b"not a zip")
    assert discover_cover_media(bad) is None


def test_resolve_cover_model_first(tmp_path):
    deck = {"cover": {"src": "model.png"}}
    raw = json.dumps({"cover": {"src": "raw.png"}})
    choice = resolve_cover(deck, raw, tmp_path / "x.mflash")
    assert choice.active == "model.png"
    assert choice.raw_json_path == "raw.png"
    assert choice.discovered_path is None
    assert choice.can_adopt is False


def test_resolve_cover_raw_json_next():
    raw = json.dumps({"cover": {"src": "raw.png"}})
    choice = resolve_cover({"cover": None}, raw, None)
    assert choice.active == "raw.png"
    assert choice.can_adopt is False


def test_resolve_cover_discovered(tmp_path):
    pkg = _make_package(tmp_path / "d.mflash", ["deck.json", "pic.png"])
    choice = resolve_cover({}, "{}", pkg)
    assert choice == CoverChoice(None, None, "pic.png")
    assert choice.active == "pic.png"
    assert choice.can_adopt is True


def test_resolve_cover_nothing():
    choice = resolve_cover(None, "", None)
    assert choice.active is None
    assert choice.can_adopt is False


def test_cover_media_fields():
    media = cover_media("a.png", "Deck cover image")
    assert media["src"] == "a.png"
    assert media["type"] == "image"
    assert media["role"] == "cover"
    assert media["alt"] == "Deck cover image"
    assert media["id"] is None and media["description"] is None
    assert cover_media("b.png")["alt"] is None


def test_clean_optional():
    assert clean_optional("  hello  ") == "hello"
    assert clean_optional("   ") is None
    assert clean_optional("") is None


def test_parse_tags():
    assert parse_tags(" a, b ,, c ,") == ["a", "b", "c"]
    assert parse_tags("") == []


def test_parse_tags_round_trip():
    tags = ["x", "y z", "w"]
    assert parse_tags(", ".join(tags)) == tags


def test_deck_to_json_round_trip():
    deck = {"title": "Español", "cards": [{"term": "uno"}], "cover": None}
    text = deck_to_json(deck)
    assert json.loads(text) == deck
    assert "Español" in text
    assert text.startswith('{\n  "title"')


def test_dropped_cover_path(tmp_path):
    paths = [None, tmp_path / "notes.txt", tmp_path / "Photo.JPG", tmp_path / "b.png"]
    assert dropped_cover_path(paths) == str(tmp_path / "Photo.JPG")
    assert dropped_cover_path(["a.txt", "b.svg"]) is None
    assert dropped_cover_path([]) is None