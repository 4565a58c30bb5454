from __future__ import annotations

import json
from pathlib import Path

import pytest

from vocab_quiz.deck_source import DeckParseError, FileOpened, LoadError, parse_deck, read_deck_file
from vocab_quiz.models import Entry, GramClass

OBJECT_DECK = {
    "languages": ["English", "French"],
    "entries": [
        {"term0": "yes", "term1": "oui", "class": "Adverb"},
        {"term0": " the work ", "term1": "le travail", "class": "Noun"},
        {"term0": "to rise", "term1": "s'élever", "class": "Verb"},
    ],
}


def _write(path: Path, content: str) -> None:
    path.write_text(content, encoding="utf-8")


def test_parse_object_form() -> None:
    deck = parse_deck(json.dumps(OBJECT_DECK))

    assert deck.langs == ("English", "French")
    assert deck.entries == (
        Entry(terms=("yes", "oui"), gram_class=GramClass.ADVERB),
        Entry(terms=("the work", "le travail"), gram_class=GramClass.NOUN),
        Entry(terms=("to rise", "s'élever"), gram_class=GramClass.VERB),
    )


def test_parse_array_form_keeps_order() -> None:
    raw = '[["English", "German"], [["the dog", "der Hund", "Noun"], ["no", "nein", "Adverb"]]]'

    deck = parse_deck(raw)

    assert deck.langs == ("English", "German")
    assert [e.term(1) for e in deck.entries] == ["der Hund", "nein"]


def test_parse_bytes_with_bom() -> None:
    raw = b"\xef\xbb\xbf" + json.dumps(OBJECT_DECK, ensure_ascii=False).encode("utf-8")

    deck = parse_deck(raw)

    assert len(deck) == 3
    assert deck.entries[2].term(1) == "s'élever"


@pytest.mark.parametrize(
    ("raw", "message"),
    [
        ("not json", "not valid JSON"),
        ('{"languages": ["English", "French"]}', "must contain 'languages' and 'entries'"),
        ('{"languages": ["English"], "entries": []}', "list of two labels"),
        ('{"languages": ["French", "French"], "entries": [["a", "b", "Noun"]]}', "must differ"),
        ('{"languages": ["English", "French"], "entries": []}', "no entries"),
        ('{"languages": ["English", "French"], "entries": [["yes", "oui"]]}', "Entry #1"),
        ('{"languages": ["English", "French"], "entries": [{"term0": "yes", "term1": "oui"}]}', "'class'"),
        ('{"languages": ["English", "French"], "entries": [["yes", "", "Adverb"]]}', "'term1'"),
        ('"just a string"', "JSON root"),
    ],
)
def test_parse_rejects_malformed_content(raw: str, message: str) -> None:
    with pytest.raises(DeckParseError, match=message):
        parse_deck(raw)


def test_unknown_class_fails_whole_deck() -> None:
    obj = dict(OBJECT_DECK)
    obj["entries"] = OBJECT_DECK["entries"] + [{"term0": "red", "term1": "rouge", "class": "Adjective"}]

    with pytest.raises(DeckParseError, match="Entry #4: Unknown grammatical class"):
        parse_deck(json.dumps(obj))


def test_parse_rejects_invalid_utf8() -> None:
    with pytest.raises(DeckParseError, match="UTF-8"):
        parse_deck(b"\xff\xfe\x00garbage")


def test_read_deck_file_success(tmp_path: Path) -> None:
    path = tmp_path / "deck.json"
    _write(path, json.dumps(OBJECT_DECK))

    result = read_deck_file(path)

    assert result.ok
    assert result.path == path
    assert result.deck is not None and len(result.deck) == 3


def test_read_deck_file_cancelled() -> None:
    result = read_deck_file(None)

    assert result.error is LoadError.DIALOG_CLOSED
    assert result.deck is None


def test_read_deck_file_io_error(tmp_path: Path) -> None:
    result = read_deck_file(tmp_path / "missing.json")

    assert result.error is LoadError.IO_ERROR
    assert not result.ok


def test_read_deck_file_parse_error(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    _write(path, '{"languages": ["English", "French"], "entries": [["yes", "oui"]]}')

    result = read_deck_file(path)

    assert result.error is LoadError.PARSE_ERROR
    assert result.deck is None


def test_file_opened_requires_exactly_one_outcome() -> None:
    with pytest.raises(ValueError):
        FileOpened()


def test_class_tag_must_match_literally() -> None:
    raw = '{"languages": ["English", "French"], "entries": [["to rise", "s\'élever", "verb"]]}'

    with pytest.raises(DeckParseError, match="Entry #1: Unknown grammatical class: 'verb'"):
        parse_deck(raw)


def test_deeply_nested_document_is_a_parse_error(tmp_path: Path) -> None:
    path = tmp_path / "deep.json"
    _write(path, "[" * 200_000)

    with pytest.raises(DeckParseError, match="nested too deeply"):
        parse_deck(path.read_text(encoding="utf-8"))

    result = read_deck_file(path)

    assert result.error is LoadError.PARSE_ERROR
    assert result.deck is None
