from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .models import Deck, Entry, GramClass, LanguagePair

logger = logging.getLogger(__name__)


class DeckParseError(RuntimeError):
    pass


class LoadError(Enum):
    IO_ERROR = "IoError"
    DIALOG_CLOSED = "DialogClosed"
    PARSE_ERROR = "ParseError"


@dataclass(frozen=True, slots=True)
class FileOpened:
    path: Path | None = None
    deck: Deck | None = None
    error: LoadError | None = None

    def __post_init__(self) -> None:
        if (self.deck is None) == (self.error is None):
            raise ValueError("FileOpened carries either a deck or an error")

    @property
    def ok(self) -> bool:
        return self.error is None


def _decode(raw: bytes | str) -> str:
    if isinstance(raw, str):
        return raw
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise DeckParseError("Deck file is not valid UTF-8") from e


def _non_empty_str(value: object, what: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise DeckParseError(f"{what} must be a non-empty string")
    return value.strip()


def _langs_from_obj(obj: object) -> LanguagePair:
    if not isinstance(obj, list) or len(obj) != 2:
        raise DeckParseError("Field 'languages' must be a list of two labels")

    first = _non_empty_str(obj[0], "Language label")
    second = _non_empty_str(obj[1], "Language label")
    if first.casefold() == second.casefold():
        raise DeckParseError(f"Language labels must differ (got {first!r} twice)")
    return first, second


def _entry_from_obj(obj: object, index: int) -> Entry:
    if isinstance(obj, dict):
        term0 = obj.get("term0")
        term1 = obj.get("term1")
        tag = obj.get("class")
    elif isinstance(obj, list) and len(obj) == 3:
        term0, term1, tag = obj
    else:
        raise DeckParseError(f"Entry #{index} must be an object or a [term0, term1, class] list")

    term0 = _non_empty_str(term0, f"Entry #{index} field 'term0'")
    term1 = _non_empty_str(term1, f"Entry #{index} field 'term1'")
    if not isinstance(tag, str):
        raise DeckParseError(f"Entry #{index} field 'class' must be a string")

    try:
        gram_class = GramClass.from_tag(tag)
    except ValueError as e:
        raise DeckParseError(f"Entry #{index}: {e}") from e

    return Entry(terms=(term0, term1), gram_class=gram_class)


def parse_deck(raw: bytes | str) -> Deck:
    text = _decode(raw)

    try:
        obj = json.loads(text)
    except json.JSONDecodeError as e:
        raise DeckParseError(f"Deck file is not valid JSON: {e.msg} (line {e.lineno})") from e
    except RecursionError as e:
        raise DeckParseError("Deck file is nested too deeply") from e

    if isinstance(obj, dict):
        if "languages" not in obj or "entries" not in obj:
            raise DeckParseError("Deck object must contain 'languages' and 'entries'")
        langs_value = obj["languages"]
        entries_value = obj["entries"]
    elif isinstance(obj, list) and len(obj) == 2:
        langs_value, entries_value = obj
    else:
        raise DeckParseError("JSON root must be an object or a [languages, entries] list")

    langs = _langs_from_obj(langs_value)

    if not isinstance(entries_value, list):
        raise DeckParseError("Field 'entries' must be a list")
    if not entries_value:
        raise DeckParseError("Deck contains no entries")

    entries = tuple(_entry_from_obj(item, i) for i, item in enumerate(entries_value, start=1))
    logger.debug("Parsed deck %s/%s with %d entries", langs[0], langs[1], len(entries))
    return Deck(langs=langs, entries=entries)


def read_deck_file(path: str | os.PathLike[str] | None) -> FileOpened:
    if path is None:
        return FileOpened(error=LoadError.DIALOG_CLOSED)

    p = Path(path)
    if not p.is_absolute():
        p = Path(os.getcwd()) / p

    try:
        raw = p.read_bytes()
    except OSError as e:
        logger.error("%s: %s", type(e).__name__, e)
        return FileOpened(path=p, error=LoadError.IO_ERROR)

    try:
        deck = parse_deck(raw)
    except DeckParseError as e:
        logger.error("%s: %s", type(e).__name__, e)
        return FileOpened(path=p, error=LoadError.PARSE_ERROR)

    logger.info("Loaded %d entries from %s", len(deck), p.name)
    return FileOpened(path=p, deck=deck)
