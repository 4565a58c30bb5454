"""Answer grading: free-text answer against an entry's expected term.

The score is continuous in [0, 1]. An exact answer (ignoring surrounding
whitespace and case) scores 1.0. Nouns and verbs get partial credit when the
answer has the right stem but leaves out, or gets wrong, the article or
infinitive marker of the target language. Everything else scores 0.0.
"""

from __future__ import annotations

from dataclasses import dataclass

from .models import Entry, GramClass

MISSING_MARKER_SCORE = 0.5
WRONG_MARKER_SCORE = 0.25


@dataclass(frozen=True, slots=True)
class Direction:
    source: int
    target: int

    @classmethod
    def towards(cls, target_slot: int) -> Direction:
        if target_slot not in (0, 1):
            raise ValueError(f"Target slot must be 0 or 1, got {target_slot}")
        return cls(source=1 - target_slot, target=target_slot)


_NOUN_MARKERS: dict[str, tuple[str, ...]] = {
    "english": ("the", "a", "an"),
    "french": ("le", "la", "les", "l'", "un", "une", "des"),
    "german": ("der", "die", "das", "den", "dem", "ein", "eine"),
    "spanish": ("el", "la", "los", "las", "un", "una"),
    "italian": ("il", "lo", "la", "i", "gli", "le", "l'", "un", "uno", "una"),
}

_VERB_MARKERS: dict[str, tuple[str, ...]] = {
    "english": ("to",),
    "french": ("se", "s'"),
    "german": ("zu", "sich"),
}

_LANGUAGE_ALIASES = {
    "en": "english",
    "eng": "english",
    "anglais": "english",
    "englisch": "english",
    "fr": "french",
    "français": "french",
    "francais": "french",
    "französisch": "french",
    "de": "german",
    "deutsch": "german",
    "allemand": "german",
    "es": "spanish",
    "español": "spanish",
    "espanol": "spanish",
    "espagnol": "spanish",
    "it": "italian",
    "italiano": "italian",
    "italien": "italian",
}


def _normalize(text: str) -> str:
    return text.strip().replace("’", "'").casefold()


def _canonical_language(label: str) -> str:
    key = _normalize(label)
    return _LANGUAGE_ALIASES.get(key, key)


def _markers_for(gram_class: GramClass, language: str) -> tuple[str, ...]:
    if gram_class is GramClass.NOUN:
        table = _NOUN_MARKERS
    elif gram_class is GramClass.VERB:
        table = _VERB_MARKERS
    else:
        return ()
    return table.get(_canonical_language(language), ())


def _split_marker(text: str, markers: tuple[str, ...]) -> tuple[str, str] | None:
    for marker in markers:
        if marker.endswith("'"):
            if text.startswith(marker) and len(text) > len(marker):
                return marker, text[len(marker) :]
            continue
        head, sep, rest = text.partition(" ")
        if sep and head == marker and rest.strip():
            return marker, rest
    return None


def grade(entry: Entry, answer: str, *, target_slot: int, target_language: str) -> float:
    direction = Direction.towards(target_slot)
    expected = _normalize(entry.term(direction.target))
    candidate = _normalize(answer or "")

    if not candidate:
        return 0.0
    if candidate == expected:
        return 1.0

    markers = _markers_for(entry.gram_class, target_language)
    if not markers:
        return 0.0

    split_expected = _split_marker(expected, markers)
    if split_expected is None:
        return 0.0
    marker, stem = split_expected

    if candidate == stem:
        return MISSING_MARKER_SCORE

    split_candidate = _split_marker(candidate, markers)
    if split_candidate is not None:
        cand_marker, cand_stem = split_candidate
        if cand_stem == stem and cand_marker != marker:
            return WRONG_MARKER_SCORE

    return 0.0
