from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .grading import Direction

LanguagePair = tuple[str, str]


class GramClass(Enum):
    ADVERB = "Adverb"
    NOUN = "Noun"
    VERB = "Verb"

    @classmethod
    def from_tag(cls, tag: str) -> GramClass:
        for member in cls:
            if member.value == tag:
                return member
        raise ValueError(f"Unknown grammatical class: {tag!r}")


@dataclass(frozen=True, slots=True)
class Entry:
    terms: tuple[str, str]
    gram_class: GramClass

    def __post_init__(self) -> None:
        if len(self.terms) != 2:
            raise ValueError("Entry requires exactly two terms")
        if any(not isinstance(t, str) or not t.strip() for t in self.terms):
            raise ValueError("Entry terms must be non-empty strings")

    def term(self, slot: int) -> str:
        if slot not in (0, 1):
            raise IndexError(f"Language slot must be 0 or 1, got {slot}")
        return self.terms[slot]

    def grade(self, answer: str, direction: Direction, target_language: str) -> float:
        from .grading import grade

        return grade(self, answer, target_slot=direction.target, target_language=target_language)


@dataclass(frozen=True, slots=True)
class Deck:
    langs: LanguagePair
    entries: tuple[Entry, ...]

    def __post_init__(self) -> None:
        if len(self.langs) != 2 or any(not isinstance(label, str) or not label.strip() for label in self.langs):
            raise ValueError("Deck requires two non-empty language labels")
        if self.langs[0].strip().casefold() == self.langs[1].strip().casefold():
            raise ValueError(f"Deck language labels must differ: {self.langs[0]!r}")
        if not self.entries:
            raise ValueError("Deck requires at least one entry")

    def __len__(self) -> int:
        return len(self.entries)

    def shuffled(self, rng: random.Random) -> Deck:
        order = list(self.entries)
        rng.shuffle(order)
        return Deck(langs=self.langs, entries=tuple(order))
