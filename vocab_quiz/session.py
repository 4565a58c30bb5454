from __future__ import annotations

import logging
import random
from enum import Enum
from pathlib import Path

from .deck_source import FileOpened, LoadError
from .grading import Direction
from .models import Deck, Entry, GramClass, LanguagePair

logger = logging.getLogger(__name__)

APP_NAME = "ULang"


def default_deck() -> Deck:
    return Deck(
        langs=("English", "French"),
        entries=(
            Entry(terms=("yes", "oui"), gram_class=GramClass.ADVERB),
            Entry(terms=("no", "non"), gram_class=GramClass.ADVERB),
            Entry(terms=("the work", "le travail"), gram_class=GramClass.NOUN),
            Entry(terms=("the rust", "la rouille"), gram_class=GramClass.NOUN),
            Entry(terms=("the solution", "la solution"), gram_class=GramClass.NOUN),
            Entry(terms=("to rise", "s'élever"), gram_class=GramClass.VERB),
        ),
    )


class SessionState(Enum):
    AWAITING_ANSWER = "awaiting_answer"
    CORRECTING = "correcting"
    FINISHED = "finished"


class QuizSession:
    """Progress through one shuffled deck.

    Transitions that do not apply to the current state are ignored rather than
    rejected, so the front-end can forward user intents without checking the
    state first. A failed deck load never touches the active deck; it is only
    recorded in ``error`` for display.
    """

    def __init__(
        self,
        deck: Deck | None = None,
        *,
        answer_slot: int = 0,
        rng: random.Random | None = None,
    ) -> None:
        self._direction = Direction.towards(answer_slot)
        self._rng = rng or random.Random()
        self._source_deck = deck if deck is not None else default_deck()

        self.path: Path | None = None
        self.error: LoadError | None = None

        self._activate(self._source_deck)

    def _activate(self, deck: Deck) -> None:
        self._deck = deck.shuffled(self._rng)
        self.current: int | None = 0
        self.answer = ""
        self.last_score = 0.0
        self.total: tuple[float, int] = (0.0, len(self._deck))
        self.state = SessionState.AWAITING_ANSWER

    @property
    def deck(self) -> Deck:
        return self._deck

    @property
    def direction(self) -> Direction:
        return self._direction

    @property
    def langs(self) -> LanguagePair:
        return self._deck.langs

    @property
    def current_entry(self) -> Entry | None:
        if self.current is None:
            return None
        return self._deck.entries[self.current]

    @property
    def prompt(self) -> str:
        entry = self.current_entry
        return entry.term(self._direction.source) if entry is not None else ""

    @property
    def expected(self) -> str:
        entry = self.current_entry
        return entry.term(self._direction.target) if entry is not None else ""

    @property
    def position(self) -> int:
        if self.current is None:
            return len(self._deck)
        return self.current + 1

    @property
    def title(self) -> str:
        if self.path is None:
            return APP_NAME
        return f"{self.path} — {APP_NAME}"

    def set_answer(self, text: str) -> None:
        if self.state is SessionState.AWAITING_ANSWER:
            self.answer = text

    def submit_answer(self, text: str | None = None) -> float | None:
        if self.state is not SessionState.AWAITING_ANSWER:
            return None
        entry = self.current_entry
        assert entry is not None

        if text is not None:
            self.answer = text
        target_language = self.langs[self._direction.target]
        score = entry.grade(self.answer.strip(), self._direction, target_language)

        self.last_score = score
        self.total = (self.total[0] + score, self.total[1])
        self.state = SessionState.CORRECTING
        return score

    def advance(self) -> None:
        if self.state is not SessionState.CORRECTING:
            return
        assert self.current is not None

        self.answer = ""
        if self.current + 1 == len(self._deck):
            self.current = None
            self.state = SessionState.FINISHED
        else:
            self.current += 1
            self.state = SessionState.AWAITING_ANSWER

    def enter(self) -> None:
        if self.state is SessionState.AWAITING_ANSWER:
            self.submit_answer()
        elif self.state is SessionState.CORRECTING:
            self.advance()

    def restart(self, deck: Deck | None = None) -> None:
        if deck is not None:
            self._source_deck = deck
        self._activate(self._source_deck)

    def load_deck(self, deck: Deck, path: Path | None = None) -> None:
        self.restart(deck)
        self.path = path
        self.error = None

    def file_opened(self, result: FileOpened) -> None:
        if result.deck is not None:
            self.load_deck(result.deck, result.path)
            return
        assert result.error is not None
        if result.error is LoadError.DIALOG_CLOSED:
            return
        logger.warning("Keeping current deck after %s", result.error.value)
        self.error = result.error
