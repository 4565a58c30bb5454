from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class QuizConfig:
    deck_file: str | None
    answer_slot: int
    seed: int | None


def read_quiz_config_from_env() -> QuizConfig:
    deck_file = os.environ.get("QUIZ_DECK_FILE", "").strip() or None

    slot_raw = os.environ.get("QUIZ_ANSWER_SLOT", "0").strip() or "0"
    try:
        answer_slot = int(slot_raw)
    except ValueError as e:
        raise ValueError(f"QUIZ_ANSWER_SLOT must be 0 or 1 (got {slot_raw!r})") from e
    if answer_slot not in (0, 1):
        raise ValueError(f"QUIZ_ANSWER_SLOT must be 0 or 1 (got {answer_slot})")

    seed_raw = os.environ.get("QUIZ_SEED", "").strip()
    seed: int | None = None
    if seed_raw:
        try:
            seed = int(seed_raw)
        except ValueError as e:
            raise ValueError(f"QUIZ_SEED must be an integer (got {seed_raw!r})") from e

    return QuizConfig(deck_file=deck_file, answer_slot=answer_slot, seed=seed)
