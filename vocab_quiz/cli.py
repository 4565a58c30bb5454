from __future__ import annotations

import logging
import os
import random
import sys
from typing import NoReturn

from .config import QuizConfig, read_quiz_config_from_env
from .deck_source import read_deck_file
from .session import QuizSession, SessionState


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s:%(levelname)s:%(name)s:%(message)s",
    )


def _load_dotenv_if_available(env_file: str) -> None:
    try:
        from dotenv import load_dotenv
    except ModuleNotFoundError as exc:
        raise RuntimeError(
            "python-dotenv is required to load configuration from .env. Install it in the local venv."
        ) from exc

    load_dotenv(dotenv_path=env_file, override=False)


def _print_help() -> None:
    print("Commands:")
    print("  <text>           - answer the current question")
    print("  <empty line>     - next question (after a correction)")
    print("  :n / :next       - next question")
    print("  :o / :open PATH  - load a JSON deck")
    print("  :r / :restart    - reshuffle and start over")
    print("  :h / :help       - help")
    print("  :q / :quit       - quit")


def _die(message: str) -> NoReturn:
    print(message, file=sys.stderr)
    raise SystemExit(2)


def _format_score(session: QuizSession) -> str:
    total, count = session.total
    return f"Score: {session.last_score:g} / 1, {total:g} / {session.position} ({count})"


def _show(session: QuizSession) -> None:
    source_lang = session.langs[session.direction.source]
    target_lang = session.langs[session.direction.target]

    print()
    if session.error is not None:
        print(f"{session.error.value}: invalid file")

    if session.state is SessionState.AWAITING_ANSWER:
        print(f"[{session.position}/{len(session.deck)}] {source_lang}: {session.prompt}")
        print(f"{target_lang}?")
    elif session.state is SessionState.CORRECTING:
        print(f"{target_lang}: {session.answer.strip()}  ->  {session.expected}")
        print(_format_score(session))
    else:
        print("Finished.")
        print(_format_score(session))
        print("Use ':restart' to play again.")


def _build_session(config: QuizConfig) -> QuizSession:
    rng = random.Random(config.seed) if config.seed is not None else None
    session = QuizSession(answer_slot=config.answer_slot, rng=rng)
    if config.deck_file is not None:
        session.file_opened(read_deck_file(config.deck_file))
    return session


def _handle_command(session: QuizSession, cmd: str, arg: str) -> bool:
    if cmd in {":q", ":quit", ":exit"}:
        return False

    if cmd in {":h", ":help", ":?"}:
        _print_help()
    elif cmd in {":n", ":next"}:
        session.advance()
        _show(session)
    elif cmd in {":r", ":restart"}:
        session.restart()
        _show(session)
    elif cmd in {":o", ":open"}:
        session.file_opened(read_deck_file(arg or None))
        if arg and session.error is None:
            print(f"Loaded {session.title}")
        _show(session)
    else:
        print("Unknown command. Use ':help'.")
    return True


def main() -> None:
    _configure_logging()

    env_file = os.environ.get("ENV_FILE", ".env").strip() or ".env"
    try:
        _load_dotenv_if_available(env_file)
    except RuntimeError as e:
        _die(str(e))

    try:
        config = read_quiz_config_from_env()
    except ValueError as e:
        _die(str(e))

    session = _build_session(config)

    _print_help()
    _show(session)

    while True:
        try:
            line = input("> ")
        except EOFError:
            print()
            return

        stripped = line.strip()
        if stripped.startswith(":"):
            cmd, _, arg = stripped.partition(" ")
            if not _handle_command(session, cmd.lower(), arg.strip()):
                return
            continue

        if session.state is SessionState.AWAITING_ANSWER:
            session.set_answer(line)
            session.enter()
            _show(session)
        elif session.state is SessionState.CORRECTING:
            if stripped:
                print("Press Enter or use ':next' to continue.")
                continue
            session.enter()
            _show(session)
        else:
            print("The deck is finished. Use ':restart' or ':open PATH'.")


if __name__ == "__main__":
    main()
