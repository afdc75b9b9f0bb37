# -*- coding: utf-8 -*-
"""
Play 2048 in a terminal.
"""
import logging
from argparse import ArgumentParser
from pathlib import Path

from puzzle2048.config import GameConfiguration
from puzzle2048.core.types import Direction
from puzzle2048.envs import GridEngine
from puzzle2048.services import AchievementTracker, AudioNotifier, GameStorage, PreferenceStore
from puzzle2048.session import GameSession
from puzzle2048.utils import format_board

HELP = "moves: w/a/s/d, h/j/k/l or left/up/right/down | u: undo | n: new game | q: quit"


def redraw(session: GameSession):
    """
    Redraw the game board.

    Parameters
    ----------
    session: GameSession
        The game session to draw
    """
    print(format_board(session.board))
    print(f"score: {session.score}  best: {session.best_score}  moves: {session.move_count}")


def key_handler(session: GameSession, key: str) -> bool:
    """
    Handle one command typed by the player.

    Parameters
    ----------
    session: GameSession
        The game session

    key: str
        Command to handle

    Returns
    -------
    bool
        False when the player wants to quit
    """
    if key in ("q", "quit", "escape"):
        return False

    if key in ("n", "new"):
        session.new_game()
    elif key in ("u", "undo"):
        if not session.undo():
            print("nothing to undo")
    else:
        try:
            direction = Direction.from_key(key)
        except ValueError:
            print(HELP)
            return True

        result = session.move(direction)
        if not result.moved:
            print("nothing moved")
        for achievement in session.last_unlocked:
            print(f"unlocked: {session.achievements.descriptions.get(achievement, achievement)}")
        if result.game_over:
            print("game over! press n for a new game")

    redraw(session)
    return True


def build_session(storage_path: Path, seed: int | None = None) -> GameSession:
    """Create a session storing its data at the given path."""
    configuration = GameConfiguration(storage_path=storage_path)
    store = PreferenceStore(configuration.storage_path)
    return GameSession(
        engine=GridEngine(size=configuration.size, seed=seed),
        storage=GameStorage(store, size=configuration.size),
        achievements=AchievementTracker(store),
        audio=AudioNotifier(configuration=configuration.audio),
        configuration=configuration,
    )


def main():
    parser = ArgumentParser(description="Play 2048 in a terminal.")
    parser.add_argument("--storage", type=Path, default=GameConfiguration().storage_path)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    session = build_session(args.storage, seed=args.seed)
    session.start()
    print(HELP)
    redraw(session)

    try:
        while True:
            try:
                key = input("> ").strip().lower()
            except EOFError:
                break
            if key and not key_handler(session, key):
                break
    finally:
        session.close()


if __name__ == "__main__":
    main()
