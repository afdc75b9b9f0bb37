# -*- coding: utf-8 -*-
"""
Play random games and report how far they get.
"""
from collections import Counter
from typing import Dict

import numpy as np
from numpy.random import default_rng
from tqdm import trange

from puzzle2048.core.gamemove import legal_actions
from puzzle2048.envs import GridEngine


def play_random_game(engine: GridEngine, generator: np.random.Generator) -> tuple[int, int, int]:
    """
    Play one game choosing uniformly among the moves that change the board.

    Parameters
    ----------
    engine : GridEngine
        The engine to play on. It is reset first.
    generator : Generator
        Random source for choosing moves.

    Returns
    -------
    tuple[int, int, int]
        Final score, max tile and number of moves.
    """
    engine.reset()
    moves = 0
    while not engine.is_finished:
        actions = legal_actions(engine.board)
        engine.move(actions[generator.integers(len(actions))])
        moves += 1
    return engine.score, int(np.max(engine.board)), moves


def evaluate(length: int = 100, seed: int | None = None) -> Dict[int, int]:
    """
    Play random games.

    Parameters
    ----------
    length : int, optional
        The number of games to play (default is 100).
    seed : int, optional
        Seed for tile spawns and move choices.

    Returns
    -------
    Dict[int, int]
        How many games ended with each max tile.
    """
    generator = default_rng(seed)
    engine = GridEngine(generator=generator)
    max_tiles = []

    with trange(length) as period:
        for num in period:
            score, max_tile, moves = play_random_game(engine, generator)
            max_tiles.append(max_tile)

            # ##: Log.
            period.set_description(f"Evaluation: {num + 1}")
            period.set_postfix(score=score, max=max_tile, moves=moves)

    # ##: Final log.
    return dict(sorted(Counter(max_tiles).items()))


def main():
    from argparse import ArgumentParser

    parser = ArgumentParser()
    parser.add_argument("--games", type=int, default=100)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    result = evaluate(length=args.games, seed=args.seed)
    print(f"Random play over {args.games} games, max tiles: {result}")


if __name__ == "__main__":
    main()
