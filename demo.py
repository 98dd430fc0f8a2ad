#!/usr/bin/env python3
"""Watch a random agent play Minesweeper."""
import time
import os
from typing import Optional

import numpy as np

from src.minesweeper.config import Difficulty, GameConfig
from src.minesweeper.environment import MinesweeperEnv


def clear_screen():
    os.system('cls' if os.name == 'nt' else 'clear')


def run_demo(
    delay: float = 0.3,
    games: int = 5,
    size: int = 9,
    difficulty: Difficulty = Difficulty.BEGINNER,
    seed: Optional[int] = None,
) -> int:
    """Run demo games with visualization; returns the number of wins."""
    config = GameConfig(difficulty, size)
    env = MinesweeperEnv(config=config, render_mode="ansi")
    rng = np.random.default_rng(seed)

    print(f"Board: {size}x{size} with {config.mine_count} mines "
          f"({100 * config.mine_count / (size * size):.1f}% density)")
    time.sleep(delay)

    wins = 0

    for game in range(games):
        env.reset(seed=None if seed is None else seed + game)

        clear_screen()
        print(f"=== Game {game + 1}/{games} ===")
        print(f"Wins so far: {wins}\n")
        print(env.render())
        time.sleep(delay)

        done = False
        step = 0

        while not done:
            valid = np.flatnonzero(env.get_action_mask())
            action = int(rng.choice(valid))
            row, col = action // size + 1, action % size + 1

            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

            clear_screen()
            print(f"=== Game {game + 1}/{games} | Step {step} ===")
            print(f"Wins so far: {wins}")
            print(f"Last move: ({row}, {col})\n")
            print(env.render())

            if done:
                if info.get("phase") == "WON":
                    wins += 1
                    print(f"\n*** WIN! ***")
                else:
                    print(f"\n*** LOST (hit mine) ***")

            time.sleep(delay)

    print(f"\n=== Final: {wins}/{games} wins ({100 * wins / max(games, 1):.0f}%) ===")
    return wins


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser()
    parser.add_argument("--delay", type=float, default=0.3, help="Delay between moves")
    parser.add_argument("--games", type=int, default=5, help="Number of games")
    parser.add_argument("--size", type=int, default=9, help="Board size (NxN)")
    parser.add_argument("--difficulty", default="beginner", help="beginner, intermediate or expert")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    args = parser.parse_args()

    run_demo(
        delay=args.delay,
        games=args.games,
        size=args.size,
        difficulty=Difficulty.from_name(args.difficulty),
        seed=args.seed,
    )
