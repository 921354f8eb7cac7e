"""Play a seeded board with one of the benchmark bots, or benchmark all of them."""

import argparse
import json

from obstaclegame.agents import GreedySinglesBot, LargestGroupBot, RandomBot
from obstaclegame.evaluation.benchmark import Benchmark, play_game
from obstaclegame.game.game_config import GameFactory, StageConfig

BOTS = {
    "random": RandomBot,
    "largest": LargestGroupBot,
    "greedy": GreedySinglesBot,
}

CONFIGS = {
    "small": GameFactory.small,
    "medium": GameFactory.medium,
    "large": GameFactory.large,
}


def load_stage(path: str) -> StageConfig:
    with open(path, encoding="utf-8") as f:
        return StageConfig.from_dict(json.load(f))


def main() -> None:
    parser = argparse.ArgumentParser(description="Obstacle SameGame rule engine demo")
    parser.add_argument("--size", choices=sorted(CONFIGS), default="large", help="Board preset")
    parser.add_argument("--stage", default=None, help="Stage JSON file with obstacle placements")
    parser.add_argument("--bot", choices=sorted(BOTS), default="greedy", help="Bot that plays the game")
    parser.add_argument("--seed", type=int, default=42, help="RNG seed for the board")
    parser.add_argument("--benchmark", type=int, default=0, metavar="N",
                        help="Run every built-in bot on N seeded games instead")
    parser.add_argument("--save", default=None, help="Pickle benchmark results to this path")
    args = parser.parse_args()

    config = CONFIGS[args.size]()
    stage = load_stage(args.stage) if args.stage else None

    if args.benchmark:
        benchmark = Benchmark(config, stage, num_games=args.benchmark, base_seed=args.seed)
        benchmark.run_bots()
        benchmark.print_summary()
        if args.save:
            benchmark.save(args.save)
            print(f"Saved results to {args.save}")
        return

    benchmark = Benchmark(config, stage, num_games=1, base_seed=args.seed)
    snapshot = benchmark.get_game(0)
    bot = BOTS[args.bot]()
    performance = play_game(bot, snapshot)

    print(f"{bot.name} on a {config.width}x{config.height} board with {config.num_colors} colors")
    print(f"Moves: {performance.moves_made}")
    print(f"Blocks cleared: {performance.blocks_cleared}")
    print(f"Singles left: {performance.singles_remaining}")
    print(f"Score: {performance.score}")
    print("Board cleared!" if performance.completed else "No moves left.")


if __name__ == "__main__":
    main()
