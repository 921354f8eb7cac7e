"""Benchmark system for consistent bot evaluation across standardized games."""

import pickle
import random
from pathlib import Path

from tqdm import tqdm

from obstaclegame.agents.benchmark_bot_base import BenchmarkBotBase
from obstaclegame.agents.greedy_singles_bot import GreedySinglesBot
from obstaclegame.agents.largest_group_bot import LargestGroupBot
from obstaclegame.agents.random_bot import RandomBot
from obstaclegame.evaluation.benchmark_data import (
    BenchmarkData,
    BotPerformance,
    GameSnapshot,
)
from obstaclegame.game.game import Game
from obstaclegame.game.game_config import GameConfig, StageConfig

MAX_MOVES = 500


def play_game(bot: BenchmarkBotBase, snapshot: GameSnapshot) -> BotPerformance:
    """Let `bot` tap until it finds no move, the board is clear or MAX_MOVES is reached."""
    game = Game(snapshot.config, snapshot.stage, seed=snapshot.seed)
    game.set_board(snapshot.board.copy())

    initial_blocks = game.left
    moves_made = 0

    while moves_made < MAX_MOVES:
        action = bot.select_action(game.get_board())

        if action is None:
            break

        result = game.move(*action)
        moves_made += 1

        # the same board gets the same tap again
        if not result.changed_board:
            break

        if game.all_cleared():
            break

    return BotPerformance(
        bot_name=bot.name,
        game_id=snapshot.game_id,
        blocks_cleared=initial_blocks - game.left,
        singles_remaining=game.get_singles(),
        moves_made=moves_made,
        score=game.score,
        completed=game.all_cleared(),
        stage_cleared=game.stage_cleared(),
    )


class Benchmark:
    """Unified benchmark system for evaluating bots consistently.
    Provides a standardized set of seeded games that bots can be compared on.

    Main Interface:
    - run_bots(): Execute benchmarks on multiple bots
    - get_game(): Get specific game by ID
    - save()/load(): Pickle persistence
    - built_in_bots(): Access to standard benchmark bots
    """

    def __init__(
        self,
        config: GameConfig,
        stage: StageConfig | None = None,
        num_games: int = 100,
        base_seed: int = 42,
    ):
        if num_games < 1:
            raise ValueError(f"num_games must be positive, got {num_games}")

        self.config = config
        self.stage = stage
        self.num_games = num_games
        self.base_seed = base_seed

        self.games: list[GameSnapshot] = []
        self.results: dict[str, list[BotPerformance]] = {}

    def run_bots(
        self, bots: dict[str, BenchmarkBotBase] | None = None
    ) -> dict[str, list[BotPerformance]]:
        """Execute benchmarks on multiple bots.

        Args:
            bots: Dict of bot_name -> bot_instance. Uses built-in bots if None.

        Returns:
            Dict of bot_name -> list of performance results
        """
        if bots is None:
            bots = self.built_in_bots()

        self._generate_games()

        results = {}
        for bot_name, bot in bots.items():
            existing = self.results.get(bot_name, [])
            if len(existing) >= self.num_games:
                print(f"{bot_name}: Using existing results for all {self.num_games} games")
                results[bot_name] = existing[: self.num_games]
                continue

            missing = self.games[len(existing):]
            print(f"{bot_name}: Computing {len(missing)} missing games (total {self.num_games})")
            new_results = [
                play_game(bot, snapshot)
                for snapshot in tqdm(missing, desc=f"Running {bot_name}")
            ]
            self.results[bot_name] = existing + new_results
            results[bot_name] = self.results[bot_name]

        return results

    def summary(self, bot_name: str) -> dict[str, float]:
        """Average the stored results of one bot."""
        results = self.results.get(bot_name)
        if not results:
            raise ValueError(f"No results for bot '{bot_name}'")

        n = len(results)
        return {
            "games": n,
            "avg_score": sum(r.score for r in results) / n,
            "avg_blocks_cleared": sum(r.blocks_cleared for r in results) / n,
            "avg_singles_remaining": sum(r.singles_remaining for r in results) / n,
            "avg_moves": sum(r.moves_made for r in results) / n,
            "completion_rate": sum(r.completed for r in results) / n,
            "stage_clear_rate": sum(r.stage_cleared for r in results) / n,
        }

    def print_summary(self) -> None:
        for bot_name in self.results:
            stats = self.summary(bot_name)
            print(
                f"{bot_name}: avg score {stats['avg_score']:.1f}, "
                f"cleared {stats['avg_blocks_cleared']:.1f}, "
                f"singles {stats['avg_singles_remaining']:.1f}, "
                f"completed {stats['completion_rate']:.1%}"
            )

    def get_game(self, game_id: int) -> GameSnapshot:
        """Get a specific game by ID."""
        if not self.games:
            self._generate_games()

        if 0 <= game_id < len(self.games):
            return self.games[game_id]
        raise IndexError(f"Game ID {game_id} out of range")

    def built_in_bots(self) -> dict[str, BenchmarkBotBase]:
        """Create instances of all built-in benchmark bots."""
        return {
            RandomBot.name: RandomBot(),
            LargestGroupBot.name: LargestGroupBot(),
            GreedySinglesBot.name: GreedySinglesBot(),
        }

    def save(self, filepath: str | Path) -> None:
        """Pickle games, results and settings to `filepath`."""
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = BenchmarkData(
            games=self.games,
            results=self.results,
            config=self.config,
            num_games=self.num_games,
            base_seed=self.base_seed,
            stage=self.stage,
        )
        with open(path, "wb") as f:
            pickle.dump(data, f)

    @classmethod
    def load(cls, filepath: str | Path) -> "Benchmark | None":
        """Rebuild a benchmark from a file written by `save`, or None if there is none."""
        path = Path(filepath)
        if not path.exists():
            return None

        with open(path, "rb") as f:
            data = pickle.load(f)

        benchmark = cls(
            config=data.config,
            stage=data.stage,
            num_games=data.num_games,
            base_seed=data.base_seed,
        )
        benchmark.games = data.games
        benchmark.results = data.results
        return benchmark

    def _generate_games(self) -> None:
        """Generate standardized games with reproducible initial states."""
        if len(self.games) == self.num_games:
            return

        rng = random.Random(self.base_seed)
        self.games = []

        for game_id in range(self.num_games):
            game_seed = rng.randint(0, 2**31 - 1)
            game = Game(self.config, self.stage, seed=game_seed)

            self.games.append(
                GameSnapshot(
                    board=game.get_board(),
                    config=self.config,
                    seed=game_seed,
                    game_id=game_id,
                    stage=self.stage,
                )
            )

    def __len__(self) -> int:
        """Number of games in benchmark."""
        return len(self.games)
