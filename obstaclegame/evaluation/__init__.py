from .benchmark import Benchmark, play_game
from .benchmark_data import BenchmarkData, BotPerformance, GameSnapshot

__all__ = [
    "Benchmark",
    "play_game",
    "BenchmarkData",
    "BotPerformance",
    "GameSnapshot",
]
