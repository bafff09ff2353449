"""Soak simulation: let a bot play a long session and check the board after every move."""

import argparse
import logging
from dataclasses import dataclass, field

from tqdm import tqdm

from collapseblast.agents.benchmark_bot_base import BenchmarkBotBase
from collapseblast.agents.largest_group_bot import LargestGroupBot
from collapseblast.agents.random_bot import RandomBot
from collapseblast.game.board import EMPTY_VALUE
from collapseblast.game.engine import Engine
from collapseblast.game.game_config import GameConfig, GameFactory

logger = logging.getLogger(__name__)


@dataclass
class SimulationReport:
    """Aggregated results of one simulated session"""

    bot_name: str
    moves_made: int = 0
    rejected_moves: int = 0
    shuffles: int = 0
    forced_pairs: int = 0
    guarantee_exceeded: int = 0
    max_fall_distance: int = 0
    max_spawn_rank: int = 0
    violations: list[str] = field(default_factory=list)

    @property
    def healthy(self) -> bool:
        return not self.violations


def check_invariants(engine: Engine) -> list[str]:
    """Return a description of every invariant the settled board breaks"""
    problems = []
    cells = engine.board.cells

    if (cells == EMPTY_VALUE).any():
        problems.append("board has empty cells after settling")
    if ((cells != EMPTY_VALUE) & ((cells < 0) | (cells >= engine.config.num_colors))).any():
        problems.append("board holds a color outside the configured range")

    fast = engine.deadlock_detector.fast_check()
    exhaustive = engine.deadlock_detector.exhaustive_check()
    if fast != exhaustive:
        problems.append(f"deadlock checks disagree: fast={fast}, exhaustive={exhaustive}")
    if fast:
        problems.append("board is deadlocked after the move settled")

    return problems


def run_simulation(
    config: GameConfig,
    bot: BenchmarkBotBase,
    num_moves: int = 1000,
    seed: int | None = None,
    show_progress: bool = True,
) -> SimulationReport:
    engine = Engine.new_game(config, seed=seed)
    report = SimulationReport(bot_name=bot.name)
    report.violations.extend(check_invariants(engine))

    for move in tqdm(range(num_moves), desc=f"Running {bot.name}", disable=not show_progress):
        action = bot.select_action(engine)
        if action is None:
            report.violations.append(f"move {move}: bot found no valid group")
            break

        outcome = engine.select_cell(*action)
        if not outcome.accepted:
            report.rejected_moves += 1
            continue

        report.moves_made += 1
        report.max_fall_distance = max(report.max_fall_distance, outcome.max_fall_distance)
        report.max_spawn_rank = max(report.max_spawn_rank, outcome.max_spawn_rank)
        if outcome.shuffle is not None:
            report.shuffles += 1
            report.forced_pairs += outcome.shuffle.forced_pairs
            report.guarantee_exceeded += int(outcome.shuffle.guarantee_exceeded)

        for problem in check_invariants(engine):
            report.violations.append(f"move {move}: {problem}")

    return report


def main():
    parser = argparse.ArgumentParser(description="Run a soak simulation of the collapse engine")
    parser.add_argument("--bot", choices=["random", "largest"], default="random")
    parser.add_argument("--moves", type=int, default=1000)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--rows", type=int)
    parser.add_argument("--cols", type=int)
    parser.add_argument("--colors", type=int)
    args = parser.parse_args()

    logging.basicConfig(level=logging.WARNING)

    config = GameConfig.from_env()
    if args.rows or args.cols or args.colors:
        config = GameFactory.custom(
            args.rows or config.num_rows,
            args.cols or config.num_cols,
            args.colors or config.num_colors,
            config.thresholds,
        )

    bot = RandomBot(seed=args.seed) if args.bot == "random" else LargestGroupBot()
    report = run_simulation(config, bot, num_moves=args.moves, seed=args.seed)

    print("=" * 60)
    print(f"Bot: {report.bot_name}")
    print(f"Board: {config.num_rows}x{config.num_cols}, {config.num_colors} colors")
    print(f"Moves made: {report.moves_made} (rejected: {report.rejected_moves})")
    print(f"Shuffles: {report.shuffles}, forced pairs: {report.forced_pairs}")
    print(f"Max fall distance: {report.max_fall_distance}")
    print(f"Max spawn rank: {report.max_spawn_rank}")
    if report.healthy:
        print("✓ No invariant violations")
    else:
        print(f"✗ {len(report.violations)} invariant violations")
        for violation in report.violations[:20]:
            print(f"  {violation}")
    print("=" * 60)


if __name__ == "__main__":
    main()
