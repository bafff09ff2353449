import logging
import random
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from collapseblast.game.board import Board, Cell
from collapseblast.game.deadlock import DeadlockDetector
from collapseblast.game.game_config import DisplayTier, GameConfig, GameFactory
from collapseblast.game.group_finder import Group, GroupFinder
from collapseblast.game.move_applier import GravityResult, MoveApplier, RefillResult
from collapseblast.game.shuffler import ShuffleResult, Shuffler
from collapseblast.game.visual_classifier import VisualClassifier

logger = logging.getLogger(__name__)


class GameState(Enum):
    IDLE = "idle"
    PROCESSING = "processing"
    SETTLING = "settling"
    SHUFFLING = "shuffling"


class Rejection(Enum):
    NOT_IDLE = "not_idle"
    NO_GROUP = "no_group"
    GROUP_TOO_SMALL = "group_too_small"


@dataclass
class MoveOutcome:
    """What a selection did to the board, or why it was refused"""

    rejection: Rejection | None = None
    group: Group = field(default_factory=list)
    affected_columns: set[int] = field(default_factory=set)
    gravity: GravityResult | None = None
    refill: RefillResult | None = None
    shuffle: ShuffleResult | None = None

    @property
    def accepted(self) -> bool:
        return self.rejection is None

    @property
    def max_fall_distance(self) -> int:
        return self.gravity.max_fall_distance if self.gravity else 0

    @property
    def max_spawn_rank(self) -> int:
        return self.refill.max_spawn_rank if self.refill else 0


PhaseListener = Callable[[GameState, "Engine"], None]


class Engine:
    """
    Owns one board for a game session and sequences every move:
    remove, gravity, refill, classification, deadlock check and shuffle.

    Every mutation of the board goes through the engine. An optional
    phase_listener is called on each state change, which is where a
    presentation layer can play its animations.
    """

    def __init__(
        self,
        board: Board,
        config: GameConfig,
        rng: random.Random | None = None,
        phase_listener: PhaseListener | None = None,
    ):
        config.validate()
        if (board.row_count, board.column_count) != (config.num_rows, config.num_cols):
            raise ValueError(
                f"Board is {board.row_count}x{board.column_count} but config expects "
                f"{config.num_rows}x{config.num_cols}"
            )
        self.config = config
        self.rng = rng if rng is not None else random.Random()
        self.phase_listener = phase_listener
        self.state = GameState.IDLE
        self._attach(board)

    @classmethod
    def new_game(
        cls,
        config: GameConfig = GameFactory.default(),
        seed: int | None = None,
        phase_listener: PhaseListener | None = None,
    ) -> "Engine":
        """Create a randomly filled board that is guaranteed to have a valid move."""
        engine = cls(
            Board(config.num_rows, config.num_cols),
            config,
            rng=random.Random(seed),
            phase_listener=phase_listener,
        )
        engine.start()
        return engine

    def _attach(self, board: Board):
        self.board = board
        self.group_finder = GroupFinder(board)
        self.move_applier = MoveApplier(board, self.config.num_colors, self.rng)
        self.deadlock_detector = DeadlockDetector(board, self.group_finder)
        self.shuffler = Shuffler(board, self.deadlock_detector, self.rng)
        self.classifier = VisualClassifier(board, self.group_finder, self.config)
        self.tiers = self.classifier.classify()

    def start(self) -> ShuffleResult | None:
        """Fill the empty cells of the board and resolve an initial deadlock."""
        self.move_applier.fill_all()
        self.tiers = self.classifier.classify()

        listener_errors = []
        shuffle = None
        try:
            if self.deadlock_detector.fast_check():
                shuffle = self._resolve_deadlock(listener_errors)
        finally:
            self.state = GameState.IDLE
        self._set_state(GameState.IDLE, listener_errors)
        if listener_errors:
            raise listener_errors[0]
        return shuffle

    def restart(self) -> ShuffleResult | None:
        """Throw the current board away and start over on a fresh one"""
        self._attach(Board(self.config.num_rows, self.config.num_cols))
        return self.start()

    def select_cell(self, row: int, col: int) -> MoveOutcome:
        if self.state is not GameState.IDLE:
            logger.debug("Selection (%d, %d) refused while %s", row, col, self.state.value)
            return MoveOutcome(rejection=Rejection.NOT_IDLE)

        group = self.group_finder.find_group(row, col)
        if not group:
            return MoveOutcome(rejection=Rejection.NO_GROUP)
        if len(group) < 2:
            return MoveOutcome(rejection=Rejection.GROUP_TOO_SMALL, group=group)

        # the move always runs to completion, listener errors are raised afterwards
        outcome = MoveOutcome(group=group)
        listener_errors = []
        try:
            self._set_state(GameState.PROCESSING, listener_errors)
            outcome.affected_columns = self.move_applier.remove(group)

            self._set_state(GameState.SETTLING, listener_errors)
            outcome.gravity = self.move_applier.gravity(outcome.affected_columns)
            outcome.refill = self.move_applier.refill(outcome.affected_columns)

            self.tiers = self.classifier.classify()
            if self.deadlock_detector.fast_check():
                outcome.shuffle = self._resolve_deadlock(listener_errors)
        finally:
            self.state = GameState.IDLE
        self._set_state(GameState.IDLE, listener_errors)
        if listener_errors:
            raise listener_errors[0]

        logger.debug(
            "Blasted %d blocks at (%d, %d), max fall %d, max spawn rank %d",
            len(group), row, col, outcome.max_fall_distance, outcome.max_spawn_rank,
        )
        return outcome

    def _resolve_deadlock(self, listener_errors: list[Exception]) -> ShuffleResult:
        self._set_state(GameState.SHUFFLING, listener_errors)
        logger.info("Deadlock detected, shuffling")
        result = self.shuffler.shuffle()
        self.tiers = self.classifier.classify()
        return result

    def _set_state(self, state: GameState, listener_errors: list[Exception]):
        """Switch state and notify the listener, collecting its error instead of raising"""
        self.state = state
        if self.phase_listener is None or listener_errors:
            return
        try:
            self.phase_listener(state, self)
        except Exception as exc:
            logger.warning("Phase listener failed on %s: %r", state.value, exc)
            listener_errors.append(exc)

    def cell_at(self, row: int, col: int) -> Cell:
        return self.board.get(row, col)

    def tier_at(self, row: int, col: int) -> DisplayTier:
        if not self.board.is_valid_position(row, col):
            return DisplayTier.DEFAULT
        return DisplayTier(int(self.tiers[row, col]))

    def is_deadlocked(self) -> bool:
        return self.deadlock_detector.fast_check()

    def find_all_groups(self) -> list[Group]:
        return self.group_finder.find_all_groups()
