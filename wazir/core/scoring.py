"""
Scoring rules and score-delta calculations.
"""

import copy
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Mapping, Optional, Union, TYPE_CHECKING

from .exceptions import InvalidOutcome
from .roles import RoleType, generate_roles

if TYPE_CHECKING:
    from ..storage.room_store import GameStorage

logger = logging.getLogger(__name__)

ScoringTable = Dict[str, Dict[str, int]]


class Outcome(Enum):
    """Human-declared result of a round."""
    WAZIR_CORRECT = "wazirCorrect"  # Detective found the CHOR
    WAZIR_WRONG = "wazirWrong"  # Detective picked the wrong player

    @property
    def label(self) -> str:
        return "WAZIR guessed correctly" if self is Outcome.WAZIR_CORRECT else "WAZIR guessed wrong"


DEFAULT_SCORING: ScoringTable = {
    Outcome.WAZIR_CORRECT.value: {
        RoleType.BADSHA.value: 3,
        RoleType.WAZIR.value: 5,
        RoleType.CHOR.value: 0,
        RoleType.SIPAHI.value: 1,
    },
    Outcome.WAZIR_WRONG.value: {
        RoleType.BADSHA.value: 0,
        RoleType.WAZIR.value: -1,
        RoleType.CHOR.value: 6,
        RoleType.SIPAHI.value: 0,
    },
}


@dataclass
class DeltaSummary:
    """One line of the points confirmation shown before applying a round."""
    player_number: int
    role: Optional[RoleType]
    delta: int

    def __str__(self) -> str:
        role_name = self.role.value if self.role else "?"
        return f"Player {self.player_number} ({role_name}): {self.delta:+d}"


def parse_outcome(outcome: Union[Outcome, str]) -> Outcome:
    """Resolve an Outcome from an enum member or its persisted key."""
    if isinstance(outcome, Outcome):
        return outcome
    try:
        return Outcome(outcome)
    except ValueError:
        raise InvalidOutcome(outcome) from None


def _coerce_points(value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def normalize_scoring(config: Optional[Mapping]) -> ScoringTable:
    """
    Fill in a scoring table so every outcome has every role.

    Missing outcomes fall back to the defaults, missing roles inside a
    present outcome count as 0.
    """
    if not config:
        return copy.deepcopy(DEFAULT_SCORING)

    table: ScoringTable = {}
    for outcome in Outcome:
        saved = config.get(outcome.value)
        if not isinstance(saved, Mapping):
            table[outcome.value] = dict(DEFAULT_SCORING[outcome.value])
            continue
        table[outcome.value] = {
            role.value: _coerce_points(saved.get(role.value, 0)) for role in RoleType
        }
    return table


class ScoringConfigStore:
    """Reads and writes the player's scoring table through GameStorage."""

    def __init__(self, storage: 'GameStorage'):
        self.storage = storage

    def get_config(self) -> ScoringTable:
        """Get the saved scoring table, or the defaults if none is saved."""
        return normalize_scoring(self.storage.load_scoring_config())

    def set_config(self, config: Mapping) -> ScoringTable:
        """Save a complete scoring table."""
        table = normalize_scoring(config)
        self.storage.save_scoring_config(table)
        return table

    def set_value(self, outcome: Union[Outcome, str], role: Union[RoleType, str], value) -> ScoringTable:
        """Change the points one role receives for one outcome."""
        outcome = parse_outcome(outcome)
        role = role if isinstance(role, RoleType) else RoleType(role)
        table = self.get_config()
        table[outcome.value][role.value] = _coerce_points(value)
        self.storage.save_scoring_config(table)
        return table

    def reset_config(self) -> ScoringTable:
        """Restore and save the default scoring table."""
        table = copy.deepcopy(DEFAULT_SCORING)
        self.storage.save_scoring_config(table)
        logger.info("Scoring configuration reset to defaults")
        return table


def calculate_deltas(room_code: str, round_number: int, num_players: int,
                     outcome: Union[Outcome, str],
                     config: Optional[Mapping] = None) -> Dict[int, int]:
    """
    Calculate score deltas for all players based on round outcome.

    Args:
        room_code: The room code
        round_number: The round number
        num_players: Number of players
        outcome: The declared outcome of the round
        config: Scoring table to use (defaults to DEFAULT_SCORING)

    Returns:
        Map of player number to delta

    Raises:
        InvalidOutcome: If outcome is not a known outcome
        InvalidPlayerCount: If num_players is below 4
    """
    outcome = parse_outcome(outcome)
    roles = generate_roles(room_code, round_number, num_players)
    delta_map = (config if config is not None else DEFAULT_SCORING).get(outcome.value) or {}

    deltas = {}
    for index, role in enumerate(roles):
        deltas[index + 1] = _coerce_points(delta_map.get(role.value, 0))
    return deltas


def apply_deltas(scoreboard: Mapping[int, int], deltas: Mapping[int, int]) -> Dict[int, int]:
    """Return a new scoreboard with deltas added; the input is not modified."""
    new_scoreboard = dict(scoreboard)
    for player_number, delta in deltas.items():
        new_scoreboard[player_number] = new_scoreboard.get(player_number, 0) + delta
    return new_scoreboard


def summarize_deltas(deltas: Mapping[int, int], roles: List[RoleType]) -> List[DeltaSummary]:
    """Join each delta with the player's role, ordered by player number."""
    summary = []
    for player_number, delta in deltas.items():
        player_number = int(player_number)
        role = roles[player_number - 1] if 1 <= player_number <= len(roles) else None
        summary.append(DeltaSummary(player_number=player_number, role=role, delta=delta))
    return sorted(summary, key=lambda item: item.player_number)


def total_delta(deltas: Mapping[int, int]) -> int:
    """Sum of all points handed out in a round."""
    return sum(deltas.values())
