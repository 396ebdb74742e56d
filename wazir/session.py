"""
Room session: one device's view of a room across rounds.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

from .core import (
    InvalidPlayerCount,
    InvalidPlayerNumber,
    MIN_PLAYERS,
    Outcome,
    RoleType,
    DeltaSummary,
    ScoringConfigStore,
    apply_deltas,
    calculate_deltas,
    generate_roles,
    get_role_for_player,
    get_role_tip,
    summarize_deltas,
)
from .storage import GameStorage, PlayerIdentity, RoomState

logger = logging.getLogger(__name__)


def normalize_room_code(room_code: str) -> str:
    """Room codes are shared aloud, so case and surrounding spaces don't matter."""
    return (room_code or "").strip().upper()


@dataclass
class GameSession:
    """Complete local state of one player in one room."""
    storage: GameStorage
    room_code: str
    player_number: int
    state: RoomState
    display_name: str = ""
    scoreboard: Dict[int, int] = field(default_factory=dict)

    @classmethod
    def join(cls, storage: GameStorage, room_code: str, player_number: int,
             num_players: int, display_name: str = "",
             max_players: Optional[int] = None) -> 'GameSession':
        """
        Join a room, creating its state on first use.

        The first device to join fixes the player count; later joiners
        use the stored count and ignore their own.

        Raises:
            ValueError: If the room code is empty
            InvalidPlayerCount: If num_players is below 4 or above max_players
            InvalidPlayerNumber: If player_number is outside the room
        """
        room_code = normalize_room_code(room_code)
        if not room_code:
            raise ValueError("Please enter a room code.")

        if num_players < MIN_PLAYERS:
            raise InvalidPlayerCount(num_players, MIN_PLAYERS)
        if max_players is not None and num_players > max_players:
            raise InvalidPlayerCount(
                num_players, MIN_PLAYERS,
                message=f"At most {max_players} players are supported (got {num_players})",
            )

        state = storage.load_room_state(room_code)
        if state is None:
            state = RoomState(num_players=num_players, round_number=1)
            storage.save_room_state(room_code, state)
            logger.info("Created room %s for %d players", room_code, num_players)
        elif state.num_players != num_players:
            logger.info("Room %s already has %d players; ignoring %d",
                        room_code, state.num_players, num_players)

        if player_number < 1 or player_number > state.num_players:
            raise InvalidPlayerNumber(player_number, state.num_players)

        display_name = (display_name or "").strip()
        storage.save_player_identity(PlayerIdentity(
            room_code=room_code,
            player_number=player_number,
            num_players=state.num_players,
            display_name=display_name,
        ))

        return cls(
            storage=storage,
            room_code=room_code,
            player_number=player_number,
            state=state,
            display_name=display_name,
            scoreboard=storage.load_scoreboard(room_code),
        )

    @classmethod
    def resume(cls, storage: GameStorage) -> Optional['GameSession']:
        """
        Rejoin the room this device used last, if it remembers one.

        Nothing is written unless the room state has gone missing, in which
        case the room is joined again from the saved identity.
        """
        identity = storage.load_player_identity()
        if identity is None:
            return None

        state = storage.load_room_state(identity.room_code)
        if state is not None:
            if identity.player_number < 1 or identity.player_number > state.num_players:
                raise InvalidPlayerNumber(identity.player_number, state.num_players)
            return cls(
                storage=storage,
                room_code=identity.room_code,
                player_number=identity.player_number,
                state=state,
                display_name=identity.display_name,
                scoreboard=storage.load_scoreboard(identity.room_code),
            )

        return cls.join(
            storage,
            identity.room_code,
            identity.player_number,
            identity.num_players,
            identity.display_name,
        )

    @property
    def round_number(self) -> int:
        return self.state.round_number

    @property
    def num_players(self) -> int:
        return self.state.num_players

    @property
    def scoring(self) -> ScoringConfigStore:
        return ScoringConfigStore(self.storage)

    def current_roles(self) -> List[RoleType]:
        """All roles this round. Only meant for the end-of-round reveal."""
        return generate_roles(self.room_code, self.round_number, self.num_players)

    def current_role(self) -> RoleType:
        """This player's role for the current round."""
        return get_role_for_player(self.room_code, self.round_number, self.num_players, self.player_number)

    def current_tip(self) -> str:
        return get_role_tip(self.current_role())

    def calculate_round_deltas(self, outcome: Union[Outcome, str]) -> Dict[int, int]:
        return calculate_deltas(
            self.room_code,
            self.round_number,
            self.num_players,
            outcome,
            config=self.scoring.get_config(),
        )

    def preview_deltas(self, outcome: Union[Outcome, str]) -> List[DeltaSummary]:
        """Points each player would get, shown before confirming a round."""
        return summarize_deltas(self.calculate_round_deltas(outcome), self.current_roles())

    def end_round(self, outcome: Union[Outcome, str]) -> Dict[int, int]:
        """
        Apply points for the declared outcome and move to the next round.

        Points are applied on this device only; every other device has to
        confirm the same outcome to keep scores consistent.
        """
        deltas = self.calculate_round_deltas(outcome)
        self.scoreboard = apply_deltas(self.scoreboard, deltas)
        self.storage.save_scoreboard(self.room_code, self.scoreboard)
        logger.info("Round %d of room %s scored", self.round_number, self.room_code)
        self._advance_round()
        return deltas

    def skip_round(self) -> None:
        """Move to the next round without scoring (aborted rounds)."""
        logger.info("Round %d of room %s skipped", self.round_number, self.room_code)
        self._advance_round()

    def _advance_round(self) -> None:
        self.state = RoomState(num_players=self.num_players, round_number=self.round_number + 1)
        self.storage.save_room_state(self.room_code, self.state)

    def standings(self) -> List[Tuple[int, int]]:
        """(player number, score) pairs, highest score first, every seat included."""
        scores = [(player, self.scoreboard.get(player, 0)) for player in range(1, self.num_players + 1)]
        for player, score in self.scoreboard.items():
            if player > self.num_players or player < 1:
                scores.append((player, score))
        return sorted(scores, key=lambda item: (-item[1], item[0]))

    def reload(self) -> None:
        """Pick up changes written by an import."""
        state = self.storage.load_room_state(self.room_code)
        if state is not None:
            self.state = state
        self.scoreboard = self.storage.load_scoreboard(self.room_code)
