"""
Persisted game records: scoreboards, room state, scoring config and identity.

Data is scoped by room code for per-room persistence. Storage failures are
logged and treated as "nothing was saved" so a broken disk never interrupts
a round.
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Any, Optional, Mapping

from ..core.exceptions import MalformedImportPayload
from ..core.roles import MIN_PLAYERS
from .backends import KeyValueStore

logger = logging.getLogger(__name__)

STORAGE_PREFIX = "wazir_game_"


@dataclass
class RoomState:
    """Shared room settings every device keeps a copy of."""
    num_players: int
    round_number: int = 1

    def to_dict(self) -> Dict[str, int]:
        return {"roundNumber": self.round_number, "numPlayers": self.num_players}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'RoomState':
        return cls(
            num_players=int(data["numPlayers"]),
            round_number=int(data.get("roundNumber", 1)),
        )


@dataclass
class PlayerIdentity:
    """What this device remembers about its owner between launches."""
    room_code: str
    player_number: int
    num_players: int
    display_name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "roomCode": self.room_code,
            "playerNumber": self.player_number,
            "displayName": self.display_name,
            "numPlayers": self.num_players,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'PlayerIdentity':
        return cls(
            room_code=str(data["roomCode"]),
            player_number=int(data["playerNumber"]),
            num_players=int(data["numPlayers"]),
            display_name=str(data.get("displayName") or ""),
        )


@dataclass
class ImportResult:
    """Outcome of importing an exported scoreboard."""
    success: bool
    room_code: Optional[str] = None
    error: Optional[str] = None


def room_key(room_code: str, suffix: str) -> str:
    """Storage key for room-specific data."""
    return f"{STORAGE_PREFIX}room_{room_code}_{suffix}"


def player_key(suffix: str) -> str:
    """Storage key for data owned by this device's player."""
    return f"{STORAGE_PREFIX}player_{suffix}"


def _scoreboard_to_record(scoreboard: Mapping[int, int]) -> Dict[str, int]:
    return {str(player): int(score) for player, score in scoreboard.items()}


def _scoreboard_from_record(record: Mapping[str, Any]) -> Dict[int, int]:
    return {int(player): int(score) for player, score in record.items()}


class GameStorage:
    """Reads and writes game records through an injected key-value store."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def _write(self, key: str, value: Any, what: str) -> None:
        try:
            self.store.set(key, json.dumps(value))
        except OSError as e:
            logger.error("Failed to save %s: %s", what, e)

    def _read(self, key: str, what: str) -> Any:
        try:
            data = self.store.get(key)
            return json.loads(data) if data else None
        except (OSError, ValueError) as e:
            logger.error("Failed to load %s: %s", what, e)
            return None

    # Player identity

    def save_player_identity(self, identity: PlayerIdentity) -> None:
        self._write(player_key("identity"), identity.to_dict(), "player data")

    def load_player_identity(self) -> Optional[PlayerIdentity]:
        data = self._read(player_key("identity"), "player data")
        if data is None:
            return None
        try:
            return PlayerIdentity.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            logger.error("Failed to load player data: %s", e)
            return None

    # Scoreboard

    def save_scoreboard(self, room_code: str, scoreboard: Mapping[int, int]) -> None:
        self._write(room_key(room_code, "scoreboard"), _scoreboard_to_record(scoreboard), "scoreboard")

    def load_scoreboard(self, room_code: str) -> Dict[int, int]:
        data = self._read(room_key(room_code, "scoreboard"), "scoreboard")
        if not data:
            return {}
        try:
            return _scoreboard_from_record(data)
        except (AttributeError, TypeError, ValueError) as e:
            logger.error("Failed to load scoreboard: %s", e)
            return {}

    # Room state

    def save_room_state(self, room_code: str, state: RoomState) -> None:
        self._write(room_key(room_code, "state"), state.to_dict(), "room state")

    def load_room_state(self, room_code: str) -> Optional[RoomState]:
        data = self._read(room_key(room_code, "state"), "room state")
        if data is None:
            return None
        try:
            return RoomState.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            logger.error("Failed to load room state: %s", e)
            return None

    # Scoring configuration

    def save_scoring_config(self, config: Mapping[str, Mapping[str, int]]) -> None:
        self._write(player_key("scoring_config"), config, "scoring config")

    def load_scoring_config(self) -> Optional[Dict[str, Dict[str, int]]]:
        data = self._read(player_key("scoring_config"), "scoring config")
        return data if isinstance(data, dict) else None

    # Export / import

    def export_scoreboard(self, room_code: str) -> str:
        """Export a room's scoreboard and state as copyable JSON text."""
        state = self.load_room_state(room_code)
        exported_at = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
        return json.dumps({
            "roomCode": room_code,
            "scoreboard": _scoreboard_to_record(self.load_scoreboard(room_code)),
            "state": state.to_dict() if state else None,
            "exportedAt": exported_at,
        }, indent=2)

    def import_scoreboard(self, text: str) -> ImportResult:
        """
        Import text produced by export_scoreboard.

        Only the scoreboard and state of the exported room are overwritten.
        Nothing is written when the text is rejected.
        """
        try:
            room_code, scoreboard, state = self._parse_import(text)
        except MalformedImportPayload as e:
            logger.error("Failed to import scoreboard: %s", e.message)
            return ImportResult(success=False, error=e.message)

        if scoreboard is not None:
            self.save_scoreboard(room_code, scoreboard)
        if state is not None:
            self.save_room_state(room_code, state)
        logger.info("Imported scoreboard for room %s", room_code)
        return ImportResult(success=True, room_code=room_code)

    @staticmethod
    def _parse_import(text: str):
        try:
            data = json.loads(text)
        except (TypeError, ValueError) as e:
            raise MalformedImportPayload(f"Invalid scoreboard data: {e}") from e

        if not isinstance(data, dict):
            raise MalformedImportPayload("Invalid scoreboard data: expected a JSON object")
        room_code = data.get("roomCode")
        if not room_code:
            raise MalformedImportPayload("Invalid scoreboard data: missing roomCode")

        scoreboard = None
        state = None
        try:
            if data.get("scoreboard") is not None:
                scoreboard = _scoreboard_from_record(data["scoreboard"])
            if data.get("state") is not None:
                state = RoomState.from_dict(data["state"])
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise MalformedImportPayload(f"Invalid scoreboard data: {e}") from e

        if state is not None and (state.num_players < MIN_PLAYERS or state.round_number < 1):
            raise MalformedImportPayload(
                f"Invalid scoreboard data: room state {state.to_dict()} needs at least "
                f"{MIN_PLAYERS} players and a positive round number"
            )

        return str(room_code), scoreboard, state

    def clear_room_data(self, room_code: str) -> None:
        """Remove the scoreboard and state stored for a room."""
        for suffix in ("scoreboard", "state"):
            try:
                self.store.delete(room_key(room_code, suffix))
            except OSError as e:
                logger.error("Failed to clear room data: %s", e)
