"""
Role definitions and deterministic role distribution.

Every device in a room computes the same assignment from the shared room
code, the round number and the player count.
"""

from enum import Enum
from typing import List, Optional, Union

from .exceptions import InvalidPlayerCount, InvalidPlayerNumber
from .rng import hash_seed, make_rng, shuffle

ROLE_SEED_SALT = "BADSHA-WAZIR-CHOR-SIPAHI"
MIN_PLAYERS = 4


class RoleType(Enum):
    """Player role types."""
    BADSHA = "BADSHA"  # Leader
    WAZIR = "WAZIR"  # Detective
    CHOR = "CHOR"  # Saboteur
    SIPAHI = "SIPAHI"  # Everyone else

    def __str__(self) -> str:
        return self.value


ROLE_TIPS = {
    RoleType.BADSHA: "Decide the WAZIR and ask the question aloud.",
    RoleType.WAZIR: "Detect and identify the CHOR.",
    RoleType.CHOR: "Blend in with SIPAHI.",
    RoleType.SIPAHI: "Observe and help identify the CHOR.",
}


def build_role_pool(num_players: int) -> List[RoleType]:
    """
    Get the unshuffled role list for a room.
    Returns: 1 BADSHA, 1 WAZIR, 1 CHOR, and SIPAHI for every other seat
    """
    if num_players < MIN_PLAYERS:
        raise InvalidPlayerCount(num_players, MIN_PLAYERS)

    roles = [RoleType.BADSHA, RoleType.WAZIR, RoleType.CHOR]
    roles.extend([RoleType.SIPAHI] * (num_players - 3))
    return roles


def build_role_seed(room_code: str, round_number: int) -> int:
    """Compute the shuffle seed for one round of one room."""
    return hash_seed(f"{room_code}|{round_number}|{ROLE_SEED_SALT}")


def generate_roles(room_code: str, round_number: int, num_players: int) -> List[RoleType]:
    """
    Generate the role assignment for a round.

    Args:
        room_code: The shared room code
        round_number: The current round number (>= 1)
        num_players: Number of players (>= 4)

    Returns:
        Roles indexed by player_number - 1

    Raises:
        InvalidPlayerCount: If num_players is below 4
    """
    roles = build_role_pool(num_players)
    rng = make_rng(build_role_seed(room_code, round_number))
    return shuffle(roles, rng)


def get_role_for_player(room_code: str, round_number: int, num_players: int,
                        player_number: int) -> RoleType:
    """
    Get the role held by one player this round.

    Raises:
        InvalidPlayerNumber: If player_number is outside 1..num_players
        InvalidPlayerCount: If num_players is below 4
    """
    if player_number < 1 or player_number > num_players:
        raise InvalidPlayerNumber(player_number, num_players)

    roles = generate_roles(room_code, round_number, num_players)
    return roles[player_number - 1]


def get_role_tip(role: Optional[Union[RoleType, str]]) -> str:
    """Get the tip shown next to a revealed role ("" for unknown roles)."""
    if isinstance(role, str):
        try:
            role = RoleType(role)
        except ValueError:
            return ""
    return ROLE_TIPS.get(role, "")


def find_player_with_role(roles: List[RoleType], role: RoleType) -> Optional[int]:
    """Get the player number holding a role, or None if nobody holds it."""
    for index, assigned in enumerate(roles):
        if assigned == role:
            return index + 1
    return None
