"""
Core game components: seeded shuffling, role distribution and scoring.
"""

from .exceptions import (
    WazirGameError,
    InvalidPlayerCount,
    InvalidPlayerNumber,
    InvalidOutcome,
    MalformedImportPayload,
)
from .rng import hash_seed, make_rng, shuffle, Mulberry32
from .roles import (
    RoleType,
    MIN_PLAYERS,
    ROLE_SEED_SALT,
    build_role_pool,
    build_role_seed,
    generate_roles,
    get_role_for_player,
    get_role_tip,
    find_player_with_role,
)
from .scoring import (
    Outcome,
    DEFAULT_SCORING,
    DeltaSummary,
    ScoringConfigStore,
    parse_outcome,
    calculate_deltas,
    apply_deltas,
    summarize_deltas,
    total_delta,
)

__all__ = [
    'WazirGameError',
    'InvalidPlayerCount',
    'InvalidPlayerNumber',
    'InvalidOutcome',
    'MalformedImportPayload',
    'hash_seed',
    'make_rng',
    'shuffle',
    'Mulberry32',
    'RoleType',
    'MIN_PLAYERS',
    'ROLE_SEED_SALT',
    'build_role_pool',
    'build_role_seed',
    'generate_roles',
    'get_role_for_player',
    'get_role_tip',
    'find_player_with_role',
    'Outcome',
    'DEFAULT_SCORING',
    'DeltaSummary',
    'ScoringConfigStore',
    'parse_outcome',
    'calculate_deltas',
    'apply_deltas',
    'summarize_deltas',
    'total_delta',
]
