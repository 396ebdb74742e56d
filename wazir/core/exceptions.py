"""
Exceptions for invalid game inputs.
"""


class WazirGameError(Exception):
    """Base class for all game validation failures."""


class InvalidPlayerCount(WazirGameError, ValueError):
    """Raised when a room has fewer players than the game needs."""
    
    def __init__(self, num_players: int, minimum: int = 4, message: str = ""):
        self.num_players = num_players
        self.minimum = minimum
        self.message = message or f"Minimum {minimum} players required (got {num_players})"
        super().__init__(self.message)


class InvalidPlayerNumber(WazirGameError, ValueError):
    """Raised when a player number falls outside 1..num_players."""
    
    def __init__(self, player_number: int, num_players: int, message: str = ""):
        self.player_number = player_number
        self.num_players = num_players
        self.message = message or f"Invalid player number {player_number} (expected 1-{num_players})"
        super().__init__(self.message)


class InvalidOutcome(WazirGameError, ValueError):
    """Raised when a round outcome is not one of the known outcomes."""
    
    def __init__(self, outcome, message: str = ""):
        self.outcome = outcome
        self.message = message or f"Invalid outcome: {outcome}"
        super().__init__(self.message)


class MalformedImportPayload(WazirGameError):
    """Raised when exported scoreboard text cannot be imported."""
    
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)
