from .models import Player, PlayerRound, RoundInfo, Score
from .provider import (
    FileRoundProvider,
    InMemoryRoundProvider,
    InvalidVenueId,
    PlayerRoundProvider,
    get_round_provider,
)

__all__ = [
    "Player",
    "PlayerRound",
    "RoundInfo",
    "Score",
    "FileRoundProvider",
    "InMemoryRoundProvider",
    "InvalidVenueId",
    "PlayerRoundProvider",
    "get_round_provider",
]
