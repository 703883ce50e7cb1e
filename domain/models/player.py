"""
Player domain model.
"""

from dataclasses import dataclass


@dataclass
class Player:
    """
    A player observed by the game server.

    ``player_id`` is the stable external identifier (UUID string);
    ``display_name`` is a cache of the last name seen on join.
    """

    player_id: str
    display_name: str
