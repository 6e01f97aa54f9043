"""
Game State - Per-tick view of the battlefield handed to controllers.

Wraps the map with the episode clock and the win/loss bookkeeping.
Controllers only read from it; the engine is the sole writer.
"""

from typing import List, Optional, Tuple

from game.game_map import GameMap
from game.units import Unit


class GameState:
    """
    Complete game state wrapper providing unit lookup and game-over checks.
    """

    def __init__(self, game_map: GameMap):
        self.game_map = game_map
        self.tick = 0
        self.max_ticks = 500
        self.done = False
        self.winner = -1  # -1 = ongoing, 0 = player 0, 1 = player 1, 2 = draw

    def get_unit(self, unit_id: int) -> Optional[Unit]:
        """Living unit with this id, or None once it is gone."""
        unit = self.game_map.units.get(unit_id)
        if unit is None or not unit.is_alive:
            return None
        return unit

    def get_unit_ids(self, player: int) -> List[int]:
        return [u.unit_id for u in self.game_map.get_player_units(player)]

    def get_units(self, player: int) -> List[Unit]:
        return self.game_map.get_player_units(player)

    def check_game_over(self) -> Tuple[bool, int]:
        """
        Check if game is over.

        Game ends when:
        - A player has no units left
        - Max ticks reached (decided by surviving HP)
        """
        p0_units = self.game_map.get_player_units(0)
        p1_units = self.game_map.get_player_units(1)

        if not p0_units and not p1_units:
            return True, 2  # Draw
        if not p0_units:
            return True, 1  # Player 1 wins
        if not p1_units:
            return True, 0  # Player 0 wins
        if self.tick >= self.max_ticks:
            s0 = sum(u.hp for u in p0_units)
            s1 = sum(u.hp for u in p1_units)
            if s0 > s1:
                return True, 0
            elif s1 > s0:
                return True, 1
            return True, 2

        return False, -1
