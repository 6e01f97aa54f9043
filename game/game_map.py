"""
Game Map - Grid-based battlefield with terrain and units.

Maps are rectangular grids where each cell can contain:
- Empty terrain (passable)
- Wall terrain (impassable)
- A unit (only one unit per cell)
"""

from typing import List, Optional, Tuple, Dict
from enum import IntEnum

from game.units import Unit, UnitType


class Terrain(IntEnum):
    EMPTY = 0
    WALL = 1


# 8-connected neighbourhood, ordered N, NE, E, SE, S, SW, W, NW
NEIGHBOUR_OFFSETS = [
    (0, -1), (1, -1), (1, 0), (1, 1),
    (0, 1), (-1, 1), (-1, 0), (-1, -1),
]


class GameMap:
    """Grid-based battlefield."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.terrain: List[List[int]] = [
            [Terrain.EMPTY] * width for _ in range(height)
        ]
        self.units: Dict[int, Unit] = {}  # unit_id -> Unit
        self._next_unit_id = 0
        # Spatial index: (x, y) -> unit_id
        self._pos_index: Dict[Tuple[int, int], int] = {}

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_passable(self, x: int, y: int) -> bool:
        """Check if a cell is in bounds and not a wall."""
        if not self.in_bounds(x, y):
            return False
        return self.terrain[y][x] != Terrain.WALL

    def is_empty(self, x: int, y: int) -> bool:
        """Check if a cell is passable and has no unit."""
        return self.is_passable(x, y) and (x, y) not in self._pos_index

    def get_unit_at(self, x: int, y: int) -> Optional[Unit]:
        """Get unit at position, or None."""
        uid = self._pos_index.get((x, y))
        if uid is not None:
            return self.units.get(uid)
        return None

    def add_unit(self, unit_type: UnitType, player: int, x: int, y: int,
                 hp: int = -1) -> Optional[Unit]:
        """Add a new unit to the map. Returns the unit or None if cell occupied."""
        if not self.is_empty(x, y):
            return None

        uid = self._next_unit_id
        self._next_unit_id += 1
        unit = Unit(unit_id=uid, unit_type=unit_type, player=player,
                    x=x, y=y, hp=hp)
        self.units[uid] = unit
        self._pos_index[(x, y)] = uid
        return unit

    def remove_unit(self, unit_id: int):
        """Remove a unit from the map."""
        unit = self.units.pop(unit_id, None)
        if unit:
            self._pos_index.pop((unit.x, unit.y), None)

    def move_unit(self, unit_id: int, new_x: int, new_y: int) -> bool:
        """Move a unit to a new position. Returns success."""
        unit = self.units.get(unit_id)
        if not unit:
            return False
        if not self.is_empty(new_x, new_y):
            return False

        self._pos_index.pop((unit.x, unit.y), None)
        unit.x = new_x
        unit.y = new_y
        self._pos_index[(new_x, new_y)] = unit_id
        return True

    def get_player_units(self, player: int) -> List[Unit]:
        """Get all living units belonging to a player, in id order."""
        return [u for u in self.units.values() if u.player == player and u.is_alive]

    def empty_neighbours(self, x: int, y: int) -> List[Tuple[int, int]]:
        """Get empty 8-connected neighbour positions."""
        return [(x + dx, y + dy) for dx, dy in NEIGHBOUR_OFFSETS
                if self.is_empty(x + dx, y + dy)]

    def set_wall(self, x: int, y: int):
        """Set a cell as wall terrain."""
        if self.in_bounds(x, y):
            self.terrain[y][x] = Terrain.WALL

    @classmethod
    def create_skirmish_map(cls, size: int = 12, squad_size: int = 5) -> 'GameMap':
        """
        Create a symmetric two-squad map.
        Player 0 lines up along the left edge, player 1 along the right edge,
        both centred vertically.
        """
        gm = cls(size, size)
        top = max(0, (size - squad_size) // 2)

        for i in range(squad_size):
            y = min(size - 1, top + i)
            gm.add_unit(UnitType.FOOTMAN, player=0, x=1, y=y)
        for i in range(squad_size):
            y = min(size - 1, top + i)
            gm.add_unit(UnitType.FOOTMAN, player=1, x=size - 2, y=y)

        return gm
