"""
Game Renderer - ASCII visualization of the battlefield.

Renders the game map as text for debugging and monitoring training.
"""

from game.game_state import GameState
from game.game_map import Terrain
from game.units import UnitType


# Unit type symbols
UNIT_SYMBOLS = {
    UnitType.FOOTMAN: 'f',
    UnitType.ARCHER: 'a',
    UnitType.TOWER: 't',
}


class GameRenderer:
    """ASCII renderer for game state visualization."""

    @staticmethod
    def render(state: GameState, show_info: bool = True) -> str:
        """Render game state as ASCII string."""
        gm = state.game_map
        h, w = gm.height, gm.width
        lines = []

        if show_info:
            p0_units = gm.get_player_units(0)
            p1_units = gm.get_player_units(1)
            lines.append(f"Tick: {state.tick}/{state.max_ticks}  "
                         f"P0 units: {len(p0_units)}  P1 units: {len(p1_units)}")
            lines.append("")

        lines.append("  " + "".join(f"{x % 10}" for x in range(w)))
        lines.append("  " + "-" * w)

        for y in range(h):
            row = f"{y % 10}|"
            for x in range(w):
                unit = gm.get_unit_at(x, y)
                if unit is None:
                    row += "#" if gm.terrain[y][x] == Terrain.WALL else "."
                    continue
                sym = UNIT_SYMBOLS.get(unit.unit_type, "?")
                # Uppercase for player 0, lowercase for player 1
                row += sym.upper() if unit.player == 0 else sym
            row += f"|{y % 10}"
            lines.append(row)

        lines.append("  " + "-" * w)
        lines.append("  " + "".join(f"{x % 10}" for x in range(w)))

        if show_info and state.done:
            if state.winner == 0:
                lines.append("\n*** PLAYER 0 WINS! ***")
            elif state.winner == 1:
                lines.append("\n*** PLAYER 1 WINS! ***")
            else:
                lines.append("\n*** DRAW ***")

        return "\n".join(lines)

    @staticmethod
    def render_compact(state: GameState) -> str:
        """Compact single-line rendering for logging."""
        gm = state.game_map
        p0 = gm.get_player_units(0)
        p1 = gm.get_player_units(1)
        return (f"T{state.tick:04d} "
                f"P0[u={len(p0)} hp={sum(u.hp for u in p0)}] "
                f"P1[u={len(p1)} hp={sum(u.hp for u in p1)}]")
