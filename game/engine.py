"""
Game Engine - Core game loop that resolves commands and advances the game.

Handles:
- Compound attack commands (close in, then strike every tick)
- Combat resolution and death bookkeeping
- History logging (damage, deaths, commands, feedback)
- Win/loss detection
"""

from typing import Dict, Optional, Tuple

from game.actions import Action
from game.game_map import GameMap
from game.game_state import GameState
from game.history import (
    History, DamageLog, DeathLog, ActionResult, ActionFeedback,
)
from game.units import Unit, chebyshev_distance


class GameEngine:
    """
    The core game engine that processes commands and advances game state.
    Provides a Gym-like reset/step interface for controllers.
    """

    def __init__(self, map_size: int = 12, max_ticks: int = 500,
                 squad_size: int = 5):
        self.map_size = map_size
        self.max_ticks = max_ticks
        self.squad_size = squad_size
        self.state: Optional[GameState] = None
        self.history: Optional[History] = None
        # unit_id -> command still being carried out
        self.active_commands: Dict[int, Action] = {}

    def reset(self, game_map: Optional[GameMap] = None) -> GameState:
        """Reset the game to initial state."""
        if game_map is None:
            game_map = GameMap.create_skirmish_map(self.map_size, self.squad_size)

        self.state = GameState(game_map)
        self.state.max_ticks = self.max_ticks
        self.history = History()
        self.active_commands = {}

        return self.state

    def step(self, p0_commands: Dict[int, Action],
             p1_commands: Dict[int, Action]) -> Tuple[GameState, Dict]:
        """
        Process one game tick with commands from both players.

        Commands are {unit_id: Action}; units without a new command keep
        carrying out their previous one.
        Returns: (state, info_dict)
        """
        if self.state is None:
            raise RuntimeError("Call reset() before step()")

        tick = self.state.tick

        self._assign_commands(p0_commands, player=0)
        self._assign_commands(p1_commands, player=1)

        for unit_id in sorted(self.active_commands):
            self._execute(unit_id, tick)

        self._remove_dead_units()

        self.state.tick += 1

        done, winner = self.state.check_game_over()
        if done:
            self.state.done = True
            self.state.winner = winner

        info = {
            'tick': self.state.tick,
            'done': self.state.done,
            'winner': self.state.winner,
            'p0_units': len(self.state.game_map.get_player_units(0)),
            'p1_units': len(self.state.game_map.get_player_units(1)),
        }

        return self.state, info

    def _assign_commands(self, commands: Dict[int, Action], player: int):
        """Accept new commands for a player's living units."""
        for unit_id, action in (commands or {}).items():
            unit = self.state.get_unit(unit_id)
            if unit is None or unit.player != player:
                continue
            self.history.add_command(self.state.tick, player, action)
            self.active_commands[unit_id] = action

    def _execute(self, unit_id: int, tick: int):
        """Carry out one tick of a unit's command and record its feedback."""
        action = self.active_commands[unit_id]
        unit = self.state.get_unit(unit_id)
        if unit is None:
            del self.active_commands[unit_id]
            return

        target = self.state.get_unit(action.target_id)
        if target is None or target.player == unit.player:
            self._finish(unit, action, ActionFeedback.FAILED, tick)
            return

        if unit.in_attack_range(target.x, target.y):
            self._strike(unit, target, tick)
            if not target.is_alive:
                self._finish(unit, action, ActionFeedback.COMPLETED, tick)
                return
        elif not self._step_toward(unit, target):
            self._finish(unit, action, ActionFeedback.FAILED, tick)
            return

        self.history.add_feedback(
            tick, unit.player, ActionResult(action, ActionFeedback.INCOMPLETE)
        )

    def _strike(self, unit: Unit, target: Unit, tick: int):
        damage = target.take_damage(unit.stats.damage)
        self.history.add_damage(tick, DamageLog(
            attacker_id=unit.unit_id, attacker_player=unit.player,
            defender_id=target.unit_id, defender_player=target.player,
            damage=damage,
        ))
        if not target.is_alive:
            self.history.add_death(tick, DeathLog(
                player=target.player, unit_id=target.unit_id
            ))

    def _step_toward(self, unit: Unit, target: Unit) -> bool:
        """Move one cell closer to the target. Returns success."""
        if not unit.can_move:
            return False
        current = unit.distance_to(target.x, target.y)
        best = None
        best_dist = current
        for nx, ny in self.state.game_map.empty_neighbours(unit.x, unit.y):
            dist = chebyshev_distance(nx, ny, target.x, target.y)
            if dist < best_dist:
                best, best_dist = (nx, ny), dist
        if best is None:
            return False
        return self.state.game_map.move_unit(unit.unit_id, *best)

    def _finish(self, unit: Unit, action: Action, feedback: ActionFeedback,
                tick: int):
        self.history.add_feedback(tick, unit.player, ActionResult(action, feedback))
        self.active_commands.pop(unit.unit_id, None)

    def _remove_dead_units(self):
        """Remove all dead units from the map."""
        dead_ids = [uid for uid, u in self.state.game_map.units.items()
                    if not u.is_alive]
        for uid in dead_ids:
            self.state.game_map.remove_unit(uid)
            self.active_commands.pop(uid, None)
