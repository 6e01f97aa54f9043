"""
Tests for the squad skirmish game environment.

Tests cover:
- Unit creation and stats
- Map operations
- History logs
- Game engine mechanics (attack, movement, deaths, feedback)
- AI opponents
- Rendering
"""

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from game.units import Unit, UnitType, UNIT_STATS, chebyshev_distance
from game.game_map import GameMap
from game.game_state import GameState
from game.actions import Action, ActionType
from game.history import History, DamageLog, DeathLog, ActionResult, ActionFeedback
from game.engine import GameEngine
from game.ai_opponents import RandomTargetAI, NearestTargetAI, WeakestTargetAI
from game.renderer import GameRenderer


def duel_map(attacker_pos=(1, 1), defender_pos=(2, 1), defender_hp=-1):
    gm = GameMap(8, 8)
    gm.add_unit(UnitType.FOOTMAN, player=0, x=attacker_pos[0], y=attacker_pos[1])
    gm.add_unit(UnitType.FOOTMAN, player=1, x=defender_pos[0], y=defender_pos[1],
                hp=defender_hp)
    return gm


class TestUnits:
    def test_unit_types_exist(self):
        for ut in UnitType:
            assert ut in UNIT_STATS

    def test_unit_creation(self):
        u = Unit(unit_id=0, unit_type=UnitType.FOOTMAN, player=0, x=3, y=4)
        assert u.hp == UNIT_STATS[UnitType.FOOTMAN].hp
        assert u.template_name == "footman"
        assert u.is_alive

    def test_unit_damage(self):
        u = Unit(unit_id=0, unit_type=UnitType.ARCHER, player=0, x=0, y=0)
        assert u.take_damage(20) == 20
        assert u.hp == 30
        assert u.take_damage(100) == 30
        assert u.hp == 0
        assert not u.is_alive

    def test_chebyshev_distance(self):
        assert chebyshev_distance(0, 0, 0, 0) == 0
        assert chebyshev_distance(0, 0, 3, 1) == 3
        assert chebyshev_distance(2, 5, 4, 1) == 4
        u = Unit(unit_id=0, unit_type=UnitType.FOOTMAN, player=0, x=2, y=2)
        assert u.distance_to(3, 3) == 1

    def test_attack_range(self):
        footman = Unit(unit_id=0, unit_type=UnitType.FOOTMAN, player=0, x=5, y=5)
        assert footman.in_attack_range(6, 6)  # diagonal neighbour
        assert not footman.in_attack_range(7, 5)
        archer = Unit(unit_id=1, unit_type=UnitType.ARCHER, player=0, x=5, y=5)
        assert archer.in_attack_range(9, 1)


class TestGameMap:
    def test_add_unit(self):
        gm = GameMap(4, 4)
        u = gm.add_unit(UnitType.FOOTMAN, player=0, x=1, y=1)
        assert u is not None
        assert gm.get_unit_at(1, 1) is u
        assert gm.add_unit(UnitType.FOOTMAN, player=1, x=1, y=1) is None

    def test_unit_ids_sequential(self):
        gm = GameMap(4, 4)
        a = gm.add_unit(UnitType.FOOTMAN, player=0, x=0, y=0)
        b = gm.add_unit(UnitType.FOOTMAN, player=1, x=3, y=3)
        assert (a.unit_id, b.unit_id) == (0, 1)

    def test_move_and_remove(self):
        gm = GameMap(4, 4)
        u = gm.add_unit(UnitType.FOOTMAN, player=0, x=0, y=0)
        assert gm.move_unit(u.unit_id, 1, 1)
        assert gm.get_unit_at(0, 0) is None
        assert gm.get_unit_at(1, 1) is u
        gm.remove_unit(u.unit_id)
        assert gm.get_unit_at(1, 1) is None
        assert u.unit_id not in gm.units

    def test_walls_block(self):
        gm = GameMap(4, 4)
        gm.set_wall(2, 2)
        assert not gm.is_empty(2, 2)
        assert gm.add_unit(UnitType.FOOTMAN, player=0, x=2, y=2) is None

    def test_skirmish_map(self):
        gm = GameMap.create_skirmish_map(size=10, squad_size=4)
        assert len(gm.get_player_units(0)) == 4
        assert len(gm.get_player_units(1)) == 4
        assert all(u.x == 1 for u in gm.get_player_units(0))
        assert all(u.x == 8 for u in gm.get_player_units(1))


class TestGameState:
    def test_get_unit_hides_dead(self):
        state = GameState(duel_map())
        state.game_map.units[1].hp = 0
        assert state.get_unit(1) is None
        assert state.get_unit(0) is not None
        assert state.get_unit(42) is None

    def test_game_over_by_elimination(self):
        gm = GameMap(4, 4)
        gm.add_unit(UnitType.FOOTMAN, player=0, x=0, y=0)
        state = GameState(gm)
        assert state.check_game_over() == (True, 0)

    def test_game_over_by_tick_limit(self):
        state = GameState(duel_map(defender_hp=50))
        state.tick = state.max_ticks
        assert state.check_game_over() == (True, 0)


class TestHistory:
    def test_logs_by_tick(self):
        h = History()
        h.add_damage(3, DamageLog(0, 0, 1, 1, 10))
        h.add_death(3, DeathLog(player=1, unit_id=1))
        action = Action.attack(0, 1)
        h.add_command(3, 0, action)
        h.add_feedback(3, 0, ActionResult(action, ActionFeedback.INCOMPLETE))

        assert len(h.get_damage_logs(3)) == 1
        assert h.get_damage_logs(2) == []
        assert h.get_death_logs(3)[0].unit_id == 1
        assert h.get_commands_issued(0, 3) == {0: action}
        assert h.get_commands_issued(1, 3) == {}
        assert h.get_command_feedback(0, 3)[0].target_id == 1

    def test_attack_action(self):
        action = Action.attack(4, 7)
        assert action.unit_id == 4
        assert action.target_id == 7
        assert action.action_type == ActionType.ATTACK


class TestGameEngine:
    def test_step_before_reset(self):
        engine = GameEngine()
        with pytest.raises(RuntimeError):
            engine.step({}, {})

    def test_reset(self):
        engine = GameEngine(map_size=10, squad_size=3)
        state = engine.reset()
        assert state.tick == 0
        assert len(state.get_unit_ids(0)) == 3
        assert engine.history is not None

    def test_adjacent_attack(self):
        engine = GameEngine()
        state = engine.reset(duel_map())
        state, info = engine.step({0: Action.attack(0, 1)}, {})

        damage = UNIT_STATS[UnitType.FOOTMAN].damage
        assert state.get_unit(1).hp == UNIT_STATS[UnitType.FOOTMAN].hp - damage
        logs = engine.history.get_damage_logs(0)
        assert logs == [DamageLog(0, 0, 1, 1, damage)]
        assert 0 in engine.history.get_commands_issued(0, 0)
        feedback = engine.history.get_command_feedback(0, 0)
        assert feedback[0].feedback == ActionFeedback.INCOMPLETE
        assert info['tick'] == 1

    def test_command_persists(self):
        engine = GameEngine()
        state = engine.reset(duel_map())
        engine.step({0: Action.attack(0, 1)}, {})
        state, _ = engine.step({}, {})
        damage = UNIT_STATS[UnitType.FOOTMAN].damage
        assert state.get_unit(1).hp == UNIT_STATS[UnitType.FOOTMAN].hp - 2 * damage
        assert engine.history.get_commands_issued(0, 1) == {}

    def test_move_toward_target(self):
        engine = GameEngine()
        state = engine.reset(duel_map(attacker_pos=(0, 0), defender_pos=(5, 0)))
        state, _ = engine.step({0: Action.attack(0, 1)}, {})
        attacker = state.get_unit(0)
        assert attacker.distance_to(5, 0) == 4
        assert engine.history.get_damage_logs(0) == []
        assert engine.history.get_command_feedback(0, 0)[0].feedback == ActionFeedback.INCOMPLETE

    def test_kill_completes_command(self):
        engine = GameEngine()
        state = engine.reset(duel_map(defender_hp=5))
        state, info = engine.step({0: Action.attack(0, 1)}, {})

        assert engine.history.get_death_logs(0) == [DeathLog(player=1, unit_id=1)]
        assert engine.history.get_command_feedback(0, 0)[0].feedback == ActionFeedback.COMPLETED
        assert state.get_unit(1) is None
        assert 1 not in state.game_map.units
        assert info['done']
        assert info['winner'] == 0

    def test_friendly_target_fails(self):
        gm = GameMap(6, 6)
        gm.add_unit(UnitType.FOOTMAN, player=0, x=0, y=0)
        gm.add_unit(UnitType.FOOTMAN, player=0, x=1, y=0)
        gm.add_unit(UnitType.FOOTMAN, player=1, x=5, y=5)
        engine = GameEngine()
        engine.reset(gm)
        engine.step({0: Action.attack(0, 1)}, {})
        assert engine.history.get_command_feedback(0, 0)[0].feedback == ActionFeedback.FAILED
        assert 0 not in engine.active_commands

    def test_commands_for_enemy_units_ignored(self):
        engine = GameEngine()
        engine.reset(duel_map())
        engine.step({1: Action.attack(1, 0)}, {})
        assert engine.history.get_commands_issued(0, 0) == {}
        assert engine.history.get_damage_logs(0) == []

    def test_full_game_terminates(self):
        engine = GameEngine(map_size=8, max_ticks=300, squad_size=3)
        state = engine.reset()
        p0, p1 = NearestTargetAI(), NearestTargetAI()
        while not state.done:
            state, info = engine.step(p0.get_action(state, 0, engine.history),
                                      p1.get_action(state, 1, engine.history))
        assert state.winner in (0, 1, 2)
        assert state.tick <= 300


class TestAIOpponents:
    def test_nearest_target(self):
        gm = GameMap(8, 8)
        gm.add_unit(UnitType.FOOTMAN, player=1, x=0, y=0)
        gm.add_unit(UnitType.FOOTMAN, player=0, x=7, y=7)
        gm.add_unit(UnitType.FOOTMAN, player=0, x=2, y=1)
        commands = NearestTargetAI().get_action(GameState(gm), player=1)
        assert commands[0].target_id == 2

    def test_weakest_target(self):
        gm = GameMap(8, 8)
        gm.add_unit(UnitType.FOOTMAN, player=1, x=0, y=0)
        gm.add_unit(UnitType.FOOTMAN, player=0, x=1, y=1)
        gm.add_unit(UnitType.FOOTMAN, player=0, x=7, y=7, hp=3)
        commands = WeakestTargetAI().get_action(GameState(gm), player=1)
        assert commands[0].target_id == 2

    def test_keeps_target_until_dead(self):
        state = GameState(duel_map())
        ai = RandomTargetAI(seed=1)
        assert ai.get_action(state, player=1) == {1: Action.attack(1, 0)}
        assert ai.get_action(state, player=1) == {}
        ai.reset()
        assert ai.get_action(state, player=1) != {}

    def test_no_enemies(self):
        gm = GameMap(4, 4)
        gm.add_unit(UnitType.FOOTMAN, player=1, x=0, y=0)
        assert NearestTargetAI().get_action(GameState(gm), player=1) == {}


class TestRenderer:
    def test_render(self):
        state = GameState(duel_map())
        text = GameRenderer.render(state)
        assert "F" in text
        assert "f" in text
        assert "Tick: 0" in text

    def test_render_compact(self):
        state = GameState(duel_map())
        assert GameRenderer.render_compact(state).startswith("T0000")


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
