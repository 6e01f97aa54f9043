"""
Event Detector - Should the controller recompute targets this tick?

A pure function of the previous tick's logs and the friendly roster.
"""

import logging
from typing import Collection

from game.history import ActionFeedback, History

logger = logging.getLogger(__name__)


def has_event(tick: int, history: History, player: int,
              friendly_ids: Collection[int]) -> bool:
    """
    True on the first tick, or if during the previous tick:
    - any unit died
    - any tracked friendly unit took damage
    - any tracked friendly unit's command is still in progress
    """
    previous_tick = tick - 1
    if previous_tick < 0:  # game just started
        return True

    if history.get_death_logs(previous_tick):
        return True

    for log in history.get_damage_logs(previous_tick):
        if log.defender_id in friendly_ids:
            return True

    for unit_id, result in history.get_command_feedback(player, previous_tick).items():
        if unit_id not in friendly_ids:
            logger.debug(f"Feedback for untracked unit {unit_id} ignored")
            continue
        if result.feedback == ActionFeedback.INCOMPLETE:
            return True

    return False
