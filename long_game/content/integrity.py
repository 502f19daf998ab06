"""Cross-table consistency checks for the static content.

The tables reference each other by id and by space number.  A typo in one
of them would otherwise surface mid-game as a silent no-op, so
``validate_content()`` runs once at import of the engines and fails loudly.
"""

from __future__ import annotations

import logging

from long_game.content.balance import FUNDING_ROUNDS, GATE_REQUIREMENTS
from long_game.content.path_events import PATH_EVENTS, UNIVERSAL_EVENTS, UNIVERSAL_PATH_ID
from long_game.content.paths import FUNDING_ROUND_DEFS, GAME_PATHS
from long_game.content.policy_scenarios import POLICY_SCENARIOS
from long_game.content.shadow_programs import SHADOW_PROGRAMS
from long_game.content.spaces import SPACES
from long_game.domain.enums import Difficulty

logger = logging.getLogger(__name__)


class ContentError(Exception):
    """Raised when the static content tables are inconsistent."""

    def __init__(self, problems: list[str]) -> None:
        self.problems = problems
        super().__init__("Content integrity check failed: " + "; ".join(problems))


def _check_spaces(problems: list[str]) -> None:
    ids = [s.id for s in SPACES]
    if ids != list(range(1, len(SPACES) + 1)):
        problems.append(f"space ids are not contiguous from 1: {ids}")
    for space in SPACES:
        if space.is_gate and space.gate_requirement is None:
            problems.append(f"gate space {space.id} has no requirement")
        effect = space.special_effect
        if effect is not None and effect.space_id is not None and effect.space_id not in ids:
            problems.append(f"space {space.id} returns to unknown space {effect.space_id}")


def _check_funding(problems: list[str]) -> None:
    space_ids = {s.id for s in SPACES}
    for key, r in FUNDING_ROUNDS.items():
        if key != r.key:
            problems.append(f"board round registered as {key!r} but keyed {r.key!r}")
        if r.trigger_space not in space_ids:
            problems.append(f"board round {key!r} triggers at unknown space {r.trigger_space}")
    for path in GAME_PATHS.values():
        for round_id in path.funding_rounds:
            if round_id not in FUNDING_ROUND_DEFS:
                problems.append(f"path {path.id!r} offers unknown round {round_id!r}")


def _check_events(problems: list[str]) -> None:
    seen: set[str] = set()
    for path_id, pool in PATH_EVENTS.items():
        if path_id not in GAME_PATHS:
            problems.append(f"event pool registered for unknown path {path_id!r}")
        for event in pool:
            if event.path_id != path_id:
                problems.append(f"event {event.id!r} filed under {path_id!r} but owned by {event.path_id!r}")
            if event.id in seen:
                problems.append(f"duplicate event id {event.id!r}")
            seen.add(event.id)
    for event in UNIVERSAL_EVENTS:
        if event.path_id != UNIVERSAL_PATH_ID:
            problems.append(f"universal event {event.id!r} owned by {event.path_id!r}")
        if event.id in seen:
            problems.append(f"duplicate event id {event.id!r}")
        seen.add(event.id)


def _check_scenarios(problems: list[str]) -> None:
    space_ids = {s.id for s in SPACES}
    claimed: dict[tuple[int, Difficulty], str] = {}
    for scenario in POLICY_SCENARIOS:
        if scenario.trigger_space not in space_ids:
            problems.append(f"scenario {scenario.id!r} triggers at unknown space {scenario.trigger_space}")
        for difficulty in scenario.applicable_difficulties or list(Difficulty):
            slot = (scenario.trigger_space, difficulty)
            if slot in claimed:
                problems.append(
                    f"scenarios {claimed[slot]!r} and {scenario.id!r} both trigger at "
                    f"space {slot[0]} for {difficulty.value}"
                )
            else:
                claimed[slot] = scenario.id


def _check_shadow_programs(problems: list[str]) -> None:
    space_ids = {s.id for s in SPACES}
    ids = [p.id for p in SHADOW_PROGRAMS]
    if len(ids) != len(set(ids)):
        problems.append("duplicate shadow program ids")
    for program in SHADOW_PROGRAMS:
        if program.failure_space not in space_ids:
            problems.append(f"shadow program {program.id!r} fails at unknown space {program.failure_space}")


def validate_content() -> None:
    """Check every cross-table reference.

    Raises:
        ContentError: Listing every problem found, not just the first.
    """
    problems: list[str] = []
    _check_spaces(problems)
    _check_funding(problems)
    _check_events(problems)
    _check_scenarios(problems)
    _check_shadow_programs(problems)
    if "nda_approval" not in GATE_REQUIREMENTS:
        problems.append("missing approval gate requirement")

    if problems:
        raise ContentError(problems)
    logger.debug("Content tables validated (%d spaces, %d paths)", len(SPACES), len(GAME_PATHS))
