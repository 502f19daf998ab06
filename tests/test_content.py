"""Tests for the static content tables and their lookups."""

import pytest

from long_game.content.balance import (
    FUNDING_ROUNDS,
    FUNDING_TRIGGER_SPACES,
    get_difficulty_context,
    get_round_for_space,
)
from long_game.content.integrity import ContentError, validate_content
from long_game.content.paths import GAME_PATHS, get_path
from long_game.content.policy_scenarios import (
    POLICY_SCENARIOS,
    get_all_scenarios,
    get_scenario_by_id,
    get_scenario_for_space,
)
from long_game.content.spaces import (
    FINAL_SPACE_ID,
    get_gate_spaces,
    get_phase_spaces,
    get_space_by_id,
)
from long_game.domain.enums import Difficulty, GamePhase


class TestIntegrity:
    def test_shipped_tables_are_consistent(self) -> None:
        validate_content()

    def test_error_lists_every_problem(self) -> None:
        err = ContentError(["first thing", "second thing"])
        assert err.problems == ["first thing", "second thing"]
        assert "first thing; second thing" in str(err)


class TestScenarioLookup:
    def test_unrestricted_scenario_matches_every_mode(self) -> None:
        for difficulty in Difficulty:
            assert get_scenario_for_space(1, difficulty).id == "drug-modality-choice"

    def test_restricted_scenario_needs_matching_mode(self) -> None:
        assert get_scenario_for_space(6, Difficulty.ORPHAN).id == "orphan-drug-designation"
        assert get_scenario_for_space(6, Difficulty.BLOCKBUSTER) is None

    def test_same_space_resolves_per_mode(self) -> None:
        assert get_scenario_for_space(14, Difficulty.FIRST_IN_CLASS).id == "breakthrough-therapy-designation"
        assert get_scenario_for_space(14, Difficulty.BLOCKBUSTER).id == "ira-negotiation-looms-blockbuster"
        assert get_scenario_for_space(14, Difficulty.ORPHAN).id == "ira-negotiation-looms-orphan"

    def test_no_difficulty_skips_restricted(self) -> None:
        assert get_scenario_for_space(14) is None
        assert get_scenario_for_space(23).id == "generic-clock-begins"

    def test_quiet_space(self) -> None:
        assert get_scenario_for_space(2, Difficulty.BLOCKBUSTER) is None

    def test_all_scenarios_filtered_by_mode(self) -> None:
        orphan = get_all_scenarios(Difficulty.ORPHAN)
        assert all(s.applies_to(Difficulty.ORPHAN) for s in orphan)
        assert len(orphan) < len(POLICY_SCENARIOS)
        assert get_all_scenarios() == POLICY_SCENARIOS

    def test_lookup_by_id(self) -> None:
        assert get_scenario_by_id("generic-clock-begins").trigger_space == 23
        assert get_scenario_by_id("missing") is None


class TestBoardTables:
    def test_final_space(self) -> None:
        assert FINAL_SPACE_ID == 24
        assert get_space_by_id(FINAL_SPACE_ID) is not None
        assert get_space_by_id(25) is None

    @pytest.mark.parametrize(
        "space_id,key",
        [(1, "seed"), (7, "seriesA"), (12, "seriesB"), (15, "seriesC"), (19, "ipoOrCrossover")],
    )
    def test_round_trigger_spaces(self, space_id: int, key: str) -> None:
        assert get_round_for_space(space_id).key == key

    def test_no_round_elsewhere(self) -> None:
        assert get_round_for_space(2) is None

    def test_round_keys_match(self) -> None:
        assert all(key == r.key for key, r in FUNDING_ROUNDS.items())

    def test_trigger_spaces_follow_rounds(self) -> None:
        assert FUNDING_TRIGGER_SPACES == (1, 7, 12, 15, 19)

    def test_gate_spaces(self) -> None:
        assert [s.id for s in get_gate_spaces()] == [6, 11, 15, 19, 23]
        assert all(s.gate_requirement is not None for s in get_gate_spaces())

    def test_phase_spaces_partition_the_board(self) -> None:
        counts = {phase: len(get_phase_spaces(phase)) for phase in GamePhase}
        assert counts[GamePhase.DISCOVERY] == 6
        assert sum(counts.values()) == FINAL_SPACE_ID

    def test_difficulty_context(self) -> None:
        assert get_difficulty_context(Difficulty.ORPHAN).revenue_scale == 2000


class TestPaths:
    def test_six_paths(self) -> None:
        assert len(GAME_PATHS) == 6

    def test_get_path(self) -> None:
        assert get_path("orphan-small-molecule").parameters.starting_capital == 80
        assert get_path("nope") is None
