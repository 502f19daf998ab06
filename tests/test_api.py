"""Tests for the HTTP and WebSocket surface."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from long_game.config import Settings
from long_game.main import create_app

OSM = "orphan-small-molecule"


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app(Settings(rng_seed=1)))


def _board(client: TestClient, difficulty: str = "blockbuster") -> str:
    resp = client.post("/api/board/sessions", json={"difficulty": difficulty})
    assert resp.status_code == 201
    return resp.json()["session_id"]


def _path(client: TestClient, path_id: str = OSM) -> str:
    resp = client.post("/api/path/sessions", json={"path_id": path_id})
    assert resp.status_code == 201
    return resp.json()["session_id"]


class TestHealth:
    def test_health_counts_sessions(self, client: TestClient) -> None:
        _board(client)
        _path(client)
        body = client.get("/health").json()
        assert body["status"] == "ok"
        assert body["total_sessions"] == 2


class TestBoardApi:
    def test_create_defaults_to_blockbuster(self, client: TestClient) -> None:
        body = client.post("/api/board/sessions", json={}).json()
        assert body["kind"] == "board"
        assert body["state"]["capital"] == 150

    def test_unknown_difficulty_is_422(self, client: TestClient) -> None:
        resp = client.post("/api/board/sessions", json={"difficulty": "impossible"})
        assert resp.status_code == 422

    def test_unknown_session_is_404(self, client: TestClient) -> None:
        assert client.get(f"/api/board/sessions/{uuid4()}").status_code == 404
        assert client.post(f"/api/board/sessions/{uuid4()}/turn").status_code == 404

    def test_path_session_is_not_a_board_session(self, client: TestClient) -> None:
        sid = _path(client)
        assert client.get(f"/api/board/sessions/{sid}").status_code == 404

    def test_dispatch_action(self, client: TestClient) -> None:
        sid = _board(client)
        resp = client.post(f"/api/board/sessions/{sid}/actions", json={"type": "PAY_COST", "amount": 25})
        assert resp.status_code == 200
        assert resp.json()["state"]["capital"] == 125
        assert resp.json()["version"] == 1

    def test_invalid_action_is_rejected(self, client: TestClient) -> None:
        sid = _board(client)
        resp = client.post(f"/api/board/sessions/{sid}/actions", json={"type": "TELEPORT"})
        assert resp.status_code == 422
        assert resp.json()["status"] == "rejected"
        assert client.get(f"/api/board/sessions/{sid}").json()["version"] == 0

    def test_turn_moves_the_token(self, client: TestClient) -> None:
        sid = _board(client)
        body = client.post(f"/api/board/sessions/{sid}/turn").json()
        assert body["state"]["current_space"] == 1
        assert body["state"]["pending"] is not None

    def test_policy_scenario_then_funding(self, client: TestClient) -> None:
        sid = _board(client)
        client.post(f"/api/board/sessions/{sid}/actions", json={"type": "ADVANCE_SPACE"})
        client.post(
            f"/api/board/sessions/{sid}/actions",
            json={"type": "SET_PENDING_POLICY_SCENARIO", "scenario_id": "drug-modality-choice"},
        )
        body = client.post(f"/api/board/sessions/{sid}/policy-scenario", json={"index": 1}).json()
        assert body["state"]["completed_policy_scenarios"] == ["drug-modality-choice"]
        assert body["state"]["pending"]["kind"] == "funding_round"

        body = client.post(f"/api/board/sessions/{sid}/funding", json={"accept": True}).json()
        assert body["state"]["funding_rounds_completed"] == ["seed"]
        assert body["state"]["capital"] == 158

    def test_negative_choice_index_is_422(self, client: TestClient) -> None:
        sid = _board(client)
        resp = client.post(f"/api/board/sessions/{sid}/decision", json={"index": -1})
        assert resp.status_code == 422

    def test_score(self, client: TestClient) -> None:
        sid = _board(client)
        body = client.get(f"/api/board/sessions/{sid}/score").json()
        assert body["base"] > 0
        assert [b["category"] for b in body["bonuses"]] == [
            "Time Efficiency", "Cost Efficiency", "Data Quality",
        ]

    def test_scenario_lookup(self, client: TestClient) -> None:
        body = client.get("/api/board/scenarios", params={"space_id": 6, "difficulty": "orphan"}).json()
        assert body["scenario"]["id"] == "orphan-drug-designation"
        body = client.get("/api/board/scenarios", params={"space_id": 6}).json()
        assert body["scenario"] is None

    def test_funding_terms(self, client: TestClient) -> None:
        body = client.get("/api/board/funding-terms/seed").json()
        assert body["offered"]["raise_amount"] == 8
        assert body["negotiated"]["raise_amount"] == 6
        assert client.get("/api/board/funding-terms/seriesZ").status_code == 404

    @pytest.mark.parametrize("confidence", [-500, 300])
    def test_confidence_out_of_range_is_422(self, client: TestClient, confidence: float) -> None:
        resp = client.get("/api/board/funding-terms/seed", params={"confidence": confidence})
        assert resp.status_code == 422


class TestPathApi:
    def test_list_paths(self, client: TestClient) -> None:
        body = client.get("/api/path/paths").json()
        assert body["count"] == 6
        assert OSM in {p["id"] for p in body["paths"]}

    def test_unknown_path_is_404(self, client: TestClient) -> None:
        resp = client.post("/api/path/sessions", json={"path_id": "nope"})
        assert resp.status_code == 404

    def test_select_later(self, client: TestClient) -> None:
        sid = client.post("/api/path/sessions", json={}).json()["session_id"]
        body = client.post(
            f"/api/path/sessions/{sid}/actions", json={"type": "SELECT_PATH", "path_id": OSM},
        ).json()
        assert body["state"]["status"] == "playing"

    def test_turn_draws_an_event(self, client: TestClient) -> None:
        sid = _path(client)
        body = client.post(f"/api/path/sessions/{sid}/turn").json()
        assert body["funding_round"] is None
        assert body["state"]["capital"] == 75
        assert body["state"]["pending_event"]["phase"] == "discovery"

    def test_turn_stops_for_funding(self, client: TestClient) -> None:
        sid = _path(client)
        client.post(f"/api/path/sessions/{sid}/actions", json={"type": "SPEND_CAPITAL", "amount": 65})
        body = client.post(f"/api/path/sessions/{sid}/turn").json()
        assert body["funding_round"] == "seed"

        body = client.post(f"/api/path/sessions/{sid}/funding", json={"round_id": "seed"}).json()
        assert body["state"]["capital"] == 27
        assert body["state"]["funding_rounds_completed"] == ["seed"]

    def test_skip_funding(self, client: TestClient) -> None:
        sid = _path(client)
        client.post(f"/api/path/sessions/{sid}/actions", json={"type": "SPEND_CAPITAL", "amount": 65})
        body = client.post(f"/api/path/sessions/{sid}/turn", params={"skip_funding": True}).json()
        assert body["funding_round"] is None
        assert body["state"]["capital"] == 10

    def test_unknown_round_is_404(self, client: TestClient) -> None:
        sid = _path(client)
        resp = client.post(f"/api/path/sessions/{sid}/funding", json={"round_id": "mystery"})
        assert resp.status_code == 404

    def test_round_not_on_offer_is_409(self, client: TestClient) -> None:
        sid = _path(client)
        assert client.post(f"/api/path/sessions/{sid}/funding", json={"round_id": "seed"}).status_code == 409
        client.post(f"/api/path/sessions/{sid}/actions", json={"type": "SPEND_CAPITAL", "amount": 65})
        for _ in range(3):
            resp = client.post(f"/api/path/sessions/{sid}/funding", json={"round_id": "ipo"})
            assert resp.status_code == 409
        assert client.get(f"/api/path/sessions/{sid}").json()["state"]["capital"] == 15

    def test_funding_terms(self, client: TestClient) -> None:
        body = client.get("/api/path/funding-terms/seed").json()
        assert body["offered"]["raise_amount"] == 12

    @pytest.mark.parametrize("confidence", [-500, 300])
    def test_confidence_out_of_range_is_422(self, client: TestClient, confidence: float) -> None:
        resp = client.get("/api/path/funding-terms/seed", params={"confidence": confidence})
        assert resp.status_code == 422


class TestSessionSocket:
    def test_streams_actions(self, client: TestClient) -> None:
        sid = _path(client)
        with client.websocket_connect(f"/ws/session/{sid}") as ws:
            ws.send_json({"type": "GAIN_CAPITAL", "amount": 20})
            reply = ws.receive_json()
            assert reply["status"] == "accepted"
            assert reply["state"]["capital"] == 100

            ws.send_json({"type": "GAIN_CAPITAL"})
            reply = ws.receive_json()
            assert reply["status"] == "rejected"
            assert reply["errors"]

    def test_unknown_session(self, client: TestClient) -> None:
        with client.websocket_connect(f"/ws/session/{uuid4()}") as ws:
            assert ws.receive_json()["status"] == "error"
