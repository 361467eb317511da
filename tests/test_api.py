#!/usr/bin/env python3
"""
Tests for the FastAPI payload endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from api.main import app

SCENARIO = {"program": "Arrow Lake", "sku": "Arrow Lake S", "build": "Build 2025.03 (Aug 18)"}


@pytest.fixture(scope="module")
def client():
    return TestClient(app)


def test_meta_programs(client):
    resp = client.get("/meta/programs")
    assert resp.status_code == 200
    programs = resp.json()["programs"]
    assert [p["name"] for p in programs][:2] == ["Arrow Lake", "Nova Lake"]
    assert programs[0]["skus"] == ["Arrow Lake S", "Arrow Lake H", "Arrow Lake P"]


def test_meta_builds_and_games(client):
    assert len(client.get("/meta/builds").json()["builds"]) == 6
    assert len(client.get("/meta/games").json()["games"]) == 34


def test_trends_known_and_unknown(client):
    body = client.get("/trends/Nova Lake").json()
    assert body["known"] is True
    assert [c["sku"] for c in body["skus"]] == ["Nova Lake S", "Nova Lake H"]
    assert all(len(c["points"]) == 12 for c in body["skus"])

    missing = client.get("/trends/Lunar Lake")
    assert missing.status_code == 200
    assert missing.json()["skus"] == []


def test_benchmarks_scenario(client):
    body = client.post("/benchmarks", json=SCENARIO).json()
    assert len(body["rows"]) == 34
    assert all(60 <= r["score"] < 160 and 60 <= r["percentile"] < 100 for r in body["rows"])
    scores = [r["score"] for r in body["rows"]]
    assert abs(body["average_fps"] - sum(scores) / len(scores)) <= 0.5


def test_benchmarks_stable_for_same_pair(client):
    first = client.post("/benchmarks", json=SCENARIO).json()["rows"]
    toggled = {**SCENARIO, "expanded_games": ["Starfield"]}
    second = client.post("/benchmarks", json=toggled).json()["rows"]
    assert [r["score"] for r in first] == [r["score"] for r in second]


def test_benchmarks_empty_without_build(client):
    body = client.post("/benchmarks", json={"program": "Arrow Lake", "sku": "Arrow Lake S"}).json()
    assert body == {"rows": [], "average_fps": 0}


def test_telemetry(client):
    body = client.get("/telemetry/Control").json()
    assert body["game"] == "Control"
    assert body["clipping_reason"] in {"None", "Thermal", "Power", "Current", "Thermal + Power", "Power + Current"}
    assert 55 <= body["package_temperature"] < 85


def test_state_transition(client):
    resp = client.post(
        "/state/transition",
        json={"state": {"program": "Arrow Lake", "sku": "Arrow Lake S"}, "event": {"type": "select_program", "value": "Nova Lake"}},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["program"] == "Nova Lake"
    assert body["sku"] == ""
    assert body["build"] == ""
    assert "Nova Lake" in body["expanded_programs"]


def test_state_transition_rejects_unknown_event(client):
    resp = client.post("/state/transition", json={"event": {"type": "explode", "value": "x"}})
    assert resp.status_code == 422


def test_view_scenario(client):
    body = client.post("/view", json=SCENARIO).json()
    assert body["mode"] == "results"
    summary = body["results"]["summary"]
    assert (summary["total_games"], summary["resolution"], summary["settings"]) == (34, "1080p", "High")
    assert len(body["results"]["rows"]) == 34


def test_view_select_program(client):
    body = client.post("/view", json={}).json()
    assert body["mode"] == "select_program"
    assert body["prompt"]["title"] == "Select a Program"
