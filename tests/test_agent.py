from __future__ import annotations

import copy

import requests

import agent
from conftest import LANDING_PAGE, PITCH_DECK


class FakeResponse:
    def __init__(self, status_code, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} error", response=self)


def test_create_launch_kit_posts_app_description(monkeypatch) -> None:
    sent = {}
    result = {
        "projectId": "p-1",
        "landingPage": copy.deepcopy(LANDING_PAGE),
        "pitchDeck": copy.deepcopy(PITCH_DECK),
        "marketing": None,
        "warnings": ["Marketing: timed out"],
    }

    def fake_post(url, json=None, headers=None, timeout=None):
        sent.update(url=url, json=json)
        return FakeResponse(207, result)

    monkeypatch.setattr(agent.requests, "post", fake_post)

    summary = agent.create_launch_kit(
        app_name="TaskFlow",
        tagline="Project management that works",
        target_audience="Small businesses",
        problem_solved="Complex project management",
        key_features=["Simple boards", "Team collaboration", "Smart tracking"],
        funding_stage="seed",
    )

    assert sent["url"] == agent.LAUNCHKIT_SERVICE_URL
    assert sent["json"]["appName"] == "TaskFlow"
    assert sent["json"]["fundingStage"] == "seed"
    assert "competitors" not in sent["json"]
    assert summary["status"] == "partial"
    assert summary["sections"] == {"landingPage": True, "pitchDeck": True, "marketing": False}
    assert summary["headline"] == LANDING_PAGE["hero"]["headline"]
    assert summary["slideCount"] == len(PITCH_DECK["slides"])


def test_create_launch_kit_reports_backend_errors(monkeypatch) -> None:
    monkeypatch.setattr(
        agent.requests, "post",
        lambda *args, **kwargs: FakeResponse(400, text='{"error": "Invalid request"}'),
    )

    summary = agent.create_launch_kit("A", "B", "C", "D", ["x", "y"])

    assert summary["status"] == "error"
    assert "Invalid request" in summary["message"]


def test_root_agent_exposes_the_tool() -> None:
    assert agent.root_agent.name == "launch_kit_agent"
    assert agent.create_launch_kit in agent.root_agent.tools
