from __future__ import annotations

import copy
from typing import Any, Dict

import pytest

from content_client import OUTPUT_MODELS
from models import AppInput

TASKFLOW_INPUT: Dict[str, Any] = {
    "appName": "TaskFlow",
    "tagline": "Project management that works",
    "targetAudience": "Small businesses",
    "problemSolved": "Complex project management",
    "keyFeatures": ["Simple boards", "Team collaboration", "Smart tracking"],
}

LANDING_PAGE: Dict[str, Any] = {
    "hero": {"headline": "Ship projects without the chaos", "subheadline": "Boards your team gets.", "cta": "Start free"},
    "features": [{"title": "Simple boards", "description": "Drag and drop.", "icon": "Zap"}],
    "benefits": [{"title": "Less overhead", "description": "Fewer status meetings."}],
    "howItWorks": [{"step": 1, "title": "Sign up", "description": "Create a workspace."}],
    "testimonials": [{"name": "Ana", "role": "Founder", "content": "Love it.", "avatar": "AN"}],
    "cta": {"headline": "Ready?", "description": "Try it today.", "buttonText": "Get started"},
    "footer": {"links": [{"category": "Product", "items": ["Pricing", "Docs"]}]},
    "reactCode": "export default function Page() { return null }",
    "htmlCode": "<html><body><h1>TaskFlow</h1></body></html>",
}

PITCH_DECK: Dict[str, Any] = {
    "slides": [
        {"slideNumber": 1, "title": "TaskFlow", "content": ["Project management that works"],
         "speakerNotes": "Welcome everyone.", "layout": "title"},
        {"slideNumber": 2, "title": "Problem", "content": ["Tools are bloated", "Teams lose track", "Setup takes weeks"],
         "speakerNotes": "Small teams drown in tooling.", "layout": "bullets"},
        {"slideNumber": 3, "title": "Solution", "content": ["Simple boards", "Team collaboration", "Smart tracking"],
         "speakerNotes": "", "layout": "two-column"},
        {"slideNumber": 4, "title": "Product", "content": ["Boards", "Timeline"],
         "speakerNotes": "Demo time.", "layout": "image-text"},
        {"slideNumber": 5, "title": "Market", "content": ["TAM $40B", "SAM $6B", "SOM $300M"],
         "speakerNotes": "Big market.", "layout": "chart"},
    ],
    "metadata": {"title": "TaskFlow", "subtitle": "Project management that works",
                 "author": "TaskFlow Team", "date": "2025-01-15"},
}

MARKETING: Dict[str, Any] = {
    "instagram": {"platform": "Instagram", "posts": [
        {"content": "TaskFlow is live!", "hashtags": ["#launch"], "imagePrompt": "A tidy board", "characterCount": 17}]},
    "twitter": {"platform": "Twitter", "posts": [{"content": "We launched.", "hashtags": ["#saas"], "characterCount": 12}]},
    "facebook": {"platform": "Facebook", "posts": [{"content": "Meet TaskFlow.", "hashtags": [], "imagePrompt": "Team"}]},
    "linkedin": {"platform": "LinkedIn", "posts": [{"content": "Why we built TaskFlow.", "hashtags": ["#startups"]}]},
    "googleAds": [{"headline1": "TaskFlow", "headline2": "Simple PM", "headline3": "Try Free",
                   "description1": "Boards for small teams.", "description2": "Start in minutes."}],
    "emailTemplate": {"subject": "TaskFlow is here", "preheader": "Meet your new board", "body": "<p>Hello</p>"},
}

STREAM_PAYLOADS = {
    "landing-page": LANDING_PAGE,
    "pitch-deck": PITCH_DECK,
    "marketing": MARKETING,
}


class FakeContentClient:
    """Returns canned content per stream; streams listed in `failures` raise instead."""

    def __init__(self, failures=None, payloads=None):
        self.failures = failures or {}
        self.payloads = payloads or STREAM_PAYLOADS
        self.calls = []

    def generate(self, stream, app_input, today=None):
        self.calls.append(stream)
        if stream in self.failures:
            raise self.failures[stream]
        return OUTPUT_MODELS[stream].model_validate(copy.deepcopy(self.payloads[stream]))


@pytest.fixture
def app_input() -> AppInput:
    return AppInput.model_validate(TASKFLOW_INPUT)


@pytest.fixture
def pitch_deck_data() -> Dict[str, Any]:
    return copy.deepcopy(PITCH_DECK)
