import os
import logging
import requests
from typing import Dict, Any, List, Optional

from google.adk.agents import LlmAgent

# The URL of the LaunchKit service's generation endpoint
LAUNCHKIT_SERVICE_URL = os.getenv("LAUNCHKIT_SERVICE_URL", "http://localhost:8000/generate")
REQUEST_TIMEOUT_SECONDS = float(os.getenv("LAUNCHKIT_TIMEOUT_SECONDS", "300"))


def _summarize(result: Dict[str, Any]) -> Dict[str, Any]:
    sections = {
        "landingPage": result.get("landingPage") is not None,
        "pitchDeck": result.get("pitchDeck") is not None,
        "marketing": result.get("marketing") is not None,
    }
    summary = {
        "status": "partial" if result.get("warnings") else "success",
        "projectId": result.get("projectId"),
        "sections": sections,
        "warnings": result.get("warnings", []),
    }
    if sections["landingPage"]:
        summary["headline"] = result["landingPage"]["hero"]["headline"]
    if sections["pitchDeck"]:
        summary["slideCount"] = len(result["pitchDeck"]["slides"])
    return summary


def create_launch_kit(
    app_name: str,
    tagline: str,
    target_audience: str,
    problem_solved: str,
    key_features: List[str],
    competitors: Optional[str] = None,
    funding_stage: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Calls the backend service to generate a landing page, pitch deck and marketing campaign for an app.

    Args:
        app_name: Name of the app.
        tagline: One-line tagline.
        target_audience: Who the app is for.
        problem_solved: The problem the app solves.
        key_features: At least three key features.
        competitors: Optional competitor names.
        funding_stage: Optional stage such as 'seed' or 'series-a'.

    Returns:
        A dictionary summarizing the generated content.
    """
    payload = {
        "appName": app_name,
        "tagline": tagline,
        "targetAudience": target_audience,
        "problemSolved": problem_solved,
        "keyFeatures": key_features,
    }
    if competitors:
        payload["competitors"] = competitors
    if funding_stage:
        payload["fundingStage"] = funding_stage

    logging.info(f"Forwarding launch kit request for '{app_name}' to {LAUNCHKIT_SERVICE_URL}")

    try:
        response = requests.post(
            LAUNCHKIT_SERVICE_URL,
            json=payload,
            headers={"Content-Type": "application/json"},
            timeout=REQUEST_TIMEOUT_SECONDS,
        )
        response.raise_for_status()  # Raise an exception for HTTP errors (4xx or 5xx)
        return _summarize(response.json())

    except requests.exceptions.RequestException as e:
        failed = e.response
        error_detail = failed.text if failed is not None else str(e)
        status_code = failed.status_code if failed is not None else "N/A"
        logging.error(f"The backend service returned an error. Status: {status_code}. Detail: {error_detail}")
        return {"status": "error", "message": f"The backend service failed to process the request. Detail: {error_detail}"}


# Define the root agent that uses the launch kit tool
root_agent = LlmAgent(
    name="launch_kit_agent",
    model=os.getenv("AGENT_MODEL", "gemini-2.5-pro"),
    description="Generates a landing page, an investor pitch deck and a launch marketing campaign for an app via a backend service.",
    instruction="""
    You are a product launch assistant.
    Collect the app name, tagline, target audience, the problem it solves and at least three key features.
    Then you MUST call the `create_launch_kit` tool with those values.
    Report the project id, which sections were generated and any warnings.
    Do not write the launch content yourself.
    """,
    tools=[create_launch_kit]
)
