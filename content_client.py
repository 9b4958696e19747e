import json
import logging
import os
import re
from typing import Any, Dict, Optional

import requests
from pydantic import BaseModel, ValidationError

from errors import ContentGenerationError
from models import AppInput, LandingPageOutput, MarketingOutput, PitchDeckOutput
from prompts import build_prompts


# --- Configuration ---
LLM_API_URL = os.getenv("LLM_API_URL", "https://openrouter.ai/api/v1/chat/completions")
LLM_API_KEY = os.getenv("LLM_API_KEY", os.getenv("OPENROUTER_API_KEY", ""))
LLM_MODEL = os.getenv("LLM_MODEL", "anthropic/claude-3.5-sonnet")
LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.7"))
LLM_TIMEOUT_SECONDS = float(os.getenv("LLM_TIMEOUT_SECONDS", "120"))
APP_URL = os.getenv("APP_URL", "http://localhost:8000")

OUTPUT_MODELS = {
    "landing-page": LandingPageOutput,
    "pitch-deck": PitchDeckOutput,
    "marketing": MarketingOutput,
}

_FENCED_JSON_RE = re.compile(r'```(?:json)?\s*(\{[\s\S]*\})\s*```')


def extract_json(text: str) -> Dict[str, Any]:
    """
    Pulls a JSON object out of an LLM reply.

    Handles a raw object, an object wrapped in a ```json (or bare ```) fence,
    and an object surrounded by stray prose.
    """
    if not text or not text.strip():
        raise ValueError("Empty response from model.")

    cleaned = text.strip()
    fenced = _FENCED_JSON_RE.search(cleaned)
    if fenced:
        cleaned = fenced.group(1)

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        first_brace = cleaned.find('{')
        last_brace = cleaned.rfind('}')
        if first_brace == -1 or last_brace == -1 or first_brace >= last_brace:
            raise ValueError("Could not find a valid JSON object in the model response.")
        data = json.loads(cleaned[first_brace : last_brace + 1])

    if not isinstance(data, dict):
        raise ValueError("Model response JSON is not an object.")
    return data


class ContentGenerationClient:
    """Calls an OpenAI-compatible chat completion endpoint and validates the replies."""

    def __init__(
        self,
        api_url: str = LLM_API_URL,
        api_key: str = LLM_API_KEY,
        model: str = LLM_MODEL,
        temperature: float = LLM_TEMPERATURE,
        timeout: float = LLM_TIMEOUT_SECONDS,
        referer: str = APP_URL,
        session: Optional[requests.Session] = None,
    ):
        self.api_url = api_url
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.timeout = timeout
        self.referer = referer
        self.session = session or requests.Session()

    @classmethod
    def from_env(cls) -> "ContentGenerationClient":
        return cls(
            api_url=os.getenv("LLM_API_URL", LLM_API_URL),
            api_key=os.getenv("LLM_API_KEY", os.getenv("OPENROUTER_API_KEY", LLM_API_KEY)),
            model=os.getenv("LLM_MODEL", LLM_MODEL),
            temperature=float(os.getenv("LLM_TEMPERATURE", LLM_TEMPERATURE)),
            timeout=float(os.getenv("LLM_TIMEOUT_SECONDS", LLM_TIMEOUT_SECONDS)),
            referer=os.getenv("APP_URL", APP_URL),
        )

    def build_payload(self, system_prompt: str, user_prompt: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": self.temperature,
        }

    def complete(self, system_prompt: str, user_prompt: str, stream: str = "completion") -> str:
        """Sends one chat completion request and returns the message content."""
        headers = {
            "Content-Type": "application/json",
            "HTTP-Referer": self.referer,
        }
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        try:
            response = self.session.post(
                self.api_url,
                json=self.build_payload(system_prompt, user_prompt),
                headers=headers,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            raise ContentGenerationError(stream, f"Request timed out after {self.timeout:g}s") from e
        except requests.exceptions.RequestException as e:
            raise ContentGenerationError(stream, f"Request failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise ContentGenerationError(
                stream, f"Completion API error: {response.status_code} - {response.text[:500]}"
            )

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ContentGenerationError(stream, "No content received from completion API") from e
        if not content:
            raise ContentGenerationError(stream, "No content received from completion API")
        return content

    def generate(self, stream: str, app_input: AppInput, today: Optional[str] = None) -> BaseModel:
        """Generates and validates one content stream for the given app."""
        output_model = OUTPUT_MODELS.get(stream)
        if output_model is None:
            raise ValueError(f"Unknown content stream: {stream}")

        system_prompt, user_prompt = build_prompts(stream, app_input, today)
        logging.info(f"Generating {stream} content for: {app_input.appName}")
        llm_output_text = self.complete(system_prompt, user_prompt, stream)
        logging.debug(f"Received raw {stream} response from LLM: {llm_output_text}")

        try:
            data = extract_json(llm_output_text)
            result = output_model.model_validate(data)
        except (ValueError, ValidationError) as e:
            logging.error(f"Failed to parse or validate {stream} JSON from LLM response: {e}")
            raise ContentGenerationError(stream, f"Failed to process model response: {e}") from e

        logging.info(f"Successfully generated {stream} content")
        return result
