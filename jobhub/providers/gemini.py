"""Gemini generateContent REST endpoint as the job-data provider.

Docs: https://ai.google.dev/api/generate-content
"""
from __future__ import annotations

import requests

from jobhub.errors import JobSchemaError, ProviderError, ProviderNotConfiguredError
from jobhub.log import get_logger
from jobhub.models import Job, SearchFilters, parse_jobs
from jobhub.providers.base import JobProvider
from jobhub.providers.prompt import build_prompt, response_schema
from jobhub.retry import retry

log = get_logger(__name__)

API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
DEFAULT_MODEL = "gemini-2.0-flash"

# Three attempts of REQUEST_TIMEOUT plus backoff must finish inside the
# default search timeout (90 s).
REQUEST_TIMEOUT = 25.0
MAX_ATTEMPTS = 3
BASE_DELAY = 2.0

_TRUTHY = {"1", "true", "yes", "on"}


def _strip_fence(text: str) -> str:
    """Drop a ```json ... ``` wrapper; grounded answers are free text."""
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else ""
        if text.rstrip().endswith("```"):
            text = text.rstrip()[:-3]
    return text.strip()


def _response_text(data: dict) -> str:
    """Concatenate the text parts of the first candidate."""
    candidates = data.get("candidates") or []
    if not candidates:
        feedback = data.get("promptFeedback", {})
        raise ProviderError(f"Gemini returned no candidates ({feedback.get('blockReason', 'unknown')})")
    parts = candidates[0].get("content", {}).get("parts", [])
    text = "".join(p.get("text", "") for p in parts if isinstance(p, dict))
    if not text.strip():
        raise JobSchemaError("Gemini returned an empty response")
    return _strip_fence(text)


class GeminiProvider(JobProvider):
    name = "gemini"

    def __init__(self, env_getter, session: requests.Session | None = None) -> None:
        self.api_key: str = env_getter("GEMINI_API_KEY")
        self.model: str = env_getter("GEMINI_MODEL") or DEFAULT_MODEL
        self.grounding: bool = env_getter("GEMINI_SEARCH_GROUNDING").lower() in _TRUTHY
        self.session = session or requests.Session()

    def _body(self, prompt: str) -> dict:
        body: dict = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        if self.grounding:
            # Google Search grounding cannot be combined with a JSON response
            # schema on these models; the prompt's output rule carries the shape.
            body["tools"] = [{"google_search": {}}]
        else:
            body["generationConfig"] = {
                "responseMimeType": "application/json",
                "responseSchema": response_schema(),
            }
        return body

    @retry(max_attempts=MAX_ATTEMPTS, base_delay=BASE_DELAY, retryable=(requests.ConnectionError, requests.Timeout))
    def _generate(self, prompt: str) -> dict:
        r = self.session.post(
            API_URL.format(model=self.model),
            params={"key": self.api_key},
            json=self._body(prompt),
            timeout=REQUEST_TIMEOUT,
        )
        if r.status_code in (401, 403):
            raise ProviderNotConfiguredError(f"Gemini rejected the API key ({r.status_code})")
        r.raise_for_status()
        return r.json()

    def fetch_jobs(self, filters: SearchFilters) -> list[Job]:
        if not self.api_key:
            raise ProviderNotConfiguredError("GEMINI_API_KEY is not set")
        try:
            data = self._generate(build_prompt(filters))
        except (requests.RequestException, ValueError) as exc:
            raise ProviderError(f"Gemini request failed: {exc}") from exc
        jobs = parse_jobs(_response_text(data))
        log.debug("Gemini model=%s grounding=%s returned %d jobs", self.model, self.grounding, len(jobs))
        return jobs
