"""Groq chat completions (OpenAI-compatible API) as the job-data provider."""
from __future__ import annotations

from typing import Any

import openai
from openai import OpenAI

from jobhub.errors import ProviderError, ProviderNotConfiguredError
from jobhub.log import get_logger
from jobhub.models import Job, SearchFilters, parse_jobs
from jobhub.providers.base import JobProvider
from jobhub.providers.prompt import OBJECT_OUTPUT_RULE, build_prompt
from jobhub.retry import retry

log = get_logger(__name__)

BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_MODEL = "llama-3.3-70b-versatile"

# Same per-call budget as the Gemini provider; the client's own retries are
# off so only our backoff applies.
REQUEST_TIMEOUT = 25.0
MAX_ATTEMPTS = 3
BASE_DELAY = 2.0


class GroqProvider(JobProvider):
    name = "groq"

    def __init__(self, env_getter, client: Any = None) -> None:
        self.api_key: str = env_getter("GROQ_API_KEY")
        self.model: str = env_getter("GROQ_LLM_MODEL") or DEFAULT_MODEL
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            if not self.api_key:
                raise ProviderNotConfiguredError("GROQ_API_KEY is not set")
            self._client = OpenAI(api_key=self.api_key, base_url=BASE_URL, timeout=REQUEST_TIMEOUT, max_retries=0)
        return self._client

    @retry(max_attempts=MAX_ATTEMPTS, base_delay=BASE_DELAY, retryable=(openai.APIConnectionError,))
    def _complete(self, prompt: str) -> str:
        r = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": "You are a Taiwan job market researcher. Reply in JSON."},
                {"role": "user", "content": prompt},
            ],
            response_format={"type": "json_object"},
            temperature=0.3,
            max_tokens=8000,
        )
        return (r.choices[0].message.content or "").strip()

    def fetch_jobs(self, filters: SearchFilters) -> list[Job]:
        prompt = build_prompt(filters, output_rule=OBJECT_OUTPUT_RULE)
        try:
            text = self._complete(prompt)
        except openai.OpenAIError as exc:
            raise ProviderError(f"Groq request failed: {exc}") from exc
        jobs = parse_jobs(text)
        log.debug("Groq model=%s returned %d jobs", self.model, len(jobs))
        return jobs
