from .base import JobProvider
from .gemini import GeminiProvider
from .groq import GroqProvider
from .mock import MockProvider

from jobhub.log import get_logger

log = get_logger(__name__)

__all__ = [
    "JobProvider", "GeminiProvider", "GroqProvider", "MockProvider",
    "get_provider",
]

_BY_NAME = {
    "groq": GroqProvider,
    "gemini": GeminiProvider,
    "mock": MockProvider,
}


def get_provider(env_getter) -> JobProvider:
    choice = env_getter("JOBHUB_PROVIDER").lower()
    if choice:
        if choice not in _BY_NAME:
            log.warning("Unknown JOBHUB_PROVIDER=%r, falling back to auto-detect", choice)
        else:
            log.info("Using provider: %s (JOBHUB_PROVIDER)", choice)
            return _BY_NAME[choice](env_getter)

    if env_getter("GROQ_API_KEY"):
        log.info("Using provider: Groq")
        return GroqProvider(env_getter)

    if env_getter("GEMINI_API_KEY"):
        log.info("Using provider: Gemini")
        return GeminiProvider(env_getter)

    log.info("No API keys found — using MockProvider")
    return MockProvider(env_getter)
