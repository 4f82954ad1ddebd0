from abc import ABC, abstractmethod

from jobhub.models import Job, SearchFilters


class JobProvider(ABC):
    """Something that turns a filter set into job postings, or raises ProviderError."""

    name: str = "provider"

    @abstractmethod
    def fetch_jobs(self, filters: SearchFilters) -> list[Job]:
        pass
