"""Exception types raised by providers and payload parsing."""


class JobHubError(Exception):
    """Base exception for the application."""


class ProviderError(JobHubError):
    """The job-data provider could not produce a result."""


class ProviderNotConfiguredError(ProviderError):
    """The selected provider is missing its API key."""


class JobSchemaError(ProviderError):
    """The provider answered, but not with the job schema we asked for."""
