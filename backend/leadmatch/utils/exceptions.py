class LeadMatchError(Exception):
    """Base class for errors raised by the qualification service."""


class ScenarioNotFoundError(LeadMatchError):
    pass


class LLMConfigurationError(LeadMatchError):
    """The configured LLM provider cannot be used (e.g. missing API key)."""
