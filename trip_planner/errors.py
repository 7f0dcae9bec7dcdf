"""Exceptions raised by the trip planner services."""


class PlannerError(RuntimeError):
    """Base class for trip planner failures."""


class LLMConfigurationError(PlannerError):
    """Raised when the LLM provider is misconfigured (e.g. no API key)."""


class UpstreamServiceError(PlannerError):
    """Raised when an upstream provider call fails unexpectedly."""
