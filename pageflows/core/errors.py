"""Custom exceptions used across pageflows.

Exceptions raised inside workflow bodies are never wrapped in these types.
"""


class PageflowsError(Exception):
    """Base error for the library."""


class ConfigError(PageflowsError):
    """Configuration related error."""


class BrowserError(PageflowsError):
    """Raised when the browser driver cannot be started or navigation fails."""


class WorkflowDefinitionError(PageflowsError):
    """Raised when a workflow declaration is invalid."""


class WorkflowNotFoundError(PageflowsError, LookupError):
    """Raised when a workflow name is not declared on a set."""
