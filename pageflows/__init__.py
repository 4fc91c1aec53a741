"""Reusable browser-test workflows bound to a shared session."""

from .core.errors import (
    BrowserError,
    ConfigError,
    PageflowsError,
    WorkflowDefinitionError,
    WorkflowNotFoundError,
)
from .session import Session
from .workflows import Workflow, WorkflowSet, workflow

__version__ = "0.1.0"

__all__ = [
    "BrowserError",
    "ConfigError",
    "PageflowsError",
    "Session",
    "Workflow",
    "WorkflowDefinitionError",
    "WorkflowNotFoundError",
    "WorkflowSet",
    "workflow",
]
