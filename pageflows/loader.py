from __future__ import annotations

import importlib

from pageflows.core.errors import ConfigError
from pageflows.workflows import WorkflowSet


def load_workflow_set(target: str) -> type[WorkflowSet]:
    """Import ``package.module:ClassName`` and return the ``WorkflowSet`` subclass."""

    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigError(f"Expected 'module:ClassName', got {target!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigError(f"Cannot import workflow module {module_name!r}: {exc}") from exc

    obj = module
    for part in attr.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise ConfigError(f"{module_name} has no attribute {attr!r}") from exc
    if not isinstance(obj, type) or not issubclass(obj, WorkflowSet):
        raise ConfigError(f"{target} is not a WorkflowSet subclass")
    return obj
