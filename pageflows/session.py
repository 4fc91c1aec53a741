from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Session(Protocol):
    """Capabilities workflow bodies call on the session they receive.

    ``WorkflowSet`` accepts any object; missing capabilities fail when a
    workflow first calls them.
    """

    def navigate(self, url: str) -> object:  # pragma: no cover - interface definition
        ...

    def fill(self, field: str, value: str) -> object:  # pragma: no cover - interface definition
        ...

    def click(self, target: str) -> object:  # pragma: no cover - interface definition
        ...

    def submit(self) -> object:  # pragma: no cover - interface definition
        ...

    def assert_text(self, text: str) -> object:  # pragma: no cover - interface definition
        ...


__all__ = ["Session"]
