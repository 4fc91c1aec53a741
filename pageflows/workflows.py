"""Named, reusable UI workflows bound to a shared browser session.

A ``WorkflowSet`` subclass groups related workflows. Each workflow body is a
plain function whose first parameter is the session the set was built
around, so the body reads like code written inline in the test::

    class MemberWorkflows(WorkflowSet):
        @workflow
        def login_with(session, email, password):
            session.navigate("/member")
            session.fill("email", email)
            session.fill("password", password)
            session.submit()

    MemberWorkflows(session).login_with("a@b.com", "pw")

Workflows declared with ``pass_set=True`` also receive the owning set as the
trailing positional argument, which lets them read and mutate instance state
between calls.
"""

from __future__ import annotations

import keyword
import logging
from types import MethodType
from typing import Any, Callable

from pageflows.core.errors import WorkflowDefinitionError, WorkflowNotFoundError


LOGGER = logging.getLogger(__name__)

WorkflowBody = Callable[..., Any]

_RESERVED_NAMES = frozenset({"session", "declare", "workflow_names", "get_workflow"})


class Workflow:
    """Descriptor wrapping a workflow body.

    Looked up on an instance it yields a bound method; looked up on the class
    it yields the descriptor itself.
    """

    def __init__(self, body: WorkflowBody, *, name: str | None = None, pass_set: bool = False) -> None:
        if not callable(body):
            raise WorkflowDefinitionError(f"Workflow body must be callable, got {type(body).__name__}")
        self.body = body
        self.name = name or getattr(body, "__name__", None)
        self.pass_set = pass_set
        self.owner: type | None = None
        self.__doc__ = getattr(body, "__doc__", None)

    def __set_name__(self, owner: type, name: str) -> None:
        # An alias such as `again = visit` keeps the first name.
        if self.owner is None:
            self.name = name
            self.owner = owner

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return MethodType(self, instance)

    def __call__(self, workflow_set: "WorkflowSet", *args: Any, **kwargs: Any) -> Any:
        session = workflow_set.session
        LOGGER.debug("Running workflow %s.%s", type(workflow_set).__name__, self.name)
        if self.pass_set:
            return self.body(session, *args, workflow_set, **kwargs)
        return self.body(session, *args, **kwargs)

    def __repr__(self) -> str:
        owner = self.owner.__name__ if self.owner is not None else "?"
        return f"<Workflow {owner}.{self.name} pass_set={self.pass_set}>"


def workflow(
    body: WorkflowBody | None = None,
    *,
    pass_set: bool = False,
) -> Any:
    """Declare a workflow inside a ``WorkflowSet`` class body.

    Usable bare (``@workflow``) or with options
    (``@workflow(pass_set=True)``).
    """

    def _decorate(func: WorkflowBody) -> Workflow:
        return Workflow(func, pass_set=pass_set)

    if body is None:
        return _decorate
    return _decorate(body)


class WorkflowSet:
    """Base class grouping workflows around one session.

    The session is shared with the caller and never closed here.
    """

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        for attr, value in vars(cls).items():
            if isinstance(value, Workflow):
                _check_name(attr)

    def __init__(self, session: Any) -> None:
        self.session = session

    def __repr__(self) -> str:
        return f"{type(self).__name__}(session={self.session!r})"

    @classmethod
    def declare(cls, name: str, body: WorkflowBody, *, pass_set: bool = False) -> Workflow:
        """Register ``body`` under ``name``, replacing any earlier workflow of that name."""

        _check_name(name)
        wf = Workflow(body, name=name, pass_set=pass_set)
        setattr(cls, name, wf)
        # setattr does not trigger __set_name__
        wf.owner = cls
        return wf

    @classmethod
    def workflow_names(cls) -> tuple[str, ...]:
        names: set[str] = set()
        for klass in cls.__mro__:
            for attr, value in vars(klass).items():
                if isinstance(value, Workflow):
                    names.add(attr)
        # A subclass may shadow an inherited workflow with a plain attribute.
        return tuple(sorted(n for n in names if isinstance(getattr(cls, n, None), Workflow)))

    @classmethod
    def get_workflow(cls, name: str) -> Workflow:
        wf = getattr(cls, name, None)
        if not isinstance(wf, Workflow):
            raise WorkflowNotFoundError(f"{cls.__name__} has no workflow named {name!r}")
        return wf


def _check_name(name: Any) -> None:
    if not isinstance(name, str) or not name.isidentifier() or keyword.iskeyword(name):
        raise WorkflowDefinitionError(f"Invalid workflow name: {name!r}")
    if name.startswith("_"):
        raise WorkflowDefinitionError(f"Workflow name must not be private: {name!r}")
    if name in _RESERVED_NAMES:
        raise WorkflowDefinitionError(f"Workflow name {name!r} is reserved by WorkflowSet")


__all__ = ["Workflow", "WorkflowBody", "WorkflowSet", "workflow"]
