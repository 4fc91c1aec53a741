"""Workflow sets imported by name from the loader and CLI tests."""

from pageflows import WorkflowSet, workflow


class MemberWorkflows(WorkflowSet):
    @workflow
    def login_with(session, email, password):
        session.navigate("/member")
        session.fill("email", email)
        session.fill("password", password)
        session.submit()

    @workflow
    def greeting(session, name):
        session.navigate("/")
        return f"hello {name}"


class AdminWorkflows(MemberWorkflows):
    @workflow
    def open_dashboard(session):
        session.navigate("/admin")


NOT_A_SET = object()
