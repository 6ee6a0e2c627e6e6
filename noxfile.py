import nox  # type: ignore[import]


@nox.session
def tests(session):
    session.install("-e", ".[test]")
    session.run("pytest")


@nox.session
def lint(session):
    session.install("ruff")
    session.run("ruff", "check", "einkview", "tests")


@nox.session
def debug_tests(session):
    """Run the tests with viewer debug logging enabled."""
    session.install("-e", ".[test]")
    session.run("pytest", "-s", env={"EINKVIEW_DEBUG": "1"})
