import nox

PYTHON_VERSIONS = ["3.11", "3.12", "3.13", "3.14"]


def _install(session: nox.Session) -> None:
    """Install the project with all extras into the nox virtualenv."""
    session.run(
        "poetry",
        "install",
        "--all-extras",
        external=True,
    )


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run full test suite across Python versions."""
    _install(session)
    session.run("pytest", *session.posargs)


@nox.session(python=PYTHON_VERSIONS)
def tests_domain(session: nox.Session) -> None:
    """Run domain-layer tests only (no storage required)."""
    _install(session)
    session.run(
        "pytest",
        "tests/identity/domain/",
        "tests/catalogue/domain/",
        "tests/ordering/domain/",
        "tests/common/domain/",
    )


@nox.session(python=PYTHON_VERSIONS[-1])
@nox.parametrize("backend", ["sql", "mongodb"])
def tests_backend(session: nox.Session, backend: str) -> None:
    """Run the storage-backed tests against a single backend."""
    _install(session)
    session.run("pytest", "-m", "application or integration", f"--backend={backend}")
