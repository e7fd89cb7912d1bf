"""Nox automation sessions for bionic_reader."""

from __future__ import annotations

import nox

nox.options.sessions = ("lint", "typecheck", "tests")
nox.options.reuse_existing_virtualenvs = True


@nox.session()
def lint(session: nox.Session) -> None:
    session.install("black", "flake8")
    session.run("black", "--check", "bionic_reader", "tests")
    session.run("flake8", "--max-line-length", "100", "bionic_reader", "tests")


@nox.session()
def typecheck(session: nox.Session) -> None:
    session.install("mypy", "types-PyYAML")
    session.install("-e", ".")
    session.run("mypy", "--ignore-missing-imports", "bionic_reader")


@nox.session()
def tests(session: nox.Session) -> None:
    session.install("-e", ".[dev]")
    session.run("pytest", "tests")
