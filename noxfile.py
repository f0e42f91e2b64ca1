import os
import shutil

import nox

PYTHON_VERSION = "3.10"


@nox.session(python=PYTHON_VERSION)
def lint(session):
    print("🛠️ Running linter")
    try:
        os.remove(".flake8-report")
    except FileNotFoundError:
        pass

    session.install("flake8")
    session.run(
        "flake8", "pysqsmock", "tests",
        "--max-line-length", "120",
        "--count",
        "--statistics",
        "--output-file=.flake8-report"
    )


@nox.session(python=PYTHON_VERSION)
def test(session):
    print("🧪 Running tests")
    try:
        os.remove(".pytest-results.html")
    except FileNotFoundError:
        pass

    session.install("-e", ".[test]")
    session.run(
        "pytest", "tests",
        "-vv", "-rEPW",
        "--cache-clear",
        "--color=yes",
        "--html=.pytest-results.html", "--self-contained-html"
    )


@nox.session(python=PYTHON_VERSION)
def build(session):
    print("🏗️ Building package")
    shutil.rmtree("dist", ignore_errors=True)
    session.install("build")
    session.run("python", "-m", "build")

    print("📦 Installing package")
    session.install(".")


@nox.session(python=PYTHON_VERSION)
def release_check(session):
    print("📤 Twine Release Check")
    session.install("twine")
    session.run("twine", "check", "dist/*")
