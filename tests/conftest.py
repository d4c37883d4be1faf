" generic fixtures "

import pytest

from shellcomp.commands.models import Command, Flag
from shellcomp.commands.registry import CommandRegistry
from shellcomp.completions.discovery import build_command_model
from shellcomp.logging_setup import get_logger


def pytest_configure():
    "Runs once before all"
    from shellcomp.logging_setup import init_logger

    init_logger("/dev/null", force_debug=True)


# Minimal model: one boolean flag, one colon id


class Foo(Command):
    id = "foo"
    flags = {"bar": Flag.boolean()}


class BazQux(Command):
    id = "baz:qux"


# Richer application exercising every flag kind


class AppsDeploy(Command):
    id = "apps:deploy"
    summary = 'Deploy an app with "quotes" and `ticks` [beta]\nSecond line is dropped'
    aliases = ["deploy"]
    flags = {
        "force": Flag.boolean("Skip [confirmation]", char="f"),
        "region": Flag.option("Target region", char="r", options=["eu", "us"]),
        "tag": Flag.option("Tag to apply", multiple=True),
        "trace": Flag.boolean("Internal tracing", hidden=True),
    }


class AppsList(Command):
    id = "apps:list"
    description = "List applications"
    flags = {"json": Flag.boolean("Format output as json")}


class InternalDebug(Command):
    id = "internal:debug"
    summary = "Never completed"
    hidden = True


class Version(Command):
    id = "version"
    summary = "Show the version"


@pytest.fixture
def test_logger():
    "A logger for objects requiring one"
    return get_logger("tests")


@pytest.fixture
def minimal_registry():
    "Registry holding foo and baz:qux"
    registry = CommandRegistry()
    registry.add_commands("minimal", [Foo, BazQux])
    return registry


@pytest.fixture
def minimal_model(minimal_registry):
    "Command model of the minimal registry"
    return build_command_model(minimal_registry).commands


@pytest.fixture
def app_registry():
    "Registry of a small application with topics, aliases and hidden entries"
    registry = CommandRegistry()
    registry.add_commands("apps", [AppsDeploy, AppsList, InternalDebug])
    registry.add_commands("core", [Version])
    return registry


@pytest.fixture
def app_model(app_registry):
    "Command model of the application registry"
    return build_command_model(app_registry).commands
