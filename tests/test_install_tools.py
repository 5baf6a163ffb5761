import logging

import pytest

from macos_bootstrap.errors import CommandError, ConfigError
from macos_bootstrap.lib.guard import RunReport
from macos_bootstrap.steps.step_50_install_tools import InstallToolsStep, install_tool_table


def test_make_and_go_present_everything_else_installed_in_order(ctx, runner, caplog):
    caplog.set_level(logging.INFO)
    runner.commands |= {"make", "go"}

    InstallToolsStep().run(ctx)

    assert runner.argvs("brew") == [
        ["brew", "install", "git"],
        ["brew", "install", "ripgrep"],
        ["brew", "install", "jq"],
    ]
    assert "make is already installed." in caplog.text
    assert "go is already installed." in caplog.text
    assert ctx.report.satisfied == ["make", "go"]


def test_present_probes_never_install(ctx, runner):
    runner.commands |= {"git", "make", "rg", "go", "jq"}

    InstallToolsStep().run(ctx)

    assert runner.calls == []
    assert ctx.report.performed == []


def test_probe_differs_from_package_name(ctx, runner):
    runner.commands |= {"git", "make", "go", "jq", "rg"}
    InstallToolsStep().run(ctx)
    assert ["brew", "install", "ripgrep"] not in runner.calls


def test_mismatched_table_rejected_before_any_install(runner):
    with pytest.raises(ConfigError):
        install_tool_table(["git", "make"], ["git"], report=RunReport(), run=runner)
    assert runner.calls == []


def test_failed_install_stops_the_table(ctx, runner):
    runner.fail_on = "install ripgrep"

    with pytest.raises(CommandError) as exc:
        InstallToolsStep().run(ctx)

    assert exc.value.returncode == 1
    assert ["brew", "install", "jq"] not in runner.calls
