"""Tests for commands that change tab groups."""

from pathlib import Path

import pytest
from click.testing import CliRunner
from tests.fakes.tab_host import FakeTabHost
from tests.test_utils.tab_builders import make_tabs, parent_with_sub_group_host

from tabnest.cli.cli import cli
from tabnest.core.context import TabNestContext
from tabnest.core.tree_types import Group


def _initialized_context(host: FakeTabHost) -> TabNestContext:
    ctx = TabNestContext.for_test(host=host)
    ctx.service.initialize()
    return ctx


def test_collapse_then_expand() -> None:
    runner = CliRunner()
    host = parent_with_sub_group_host()
    ctx = _initialized_context(host)

    result = runner.invoke(cli, ["collapse", "1"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Collapsed group 1 (1 sub-group)" in result.output

    result = runner.invoke(cli, ["parking-lot"], obj=ctx)

    assert "Holding group: 3" in result.output
    assert "Docs tabs: 3, 4" in result.output

    result = runner.invoke(cli, ["expand", "1"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Expanded group 1 (1 sub-group)" in result.output
    assert [t.id for t in host.query_tabs()] == [1, 2, 3, 4]


def test_collapse_unknown_group_fails() -> None:
    runner = CliRunner()
    ctx = _initialized_context(parent_with_sub_group_host())

    result = runner.invoke(cli, ["collapse", "99"], obj=ctx)

    assert result.exit_code == 1
    assert "Error: Group 99 not found" in result.output


def test_collapse_without_sub_groups_reports_nothing_to_do() -> None:
    runner = CliRunner()
    host = FakeTabHost(
        tabs=make_tabs(1),
        groups=[Group(id=1, title="Solo", color="blue", collapsed=False)],
    )
    ctx = _initialized_context(host)

    result = runner.invoke(cli, ["collapse", "1"], obj=ctx)

    assert result.exit_code == 0
    assert "Nothing to collapse for group 1" in result.output


def test_collapse_with_failed_sub_group_exits_non_zero() -> None:
    runner = CliRunner()
    host = FakeTabHost(
        tabs=make_tabs(1, 2, 3),
        groups=[
            Group(id=1, title="Work", color="blue", collapsed=False),
            Group(id=2, title="Docs", color="blue", collapsed=False),
            Group(id=3, title="Bugs", color="blue", collapsed=False),
        ],
        failing_tab_ids={3},
    )
    ctx = _initialized_context(host)

    result = runner.invoke(cli, ["collapse", "1"], obj=ctx)

    assert result.exit_code == 1
    assert "Bugs [3]" in result.output
    assert "Error: 1 sub-group(s) failed" in result.output


def test_toggle_sub_group_collapses_parent() -> None:
    runner = CliRunner()
    ctx = _initialized_context(parent_with_sub_group_host())

    result = runner.invoke(cli, ["toggle", "2"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Collapsed group 1" in result.output


def test_toggle_unknown_group_fails() -> None:
    runner = CliRunner()
    ctx = _initialized_context(parent_with_sub_group_host())

    result = runner.invoke(cli, ["toggle", "42"], obj=ctx)

    assert result.exit_code == 1
    assert "Error: Group 42 not found" in result.output


def test_create_subgroup_prints_new_group_id() -> None:
    runner = CliRunner()
    host = FakeTabHost(
        tabs=make_tabs(1, 1),
        groups=[Group(id=1, title="Work", color="blue", collapsed=False)],
    )
    ctx = _initialized_context(host)

    result = runner.invoke(cli, ["create-subgroup", "1", "Notes"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Created sub-group 'Notes'" in result.output
    assert result.output.rstrip().endswith("2")
    assert host.get_group(2) == Group(id=2, title="Notes", color="blue", collapsed=False)


def test_create_subgroup_missing_parent_fails() -> None:
    runner = CliRunner()
    ctx = _initialized_context(FakeTabHost())

    result = runner.invoke(cli, ["create-subgroup", "5", "Notes"], obj=ctx)

    assert result.exit_code == 1
    assert "Error: Group 5 not found" in result.output


def test_refresh_drops_parking_lot_after_holding_group_closed() -> None:
    runner = CliRunner()
    host = parent_with_sub_group_host()
    ctx = _initialized_context(host)
    runner.invoke(cli, ["collapse", "1"], obj=ctx)
    host.strip.close_tab(3)
    host.strip.close_tab(4)

    result = runner.invoke(cli, ["refresh"], obj=ctx)

    assert result.exit_code == 0
    assert "Tab tree rebuilt" in result.output
    assert ctx.service.controller.parking_lot.holding_group_id is None


def test_init_writes_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_path = tmp_path / "config.toml"
    monkeypatch.setenv("TABNEST_CONFIG", str(config_path))
    runner = CliRunner()
    ctx = TabNestContext.for_test(host=parent_with_sub_group_host())

    result = runner.invoke(cli, ["init"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert config_path.exists()
    assert "Tracking 1 top-level group(s)" in result.output

    result = runner.invoke(cli, ["init"], obj=ctx)

    assert "Config already exists" in result.output


def test_invalid_config_is_reported(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text('holding_color = "black"\n', encoding="utf-8")
    monkeypatch.setenv("TABNEST_CONFIG", str(config_path))
    runner = CliRunner()

    result = runner.invoke(cli, ["tabs"])

    assert result.exit_code == 1
    assert "Error: Invalid 'holding_color'" in result.output
