"""Tests for output helpers."""

import pytest

from tabnest.cli import output as cli_output
from tabnest.core.output import machine_output, user_output


def test_user_output_goes_to_stderr_and_machine_output_to_stdout(
    capsys: pytest.CaptureFixture[str],
) -> None:
    user_output("Parked 2 sub-groups")
    machine_output('{"holdingGroupId": 3}')

    captured = capsys.readouterr()
    assert captured.err == "Parked 2 sub-groups\n"
    assert captured.out == '{"holdingGroupId": 3}\n'


def test_cli_output_reexports_core_helpers() -> None:
    assert cli_output.user_output is user_output
    assert cli_output.machine_output is machine_output
