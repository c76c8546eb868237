import runpy
from unittest.mock import patch

import pytest


def test_module_main_raises_system_exit_with_cli_exit_code():
    with patch("aicommit.cli.main.main", return_value=3) as mock_main:
        with pytest.raises(SystemExit) as exc_info:
            runpy.run_module("aicommit", run_name="__main__")

    assert exc_info.value.code == 3
    mock_main.assert_called_once_with()


def test_entrypoint_exits_with_main_status():
    from aicommit.cli.main import entrypoint

    with patch("aicommit.cli.main.main", return_value=0):
        with pytest.raises(SystemExit) as exc_info:
            entrypoint()
    assert exc_info.value.code == 0
