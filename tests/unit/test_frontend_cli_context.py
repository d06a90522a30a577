"""Unit tests for CLI configuration resolution."""

from pathlib import Path
from unittest.mock import Mock

import pytest

from depot.core.exceptions import InvalidInputError
from depot.frontend.cli.context import build_context, choose_path, get_password


def test_choose_path_prefers_depot_path(tmp_path):
    target = tmp_path / "custom.db"
    env = {"DEPOT_PATH": str(target), "XDG_CONFIG_HOME": str(tmp_path / "xdg")}

    assert choose_path(env) == target
    assert not (tmp_path / "xdg").exists()


def test_choose_path_xdg_config_home(tmp_path):
    env = {"XDG_CONFIG_HOME": str(tmp_path), "HOME": "/nonexistent"}

    path = choose_path(env)
    assert path == tmp_path / "depot" / "depot.db"
    assert path.parent.is_dir()


def test_choose_path_home_fallback(tmp_path):
    path = choose_path({"HOME": str(tmp_path)})
    assert path == tmp_path / ".depot" / "depot.db"
    assert path.parent.is_dir()


def test_choose_path_cwd_fallback(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = choose_path({})
    assert path == Path(".") / ".depot" / "depot.db"
    assert (tmp_path / ".depot").is_dir()


def test_get_password_from_env():
    prompt = Mock()
    assert get_password({"DEPOT_PASS": "pw"}, prompt) == "pw"
    prompt.assert_not_called()


def test_get_password_prompts_when_unset():
    prompt = Mock(return_value="  typed  \n")
    assert get_password({}, prompt) == "typed"
    prompt.assert_called_once_with("PASSWORD: ")


@pytest.mark.parametrize("env, typed", [({"DEPOT_PASS": ""}, None), ({}, "   ")])
def test_get_password_rejects_empty(env, typed):
    with pytest.raises(InvalidInputError):
        get_password(env, Mock(return_value=typed))


def test_build_context_opens_depot(tmp_path):
    env = {"DEPOT_PATH": str(tmp_path / "d.db"), "DEPOT_PASS": "pw"}
    ctx = build_context(env)
    try:
        assert ctx.db_path == tmp_path / "d.db"
        assert ctx.db_path.exists()
        assert ctx.get_password() == "pw"
    finally:
        ctx.close()
