"""
Tests for the cd/chdir and limit builtins.

The limit builtin is exercised against a fake psutil process: really
lowering RLIMIT_DATA would take the test runner down with it.
"""

import os
import pwd

import pytest

from RayShell import builtin
from RayShell.builtin import execute_builtin, parse_limit, resolve_home
from RayShell.errors import HomeDirectoryError, InvalidLimitError
from RayShell.parser import parse_command


class FakeProcess:
    soft = 1 << 40
    hard = 1 << 41
    calls = []
    refuse = False

    def rlimit(self, resource, limits=None):
        if limits is None:
            return (FakeProcess.soft, FakeProcess.hard)
        if FakeProcess.refuse:
            raise OSError(22, "Invalid argument")
        FakeProcess.calls.append((resource, limits))
        FakeProcess.soft, FakeProcess.hard = limits
        return None


@pytest.fixture
def fake_process(monkeypatch):
    FakeProcess.soft = 1 << 40
    FakeProcess.hard = 1 << 41
    FakeProcess.calls = []
    FakeProcess.refuse = False
    monkeypatch.setattr(builtin.psutil, "Process", FakeProcess)
    return FakeProcess


@pytest.fixture
def in_tmp(tmp_path, monkeypatch):
    path = tmp_path.resolve()
    monkeypatch.chdir(path)
    return path


def run(line):
    return execute_builtin(parse_command(line))


class TestChangeDirectory:

    def test_cd_to_path(self, in_tmp):
        (in_tmp / "sub").mkdir()
        assert run("cd sub") is True
        assert os.getcwd() == str(in_tmp / "sub")

    def test_chdir_alias(self, in_tmp):
        (in_tmp / "sub").mkdir()
        assert run("chdir sub") is True
        assert os.getcwd() == str(in_tmp / "sub")

    def test_cd_without_argument_goes_home(self, in_tmp, monkeypatch):
        home = in_tmp / "home"
        home.mkdir()
        monkeypatch.setenv("HOME", str(home))

        assert run("cd") is True
        assert os.getcwd() == str(home)

    def test_cd_tilde_goes_home(self, in_tmp, monkeypatch):
        home = in_tmp / "home"
        home.mkdir()
        monkeypatch.setenv("HOME", str(home))

        run("cd ~")
        assert os.getcwd() == str(home)

    def test_bad_path_reported_and_cwd_kept(self, in_tmp, capsys):
        assert run("cd does-not-exist") is True
        assert os.getcwd() == str(in_tmp)
        assert "does-not-exist" in capsys.readouterr().err

    def test_too_many_arguments_is_not_builtin(self, in_tmp):
        assert run("cd a b") is False
        assert os.getcwd() == str(in_tmp)

    def test_piped_cd_is_not_builtin(self):
        assert execute_builtin(parse_command("cd | cat", "/tmp/fifo")) is False


class TestResolveHome:

    def test_prefers_environment(self, monkeypatch):
        monkeypatch.setenv("HOME", "/somewhere")
        assert resolve_home() == "/somewhere"

    def test_falls_back_to_password_database(self, monkeypatch):
        monkeypatch.delenv("HOME", raising=False)
        assert resolve_home() == pwd.getpwuid(os.getuid()).pw_dir

    def test_both_sources_fail(self, monkeypatch, in_tmp, capsys):
        def no_entry(uid):
            raise KeyError(uid)

        monkeypatch.delenv("HOME", raising=False)
        monkeypatch.setattr(builtin.pwd, "getpwuid", no_entry)

        with pytest.raises(HomeDirectoryError):
            resolve_home()

        assert run("cd") is True
        assert os.getcwd() == str(in_tmp)
        assert "invalid home variable" in capsys.readouterr().err


class TestParseLimit:

    @pytest.mark.parametrize("text,expected", [
        ("4096", 4096),
        ("0", 0),
        ("0x1000", 4096),
        ("0X1f", 31),
        ("010", 8),
        ("+12", 12),
    ])
    def test_valid(self, text, expected):
        assert parse_limit(text) == expected

    @pytest.mark.parametrize("text", ["abc", "12abc", "-5", "0x", "08", "1.5", str(2 ** 64)])
    def test_invalid(self, text):
        with pytest.raises(InvalidLimitError) as exc:
            parse_limit(text)
        assert str(exc.value) == f"Limit: {text} is not a valid memory limit"


class TestLimit:

    def test_sets_soft_keeps_hard(self, fake_process):
        assert run("limit 4096") is True
        assert fake_process.calls == [(builtin.psutil.RLIMIT_DATA, (4096, 1 << 41))]

    def test_non_numeric_changes_nothing(self, fake_process, capsys):
        assert run("limit abc") is True
        assert fake_process.calls == []
        assert "Limit: abc is not a valid memory limit" in capsys.readouterr().err

    def test_two_arguments_is_not_builtin(self, fake_process):
        assert run("limit 10 10") is False
        assert fake_process.calls == []

    def test_no_argument_is_not_builtin(self, fake_process):
        assert run("limit") is False

    def test_refused_by_os(self, fake_process, capsys):
        fake_process.refuse = True
        assert run("limit 4096") is True
        assert "Limit: Memory allocation failed" in capsys.readouterr().err
