"""Tests for the launch-string normalizer."""

from __future__ import annotations

import sys

import pytest

from autorun_guard import (ExecutableNotFound, LaunchCommand, PlatformHooks, normalize, posix_hooks,
                           windows_hooks)
from conftest import FakeLookup


WEIRD_INPUTS = [
    "", "   ", '"', "'", "\\", '""', "\x00", "\x00 -a", "%", "%%", "$", "${", "\\??\\",
    "\\SystemRoot", '"C:\\x.exe', "a \"b 'c", "\u202e\u200b", "C:\\" + "a " * 500,
]


@pytest.mark.parametrize("raw", WEIRD_INPUTS)
def test_never_raises(raw):
    for hooks in (posix_hooks(), windows_hooks()):
        cmd = normalize(raw, hooks)
        assert isinstance(cmd, LaunchCommand)
        assert isinstance(cmd.image_path, str)
        assert isinstance(cmd.arguments, str)


def test_unresolvable_posix_candidate_is_flagged(tmp_path):
    cmd = normalize("doesnotexist", posix_hooks(str(tmp_path)))
    assert (cmd.image_path, cmd.arguments, cmd.resolved) == ("doesnotexist", "", False)
    assert isinstance(cmd.error, ExecutableNotFound)


def test_unresolvable_windows_candidate_falls_back(win_hooks):
    cmd = normalize("  doesnotexist --flag ", win_hooks())
    assert (cmd.image_path, cmd.arguments, cmd.resolved) == ("doesnotexist --flag", "", False)
    assert isinstance(cmd.error, ExecutableNotFound)


def test_empty_launch_string():
    cmd = normalize("   ")
    assert (cmd.image_path, cmd.arguments, cmd.resolved) == ("", "", False)
    assert cmd.error is not None


def test_boundary_search_through_normalize(win_hooks):
    target = "C:\\Program Files\\My Application\\app.exe"
    cmd = normalize(target + " --flag", win_hooks(target))
    assert (cmd.image_path, cmd.arguments, cmd.resolved, cmd.error) == (target, "--flag", True, None)


def test_quoted_windows_command(win_hooks):
    cmd = normalize('"C:\\Program Files\\x.exe" -y', win_hooks("C:\\Program Files\\x.exe"))
    assert (cmd.image_path, cmd.arguments) == ("C:\\Program Files\\x.exe", "-y")


def test_service_image_path_alias(win_hooks):
    hooks = win_hooks("C:\\Windows\\System32\\svchost.exe")
    cmd = normalize("\\SystemRoot\\System32\\svchost.exe -k netsvcs -p", hooks)
    assert (cmd.image_path, cmd.arguments) == ("C:\\Windows\\System32\\svchost.exe", "-k netsvcs -p")


def test_environment_in_run_key(win_hooks):
    hooks = win_hooks("C:\\Users\\bob\\AppData\\Roaming\\Updater\\up.exe")
    cmd = normalize("%APPDATA%\\Updater\\up.exe /background", hooks)
    assert (cmd.image_path, cmd.arguments) == ("C:\\Users\\bob\\AppData\\Roaming\\Updater\\up.exe", "/background")


def test_windows_tokenizing_without_boundary_search(windows_env):
    hooks = PlatformHooks(path_lookup=FakeLookup(["C:\\Tools\\x.exe"]), env_lookup=windows_env.get,
                          windows=True, escape_backslashes=True)
    cmd = normalize('C:\\Tools\\x.exe -y "C:\\out dir\\log.txt"', hooks)
    assert (cmd.image_path, cmd.arguments, cmd.resolved) == ("C:\\Tools\\x.exe", "-y C:\\out dir\\log.txt", True)


def test_posix_arguments_joined_by_single_spaces():
    hooks = PlatformHooks(path_lookup=FakeLookup(["/usr/bin/foo"]))
    cmd = normalize('/usr/bin/foo   --name "b c"  -v', hooks)
    assert (cmd.image_path, cmd.arguments, cmd.resolved) == ("/usr/bin/foo", "--name b c -v", True)


def test_posix_unresolved_first_token_keeps_split():
    cmd = normalize("/opt/gone/daemon -d", PlatformHooks(path_lookup=FakeLookup([])))
    assert (cmd.image_path, cmd.arguments, cmd.resolved) == ("/opt/gone/daemon", "-d", False)


def test_posix_malformed_quoting_recovers():
    hooks = PlatformHooks(path_lookup=FakeLookup(["/usr/bin/foo"]))
    cmd = normalize('/usr/bin/foo "unterminated arg', hooks)
    assert (cmd.image_path, cmd.arguments, cmd.resolved) == ("/usr/bin/foo", '"unterminated arg', True)


def test_posix_variable_expansion():
    hooks = PlatformHooks(path_lookup=FakeLookup(["/opt/tools/run"]), env_lookup={"TOOLS": "/opt/tools"}.get)
    assert normalize("$TOOLS/run -x", hooks).image_path == "/opt/tools/run"


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
def test_resolved_absolute_path_is_idempotent(make_exe, tmp_path):
    exe = make_exe("sbin/agent")
    hooks = posix_hooks(str(tmp_path))
    first = normalize(exe, hooks)
    second = normalize(first.image_path, hooks)
    assert (first.image_path, first.arguments, first.resolved) == (exe, "", True)
    assert (second.image_path, second.arguments) == (exe, "")


def test_windows_idempotent(win_hooks):
    path = "C:\\Program Files\\x.exe"
    hooks = win_hooks(path)
    assert normalize(normalize(path, hooks).image_path, hooks) == LaunchCommand(path, "", True)


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
def test_bare_name_resolved_on_search_path(make_exe, tmp_path):
    exe = make_exe("bin/backup")
    cmd = normalize("backup --full", posix_hooks(str(tmp_path / "bin")))
    assert (cmd.image_path, cmd.arguments, cmd.resolved) == (exe, "--full", True)
