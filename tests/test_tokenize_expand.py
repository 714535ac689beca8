"""Tests for shell-word tokenizing and alias/environment expansion."""

from __future__ import annotations

import pytest

from autorun_guard import MalformedQuoting, escape_backslashes, expand, tokenize


def test_splits_on_whitespace_outside_quotes():
    assert tokenize('/usr/bin/foo  -a "b c"\t\'d e\'') == ["/usr/bin/foo", "-a", "b c", "d e"]


def test_doubled_backslashes_survive_tokenizing():
    line = escape_backslashes('"C:\\Program Files\\x.exe" -y C:\\temp\\out.log')
    assert tokenize(line) == ["C:\\Program Files\\x.exe", "-y", "C:\\temp\\out.log"]


def test_undoubled_backslashes_are_escapes():
    """Without doubling the tokenizer eats the separators."""
    assert tokenize("C:\\temp\\x.exe") == ["C:tempx.exe"]


def test_unclosed_quote_raises():
    with pytest.raises(MalformedQuoting):
        tokenize('"/usr/bin/foo -a')
    with pytest.raises(ValueError):
        tokenize("/usr/bin/foo 'oops")


def test_unicode_words():
    assert tokenize("/opt/naïve/bin 'über straße'") == ["/opt/naïve/bin", "über straße"]


def test_windows_percent_variables(windows_env):
    assert expand("%ProgramFiles%\\App\\app.exe", windows_env.get, windows=True) == "C:\\Program Files\\App\\app.exe"


def test_unresolved_variables_stay_literal(windows_env):
    assert expand("%NOPE%\\x.exe %SystemRoot%", windows_env.get, windows=True) == "%NOPE%\\x.exe C:\\Windows"
    assert expand("$NOPE/bin ${ALSO_NOPE}", {}.get) == "$NOPE/bin ${ALSO_NOPE}"


def test_nt_object_prefix_is_stripped(windows_env):
    assert expand("\\??\\C:\\Windows\\system32\\drivers\\x.sys", windows_env.get, windows=True) == \
        "C:\\Windows\\system32\\drivers\\x.sys"


@pytest.mark.parametrize("raw, expected", [
    ("\\SystemRoot\\System32\\drivers\\acpi.sys", "C:\\Windows\\System32\\drivers\\acpi.sys"),
    ("\\SYSTEMROOT\\system32\\svchost.exe -k x", "C:\\Windows\\system32\\svchost.exe -k x"),
    ("system32\\DRIVERS\\disk.sys", "C:\\Windows\\System32\\DRIVERS\\disk.sys"),
    ("System32\\svchost.exe", "C:\\Windows\\System32\\svchost.exe"),
])
def test_systemroot_aliases(windows_env, raw, expected):
    assert expand(raw, windows_env.get, windows=True) == expected


def test_aliases_untouched_without_systemroot():
    assert expand("\\SystemRoot\\x.sys", {}.get, windows=True) == "\\SystemRoot\\x.sys"


def test_alias_only_at_start(windows_env):
    assert expand("C:\\tools\\system32\\x.exe", windows_env.get, windows=True) == "C:\\tools\\system32\\x.exe"


def test_posix_variables():
    env = {"HOME": "/home/alice", "USER": "alice"}.get
    assert expand("$HOME/bin/run --user ${USER}", env) == "/home/alice/bin/run --user alice"


def test_posix_mode_ignores_percent_syntax():
    assert expand("%HOME%/x", {"HOME": "/root"}.get) == "%HOME%/x"
