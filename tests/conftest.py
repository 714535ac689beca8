"""Shared test fixtures for Autorun Guard tests."""

from __future__ import annotations

import os
import stat
from typing import Callable, Iterable, List

import pytest

from autorun_guard import ExecutableNotFound, PlatformHooks


class FakeLookup:
    """Path lookup that only knows a fixed set of paths and records every candidate."""

    def __init__(self, known: Iterable[str]):
        self.known = set(known)
        self.tried: List[str] = []

    def __call__(self, name: str) -> str:
        self.tried.append(name)
        if name in self.known:
            return name
        raise ExecutableNotFound(name)


def fake_known(*paths: str) -> Callable[[str], tuple]:
    """known_command stand-in: names in ``paths`` (or their basenames) are executables."""
    by_name = {os.path.basename(p): p for p in paths}
    by_name.update({p: p for p in paths})

    def known(name: str) -> tuple:
        if name in by_name:
            return by_name[name], True
        return "", False

    return known


@pytest.fixture
def windows_env() -> dict:
    return {"SystemRoot": "C:\\Windows", "windir": "C:\\Windows", "ProgramFiles": "C:\\Program Files", "APPDATA": "C:\\Users\\bob\\AppData\\Roaming"}


@pytest.fixture
def win_hooks(windows_env) -> Callable[..., PlatformHooks]:
    """Windows hooks over a fake filesystem; call with the paths that exist."""
    def make(*paths: str) -> PlatformHooks:
        return PlatformHooks(
            path_lookup=FakeLookup(paths),
            env_lookup=windows_env.get,
            windows=True,
            boundary_search=True,
            escape_backslashes=True,
        )
    return make


@pytest.fixture
def make_exe(tmp_path) -> Callable[..., str]:
    """Create an executable file under tmp_path and return its path."""
    def make(relpath: str, content: bytes = b"#!/bin/sh\nexit 0\n") -> str:
        path = tmp_path / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return str(path)
    return make


@pytest.fixture
def write_file(tmp_path) -> Callable[..., str]:
    def write(relpath: str, text: str) -> str:
        path = tmp_path / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return str(path)
    return write
