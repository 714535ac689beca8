#!/usr/bin/env python3
"""
Autorun Guard: Cross-Platform Autorun Enumerator
Author: w01f
License: MIT
Purpose: List everything a host launches by itself at boot or logon, with the
resolved executable, its arguments and content hashes, for triage.

Key features
- Windows run keys, services, startup folders and scheduled tasks; macOS launch
  daemons/agents; Linux systemd units, cron jobs and shell profiles; FreeBSD rc.d.
- Launch-string normalization: %VAR%/$VAR expansion, \\SystemRoot aliases,
  quoted and unquoted Windows command lines (CreateProcess-style boundary
  search), shell comment and separator handling, PATH resolution.
- MD5/SHA1/SHA256 of every resolved image; unreadable files never drop a record.
- Output: human readable table + JSON report. Collectors live in autorun_guard_collectors/
  and are driven by rules.yaml.
"""
from __future__ import annotations

import argparse
import dataclasses
import enum
import hashlib
import importlib
import json
import logging
import ntpath
import os
import platform
import posixpath
import re
import shlex
import shutil
import sys
import time
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from dotenv import load_dotenv

__VERSION__ = "0.1.0"
__AUTHOR__  = "w01f"

log = logging.getLogger("autorun_guard")


def now_iso() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%S%z")

def current_system() -> str:
    return platform.system().lower()


class AutorunError(Exception):
    """Base class for conditions raised inside the launch-string engine."""

class MalformedQuoting(AutorunError, ValueError):
    """A quote was opened and never closed."""

class ExecutableNotFound(AutorunError, LookupError):
    """No candidate resolved to an executable file."""

class UnreadableFile(AutorunError, OSError):
    """An image could not be read for hashing."""


class AutorunType(str, enum.Enum):
    RUN_KEY = "run_key"
    SERVICE = "service"
    STARTUP = "startup"
    TASK = "task"
    LAUNCH_DAEMONS = "launch_daemons"
    LAUNCH_AGENTS = "launch_agents"
    LAUNCH_AGENTS_USER = "launch_agents_user"
    SYSTEMD = "systemd"
    CRON = "cron"
    CROND = "crond"
    RC_D = "rc.d"
    LOCAL_RC_D = "local_rc.d"
    BASH = "bash"


# records whose images live on a Windows filesystem
WINDOWS_TYPES = frozenset({AutorunType.RUN_KEY, AutorunType.SERVICE, AutorunType.STARTUP, AutorunType.TASK})

def image_basename(path: str, windows: bool = False) -> str:
    if windows:
        return ntpath.basename(path)
    return posixpath.basename(path)


@dataclasses.dataclass(frozen=True)
class Autorun:
    type: AutorunType
    location: str
    image_path: str
    arguments: str = ""
    launch_string: str = ""
    entry: str = ""
    md5: Optional[str] = None
    sha1: Optional[str] = None
    sha256: Optional[str] = None

    @property
    def image_name(self) -> str:
        return image_basename(self.image_path, AutorunType(self.type) in WINDOWS_TYPES)

    def to_dict(self) -> Dict[str, str]:
        return {
            "type": AutorunType(self.type).value,
            "location": self.location,
            "image_path": self.image_path,
            "image_name": self.image_name,
            "arguments": self.arguments,
            "md5": self.md5 or "",
            "sha1": self.sha1 or "",
            "sha256": self.sha256 or "",
            "entry": self.entry,
            "launch_string": self.launch_string,
        }


# ---------------------------------------------------------------------------
# Fingerprints
# ---------------------------------------------------------------------------

HASH_ALGORITHMS = ("md5", "sha1", "sha256")

@dataclasses.dataclass(frozen=True)
class Fingerprint:
    md5: Optional[str] = None
    sha1: Optional[str] = None
    sha256: Optional[str] = None
    error: Optional[UnreadableFile] = None

def hash_file(path: str, algorithm: str) -> str:
    # devices and FIFOs never reach EOF
    if not os.path.isfile(path):
        raise UnreadableFile(f"{path}: not a regular file")
    h = hashlib.new(algorithm)
    try:
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(1024*1024), b""):
                h.update(chunk)
    except (OSError, ValueError) as e:
        raise UnreadableFile(f"{path}: {e}") from e
    return h.hexdigest()

def fingerprint(path: str) -> Fingerprint:
    digests: Dict[str, str] = {}
    for algorithm in HASH_ALGORITHMS:
        try:
            digests[algorithm] = hash_file(path, algorithm)
        except UnreadableFile as e:
            log.debug("cannot hash %s", e)
            return Fingerprint(error=e)
    return Fingerprint(**digests)


# ---------------------------------------------------------------------------
# Tokenizer and expander
# ---------------------------------------------------------------------------

def escape_backslashes(s: str) -> str:
    """Double every backslash so the tokenizer keeps Windows separators literal."""
    return s.replace("\\", "\\\\")

def tokenize(s: str) -> List[str]:
    """Split ``s`` into shell words, removing quotes.

    Raises MalformedQuoting for an unterminated quote or a dangling escape.
    """
    try:
        return shlex.split(s, comments=False, posix=True)
    except ValueError as e:
        raise MalformedQuoting(f"{e}: {s!r}") from e


def environ_lookup(name: str) -> Optional[str]:
    return os.environ.get(name)

NT_OBJECT_PREFIX = "\\??\\"
_SYSTEMROOT_ALIAS = "\\systemroot"
_SYSTEM32_ALIAS = "system32"
_WINDOWS_VAR = re.compile(r"%([^%]+)%")
_POSIX_VAR = re.compile(r"\$(?:\{(\w+)\}|(\w+))")

def _rewrite_aliases(s: str, lookup: Callable[[str], Optional[str]]) -> str:
    if s.startswith(NT_OBJECT_PREFIX):
        s = s[len(NT_OBJECT_PREFIX):]
    lowered = s.lower()
    if lowered.startswith(_SYSTEMROOT_ALIAS):
        root = lookup("SystemRoot")
        if root is not None:
            s = root + s[len(_SYSTEMROOT_ALIAS):]
    elif lowered.startswith(_SYSTEM32_ALIAS):
        root = lookup("SystemRoot")
        if root is not None:
            s = root + "\\System32" + s[len(_SYSTEM32_ALIAS):]
    return s

def expand(s: str, lookup: Optional[Callable[[str], Optional[str]]] = None, windows: bool = False) -> str:
    """Expand aliases and environment variables. Unknown variables stay as written.

    Windows strings get the ``\\??\\``, ``\\SystemRoot`` and ``system32`` aliases
    rewritten first, then ``%NAME%`` references. POSIX strings expand ``$NAME``
    and ``${NAME}``.
    """
    lookup = lookup or environ_lookup

    if windows:
        s = _rewrite_aliases(s, lookup)

        def win_repl(m: re.Match) -> str:
            value = lookup(m.group(1))
            return m.group(0) if value is None else value

        return _WINDOWS_VAR.sub(win_repl, s)

    def posix_repl(m: re.Match) -> str:
        value = lookup(m.group(1) or m.group(2))
        return m.group(0) if value is None else value

    return _POSIX_VAR.sub(posix_repl, s)


# ---------------------------------------------------------------------------
# Executable resolution
# ---------------------------------------------------------------------------

PathLookup = Callable[[str], str]

def look_path(name: str, search_path: Optional[str] = None) -> str:
    """PATH search: names with a directory are checked directly, bare names
    are searched across ``search_path`` (default $PATH). Raises ExecutableNotFound."""
    if not name:
        raise ExecutableNotFound("empty command name")
    try:
        found = shutil.which(name, path=search_path)
    except (OSError, ValueError) as e:
        raise ExecutableNotFound(f"{name}: {e}") from e
    if found is None:
        raise ExecutableNotFound(name)
    return found

def canonicalize(path: str, windows: bool = False) -> str:
    if not windows:
        return posixpath.normpath(path)
    path = ntpath.normpath(path)
    if len(path) >= 2 and path[1] == ":":
        path = path[0].upper() + path[1:]
    return path

def resolve(candidate: str, path_lookup: PathLookup, windows: bool = False) -> Tuple[str, bool]:
    """Direct policy: returns (canonical path, True) or (candidate, False)."""
    try:
        found = path_lookup(candidate)
    except ExecutableNotFound as e:
        log.debug("not on search path: %s", e)
        return candidate, False
    return canonicalize(found, windows), True

_WHITESPACE_RUN = re.compile(r"\s+")

def split_ambiguous(command_line: str, path_lookup: PathLookup) -> Tuple[str, str, bool]:
    """Split a Windows command line into (executable, arguments, resolved).

    A leading quoted span is taken verbatim as the executable. Otherwise the
    line is cut at each whitespace run in turn, shortest prefix first, and the
    first prefix ``path_lookup`` accepts is the executable; this is how
    CreateProcess reads ``C:\\Program Files\\App\\app.exe --flag``.
    Raises ExecutableNotFound when no prefix resolves.
    """
    line = command_line.strip()

    if line.startswith('"'):
        end = line.find('"', 1)
        if end == 1:
            raise ExecutableNotFound(f"empty quoted executable in {line!r}")
        if end != -1:
            image = line[1:end]
            arguments = line[end + 1:].strip()
            path, found = resolve(image, path_lookup, windows=True)
            return path, arguments, found
        log.debug("unterminated quote in %r, searching without it", line)
        line = line[1:].strip()

    cuts = [m.start() for m in _WHITESPACE_RUN.finditer(line)]
    for cut in cuts + [len(line)]:
        try:
            found = path_lookup(line[:cut])
        except ExecutableNotFound:
            continue
        return canonicalize(found, windows=True), line[cut:].strip(), True

    raise ExecutableNotFound(line)


# ---------------------------------------------------------------------------
# Normalizer
# ---------------------------------------------------------------------------

@dataclasses.dataclass(frozen=True)
class PlatformHooks:
    path_lookup: PathLookup = look_path
    env_lookup: Callable[[str], Optional[str]] = environ_lookup
    windows: bool = False
    boundary_search: bool = False
    escape_backslashes: bool = False

def windows_hooks(search_path: Optional[str] = None,
                  env_lookup: Optional[Callable[[str], Optional[str]]] = None) -> PlatformHooks:
    return PlatformHooks(
        path_lookup=lambda name: look_path(name, search_path),
        env_lookup=env_lookup or environ_lookup,
        windows=True,
        boundary_search=True,
        escape_backslashes=True,
    )

def posix_hooks(search_path: Optional[str] = None,
                env_lookup: Optional[Callable[[str], Optional[str]]] = None) -> PlatformHooks:
    return PlatformHooks(
        path_lookup=lambda name: look_path(name, search_path),
        env_lookup=env_lookup or environ_lookup,
    )


@dataclasses.dataclass(frozen=True)
class LaunchCommand:
    image_path: str
    arguments: str = ""
    resolved: bool = False
    error: Optional[AutorunError] = None

def normalize(raw: str, hooks: Optional[PlatformHooks] = None) -> LaunchCommand:
    """Turn a raw launch string into (image path, arguments).

    Never raises: when nothing usable comes out, the trimmed raw string is the
    image path, arguments are empty and ``error`` says why.
    """
    hooks = hooks or posix_hooks()
    fallback = (raw or "").strip()
    try:
        expanded = expand(fallback, hooks.env_lookup, windows=hooks.windows).strip()
        if not expanded:
            raise ExecutableNotFound("empty launch string")

        if hooks.boundary_search:
            image, arguments, found = split_ambiguous(expanded, hooks.path_lookup)
            return LaunchCommand(image, arguments, found, None if found else ExecutableNotFound(image))

        text = escape_backslashes(expanded) if hooks.escape_backslashes else expanded
        try:
            tokens = tokenize(text)
        except MalformedQuoting as e:
            log.debug("%s; splitting on whitespace", e)
            tokens = expanded.split()
        if not tokens or not tokens[0]:
            raise ExecutableNotFound(f"no command in {raw!r}")

        image, found = resolve(tokens[0], hooks.path_lookup, windows=hooks.windows)
        return LaunchCommand(image, " ".join(tokens[1:]), found, None if found else ExecutableNotFound(image))
    except AutorunError as e:
        log.debug("cannot normalize %r: %s", raw, e)
        return LaunchCommand(fallback, "", False, e)


# ---------------------------------------------------------------------------
# Shell and cron line classification
# ---------------------------------------------------------------------------

COMMAND_SEPARATORS = frozenset("|;&\n")

SHELL_KEYWORDS = frozenset({
    "if", "then", "else", "elif", "fi", "case", "esac", "for", "select",
    "while", "until", "do", "done", "in", "function", "time", "coproc",
    "{", "}", "!", "[[", "]]",
})

SHELL_BUILTINS = frozenset({
    ".", ":", "[", "alias", "bg", "bind", "break", "builtin", "caller", "cd",
    "command", "compgen", "complete", "compopt", "continue", "declare", "dirs",
    "disown", "echo", "enable", "eval", "exec", "exit", "export", "false", "fc",
    "fg", "getopts", "hash", "help", "history", "jobs", "kill", "let", "local",
    "logout", "mapfile", "popd", "printf", "pushd", "pwd", "read", "readarray",
    "readonly", "return", "set", "shift", "shopt", "source", "suspend", "test",
    "times", "trap", "true", "type", "typeset", "ulimit", "umask", "unalias",
    "unset", "wait",
})

CRON_SPECIAL_SCHEDULES = frozenset({
    "@reboot", "@yearly", "@annually", "@monthly", "@weekly", "@daily", "@hourly",
})

_COMMENT = re.compile(r"\s#.*$", re.M)
_ASSIGNMENT = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*=")

KnownCommand = Callable[[str], Tuple[str, bool]]

@dataclasses.dataclass(frozen=True)
class Invocation:
    path: str
    arguments: str
    segment: str

def known_command(name: str, search_path: Optional[str] = None) -> Tuple[str, bool]:
    """Return (path, True) when ``name`` runs a file, ("", False) for builtins,
    keywords, assignments and unknown names."""
    if not name or name in SHELL_KEYWORDS or name in SHELL_BUILTINS or _ASSIGNMENT.match(name):
        return "", False
    try:
        return look_path(name, search_path), True
    except ExecutableNotFound:
        return "", False

def strip_comment(line: str) -> str:
    return _COMMENT.sub("", line)

def iter_segments(command: str) -> Iterator[str]:
    """Yield the trimmed, non-empty pieces of ``command`` between separators."""
    start = 0
    for index, char in enumerate(command):
        if char in COMMAND_SEPARATORS:
            segment = command[start:index].strip()
            if segment:
                yield segment
            start = index + 1
    segment = command[start:].strip()
    if segment:
        yield segment

def iter_invocations(line: str, known: Optional[KnownCommand] = None) -> Iterator[Invocation]:
    known = known or known_command
    command = line.strip()
    if not command or command.startswith("#"):
        return
    for segment in iter_segments(strip_comment(command)):
        words = segment.split()
        path, executable = known(words[0])
        if executable:
            yield Invocation(path, " ".join(words[1:]), segment)

def classify_line(line: str, known: Optional[KnownCommand] = None) -> List[str]:
    return [inv.path for inv in iter_invocations(line, known)]

def cron_command(line: str, usernames: Iterable[str] = ()) -> str:
    """Drop the schedule (and user column, when present) from a crontab line."""
    fields = line.split()
    if not fields or fields[0].startswith("#"):
        return ""
    if fields[0].lower() in CRON_SPECIAL_SCHEDULES:
        skip = 1
    elif len(fields) > 5:
        skip = 6 if fields[5] in set(usernames) else 5
    else:
        skip = 0
    return " ".join(fields[skip:])


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------

NOLOGIN_SHELLS = frozenset({
    "/usr/bin/nologin", "/bin/nologin", "/sbin/nologin", "/usr/sbin/nologin",
    "/bin/false", "/usr/bin/false",
})

@dataclasses.dataclass(frozen=True)
class Account:
    name: str
    home: str
    shell: str

    @property
    def can_login(self) -> bool:
        return self.shell.strip() not in NOLOGIN_SHELLS

def read_accounts(passwd_path: str = "/etc/passwd") -> List[Account]:
    accounts: List[Account] = []
    try:
        with open(passwd_path, "r", encoding="utf-8", errors="replace") as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                cols = line.split(":")
                if len(cols) < 7:
                    continue
                accounts.append(Account(cols[0], cols[5], cols[6]))
    except OSError as e:
        log.debug("cannot read %s: %s", passwd_path, e)
    return accounts


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

def build_autorun(kind: AutorunType, location: str, image_path: str, arguments: str = "",
                  launch_string: str = "", entry: str = "") -> Autorun:
    fp = fingerprint(image_path)
    return Autorun(
        type=AutorunType(kind),
        location=location,
        image_path=image_path,
        arguments=arguments,
        launch_string=launch_string,
        entry=entry,
        md5=fp.md5,
        sha1=fp.sha1,
        sha256=fp.sha256,
    )

def make_autorun(kind: AutorunType, location: str, launch_string: str, entry: str = "",
                 hooks: Optional[PlatformHooks] = None) -> Autorun:
    """Record for a raw launch string. Without hooks the string is taken as the image path."""
    if hooks is None:
        image, arguments = launch_string.strip(), ""
    else:
        cmd = normalize(launch_string, hooks)
        image, arguments = cmd.image_path, cmd.arguments
    return build_autorun(kind, location, image, arguments, launch_string, entry)

def make_autorun_from_argv(kind: AutorunType, location: str, argv: List[str], entry: str = "") -> Autorun:
    return build_autorun(kind, location, argv[0], " ".join(argv[1:]), " ".join(argv), entry)


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

def read_rules(path: str) -> Dict[str, Any]:
    import yaml
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}

def load_default_rules() -> Dict[str, Any]:
    here = os.path.dirname(os.path.abspath(__file__))
    default = os.path.join(here, "rules.yaml")
    if os.path.exists(default):
        try:
            return read_rules(default)
        except Exception as e:
            log.warning("ignoring %s: %s", default, e)
    return {
        "search_path": [],
        "collectors": {},
    }

def collector_rules(rules: Dict[str, Any], name: str) -> Dict[str, Any]:
    collectors = rules.get("collectors") or {}
    if not isinstance(collectors, dict):
        log.warning("ignoring rules 'collectors': expected a mapping, got %s", type(collectors).__name__)
        return {}
    settings = collectors.get(name) or {}
    if not isinstance(settings, dict):
        log.warning("ignoring rules for collector %s: expected a mapping", name)
        return {}
    return settings

def rules_search_path(rules: Dict[str, Any]) -> str:
    parts = [os.environ.get("PATH", os.defpath)] + [str(p) for p in rules.get("search_path") or []]
    return os.pathsep.join(p for p in parts if p)


# ---------------------------------------------------------------------------
# Collectors
# ---------------------------------------------------------------------------

# package beside this module holding one Collector per autorun mechanism
COLLECTORS_PACKAGE = "autorun_guard_collectors"

class CollectorBase:
    name = "base"
    platforms: Tuple[str, ...] = ()

    def __init__(self, rules: Dict[str, Any]): self.rules = rules
    def settings(self) -> Dict[str, Any]: return collector_rules(self.rules, self.name)
    def enabled(self) -> bool: return self.settings().get("enabled", True)
    def supported(self, system: Optional[str] = None) -> bool: return (system or current_system()) in self.platforms
    def search_path(self) -> str: return rules_search_path(self.rules)

    def option(self, key: str, default: Any) -> Any:
        value = self.settings().get(key)
        return default if value is None else value

    def hooks(self) -> PlatformHooks:
        if "windows" in self.platforms:
            return windows_hooks(self.search_path())
        return posix_hooks(self.search_path())

    def known(self) -> KnownCommand:
        search_path = self.search_path()
        return lambda name: known_command(name, search_path)

    def collect(self) -> List[Autorun]: return []

def load_collectors(rules: Dict[str, Any], system: Optional[str] = None,
                    only: Optional[Iterable[str]] = None) -> List[CollectorBase]:
    collectors: List[CollectorBase] = []
    coll_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), COLLECTORS_PACKAGE)
    if not os.path.isdir(coll_dir):
        return collectors
    wanted = set(only or ())
    for fname in sorted(os.listdir(coll_dir)):
        if not fname.endswith(".py") or fname.startswith("_"):
            continue
        modname = fname[:-3]
        try:
            mod = importlib.import_module(f"{COLLECTORS_PACKAGE}.{modname}")
        except Exception as e:
            log.warning("cannot load collector %s: %s", modname, e)
            continue
        cls = getattr(mod, "Collector", None)
        if not isinstance(cls, type):
            continue
        c = cls(rules)
        if wanted and c.name not in wanted:
            continue
        if c.enabled() and c.supported(system):
            collectors.append(c)
    return collectors

def run_collectors(collectors: List[CollectorBase]) -> List[Autorun]:
    records: List[Autorun] = []
    for c in collectors:
        try:
            found = c.collect() or []
        except Exception as e:
            log.warning("collector %s failed: %s", c.name, e)
            continue
        log.debug("collector %s: %d autoruns", c.name, len(found))
        records.extend(found)
    return records

def collect_autoruns(rules: Optional[Dict[str, Any]] = None, only: Optional[Iterable[str]] = None,
                     system: Optional[str] = None) -> List[Autorun]:
    rules = load_default_rules() if rules is None else rules
    return run_collectors(load_collectors(rules, system=system, only=only))


def running_images(records: List[Autorun]) -> List[Dict[str, Any]]:
    """Processes whose executable is one of the autorun images."""
    import psutil
    wanted = {os.path.normcase(r.image_path): r.image_path for r in records if r.image_path}
    hits: Dict[str, List[Dict[str, Any]]] = {}
    for p in psutil.process_iter(["pid", "name", "exe"]):
        exe = p.info.get("exe")
        if not exe:
            continue
        image = wanted.get(os.path.normcase(exe))
        if image is not None:
            hits.setdefault(image, []).append({"pid": p.info["pid"], "name": p.info.get("name") or ""})
    return [{"image_path": image, "processes": procs} for image, procs in hits.items()]


def print_table(records: List[Autorun]) -> None:
    headers = ["type","image","location","arguments"]
    print("\n=== Autorun Guard Report ===")
    print("time:", now_iso(), " version:", __VERSION__, " autoruns:", len(records))
    print("-"*120)
    print("{:<18} {:<28} {:<40} {}".format(*headers))
    print("-"*120)
    for r in records:
        print("{:<18} {:<28} {:<40} {}".format(
            AutorunType(r.type).value,
            r.image_name[:28],
            r.location[-40:],
            r.arguments[:200],
        ))
    print("-"*120)

def save_json(path: str, data: Any) -> None:
    with open(path,"w",encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def main(argv: Optional[List[str]] = None) -> None:
    load_dotenv(dotenv_path=os.getenv("DOTENV_PATH") or ".env")
    p = argparse.ArgumentParser(description="Autorun Guard: cross-platform autorun enumerator via w01f")
    p.add_argument("--rules", help="rules.yaml path (collector folders, extra search path)", default=None)
    p.add_argument("--collector", action="append", default=None, help="run only this collector (repeatable)")
    p.add_argument("--list-collectors", action="store_true", help="list collectors available on this platform and exit")
    p.add_argument("--json-out", default=None, help="write full JSON report to this path")
    p.add_argument("--running-check", action="store_true", help="list running processes launched from autorun images")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = p.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    rules = load_default_rules()
    rules_path = args.rules or os.getenv("AUTORUN_GUARD_RULES") or "rules.yaml"
    if os.path.exists(rules_path):
        try:
            rules.update(read_rules(rules_path))
        except Exception as e:
            print("Failed to load rules:", e, file=sys.stderr)

    collectors = load_collectors(rules, only=args.collector)
    if args.list_collectors:
        for c in collectors:
            print(c.name)
        sys.exit(0)
    if not collectors:
        print(f"No collectors available for platform {current_system()!r}", file=sys.stderr)
        sys.exit(1)

    records = run_collectors(collectors)
    print_table(records)

    report: Dict[str, Any] = {
        "meta": {"time": now_iso(), "version": __VERSION__, "author": __AUTHOR__},
        "platform": platform.platform(),
        "collectors": [c.name for c in collectors],
        "autoruns": [r.to_dict() for r in records],
    }

    if args.running_check:
        running = running_images(records)
        report["running"] = running
        if running:
            print(f"\n[Running] {len(running)} autorun images have live processes")
            for item in running[:10]:
                print(" ", item["image_path"], [proc["pid"] for proc in item["processes"]])

    if args.json_out:
        save_json(args.json_out, report)

    sys.exit(0)

if __name__ == "__main__":
    main()
