from typing import Any, Dict, List
import os, plistlib, logging
from xml.parsers.expat import ExpatError
from autorun_guard import AutorunType, Autorun, CollectorBase, make_autorun_from_argv

log = logging.getLogger(__name__)

# started at boot, run as root
LAUNCH_DAEMONS = ["/Library/LaunchDaemons", "/System/Library/LaunchDaemons"]
# started when any user logs in
LAUNCH_AGENTS = ["/Library/LaunchAgents", "/System/Library/LaunchAgents"]
USERS_ROOT = "/Users"


def program_arguments(data: Dict[str, Any]) -> List[str]:
    """argv launchd would exec for a job, [] when the plist declares none."""
    args = data.get("ProgramArguments")
    if not isinstance(args, list) or not all(isinstance(a, str) for a in args):
        args = []
    program = data.get("Program")
    if isinstance(program, str) and program:
        # Program wins over ProgramArguments[0], which is then only argv[0]
        return [program] + args[1:]
    return list(args)

def user_agent_folders(users_root: str) -> List[str]:
    try:
        names = sorted(os.listdir(users_root))
    except OSError as e:
        log.debug("skipping %s: %s", users_root, e)
        return []
    return [os.path.join(users_root, n, "Library", "LaunchAgents")
            for n in names if os.path.isdir(os.path.join(users_root, n))]

def parse_plists(kind: AutorunType, folders: List[str]) -> List[Autorun]:
    records: List[Autorun] = []
    for folder in folders:
        if not os.path.isdir(folder):
            continue
        try:
            names = sorted(os.listdir(folder))
        except OSError as e:
            log.debug("skipping %s: %s", folder, e)
            continue
        for fname in names:
            path = os.path.join(folder, fname)
            try:
                with open(path, "rb") as f:
                    data = plistlib.load(f)
            except (OSError, ValueError, ExpatError) as e:
                log.debug("skipping %s: %s", path, e)
                continue
            if not isinstance(data, dict) or data.get("RunAtLoad") is not True:
                continue
            argv = program_arguments(data)
            if not argv:
                continue
            label = data.get("Label")
            records.append(make_autorun_from_argv(kind, path, argv, entry=label if isinstance(label, str) else ""))
    return records


class Collector(CollectorBase):
    name = "macos_launchd"
    platforms = ("darwin",)

    def collect(self) -> List[Autorun]:
        records: List[Autorun] = []
        records += parse_plists(AutorunType.LAUNCH_DAEMONS, self.option("daemon_folders", LAUNCH_DAEMONS))
        records += parse_plists(AutorunType.LAUNCH_AGENTS, self.option("agent_folders", LAUNCH_AGENTS))
        user_folders = user_agent_folders(self.option("users_root", USERS_ROOT))
        records += parse_plists(AutorunType.LAUNCH_AGENTS_USER, user_folders)
        return records
