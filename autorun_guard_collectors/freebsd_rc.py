from typing import Dict, List, Optional, Set
import os, re, logging
from autorun_guard import AutorunType, Autorun, CollectorBase, build_autorun

log = logging.getLogger(__name__)

RC_CONF = ["/etc/rc.conf", "/etc/rc.conf.local"]
RC_FOLDERS = [("rc.d", "/etc/rc.d/"), ("local_rc.d", "/usr/local/etc/rc.d/")]

ENABLE = re.compile(r"""^(\w+)_enable\s*=\s*["']?([^"'#\s]*)["']?""")
NAME = re.compile(r"^name=(\w+)$")
# values accepted by rc.subr checkyesno
YES = {"yes", "true", "on", "1"}


def parse_rc_conf(paths: List[str]) -> Set[str]:
    """Services switched on by rc.conf. Later assignments override earlier ones."""
    states: Dict[str, bool] = {}
    for path in paths:
        try:
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                for line in f:
                    m = ENABLE.match(line.strip())
                    if m:
                        states[m.group(1)] = m.group(2).lower() in YES
        except OSError as e:
            log.debug("skipping %s: %s", path, e)
    return {name for name, on in states.items() if on}

def script_service_name(path: str) -> Optional[str]:
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        for line in f:
            m = NAME.match(line.strip().replace('"', ""))
            if m:
                return m.group(1)
    return None

def scan_rc_scripts(kind: AutorunType, folder: str, enabled: Set[str]) -> List[Autorun]:
    records: List[Autorun] = []
    if not os.path.isdir(folder):
        return records
    try:
        names = sorted(os.listdir(folder))
    except OSError as e:
        log.debug("skipping %s: %s", folder, e)
        return records
    for fname in names:
        path = os.path.join(folder, fname)
        if not os.path.isfile(path):
            continue
        try:
            service = script_service_name(path)
        except OSError as e:
            log.debug("skipping %s: %s", path, e)
            continue
        if service and service in enabled:
            records.append(build_autorun(kind, path, path, "", path, entry=service))
    return records


class Collector(CollectorBase):
    name = "freebsd_rc"
    platforms = ("freebsd",)

    def collect(self) -> List[Autorun]:
        enabled = parse_rc_conf(self.option("rc_conf", RC_CONF))
        records: List[Autorun] = []
        for kind, folder in self.option("folders", RC_FOLDERS):
            records += scan_rc_scripts(AutorunType(kind), folder, enabled)
        return records
