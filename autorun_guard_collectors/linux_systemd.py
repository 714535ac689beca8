from typing import List
import os, re, logging
from autorun_guard import AutorunType, Autorun, CollectorBase, build_autorun, normalize

log = logging.getLogger(__name__)

DEFAULT_FOLDERS = ["/etc/systemd/system/", "/usr/share/dbus-1/system-services/"]

SECTION = re.compile(r"^\[(.+)\]$")
# section -> key holding the command line
EXEC_KEYS = {"Service": "ExecStart", "D-BUS Service": "Exec"}
# ExecStart= special prefixes, see systemd.service(5)
EXEC_PREFIXES = "@-:+!"


def exec_lines(path: str) -> List[str]:
    """Command lines declared by a unit file, in file order."""
    section = ""
    values: List[str] = []
    pending = ""
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        for raw in f:
            line = raw.strip()
            if line.endswith("\\"):
                pending += line[:-1] + " "
                continue
            line, pending = pending + line, ""
            m = SECTION.match(line)
            if m:
                section = m.group(1)
                continue
            key = EXEC_KEYS.get(section)
            if not key:
                continue
            name, sep, value = line.partition("=")
            if sep and name.strip() == key and value.strip():
                values.append(value.strip())
    return values


class Collector(CollectorBase):
    name = "linux_systemd"
    platforms = ("linux",)

    def collect(self) -> List[Autorun]:
        records: List[Autorun] = []
        hooks = self.hooks()
        for folder in self.option("folders", DEFAULT_FOLDERS):
            if not os.path.isdir(folder):
                continue
            try:
                names = sorted(os.listdir(folder))
            except OSError as e:
                log.debug("skipping %s: %s", folder, e)
                continue
            for fname in names:
                if not fname.endswith(".service"):
                    continue
                path = os.path.join(folder, fname)
                try:
                    values = exec_lines(path)
                except OSError as e:
                    log.debug("skipping %s: %s", path, e)
                    continue
                for value in values:
                    cmd = normalize(value.lstrip(EXEC_PREFIXES), hooks)
                    records.append(build_autorun(AutorunType.SYSTEMD, path, cmd.image_path, cmd.arguments, value))
        return records
