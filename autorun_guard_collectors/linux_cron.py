from typing import Iterable, List
import os, logging
from autorun_guard import (AutorunType, Autorun, CollectorBase, KnownCommand, build_autorun,
                           cron_command, iter_invocations, read_accounts)

log = logging.getLogger(__name__)

# system crontabs carry a user column
SYSTEM_FILES = ["/etc/crontab"]
SYSTEM_FOLDERS = ["/etc/cron.d"]
# per-user crontabs, one file per user, no user column
SPOOL_FOLDERS = ["/var/spool/cron/crontabs", "/var/spool/cron"]


def crontab_records(kind: AutorunType, location: str, path: str, usernames: Iterable[str],
                    known: KnownCommand) -> List[Autorun]:
    records: List[Autorun] = []
    users = set(usernames)
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        for line in f:
            line = line.rstrip("\r\n")
            for inv in iter_invocations(cron_command(line, users), known):
                records.append(build_autorun(kind, location, inv.path, inv.arguments, line))
    return records


def _files_in(folder: str) -> List[str]:
    try:
        names = sorted(os.listdir(folder))
    except OSError as e:
        log.debug("skipping %s: %s", folder, e)
        return []
    return [os.path.join(folder, n) for n in names if not n.startswith(".") and os.path.isfile(os.path.join(folder, n))]


class Collector(CollectorBase):
    name = "linux_cron"
    platforms = ("linux",)

    def collect(self) -> List[Autorun]:
        records: List[Autorun] = []
        known = self.known()
        usernames = {a.name for a in read_accounts(self.option("passwd", "/etc/passwd"))}

        system_files = [f for f in self.option("files", SYSTEM_FILES) if os.path.isfile(f)]
        for folder in self.option("folders", SYSTEM_FOLDERS):
            system_files += _files_in(folder)
        for path in system_files:
            try:
                records += crontab_records(AutorunType.CROND, path, path, usernames, known)
            except OSError as e:
                log.debug("skipping %s: %s", path, e)

        for folder in self.option("spool_folders", SPOOL_FOLDERS):
            for path in _files_in(folder):
                user = os.path.basename(path)
                try:
                    records += crontab_records(AutorunType.CRON, f"crontab {user}", path, (), known)
                except OSError as e:
                    log.debug("skipping %s: %s", path, e)
        return records
