from typing import List
import os, re, logging
from autorun_guard import AutorunType, Autorun, Account, CollectorBase, build_autorun, iter_invocations, read_accounts

log = logging.getLogger(__name__)

HOME_PATTERNS = [r"^\..*rc$", r"^\.(bash_)?profile$", r"^\.bash_login$"]
SYSTEM_FILES = ["/etc/profile", "/etc/bash.bashrc"]


def profile_files(accounts: List[Account], patterns: List[str]) -> List[str]:
    """Startup scripts in the home directory of every account that can log in."""
    rxs = [re.compile(p) for p in patterns]
    files: List[str] = []
    seen = set()
    for acct in accounts:
        if not acct.can_login or not acct.home or acct.home in seen:
            continue
        seen.add(acct.home)
        try:
            names = sorted(os.listdir(acct.home))
        except OSError as e:
            log.debug("skipping home %s: %s", acct.home, e)
            continue
        for n in names:
            path = os.path.join(acct.home, n)
            if any(rx.search(n) for rx in rxs) and os.path.isfile(path):
                files.append(path)
    return files


class Collector(CollectorBase):
    name = "linux_shell_profiles"
    platforms = ("linux",)

    def collect(self) -> List[Autorun]:
        records: List[Autorun] = []
        known = self.known()
        accounts = read_accounts(self.option("passwd", "/etc/passwd"))
        files = [f for f in self.option("files", SYSTEM_FILES) if os.path.isfile(f)]
        files += profile_files(accounts, self.option("home_patterns", HOME_PATTERNS))
        for path in files:
            try:
                with open(path, "r", encoding="utf-8", errors="replace") as f:
                    for line in f:
                        line = line.rstrip("\r\n")
                        for inv in iter_invocations(line, known):
                            records.append(build_autorun(AutorunType.BASH, path, inv.path, inv.arguments, line))
            except OSError as e:
                log.debug("skipping %s: %s", path, e)
        return records
