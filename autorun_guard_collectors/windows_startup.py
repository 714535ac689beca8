from typing import List
import os, logging
from autorun_guard import AutorunType, Autorun, CollectorBase, make_autorun

log = logging.getLogger(__name__)

STARTUP_SUBPATH = os.path.join("Microsoft", "Windows", "Start Menu", "Programs", "StartUp")


def default_folders() -> List[str]:
    # all users, then the current user
    roots = [os.environ.get("ProgramData"), os.environ.get("AppData")]
    return [os.path.join(r, STARTUP_SUBPATH) for r in roots if r]


class Collector(CollectorBase):
    name = "windows_startup"
    platforms = ("windows",)

    def collect(self) -> List[Autorun]:
        records: List[Autorun] = []
        for folder in self.option("folders", None) or default_folders():
            try:
                names = sorted(os.listdir(folder))
            except OSError as e:
                log.debug("skipping %s: %s", folder, e)
                continue
            for fname in names:
                path = os.path.join(folder, fname)
                if fname.lower() == "desktop.ini" or not os.path.isfile(path):
                    continue
                # shortcuts and scripts are recorded as-is, not parsed
                records.append(make_autorun(AutorunType.STARTUP, folder, path, entry=fname))
        return records
