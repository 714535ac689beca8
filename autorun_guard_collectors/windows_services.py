from typing import Iterator, List, Tuple
import logging
from autorun_guard import AutorunType, Autorun, CollectorBase, make_autorun

log = logging.getLogger(__name__)

SERVICES_KEY = "System\\CurrentControlSet\\Services"


class Collector(CollectorBase):
    name = "windows_services"
    platforms = ("windows",)

    def image_paths(self) -> Iterator[Tuple[str, str]]:
        """(location, ImagePath) for every service subkey that has one."""
        import winreg
        hklm = winreg.HKEY_LOCAL_MACHINE
        try:
            key = winreg.OpenKey(hklm, SERVICES_KEY, 0, winreg.KEY_READ)
        except OSError as e:
            log.debug("cannot open %s: %s", SERVICES_KEY, e)
            return
        names: List[str] = []
        with key:
            while True:
                try:
                    names.append(winreg.EnumKey(key, len(names)))
                except OSError:
                    break
        for name in names:
            subkey = f"{SERVICES_KEY}\\{name}"
            try:
                with winreg.OpenKey(hklm, subkey, 0, winreg.KEY_READ) as sub:
                    value, _ = winreg.QueryValueEx(sub, "ImagePath")
            except OSError:
                continue
            if isinstance(value, str) and value:
                yield f"LOCAL_MACHINE\\{subkey}", value

    def collect(self) -> List[Autorun]:
        hooks = self.hooks()
        return [make_autorun(AutorunType.SERVICE, location, value, hooks=hooks)
                for location, value in self.image_paths()]
