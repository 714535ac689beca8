from typing import Iterator, List, Tuple
from autorun_guard import AutorunType, Autorun, CollectorBase, make_autorun

# (location label, winreg root attribute)
ROOTS = [("LOCAL_MACHINE", "HKEY_LOCAL_MACHINE"), ("CURRENT_USER", "HKEY_CURRENT_USER")]
RUN_KEYS = [
    "Software\\Microsoft\\Windows\\CurrentVersion\\Run",
    "Software\\Microsoft\\Windows\\CurrentVersion\\RunOnce",
    "Software\\Wow6432Node\\Microsoft\\Windows\\CurrentVersion\\Run",
    "Software\\Wow6432Node\\Microsoft\\Windows\\CurrentVersion\\RunOnce",
]


def read_string_values(root: int, key_name: str) -> Iterator[Tuple[str, str]]:
    import winreg
    try:
        key = winreg.OpenKey(root, key_name, 0, winreg.KEY_READ)
    except OSError:
        return
    with key:
        index = 0
        while True:
            try:
                name, value, vtype = winreg.EnumValue(key, index)
            except OSError:
                break
            index += 1
            if vtype in (winreg.REG_SZ, winreg.REG_EXPAND_SZ) and value:
                yield name, value


class Collector(CollectorBase):
    name = "windows_run_keys"
    platforms = ("windows",)

    def registry_values(self) -> Iterator[Tuple[str, str, str]]:
        """(location, value name, launch string) for every Run/RunOnce value."""
        import winreg
        for label, attr in ROOTS:
            for key_name in self.option("keys", RUN_KEYS):
                for name, value in read_string_values(getattr(winreg, attr), key_name):
                    yield f"{label}\\{key_name}", name, value

    def collect(self) -> List[Autorun]:
        hooks = self.hooks()
        return [make_autorun(AutorunType.RUN_KEY, location, value, entry=name, hooks=hooks)
                for location, name, value in self.registry_values()]
