"""Scheduled tasks, read from the task XML files the Task Scheduler keeps on disk."""
from typing import List, Tuple
import os, logging
import xml.etree.ElementTree as ET
from autorun_guard import AutorunType, Autorun, CollectorBase, make_autorun

log = logging.getLogger(__name__)


def default_tasks_root() -> str:
    return os.path.join(os.environ.get("SystemRoot") or "C:\\Windows", "System32", "Tasks")

def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]

def exec_actions(path: str) -> List[Tuple[str, str]]:
    """(Command, Arguments) for every Exec action of a task definition."""
    actions: List[Tuple[str, str]] = []
    root = ET.parse(path).getroot()
    for el in root.iter():
        if _local(el.tag) != "Exec":
            continue
        command = arguments = ""
        for child in el:
            if _local(child.tag) == "Command":
                command = (child.text or "").strip()
            elif _local(child.tag) == "Arguments":
                arguments = (child.text or "").strip()
        if command:
            actions.append((command, arguments))
    return actions

def task_path(tasks_root: str, path: str) -> str:
    """Scheduler path of a task file, e.g. \\Microsoft\\Windows\\Defrag\\ScheduledDefrag."""
    rel = os.path.relpath(path, tasks_root)
    return "\\" + rel.replace(os.sep, "\\")


class Collector(CollectorBase):
    name = "windows_tasks"
    platforms = ("windows",)

    def collect(self) -> List[Autorun]:
        records: List[Autorun] = []
        hooks = self.hooks()
        tasks_root = self.option("tasks_root", None) or default_tasks_root()
        for dirpath, dirnames, filenames in os.walk(tasks_root):
            dirnames.sort()
            for fname in sorted(filenames):
                path = os.path.join(dirpath, fname)
                try:
                    actions = exec_actions(path)
                except (OSError, ET.ParseError) as e:
                    log.debug("skipping %s: %s", path, e)
                    continue
                for command, arguments in actions:
                    launch = f"{command} {arguments}" if arguments else command
                    records.append(make_autorun(AutorunType.TASK, task_path(tasks_root, path), launch,
                                                entry=fname, hooks=hooks))
        return records
