"""Autorun collectors. Each module defines ``Collector``; see autorun_guard.load_collectors."""
