"""
Heartline package
=================

A personal, offline relationship timeline: log events with a satisfaction
score (-8..+8) and a date, keep them in chronological order, chart them,
and move them in and out as JSON.

- The CLI entry point is in `heartline/cli.py`.
- The add/edit/import flows live in `heartline/timeline.py`.
- Pure event transforms (sort, validate, colours) are in `heartline/events.py`.
- Local persistence is in `heartline/store.py`.
"""

__version__ = '0.1.0'
