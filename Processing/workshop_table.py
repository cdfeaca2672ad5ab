#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Build the team -> semester -> workshops table from a links mapping.

Every entry is resolved on its own worker thread; slide titles are fetched
concurrently and results are merged into one WorkshopTable behind a lock.
"""

import sys
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from Processing.link_keys import (
    SEMESTERS,
    TEAMS,
    Workshop,
    is_valid_semester,
    is_valid_team,
    parse_key,
)
from Scraper.slide_titles import LinkSkipped, resolve_name

class WorkshopTable:
    def __init__(self):
        self._lock = threading.Lock()
        self.buckets: Dict[str, Dict[str, List[Workshop]]] = {
            team: {sem: [] for sem in SEMESTERS} for team in TEAMS
        }

    def add(self, workshop: Workshop) -> None:
        with self._lock:
            self.buckets[workshop.team][workshop.semester].append(workshop)

    def bucket(self, team: str, semester: str) -> List[Workshop]:
        return self.buckets[team][semester]

    def sort_buckets(self) -> None:
        with self._lock:
            for semesters in self.buckets.values():
                for workshops in semesters.values():
                    workshops.sort(key=lambda w: (w.name, w.link))

    def __len__(self):
        return sum(len(ws) for semesters in self.buckets.values() for ws in semesters.values())

@dataclass
class BuildSummary:
    entries: int = 0
    inserted: int = 0

    @property
    def skipped(self) -> int:
        return self.entries - self.inserted

def process_entry(
    table: WorkshopTable,
    key: str,
    link: str,
    timeout: Optional[float] = None,
    offline: bool = False,
) -> Optional[Workshop]:
    """Parse, validate and resolve one links entry; insert it if it survives."""
    workshop = parse_key(key, link)
    if workshop is None:
        return None

    if not (is_valid_team(workshop.team) and is_valid_semester(workshop.semester)):
        return None

    try:
        workshop = resolve_name(workshop, timeout=timeout, offline=offline)
    except LinkSkipped as e:
        print(f"WARN: {key}: {e}", file=sys.stderr)
        return None

    table.add(workshop)
    return workshop

def build_table(
    links: Dict[str, str],
    max_workers: Optional[int] = None,
    timeout: Optional[float] = None,
    offline: bool = False,
) -> Tuple[WorkshopTable, BuildSummary]:
    table = WorkshopTable()
    summary = BuildSummary(entries=len(links))
    if not links:
        return table, summary

    # One worker per entry unless told otherwise
    workers = max_workers or len(links)

    with ThreadPoolExecutor(max_workers=workers) as executor:
        future_to_key = {
            executor.submit(process_entry, table, key, link, timeout, offline): key
            for key, link in links.items()
        }
        done, _ = wait(future_to_key)

    for future in done:
        try:
            if future.result() is not None:
                summary.inserted += 1
        except Exception as exc:
            print(f"Entry {future_to_key[future]} generated an exception: {exc}", file=sys.stderr)

    return table, summary
