#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Parse workshop link keys into provisional Workshop records.

A key such as "dev/git-intro-f24" encodes a team, a workshop name and a
semester. Keys come in five shapes; they are tried in order and the first
one that matches decides how the key is split.
"""

import re
import sys
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict

# -------------------------
# Enumerations
# -------------------------

TEAMS: Tuple[str, ...] = (
    "ai", "algo", "design", "dev", "gamedev", "general", "icpc", "nodebuds", "oss",
)

SEMESTERS: Tuple[str, ...] = ("fa24", "sp25", "fa25")

# Legacy three-character spellings, e.g. f25 -> fa25
SEMESTER_SHORTCUTS: Dict[str, str] = {
    "f24": "fa24",
    "s25": "sp25",
    "f25": "fa25",
    "s26": "sp26",
}

class Workshop(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    team: str
    semester: str
    link: str

# -------------------------
# Key shapes
# -------------------------

_SEM = r"[A-Za-z]{1,2}\d{2}"
_TEAM = r"\w+"
_NAME = r"[\w+-]+"

class KeyShape:
    def __init__(self, label: str, pattern: str, team: int, name: int, semester: int):
        self.label = label
        self.regex = re.compile(pattern, re.ASCII)
        self.team = team
        self.name = name
        self.semester = semester

    def match(self, key: str) -> Optional[Tuple[str, str, str]]:
        """Return (team, name, raw semester) if the key has this shape."""
        m = self.regex.fullmatch(key)
        if not m:
            return None
        return m.group(self.team), m.group(self.name), m.group(self.semester)

    def __repr__(self):
        return f"KeyShape({self.label!r})"

KEY_SHAPES: Tuple[KeyShape, ...] = (
    KeyShape("team/workshop-sem", rf"^({_TEAM})/({_NAME})-({_SEM})$", team=1, name=2, semester=3),
    KeyShape("team/sem-workshop", rf"^({_TEAM})/({_SEM})-({_NAME})$", team=1, name=3, semester=2),
    KeyShape("team-workshop-sem", rf"^({_TEAM})-({_NAME})-({_SEM})$", team=1, name=2, semester=3),
    KeyShape("team-sem-workshop", rf"^({_TEAM})-({_SEM})-({_NAME})$", team=1, name=3, semester=2),
    KeyShape("sem-team-workshop", rf"^({_SEM})-({_TEAM})-({_NAME})$", team=2, name=3, semester=1),
)

# -------------------------
# Normalization
# -------------------------

def normalize_semester(token: str) -> str:
    token = token.lower()
    return SEMESTER_SHORTCUTS.get(token, token)

def is_valid_team(team: str) -> bool:
    return team in TEAMS

def is_valid_semester(semester: str) -> bool:
    return semester in SEMESTERS

def match_key(key: str) -> Optional[Tuple[KeyShape, Tuple[str, str, str]]]:
    """First shape (in priority order) that matches the key, with its fields."""
    for shape in KEY_SHAPES:
        fields = shape.match(key)
        if fields is not None:
            return shape, fields
    return None

def parse_key(key: str, link: str) -> Optional[Workshop]:
    """
    Split a link key into a provisional Workshop.

    The semester is normalized but neither team nor semester is validated
    here. Returns None (after a warning on stderr) when no shape matches.
    """
    found = match_key(key)
    if found is None:
        print(f"WARN: Could not parse key: {key}", file=sys.stderr)
        return None

    _, (team, name, semester) = found
    return Workshop(name=name, team=team, semester=normalize_semester(semester), link=link)
