#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Generate the workshop table module for the web front end.

Reads links.json (key -> URL), resolves every workshop and writes
src/lib/components/workshop/table.ts under the site root.

Usage:
  python Processing/generate_frontend_data.py
  python Processing/generate_frontend_data.py --base ~/site --sort
  python Processing/generate_frontend_data.py --links links.json --out - --offline

The site root defaults to ABS_PATH (read from the environment or a .env file).
"""

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv

from Processing.link_keys import SEMESTER_SHORTCUTS, SEMESTERS, TEAMS, Workshop
from Processing.workshop_table import WorkshopTable, build_table

LINKS_RELATIVE_PATH = Path("src/lib/public/links/links.json")
TABLE_RELATIVE_PATH = Path("src/lib/components/workshop/table.ts")

class LinksFileError(Exception):
    pass

# -------------------------
# TypeScript rendering
# -------------------------

TABLE_TYPES = """// --------------------- Workshop table ---------------------
type Tables = {
\t[team in teams]: {
\t\tworkshops: Workshops;
\t};
};

type Workshops = {
\t[sem in semesters]: WorkshopInfo[];
};

export interface WorkshopInfo {
\tname: string;
\tteam: string;
\tsemester: string;
\tlink: string;
}"""

TABLE_ACCESSOR = """export async function NewWorkshopTable() {
\treturn currentTable;
}"""

def escape(s: str) -> str:
    s = s.replace("\\", "\\\\")
    s = s.replace('"', '\\"')
    s = s.replace("\n", "\\n").replace("\r", "\\r")
    return s.replace("&#39;", "'")

def _comma(i: int, n: int) -> str:
    return "" if i == n - 1 else ","

def _render_types() -> List[str]:
    lines = ["export type semesters = " + " | ".join(f"'{s}'" for s in SEMESTERS) + ";"]
    lines.append("export type teams =")
    lines.extend(f"\t| '{t}'" for t in TEAMS[:-1])
    lines.append(f"\t| '{TEAMS[-1]}';")
    lines.append("")
    lines.append("// Semester shortcut, in the case of f25 -> fa25")
    lines.append("const sSc = new Map<string, string>();")
    lines.extend(f"sSc.set('{short}', '{full}');" for short, full in SEMESTER_SHORTCUTS.items())
    lines.append("")
    lines.append(TABLE_TYPES)
    return lines

def _render_workshop(w: Workshop) -> str:
    return (
        f'{{ name: "{escape(w.name)}", team: "{escape(w.team)}", '
        f'semester: "{escape(w.semester)}", link: "{escape(w.link)}" }}'
    )

def render_table_module(table: WorkshopTable) -> str:
    lines = _render_types()
    lines.append("export const currentTable: Tables = {")
    for ti, team in enumerate(TEAMS):
        lines.append(f"\t{team}: {{")
        lines.append("\t\tworkshops: {")
        for si, sem in enumerate(SEMESTERS):
            workshops = table.bucket(team, sem)
            lines.append(f"\t\t\t{sem}: [")
            for wi, w in enumerate(workshops):
                lines.append(f"\t\t\t\t{_render_workshop(w)}{_comma(wi, len(workshops))}")
            lines.append(f"\t\t\t]{_comma(si, len(SEMESTERS))}")
        lines.append("\t\t}")
        lines.append(f"\t}}{_comma(ti, len(TEAMS))}")
    lines.append("}")
    lines.append(TABLE_ACCESSOR)
    return "\n".join(lines) + "\n"

# -------------------------
# I/O
# -------------------------

def load_links(path: Path) -> Dict[str, str]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            links = json.load(f)
    except OSError as e:
        raise LinksFileError(f"cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise LinksFileError(f"invalid JSON in {path}: {e}") from e

    if not isinstance(links, dict):
        raise LinksFileError(f"{path} must hold a JSON object of key -> link")
    for key, link in links.items():
        if not isinstance(link, str):
            raise LinksFileError(f"{path}: link for {key!r} is not a string")
    return links

def write_table_module(text: str, out: str) -> None:
    if out == "-":
        sys.stdout.write(text)
        return
    out_path = Path(out)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(text)

def generate_frontend_data(
    links_path: Path,
    out: str,
    max_workers: Optional[int] = None,
    timeout: Optional[float] = None,
    offline: bool = False,
    sort_buckets: bool = False,
) -> WorkshopTable:
    links = load_links(links_path)
    print(f"Loaded {len(links)} links from {links_path}", file=sys.stderr)

    table, summary = build_table(links, max_workers=max_workers, timeout=timeout, offline=offline)
    if sort_buckets:
        table.sort_buckets()

    write_table_module(render_table_module(table), out)
    print(f"Wrote {summary.inserted}/{summary.entries} workshops ({summary.skipped} skipped) → {out}", file=sys.stderr)
    return table

# -------------------------
# CLI
# -------------------------

def parse_args(argv=None):
    ap = argparse.ArgumentParser(description="Generate the workshop table TypeScript module from links.json.")
    ap.add_argument("--base", dest="base", default=None, help="Site root (default: $ABS_PATH)")
    ap.add_argument("--links", dest="links", default=None, help=f"Links JSON path (default: <base>/{LINKS_RELATIVE_PATH})")
    ap.add_argument("--out", dest="out", default=None, help=f"Output path or '-' for stdout (default: <base>/{TABLE_RELATIVE_PATH})")
    ap.add_argument("--workers", dest="workers", type=int, default=None, help="Worker threads (default: one per link)")
    ap.add_argument("--timeout", dest="timeout", type=float, default=None, help="Per-request timeout in seconds (default: none)")
    ap.add_argument("--offline", action="store_true", help="Never fetch slide titles; name every workshop from its key")
    ap.add_argument("--sort", dest="sort", action="store_true", help="Sort each semester's workshops by name")
    args = ap.parse_args(argv)
    if args.workers is not None and args.workers < 1:
        ap.error("--workers must be at least 1")
    return args

def main(argv=None) -> int:
    load_dotenv()
    args = parse_args(argv)

    base = args.base or os.getenv("ABS_PATH")
    if not base and not (args.links and args.out):
        print("Error: ABS_PATH is not set; pass --base or both --links and --out", file=sys.stderr)
        return 1

    links_path = Path(args.links) if args.links else Path(base) / LINKS_RELATIVE_PATH
    out = args.out or str(Path(base) / TABLE_RELATIVE_PATH)

    try:
        generate_frontend_data(
            links_path,
            out,
            max_workers=args.workers,
            timeout=args.timeout,
            offline=args.offline,
            sort_buckets=args.sort,
        )
    except LinksFileError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
