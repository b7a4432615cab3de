from __future__ import annotations
import argparse
import json
import logging
import sys
from typing import List

from . import config as CFG
from .config import SearchMode, SortingOption, parse_category, parse_enum, format_category
from .loader import build_engine
from .models import SearchResult
from .search import run_query
from .storage import load_settings


def _row(r: SearchResult, query: str) -> dict:
    return {
        "matched_term": r.matched_term,
        "name": r.item.result_name,
        "namespace": r.item.namespace,
        "category": format_category(r.item.category),
        "score": r.item.relevance_score(query),
    }


def _print_table(rows: List[dict]) -> None:
    if not rows:
        print("(no matches)"); return
    print("#  Score  Term             Category      Name (namespace)")
    for i, r in enumerate(rows, 1):
        ns = f" ({r['namespace']})" if r["namespace"] else ""
        print(f"{i:<2} {r['score']:<6.2f} {r['matched_term']:<16} {r['category']:<13} {r['name']}{ns}")


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Fuzzy term search CLI (SearchEngine-backed)")
    p.add_argument("--items", nargs="+", required=True, help="Catalog files or folders (.json / .txt)")
    p.add_argument("--q", default=None, help="Single query to run once")
    p.add_argument("--repl", action="store_true", help="Interactive loop after loading")
    p.add_argument("-k", type=int, default=CFG.TOP_K, help="Top-K results")
    p.add_argument("--settings", default=None, help="JSON settings file (see storage.save_settings)")
    p.add_argument("--max-distance", type=int, default=None, help="Fuzzy edit-distance radius")
    p.add_argument("--mode", choices=[m.value for m in SearchMode], default=None)
    p.add_argument("--sort", choices=[s.value for s in SortingOption], default=None)
    p.add_argument("--category", default=None, help="e.g. all, settings, settings|map_objects")
    p.add_argument("--whole-word", action="store_true", help="Exact term matches only")
    p.add_argument("--json", action="store_true", help="Emit JSON rows")
    p.add_argument("--verbose", action="store_true")

    args = p.parse_args(argv)

    if args.verbose or CFG.VERBOSE:
        logging.basicConfig(level=logging.DEBUG)

    try:
        settings = load_settings(args.settings) if args.settings else CFG.SearchSettings()
        if args.max_distance is not None:
            settings.max_edit_distance = args.max_distance
        if args.mode:
            settings.search_mode = parse_enum(SearchMode, args.mode)
        if args.sort:
            settings.sorting_option = parse_enum(SortingOption, args.sort)
        if args.category:
            settings.category = parse_category(args.category)
        if args.whole_word:
            settings.whole_word = True
        settings.validate()
        engine = build_engine(args.items)
    except (ValueError, FileNotFoundError) as exc:
        p.error(str(exc))

    def run_query_once(q: str) -> None:
        rows = [_row(r, q) for r in run_query(engine, q, settings, top_k=args.k)]
        if args.json:
            print(json.dumps(rows, ensure_ascii=False, indent=2))
        else:
            _print_table(rows)

    if args.q:
        run_query_once(args.q)

    if args.repl:
        print("Type a query (empty line to exit).")
        while True:
            try:
                q = input("> ").strip()
            except (EOFError, KeyboardInterrupt):
                break
            if not q:
                break
            run_query_once(q)

    return 0


if __name__ == "__main__":
    sys.exit(main())
