from __future__ import annotations
import argparse
import logging

from flask import Flask, Response, current_app, jsonify, request

from termsearch import config as CFG
from termsearch.config import (SearchMode, SearchSettings, SortingOption,
                               format_category, parse_bool, parse_category, parse_enum,
                               parse_radius)
from termsearch.engine import SearchEngine
from termsearch.loader import build_engine
from termsearch.search import run_query
from termsearch.storage import load_settings

log = logging.getLogger(__name__)


def create_app(engine: SearchEngine, settings: SearchSettings | None = None) -> Flask:
    """Flask app serving one injected engine; settings are the per-request defaults."""
    app = Flask(__name__)
    app.config["SEARCH_ENGINE"] = engine
    app.config["SEARCH_SETTINGS"] = (settings or SearchSettings()).validate()
    app.register_error_handler(ValueError, _bad_request)
    app.add_url_rule("/api/search", view_func=api_search, methods=["GET"])
    app.add_url_rule("/api/health", view_func=api_health, methods=["GET"])
    app.add_url_rule("/", view_func=home, methods=["GET"])
    return app


def _bad_request(exc: ValueError):
    return jsonify({"ok": False, "error": str(exc)}), 400


def _request_settings() -> SearchSettings:
    """Copy of the app defaults with any ?d=&mode=&sort=&category=&whole_word= overrides applied."""
    base: SearchSettings = current_app.config["SEARCH_SETTINGS"]
    s = SearchSettings(**vars(base))
    args = request.args
    if "d" in args:
        s.max_edit_distance = parse_radius(args["d"])
    if "mode" in args:
        s.search_mode = parse_enum(SearchMode, args["mode"])
    if "sort" in args:
        s.sorting_option = parse_enum(SortingOption, args["sort"])
    if "category" in args:
        s.category = parse_category(args["category"])
    if "whole_word" in args:
        s.whole_word = parse_bool(args["whole_word"])
    return s.validate()


# ---------- API ----------
def api_search():
    q = request.args.get("q", "", type=str)
    k = request.args.get("k", CFG.TOP_K, type=int)
    settings = _request_settings()
    if not q.strip():
        return jsonify([])
    engine: SearchEngine = current_app.config["SEARCH_ENGINE"]
    rows = run_query(engine, q, settings, top_k=k)
    return jsonify([
        {
            "matched_term": r.matched_term,
            "name": r.item.result_name,
            "namespace": r.item.namespace,
            "category": format_category(r.item.category),
            "score": r.item.relevance_score(q),
        }
        for r in rows
    ])


def api_health():
    engine: SearchEngine = current_app.config["SEARCH_ENGINE"]
    return jsonify({"ok": True, **engine.stats()})


# ---------- UI ----------
def home():
    html = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>Term search</title>
<style>
body{margin:0;background:#0b0f14;color:#cfd8e3;font:16px/1.45 system-ui,sans-serif}
.container{max-width:860px;margin:24px auto;padding:0 16px}
input{width:100%;padding:12px 14px;border-radius:12px;border:1px solid #1c2530;background:#0b1117;color:#cfd8e3;font-size:16px}
.row{display:grid;grid-template-columns:3rem 10rem 8rem 1fr;gap:10px;padding:10px 14px;border-top:1px solid #1c2530}
.small{color:#8a94a6}
</style>
</head>
<body>
  <div class="container">
    <h1>Term search</h1>
    <input id="q" type="text" placeholder="Search commands, settings, objects…" autocomplete="off" autofocus />
    <div id="out" class="small">Start typing to see results.</div>
  </div>
<script>
const q = document.querySelector("#q"), out = document.querySelector("#out");
let t;
function esc(s){return String(s).replace(/[&<>"]/g,c=>({"&":"&amp;","<":"&lt;",">":"&gt;",'"':"&quot;"}[c]))}
async function search(){
  const query = q.value.trim();
  if(!query){ out.innerHTML = "Start typing to see results."; return; }
  const resp = await fetch(`/api/search?q=${encodeURIComponent(query)}`);
  const data = await resp.json();
  if(!Array.isArray(data) || data.length === 0){ out.innerHTML = "No matches."; return; }
  out.innerHTML = data.map((r,i)=>`
    <div class="row"><div class="small">${i+1}</div><div>${esc(r.matched_term)}</div>
    <div class="small">${esc(r.category)}</div><div>${esc(r.name)} <span class="small">${esc(r.namespace)}</span></div></div>`).join("");
}
q.addEventListener("input", ()=>{ clearTimeout(t); t = setTimeout(search, 150); });
</script>
</body>
</html>
"""
    return Response(html, mimetype="text/html")


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run the HTTP search API on top of SearchEngine")
    ap.add_argument("--items", nargs="+", required=True, help="Catalog files or folders (.json / .txt)")
    ap.add_argument("--settings", default=None, help="JSON settings file")
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    if args.verbose or CFG.VERBOSE:
        logging.basicConfig(level=logging.DEBUG)

    try:
        settings = load_settings(args.settings) if args.settings else None
        engine = build_engine(args.items)
    except (ValueError, FileNotFoundError) as exc:
        ap.error(str(exc))
    app = create_app(engine, settings)
    log.info("serving %s on %s:%d", engine.stats(), args.host, args.port)
    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        engine.clear()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
