from __future__ import annotations
import json
import logging
import os
from typing import Any, Dict, Iterable, List, Tuple

from . import config as CFG
from .config import parse_category
from .engine import SearchEngine
from .models import SearchItem
from .normalize import build_namespace, generate_search_terms

log = logging.getLogger(__name__)


def _iter_catalog_files(paths: Iterable[str]) -> Iterable[Tuple[str, str]]:
    """
    Yield (root, file) pairs: explicit files are their own root's only entry,
    directories are walked recursively (sorted).
    """
    for p in paths:
        if os.path.isfile(p):
            yield os.path.dirname(os.path.abspath(p)), os.path.abspath(p)
            continue
        if not os.path.isdir(p):
            raise FileNotFoundError(p)
        root = os.path.abspath(p)
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(d for d in dirnames if d not in CFG.EXCLUDE_DIRS)
            for fn in sorted(filenames):
                if os.path.splitext(fn)[1].lower() in CFG.INCLUDE_EXTS:
                    yield root, os.path.join(dirpath, fn)


def _path_namespace(root: str, path: str) -> str:
    """Folders below the root plus the file stem: <root>/commands/Console.txt -> 'commands>Console'."""
    rel = os.path.relpath(os.path.splitext(path)[0], root)
    return build_namespace(rel.replace("\\", "/").split("/"), CFG.NAMESPACE_SEPARATOR)


def _constant_scorer(value: float):
    return lambda _query: value


def _item_from_record(rec: Dict[str, Any], path: str, pos: int) -> SearchItem:
    name = rec.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ValueError(f"{path}: entry #{pos} has no 'name'")

    terms = rec.get("terms")
    if terms is None:
        terms = generate_search_terms(name)
    elif not isinstance(terms, list) or not all(isinstance(t, str) for t in terms):
        raise ValueError(f"{path}: entry #{pos} ('{name}'): 'terms' must be a list of strings")
    if not terms:
        raise ValueError(f"{path}: entry #{pos} ('{name}') yields no search terms")

    # "namespace" is either a ready path or a list of segments
    namespace = rec.get("namespace", "")
    if isinstance(namespace, list):
        namespace = build_namespace((str(seg) for seg in namespace), CFG.NAMESPACE_SEPARATOR)

    score = rec.get("score")
    return SearchItem(
        result_name=name,
        search_terms=list(terms),
        namespace=str(namespace),
        category=parse_category(rec.get("category", "all")),
        scorer=_constant_scorer(float(score)) if score is not None else None,
    )


def _load_json(path: str) -> List[SearchItem]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("items", [])
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of items or an object with 'items'")
    items = []
    for pos, rec in enumerate(data):
        if not isinstance(rec, dict):
            raise ValueError(f"{path}: entry #{pos} is not an object")
        items.append(_item_from_record(rec, path, pos))
    return items


def _load_txt(path: str, namespace: str) -> List[SearchItem]:
    """One identifier per line, e.g. 'OpenMapSettings'; '#' starts a comment line."""
    items = []
    with open(path, "r", encoding="utf-8", errors="ignore") as f:
        for ln in f:
            name = ln.strip()
            if not name or name.startswith("#"):
                continue
            terms = generate_search_terms(name)
            if terms:
                items.append(SearchItem(result_name=name, search_terms=terms, namespace=namespace))
    return items


def load_items(paths: Iterable[str]) -> List[SearchItem]:
    """
    Load searchable items from .json catalogs and .txt identifier lists.
    Directories are scanned recursively for CFG.INCLUDE_EXTS; items from .txt
    files get the file's folder path and stem as namespace.
    """
    items: List[SearchItem] = []
    file_count = 0
    for root, path in _iter_catalog_files(paths):
        if path.lower().endswith(".json"):
            loaded = _load_json(path)
        else:
            loaded = _load_txt(path, _path_namespace(root, path))
        items.extend(loaded)
        file_count += 1
        log.debug("loaded %d items from %s", len(loaded), path)
    log.info("loaded %d items from %d files", len(items), file_count)
    return items


def build_engine(paths: Iterable[str]) -> SearchEngine:
    """Fresh engine with every item from the given catalogs indexed."""
    engine = SearchEngine()
    for item in load_items(paths):
        engine.add_to_index(item)
    log.info("engine ready: %s", engine.stats())
    return engine
