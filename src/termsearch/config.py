from __future__ import annotations
import os
from dataclasses import dataclass, field
from enum import Enum, Flag
from typing import Any, Dict, Type, TypeVar

# Fuzzy radius used by SearchEngine.search() when none is given
MAX_EDIT_DISTANCE: int = 2

# How many rows the CLI / HTTP API return by default
TOP_K: int = 10

# /* ~~~ default query behaviour (names match the enums below, case-insensitive) ~~~ */
SEARCH_MODE: str = "default"       # "exact_match" | "fuzzy" | "default"
SORTING: str = "relevance"         # "relevance" | "namespace" | "alphabetical"
CATEGORY: str = "all"
WHOLE_WORD: bool = False

# Separator between namespace segments of a SearchItem
NAMESPACE_SEPARATOR: str = ">"

# catalog file types understood by the loader
INCLUDE_EXTS = [".json", ".txt"]

# folders to skip while walking catalog roots
EXCLUDE_DIRS = {".git", ".hg", ".svn", ".idea", ".vscode", "node_modules", "__pycache__"}

# Progress logging (set TERMSEARCH_VERBOSE=1 to enable)
VERBOSE = os.environ.get("TERMSEARCH_VERBOSE") == "1"


class Category(Flag):
    """Which kinds of searchable items a query should return."""
    NONE = 0
    SETTINGS = 1
    UI_ELEMENTS = 2
    GAME_OBJECTS = 4
    MAP_OBJECTS = 8
    ALL = SETTINGS | UI_ELEMENTS | GAME_OBJECTS | MAP_OBJECTS


class SearchMode(Enum):
    EXACT_MATCH = "exact_match"
    FUZZY = "fuzzy"
    DEFAULT = "default"


class SortingOption(Enum):
    RELEVANCE = "relevance"
    NAMESPACE = "namespace"
    ALPHABETICAL = "alphabetical"


_E = TypeVar("_E", bound=Enum)


def parse_enum(enum_cls: Type[_E], value: Any) -> _E:
    """Accept an enum member, its value or its name (any case, '-' or '_')."""
    if isinstance(value, enum_cls):
        return value
    key = str(value).strip().replace("-", "_")
    for member in enum_cls.__members__.values():
        if key.lower() in (member.name.lower(), str(member.value).lower()):
            return member
    choices = ", ".join(name.lower() for name in enum_cls.__members__)
    raise ValueError(f"unknown {enum_cls.__name__} {value!r} (expected one of: {choices})")


def parse_category(value: Any) -> Category:
    """'all', 'settings', 'settings|map_objects' or a Category -> Category."""
    if isinstance(value, Category):
        return value
    result = Category.NONE
    for part in str(value).replace(",", "|").split("|"):
        part = part.strip()
        if part:
            result |= parse_enum(Category, part.upper())
    return result


def format_category(category: Category) -> str:
    """Inverse of parse_category(): Category.SETTINGS | Category.MAP_OBJECTS -> "settings|map_objects"."""
    if category == Category.ALL:
        return "all"
    names = [m.name.lower() for m in Category.__members__.values()
             if m.value and m is not Category.ALL and (category.value & m.value) == m.value]
    return "|".join(names) or "none"



_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off", "")


def parse_bool(value: Any) -> bool:
    """JSON bool or one of the usual on/off strings; anything else is rejected."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        key = value.strip().lower()
        if key in _TRUE:
            return True
        if key in _FALSE:
            return False
    raise ValueError(f"expected a boolean, got {value!r}")


def parse_radius(value: Any) -> int:
    """Edit-distance radius: an integer or an integer string (1.9, True, "2.5" are rejected)."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lstrip("+-").isdigit():
        return int(value.strip())
    raise ValueError(f"max_edit_distance must be an integer, got {value!r}")

@dataclass
class SearchSettings:
    """
    Options consumed by callers of the engine (search.run_query, CLI, web).
    The core SearchEngine operations never read these.
    """
    search_mode: SearchMode = field(default_factory=lambda: parse_enum(SearchMode, SEARCH_MODE))
    sorting_option: SortingOption = field(default_factory=lambda: parse_enum(SortingOption, SORTING))
    category: Category = field(default_factory=lambda: parse_category(CATEGORY))
    whole_word: bool = WHOLE_WORD
    max_edit_distance: int = MAX_EDIT_DISTANCE

    def validate(self) -> "SearchSettings":
        if self.max_edit_distance < 0:
            raise ValueError(f"max_edit_distance must be non-negative, got {self.max_edit_distance}")
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "search_mode": self.search_mode.value,
            "sorting_option": self.sorting_option.value,
            "category": format_category(self.category),
            "whole_word": self.whole_word,
            "max_edit_distance": self.max_edit_distance,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SearchSettings":
        inst = cls()
        if "search_mode" in data:
            inst.search_mode = parse_enum(SearchMode, data["search_mode"])
        if "sorting_option" in data:
            inst.sorting_option = parse_enum(SortingOption, data["sorting_option"])
        if "category" in data:
            inst.category = parse_category(data["category"])
        if "whole_word" in data:
            inst.whole_word = parse_bool(data["whole_word"])
        if "max_edit_distance" in data:
            inst.max_edit_distance = parse_radius(data["max_edit_distance"])
        return inst.validate()
