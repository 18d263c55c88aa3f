# gofinances/core/categories.py
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Tuple


@dataclass(frozen=True)
class Category:
    key: str
    name: str
    icon: str
    color: str


DEFAULT_CATEGORIES = [
    {"key": "purchases", "name": "Compras", "icon": "shopping-bag", "color": "#5636D3"},
    {"key": "food", "name": "Alimentação", "icon": "coffee", "color": "#FF872C"},
    {"key": "salary", "name": "Salário", "icon": "dollar-sign", "color": "#12A454"},
    {"key": "car", "name": "Carro", "icon": "crosshair", "color": "#E83F5B"},
    {"key": "leisure", "name": "Lazer", "icon": "heart", "color": "#26195C"},
    {"key": "studies", "name": "Estudos", "icon": "book", "color": "#9C001A"},
]


def load_catalog(entries: Iterable[Mapping[str, str]]) -> Tuple[Category, ...]:
    """
    Build the ordered category catalog from config entries.
    Order is preserved; it is the order category breakdowns are reported in.
    """
    if not isinstance(entries, (list, tuple)):
        raise ValueError("'categories' must be a list of category entries.")
    catalog = []
    seen = set()
    for entry in entries:
        if not isinstance(entry, Mapping):
            raise ValueError(f"Category entry must be a mapping: {entry!r}")
        key = entry.get("key")
        if not key:
            raise ValueError(f"Missing 'key' in category entry: {entry}")
        if key in seen:
            raise ValueError(f"Duplicate category key '{key}'.")
        seen.add(key)
        catalog.append(
            Category(
                key=key,
                name=entry.get("name", key),
                icon=entry.get("icon", ""),
                color=entry.get("color", "#000000"),
            )
        )
    return tuple(catalog)


def find_category(catalog: Iterable[Category], key: str) -> Optional[Category]:
    return next((cat for cat in catalog if cat.key == key), None)
