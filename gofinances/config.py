from __future__ import annotations

import copy
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Tuple

import yaml

from gofinances.core.categories import DEFAULT_CATEGORIES, Category, load_catalog
from gofinances.formatting import get_locale

DEFAULT_CONFIG: Dict[str, object] = {
    "db_path": "gofinances.db",
    "namespace": "@gofinances",
    "locale": "pt_BR",
    "currency": "BRL",
    "categories": DEFAULT_CATEGORIES,
    "google": {
        "client_id": None,
        "redirect_uri": None,
    },
}


@dataclass(frozen=True)
class Settings:
    """Display settings handed to the reporters."""
    locale: str = "pt_BR"
    currency: str = "BRL"


def _merge_defaults(current: Dict[str, object], defaults: Dict[str, object]) -> Dict[str, object]:
    """Merge missing default keys into the current config recursively."""
    merged = dict(current)
    for key, value in defaults.items():
        if key not in merged or merged[key] is None:
            merged[key] = copy.deepcopy(value)
        elif isinstance(value, dict) and isinstance(merged[key], dict):
            merged[key] = _merge_defaults(merged[key], value)
    return merged


def load_config(path: str | Path | None = None) -> Dict[str, object]:
    """Load a YAML config file merged over the defaults.

    A missing *path* yields the defaults. Google OAuth settings fall back to
    the CLIENT_ID / REDIRECT_URI environment variables.
    """
    data: Dict[str, object] = {}
    if path is not None and Path(path).exists():
        with Path(path).open("r", encoding="utf-8") as fp:
            data = yaml.safe_load(fp) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping.")

    config = _merge_defaults(data, DEFAULT_CONFIG)
    google = config["google"]
    if not isinstance(google, dict):
        raise ValueError("'google' must be a mapping of client_id and redirect_uri.")
    google["client_id"] = google.get("client_id") or os.getenv("CLIENT_ID")
    google["redirect_uri"] = google.get("redirect_uri") or os.getenv("REDIRECT_URI")
    return config


def settings_from_config(config: Dict[str, object]) -> Settings:
    locale = str(config.get("locale") or DEFAULT_CONFIG["locale"])
    get_locale(locale)
    return Settings(
        locale=locale,
        currency=str(config.get("currency") or DEFAULT_CONFIG["currency"]),
    )


def catalog_from_config(config: Dict[str, object]) -> Tuple[Category, ...]:
    return load_catalog(config.get("categories") or DEFAULT_CATEGORIES)
