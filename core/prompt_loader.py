from __future__ import annotations

import random
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple, TypeVar, Union

import yaml

from core.config import DEFAULT_PROMPTS_PATH
from core.logging_setup import setup_logger

T = TypeVar("T")

# Cache to avoid reload churn during Streamlit reruns.
_CATALOG_CACHE: Dict[Path, "PromptCatalog"] = {}


@dataclass(frozen=True)
class PromptCatalog:
    styles: Tuple[str, ...]
    prompts: Tuple[str, ...]


@dataclass(frozen=True)
class Assignment:
    prompt: str
    style: str


def _validate_string_list(name: str, block: Any) -> Tuple[str, ...]:
    """
    Validate a block shaped like:
      name:
        - "..."
        - "..."
    """
    if not isinstance(block, list) or not block:
        raise ValueError(f"'{name}' must be a non-empty list of strings")

    items = []
    for i, item in enumerate(block):
        if not isinstance(item, str) or not item.strip():
            raise ValueError(f"Missing or empty entry: {name}[{i}]")
        items.append(item.strip())
    return tuple(items)


def load_catalog(path: Optional[Union[str, Path]] = None) -> PromptCatalog:
    """
    Load poem styles and writing prompts from YAML.
    Expected structure:
      styles:  ["Haiku", "Sonnet", ...]
      prompts: ["Write a poem inspired by a color.", ...]
    """
    p = Path(path) if path else DEFAULT_PROMPTS_PATH
    cached = _CATALOG_CACHE.get(p)
    if cached is not None:
        return cached

    logger = setup_logger()

    if not p.exists():
        raise FileNotFoundError(f"Prompt file not found: {p}")

    data = yaml.safe_load(p.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("prompts.yaml must contain a mapping with keys: styles, prompts")

    catalog = PromptCatalog(
        styles=_validate_string_list("styles", data.get("styles")),
        prompts=_validate_string_list("prompts", data.get("prompts")),
    )

    logger.info(
        f"Loaded catalog from {p} styles={len(catalog.styles)} prompts={len(catalog.prompts)}"
    )
    _CATALOG_CACHE[p] = catalog
    return catalog


def clear_cache() -> None:
    _CATALOG_CACHE.clear()


def pick_random(items: Sequence[T], rng: Optional[random.Random] = None) -> T:
    if not items:
        raise ValueError("Cannot pick from an empty sequence")
    return (rng or random).choice(items)


def assign_prompt(catalog: PromptCatalog, rng: Optional[random.Random] = None) -> Assignment:
    return Assignment(
        prompt=pick_random(catalog.prompts, rng),
        style=pick_random(catalog.styles, rng),
    )
