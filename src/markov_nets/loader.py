"""Utilities for loading generator tables from JSON or YAML files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

try:
    import yaml
except ImportError:  # pragma: no cover - optional dependency
    yaml = None

from .config import GeneratorConfig
from .generator import MarkovGenerator
from .types import WeightedItem


def load_generator(path: str | Path, config: Optional[GeneratorConfig] = None) -> MarkovGenerator:
    """Build a generator from the ``transitions`` listed in a JSON or YAML file.

    A top-level ``order`` in the file overrides the order of ``config``.
    """

    data = _read_file(path)
    transitions = data.get("transitions", [])
    if not transitions:
        raise RuntimeError("generator file contains no transitions")

    config = config or GeneratorConfig()
    if "order" in data:
        config = GeneratorConfig.model_validate({**config.model_dump(), "order": data["order"]})

    generator: MarkovGenerator = MarkovGenerator(config)
    for entry in transitions:
        context = entry["context"]
        if entry.get("items"):
            generator.add_transitions(context, entry["items"])
        if entry.get("weighted"):
            pairs = [WeightedItem.model_validate(pair) for pair in entry["weighted"]]
            generator.add_weighted_transitions(context, pairs)
    return generator


def _read_file(path: str | Path) -> dict:
    payload = Path(path).read_text(encoding="utf-8")
    suffix = Path(path).suffix.lower()
    if suffix in {".yaml", ".yml"}:
        if yaml is None:
            raise RuntimeError("PyYAML is required for YAML generator files")
        return yaml.safe_load(payload) or {}
    return json.loads(payload)


__all__ = ["load_generator"]
