from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable

from errors import RuleDatasetError
from models.ripeness import ItemRule

logger = logging.getLogger(__name__)


def load_rules(path: Path) -> list[ItemRule]:
    """Read the static rule dataset (a JSON array of rule objects)."""
    try:
        with open(path, encoding="utf-8") as fh:
            raw = json.load(fh)
    except (OSError, ValueError) as e:
        raise RuleDatasetError(f"Could not read rule dataset {path}: {e}") from e

    if not isinstance(raw, list):
        raise RuleDatasetError(f"Rule dataset {path} must be a JSON array")

    rules: list[ItemRule] = []
    for index, entry in enumerate(raw):
        if not isinstance(entry, dict) or not entry.get("sku") or not entry.get("name"):
            logger.warning("[Rules] Skipping entry %d: missing sku or name", index)
            continue
        try:
            rules.append(ItemRule.from_dict(entry))
        except (TypeError, ValueError) as e:
            logger.warning("[Rules] Skipping entry %d (%s): %s", index, entry.get("sku"), e)
    return rules


class RuleRepository:
    """Read-only lookup of ripening rules by SKU.

    Built once at startup and never mutated afterwards, so request threads
    can share it freely.
    """

    def __init__(self, rules: Iterable[ItemRule]):
        by_sku: dict[str, ItemRule] = {}
        for rule in rules:
            if rule.sku in by_sku:
                logger.warning("[Rules] Duplicate sku %r ignored", rule.sku)
                continue
            by_sku[rule.sku] = rule
        self._rules = by_sku

    @classmethod
    def from_file(cls, path: Path) -> "RuleRepository":
        repo = cls(load_rules(path))
        logger.info("[Rules] Loaded %d rules from %s", len(repo), path)
        return repo

    def lookup(self, sku: str) -> ItemRule | None:
        return self._rules.get(sku)

    def list_rules(self) -> list[ItemRule]:
        # Category first, then name, so listings stay stable
        return sorted(self._rules.values(), key=lambda r: (r.category, r.name))

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, sku: object) -> bool:
        return sku in self._rules
