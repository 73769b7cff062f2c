"""
Prize and layout lookup.
Starts from the built-in catalog and can be extended from a JSON file
(`{"prizes": [...], "layouts": [...]}`) named in the configuration.
"""

import json
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from pydantic import ValidationError

from scratchcore.config import settings
from scratchcore.core.exceptions import UnknownLayoutError
from scratchcore.core.layouts import DEFAULT_LAYOUTS
from scratchcore.core.logger import get_logger
from scratchcore.core.models import Prize, TicketLayout
from scratchcore.core.prizes import DEFAULT_PRIZES

logger = get_logger("catalog")


class PrizeCatalog:
    """Resolves prize and layout identifiers to catalog entries."""

    def __init__(
        self,
        prizes: Optional[Iterable[Prize]] = None,
        layouts: Optional[Iterable[TicketLayout]] = None,
        default_gold_cost: int = 5,
    ):
        self._prizes: Dict[str, Prize] = {}
        self._layouts: Dict[str, TicketLayout] = {}
        self.default_gold_cost = default_gold_cost

        for prize in prizes if prizes is not None else DEFAULT_PRIZES:
            self.register_prize(prize)
        for layout in layouts if layouts is not None else DEFAULT_LAYOUTS.values():
            self.register_layout(layout)

    def register_prize(self, prize: Prize):
        self._prizes[prize.id] = prize

    def register_layout(self, layout: TicketLayout):
        self._layouts[layout.id] = layout

    def get_prize_by_id(self, prize_id: str) -> Optional[Prize]:
        return self._prizes.get(prize_id)

    def get_layout_by_id(self, layout_id: str) -> Optional[TicketLayout]:
        return self._layouts.get(layout_id)

    def require_layout(self, layout_id: str) -> TicketLayout:
        layout = self.get_layout_by_id(layout_id)
        if layout is None:
            raise UnknownLayoutError(layout_id)
        return layout

    def all_prizes(self) -> List[Prize]:
        return list(self._prizes.values())

    def all_layouts(self) -> List[TicketLayout]:
        return list(self._layouts.values())

    def get_ticket_gold_cost(self, layout: TicketLayout) -> int:
        """Purchase price of a layout; 0 means free."""
        if layout.gold_cost is None:
            return self.default_gold_cost
        return layout.gold_cost

    def load_file(self, path: Path) -> bool:
        """
        Merge prizes and layouts from a JSON file into the catalog.
        Entries with the same id replace built-in ones.

        Returns:
            True if the file was loaded
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.warning(f"Catalog file {path} not found, using built-in catalog")
            return False
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in catalog file {path}: {e}")
            return False

        try:
            prizes = [Prize.model_validate(p) for p in data.get("prizes", [])]
            layouts = [TicketLayout.model_validate(l) for l in data.get("layouts", [])]
        except ValidationError as e:
            logger.error(f"Invalid catalog entry in {path}: {e}")
            return False

        for prize in prizes:
            self.register_prize(prize)
        for layout in layouts:
            self.register_layout(layout)

        logger.info(f"Loaded {len(prizes)} prizes and {len(layouts)} layouts from {path}")
        return True


def load_catalog(path: Optional[Path] = None) -> PrizeCatalog:
    """Built-in catalog, extended by the configured catalog file if any."""
    catalog = PrizeCatalog(default_gold_cost=settings.catalog.default_ticket_gold_cost)
    path = path or settings.get_catalog_path()
    if path is not None:
        catalog.load_file(path)
    return catalog


# Singleton instance
prize_catalog = load_catalog()
