"""Price catalog: fabric matrices, accessory unit prices and F2 fee rates."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from blind_quoter.coerce import to_float
from blind_quoter.config import DEFAULT_CATALOG_PATH
from blind_quoter.pricing.base import PriceMatrix

logger = logging.getLogger(__name__)

_CATALOG_CACHE: dict[tuple[str, float], "PriceCatalog"] = {}


class CatalogError(ValueError):
    """Raised when a price catalog document cannot be interpreted."""


def _frozen(mapping: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class PriceCatalog:
    """Read-only pricing data consumed by the derivation engine."""

    matrices: Mapping[str, PriceMatrix] = field(default_factory=dict)
    accessory_prices: Mapping[str, float] = field(default_factory=dict)
    sale_price_keys: Mapping[str, str] = field(default_factory=dict)
    accessory_methods: Mapping[str, str] = field(default_factory=dict)
    f2_unit_prices: Mapping[str, float] = field(default_factory=dict)

    def get_price_matrix(self, fabric_type: str | None) -> PriceMatrix | None:
        if not fabric_type:
            return None
        return self.matrices.get(fabric_type)

    def get_drops(self, fabric_type: str | None) -> tuple[int, ...]:
        matrix = self.get_price_matrix(fabric_type)
        return matrix.drops if matrix is not None else ()

    def get_accessory_price(self, price_key: str | None) -> float | None:
        if not price_key:
            return None
        return self.accessory_prices.get(price_key)

    def f2_unit_price(self, name: str) -> float:
        return self.f2_unit_prices.get(name, 0.0)


def _parse_matrix(fabric_type: str, raw: Any) -> PriceMatrix:
    if not isinstance(raw, Mapping):
        raise CatalogError(f"Price matrix for {fabric_type!r} must be an object")
    try:
        widths = tuple(int(value) for value in raw["widths"])
        drops = tuple(int(value) for value in raw["drops"])
        rows = raw["prices"]
    except KeyError as exc:
        raise CatalogError(f"Price matrix for {fabric_type!r} is missing {exc.args[0]!r}") from exc
    except (TypeError, ValueError) as exc:
        raise CatalogError(f"Price matrix for {fabric_type!r} has non-numeric tiers") from exc

    if list(widths) != sorted(widths) or list(drops) != sorted(drops):
        raise CatalogError(f"Price matrix tiers for {fabric_type!r} must be ascending")
    if not isinstance(rows, list) or len(rows) != len(drops):
        raise CatalogError(f"Price matrix for {fabric_type!r} needs one price row per drop")

    prices: list[tuple[float | None, ...]] = []
    for row in rows:
        if not isinstance(row, list) or len(row) != len(widths):
            raise CatalogError(f"Price matrix for {fabric_type!r} needs one price per width")
        prices.append(tuple(to_float(value) for value in row))
    return PriceMatrix(fabric_type=fabric_type, widths=widths, drops=drops, prices=tuple(prices))


def _string_map(raw: Any, section: str) -> dict[str, str]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise CatalogError(f"'{section}' must be an object")
    return {str(key): str(value) for key, value in raw.items()}


def _price_map(raw: Any, section: str) -> dict[str, float]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise CatalogError(f"'{section}' must be an object")
    prices: dict[str, float] = {}
    for key, value in raw.items():
        numeric = to_float(value)
        if numeric is None:
            logger.warning("Ignoring non-numeric price %r for %s.%s", value, section, key)
            continue
        prices[str(key)] = numeric
    return prices


def catalog_from_mapping(raw: Mapping[str, Any]) -> PriceCatalog:
    """Build a :class:`PriceCatalog` from a parsed catalog document."""

    if not isinstance(raw, Mapping):
        raise CatalogError("Catalog root must be an object")

    matrices_raw = raw.get("matrices") or {}
    if not isinstance(matrices_raw, Mapping):
        raise CatalogError("'matrices' must be an object")
    matrices = {str(code): _parse_matrix(str(code), value) for code, value in matrices_raw.items()}

    mappings = raw.get("accessoryMappings") or {}
    if not isinstance(mappings, Mapping):
        raise CatalogError("'accessoryMappings' must be an object")

    return PriceCatalog(
        matrices=_frozen(matrices),
        accessory_prices=_frozen(_price_map(raw.get("accessoryPrices"), "accessoryPrices")),
        sale_price_keys=_frozen(_string_map(mappings.get("salePriceKeys"), "salePriceKeys")),
        accessory_methods=_frozen(_string_map(mappings.get("methodNames"), "methodNames")),
        f2_unit_prices=_frozen(_price_map(raw.get("f2UnitPrices"), "f2UnitPrices")),
    )


def _load_catalog_file(path: Path) -> PriceCatalog:
    if not path.exists():
        raise FileNotFoundError(f"Price catalog not found: {path}")
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Malformed JSON in {path.name}: {exc}") from exc
    catalog = catalog_from_mapping(raw)
    logger.debug("Loaded %d price matrices from %s", len(catalog.matrices), path)
    return catalog


def load_catalog(path: str | Path | None = None, *, reload: bool = False) -> PriceCatalog:
    """Return the catalog at ``path`` (the bundled one by default), cached by mtime."""

    resolved = Path(path).expanduser().resolve() if path else DEFAULT_CATALOG_PATH
    try:
        mtime = resolved.stat().st_mtime
    except FileNotFoundError as exc:
        raise FileNotFoundError(f"Price catalog not found: {resolved}") from exc
    cache_key = (str(resolved), mtime)
    if reload or cache_key not in _CATALOG_CACHE:
        _CATALOG_CACHE[cache_key] = _load_catalog_file(resolved)
    return _CATALOG_CACHE[cache_key]


def reload_catalog(path: str | Path | None = None) -> PriceCatalog:
    return load_catalog(path, reload=True)


__all__ = [
    "CatalogError",
    "PriceCatalog",
    "catalog_from_mapping",
    "load_catalog",
    "reload_catalog",
]
