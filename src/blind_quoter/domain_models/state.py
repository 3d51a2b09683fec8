"""Domain-level state containers for a roller-blind quote.

Every container is a frozen dataclass.  Derivation steps build new instances
with :func:`dataclasses.replace` instead of mutating what they were given.
``to_dict``/``from_dict`` speak the camelCase keys of the persisted JSON
document; unknown keys are ignored and missing keys fall back to defaults.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field, replace
from typing import Any, Mapping

from blind_quoter.coerce import float_or_zero, to_float, to_int
from blind_quoter.constants import (
    DEFAULT_QUOTE_STATUS,
    F1_SNAPSHOT_KEYS,
    PRODUCT_ROLLER_BLIND,
)


def _to_plain_data(value: Any) -> Any:
    """Recursively convert values to JSON-serialisable Python primitives."""

    if isinstance(value, Mapping):
        return {str(key): _to_plain_data(val) for key, val in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_to_plain_data(item) for item in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return str(value)


def _to_plain_dict(value: Any) -> dict[str, Any]:
    """Best-effort conversion of mapping-like data to a plain dict."""

    if isinstance(value, Mapping):
        return {str(key): _to_plain_data(val) for key, val in value.items()}
    return {}


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _optional_text(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _require_mapping(raw: Any, owner: str) -> None:
    if not isinstance(raw, Mapping):
        raise TypeError(f"{owner}.from_dict expects a mapping of field values")


@dataclass(frozen=True)
class Item:
    """One blind on the order."""

    item_id: str = ""
    width: int | None = None
    height: int | None = None
    fabric_type: str | None = None
    line_price: float | None = None
    location: str = ""
    fabric: str = ""
    color: str = ""
    over: str = ""
    oi: str = ""
    lr: str = ""
    dual: str = ""
    chain: int | None = None
    winder: str = ""
    motor: str = ""

    @property
    def is_priceable(self) -> bool:
        """True when width, height and fabric type are all present."""

        return bool(self.width) and bool(self.height) and bool(self.fabric_type)

    def to_dict(self) -> dict[str, Any]:
        return {
            "itemId": self.item_id,
            "width": self.width,
            "height": self.height,
            "fabricType": self.fabric_type,
            "linePrice": self.line_price,
            "location": self.location,
            "fabric": self.fabric,
            "color": self.color,
            "over": self.over,
            "oi": self.oi,
            "lr": self.lr,
            "dual": self.dual,
            "chain": self.chain,
            "winder": self.winder,
            "motor": self.motor,
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any] | None) -> "Item":
        if raw is None:
            return cls()
        _require_mapping(raw, "Item")
        return cls(
            item_id=_text(raw.get("itemId")),
            width=to_int(raw.get("width")),
            height=to_int(raw.get("height")),
            fabric_type=_optional_text(raw.get("fabricType")),
            line_price=to_float(raw.get("linePrice")),
            location=_text(raw.get("location")),
            fabric=_text(raw.get("fabric")),
            color=_text(raw.get("color")),
            over=_text(raw.get("over")),
            oi=_text(raw.get("oi")),
            lr=_text(raw.get("lr")),
            dual=_text(raw.get("dual")),
            chain=to_int(raw.get("chain")),
            winder=_text(raw.get("winder")),
            motor=_text(raw.get("motor")),
        )


@dataclass(frozen=True)
class AccessoryLine:
    count: int = 0
    price: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {"count": self.count, "price": self.price}

    @classmethod
    def from_dict(cls, raw: Any) -> "AccessoryLine":
        if not isinstance(raw, Mapping):
            return cls()
        return cls(count=to_int(raw.get("count")) or 0, price=float_or_zero(raw.get("price")))


_COST_SUM_KEYS = (
    ("winder_cost_sum", "winderCostSum"),
    ("motor_cost_sum", "motorCostSum"),
    ("remote_cost_sum", "remoteCostSum"),
    ("charger_cost_sum", "chargerCostSum"),
    ("cord_cost_sum", "cordCostSum"),
    ("dual_cost_sum", "dualCostSum"),
)
_LINE_KEYS = ("winder", "motor", "remote", "charger", "cord3m")


@dataclass(frozen=True)
class AccessorySummary:
    """Accessory counts and their sale-price sums for one product."""

    winder: AccessoryLine = field(default_factory=AccessoryLine)
    motor: AccessoryLine = field(default_factory=AccessoryLine)
    remote: AccessoryLine = field(default_factory=AccessoryLine)
    charger: AccessoryLine = field(default_factory=AccessoryLine)
    cord3m: AccessoryLine = field(default_factory=AccessoryLine)
    winder_cost_sum: float | None = None
    motor_cost_sum: float | None = None
    remote_cost_sum: float | None = None
    charger_cost_sum: float | None = None
    cord_cost_sum: float | None = None
    dual_cost_sum: float | None = None

    def sale_total(self) -> float:
        """Sum of the line prices that count toward the product total."""

        return sum(getattr(self, name).price or 0.0 for name in _LINE_KEYS)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {name: getattr(self, name).to_dict() for name in _LINE_KEYS}
        for attr, key in _COST_SUM_KEYS:
            data[key] = getattr(self, attr)
        return data

    @classmethod
    def from_dict(cls, raw: Any) -> "AccessorySummary":
        if not isinstance(raw, Mapping):
            return cls()
        kwargs: dict[str, Any] = {name: AccessoryLine.from_dict(raw.get(name)) for name in _LINE_KEYS}
        for attr, key in _COST_SUM_KEYS:
            kwargs[attr] = to_float(raw.get(key))
        return cls(**kwargs)


@dataclass(frozen=True)
class ProductSummary:
    total_sum: float | None = None
    accessories: AccessorySummary = field(default_factory=AccessorySummary)

    def to_dict(self) -> dict[str, Any]:
        return {"totalSum": self.total_sum, "accessories": self.accessories.to_dict()}

    @classmethod
    def from_dict(cls, raw: Any) -> "ProductSummary":
        if not isinstance(raw, Mapping):
            return cls()
        return cls(
            total_sum=to_float(raw.get("totalSum")),
            accessories=AccessorySummary.from_dict(raw.get("accessories")),
        )


@dataclass(frozen=True)
class ProductData:
    items: tuple[Item, ...] = ()
    summary: ProductSummary = field(default_factory=ProductSummary)

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": [item.to_dict() for item in self.items],
            "summary": self.summary.to_dict(),
        }

    @classmethod
    def from_dict(cls, raw: Any) -> "ProductData":
        if not isinstance(raw, Mapping):
            return cls()
        raw_items = raw.get("items")
        items: tuple[Item, ...] = ()
        if isinstance(raw_items, (list, tuple)):
            items = tuple(Item.from_dict(entry) for entry in raw_items if isinstance(entry, Mapping))
        return cls(items=items, summary=ProductSummary.from_dict(raw.get("summary")))


@dataclass(frozen=True)
class Customer:
    name: str = ""
    first_name: str = ""
    last_name: str = ""
    address: str = ""
    phone: str = ""
    email: str = ""
    postcode: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "address": self.address,
            "phone": self.phone,
            "email": self.email,
            "postcode": self.postcode,
        }

    @classmethod
    def from_dict(cls, raw: Any) -> "Customer":
        if not isinstance(raw, Mapping):
            return cls()
        return cls(
            name=_text(raw.get("name")),
            first_name=_text(raw.get("firstName")),
            last_name=_text(raw.get("lastName")),
            address=_text(raw.get("address")),
            phone=_text(raw.get("phone")),
            email=_text(raw.get("email")),
            postcode=_text(raw.get("postcode")),
        )


@dataclass(frozen=True)
class UiMetadata:
    """Per-quote UI data that survives persistence (the LF overlay set)."""

    lf_modified_row_indexes: tuple[int, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"lfModifiedRowIndexes": list(self.lf_modified_row_indexes)}

    @classmethod
    def from_dict(cls, raw: Any) -> "UiMetadata":
        if not isinstance(raw, Mapping):
            return cls()
        indexes = raw.get("lfModifiedRowIndexes")
        if not isinstance(indexes, (list, tuple)):
            return cls()
        cleaned = [to_int(value) for value in indexes]
        return cls(lf_modified_row_indexes=tuple(value for value in cleaned if value is not None))


def default_f1_snapshot() -> dict[str, Any]:
    return {key: None for key in F1_SNAPSHOT_KEYS}


_SCALAR_FIELDS = (
    ("quote_id", "quoteId"),
    ("issue_date", "issueDate"),
    ("due_date", "dueDate"),
    ("owner_uid", "ownerUid"),
    ("creation_date", "creationDate"),
)
_KNOWN_KEYS = frozenset(
    {
        "currentProduct",
        "products",
        "uiMetadata",
        "metadata",
        "status",
        "costDiscountPercentage",
        "customer",
        "f1Snapshot",
        "f2Snapshot",
        "generalNotes",
        "termsConditions",
    }
    | {key for _, key in _SCALAR_FIELDS}
)


@dataclass(frozen=True)
class QuoteData:
    """The persisted quote aggregate."""

    current_product: str = PRODUCT_ROLLER_BLIND
    products: Mapping[str, ProductData] = field(
        default_factory=lambda: {PRODUCT_ROLLER_BLIND: ProductData()}
    )
    ui_metadata: UiMetadata = field(default_factory=UiMetadata)
    metadata: Mapping[str, Any] = field(default_factory=lambda: {"hasMotor": False})
    quote_id: str | None = None
    issue_date: str | None = None
    due_date: str | None = None
    owner_uid: str | None = None
    status: str = DEFAULT_QUOTE_STATUS
    cost_discount_percentage: float = 0.0
    customer: Customer = field(default_factory=Customer)
    f1_snapshot: Mapping[str, Any] = field(default_factory=default_f1_snapshot)
    f2_snapshot: Mapping[str, Any] = field(default_factory=dict)
    creation_date: str | None = None
    general_notes: str = ""
    terms_conditions: str = ""
    extra: Mapping[str, Any] = field(default_factory=dict)

    # ------------------------------------------------------------------
    # accessors
    @property
    def product(self) -> ProductData:
        """Return the data of the product currently being quoted."""

        return self.products.get(self.current_product) or ProductData()

    @property
    def items(self) -> tuple[Item, ...]:
        return self.product.items

    @property
    def summary(self) -> ProductSummary:
        return self.product.summary

    @property
    def lf_indexes(self) -> frozenset[int]:
        return frozenset(self.ui_metadata.lf_modified_row_indexes)

    def with_product(self, product: ProductData) -> "QuoteData":
        """Return a copy with the current product's data replaced."""

        products = dict(self.products)
        products[self.current_product] = product
        return replace(self, products=products)

    def with_items(self, items: tuple[Item, ...] | list[Item]) -> "QuoteData":
        return self.with_product(replace(self.product, items=tuple(items)))

    # ------------------------------------------------------------------
    # persistence
    def to_dict(self) -> dict[str, Any]:
        """Serialise the quote to plain data using document keys."""

        data: dict[str, Any] = _to_plain_dict(self.extra)
        data.update(
            {
                "currentProduct": self.current_product,
                "products": {key: product.to_dict() for key, product in self.products.items()},
                "uiMetadata": self.ui_metadata.to_dict(),
                "metadata": _to_plain_dict(self.metadata),
                "status": self.status,
                "costDiscountPercentage": self.cost_discount_percentage,
                "customer": self.customer.to_dict(),
                "f1Snapshot": _to_plain_dict(self.f1_snapshot),
                "f2Snapshot": _to_plain_dict(self.f2_snapshot),
                "generalNotes": self.general_notes,
                "termsConditions": self.terms_conditions,
            }
        )
        for attr, key in _SCALAR_FIELDS:
            data[key] = getattr(self, attr)
        return data

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any] | None) -> "QuoteData":
        """Construct a :class:`QuoteData` from a persisted document."""

        if raw is None:
            return cls()
        _require_mapping(raw, "QuoteData")

        kwargs: dict[str, Any] = {}
        products_raw = raw.get("products")
        if isinstance(products_raw, Mapping) and products_raw:
            kwargs["products"] = {
                str(key): ProductData.from_dict(value) for key, value in products_raw.items()
            }
        current = raw.get("currentProduct")
        if current:
            kwargs["current_product"] = str(current)
        for attr, key in _SCALAR_FIELDS:
            kwargs[attr] = _optional_text(raw.get(key))

        if isinstance(raw.get("metadata"), Mapping):
            kwargs["metadata"] = _to_plain_dict(raw["metadata"])
        if raw.get("status"):
            kwargs["status"] = str(raw["status"])
        kwargs["cost_discount_percentage"] = float_or_zero(raw.get("costDiscountPercentage"))
        kwargs["ui_metadata"] = UiMetadata.from_dict(raw.get("uiMetadata"))
        kwargs["customer"] = Customer.from_dict(raw.get("customer"))

        f1_snapshot = default_f1_snapshot()
        f1_snapshot.update(_to_plain_dict(raw.get("f1Snapshot")))
        kwargs["f1_snapshot"] = f1_snapshot
        kwargs["f2_snapshot"] = _to_plain_dict(raw.get("f2Snapshot"))
        kwargs["general_notes"] = _text(raw.get("generalNotes"))
        kwargs["terms_conditions"] = _text(raw.get("termsConditions"))
        kwargs["extra"] = {
            str(key): copy.deepcopy(value) for key, value in raw.items() if key not in _KNOWN_KEYS
        }
        return cls(**kwargs)


__all__ = [
    "Item",
    "AccessoryLine",
    "AccessorySummary",
    "ProductSummary",
    "ProductData",
    "Customer",
    "UiMetadata",
    "QuoteData",
    "default_f1_snapshot",
]
