"""Capturing panel state into a saved quote and restoring it on load."""

from __future__ import annotations

import re
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Mapping

from blind_quoter.domain_models import (
    Customer,
    DriveCounters,
    F1State,
    F2State,
    QuoteData,
    UiMetadata,
    UiState,
    default_f1_snapshot,
)
from blind_quoter.persistence.csv_codec import CsvImport
from blind_quoter.pricing.f1_costs import reconcile_remote_split, resolve_dual_split
from blind_quoter.pricing.strategy import count_dual_pairs, count_motors, count_winders

QUOTE_ID_PREFIX = "RB"
_VERSION_RE = re.compile(r"-v(\d+)$")
_RESTORED_F1_KEYS = (
    "remote_1ch_qty",
    "remote_16ch_qty",
    "dual_combo_qty",
    "dual_slim_qty",
    "wifi_qty",
    "w_motor_qty",
)


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def capture_snapshots(
    quote: QuoteData,
    ui_state: UiState,
    *,
    owner_uid: str | None = None,
    now: datetime | None = None,
) -> QuoteData:
    """Return a copy of ``quote`` ready to be saved.

    Item-derived counts and the reconciled remote/dual split are baked into
    ``f1Snapshot``; all of F2 state is copied into ``f2Snapshot``.
    """

    items = quote.items
    f1 = ui_state.f1
    drive = ui_state.drive
    remote_1ch, remote_16ch = reconcile_remote_split(f1, drive.remote_count)
    dual_combo, dual_slim = resolve_dual_split(f1, count_dual_pairs(items))

    f1_snapshot = default_f1_snapshot()
    f1_snapshot.update(quote.f1_snapshot)
    f1_snapshot.update(
        {
            "winder_qty": count_winders(items),
            "motor_qty": count_motors(items),
            "charger_qty": drive.charger_count or 0,
            "cord_qty": drive.cord_count or 0,
            "remote_1ch_qty": remote_1ch,
            "remote_16ch_qty": remote_16ch,
            "dual_combo_qty": dual_combo,
            "dual_slim_qty": dual_slim,
            "discountPercentage": f1.discount_percentage,
            "wifi_qty": f1.wifi_qty or 0,
            "w_motor_qty": f1.w_motor_qty or 0,
        }
    )

    metadata = dict(quote.metadata)
    metadata["hasMotor"] = any(item.motor for item in items)

    return replace(
        quote,
        owner_uid=owner_uid if owner_uid is not None else quote.owner_uid,
        metadata=metadata,
        f1_snapshot=f1_snapshot,
        f2_snapshot=ui_state.f2.to_dict(),
        creation_date=(now or _now_utc()).isoformat(),
    )


def restore_ui_state(quote: QuoteData, drive: DriveCounters | None = None) -> UiState:
    """Rebuild panel state from the snapshots stored on a loaded quote.

    Drive counters are not part of the snapshot columns beyond charger and
    cord; the remote total is recovered from the saved split.
    """

    snapshot: Mapping[str, Any] = quote.f1_snapshot
    f1_raw = {key: snapshot.get(key) for key in _RESTORED_F1_KEYS}
    f1_raw["discountPercentage"] = snapshot.get("discountPercentage") or 0
    f1 = F1State.from_dict(f1_raw)

    if drive is None:
        drive = DriveCounters(
            remote_count=int((f1.remote_1ch_qty or 0) + (f1.remote_16ch_qty or 0)),
            charger_count=int(snapshot.get("charger_qty") or 0),
            cord_count=int(snapshot.get("cord_qty") or 0),
        )
    return UiState(f1=f1, f2=F2State.from_dict(quote.f2_snapshot), drive=drive)


def next_version_id(quote_id: str) -> str:
    """``RB202401011200`` -> ``RB202401011200-v2``; ``...-v3`` -> ``...-v4``."""

    match = _VERSION_RE.search(quote_id)
    if match is None:
        return f"{quote_id}-v2"
    return _VERSION_RE.sub(f"-v{int(match.group(1)) + 1}", quote_id)


def new_quote_id(now: datetime | None = None) -> str:
    return f"{QUOTE_ID_PREFIX}{(now or datetime.now()).strftime('%Y%m%d%H%M%S')}"


def save_as_correction(quote: QuoteData, ui_state: UiState, *, now: datetime | None = None) -> QuoteData:
    """Capture snapshots and bump the quote id to its next correction version."""

    captured = capture_snapshots(quote, ui_state, now=now)
    base_id = captured.quote_id or new_quote_id(now)
    return replace(captured, quote_id=next_version_id(base_id))


def apply_csv_import(imported: CsvImport, base: QuoteData | None = None) -> QuoteData:
    """Build a quote from CSV-imported data on top of a blank (or given) quote."""

    quote = (base or QuoteData()).with_items(imported.items)

    f1_snapshot = default_f1_snapshot()
    f1_snapshot.update(imported.f1_snapshot)
    f2_snapshot = dict(imported.f2_snapshot)

    f3 = imported.f3_data
    customer_fields = dict(quote.customer.to_dict())
    customer_fields.update({str(key): value for key, value in (f3.get("customer") or {}).items()})

    return replace(
        quote,
        ui_metadata=UiMetadata(lf_modified_row_indexes=tuple(imported.lf_indexes)),
        f1_snapshot=f1_snapshot,
        f2_snapshot=f2_snapshot,
        quote_id=f3.get("quoteId") or quote.quote_id,
        issue_date=f3.get("issueDate") or quote.issue_date,
        due_date=f3.get("dueDate") or quote.due_date,
        customer=Customer.from_dict(customer_fields),
    )


__all__ = [
    "QUOTE_ID_PREFIX",
    "capture_snapshots",
    "restore_ui_state",
    "next_version_id",
    "new_quote_id",
    "save_as_correction",
    "apply_csv_import",
]
