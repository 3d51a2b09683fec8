"""Manufacturing size corrections applied before a blind is cut."""
from __future__ import annotations

from typing import Sequence

from blind_quoter.constants import DROP_CUT_ALLOWANCE, WIDTH_DEDUCTIONS
from blind_quoter.domain_models import Item


def manufacturing_width(width: int | None, oi: str | None) -> int | None:
    """Deduct the bracket clearance for recess (``IN``) and face-fix (``OUT``) mounts."""

    if width is None:
        return None
    return width - WIDTH_DEDUCTIONS.get(oi or "", 0)


def manufacturing_height(height: int | None, drops: Sequence[int]) -> int | None:
    """Expand ``height`` to the largest cuttable size of its drop tier.

    The tier is the smallest drop ``>= height``.  An exact fit, a height past
    the last drop, or an empty drop list leaves the height unchanged.
    """

    if height is None:
        return None
    next_drop = next((drop for drop in drops if drop >= height), None)
    if next_drop is None or next_drop == height:
        return height
    return next_drop - DROP_CUT_ALLOWANCE


def manufacturing_dimensions(item: Item, drops: Sequence[int]) -> tuple[int | None, int | None]:
    return manufacturing_width(item.width, item.oi), manufacturing_height(item.height, drops)


__all__ = ["manufacturing_width", "manufacturing_height", "manufacturing_dimensions"]
