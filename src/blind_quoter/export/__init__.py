"""Export views: manufacturing sizes, ordering and spreadsheet output."""

from blind_quoter.export.dimensions import manufacturing_dimensions, manufacturing_height, manufacturing_width
from blind_quoter.export.preparation import (
    ExportData,
    ExportItem,
    get_export_data,
    get_work_order_data,
    sort_for_export,
    sort_for_work_order,
)

__all__ = [
    "ExportData",
    "ExportItem",
    "get_export_data",
    "get_work_order_data",
    "manufacturing_dimensions",
    "manufacturing_height",
    "manufacturing_width",
    "sort_for_export",
    "sort_for_work_order",
]
