# gst_compliance/domain/services/purchase_reconciliation.py
"""
GSTR-2B status for purchases.

Purchases from a vendor with a GSTIN are treated as reported by the
supplier (``matched``); purchases from an unregistered vendor cannot
appear in 2B (``not_found``). Already matched purchases are left alone.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable

logger = logging.getLogger("purchase_reconciliation")

GSTR2B_PENDING = "pending"
GSTR2B_MATCHED = "matched"
GSTR2B_NOT_FOUND = "not_found"


@dataclass
class ReconciliationResult:
    matched: int = 0
    not_found: int = 0
    skipped: int = 0

    def to_dict(self) -> dict:
        return {
            "message": "Reconciliation complete",
            "matched": self.matched,
            "not_found": self.not_found,
            "skipped": self.skipped,
        }


def reconcile_purchases_2b(purchases: Iterable[Any], vendors: Iterable[Any]) -> ReconciliationResult:
    """Set ``gstr2b_status`` on each purchase in place."""
    by_id = {v.id: v for v in vendors}
    result = ReconciliationResult()

    for purchase in purchases:
        if purchase.gstr2b_status == GSTR2B_MATCHED:
            result.skipped += 1
            continue
        vendor = by_id.get(purchase.vendor_id)
        if vendor is not None and vendor.gstin:
            purchase.gstr2b_status = GSTR2B_MATCHED
            result.matched += 1
        else:
            purchase.gstr2b_status = GSTR2B_NOT_FOUND
            result.not_found += 1

    logger.info(
        "2B reconciliation: matched=%d not_found=%d skipped=%d",
        result.matched, result.not_found, result.skipped,
    )
    return result
