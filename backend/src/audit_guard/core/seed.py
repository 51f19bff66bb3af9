"""
Mock ERP ledger used to seed an audit session.

Amounts are whole IDR units.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import TypeAdapter, ValidationError

from .errors import SettingsError
from .models import Transaction

SEED_TRANSACTIONS: List[Dict[str, Any]] = [
    {
        "id": "TRX-001",
        "external_reference": "8f14e45f-ea3b-4c1a-9d2b-1f0c3a7e5b21",
        "title": "Client Entertainment - Jakarta",
        "description": "Dinner and karaoke with prospective vendor representatives. No attendee list attached.",
        "amount": 50_000_000,
        "category": "Entertainment",
        "date": "2024-05-12",
        "historical_average": 5_000_000,
        "materiality_threshold": 10_000_000,
    },
    {
        "id": "TRX-002",
        "external_reference": "c9f0f895-fb98-4b9e-8b2d-6a1d2e3f4a51",
        "title": "Office Stationery Restock",
        "description": "Quarterly paper, toner and stationery purchase from contracted supplier PT Sinar Abadi.",
        "amount": 4_250_000,
        "category": "Office Supplies",
        "date": "2024-05-14",
        "historical_average": 4_000_000,
        "materiality_threshold": 25_000_000,
    },
    {
        "id": "TRX-003",
        "external_reference": "45c48cce-2e2d-4fbd-a7a1-3c4d5e6f7a82",
        "title": "Consulting Fee - Advisory Services",
        "description": "Payment for general advisory services. Vendor not in approved vendor master.",
        "amount": 275_000_000,
        "category": "Professional Fees",
        "date": "2024-05-15",
        "historical_average": 60_000_000,
        "materiality_threshold": 100_000_000,
    },
    {
        "id": "TRX-004",
        "external_reference": "d3d94468-02a4-4e2b-9c3d-7e8f9a0b1c23",
        "title": "Server Rack Maintenance",
        "description": "Annual maintenance contract for data center racks, PO-2024-0117.",
        "amount": 38_500_000,
        "category": "IT Infrastructure",
        "date": "2024-05-16",
        "historical_average": 40_000_000,
        "materiality_threshold": 75_000_000,
    },
    {
        "id": "TRX-005",
        "external_reference": "6512bd43-d9ca-4d8e-b1f2-0a9b8c7d6e54",
        "title": "Team Offsite Catering",
        "description": "Catering for 40 staff during strategic planning offsite in Bandung.",
        "amount": 12_800_000,
        "category": "Entertainment",
        "date": "2024-05-18",
        "historical_average": 5_000_000,
        "materiality_threshold": 10_000_000,
    },
    {
        "id": "TRX-006",
        "external_reference": "c20ad4d7-6fe9-4759-aa27-0c0e1f2a3b65",
        "title": "Misc. Reimbursement",
        "description": "Cash reimbursement, various.",
        "amount": 9_900_000,
        "category": "Travel",
        "date": "2024-05-20",
        "historical_average": 3_500_000,
        "materiality_threshold": 10_000_000,
    },
]

_TRANSACTION_LIST = TypeAdapter(List[Transaction])


def load_seed_transactions(path: Optional[Path] = None) -> List[Transaction]:
    """
    Load seed transactions.

    Args:
        path: JSON file holding an array of transaction objects. The built-in
            mock ledger is used when omitted.

    Raises:
        SettingsError: file missing or not a valid transaction list
    """
    if path is None:
        return _TRANSACTION_LIST.validate_python(SEED_TRANSACTIONS)

    path = Path(path)
    if not path.exists():
        raise SettingsError(f"seed file not found: {path}")

    try:
        with path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
        return _TRANSACTION_LIST.validate_python(raw)
    except (ValueError, ValidationError) as exc:
        raise SettingsError(f"invalid seed file {path}: {exc}") from exc


__all__ = ["SEED_TRANSACTIONS", "load_seed_transactions"]
