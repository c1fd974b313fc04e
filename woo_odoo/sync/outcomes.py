# woo_odoo/sync/outcomes.py
# Result values returned by the resolvers and the importer. Leaf steps only
# report what happened; the importer/run decide what to log and how to count.
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ResolutionStatus(str, Enum):
    FOUND = "found"
    CREATED = "created"
    FAILED_REMOTE = "failed_remote"


@dataclass
class Resolution:
    status: ResolutionStatus
    key: str                              # natural key searched on (email / default_code)
    record_id: Optional[int] = None
    notes: List[str] = field(default_factory=list)   # substitutions applied

    @property
    def ok(self) -> bool:
        return self.record_id is not None


class OrderStatus(str, Enum):
    CREATED = "created"
    ALREADY_IMPORTED = "already_imported"
    CUSTOMER_FAILED = "customer_failed"
    NO_LINE_ITEMS = "no_line_items"
    NO_VALID_LINES = "no_valid_lines"
    CREATE_FAILED = "create_failed"
    ERROR = "error"


SUCCESS_STATUSES = {OrderStatus.CREATED, OrderStatus.ALREADY_IMPORTED}


@dataclass
class LineOutcome:
    name: str
    product: Resolution
    quantity: float
    price: float
    notes: List[str] = field(default_factory=list)

    @property
    def kept(self) -> bool:
        return self.product.ok


@dataclass
class OrderOutcome:
    order_id: Any
    origin: str
    status: OrderStatus
    odoo_id: Optional[int] = None
    customer: Optional[Resolution] = None
    lines: List[LineOutcome] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status in SUCCESS_STATUSES

    @property
    def failed_entities(self) -> int:
        n = sum(1 for line in self.lines if not line.kept)
        if self.customer is not None and not self.customer.ok:
            n += 1
        return n


@dataclass
class SyncRunResult:
    total: int = 0
    processed: int = 0
    created: int = 0
    already_imported: int = 0
    failed_entities: int = 0
    errors: int = 0
    outcomes: List[OrderOutcome] = field(default_factory=list)

    def record(self, outcome: OrderOutcome) -> None:
        self.outcomes.append(outcome)
        self.failed_entities += outcome.failed_entities
        if outcome.succeeded:
            self.processed += 1
            if outcome.status == OrderStatus.CREATED:
                self.created += 1
            else:
                self.already_imported += 1
        else:
            self.errors += 1

    def as_dict(self) -> Dict[str, Any]:
        return {
            "status": "completed",
            "total": self.total,
            "processed": self.processed,
            "errors": self.errors,
            "created": self.created,
            "already_imported": self.already_imported,
            "failed_entities": self.failed_entities,
        }
