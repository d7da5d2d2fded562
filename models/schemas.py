from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional

from utils.search import search_records

RawRecord = Dict[str, Any]
FlatRecord = Dict[str, Any]


class TransactionType(str, Enum):
    ALL = "All"
    OUTSTANDING = "Outstanding"
    OVERDUE = "Overdue"
    PAID_INVOICE = "Paid Invoice"
    CREDIT_NOTES = "Credit Notes"
    RECEIPT_AND_PAYMENT = "Receipt & Payment"
    JOURNALS = "Journals"


STATUS_OPTIONS = ("Draft", "Posted")


class WizardState(str, Enum):
    FORM_ENTRY = "form_entry"
    RESULTS_VIEW = "results_view"
    EXPORT_VIEW = "export_view"


@dataclass(frozen=True)
class ColumnSpec:
    label: str
    field_key: str
    value_type: str = "text"
    sortable: bool = True
    wrap_text: bool = True
    date_display_format: Optional[Dict[str, str]] = None
    order_rank: str = "other"


@dataclass(frozen=True)
class MasterObjectResult:
    object_name: str
    display_label: str
    field_names: List[str]
    records: List[RawRecord]
    record_count: int

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "MasterObjectResult":
        """
        Parse a query service response body.
        """
        records = payload.get("records") or []
        return cls(
            object_name=payload["objectName"],
            display_label=payload.get("displayLabel") or payload["objectName"],
            field_names=list(payload.get("fieldNames") or []),
            records=list(records),
            record_count=int(payload.get("recordCount", len(records))),
        )


@dataclass(frozen=True)
class TransactionQuery:
    account_id: str
    from_date: date
    to_date: date
    transaction_type: TransactionType
    statuses: List[str] = field(default_factory=list)


@dataclass
class ResultSet:
    object_name: str
    display_label: str
    columns: List[ColumnSpec]
    all_records: List[FlatRecord]
    filtered_records: List[FlatRecord] = field(default_factory=list, init=False)
    search_term: str = ""

    def __post_init__(self):
        self.apply_search(self.search_term)

    @property
    def record_count(self) -> int:
        return len(self.all_records)

    @property
    def has_records(self) -> bool:
        return bool(self.filtered_records)

    def apply_search(self, term: Optional[str]) -> List[FlatRecord]:
        """
        Filter this table by search term; all_records is left untouched.
        """
        self.search_term = term or ""
        self.filtered_records = search_records(self.search_term, self.all_records)
        return self.filtered_records


@dataclass(frozen=True)
class Notification:
    title: str
    message: str
    variant: str = "info"
