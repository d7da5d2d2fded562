"""
Field-key classification into ordered table columns.

Exclusions run first, then each remaining key is labelled by the first
matching rule in LABEL_RULES. Columns are emitted grouped by COLUMN_ORDER,
with unranked columns appended in encounter order.
"""
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

from models.schemas import ColumnSpec
from utils.flatten import METADATA_KEY

ID_KEY = "id"
NAME_KEY = "name"

DATE_DISPLAY_FORMAT = {"day": "numeric", "month": "short", "year": "numeric"}

COLUMN_ORDER = (
    "name",
    "date",
    "due",
    "transaction-number",
    "account",
    "currency",
    "reference",
    "status",
    "type",
    "gross",
    "outstanding",
    "paid",
)

UNRANKED = "other"


def _has(*words: str) -> Callable[[str], bool]:
    return lambda key: all(word in key for word in words)


def _has_any(*words: str) -> Callable[[str], bool]:
    return lambda key: any(word in key for word in words)


@dataclass(frozen=True)
class LabelRule:
    matches: Callable[[str], bool]
    label: str
    group: str
    value_type: str = "text"
    wrap_text: bool = True

    def group_for(self, key: str) -> str:
        return self.group


@dataclass(frozen=True)
class DateRule(LabelRule):
    value_type: str = "date"

    def group_for(self, key: str) -> str:
        # "due" keys without "date" sort in their own group
        if self.group == "date" and "date" not in key:
            return "due"
        return self.group


LABEL_RULES: List[LabelRule] = [
    DateRule(_has_any("date", "due"), "Date", "date"),
    LabelRule(lambda key: key == NAME_KEY, "Name", "name", wrap_text=False),
    LabelRule(_has("reference"), "Customer Reference", "reference"),
    LabelRule(_has("status"), "Status", "status"),
    LabelRule(_has("currency", "iso"), "Currency", "currency"),
    LabelRule(_has("nature", "transaction"), "Type", "type"),
    LabelRule(_has("outstanding"), "Outstanding", "outstanding"),
    # shadowed while the first rule also matches "due"
    DateRule(_has("due"), "Overdue Date", "due"),
    LabelRule(_has("paid"), "Paid Amount", "paid"),
    LabelRule(_has_any("gross", "amount"), "Gross Amount", "gross"),
    LabelRule(_has("account"), "Account", "account"),
    LabelRule(_has("transaction", "number"), "Invoice Number", "transaction-number"),
]


def _dropped_by_key(key: str) -> bool:
    if key in (METADATA_KEY, ID_KEY):
        return True
    if "currency" in key and "iso" not in key:
        return True
    if "account" in key and "name" not in key:
        return True
    return False


def is_excluded(key: str, keys: Iterable[str]) -> bool:
    """
    Apply the exclusion rules to one key, given every key of the result set.

    "name" is only dropped in favour of a reference column that survives the
    other exclusions.
    """
    if _dropped_by_key(key):
        return True
    if key == NAME_KEY:
        return any(
            "reference" in other and not _dropped_by_key(other)
            for other in keys
            if other != key
        )
    return False


def match_rule(key: str) -> Optional[LabelRule]:
    for rule in LABEL_RULES:
        if rule.matches(key):
            return rule
    return None


def classify_field(key: str) -> ColumnSpec:
    """
    Build the ColumnSpec for a single retained key.
    """
    rule = match_rule(key)
    if rule is None:
        return ColumnSpec(label=key, field_key=key)
    is_date = rule.value_type == "date"
    return ColumnSpec(
        label=rule.label,
        field_key=key,
        value_type=rule.value_type,
        wrap_text=rule.wrap_text,
        date_display_format=dict(DATE_DISPLAY_FORMAT) if is_date else None,
        order_rank=rule.group_for(key),
    )


def classify_columns(field_keys: Iterable[str]) -> List[ColumnSpec]:
    """
    Turn a result set's field keys into its ordered column list.
    """
    keys: List[str] = list(dict.fromkeys(field_keys))
    retained = [key for key in keys if not is_excluded(key, keys)]
    columns = [classify_field(key) for key in retained]

    rank: Dict[str, int] = {group: i for i, group in enumerate(COLUMN_ORDER)}
    ranked = sorted(
        (c for c in columns if c.order_rank in rank),
        key=lambda c: rank[c.order_rank],
    )
    unranked = [c for c in columns if c.order_rank not in rank]
    return ranked + unranked
