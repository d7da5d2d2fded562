import pytest

from utils.columns import DATE_DISPLAY_FORMAT, classify_columns, classify_field, is_excluded
from utils.flatten import normalize_field_key


def labels(columns):
    return [c.label for c in columns]


def test_reference_example():
    keys = [normalize_field_key(f) for f in ["Id", "Name", "Transaction_Currency__r.ISO_Code__c", "Status__c"]]
    assert labels(classify_columns(keys)) == ["Name", "Currency", "Status"]


def test_empty_input():
    assert classify_columns([]) == []


def test_deterministic():
    keys = ["status__c", "name", "invoice_date__c", "gross_amount__c", "memo__c", "paid_amount__c"]
    assert classify_columns(keys) == classify_columns(list(keys))


@pytest.mark.parametrize(
    "key",
    ["attributes", "id", "currency__c", "transaction_currency__c", "account__c", "account__r_id"],
)
def test_exclusions(key):
    assert is_excluded(key, [key])
    assert classify_columns([key]) == []


def test_name_dropped_when_reference_present():
    columns = classify_columns(["name", "customer_reference__c"])
    assert labels(columns) == ["Customer Reference"]
    assert labels(classify_columns(["name"])) == ["Name"]


def test_currency_iso_and_account_name_kept():
    assert not is_excluded("currency_iso_code__c", ["currency_iso_code__c"])
    assert not is_excluded("account__r_name", ["account__r_name"])


@pytest.mark.parametrize(
    "key, label, rank",
    [
        ("invoice_date__c", "Date", "date"),
        ("due_on__c", "Date", "due"),
        ("name", "Name", "name"),
        ("customer_reference__c", "Customer Reference", "reference"),
        ("status__c", "Status", "status"),
        ("currency_iso_code__c", "Currency", "currency"),
        ("nature_of_transaction__c", "Type", "type"),
        ("outstanding_amount__c", "Outstanding", "outstanding"),
        ("paid_total__c", "Paid Amount", "paid"),
        ("gross_value__c", "Gross Amount", "gross"),
        ("net_amount__c", "Gross Amount", "gross"),
        ("account__r_name", "Account", "account"),
        ("transaction_number__c", "Invoice Number", "transaction-number"),
        ("memo__c", "memo__c", "other"),
    ],
)
def test_label_rules(key, label, rank):
    column = classify_field(key)
    assert column.label == label
    assert column.field_key == key
    assert column.order_rank == rank


def test_date_rule_wins_over_later_rules():
    # "outstanding" and "due" both present: the date rule is checked first
    column = classify_field("outstanding_due_date__c")
    assert column.label == "Date"
    assert column.value_type == "date"
    assert column.date_display_format == DATE_DISPLAY_FORMAT


def test_name_column_does_not_wrap():
    column = classify_field("name")
    assert column.wrap_text is False
    assert column.value_type == "text"
    assert column.date_display_format is None


def test_group_ordering_and_unranked_tail():
    keys = [
        "memo__c",
        "paid_amount__c",
        "status__c",
        "gross_amount__c",
        "due_on__c",
        "name",
        "notes__c",
        "invoice_date__c",
        "transaction_number__c",
        "account__r_name",
        "currency_iso_code__c",
        "outstanding_amount__c",
        "nature_of_transaction__c",
    ]
    assert [c.field_key for c in classify_columns(keys)] == [
        "name",
        "invoice_date__c",
        "due_on__c",
        "transaction_number__c",
        "account__r_name",
        "currency_iso_code__c",
        "status__c",
        "nature_of_transaction__c",
        "gross_amount__c",
        "outstanding_amount__c",
        "paid_amount__c",
        "memo__c",
        "notes__c",
    ]


def test_same_group_keeps_encounter_order():
    columns = classify_columns(["posted_date__c", "invoice_date__c"])
    assert [c.field_key for c in columns] == ["posted_date__c", "invoice_date__c"]


@pytest.mark.parametrize("reference_key", ["account_reference__c", "currency_reference__c"])
def test_name_kept_when_reference_column_is_excluded(reference_key):
    columns = classify_columns(["name", reference_key, "status__c"])
    assert labels(columns) == ["Name", "Status"]


def test_name_dropped_for_retained_reference_column():
    columns = classify_columns(["name", "account_reference__c", "customer_reference__c"])
    assert labels(columns) == ["Customer Reference"]
