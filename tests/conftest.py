import pytest
from prefect.testing.utilities import prefect_test_harness

from config import get_salesforce_connection_params, get_wizard_settings, load_transaction_type_objects

INSTANCE_URL = "https://example.my.salesforce.com"
API_BASE = f"{INSTANCE_URL}/services/apexrest/accountTransactions"


def _clear_config_cache():
    get_salesforce_connection_params.cache_clear()
    get_wizard_settings.cache_clear()
    load_transaction_type_objects.cache_clear()


@pytest.fixture(scope="session")
def prefect_harness():
    with prefect_test_harness():
        yield


@pytest.fixture(autouse=True)
def salesforce_env(monkeypatch):
    monkeypatch.setenv("SALESFORCE_INSTANCE_URL", INSTANCE_URL)
    monkeypatch.setenv("SALESFORCE_ACCESS_TOKEN", "token-123")
    monkeypatch.delenv("ACCOUNT_TRANSACTIONS_API_PATH", raising=False)
    monkeypatch.delenv("TRANSACTION_TYPE_OBJECTS", raising=False)
    monkeypatch.delenv("TRANSACTIONS_BALANCE_FALLBACK", raising=False)
    monkeypatch.delenv("TRANSACTIONS_DEFAULT_FROM_DATE", raising=False)
    monkeypatch.delenv("TRANSACTIONS_EXPORT_TEMPLATE", raising=False)
    _clear_config_cache()
    yield
    _clear_config_cache()


def invoice_payload(object_name="Invoice__c", records=None):
    if records is None:
        records = [
            {
                "attributes": {"type": object_name, "url": "/x"},
                "Id": "a01",
                "Name": "INV-0001",
                "Invoice_Date__c": "2024-03-05",
                "Status__c": "Posted",
                "Transaction_Currency__r": {
                    "attributes": {"type": "Currency__c"},
                    "ISO_Code__c": "GBP",
                },
                "Gross_Amount__c": 120.5,
            },
            {
                "attributes": {"type": object_name, "url": "/y"},
                "Id": "a02",
                "Name": "INV-0002",
                "Invoice_Date__c": "2024-04-11",
                "Status__c": "Draft",
                "Transaction_Currency__r": {
                    "attributes": {"type": "Currency__c"},
                    "ISO_Code__c": "EUR",
                },
                "Gross_Amount__c": 80,
            },
        ]
    return {
        "objectName": object_name,
        "displayLabel": object_name.replace("__c", "s"),
        "fieldNames": [
            "Id",
            "Name",
            "Invoice_Date__c",
            "Status__c",
            "Transaction_Currency__r.ISO_Code__c",
            "Gross_Amount__c",
        ],
        "records": records,
        "recordCount": len(records),
    }
