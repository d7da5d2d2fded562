import json
import os
from functools import lru_cache
from typing import Dict, List


@lru_cache
def get_salesforce_connection_params():
    """
    Return connection parameters for the CRM query service from environment variables.
    """
    return {
        "instance_url": os.environ["SALESFORCE_INSTANCE_URL"].rstrip("/"),
        "access_token": os.environ["SALESFORCE_ACCESS_TOKEN"],
        "api_path": os.environ.get(
            "ACCOUNT_TRANSACTIONS_API_PATH", "/services/apexrest/accountTransactions"
        ),
        "timeout": float(os.environ.get("SALESFORCE_TIMEOUT", "60")),
    }


@lru_cache
def get_wizard_settings():
    """
    Return form defaults and presentation settings for the lookup wizard.
    """
    return {
        "default_from_date": os.environ.get("TRANSACTIONS_DEFAULT_FROM_DATE", "2024-01-01"),
        "balance_fallback": os.environ.get("TRANSACTIONS_BALANCE_FALLBACK", "1,000"),
        "export_template": os.environ.get(
            "TRANSACTIONS_EXPORT_TEMPLATE", "AccountTransactionsPDF"
        ),
    }


@lru_cache
def load_transaction_type_objects() -> Dict[str, List[str]]:
    """
    Load the fixed object lists configured per transaction type tag
    (JSON object in TRANSACTION_TYPE_OBJECTS, e.g. {"Journals": ["Journal__c"]}).
    """
    raw = os.environ.get("TRANSACTION_TYPE_OBJECTS", "").strip()
    if not raw:
        return {}
    mapping = json.loads(raw)
    if not isinstance(mapping, dict):
        raise ValueError("TRANSACTION_TYPE_OBJECTS must be a JSON object")
    return {tag: list(names) for tag, names in mapping.items()}


def query_service_url(*parts: str) -> str:
    """
    Build a query service URL from the configured instance and API path.
    """
    params = get_salesforce_connection_params()
    base = f"{params['instance_url']}{params['api_path']}"
    return "/".join([base.rstrip("/")] + [p.strip("/") for p in parts])
