from typing import Any, Callable, Dict, List, Optional

import requests
from prefect import get_run_logger, task
from prefect.cache_policies import NO_CACHE

from config import (
    get_salesforce_connection_params,
    get_wizard_settings,
    load_transaction_type_objects,
    query_service_url,
)
from models.schemas import MasterObjectResult, TransactionType
from utils.http import auth_headers, http_get, http_post


def fetch_master_objects(transaction_type: Optional[str] = None) -> List[str]:
    """
    List the master object names known to the query service, optionally for one type tag.
    """
    conn = get_salesforce_connection_params()
    params: Dict[str, Any] = {}
    if transaction_type:
        params["transactionType"] = transaction_type
    names = http_get(
        query_service_url("masterObjects"),
        headers=auth_headers(conn["access_token"]),
        params=params,
        timeout=conn["timeout"],
    )
    return [str(name) for name in names or []]


def _all_objects(transaction_type: TransactionType) -> List[str]:
    return fetch_master_objects()


def _typed_objects(transaction_type: TransactionType) -> List[str]:
    configured = load_transaction_type_objects().get(transaction_type.value)
    if configured:
        return list(configured)
    return fetch_master_objects(transaction_type.value)


TYPE_RESOLVERS: Dict[TransactionType, Callable[[TransactionType], List[str]]] = {
    TransactionType.ALL: _all_objects,
    TransactionType.OUTSTANDING: _typed_objects,
    TransactionType.OVERDUE: _typed_objects,
    TransactionType.PAID_INVOICE: _typed_objects,
    TransactionType.CREDIT_NOTES: _typed_objects,
    TransactionType.RECEIPT_AND_PAYMENT: _typed_objects,
    TransactionType.JOURNALS: _typed_objects,
}

_unresolved = set(TransactionType) - set(TYPE_RESOLVERS)
if _unresolved:
    raise RuntimeError(f"No object resolver for transaction types: {sorted(_unresolved)}")


@task(cache_policy=NO_CACHE)
def resolve_master_objects(transaction_type: str) -> List[str]:
    """
    Resolve a transaction type tag to the master objects to query.
    """
    logger = get_run_logger()
    tag = TransactionType(transaction_type)
    names = TYPE_RESOLVERS[tag](tag)
    logger.info(f"Transaction type '{tag.value}' resolved to {len(names)} objects: {names}")
    return names


@task(cache_policy=NO_CACHE)
def get_master_object_data(
    object_name: str,
    account_id: str,
    from_date: str,
    to_date: str,
    statuses: List[str],
    transaction_type: str,
) -> MasterObjectResult:
    """
    Fetch one master object's records for the account and filters.
    """
    logger = get_run_logger()
    conn = get_salesforce_connection_params()
    payload = {
        "objectName": object_name,
        "accountId": account_id,
        "fromDate": from_date,
        "toDate": to_date,
        "statuses": list(statuses),
        "transactionType": transaction_type,
    }
    logger.info(f"Fetching {object_name} for account {account_id} ({from_date} to {to_date})")
    body = http_post(
        query_service_url("masterObjectData"),
        payload,
        headers=auth_headers(conn["access_token"]),
        timeout=conn["timeout"],
    )
    result = MasterObjectResult.from_payload(body)
    logger.info(f"{object_name}: {result.record_count} records")
    return result


@task(cache_policy=NO_CACHE)
def get_account_balance(account_id: str) -> str:
    """
    Fetch the account's outstanding balance, falling back to a placeholder on failure.
    """
    logger = get_run_logger()
    conn = get_salesforce_connection_params()
    fallback = get_wizard_settings()["balance_fallback"]
    try:
        body = http_get(
            query_service_url("accounts", account_id),
            headers=auth_headers(conn["access_token"]),
            timeout=conn["timeout"],
        )
        return str(body["balanceOutstanding"])
    except (requests.RequestException, KeyError, TypeError, ValueError) as exc:
        logger.warning(f"Error fetching balance for account {account_id}: {exc}; using {fallback}")
        return fallback
