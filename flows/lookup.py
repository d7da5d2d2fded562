from typing import List, Optional

from prefect import flow, get_run_logger
from prefect.futures import wait

from models.errors import FetchError
from models.schemas import ResultSet, TransactionType
from tasks.api import get_master_object_data, resolve_master_objects
from tasks.transform import transform_records


@flow(name="Account_Transactions_Lookup")
def account_transactions_flow(
    account_id: str,
    from_date: str,
    to_date: str,
    transaction_type: str,
    statuses: Optional[List[str]] = None,
) -> List[ResultSet]:
    """
    Resolve the type tag to master objects, fetch them concurrently and shape the results.

    The batch is all-or-nothing: if any object fails, FetchError is raised and no
    result sets are returned.
    """
    logger = get_run_logger()
    tag = TransactionType(transaction_type).value
    statuses = sorted(statuses or [])
    logger.info(
        f"Starting lookup for account {account_id}: {tag} {from_date}..{to_date} statuses={statuses}"
    )

    try:
        object_names = resolve_master_objects(tag)
    except Exception as exc:
        logger.error(f"Error resolving objects for '{tag}': {exc}")
        raise FetchError(f"Could not resolve objects for '{tag}'") from exc

    futures = [
        get_master_object_data.submit(
            object_name=name,
            account_id=account_id,
            from_date=from_date,
            to_date=to_date,
            statuses=statuses,
            transaction_type=tag,
        )
        for name in object_names
    ]
    wait(futures)

    results = []
    failed = []
    for name, fut in zip(object_names, futures):
        try:
            results.append(fut.result())
        except Exception as exc:
            logger.error(f"Fetch failed for {name}: {exc}")
            failed.append((name, exc))

    if failed:
        names = ", ".join(name for name, _ in failed)
        raise FetchError(f"Error fetching transactions data for: {names}") from failed[0][1]

    result_sets = transform_records(results)
    logger.info(f"Lookup finished: {len(result_sets)} of {len(object_names)} objects have records")
    return result_sets


if __name__ == "__main__":
    import os
    from datetime import date

    from config import get_wizard_settings

    account_transactions_flow(
        account_id=os.environ["ACCOUNT_ID"],
        from_date=get_wizard_settings()["default_from_date"],
        to_date=date.today().isoformat(),
        transaction_type=os.environ.get("TRANSACTION_TYPE", TransactionType.ALL.value),
    )
