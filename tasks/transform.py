from typing import List, Optional

import pandas as pd
from prefect import get_run_logger, task
from prefect.cache_policies import NO_CACHE

from models.schemas import ColumnSpec, MasterObjectResult, ResultSet
from utils.columns import classify_columns
from utils.flatten import collect_field_keys, flatten_record, normalize_field_key


def build_result_set(result: MasterObjectResult) -> Optional[ResultSet]:
    """
    Flatten a query service result and classify its columns; None when it has no records.
    """
    if not result.records:
        return None
    records = [flatten_record(rec) for rec in result.records]
    field_keys = collect_field_keys(records)
    # declared fields with no value in any record still get a column
    for name in result.field_names:
        key = normalize_field_key(name)
        if key not in field_keys:
            field_keys.append(key)
    return ResultSet(
        object_name=result.object_name,
        display_label=result.display_label,
        columns=classify_columns(field_keys),
        all_records=records,
    )


@task(cache_policy=NO_CACHE)
def transform_records(results: List[MasterObjectResult]) -> List[ResultSet]:
    """
    Shape every non-empty fetch result into a ResultSet.
    """
    logger = get_run_logger()
    result_sets: List[ResultSet] = []
    for result in results:
        result_set = build_result_set(result)
        if result_set is None:
            logger.info(f"{result.object_name}: no records, skipped")
            continue
        result_sets.append(result_set)
    return result_sets


def _format_date(value, fmt: dict) -> str:
    ts = pd.to_datetime(value, errors="coerce")
    if pd.isna(ts):
        return "" if value is None else str(value)
    parts = []
    if fmt.get("day") == "numeric":
        parts.append(str(ts.day))
    if fmt.get("month") == "short":
        parts.append(ts.strftime("%b"))
    if fmt.get("year") == "numeric":
        parts.append(str(ts.year))
    return " ".join(parts)


def _column_values(column: ColumnSpec, records) -> List:
    values = [rec.get(column.field_key) for rec in records]
    if column.value_type == "date" and column.date_display_format:
        return [_format_date(v, column.date_display_format) for v in values]
    return values


def result_set_frame(result_set: ResultSet) -> pd.DataFrame:
    """
    Tabular view of a ResultSet's filtered records: column labels as headers, dates formatted.
    """
    data = {}
    for column in result_set.columns:
        label = column.label
        # duplicate labels (e.g. two date fields) fall back to the field key
        if label in data:
            label = column.field_key
        data[label] = _column_values(column, result_set.filtered_records)
    return pd.DataFrame(data, index=range(len(result_set.filtered_records)))
