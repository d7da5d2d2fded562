from typing import Any, Dict, List, Sequence


def search_records(term: str, records: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Return the records where any non-null field contains term (case-insensitive).
    """
    if not (term or "").strip():
        return list(records)
    return [
        record
        for record in records
        if any(
            term.lower() in str(value).lower()
            for value in record.values()
            if value is not None
        )
    ]
