from typing import Any, Dict, Iterable, List, Mapping

METADATA_KEY = "attributes"
SEPARATOR = "_"


def normalize_field_key(field_path: str) -> str:
    """
    Map a dotted field path (e.g. "Account__r.Name") to its flattened key.
    """
    return field_path.replace(".", SEPARATOR).lower()


def flatten_record(record: Mapping[str, Any], prefix: str = "") -> Dict[str, Any]:
    """
    Flatten a nested record depth-first into lower-cased, "_"-joined keys.

    The metadata key is skipped at every level. Lists are kept as opaque values.
    """
    flat: Dict[str, Any] = {}
    for key, value in record.items():
        if key == METADATA_KEY:
            continue
        flat_key = f"{prefix}{SEPARATOR}{key}".lower() if prefix else key.lower()
        if isinstance(value, Mapping):
            flat.update(flatten_record(value, flat_key))
        else:
            flat[flat_key] = value
    return flat


def collect_field_keys(records: Iterable[Mapping[str, Any]]) -> List[str]:
    """
    Return the union of record keys in first-encounter order.
    """
    seen: Dict[str, None] = {}
    for record in records:
        for key in record:
            seen.setdefault(key, None)
    return list(seen)
