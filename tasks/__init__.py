"""
Prefect task definitions for query service calls and result shaping.
"""
from .api import get_account_balance, get_master_object_data, resolve_master_objects
from .transform import build_result_set, result_set_frame, transform_records

__all__ = [
    "build_result_set",
    "get_account_balance",
    "get_master_object_data",
    "resolve_master_objects",
    "result_set_frame",
    "transform_records",
]
