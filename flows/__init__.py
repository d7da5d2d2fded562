"""
Prefect flow definitions for the account transactions lookup and its wizard.
"""
from .lookup import account_transactions_flow
from .wizard import TransactionWizard

__all__ = ["account_transactions_flow", "TransactionWizard"]
