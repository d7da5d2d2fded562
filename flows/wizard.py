"""
Account transactions lookup wizard.

A single WizardState value drives the screens:

    FORM_ENTRY --next()--> RESULTS_VIEW --export()--> EXPORT_VIEW

The wizard is closed externally with close(). Validation failures keep the
wizard in FORM_ENTRY without calling the query service; fetch failures are
reported as notifications and leave RESULTS_VIEW without result sets.
"""
from datetime import date, datetime
from typing import Callable, Dict, List, Optional, Set, Union
from urllib.parse import urlencode

from prefect.logging import get_logger

from config import get_salesforce_connection_params, get_wizard_settings
from flows.lookup import account_transactions_flow
from models.errors import FetchError, InvalidTransitionError, ValidationError
from models.schemas import (
    STATUS_OPTIONS,
    Notification,
    ResultSet,
    TransactionQuery,
    TransactionType,
    WizardState,
)
from tasks.api import get_account_balance

logger = get_logger(__name__)

REQUIRED_FIELDS_MESSAGE = "Please fill all required fields"
DATE_ORDER_MESSAGE = "From Date should be less than or equal to To Date"

TRANSITIONS: Dict[WizardState, Set[WizardState]] = {
    WizardState.FORM_ENTRY: {WizardState.RESULTS_VIEW},
    WizardState.RESULTS_VIEW: {WizardState.EXPORT_VIEW},
    WizardState.EXPORT_VIEW: set(),
}

DateInput = Union[str, date, None]


def _parse_date(value: DateInput, label: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{label} must be a date in YYYY-MM-DD format")


class TransactionWizard:
    def __init__(
        self,
        account_id: str,
        lookup: Optional[Callable[..., List[ResultSet]]] = None,
        balance_lookup: Optional[Callable[[str], str]] = None,
        today: Optional[date] = None,
    ):
        settings = get_wizard_settings()
        self.account_id = account_id
        self.from_date: DateInput = settings["default_from_date"]
        self.to_date: DateInput = (today or date.today()).isoformat()
        self.transaction_type: str = ""
        self.statuses: List[str] = []
        self.balance_outstanding = "0"

        self.state = WizardState.FORM_ENTRY
        self.is_loading = False
        self.closed = False
        self.error: Optional[str] = None
        self.result_sets: List[ResultSet] = []
        self.notifications: List[Notification] = []

        self._lookup = lookup or account_transactions_flow
        self._balance_lookup = balance_lookup or get_account_balance

    def notify(self, title: str, message: str, variant: str = "info") -> Notification:
        notification = Notification(title=title, message=message, variant=variant)
        self.notifications.append(notification)
        return notification

    def _transition(self, target: WizardState) -> None:
        if target not in TRANSITIONS[self.state]:
            raise InvalidTransitionError(f"Cannot move from {self.state.value} to {target.value}")
        logger.debug(f"Wizard {self.account_id}: {self.state.value} -> {target.value}")
        self.state = target

    def load_account_summary(self) -> str:
        """
        Load the outstanding balance shown on the form; the lookup falls back on failure.
        """
        self.is_loading = True
        try:
            self.balance_outstanding = self._balance_lookup(self.account_id)
        finally:
            self.is_loading = False
        return self.balance_outstanding

    def validate(self) -> TransactionQuery:
        """
        Check the form input and build the query, raising ValidationError when it is unusable.
        """
        if not self.from_date or not self.to_date or not self.transaction_type:
            raise ValidationError(REQUIRED_FIELDS_MESSAGE)
        from_date = _parse_date(self.from_date, "From Date")
        to_date = _parse_date(self.to_date, "To Date")
        if from_date > to_date:
            raise ValidationError(DATE_ORDER_MESSAGE)
        try:
            transaction_type = TransactionType(self.transaction_type)
        except ValueError:
            raise ValidationError(f"Unknown transaction type: {self.transaction_type}")
        unknown = [s for s in self.statuses if s not in STATUS_OPTIONS]
        if unknown:
            raise ValidationError(f"Unknown status: {', '.join(unknown)}")
        return TransactionQuery(
            account_id=self.account_id,
            from_date=from_date,
            to_date=to_date,
            transaction_type=transaction_type,
            statuses=list(self.statuses),
        )

    def next(self) -> bool:
        """
        Validate the form, move to the results view and run the lookup.

        Returns True when result sets were loaded.
        """
        if self.is_loading:
            logger.info(f"Lookup for {self.account_id} already running, ignoring submit")
            return False
        try:
            query = self.validate()
        except ValidationError as exc:
            self.error = str(exc)
            self.notify("Error", self.error, "error")
            return False

        self.error = None
        self._transition(WizardState.RESULTS_VIEW)
        self.result_sets = []
        self.is_loading = True
        try:
            self.result_sets = self._lookup(
                account_id=query.account_id,
                from_date=query.from_date.isoformat(),
                to_date=query.to_date.isoformat(),
                transaction_type=query.transaction_type.value,
                statuses=list(query.statuses),
            )
        except FetchError as exc:
            logger.error(f"Error fetching transactions for {self.account_id}: {exc}")
            self.notify("Error", str(exc), "error")
            return False
        finally:
            self.is_loading = False
        return True

    def result_set(self, object_name: str) -> ResultSet:
        for result_set in self.result_sets:
            if result_set.object_name == object_name:
                return result_set
        raise KeyError(object_name)

    def search(self, object_name: str, term: str) -> ResultSet:
        """
        Filter one object's table; other tables keep their own search state.
        """
        result_set = self.result_set(object_name)
        result_set.apply_search(term)
        return result_set

    def export_url(self) -> str:
        conn = get_salesforce_connection_params()
        template = get_wizard_settings()["export_template"]
        return f"{conn['instance_url']}/apex/{template}?{urlencode({'id': self.account_id})}"

    def export(self) -> str:
        """
        Switch to the export view and return the document URL to open.
        """
        self._transition(WizardState.EXPORT_VIEW)
        return self.export_url()

    def close(self) -> None:
        self.closed = True
