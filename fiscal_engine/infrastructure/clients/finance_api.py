"""Finance API HTTP client for fetching receivables, payables and automation rules"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

import httpx

from fiscal_engine.config import settings
from fiscal_engine.domain.exceptions import FinanceAPIError, InvalidRecordDataError
from fiscal_engine.domain.models import AutomationRule, FinancialRecord, RecordStatus
from fiscal_engine.utils.date_utils import parse_date, parse_timestamp

logger = logging.getLogger(__name__)

Filters = Optional[Dict[str, Any]]


def _decimal(value: Any, default: Optional[Decimal] = None) -> Optional[Decimal]:
    if value is None or value == "":
        return default
    amount = Decimal(str(value))
    if not amount.is_finite():
        raise ValueError(f"non-finite amount: {value}")
    return amount


def _required_decimal(value: Any) -> Decimal:
    amount = _decimal(value)
    if amount is None:
        raise ValueError("amount is required")
    return amount


def _optional_date(value: Any):
    return parse_date(value) if value else None


def _parse_record(data: Dict[str, Any], name_key: str, tax_id_key: str, number_key: str, date_key: str) -> FinancialRecord:
    try:
        return FinancialRecord(
            id=str(data["id"]),
            counterparty_name=data[name_key],
            counterparty_tax_id=data.get(tax_id_key),
            document_number=data.get(number_key),
            document_date=_optional_date(data.get(date_key)),
            due_date=parse_date(data["due_date"]),
            amount=_required_decimal(data["amount"]),
            amount_paid=_decimal(data.get("amount_paid"), Decimal("0")),
            status=RecordStatus(data.get("status") or RecordStatus.PENDING),
            payment_terms=data.get("payment_terms"),
            updated_at=parse_timestamp(data["updated_at"]) if data.get("updated_at") else None,
            category=data.get("category"),
        )
    except (KeyError, ValueError, TypeError, InvalidOperation) as e:
        raise InvalidRecordDataError(f"Invalid record {data.get('id', '?')}: {e}") from e


def parse_receivable(data: Dict[str, Any]) -> FinancialRecord:
    """Build a receivable from the API's customer/invoice field names"""
    return _parse_record(data, "customer_name", "customer_rfc", "invoice_number", "invoice_date")


def parse_payable(data: Dict[str, Any]) -> FinancialRecord:
    """Build a payable from the API's vendor/bill field names"""
    return _parse_record(data, "vendor_name", "vendor_rfc", "bill_number", "bill_date")


def parse_automation_rule(data: Dict[str, Any]) -> AutomationRule:
    try:
        return AutomationRule(
            id=str(data["id"]),
            name=data.get("name") or "",
            rule_type=data.get("rule_type"),
            is_active=bool(data.get("is_active", True)),
            customer_name=data.get("customer_name"),
            amount=_decimal(data.get("amount")),
            frequency=data.get("frequency"),
            start_date=_optional_date(data.get("start_date")),
            end_date=_optional_date(data.get("end_date")),
            next_generation_date=_optional_date(data.get("next_generation_date")),
            days_before_due=data.get("days_before_due"),
            reminder_type=data.get("reminder_type"),
        )
    except (KeyError, ValueError, TypeError, InvalidOperation) as e:
        raise InvalidRecordDataError(f"Invalid automation rule {data.get('id', '?')}: {e}") from e


class FinanceAPIClient:
    """Client for the persistence API that stores receivables, payables and rules"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.finance_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def _get_list(self, path: str, filters: Filters) -> List[Dict[str, Any]]:
        """
        GET a JSON array from the API.

        Raises:
            FinanceAPIError: On timeout, HTTP errors, or a non-array response
        """
        params = {k: v for k, v in (filters or {}).items() if v is not None}
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.get(f"{self.base_url}{path}", params=params)
                response.raise_for_status()
                data = response.json()
            except httpx.TimeoutException as e:
                raise FinanceAPIError(f"Finance API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise FinanceAPIError(f"Finance API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise FinanceAPIError(f"Finance API unreachable: {e}") from e
            except ValueError as e:
                raise FinanceAPIError(f"Invalid JSON from finance API: {e}") from e

        if not isinstance(data, list):
            raise FinanceAPIError(f"Expected a list from {path}, got {type(data).__name__}")

        logger.debug("Fetched records", extra={"path": path, "count": len(data)})
        return data

    async def fetch_receivables(self, filters: Filters = None) -> List[FinancialRecord]:
        """Fetch receivables; filters: status, customer, overdue"""
        data = await self._get_list("/api/receivables", filters)
        try:
            return [parse_receivable(item) for item in data]
        except InvalidRecordDataError as e:
            raise FinanceAPIError(f"Invalid receivable data from finance API: {e}") from e

    async def fetch_payables(self, filters: Filters = None) -> List[FinancialRecord]:
        """Fetch payables; filters: status, vendor, overdue"""
        data = await self._get_list("/api/payables", filters)
        try:
            return [parse_payable(item) for item in data]
        except InvalidRecordDataError as e:
            raise FinanceAPIError(f"Invalid payable data from finance API: {e}") from e

    async def fetch_automation_rules(self, filters: Filters = None) -> List[AutomationRule]:
        """Fetch automation rules; filters: rule_type, is_active"""
        data = await self._get_list("/api/automation", filters)
        try:
            return [parse_automation_rule(item) for item in data]
        except InvalidRecordDataError as e:
            raise FinanceAPIError(f"Invalid automation rule data from finance API: {e}") from e
