"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, Generic, List, Optional, TypeVar


class RecordStatus(str, Enum):
    PENDING = "pending"
    PARTIAL = "partial"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


CLOSED_STATUSES = frozenset({RecordStatus.PAID, RecordStatus.CANCELLED})


class RecordRole(str, Enum):
    RECEIVABLE = "receivable"
    PAYABLE = "payable"


class AgingBucketKey(str, Enum):
    CURRENT = "current"
    DAYS_1_30 = "days_1_30"
    DAYS_31_60 = "days_31_60"
    DAYS_61_90 = "days_61_90"
    DAYS_90_PLUS = "days_90_plus"


class ScheduleBucketKey(str, Enum):
    OVERDUE = "overdue"
    THIS_WEEK = "thisWeek"
    THIS_MONTH = "thisMonth"
    NEXT_MONTH = "nextMonth"
    FUTURE = "future"


class RuleType(str, Enum):
    RECURRING_INVOICE = "recurring_invoice"
    PAYMENT_REMINDER = "payment_reminder"
    OVERDUE_ALERT = "overdue_alert"


class Priority(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"


class AlertType(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


@dataclass
class FinancialRecord:
    """Receivable (invoice to a customer) or payable (bill from a vendor)"""

    id: str
    counterparty_name: str
    due_date: date
    amount: Decimal
    amount_paid: Decimal = Decimal("0")
    status: RecordStatus = RecordStatus.PENDING
    counterparty_tax_id: Optional[str] = None  # RFC
    document_number: Optional[str] = None
    document_date: Optional[date] = None
    payment_terms: Optional[int] = None
    updated_at: Optional[datetime] = None  # stands in for the paid date
    category: Optional[str] = None

    @property
    def outstanding(self) -> Decimal:
        return self.amount - self.amount_paid

    @property
    def is_open(self) -> bool:
        return self.status not in CLOSED_STATUSES


@dataclass
class AutomationRule:
    """Recurring invoice, payment reminder or overdue alert configuration"""

    id: str
    name: str
    rule_type: Optional[str]
    is_active: bool = True
    customer_name: Optional[str] = None
    amount: Optional[Decimal] = None
    frequency: Optional[str] = None  # daily | weekly | monthly | quarterly | yearly
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    next_generation_date: Optional[date] = None
    days_before_due: Optional[int] = None
    reminder_type: Optional[str] = None


@dataclass
class AgedItem:
    record: FinancialRecord
    outstanding: Decimal
    days_overdue: int


@dataclass
class ScheduledItem:
    record: FinancialRecord
    outstanding: Decimal
    days_until_due: int


ItemT = TypeVar("ItemT")


@dataclass
class Bucket(Generic[ItemT]):
    count: int = 0
    total: Decimal = Decimal("0")
    items: List[ItemT] = field(default_factory=list)

    def add(self, item: ItemT, amount: Decimal) -> None:
        self.count += 1
        self.total += amount
        self.items.append(item)


@dataclass
class AgingReport:
    buckets: Dict[AgingBucketKey, Bucket[AgedItem]]
    total_count: int
    total_outstanding: Decimal

    def __getitem__(self, key: AgingBucketKey) -> Bucket[AgedItem]:
        return self.buckets[key]


@dataclass
class PaymentSchedule:
    buckets: Dict[ScheduleBucketKey, Bucket[ScheduledItem]]
    total_count: int
    total_amount: Decimal

    def __getitem__(self, key: ScheduleBucketKey) -> Bucket[ScheduledItem]:
        return self.buckets[key]


@dataclass
class CollectionMetrics:
    total_invoiced: Decimal
    total_collected: Decimal
    total_outstanding: Decimal
    collection_rate: float
    paid_count: int
    overdue_count: int
    pending_count: int
    average_days_to_collect: int


@dataclass
class PaymentMetrics:
    total_billed: Decimal
    total_paid: Decimal
    total_outstanding: Decimal
    payment_rate: float
    paid_count: int
    overdue_count: int
    pending_count: int
    average_days_to_pay: int
    on_time_payment_rate: float


@dataclass
class VendorSummary:
    vendor_name: str
    vendor_tax_id: Optional[str]
    total_amount: Decimal = Decimal("0")
    paid_amount: Decimal = Decimal("0")
    outstanding_amount: Decimal = Decimal("0")
    payable_count: int = 0
    paid_count: int = 0
    overdue_count: int = 0


@dataclass
class CategorySummary:
    category: str
    count: int = 0
    total: Decimal = Decimal("0")
    outstanding: Decimal = Decimal("0")
    items: List[FinancialRecord] = field(default_factory=list)


@dataclass
class CashFlowPoint:
    """Single day of projected activity in a cash-flow forecast"""

    date: date
    inflow: Decimal
    outflow: Decimal
    net_flow: Decimal
    running_balance: Decimal


@dataclass
class ExpectedCashFlow:
    date: date
    amount: Decimal


@dataclass
class HealthIndicators:
    """Liquidity ratios and composite 0-100 health score"""

    dso: int
    dpo: int
    cash_conversion_cycle: int
    quick_ratio: float
    has_cash_crunch: bool
    worst_cash_position: Decimal
    cash_crunch_days: int
    health_score: int
    health_level: str  # excellent | good | fair | poor


@dataclass
class Alert:
    type: AlertType
    category: str  # receivables | payables | cashflow
    title: str
    message: str
    action: str
    count: Optional[int] = None


@dataclass
class AttentionItem:
    record: FinancialRecord
    priority: Priority
    reason: str
    days_until_due: int
    outstanding: Decimal


@dataclass
class AutomationMetrics:
    total_rules: int
    active_rules: int
    inactive_rules: int
    recurring_invoice_count: int
    payment_reminder_count: int
    overdue_alert_count: int
    rules_to_run_today: int
    automation_rate: float


@dataclass
class RuleValidation:
    is_valid: bool
    errors: List[str]


@dataclass
class FinancialSummary:
    """Everything the dashboard renders, computed against a single 'today'"""

    today: date
    receivables_metrics: CollectionMetrics
    payables_metrics: PaymentMetrics
    receivables_aging: AgingReport
    payables_aging: AgingReport
    payment_schedule: PaymentSchedule
    cash_flow_forecast: List[CashFlowPoint]
    health: HealthIndicators
    alerts: List[Alert]
    automation: AutomationMetrics
    rules_to_execute: List[AutomationRule]
    receivables_attention: List[AttentionItem] = field(default_factory=list)
    urgent_payables: List[AttentionItem] = field(default_factory=list)
    vendors: List[VendorSummary] = field(default_factory=list)
    payables_by_category: List[CategorySummary] = field(default_factory=list)
    expected_inflow: List[ExpectedCashFlow] = field(default_factory=list)
    expected_outflow: List[ExpectedCashFlow] = field(default_factory=list)
