"""Automation rule scheduling, validation and status metrics"""

from datetime import date, timedelta
from typing import Callable, Dict, List

from dateutil.relativedelta import relativedelta

from fiscal_engine.domain.exceptions import InvalidFrequencyError
from fiscal_engine.domain.models import AutomationMetrics, AutomationRule, RuleType, RuleValidation

# relativedelta clamps month arithmetic to the last valid day (Jan 31 + 1 month = Feb 28/29)
FREQUENCY_STEPS: Dict[str, Callable[[date], date]] = {
    "daily": lambda d: d + timedelta(days=1),
    "weekly": lambda d: d + timedelta(days=7),
    "monthly": lambda d: d + relativedelta(months=1),
    "quarterly": lambda d: d + relativedelta(months=3),
    "yearly": lambda d: d + relativedelta(years=1),
}


def calculate_next_generation_date(last_date: date, frequency: str) -> date:
    """
    Next run date of a recurring rule.

    Raises:
        InvalidFrequencyError: frequency is not daily, weekly, monthly, quarterly or yearly
    """
    step = FREQUENCY_STEPS.get(frequency)
    if step is None:
        raise InvalidFrequencyError(frequency)
    return step(last_date)


def should_trigger_rule(rule: AutomationRule, today: date) -> bool:
    """
    Whether an active rule is due to run today.

    Only recurring invoices are scheduled here: they trigger once today has
    reached next_generation_date. Payment reminders and overdue alerts are
    not scheduled through this path and never trigger.
    """
    if not rule.is_active:
        return False

    if rule.rule_type == RuleType.RECURRING_INVOICE:
        if rule.next_generation_date is None:
            return False
        return today >= rule.next_generation_date

    return False


def get_rules_to_execute(rules: List[AutomationRule], today: date) -> List[AutomationRule]:
    return [rule for rule in rules if should_trigger_rule(rule, today)]


def calculate_automation_metrics(rules: List[AutomationRule], today: date) -> AutomationMetrics:
    """Counts of active rules by type and how many run today"""
    active = [r for r in rules if r.is_active]

    def count_type(rule_type: RuleType) -> int:
        return sum(1 for r in active if r.rule_type == rule_type)

    return AutomationMetrics(
        total_rules=len(rules),
        active_rules=len(active),
        inactive_rules=len(rules) - len(active),
        recurring_invoice_count=count_type(RuleType.RECURRING_INVOICE),
        payment_reminder_count=count_type(RuleType.PAYMENT_REMINDER),
        overdue_alert_count=count_type(RuleType.OVERDUE_ALERT),
        rules_to_run_today=len(get_rules_to_execute(active, today)),
        automation_rate=len(active) / len(rules) * 100 if rules else 0.0,
    )


def validate_automation_rule(rule: AutomationRule) -> RuleValidation:
    """
    Check required fields per rule type.

    Returns user-facing (Spanish) messages instead of raising so forms can
    display every problem at once.
    """
    errors: List[str] = []

    if not rule.name or not rule.name.strip():
        errors.append("El nombre de la regla es requerido")

    if not rule.rule_type:
        errors.append("El tipo de regla es requerido")

    if rule.rule_type == RuleType.RECURRING_INVOICE:
        if not rule.customer_name:
            errors.append("El nombre del cliente es requerido")
        if not rule.amount or rule.amount <= 0:
            errors.append("El monto debe ser mayor a 0")
        if not rule.frequency:
            errors.append("La frecuencia es requerida")
        if not rule.start_date:
            errors.append("La fecha de inicio es requerida")

    if rule.rule_type in (RuleType.PAYMENT_REMINDER, RuleType.OVERDUE_ALERT):
        if rule.days_before_due is None:
            errors.append("Los días antes del vencimiento son requeridos")
        if not rule.reminder_type:
            errors.append("El tipo de recordatorio es requerido")

    return RuleValidation(is_valid=not errors, errors=errors)
