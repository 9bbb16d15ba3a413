"""Service factory and one-shot console runner"""

import asyncio
import json
from typing import Any, Dict, List

from fiscal_engine.config import settings
from fiscal_engine.domain.models import AttentionItem, FinancialSummary
from fiscal_engine.infrastructure.clients.finance_api import FinanceAPIClient
from fiscal_engine.infrastructure.observability.logging import setup_logging
from fiscal_engine.services.dashboard import DashboardService


def create_service() -> DashboardService:
    """Create and configure the dashboard service"""
    setup_logging(settings.log_level)
    client = FinanceAPIClient(settings.finance_api_base, settings.http_timeout_seconds)
    return DashboardService(client, settings.forecast_days)


def _attention_rows(items: List[AttentionItem]) -> List[Dict[str, Any]]:
    return [
        {
            "id": item.record.id,
            "counterparty": item.record.counterparty_name,
            "priority": item.priority.value,
            "reason": item.reason,
            "outstanding": str(item.outstanding),
        }
        for item in items
    ]


def summary_report(summary: FinancialSummary) -> Dict[str, Any]:
    """What needs doing today: health, alerts, rules to run and follow-ups"""
    return {
        "date": summary.today.isoformat(),
        "health": {
            "score": summary.health.health_score,
            "level": summary.health.health_level,
            "has_cash_crunch": summary.health.has_cash_crunch,
            "worst_cash_position": str(summary.health.worst_cash_position),
        },
        "alerts": [
            {
                "type": alert.type.value,
                "category": alert.category,
                "title": alert.title,
                "message": alert.message,
            }
            for alert in summary.alerts
        ],
        "rules_to_execute": [
            {"id": rule.id, "name": rule.name, "rule_type": rule.rule_type}
            for rule in summary.rules_to_execute
        ],
        "receivables_attention": _attention_rows(summary.receivables_attention),
        "urgent_payables": _attention_rows(summary.urgent_payables),
    }


def main() -> None:
    service = create_service()
    summary = asyncio.run(service.get_summary())
    print(json.dumps(summary_report(summary), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
