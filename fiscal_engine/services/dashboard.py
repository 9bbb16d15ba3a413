"""Dashboard service - fetch records and build the financial summary"""

import asyncio
import logging
import time
import uuid
from datetime import date

from fiscal_engine.config import settings
from fiscal_engine.domain.exceptions import FinanceAPIError
from fiscal_engine.domain.models import FinancialSummary
from fiscal_engine.domain.summary import build_financial_summary
from fiscal_engine.infrastructure.clients.finance_api import FinanceAPIClient
from fiscal_engine.infrastructure.observability.logging import log_summary
from fiscal_engine.infrastructure.observability.metrics import (
    finance_api_failures_counter,
    record_summary,
    summary_duration_histogram,
)

logger = logging.getLogger(__name__)


class DashboardService:
    """Builds financial summaries from the finance API"""

    def __init__(self, client: FinanceAPIClient | None = None, forecast_days: int | None = None):
        self.client = client or FinanceAPIClient()
        self.forecast_days = forecast_days if forecast_days is not None else settings.forecast_days

    async def get_summary(self, today: date | None = None) -> FinancialSummary:
        """
        Fetch receivables, payables and rules, then compute the summary.

        Flow:
        1. Read the reference day once (callers may pin it)
        2. Fetch the three record sets concurrently
        3. Compute metrics, forecast, health, alerts and automation status
        4. Record metrics and a structured log line

        Raises:
            FinanceAPIError: When any fetch fails
        """
        start_time = time.time()
        run_id = str(uuid.uuid4())
        today = today or date.today()

        try:
            receivables, payables, rules = await asyncio.gather(
                self.client.fetch_receivables(),
                self.client.fetch_payables(),
                self.client.fetch_automation_rules(),
            )
        except FinanceAPIError as e:
            finance_api_failures_counter.inc()
            logger.error(f"Finance API error: {e}", extra={"run_id": run_id})
            raise

        summary = build_financial_summary(receivables, payables, rules, today, self.forecast_days)

        duration = time.time() - start_time
        summary_duration_histogram.observe(duration)
        record_summary(
            summary.health.health_score,
            summary.health.health_level,
            summary.alerts,
            len(summary.rules_to_execute),
        )
        log_summary(
            run_id,
            summary.health.health_score,
            summary.health.health_level,
            len(summary.alerts),
            len(summary.rules_to_execute),
            duration * 1000,
        )

        return summary
