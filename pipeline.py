"""
Ripeness Pipeline
Validates a request, computes the rule-based baseline, then tries the
advisory stage. Only validation can fail; once the baseline exists every
advisory outcome ends in a complete result.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Optional

from advice import DEFAULT_LIST_LIMIT, normalize_advice
from advice_parser import parse_advice
from advisor import AdvisorGateway, AdvisoryOutcome, build_prompt, call_with_timeout
from errors import RequestValidationError, UnknownItemError
from models.ripeness import Advice, Climate, ItemRule, RipenessRequest, RipenessResult, Storage
from ripeness import baseline_summary, compute_window
from rules import RuleRepository
from utils.validators import validate_date, validate_issues, validate_required_fields

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ["sku", "receivedAt", "storage", "climate"]


def parse_request(payload: dict[str, Any]) -> RipenessRequest:
    """Build a RipenessRequest from a JSON body, or raise RequestValidationError."""
    if not isinstance(payload, dict):
        raise RequestValidationError("Request body must be a JSON object")

    is_valid, missing = validate_required_fields(payload, REQUIRED_FIELDS)
    if not is_valid:
        raise RequestValidationError("; ".join(missing))

    received_at, error = validate_date(payload["receivedAt"])
    if received_at is None:
        raise RequestValidationError(error, field="receivedAt")

    try:
        storage = Storage.parse(payload["storage"])
    except ValueError:
        allowed = ", ".join(s.value for s in Storage)
        raise RequestValidationError(f"Invalid storage. Use one of: {allowed}", field="storage") from None

    try:
        climate = Climate.parse(payload["climate"])
    except ValueError:
        allowed = ", ".join(c.value for c in Climate)
        raise RequestValidationError(f"Invalid climate. Use one of: {allowed}", field="climate") from None

    issues, error = validate_issues(payload.get("issues"))
    if error:
        raise RequestValidationError(error, field="issues")

    return RipenessRequest(
        sku=str(payload["sku"]).strip(),
        received_at=received_at,
        storage=storage,
        climate=climate,
        issues=tuple(issues),
    )


class RipenessPipeline:
    def __init__(
        self,
        repository: RuleRepository,
        advisor: Optional[AdvisorGateway] = None,
        timeout: float = 15.0,
        list_limit: int = DEFAULT_LIST_LIMIT,
    ):
        self._repository = repository
        self._advisor = advisor
        self._timeout = timeout
        self._list_limit = list_limit

    @property
    def repository(self) -> RuleRepository:
        return self._repository

    def advisor_available(self) -> bool:
        if self._advisor is None:
            return False
        available = getattr(self._advisor, "available", None)
        return bool(available()) if callable(available) else True

    def resolve(self, sku: str) -> ItemRule:
        rule = self._repository.lookup(sku)
        if rule is None:
            raise UnknownItemError(sku)
        return rule

    def estimate(
        self,
        request: RipenessRequest,
        *,
        use_advisor: bool = True,
        cancel_event: Optional[threading.Event] = None,
    ) -> RipenessResult:
        rule = self.resolve(request.sku)
        window = compute_window(rule, request.storage, request.climate, request.received_at)
        base_summary = baseline_summary(rule, window)

        if use_advisor and self.advisor_available():
            outcome, candidate = self._advise(rule, request, window, cancel_event)
        else:
            outcome, candidate = AdvisoryOutcome.SKIPPED, None

        try:
            advice = normalize_advice(candidate, window, self._list_limit)
        except Exception:  # pylint: disable=broad-except
            logger.exception("[Pipeline] Normalizing advice failed for %s", rule.sku)
            outcome = AdvisoryOutcome.FAILED
            advice = normalize_advice(None, window)

        return RipenessResult(
            sku=rule.sku,
            name=rule.name,
            ready_date=window.ready_date,
            base_summary=base_summary,
            advice=advice,
            window=window,
            advisory_outcome=outcome.value,
        )

    def estimate_payload(self, payload: dict[str, Any], **kwargs) -> RipenessResult:
        return self.estimate(parse_request(payload), **kwargs)

    def _advise(self, rule, request, window, cancel_event) -> tuple[AdvisoryOutcome, Optional[Advice]]:
        try:
            prompt = build_prompt(rule, request, window)
            outcome, raw_text = call_with_timeout(self._advisor, prompt, self._timeout, cancel_event)
            if outcome is not AdvisoryOutcome.SUCCEEDED:
                return outcome, None
            return outcome, parse_advice(raw_text)
        except Exception as e:  # pylint: disable=broad-except
            logger.warning("[Pipeline] Advisory stage failed for %s: %s", rule.sku, e)
            return AdvisoryOutcome.FAILED, None
