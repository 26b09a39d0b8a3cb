"""
Advisor Gateway
Sends a composed ripeness prompt to Gemini and returns the raw text, or None
when no advisory text is available for any reason
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, wait
from enum import Enum
from typing import Optional, Protocol

from models.ripeness import ComputedWindow, ItemRule, RipenessRequest

import google.generativeai as genai
from google.api_core.exceptions import DeadlineExceeded

logger = logging.getLogger(__name__)

# Seconds between cancellation checks while waiting on the advisor
POLL_INTERVAL = 0.1

# Extra seconds the caller waits beyond the Gemini request timeout, so the
# client's own deadline error is what ends a slow call
DEADLINE_GRACE = 1.0

# Shared by every request. A stuck worker is released when the Gemini
# request timeout fires.
ADVISOR_WORKERS = 8
_executor = ThreadPoolExecutor(max_workers=ADVISOR_WORKERS, thread_name_prefix="advisor")

SYSTEM_CONTEXT = """You are an expert on storing fruit and judging when it is ready to eat.
Put safety first. Never state anything as certain; say that results vary with the home environment.
Be polite and brief, and prefer bullet points."""

RESPONSE_FORMAT = """Reply with a single JSON object and nothing else:
{
  "summaryMd": "short markdown summary",
  "smartTips": ["practical tip", "..."],
  "risks": ["risk and how to avoid it", "..."],
  "uses": ["way to use the item", "..."],
  "ripenessWindow": {"start": "YYYY-MM-DD", "end": "YYYY-MM-DD", "note": "optional note"}
}"""


class AdvisoryOutcome(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    TIMED_OUT = "timed_out"
    SKIPPED = "skipped"


class AdvisorGateway(Protocol):
    def generate(self, prompt: str) -> Optional[str]:
        ...


def build_prompt(rule: ItemRule, request: RipenessRequest, window: ComputedWindow) -> str:
    """Bundle rule facts, request fields and the computed window into one prompt."""
    issues = ", ".join(request.issues) or "none reported"
    lines = [
        SYSTEM_CONTEXT,
        "",
        f"Item: {rule.name}",
        f"Received on: {request.received_at.isoformat()}",
        f"Storage: {request.storage.value}",
        f"Climate: {request.climate.value}",
        f"Estimated ready date: {window.ready_date.isoformat()}",
        f"Estimated window: {window.start.isoformat()} to {window.end.isoformat()}",
        f"Storage advice: {rule.temp_advice or 'none'}",
        f"Common mistakes: {', '.join(rule.donts) or 'none'}",
        f"Signs it is ready: {', '.join(rule.ready_signs) or 'none'}",
        f"User concerns: {issues}",
        "",
        "Cover:",
        "1) the estimated ready date (YYYY-MM-DD)",
        "2) how to store it (temperature, wrapping)",
        "3) ripening tips, if any",
        "4) common mistakes",
        "5) a three-point quick checklist",
        "",
        RESPONSE_FORMAT,
    ]
    return "\n".join(lines)


class GeminiAdvisor:
    """Gemini-backed gateway. Every failure is logged and reported as None."""

    def __init__(self, api_key: Optional[str], model_name: str, timeout: float = 15.0):
        self._api_key = api_key
        self._model_name = model_name
        self._timeout = timeout
        self._model = None
        self._lock = threading.Lock()

    def available(self) -> bool:
        return bool(self._api_key)

    def _get_model(self):
        """Initialize the Gemini model lazily when an API key is present."""
        if not self.available():
            return None

        with self._lock:
            if self._model is None:
                genai.configure(api_key=self._api_key)
                self._model = genai.GenerativeModel(
                    model_name=self._model_name,
                    system_instruction=SYSTEM_CONTEXT,
                )
        return self._model

    def generate(self, prompt: str) -> Optional[str]:
        try:
            model = self._get_model()
            if model is None:
                return None

            response = model.generate_content(
                prompt,
                generation_config={
                    'temperature': 0.6,
                    'max_output_tokens': 600,
                },
                request_options={'timeout': self._timeout},
            )
            text = getattr(response, 'text', None)
        except (DeadlineExceeded, TimeoutError) as e:
            raise TimeoutError(f"Gemini request exceeded {self._timeout}s") from e
        except Exception as e:  # pylint: disable=broad-except
            # Network, auth, quota and blocked-content errors land here
            logger.warning("[Advisor] Gemini request failed: %s: %s", type(e).__name__, e)
            return None

        if not text or not text.strip():
            logger.warning("[Advisor] Gemini returned an empty response")
            return None
        return text.strip()


class StaticAdvisor:
    """Returns canned text. Used for local runs without an API key and in tests."""

    def __init__(self, text: Optional[str]):
        self._text = text
        self.prompts: list[str] = []

    def available(self) -> bool:
        return True

    def generate(self, prompt: str) -> Optional[str]:
        self.prompts.append(prompt)
        return self._text


def call_with_timeout(
    gateway: AdvisorGateway,
    prompt: str,
    timeout: float,
    cancel_event: Optional[threading.Event] = None,
) -> tuple[AdvisoryOutcome, Optional[str]]:
    """Run one gateway call, giving up after `timeout` seconds or on cancellation.

    On expiry the worker keeps running until the gateway returns; its late
    result is discarded.
    """
    if cancel_event is not None and cancel_event.is_set():
        return AdvisoryOutcome.SKIPPED, None

    future = _executor.submit(gateway.generate, prompt)
    deadline = time.monotonic() + timeout
    while True:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            future.cancel()
            logger.warning("[Advisor] No response within %.1fs", timeout)
            return AdvisoryOutcome.TIMED_OUT, None
        done, _ = wait([future], timeout=min(remaining, POLL_INTERVAL))
        if done:
            break
        if cancel_event is not None and cancel_event.is_set():
            future.cancel()
            logger.info("[Advisor] Call cancelled by caller")
            return AdvisoryOutcome.SKIPPED, None

    error = future.exception()
    if isinstance(error, TimeoutError):
        logger.warning("[Advisor] Gateway timed out: %s", error)
        return AdvisoryOutcome.TIMED_OUT, None
    if error is not None:
        logger.warning("[Advisor] Gateway raised %s: %s", type(error).__name__, error)
        return AdvisoryOutcome.FAILED, None

    text = future.result()
    if not isinstance(text, str) or not text.strip():
        return AdvisoryOutcome.FAILED, None
    return AdvisoryOutcome.SUCCEEDED, text
