"""
Advice Normalizer
The single place where advice is completed or synthesized, so the pipeline
always returns a well-formed Advice with a non-empty summary
"""

from __future__ import annotations

from typing import Optional

from models.ripeness import Advice, ComputedWindow, RipenessWindow

DEFAULT_LIST_LIMIT = 5

FALLBACK_WINDOW_NOTE = "Estimated from storage rules; check the item itself before eating."


def fallback_summary(window: ComputedWindow) -> str:
    start = window.start.isoformat()
    end = window.end.isoformat()
    return (
        f"Best eaten roughly between {start} and {end}. "
        "Keep it away from direct sunlight and heat, handle it gently to avoid bruising, "
        "and check colour, aroma and firmness each day. "
        "Discard anything with mould, an off smell or leaking juice. "
        "This is an estimate and real ripening varies with your home environment."
    )


def _clean_list(values, limit: int) -> list[str]:
    if not isinstance(values, (list, tuple)):
        return []
    cleaned = []
    for value in values:
        if value is None:
            continue
        text = str(value).strip()
        if text:
            cleaned.append(text)
        if len(cleaned) >= limit:
            break
    return cleaned


def normalize_advice(
    candidate: Optional[Advice],
    fallback_window: ComputedWindow,
    limit: int = DEFAULT_LIST_LIMIT,
) -> Advice:
    """Complete a parsed candidate, or build advice from scratch when there is none.

    - blank or missing summary -> templated summary naming the window dates
    - tips, risks and uses -> trimmed, blanks dropped, capped at `limit`
    - missing window -> the rule-derived window
    """
    limit = max(1, int(limit))
    if not isinstance(candidate, Advice):
        candidate = Advice()

    summary = candidate.summary_md if isinstance(candidate.summary_md, str) else ""
    if not summary.strip():
        summary = fallback_summary(fallback_window)

    window = candidate.ripeness_window
    if not isinstance(window, RipenessWindow):
        window = RipenessWindow.from_computed(fallback_window, note=FALLBACK_WINDOW_NOTE)

    return Advice(
        summary_md=summary,
        smart_tips=_clean_list(candidate.smart_tips, limit),
        risks=_clean_list(candidate.risks, limit),
        uses=_clean_list(candidate.uses, limit),
        ripeness_window=window,
    )
