"""
Advice Parser
Turns the advisor's free-form reply into an Advice candidate.

Tiers are tried in order and each result is shape-checked before it is
accepted:
1. the whole reply is a JSON object
2. the reply contains a fenced block (``` or ```json) holding a JSON object
3. the reply is plain text and becomes the summary

parse_advice never raises.
"""

from __future__ import annotations

import json
import re
from typing import Any, Optional

from models.ripeness import Advice, RipenessWindow

FENCED_BLOCK = re.compile(r"```[ \t]*(?:json|JSON)?[ \t]*\r?\n?(.*?)```", re.DOTALL)
ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

LIST_FIELDS = {
    'smartTips': 'smart_tips',
    'risks': 'risks',
    'uses': 'uses',
}


def _is_string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def _decode_window(value: Any) -> RipenessWindow:
    """Return the window, or raise ValueError when the shape is wrong"""
    if not isinstance(value, dict):
        raise ValueError("ripenessWindow must be an object")
    start, end, note = value.get('start'), value.get('end'), value.get('note')
    for name, date_str in (('start', start), ('end', end)):
        if not isinstance(date_str, str) or not ISO_DATE.match(date_str.strip()):
            raise ValueError(f"ripenessWindow.{name} must be a YYYY-MM-DD string")
    if note is not None and not isinstance(note, str):
        raise ValueError("ripenessWindow.note must be a string")
    return RipenessWindow(start=start.strip(), end=end.strip(), note=note)


def _decode_structured(text: str) -> Optional[Advice]:
    """Decode a JSON object with the advice shape; None on any mismatch"""
    try:
        data = json.loads(text)
    except (ValueError, RecursionError):
        return None
    if not isinstance(data, dict):
        return None

    summary = data.get('summaryMd')
    if not isinstance(summary, str):
        return None

    lists = {}
    for key, attr in LIST_FIELDS.items():
        value = data.get(key)
        if value is None:
            lists[attr] = []
        elif _is_string_list(value):
            lists[attr] = list(value)
        else:
            return None

    window = None
    if data.get('ripenessWindow') is not None:
        try:
            window = _decode_window(data['ripenessWindow'])
        except ValueError:
            return None

    return Advice(summary_md=summary, ripeness_window=window, **lists)


def parse_advice(raw_text) -> Advice:
    if raw_text is None:
        return Advice()
    if not isinstance(raw_text, str):
        raw_text = str(raw_text)

    text = raw_text.strip()
    if not text:
        return Advice()

    if text.startswith('{'):
        advice = _decode_structured(text)
        if advice is not None:
            return advice

    match = FENCED_BLOCK.search(text)
    if match:
        advice = _decode_structured(match.group(1).strip())
        if advice is not None:
            return advice

    return Advice(summary_md=raw_text)
