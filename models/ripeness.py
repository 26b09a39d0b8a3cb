"""
Ripeness Models
Defines the rule, request, window and advice shapes used by the pipeline
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional, List


class Storage(str, Enum):
    ROOM = "room"
    COOL_DARK = "cooldark"
    VEG_ROOM = "vegroom"
    FRIDGE = "fridge"

    @classmethod
    def parse(cls, value) -> 'Storage':
        """Accept canonical values and the long-form aliases, case-insensitive"""
        key = str(value or '').strip().lower().replace('_', '-')
        key = STORAGE_ALIASES.get(key, key)
        return cls(key)


STORAGE_ALIASES = {
    'cool-dark': 'cooldark',
    'vegetable-drawer': 'vegroom',
    'veg-room': 'vegroom',
    'refrigerator': 'fridge',
}


class Climate(str, Enum):
    COLD = "cold"
    NORMAL = "normal"
    HOT = "hot"

    @classmethod
    def parse(cls, value) -> 'Climate':
        return cls(str(value or '').strip().lower())


@dataclass(frozen=True)
class ItemRule:
    """Ripening parameters for one item, loaded from the rule dataset"""
    sku: str
    name: str
    category: str = ""
    ripen_room_days: int = 0
    ripen_cool_days: int = 0
    temp_advice: str = ""
    ready_signs: tuple = ()
    donts: tuple = ()

    def to_public_dict(self) -> dict:
        return {
            'sku': self.sku,
            'name': self.name,
            'category': self.category or None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'ItemRule':
        """Create ItemRule from a dataset entry"""
        return cls(
            sku=str(data['sku']),
            name=str(data['name']),
            category=str(data.get('category') or ''),
            ripen_room_days=int(data.get('ripen_room_days') or 0),
            ripen_cool_days=int(data.get('ripen_cool_days') or 0),
            temp_advice=str(data.get('temp_advice') or ''),
            ready_signs=tuple(str(s) for s in data.get('ready_signs') or []),
            donts=tuple(str(s) for s in data.get('donts') or []),
        )


@dataclass(frozen=True)
class RipenessRequest:
    sku: str
    received_at: date
    storage: Storage
    climate: Climate
    issues: tuple = ()


@dataclass(frozen=True)
class ComputedWindow:
    ready_date: date
    start: date
    end: date


@dataclass
class RipenessWindow:
    """Readiness window as carried inside Advice (ISO date strings)"""
    start: str
    end: str
    note: Optional[str] = None

    def to_dict(self) -> dict:
        data = {'start': self.start, 'end': self.end}
        if self.note:
            data['note'] = self.note
        return data

    @classmethod
    def from_computed(cls, window: ComputedWindow, note: Optional[str] = None) -> 'RipenessWindow':
        return cls(start=window.start.isoformat(), end=window.end.isoformat(), note=note)


@dataclass
class Advice:
    """Advisory enrichment. Parser output is a candidate; only normalized Advice is final."""
    summary_md: str = ""
    smart_tips: List[str] = field(default_factory=list)
    risks: List[str] = field(default_factory=list)
    uses: List[str] = field(default_factory=list)
    ripeness_window: Optional[RipenessWindow] = None

    def to_dict(self) -> dict:
        return {
            'summaryMd': self.summary_md,
            'smartTips': list(self.smart_tips),
            'risks': list(self.risks),
            'uses': list(self.uses),
            'ripenessWindow': self.ripeness_window.to_dict() if self.ripeness_window else None,
        }


@dataclass
class RipenessResult:
    sku: str
    name: str
    ready_date: date
    base_summary: str
    advice: Advice
    window: ComputedWindow
    advisory_outcome: str

    def to_dict(self) -> dict:
        """Response body for the ripeness endpoint"""
        return {
            'sku': self.sku,
            'name': self.name,
            'readyDate': self.ready_date.isoformat(),
            'baseSummary': self.base_summary,
            # Older clients read the advice text from "summary"
            'summary': self.advice.summary_md,
            'advice': self.advice.to_dict(),
            'advisoryOutcome': self.advisory_outcome,
        }
