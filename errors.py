"""
Ripeness Errors
Exceptions raised by the estimation pipeline and the rule dataset loader
"""

from __future__ import annotations


class RipenessError(Exception):
    """Base class for ripeness advisor errors"""


class RequestValidationError(RipenessError):
    """The caller sent something we cannot compute from (maps to HTTP 400)"""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field


class UnknownItemError(RequestValidationError):
    def __init__(self, sku: str):
        super().__init__(f"Unknown item: {sku}", field="sku")
        self.sku = sku


class RuleDatasetError(RipenessError):
    """The static rule dataset could not be read"""
