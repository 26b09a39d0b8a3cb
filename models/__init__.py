# Models package initialization
# Contains the ripeness rule, request and advice shapes

from .ripeness import (
    Advice,
    Climate,
    ComputedWindow,
    ItemRule,
    RipenessRequest,
    RipenessResult,
    RipenessWindow,
    Storage,
)

__all__ = [
    'Advice', 'Climate', 'ComputedWindow', 'ItemRule', 'RipenessRequest',
    'RipenessResult', 'RipenessWindow', 'Storage',
]
