# Utils package initialization
# Contains request validation helpers

from .validators import validate_required_fields, normalize_date_string, validate_date, validate_issues

__all__ = [
    'validate_required_fields', 'normalize_date_string', 'validate_date', 'validate_issues',
]
