"""
Utility functions for value coercion across the report splitter.
"""

import re
from typing import Any, Optional


class ValidationUtils:
    """Lenient numeric conversions for attribute values read from reports."""

    # Cached regex patterns for performance
    _regex_cache = {
        'integer_prefix': re.compile(r'^\s*[+-]?\d+'),
        'float_prefix': re.compile(r'^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?'),
    }

    @staticmethod
    def safe_int_conversion(value: Any, default: Optional[int] = None) -> Optional[int]:
        """
        Convert the leading integer of a value.

        '12' -> 12, '12px' -> 12, '1.9' -> 1, 'abc' -> default.

        Args:
            value: Value to convert
            default: Default value if conversion fails

        Returns:
            Integer value or default
        """
        if value is None:
            return default
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, (int, float)):
            return int(value)

        match = ValidationUtils._regex_cache['integer_prefix'].match(str(value))
        if not match:
            return default
        return int(match.group())

    @staticmethod
    def safe_float_conversion(value: Any, default: Optional[float] = None) -> Optional[float]:
        """
        Convert the leading decimal number of a value.

        '0.85' -> 0.85, '1.5s' -> 1.5, '.5' -> 0.5, 'abc' -> default.

        Args:
            value: Value to convert
            default: Default value if conversion fails

        Returns:
            Float value or default
        """
        if value is None:
            return default
        if isinstance(value, (int, float)):
            return float(value)

        match = ValidationUtils._regex_cache['float_prefix'].match(str(value))
        if not match:
            return default
        try:
            return float(match.group())
        except ValueError:
            return default
