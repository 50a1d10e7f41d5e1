"""
Utilities for string interpolation of configuration values.
"""
import re
from typing import Mapping

class EnvironmentInterpolator:
    """
    Utility for interpolating variables in strings.
    Supports ${VAR}, ${VAR:-default} and ${VAR:+value}; $$ escapes a literal dollar.
    """
    # Group 1: $$ escape
    # Group 2: VAR name
    # Group 3: - or +
    # Group 4: default or value
    PATTERN = re.compile(r'(\$\$)|\$\{([^}:]+)(?::(-|\+)([^}]*))?\}')

    @classmethod
    def interpolate(cls, template: str, context: Mapping[str, str], strict: bool = True) -> str:
        """
        Interpolates variables in the template string using the provided context.

        :param template: The string containing ${VAR} placeholders.
        :param context: The variables to interpolate from.
        :param strict: Raise on an unset ${VAR}; otherwise it resolves to an empty string.
        :return: The interpolated string.
        :raises KeyError: If strict and a variable is not found and no default is provided.
        """
        def replace(match):
            if match.group(1):
                return '$'

            var_name = match.group(2)
            modifier = match.group(3)
            alt_value = match.group(4)

            value = context.get(var_name)

            if modifier == '-':
                return value if value else alt_value
            elif modifier == '+':
                return alt_value if value else ''
            if value is not None:
                return value
            if strict:
                raise KeyError(f"Variable {var_name} not found in context")
            return ''

        return cls.PATTERN.sub(replace, template)
