"""
Check methods available to a target.

Only capacity_rate exists today. parse_check_method() maps the method name
and threshold text from configuration onto an instance.
"""

from diskmon.exceptions import ConfigError

from .base import CheckMethod, Verdict
from .capacity import CapacityRate


def parse_check_method(method: str, threshold: str) -> CheckMethod:
    """
    Build a check method from its configured name and threshold.

    The name is matched case-insensitively; an empty name or any name
    containing "capacity_rate" selects CapacityRate.

    Raises:
        ConfigError: If the name is unknown or the threshold is not a float.
    """
    method = method.lower()
    if method == "" or "capacity_rate" in method:
        try:
            value = float(threshold)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"threshold must be in float format: {threshold}") from e
        return CapacityRate(threshold=value)
    raise ConfigError(f"unexpected check method type: {method}")


__all__ = [
    "CapacityRate",
    "CheckMethod",
    "Verdict",
    "parse_check_method",
]
