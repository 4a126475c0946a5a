from typing import Optional

from spec_models import UsageType

_USAGE_BY_REQ = {
    'M': UsageType.MANDATORY,
    'O': UsageType.OPTIONAL,
    'C': UsageType.CONDITIONAL,
    'X': UsageType.CONDITIONAL,
}


def parse_usage(req: Optional[str]) -> UsageType:
    """
    Maps a requirement designator to a usage category.

    `M` is Mandatory, `C` and `X` are Conditional. Anything else, including a
    missing designator, is Optional. Never raises.
    """
    if not isinstance(req, str):
        return UsageType.OPTIONAL
    return _USAGE_BY_REQ.get(req.strip().upper(), UsageType.OPTIONAL)


def min_use_for(usage: UsageType) -> int:
    return 1 if usage == UsageType.MANDATORY else 0
