import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class SideEffectResult:
    name: str
    ok: bool
    error: Optional[str] = None


def run_side_effect(name, fn, *args, **kwargs):
    """Run a best-effort follow-up action.

    Failures are logged and reported in the returned result; they never
    propagate to the caller, whose primary write has already committed.
    """
    try:
        outcome = fn(*args, **kwargs)
    except Exception as exc:
        logger.warning("Side effect %s failed", name, exc_info=True)
        return SideEffectResult(name, False, str(exc))
    if outcome is False:
        logger.warning("Side effect %s reported it did not complete", name)
        return SideEffectResult(name, False, "not completed")
    return SideEffectResult(name, True)
