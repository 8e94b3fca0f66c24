# sinkquote/services/quote_services/state_machine.py
from datetime import datetime
from typing import Dict, FrozenSet, Optional

from sinkquote.core.clock import as_utc, utcnow
from sinkquote.core.errors import InvalidStateTransition, QuoteExpired
from sinkquote.models.enums import QuoteStatus

VALID_TRANSITIONS: Dict[QuoteStatus, FrozenSet[QuoteStatus]] = {
    QuoteStatus.draft: frozenset({QuoteStatus.sent}),
    QuoteStatus.sent: frozenset({QuoteStatus.viewed, QuoteStatus.expired}),
    QuoteStatus.viewed: frozenset({QuoteStatus.accepted, QuoteStatus.rejected, QuoteStatus.expired}),
    QuoteStatus.accepted: frozenset(),
    QuoteStatus.rejected: frozenset(),
    QuoteStatus.expired: frozenset(),
}

SIGNABLE_STATUSES = frozenset({QuoteStatus.sent, QuoteStatus.viewed})
TERMINAL_STATUSES = frozenset(s for s, targets in VALID_TRANSITIONS.items() if not targets)


def is_expired(valid_until: Optional[datetime], now: Optional[datetime] = None) -> bool:
    if valid_until is None:
        return False
    return as_utc(valid_until) < as_utc(now or utcnow())


def can_transition(current: QuoteStatus, target: QuoteStatus) -> bool:
    return QuoteStatus(target) in VALID_TRANSITIONS.get(QuoteStatus(current), frozenset())


def ensure_transition(quote, target: QuoteStatus, now: Optional[datetime] = None) -> QuoteStatus:
    """Raise unless ``quote`` may move to ``target`` right now."""
    target = QuoteStatus(target)
    current = QuoteStatus(quote.status)
    if target == QuoteStatus.accepted and is_expired(quote.valid_until, now):
        raise QuoteExpired("This quote has expired and cannot be accepted")
    if not can_transition(current, target):
        raise InvalidStateTransition(current.value, target.value)
    return target


def ensure_signable(quote, now: Optional[datetime] = None):
    current = QuoteStatus(quote.status)
    if current not in SIGNABLE_STATUSES:
        raise InvalidStateTransition(
            current.value, QuoteStatus.accepted.value, "Quote must be sent before it can be signed"
        )
    if is_expired(quote.valid_until, now):
        raise QuoteExpired("This quote has expired and cannot be signed")
