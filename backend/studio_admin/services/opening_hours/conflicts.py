# backend/studio_admin/services/opening_hours/conflicts.py
"""
Conflict detection for a proposed change of opening hours.

Scans every training session starting on or after the effective date
(local midnight in the studio timezone) that is not cancelled, and reports
the ones the new hours would exclude:

✓ session on a weekday that is closed in the new hours
✓ session starting before opening or ending after closing
  (starting exactly at opening / ending exactly at closing is fine)

Does NOT consider:
✗ sessions before the effective date (never disturbed by a change)
✗ cancelled sessions
✗ machine or member availability

Read-only: nothing is written to sessions or settings.
"""

import logging
from datetime import date
from zoneinfo import ZoneInfo

from sqlalchemy.orm import Session, selectinload

from ...models.generated import TrainingSessionMembers, TrainingSessions
from ...schemas.opening_hours import SessionConflict, WeekHours
from .config import (
    local_day_start,
    parse_db_timestamp,
    to_db_timestamp,
    weekday_key,
)

logger = logging.getLogger(__name__)

REASON_CLOSED = "Studio closed on this day"
REASON_OUTSIDE = "Outside new hours: {open}-{close}"

# Fallbacks for an open day saved without one of its times
DEFAULT_OPEN = "00:00"
DEFAULT_CLOSE = "23:59"
END_OF_DAY = "24:00"


def detect_conflicts(
    db: Session,
    new_hours: WeekHours,
    effective_date: date,
    tz: ZoneInfo,
) -> list[SessionConflict]:
    """
    Find sessions that fall outside new_hours from effective_date on.

    Args:
        db: Database session
        new_hours: Proposed week of opening hours
        effective_date: Local calendar date the new hours take effect
        tz: Studio timezone; weekdays and HH:MM are taken in this zone

    Returns:
        Conflicts ordered by session start.
    """
    sessions = _get_future_sessions(db, effective_date, tz)
    conflicts: list[SessionConflict] = []

    for session in sessions:
        start = parse_db_timestamp(session.scheduled_start).astimezone(tz)
        end = parse_db_timestamp(session.scheduled_end).astimezone(tz)
        day = getattr(new_hours, weekday_key(start.date()))

        if not day.is_open:
            conflicts.append(_build_conflict(session, start.date(), REASON_CLOSED))
            continue

        open_time = day.open_time or DEFAULT_OPEN
        close_time = day.close_time or DEFAULT_CLOSE

        start_time = start.strftime("%H:%M")
        # A session running past midnight ends after any closing time
        end_time = end.strftime("%H:%M") if end.date() <= start.date() else END_OF_DAY

        if start_time < open_time or end_time > close_time:
            reason = REASON_OUTSIDE.format(open=open_time, close=close_time)
            conflicts.append(_build_conflict(session, start.date(), reason))

    logger.info(
        f"Conflict check from {effective_date.isoformat()}: "
        f"{len(sessions)} session(s) scanned, {len(conflicts)} conflict(s)"
    )
    return conflicts


# ── Helpers ──────────────────────────────────────────────────────────────


def _build_conflict(session: TrainingSessions, local_date: date, reason: str) -> SessionConflict:
    return SessionConflict(
        session_id=session.id,
        date=local_date.isoformat(),
        start_time=session.scheduled_start,
        end_time=session.scheduled_end,
        member_name=_get_member_name(session),
        machine_number=_get_machine_number(session),
        reason=reason,
    )


def _get_member_name(session: TrainingSessions) -> str | None:
    """Name of the first linked member; None for walk-ins or deleted members."""
    links = sorted(session.member_links, key=lambda link: link.id)
    if not links or links[0].member is None:
        return None
    member = links[0].member
    return f"{member.first_name} {member.last_name}"


def _get_machine_number(session: TrainingSessions) -> int:
    if session.machine is None:
        return 0
    return session.machine.machine_number or 0


# ── Database helpers ─────────────────────────────────────────────────────


def _get_future_sessions(db: Session, effective_date: date, tz: ZoneInfo) -> list:
    """Non-cancelled sessions starting at or after local midnight of effective_date."""
    since = to_db_timestamp(local_day_start(effective_date, tz))

    return (
        db.query(TrainingSessions)
        .options(
            selectinload(TrainingSessions.machine),
            selectinload(TrainingSessions.member_links).selectinload(TrainingSessionMembers.member),
        )
        .filter(
            TrainingSessions.scheduled_start >= since,
            TrainingSessions.status != "cancelled",
        )
        .order_by(TrainingSessions.scheduled_start.asc(), TrainingSessions.id.asc())
        .all()
    )
