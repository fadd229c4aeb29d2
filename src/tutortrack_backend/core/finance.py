'''
This files handles all the finance logic.

Everything here is a pure function over students and class sessions that are
already in memory (ORM rows or any object with the same attribute names).
The services load the rows, call these functions and persist or return the
results.
'''
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from fractions import Fraction
from typing import Iterable, Optional, Protocol, Sequence

from ..common.config import settings


class StudentLike(Protocol):
    id: str
    hourly_rate: int


class ClassSessionLike(Protocol):
    date: datetime
    duration_minutes: int
    student_ids: list[str]
    is_paid: bool


@dataclass(frozen=True)
class BalanceResult:
    balance: int
    total_paid: int


@dataclass(frozen=True)
class Stats:
    total_students: int
    classes_this_week: int
    revenue_this_month: int
    unpaid_count: int


@dataclass(frozen=True)
class Earnings:
    total_earned: int
    total_collected: int
    total_outstanding: int


# --- 1. The revenue formula ---

def session_revenue_for(student: Optional[StudentLike], session: ClassSessionLike) -> Fraction:
    """
    Amount one student is billed for one session: hourly_rate * minutes / 60.

    Every student in a group session is billed the full duration.
    A missing student (deleted, or an unknown id) is billed nothing.
    The amount is kept exact so that sums can be rounded once at the end.
    """
    if student is None:
        return Fraction(0)
    return Fraction(student.hourly_rate * session.duration_minutes, 60)


def round_amount(amount: Fraction) -> int:
    """Rounds half-up to a whole currency unit. Amounts are never negative."""
    return math.floor(amount + Fraction(1, 2))


# --- 2. Balance Engine ---

def sessions_for_student(student_id: str, sessions: Iterable[ClassSessionLike]) -> list[ClassSessionLike]:
    """Sessions listing the student, ordered by date."""
    return sorted(
        (s for s in sessions if student_id in s.student_ids),
        key=lambda s: s.date
    )


def calculate_balance(student: StudentLike, sessions: Iterable[ClassSessionLike]) -> BalanceResult:
    """
    Recomputes a student's derived fields from scratch.
    'sessions' should be the sessions that reference the student;
    unpaid sessions make up the balance, paid ones the total paid.
    """
    unpaid = Fraction(0)
    paid = Fraction(0)
    for session in sessions:
        amount = session_revenue_for(student, session)
        if session.is_paid:
            paid += amount
        else:
            unpaid += amount

    return BalanceResult(balance=round_amount(unpaid), total_paid=round_amount(paid))


# --- 3. Stats Aggregator ---

def start_of_month(now: datetime) -> datetime:
    return datetime(now.year, now.month, 1)


def start_of_week(now: datetime, first_day_of_week: Optional[int] = None) -> datetime:
    """
    Midnight of the most recent first-day-of-week on or before 'now'.
    Uses python's weekday() numbering, the default comes from settings (Sunday).
    """
    if first_day_of_week is None:
        first_day_of_week = settings.FIRST_DAY_OF_WEEK
    days_to_subtract = (now.weekday() - first_day_of_week + 7) % 7
    start_of_week_date = now.date() - timedelta(days=days_to_subtract)
    return datetime.combine(start_of_week_date, datetime.min.time())


def _revenue(students_by_id: dict[str, StudentLike], sessions: Iterable[ClassSessionLike]) -> Fraction:
    total = Fraction(0)
    for session in sessions:
        for student_id in session.student_ids:
            total += session_revenue_for(students_by_id.get(student_id), session)
    return total


def compute_stats(
    students: Sequence[StudentLike],
    sessions: Sequence[ClassSessionLike],
    now: datetime
) -> Stats:
    """
    Dashboard figures for one tutor.
    'now' is injected; it is compared against naive local session dates.
    """
    week_start = start_of_week(now)
    month_start = start_of_month(now)
    students_by_id = {student.id: student for student in students}

    return Stats(
        total_students=len(students),
        classes_this_week=sum(1 for s in sessions if s.date >= week_start),
        revenue_this_month=round_amount(
            _revenue(students_by_id, (s for s in sessions if s.date >= month_start))
        ),
        unpaid_count=sum(1 for s in sessions if not s.is_paid),
    )


def compute_earnings(
    students: Sequence[StudentLike],
    sessions: Sequence[ClassSessionLike]
) -> Earnings:
    """Earned, collected and outstanding amounts over the whole history."""
    students_by_id = {student.id: student for student in students}

    return Earnings(
        total_earned=round_amount(_revenue(students_by_id, sessions)),
        total_collected=round_amount(_revenue(students_by_id, (s for s in sessions if s.is_paid))),
        total_outstanding=round_amount(_revenue(students_by_id, (s for s in sessions if not s.is_paid))),
    )
