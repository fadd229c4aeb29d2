'''
Checks that stored student balances match their class sessions.

Reports sessions that reference students which no longer exist, and
students whose balance or total paid is out of date.
With --fix the stale students are recalculated and saved.

Usage: python scripts/check_integrity.py [--fix]
'''
import argparse
import asyncio
import sys
from pathlib import Path
from sqlalchemy import select
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

# --- Path Setup ---
# This file is assumed to be in <project_root>/scripts/check_integrity.py
CURRENT_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = CURRENT_DIR.parent

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.tutortrack_backend.common.config import settings
from src.tutortrack_backend.core import finance
from src.tutortrack_backend.database import models as db_models


async def check_integrity(fix: bool) -> int:
    """Returns the number of problems found."""
    print(f"Connecting to database (TEST_MODE={settings.TEST_MODE})...")
    engine = create_async_engine(settings.database_url)
    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    problems = 0
    try:
        async with async_session() as session:
            students = (await session.execute(select(db_models.Students))).scalars().all()
            sessions = (await session.execute(
                select(db_models.ClassSessions).order_by(db_models.ClassSessions.date)
            )).scalars().all()

            print("--- Checking Student References ---")
            known_ids = {student.id for student in students}
            for class_session in sessions:
                orphaned = [sid for sid in class_session.student_ids if sid not in known_ids]
                if orphaned:
                    print(f"Session {class_session.id} references missing students: {orphaned}")
                    problems += 1

            print("--- Checking Stored Balances ---")
            for student in students:
                own_sessions = finance.sessions_for_student(
                    student.id,
                    (s for s in sessions if s.user_id == student.user_id)
                )
                expected = finance.calculate_balance(student, own_sessions)
                if (student.balance, student.total_paid) == (expected.balance, expected.total_paid):
                    continue

                problems += 1
                print(
                    f"Student {student.id} ({student.name}): stored balance={student.balance}, "
                    f"total_paid={student.total_paid}; expected balance={expected.balance}, "
                    f"total_paid={expected.total_paid}"
                )
                if fix:
                    student.balance = expected.balance
                    student.total_paid = expected.total_paid

            if fix and session.dirty:
                await session.commit()
                print("Stale balances were recalculated and saved.")
    finally:
        await engine.dispose()

    if problems == 0:
        print("Everything is consistent.")
    else:
        print(f"Found {problems} problem(s).")
    return problems


def main():
    parser = argparse.ArgumentParser(description="Check student balances against class sessions.")
    parser.add_argument("--fix", action="store_true", help="recalculate and save stale balances")
    args = parser.parse_args()

    problems = asyncio.run(check_integrity(args.fix))
    sys.exit(1 if problems and not args.fix else 0)


if __name__ == "__main__":
    main()
