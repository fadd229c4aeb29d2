from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKeyConstraint, Identity, Index, Integer, JSON, PrimaryKeyConstraint, String, Text, UniqueConstraint, text, func
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
import datetime
import uuid

class Base(DeclarativeBase):
    pass


def generate_id() -> str:
    return str(uuid.uuid4())

# text[] on Postgres, JSON elsewhere (sqlite in tests)
StudentIdList = ARRAY(Text).with_variant(JSON(), 'sqlite')


class Users(Base):
    __tablename__ = 'users'
    __table_args__ = (
        PrimaryKeyConstraint('id', name='users_pkey'),
        UniqueConstraint('google_id', name='users_google_id_key'),
        UniqueConstraint('email', name='users_email_key')
    )

    id: Mapped[int] = mapped_column(Integer, Identity(start=1), primary_key=True)
    google_id: Mapped[str] = mapped_column(Text)
    email: Mapped[str] = mapped_column(Text)
    name: Mapped[str] = mapped_column(Text)
    picture: Mapped[Optional[str]] = mapped_column(Text)

    students: Mapped[list['Students']] = relationship('Students', back_populates='user')
    class_sessions: Mapped[list['ClassSessions']] = relationship('ClassSessions', back_populates='user')


class Students(Base):
    __tablename__ = 'students'
    __table_args__ = (
        ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE', name='students_user_id_fkey'),
        PrimaryKeyConstraint('id', name='students_pkey'),
        Index('idx_students_user', 'user_id')
    )

    id: Mapped[str] = mapped_column(String, primary_key=True, default=generate_id)
    user_id: Mapped[int] = mapped_column(Integer)
    name: Mapped[str] = mapped_column(Text)
    grade: Mapped[str] = mapped_column(Text)
    parent_name: Mapped[str] = mapped_column(Text)
    parent_email: Mapped[str] = mapped_column(Text)
    parent_phone: Mapped[str] = mapped_column(Text)
    hourly_rate: Mapped[int] = mapped_column(Integer, default=50, server_default=text('50'))
    # Derived from class_sessions, written only by BalanceService.
    balance: Mapped[int] = mapped_column(Integer, default=0, server_default=text('0'))
    total_paid: Mapped[int] = mapped_column(Integer, default=0, server_default=text('0'))

    user: Mapped['Users'] = relationship('Users', back_populates='students')


class ClassSessions(Base):
    __tablename__ = 'class_sessions'
    __table_args__ = (
        CheckConstraint('duration_minutes > 0', name='positive_duration'),
        ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE', name='class_sessions_user_id_fkey'),
        PrimaryKeyConstraint('id', name='class_sessions_pkey'),
        Index('idx_class_sessions_user_date', 'user_id', 'date')
    )

    id: Mapped[str] = mapped_column(String, primary_key=True, default=generate_id)
    user_id: Mapped[int] = mapped_column(Integer)
    date: Mapped[datetime.datetime] = mapped_column(DateTime, default=datetime.datetime.now, server_default=func.now())
    duration_minutes: Mapped[int] = mapped_column(Integer)
    summary: Mapped[str] = mapped_column(Text, default='', server_default=text("''"))
    # Weak references to students.id, not enforced by a constraint.
    student_ids: Mapped[list[str]] = mapped_column(StudentIdList)
    status: Mapped[str] = mapped_column(Text, default='completed', server_default=text("'completed'"))
    is_paid: Mapped[bool] = mapped_column(Boolean, default=False, server_default=text('false'))

    user: Mapped['Users'] = relationship('Users', back_populates='class_sessions')
