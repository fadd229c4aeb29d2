import factory
import datetime
from factory.alchemy import SQLAlchemyModelFactory
from factory.faker import Faker

from src.tutortrack_backend.database import models as db_models
from tests.constants import TEST_USER_EMAIL, TEST_USER_GOOGLE_ID, TEST_USER_NAME

# Factories are used with .build() only; the async test session
# adds and flushes the instances itself.

class BaseFactory(SQLAlchemyModelFactory):
    class Meta:
        abstract = True
        sqlalchemy_session = None


class UserFactory(BaseFactory):
    google_id = TEST_USER_GOOGLE_ID
    email = TEST_USER_EMAIL
    name = TEST_USER_NAME
    picture = None

    class Meta:
        model = db_models.Users


class StudentFactory(BaseFactory):
    id = factory.LazyFunction(db_models.generate_id)
    name = Faker("first_name")
    grade = "10th"
    parent_name = Faker("name")
    parent_email = Faker("email")
    parent_phone = Faker("phone_number")
    hourly_rate = 50
    balance = 0
    total_paid = 0

    class Meta:
        model = db_models.Students


class ClassSessionFactory(BaseFactory):
    id = factory.LazyFunction(db_models.generate_id)
    date = factory.LazyFunction(lambda: datetime.datetime(2024, 6, 10, 16, 0))
    duration_minutes = 60
    summary = "Worked through quadratic equations."
    student_ids = factory.LazyFunction(list)
    status = "completed"
    is_paid = False

    class Meta:
        model = db_models.ClassSessions
