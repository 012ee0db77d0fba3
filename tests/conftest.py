import os

# Must be set before the app (and its engine) is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DEBUG"] = "false"

from datetime import date

import pytest
from fastapi.testclient import TestClient

from app.core.database import Base, SessionLocal, engine
from app.core.security import CSRF_COOKIE_NAME
from app.main import app
from app.models.course import Course
from app.models.enrollment import Enrollment
from app.models.student import Student


@pytest.fixture(autouse=True)
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def csrf_token(client):
    """Load a form page so the client holds a valid anti-forgery cookie."""
    response = client.get("/Students/Create")
    assert response.status_code == 200
    return client.cookies[CSRF_COOKIE_NAME]


@pytest.fixture
def make_student(db_session):
    def _make_student(**overrides):
        values = {
            "last_name": "Alexander",
            "first_name": "Carson",
            "email_address": "carson.alexander@contoso.edu",
            "year_rank": 3,
            "average_grade": 3.2,
            "enrollment_date": date(2019, 9, 1),
        }
        values.update(overrides)
        student = Student(**values)
        db_session.add(student)
        db_session.commit()
        return student
    return _make_student


@pytest.fixture
def enroll(db_session):
    def _enroll(student, course_id, title, grade=None, credits=3):
        course = db_session.get(Course, course_id)
        if course is None:
            course = Course(id=course_id, title=title, credits=credits)
            db_session.add(course)
        enrollment = Enrollment(student_id=student.id, course=course, grade=grade)
        db_session.add(enrollment)
        db_session.commit()
        return enrollment
    return _enroll


def student_form(**overrides):
    data = {
        "LastName": "Lovelace",
        "FirstName": "Ada",
        "EmailAddress": "ada@x.edu",
        "YearRank": "1",
        "AverageGrade": "4.0",
        "EnrollmentDate": "2020-01-01",
    }
    data.update(overrides)
    return data
