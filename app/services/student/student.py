import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from app.core.exceptions import StorageError
from app.models.course import Course  # noqa: F401  (registers the mapper)
from app.models.enrollment import Enrollment
from app.models.student import Student

logger = logging.getLogger(__name__)

SAVE_FAILED_MESSAGE = (
    "Unable to save changes. Try again, and if the problem persists "
    "see your system administrator."
)
DELETE_FAILED_MESSAGE = (
    "Delete failed. Try again, and if the problem persists "
    "see your system administrator."
)


def _save_changes(db: Session, action: str, student_id: Optional[int] = None) -> None:
    """Commit the session, turning any database failure into a StorageError."""
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to %s student id=%s", action, student_id)
        raise StorageError(
            SAVE_FAILED_MESSAGE, details={"action": action, "student_id": student_id}
        ) from exc


def get_students(db: Session) -> List[Student]:
    """All students, ordered by id"""
    return db.query(Student).order_by(Student.id).all()


def get_student(db: Session, student_id: int) -> Optional[Student]:
    """Load one student by id, attached to the session so it can be changed"""
    return db.query(Student).filter(Student.id == student_id).first()


def get_student_readonly(db: Session, student_id: int) -> Optional[Student]:
    """Load one student by id, detached from the session"""
    student = get_student(db, student_id)
    if student is not None:
        db.expunge(student)
    return student


def get_student_details(db: Session, student_id: int) -> Optional[Student]:
    """
    Load one student together with its enrollments and each enrollment's
    course, detached from the session.
    """
    student = (
        db.query(Student)
        .options(selectinload(Student.enrollments).selectinload(Enrollment.course))
        .filter(Student.id == student_id)
        .first()
    )
    if student is None:
        return None

    courses = [enrollment.course for enrollment in student.enrollments]
    db.expunge(student)
    for course in courses:
        if course is not None and course in db:
            db.expunge(course)
    return student


def apply_student_values(student: Student, values: Dict[str, Any]) -> Student:
    """Copy bound form values onto a student (only fields present in values)"""
    for name, value in values.items():
        setattr(student, name, value)
    return student


def create_student(db: Session, values: Dict[str, Any]) -> Student:
    """Create a new student; the id is always assigned by the database"""
    values = {name: value for name, value in values.items() if name != "id"}
    db_student = Student(**values)
    db.add(db_student)
    _save_changes(db, "create")
    db.refresh(db_student)
    logger.info("Created student id=%s", db_student.id)
    return db_student


def update_student(db: Session, student: Student) -> Student:
    """Persist changes already applied to an attached student"""
    _save_changes(db, "update", student.id)
    logger.info("Updated student id=%s", student.id)
    return student


def delete_student(db: Session, student: Student) -> None:
    """Delete a student (and its enrollments)"""
    student_id = student.id
    db.delete(student)
    _save_changes(db, "delete", student_id)
    logger.info("Deleted student id=%s", student_id)
