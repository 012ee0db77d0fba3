from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.enrollment import Enrollment, Grade
from app.models.student import Student

DELETE_FAILED = "Delete failed. Try again, and if the problem persists see your system administrator."


def _post_delete(client, student_id, csrf_token):
    return client.post(
        f"/Students/Delete/{student_id}",
        data={"csrf_token": csrf_token},
        follow_redirects=False,
    )


def test_delete_confirmation_page(client, make_student):
    student = make_student()

    response = client.get(f"/Students/Delete/{student.id}")

    assert response.status_code == 200
    assert "Are you sure you want to delete this?" in response.text
    assert DELETE_FAILED not in response.text


def test_delete_removes_student_and_enrollments(client, csrf_token, make_student, enroll, db_session):
    student = make_student()
    student_id = student.id
    enroll(student, 1050, "Chemistry", Grade.B)

    response = _post_delete(client, student_id, csrf_token)

    assert response.status_code == 302
    assert response.headers["location"].endswith("/Students")
    db_session.expire_all()
    assert db_session.get(Student, student_id) is None
    assert db_session.query(Enrollment).count() == 0


def test_delete_of_missing_student_redirects_to_index(client, csrf_token):
    response = _post_delete(client, 999, csrf_token)

    assert response.status_code == 302
    assert response.headers["location"].endswith("/Students")


def test_storage_failure_on_delete_redirects_with_flag(client, csrf_token, make_student, db_session, monkeypatch):
    student = make_student()

    def failing_commit(self):
        raise SQLAlchemyError("foreign key constraint failed")

    monkeypatch.setattr(Session, "commit", failing_commit)

    response = _post_delete(client, student.id, csrf_token)

    assert response.status_code == 302
    assert response.headers["location"].endswith(f"/Students/Delete/{student.id}?saveChangesError=true")

    monkeypatch.undo()
    retry_page = client.get(response.headers["location"])
    assert retry_page.status_code == 200
    assert DELETE_FAILED in retry_page.text
    db_session.expire_all()
    assert db_session.get(Student, student.id) is not None


def test_delete_requires_anti_forgery_token(client, make_student, db_session):
    student = make_student()

    response = client.post(f"/Students/Delete/{student.id}", follow_redirects=False)

    assert response.status_code == 403
    db_session.expire_all()
    assert db_session.get(Student, student.id) is not None


def test_unrecognised_error_flag_shows_plain_confirmation(client, make_student):
    student = make_student()

    response = client.get(f"/Students/Delete/{student.id}?saveChangesError=maybe")

    assert response.status_code == 200
    assert "Are you sure you want to delete this?" in response.text
    assert DELETE_FAILED not in response.text


def test_error_flag_is_case_insensitive(client, make_student):
    student = make_student()

    response = client.get(f"/Students/Delete/{student.id}?saveChangesError=True")

    assert response.status_code == 200
    assert DELETE_FAILED in response.text
