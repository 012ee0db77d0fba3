from datetime import date

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.student import Student
from conftest import student_form


def _post_edit(client, student_id, data, csrf_token):
    data = dict(data, csrf_token=csrf_token)
    return client.post(f"/Students/Edit/{student_id}", data=data, follow_redirects=False)


def _reload(db_session, student_id):
    db_session.expire_all()
    return db_session.get(Student, student_id)


def test_edit_form_shows_current_values(client, make_student):
    student = make_student()

    response = client.get(f"/Students/Edit/{student.id}")

    assert response.status_code == 200
    assert 'value="Alexander"' in response.text
    assert 'value="2019-09-01"' in response.text


def test_edit_updates_allowed_fields_and_redirects(client, csrf_token, make_student, db_session):
    student = make_student()

    response = _post_edit(client, student.id, student_form(), csrf_token)

    assert response.status_code == 302
    assert response.headers["location"].endswith("/Students")
    updated = _reload(db_session, student.id)
    assert updated.last_name == "Lovelace"
    assert updated.email_address == "ada@x.edu"
    assert updated.enrollment_date == date(2020, 1, 1)


def test_edit_ignores_fields_outside_allow_list(client, csrf_token, make_student, db_session):
    student = make_student()
    data = student_form(ID="999", id="999", Enrollments="junk")

    response = _post_edit(client, student.id, data, csrf_token)

    assert response.status_code == 302
    assert db_session.get(Student, 999) is None
    assert _reload(db_session, student.id).first_name == "Ada"


def test_edit_leaves_fields_missing_from_form_unchanged(client, csrf_token, make_student, db_session):
    student = make_student()

    response = _post_edit(client, student.id, {"FirstName": "Carla"}, csrf_token)

    assert response.status_code == 302
    updated = _reload(db_session, student.id)
    assert updated.first_name == "Carla"
    assert updated.last_name == "Alexander"


def test_invalid_edit_redisplays_partial_entity_without_saving(client, csrf_token, make_student, db_session):
    student = make_student()
    data = student_form(LastName="Newton", YearRank="abc")

    response = _post_edit(client, student.id, data, csrf_token)

    assert response.status_code == 200
    assert 'value="Newton"' in response.text
    assert 'value="abc"' in response.text
    assert 'data-field="YearRank"' in response.text
    unchanged = _reload(db_session, student.id)
    assert unchanged.last_name == "Alexander"
    assert unchanged.year_rank == 3


def test_storage_failure_on_edit_keeps_prior_state(client, csrf_token, make_student, db_session, monkeypatch):
    student = make_student()

    def failing_commit(self):
        raise SQLAlchemyError("deadlock detected")

    monkeypatch.setattr(Session, "commit", failing_commit)

    response = _post_edit(client, student.id, student_form(), csrf_token)

    assert response.status_code == 200
    assert "Unable to save changes." in response.text
    assert 'value="Lovelace"' in response.text
    assert _reload(db_session, student.id).last_name == "Alexander"


def test_edit_unknown_student_is_not_found(client, csrf_token):
    response = _post_edit(client, 999, student_form(), csrf_token)

    assert response.status_code == 404


def test_edit_requires_anti_forgery_token(client, make_student, db_session):
    student = make_student()

    response = client.post(f"/Students/Edit/{student.id}", data=student_form(), follow_redirects=False)

    assert response.status_code == 403
    assert _reload(db_session, student.id).last_name == "Alexander"
