from typing import Dict, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_form_data
from app.core.exceptions import NotFoundException, StorageError
from app.core.security import verify_csrf_token
from app.core.templates import render
from app.schemas.student import STUDENT_FORM_FIELDS, bind_student_form, student_form_values
from app.services.student import student as crud_student

router = APIRouter()

STUDENT_NOT_FOUND = "Student not found"


def _redirect_to_index(request: Request) -> RedirectResponse:
    return RedirectResponse(
        url=str(request.url_for("students_index")),
        status_code=status.HTTP_302_FOUND,
    )


def _submitted_values(form: Dict[str, str]) -> Dict[str, str]:
    return {name: form.get(name, "") for name in STUDENT_FORM_FIELDS}


@router.get("", name="students_index")
def list_students(request: Request, db: Session = Depends(get_db)):
    """
    List every student.
    """
    students = crud_student.get_students(db)
    return render(request, "students/index.html", {"students": students})


@router.get("/Details/{student_id}", name="students_details")
def student_details(request: Request, student_id: int, db: Session = Depends(get_db)):
    """
    One student with the courses they are enrolled in.
    """
    student = crud_student.get_student_details(db, student_id=student_id)
    if student is None:
        raise NotFoundException(STUDENT_NOT_FOUND)
    return render(request, "students/details.html", {"student": student})


@router.get("/Create", name="students_create")
def create_student_form(request: Request):
    return render(
        request,
        "students/create.html",
        {"form": _submitted_values({}), "errors": {}, "error_message": None},
    )


@router.post("/Create", dependencies=[Depends(verify_csrf_token)])
def create_student(
    request: Request,
    form: Dict[str, str] = Depends(get_form_data),
    db: Session = Depends(get_db),
):
    """
    Create a student from the submitted form.

    Only the allowed fields are bound; the id always comes from the database.
    """
    binding = bind_student_form(form)
    error_message = None

    if binding.is_valid:
        try:
            crud_student.create_student(db, binding.values)
            return _redirect_to_index(request)
        except StorageError:
            error_message = crud_student.SAVE_FAILED_MESSAGE

    return render(
        request,
        "students/create.html",
        {
            "form": _submitted_values(form),
            "errors": binding.errors,
            "error_message": error_message,
        },
    )


@router.get("/Edit/{student_id}", name="students_edit")
def edit_student_form(request: Request, student_id: int, db: Session = Depends(get_db)):
    student = crud_student.get_student(db, student_id=student_id)
    if student is None:
        raise NotFoundException(STUDENT_NOT_FOUND)
    return render(
        request,
        "students/edit.html",
        {
            "student_id": student_id,
            "form": student_form_values(student),
            "errors": {},
            "error_message": None,
        },
    )


@router.post("/Edit/{student_id}", dependencies=[Depends(verify_csrf_token)])
def edit_student(
    request: Request,
    student_id: int,
    form: Dict[str, str] = Depends(get_form_data),
    db: Session = Depends(get_db),
):
    """
    Update a student.

    The row is read fresh from the database and only the allowed fields
    present in the form are copied onto it.
    """
    student = crud_student.get_student(db, student_id=student_id)
    if student is None:
        raise NotFoundException(STUDENT_NOT_FOUND)

    binding = bind_student_form(form, partial=True)
    crud_student.apply_student_values(student, binding.values)

    # Fields that failed to bind are redisplayed as typed
    values = student_form_values(student)
    values.update({name: form.get(name, "") for name in binding.errors})
    error_message = None

    if binding.is_valid:
        try:
            crud_student.update_student(db, student)
            return _redirect_to_index(request)
        except StorageError:
            error_message = crud_student.SAVE_FAILED_MESSAGE

    return render(
        request,
        "students/edit.html",
        {
            "student_id": student_id,
            "form": values,
            "errors": binding.errors,
            "error_message": error_message,
        },
    )


@router.get("/Delete/{student_id}", name="students_delete")
def delete_student_form(
    request: Request,
    student_id: int,
    save_changes_error: Optional[str] = Query(None, alias="saveChangesError"),
    db: Session = Depends(get_db),
):
    """
    Ask for confirmation. After a failed delete the page explains
    that the user can retry or cancel.
    """
    student = crud_student.get_student_readonly(db, student_id=student_id)
    if student is None:
        raise NotFoundException(STUDENT_NOT_FOUND)

    # Anything other than "true" (e.g. a garbled flag) counts as no error
    failed = (save_changes_error or "").lower() == "true"
    error_message = crud_student.DELETE_FAILED_MESSAGE if failed else None
    return render(
        request,
        "students/delete.html",
        {"student": student, "error_message": error_message},
    )


@router.post("/Delete/{student_id}", dependencies=[Depends(verify_csrf_token)])
def delete_student(request: Request, student_id: int, db: Session = Depends(get_db)):
    student = crud_student.get_student(db, student_id=student_id)
    # Already gone
    if student is None:
        return _redirect_to_index(request)

    try:
        crud_student.delete_student(db, student)
    except StorageError:
        url = request.url_for("students_delete", student_id=student_id)
        return RedirectResponse(
            url=str(url.include_query_params(saveChangesError="true")),
            status_code=status.HTTP_302_FOUND,
        )
    return _redirect_to_index(request)
