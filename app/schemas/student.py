from dataclasses import dataclass, field
from datetime import date
from typing import Annotated, Any, Dict, Mapping

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints, TypeAdapter, ValidationError
from pydantic.fields import FieldInfo


NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]


class StudentForm(BaseModel):
    """
    The fields a client may set on a Student, keyed by their form names.

    Anything else in a submitted form (notably ``ID``) is ignored, so the
    primary key is always assigned by the database.
    """
    last_name: NameStr = Field(alias="LastName")
    first_name: NameStr = Field(alias="FirstName")
    email_address: EmailStr = Field(alias="EmailAddress")
    year_rank: int = Field(alias="YearRank", ge=1, le=8)
    average_grade: float = Field(alias="AverageGrade", ge=0.0, le=4.0)
    enrollment_date: date = Field(alias="EnrollmentDate")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


def _field_adapter(info: FieldInfo) -> TypeAdapter:
    if info.metadata:
        return TypeAdapter(Annotated[(info.annotation, *info.metadata)])
    return TypeAdapter(info.annotation)


# attribute name -> (form field name, validator)
_BINDERS = {
    name: (info.alias, _field_adapter(info))
    for name, info in StudentForm.model_fields.items()
}

STUDENT_FORM_FIELDS = tuple(alias for alias, _ in _BINDERS.values())


@dataclass
class BindingResult:
    """Outcome of binding a submitted form onto the allowed Student fields.

    ``values`` holds every field that bound successfully (by attribute name),
    ``errors`` maps the form field name of every failed field to its message.
    """
    values: Dict[str, Any] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def bind_student_form(data: Mapping[str, Any], partial: bool = False) -> BindingResult:
    """Bind and validate each allowed field independently.

    With ``partial`` set, fields missing from ``data`` are skipped instead of
    being reported as required (used when updating an existing student).
    """
    result = BindingResult()
    for name, (alias, adapter) in _BINDERS.items():
        if alias not in data:
            if not partial:
                result.errors[alias] = "Field required"
            continue
        try:
            result.values[name] = adapter.validate_python(data[alias])
        except ValidationError as exc:
            result.errors[alias] = exc.errors()[0]["msg"]
    return result


def student_form_values(student) -> Dict[str, str]:
    """Current values of a Student, keyed by form field name, for redisplay."""
    values = {}
    for name, (alias, _) in _BINDERS.items():
        value = getattr(student, name, None)
        values[alias] = "" if value is None else str(value)
    return values
