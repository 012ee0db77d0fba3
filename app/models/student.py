from sqlalchemy import Column, Date, Float, Integer, String
from sqlalchemy.orm import relationship
from app.core.database import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    last_name = Column(String(50), nullable=False)
    first_name = Column(String(50), nullable=False)
    email_address = Column(String, unique=True, index=True, nullable=False)
    year_rank = Column(Integer, nullable=False)
    average_grade = Column(Float, nullable=False)
    enrollment_date = Column(Date, nullable=False)

    # Relationships
    enrollments = relationship(
        "Enrollment", back_populates="student", cascade="all, delete-orphan"
    )

    @property
    def full_name(self) -> str:
        return f"{self.last_name}, {self.first_name}"
