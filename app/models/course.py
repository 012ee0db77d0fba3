from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from app.core.database import Base


class Course(Base):
    __tablename__ = "courses"

    # Course numbers are assigned by the registrar, not generated
    id = Column(Integer, primary_key=True, autoincrement=False)
    title = Column(String(50), nullable=False)
    credits = Column(Integer, nullable=False)

    # Relationships
    enrollments = relationship("Enrollment", back_populates="course")
