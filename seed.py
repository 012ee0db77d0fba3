import logging
from datetime import date

from app.core.database import SessionLocal
from app.models.course import Course
from app.models.enrollment import Enrollment, Grade
from app.models.student import Student

# Setup logging to see output
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def seed_data():
    """
    Seed sample courses, students and enrollments.
    """
    db = SessionLocal()
    try:
        # Avoid seeding twice
        if db.query(Student).first():
            logger.info("Database already contains data. Skipping seed.")
            return

        logger.info("Seeding data...")

        courses = [
            Course(id=1050, title="Chemistry", credits=3),
            Course(id=4022, title="Microeconomics", credits=3),
            Course(id=4041, title="Macroeconomics", credits=3),
            Course(id=1045, title="Calculus", credits=4),
            Course(id=3141, title="Trigonometry", credits=4),
            Course(id=2021, title="Composition", credits=3),
            Course(id=2042, title="Literature", credits=4),
        ]
        by_id = {course.id: course for course in courses}

        alexander = Student(
            first_name="Carson", last_name="Alexander",
            email_address="carson.alexander@contoso.edu",
            year_rank=3, average_grade=3.2, enrollment_date=date(2019, 9, 1),
        )
        alonso = Student(
            first_name="Meredith", last_name="Alonso",
            email_address="meredith.alonso@contoso.edu",
            year_rank=4, average_grade=3.7, enrollment_date=date(2018, 9, 1),
        )
        anand = Student(
            first_name="Arturo", last_name="Anand",
            email_address="arturo.anand@contoso.edu",
            year_rank=1, average_grade=2.9, enrollment_date=date(2021, 9, 1),
        )
        students = [alexander, alonso, anand]

        enrollments = [
            Enrollment(student=alexander, course=by_id[1050], grade=Grade.A),
            Enrollment(student=alexander, course=by_id[4022], grade=Grade.C),
            Enrollment(student=alexander, course=by_id[4041], grade=Grade.B),
            Enrollment(student=alonso, course=by_id[1045], grade=Grade.B),
            Enrollment(student=alonso, course=by_id[3141], grade=Grade.F),
            Enrollment(student=alonso, course=by_id[2021], grade=Grade.F),
            Enrollment(student=anand, course=by_id[1050]),
            Enrollment(student=anand, course=by_id[4022], grade=Grade.F),
        ]

        db.add_all(courses + students + enrollments)
        db.commit()

        logger.info("Data seeded successfully!")

    except Exception as e:
        logger.error(f"Error seeding data: {e}")
        db.rollback() # Rollback if error occurs
        raise
    finally:
        db.close() # Always close the connection

if __name__ == "__main__":
    seed_data()
