# app/core/logging.py
import logging
import sys

from app.core.config import settings


# Configure standard Python logging
def setup_logging():
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout) # Print logs to console
        ]
    )
    return logging.getLogger("student_records")

logger = setup_logging()
