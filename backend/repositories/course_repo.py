from typing import List

from models import CourseSummary
from backend.converters import courses_from_payload
from backend.repositories.base import BackendRepository


class CourseRepository(BackendRepository):

    def list_courses(self) -> List[CourseSummary]:
        return courses_from_payload(self._request("GET", "/api/courses"))
