from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional, Sequence, Set, Tuple

from coursedeck.core.carousel import LevelCarouselState
from coursedeck.core.courses import Course, CourseNotFoundError, Level
from coursedeck.core.settings import Settings

logger = logging.getLogger(__name__)


class CourseSelectionState:
    """Course list with at most one expanded course and that course's carousel.

    Every toggle replaces the course tuple with new snapshots rather than
    editing courses in place. Unknown course ids are logged and ignored.
    """

    def __init__(self, courses: Sequence[Course], settings: Optional[Settings] = None) -> None:
        self._settings = settings or Settings()
        seen: Set[int] = set()
        for course in courses:
            if course.id in seen:
                raise ValueError(f"duplicate course id {course.id}")
            if not course.levels:
                raise ValueError(f"course {course.id} has no levels")
            seen.add(course.id)
        self._courses: Tuple[Course, ...] = tuple(
            replace(course, is_expanded=False) for course in courses
        )
        self._carousel: Optional[LevelCarouselState] = None

    @property
    def carousel(self) -> Optional[LevelCarouselState]:
        """Carousel of the expanded course, or None when every course is collapsed."""
        return self._carousel

    def list_courses(self) -> List[Course]:
        return list(self._courses)

    def currently_expanded_course(self) -> Optional[Course]:
        for course in self._courses:
            if course.is_expanded:
                return course
        return None

    def current_levels(self) -> List[Level]:
        if self._carousel is None:
            return []
        return list(self._carousel.levels)

    def toggle_course(self, course_id: int) -> bool:
        """Collapse the course if it is expanded, otherwise expand it alone.

        Returns True when the state changed.
        """
        try:
            course = self._find(course_id)
        except CourseNotFoundError as e:
            logger.warning("Ignoring toggle: %s", e)
            return False
        if course.is_expanded:
            self._collapse_all()
            logger.info("Closed course %d", course_id)
        else:
            self._expand(course)
            logger.info("Opened course %d (%d levels)", course_id, len(course.levels))
        return True

    def open_course(self, course_id: int) -> bool:
        try:
            course = self._find(course_id)
        except CourseNotFoundError as e:
            logger.warning("Ignoring open: %s", e)
            return False
        if course.is_expanded:
            return False
        return self.toggle_course(course_id)

    def close_course(self, course_id: int) -> bool:
        try:
            course = self._find(course_id)
        except CourseNotFoundError as e:
            logger.warning("Ignoring close: %s", e)
            return False
        if not course.is_expanded:
            return False
        return self.toggle_course(course_id)

    def go_to_next_level(self) -> bool:
        if self._carousel is None:
            return False
        return self._carousel.advance()

    def go_to_previous_level(self) -> bool:
        if self._carousel is None:
            return False
        return self._carousel.retreat()

    def _find(self, course_id: int) -> Course:
        for course in self._courses:
            if course.id == course_id:
                return course
        raise CourseNotFoundError(course_id)

    def _expand(self, target: Course) -> None:
        carousel = LevelCarouselState(
            target.levels,
            pitch=self._settings.pitch,
            unlock_all=self._settings.unlock_all,
        )
        self._courses = tuple(
            replace(course, is_expanded=course.id == target.id) for course in self._courses
        )
        self._carousel = carousel

    def _collapse_all(self) -> None:
        self._courses = tuple(replace(course, is_expanded=False) for course in self._courses)
        self._carousel = None
