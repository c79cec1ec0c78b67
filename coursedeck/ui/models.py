"""View models derived from the core state, free of any Qt dependency."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from coursedeck.core.carousel import LevelCarouselState, LevelRole
from coursedeck.core.courses import Course, Level
from coursedeck.core.selection import CourseSelectionState

START_PRACTICE = "Start Practice"
START_OVER = "Start over"
HIDE_LEVELS = "Hide Levels"
BADGE_COMPLETED = "Completed"
BADGE_IN_PROGRESS = "In Progress"


@dataclass
class LevelCardState:
    """Everything a level card needs to render itself."""

    index: int
    level: Level
    role: LevelRole
    locked: bool
    can_start: bool
    badge: Optional[str]
    action_label: str


@dataclass
class CourseCardState:
    course: Course
    expanded: bool
    toggle_label: str


def build_level_card_states(carousel: LevelCarouselState) -> List[LevelCardState]:
    states: List[LevelCardState] = []
    for index, level in enumerate(carousel.levels):
        locked = carousel.is_locked(index)
        if locked:
            badge = None
        else:
            badge = BADGE_COMPLETED if level.is_completed else BADGE_IN_PROGRESS
        states.append(
            LevelCardState(
                index=index,
                level=level,
                role=carousel.role_of(index),
                locked=locked,
                can_start=carousel.can_start(index),
                badge=badge,
                action_label=START_OVER if level.is_completed else START_PRACTICE,
            )
        )
    return states


def build_course_card_states(selection: CourseSelectionState) -> List[CourseCardState]:
    return [
        CourseCardState(
            course=course,
            expanded=course.is_expanded,
            toggle_label=HIDE_LEVELS if course.is_expanded else START_PRACTICE,
        )
        for course in selection.list_courses()
    ]
