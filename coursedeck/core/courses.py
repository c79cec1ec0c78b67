from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

import yaml

from coursedeck.core.settings import DEFAULT_DATA_DIR

logger = logging.getLogger(__name__)


class CourseNotFoundError(KeyError):
    """Raised when a course id is not part of the course list."""

    def __init__(self, course_id: int) -> None:
        super().__init__(course_id)
        self.course_id = course_id

    def __str__(self) -> str:
        return f"No course with id {self.course_id!r}"


@dataclass(frozen=True)
class Level:
    id: int
    points: int
    time_required: str
    proficiency_percent: int
    is_completed: bool = False
    is_locked: bool = False


@dataclass(frozen=True)
class DifficultySplit:
    """Widths (percent) of the easy/medium/hard segments of a course progress bar."""

    easy: int = 40
    medium: int = 30
    hard: int = 30


@dataclass(frozen=True)
class Course:
    id: int
    title: str
    progress_percent: int
    levels: Tuple[Level, ...]
    difficulty: DifficultySplit = field(default_factory=DifficultySplit)
    is_expanded: bool = False


def apply_unlock_rule(levels: Iterable[Level], unlock_all: bool = False) -> Tuple[Level, ...]:
    """Normalize lock flags so the unlocked levels form a single prefix.

    A level stays locked if it is declared locked, and becomes locked when the
    level before it is locked or not completed. With ``unlock_all`` every
    level is unlocked.
    """
    result: List[Level] = []
    previous: Optional[Level] = None
    for level in levels:
        if unlock_all:
            locked = False
        else:
            locked = level.is_locked or (
                previous is not None and (previous.is_locked or not previous.is_completed)
            )
        if locked != level.is_locked:
            level = replace(level, is_locked=locked)
        result.append(level)
        previous = level
    return tuple(result)


class CourseRepository:
    """Static course list loaded from ``course*.yaml`` files."""

    def __init__(self, data_dir: Optional[Path] = None, unlock_all: bool = False) -> None:
        self._data_dir = Path(data_dir) if data_dir is not None else DEFAULT_DATA_DIR
        self._unlock_all = unlock_all
        self._courses = self._load_courses()

    def all(self) -> List[Course]:
        return list(self._courses.values())

    def get(self, course_id: int) -> Course:
        try:
            return self._courses[course_id]
        except KeyError:
            raise CourseNotFoundError(course_id) from None

    def _load_courses(self) -> Dict[int, Course]:
        base_dir = self._data_dir
        if not base_dir.exists():
            raise FileNotFoundError(f"Courses directory not found: {base_dir}")

        courses: Dict[int, Course] = {}

        def _sort_key(p: Path) -> tuple[int, str]:
            m = re.match(r"^course(\d+)$", p.stem)
            if m:
                return (int(m.group(1)), p.stem)
            return (10**9, p.stem)

        for course_path in sorted(base_dir.glob("course*.yaml"), key=_sort_key):
            raw = yaml.safe_load(course_path.read_text(encoding="utf-8"))
            course = _parse_course(course_path.name, raw, self._unlock_all)
            if course.id in courses:
                raise ValueError(f"{course_path.name}: duplicate course id {course.id}")
            courses[course.id] = course

        if not courses:
            raise ValueError(f"No course files (course*.yaml) found in {base_dir}")
        logger.info("Loaded %d courses from %s", len(courses), base_dir)
        return courses


def _parse_course(name: str, raw: Any, unlock_all: bool) -> Course:
    if not raw or not isinstance(raw, dict):
        raise ValueError(f"{name}: expected YAML with 'id', 'title' and 'levels'")
    title = raw.get("title")
    if not title or not isinstance(title, str):
        raise ValueError(f"{name}: missing or invalid 'title'")
    course_id = _int_field(name, raw, "id")
    progress = _percent_field(name, raw, "progress", default=0)

    difficulty = DifficultySplit()
    raw_difficulty = raw.get("difficulty")
    if raw_difficulty is not None:
        if not isinstance(raw_difficulty, dict):
            raise ValueError(f"{name}: 'difficulty' must be a mapping")
        difficulty = DifficultySplit(
            easy=_percent_field(name, raw_difficulty, "easy"),
            medium=_percent_field(name, raw_difficulty, "medium"),
            hard=_percent_field(name, raw_difficulty, "hard"),
        )
        if difficulty.easy + difficulty.medium + difficulty.hard != 100:
            raise ValueError(f"{name}: 'difficulty' segments must add up to 100")

    raw_levels = raw.get("levels")
    if not raw_levels or not isinstance(raw_levels, list):
        raise ValueError(f"{name}: 'levels' must be a non-empty list")
    levels = [_parse_level(name, item) for item in raw_levels]
    for expected, level in enumerate(levels, start=1):
        if level.id != expected:
            raise ValueError(f"{name}: level ids must run 1..{len(levels)}, got {level.id} at position {expected}")

    return Course(
        id=course_id,
        title=title.strip(),
        progress_percent=progress,
        levels=apply_unlock_rule(levels, unlock_all=unlock_all),
        difficulty=difficulty,
    )


def _parse_level(name: str, raw: Any) -> Level:
    if not isinstance(raw, dict):
        raise ValueError(f"{name}: each level must be a mapping")
    points = _int_field(name, raw, "points", default=0)
    if points < 0:
        raise ValueError(f"{name}: 'points' must not be negative")
    time_required = raw.get("time", "")
    return Level(
        id=_int_field(name, raw, "id"),
        points=points,
        time_required=str(time_required).strip(),
        proficiency_percent=_percent_field(name, raw, "proficiency", default=0),
        is_completed=bool(raw.get("completed", False)),
        is_locked=bool(raw.get("locked", False)),
    )


def _int_field(name: str, raw: dict, key: str, default: Optional[int] = None) -> int:
    value = raw.get(key, default)
    # bool is an int subclass; "id: yes" is a typo, not 1
    if value is None or isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name}: missing or invalid '{key}'")
    return value


def _percent_field(name: str, raw: dict, key: str, default: Optional[int] = None) -> int:
    value = _int_field(name, raw, key, default)
    if not 0 <= value <= 100:
        raise ValueError(f"{name}: '{key}' must be between 0 and 100")
    return value
