"""Tests for coursedeck.core.courses – data model and YAML course loading."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from coursedeck.core.courses import (
    Course,
    CourseNotFoundError,
    CourseRepository,
    DifficultySplit,
    Level,
    apply_unlock_rule,
)


def _level(level_id: int, completed: bool = False, locked: bool = False) -> Level:
    return Level(
        id=level_id,
        points=10 * level_id,
        time_required=f"{level_id}hrs",
        proficiency_percent=0,
        is_completed=completed,
        is_locked=locked,
    )


def _course_data(course_id: int = 1, **overrides) -> dict:
    data = {
        "id": course_id,
        "title": "Words in Context",
        "progress": 34,
        "levels": [
            {"id": 1, "points": 40, "time": "4hrs", "proficiency": 100, "completed": True},
            {"id": 2, "points": 60, "time": "6hrs", "proficiency": 0, "locked": True},
        ],
    }
    data.update(overrides)
    return data


def _write_yaml(path: Path, data) -> None:
    path.write_text(yaml.dump(data, allow_unicode=True, default_flow_style=False), encoding="utf-8")


@pytest.fixture()
def courses_dir(tmp_path: Path) -> Path:
    d = tmp_path / "courses"
    d.mkdir()
    return d


# ---------------------------------------------------------------------------
# Dataclasses
# ---------------------------------------------------------------------------

class TestDataclasses:
    def test_level_frozen(self):
        lv = _level(1)
        with pytest.raises(AttributeError):
            lv.points = 5  # type: ignore[misc]

    def test_course_defaults(self):
        c = Course(id=1, title="T", progress_percent=0, levels=(_level(1),))
        assert c.is_expanded is False
        assert c.difficulty == DifficultySplit(40, 30, 30)

    def test_not_found_error_is_key_error(self):
        err = CourseNotFoundError(7)
        assert isinstance(err, KeyError)
        assert err.course_id == 7
        assert "7" in str(err)


# ---------------------------------------------------------------------------
# apply_unlock_rule
# ---------------------------------------------------------------------------

class TestUnlockRule:
    def test_all_completed_stays_unlocked(self):
        levels = apply_unlock_rule([_level(1, completed=True), _level(2, completed=True), _level(3)])
        assert [lv.is_locked for lv in levels] == [False, False, False]

    def test_incomplete_level_locks_the_rest(self):
        levels = apply_unlock_rule([_level(1, completed=True), _level(2), _level(3), _level(4)])
        assert [lv.is_locked for lv in levels] == [False, False, True, True]

    def test_declared_lock_propagates(self):
        levels = apply_unlock_rule(
            [_level(1, completed=True), _level(2, completed=True, locked=True), _level(3, completed=True)]
        )
        assert [lv.is_locked for lv in levels] == [False, True, True]

    def test_unlocked_levels_form_prefix(self):
        levels = apply_unlock_rule(
            [_level(1, completed=True), _level(2, locked=True), _level(3, completed=True), _level(4)]
        )
        flags = [lv.is_locked for lv in levels]
        first_locked = flags.index(True)
        assert all(flags[first_locked:])

    def test_first_level_unlocked_unless_declared(self):
        assert apply_unlock_rule([_level(1)])[0].is_locked is False
        assert apply_unlock_rule([_level(1, locked=True)])[0].is_locked is True

    def test_unlock_all(self):
        levels = apply_unlock_rule([_level(1, locked=True), _level(2, locked=True)], unlock_all=True)
        assert not any(lv.is_locked for lv in levels)

    def test_unchanged_levels_are_same_objects(self):
        first = _level(1, completed=True)
        assert apply_unlock_rule([first])[0] is first


# ---------------------------------------------------------------------------
# CourseRepository – happy paths
# ---------------------------------------------------------------------------

class TestCourseRepositoryHappy:
    def test_single_course(self, courses_dir: Path):
        _write_yaml(courses_dir / "course1.yaml", _course_data())
        repo = CourseRepository(courses_dir)
        assert len(repo.all()) == 1
        course = repo.get(1)
        assert course.title == "Words in Context"
        assert course.progress_percent == 34
        assert course.is_expanded is False
        assert [lv.id for lv in course.levels] == [1, 2]
        assert course.levels[0].time_required == "4hrs"
        assert course.levels[1].is_locked is True

    def test_sorted_by_file_number(self, courses_dir: Path):
        _write_yaml(courses_dir / "course10.yaml", _course_data(10))
        _write_yaml(courses_dir / "course2.yaml", _course_data(2))
        _write_yaml(courses_dir / "course1.yaml", _course_data(1))
        repo = CourseRepository(courses_dir)
        assert [c.id for c in repo.all()] == [1, 2, 10]

    def test_difficulty_split(self, courses_dir: Path):
        _write_yaml(
            courses_dir / "course1.yaml",
            _course_data(difficulty={"easy": 50, "medium": 30, "hard": 20}),
        )
        assert CourseRepository(courses_dir).get(1).difficulty == DifficultySplit(50, 30, 20)

    def test_unlock_rule_applied_on_load(self, courses_dir: Path):
        levels = [
            {"id": 1, "points": 1, "time": "1h", "proficiency": 10},
            {"id": 2, "points": 1, "time": "1h", "proficiency": 0},
        ]
        _write_yaml(courses_dir / "course1.yaml", _course_data(levels=levels))
        course = CourseRepository(courses_dir).get(1)
        assert [lv.is_locked for lv in course.levels] == [False, True]

    def test_unlock_all(self, courses_dir: Path):
        _write_yaml(courses_dir / "course1.yaml", _course_data())
        course = CourseRepository(courses_dir, unlock_all=True).get(1)
        assert not any(lv.is_locked for lv in course.levels)

    def test_title_stripped(self, courses_dir: Path):
        _write_yaml(courses_dir / "course1.yaml", _course_data(title="  Padded  "))
        assert CourseRepository(courses_dir).get(1).title == "Padded"

    def test_bundled_data_loads(self):
        repo = CourseRepository()
        courses = repo.all()
        assert courses
        for course in courses:
            assert course.levels
            assert course.levels[0].id == 1


# ---------------------------------------------------------------------------
# CourseRepository – error paths
# ---------------------------------------------------------------------------

class TestCourseRepositoryErrors:
    def test_missing_directory(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            CourseRepository(tmp_path / "nope")

    def test_no_yaml_files(self, courses_dir: Path):
        with pytest.raises(ValueError, match="No course files"):
            CourseRepository(courses_dir)

    def test_empty_yaml(self, courses_dir: Path):
        (courses_dir / "course1.yaml").write_text("", encoding="utf-8")
        with pytest.raises(ValueError, match="expected YAML"):
            CourseRepository(courses_dir)

    def test_missing_title(self, courses_dir: Path):
        data = _course_data()
        del data["title"]
        _write_yaml(courses_dir / "course1.yaml", data)
        with pytest.raises(ValueError, match="missing or invalid 'title'"):
            CourseRepository(courses_dir)

    def test_invalid_id(self, courses_dir: Path):
        _write_yaml(courses_dir / "course1.yaml", _course_data(course_id="one"))
        with pytest.raises(ValueError, match="'id'"):
            CourseRepository(courses_dir)

    def test_progress_out_of_range(self, courses_dir: Path):
        _write_yaml(courses_dir / "course1.yaml", _course_data(progress=140))
        with pytest.raises(ValueError, match="'progress' must be between 0 and 100"):
            CourseRepository(courses_dir)

    def test_empty_levels(self, courses_dir: Path):
        _write_yaml(courses_dir / "course1.yaml", _course_data(levels=[]))
        with pytest.raises(ValueError, match="'levels' must be a non-empty list"):
            CourseRepository(courses_dir)

    def test_negative_points(self, courses_dir: Path):
        levels = [{"id": 1, "points": -5, "time": "1h", "proficiency": 0}]
        _write_yaml(courses_dir / "course1.yaml", _course_data(levels=levels))
        with pytest.raises(ValueError, match="'points' must not be negative"):
            CourseRepository(courses_dir)

    def test_level_ids_out_of_order(self, courses_dir: Path):
        levels = [
            {"id": 2, "points": 1, "time": "1h", "proficiency": 0},
            {"id": 1, "points": 1, "time": "1h", "proficiency": 0},
        ]
        _write_yaml(courses_dir / "course1.yaml", _course_data(levels=levels))
        with pytest.raises(ValueError, match="level ids must run"):
            CourseRepository(courses_dir)

    def test_duplicate_course_id(self, courses_dir: Path):
        _write_yaml(courses_dir / "course1.yaml", _course_data(1))
        _write_yaml(courses_dir / "course2.yaml", _course_data(1))
        with pytest.raises(ValueError, match="duplicate course id"):
            CourseRepository(courses_dir)

    def test_difficulty_must_sum_to_100(self, courses_dir: Path):
        _write_yaml(
            courses_dir / "course1.yaml",
            _course_data(difficulty={"easy": 50, "medium": 30, "hard": 30}),
        )
        with pytest.raises(ValueError, match="add up to 100"):
            CourseRepository(courses_dir)

    def test_get_missing_id(self, courses_dir: Path):
        _write_yaml(courses_dir / "course1.yaml", _course_data())
        repo = CourseRepository(courses_dir)
        with pytest.raises(CourseNotFoundError):
            repo.get(99)
