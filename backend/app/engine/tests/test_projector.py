"""Tests for progress projections.

Most of these run against an in-memory fake ledger, with unsaved model
instances standing in for database rows.
"""

from collections import defaultdict

import pytest

from app.engine.projector import ProgressProjector, calculate_progress
from app.models.course import Course, Lesson

VIEWER = 1
OTHER_VIEWER = 2


class FakeLedger:
    """Dictionary-backed stand-in for CompletionLedger."""

    def __init__(self, lessons):
        self.course_of = {lesson.id: lesson.course_id for lesson in lessons}
        self.facts = set()
        self.calls = defaultdict(int)

    def complete(self, user_id, *lesson_ids):
        for lesson_id in lesson_ids:
            self.facts.add((user_id, lesson_id))

    def is_completed(self, user_id, lesson_id):
        self.calls["is_completed"] += 1
        return (user_id, lesson_id) in self.facts

    def completed_lesson_ids(self, user_id, course_id):
        self.calls["completed_lesson_ids"] += 1
        return {
            lesson_id
            for uid, lesson_id in self.facts
            if uid == user_id and self.course_of[lesson_id] == course_id
        }

    def completed_lessons_by_course(self, user_id):
        self.calls["completed_lessons_by_course"] += 1
        by_course = defaultdict(set)
        for uid, lesson_id in self.facts:
            if uid == user_id:
                by_course[self.course_of[lesson_id]].add(lesson_id)
        return dict(by_course)


def make_course(course_id):
    return Course(id=course_id, title=f"Course {course_id}", description="", created_by=99)


def make_lessons(course, count, start_id):
    return [
        Lesson(
            id=start_id + i,
            course_id=course.id,
            title=f"L{start_id + i}",
            type="text",
            content={},
        )
        for i in range(count)
    ]


@pytest.fixture
def course():
    return make_course(1)


@pytest.fixture
def two_lessons(course):
    return make_lessons(course, 2, start_id=1)


class TestCalculateProgress:
    @pytest.mark.parametrize(
        "completed,total,expected",
        [
            (0, 0, 0),
            (0, 3, 0),
            (1, 3, 33),
            (2, 3, 67),
            (3, 3, 100),
            (1, 2, 50),
            (1, 8, 13),  # 12.5 rounds half up
            (3, 8, 38),  # 37.5 rounds half up
            (1, 7, 14),
            (199, 200, 100),  # 99.5 rounds half up
        ],
    )
    def test_pinned_values(self, completed, total, expected):
        assert calculate_progress(completed, total) == expected

    def test_bounds(self):
        for total in range(0, 25):
            for completed in range(0, total + 1):
                assert 0 <= calculate_progress(completed, total) <= 100


class TestCourseDetail:
    def test_half_then_full_completion(self, course, two_lessons):
        """One of two lessons is 50%, both is 100%."""
        l1, l2 = two_lessons
        ledger = FakeLedger(two_lessons)
        projector = ProgressProjector(ledger)

        ledger.complete(VIEWER, l1.id)
        view = projector.project_course_detail(course, two_lessons, VIEWER)

        assert view.stats.number_of_lessons == 2
        assert view.stats.completed_lessons == 1
        assert view.stats.progress == 50
        assert [(lv.id, lv.is_completed) for lv in view.lessons] == [
            (l1.id, True),
            (l2.id, False),
        ]

        ledger.complete(VIEWER, l2.id)
        view = projector.project_course_detail(course, two_lessons, VIEWER)

        assert view.stats.completed_lessons == 2
        assert view.stats.progress == 100

    def test_one_of_three_is_33(self, course):
        lessons = make_lessons(course, 3, start_id=1)
        ledger = FakeLedger(lessons)
        ledger.complete(VIEWER, lessons[0].id)

        view = ProgressProjector(ledger).project_course_detail(course, lessons, VIEWER)

        assert view.stats.progress == 33

    def test_anonymous_viewer_sees_zero(self, course, two_lessons):
        ledger = FakeLedger(two_lessons)
        ledger.complete(OTHER_VIEWER, *(lesson.id for lesson in two_lessons))

        view = ProgressProjector(ledger).project_course_detail(course, two_lessons, None)

        assert view.stats.completed_lessons == 0
        assert view.stats.progress == 0
        assert all(not lv.is_completed for lv in view.lessons)
        assert ledger.calls["completed_lesson_ids"] == 0

    def test_other_viewers_completions_do_not_count(self, course, two_lessons):
        ledger = FakeLedger(two_lessons)
        ledger.complete(OTHER_VIEWER, two_lessons[0].id)

        view = ProgressProjector(ledger).project_course_detail(course, two_lessons, VIEWER)

        assert view.stats.completed_lessons == 0

    def test_empty_course(self, course):
        ledger = FakeLedger([])

        view = ProgressProjector(ledger).project_course_detail(course, [], VIEWER)

        assert view.stats.number_of_lessons == 0
        assert view.stats.progress == 0
        assert view.lessons == []

    def test_completed_count_matches_lesson_flags(self, course):
        lessons = make_lessons(course, 5, start_id=1)
        ledger = FakeLedger(lessons)
        ledger.complete(VIEWER, lessons[0].id, lessons[2].id, lessons[4].id)

        view = ProgressProjector(ledger).project_course_detail(course, lessons, VIEWER)

        assert view.stats.completed_lessons == sum(lv.is_completed for lv in view.lessons)
        assert view.stats.progress == 60

    def test_completions_outside_given_lessons_are_ignored(self, course):
        """Only lessons passed in count toward the detail."""
        lessons = make_lessons(course, 3, start_id=1)
        ledger = FakeLedger(lessons)
        ledger.complete(VIEWER, lessons[0].id, lessons[2].id)

        view = ProgressProjector(ledger).project_course_detail(course, lessons[:2], VIEWER)

        assert view.stats.number_of_lessons == 2
        assert view.stats.completed_lessons == 1


class TestCourseSummary:
    def test_summary_agrees_with_detail(self, course):
        lessons = make_lessons(course, 3, start_id=1)
        ledger = FakeLedger(lessons)
        ledger.complete(VIEWER, lessons[1].id)
        projector = ProgressProjector(ledger)

        for viewer in (VIEWER, OTHER_VIEWER, None):
            detail = projector.project_course_detail(course, lessons, viewer)
            summary = projector.project_course_summary(course, len(lessons), viewer)
            assert summary.stats == detail.stats

    def test_anonymous_summary(self, course, two_lessons):
        ledger = FakeLedger(two_lessons)
        ledger.complete(OTHER_VIEWER, two_lessons[0].id)

        summary = ProgressProjector(ledger).project_course_summary(course, 2, None)

        assert summary.stats.number_of_lessons == 2
        assert summary.stats.completed_lessons == 0
        assert summary.stats.progress == 0
        assert ledger.calls["completed_lessons_by_course"] == 0

    def test_list_reads_ledger_once(self):
        courses = [make_course(i) for i in (1, 2, 3)]
        lessons = [
            *make_lessons(courses[0], 2, start_id=10),
            *make_lessons(courses[1], 4, start_id=20),
            *make_lessons(courses[2], 1, start_id=30),
        ]
        ledger = FakeLedger(lessons)
        ledger.complete(VIEWER, 10, 20, 21, 22)

        summaries = ProgressProjector(ledger).project_course_summaries(
            [(courses[0], 2), (courses[1], 4), (courses[2], 1)], VIEWER
        )

        assert [(s.course.id, s.stats.completed_lessons, s.stats.progress) for s in summaries] == [
            (1, 1, 50),
            (2, 3, 75),
            (3, 0, 0),
        ]
        assert ledger.calls["completed_lessons_by_course"] == 1
        assert ledger.calls["completed_lesson_ids"] == 0

    def test_anonymous_list_skips_ledger(self):
        courses = [make_course(i) for i in (1, 2)]
        ledger = FakeLedger([])

        summaries = ProgressProjector(ledger).project_course_summaries(
            [(courses[0], 3), (courses[1], 0)], None
        )

        assert [s.stats.progress for s in summaries] == [0, 0]
        assert ledger.calls == {}


class TestLessonDetail:
    def test_completed_lesson(self, two_lessons):
        ledger = FakeLedger(two_lessons)
        ledger.complete(VIEWER, two_lessons[0].id)
        projector = ProgressProjector(ledger)

        assert projector.project_lesson_detail(two_lessons[0], VIEWER).is_completed is True
        assert projector.project_lesson_detail(two_lessons[1], VIEWER).is_completed is False

    def test_anonymous_lesson(self, two_lessons):
        ledger = FakeLedger(two_lessons)
        ledger.complete(OTHER_VIEWER, two_lessons[0].id)

        view = ProgressProjector(ledger).project_lesson_detail(two_lessons[0], None)

        assert view.is_completed is False
        assert view.title == two_lessons[0].title
        assert ledger.calls["is_completed"] == 0
