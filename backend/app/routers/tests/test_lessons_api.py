"""Tests for lesson endpoints and lesson completion."""

import pytest
from sqlalchemy import func, select

from app.core.security import create_access_token
from app.models.progress import LessonCompletion
from app.models.user import UserRole


@pytest.fixture
def teacher(make_user):
    return make_user(UserRole.TEACHER)


@pytest.fixture
def student(make_user):
    return make_user(UserRole.STUDENT)


@pytest.fixture
def course(teacher, make_course):
    return make_course(teacher, "Geometry")


def lesson_payload(course_id, **overrides):
    payload = {
        "title": "Angles",
        "subtitle": "Intro",
        "type": "video",
        "courseId": course_id,
        "content": {"url": "https://video.example.com/angles"},
    }
    payload.update(overrides)
    return payload


def test_owner_creates_lesson(client, teacher, course, auth_headers):
    response = client.post(
        "/api/lessons", json=lesson_payload(course.id), headers=auth_headers(teacher)
    )

    assert response.status_code == 201
    data = response.json()
    assert data["courseId"] == course.id
    assert data["type"] == "video"
    assert data["content"] == {"url": "https://video.example.com/angles"}


def test_lesson_type_defaults_to_text(client, teacher, course, auth_headers):
    payload = lesson_payload(course.id)
    del payload["type"]

    response = client.post("/api/lessons", json=payload, headers=auth_headers(teacher))

    assert response.json()["type"] == "text"


def test_unknown_lesson_type_rejected(client, teacher, course, auth_headers):
    response = client.post(
        "/api/lessons", json=lesson_payload(course.id, type="podcast"), headers=auth_headers(teacher)
    )

    assert response.status_code == 422


def test_other_teacher_cannot_add_lesson(client, make_user, course, auth_headers):
    other = make_user(UserRole.TEACHER)

    response = client.post(
        "/api/lessons", json=lesson_payload(course.id), headers=auth_headers(other)
    )

    assert response.status_code == 403
    assert response.json()["detail"] == "You can only add lessons to your own courses"


def test_student_cannot_add_lesson(client, student, course, auth_headers):
    response = client.post(
        "/api/lessons", json=lesson_payload(course.id), headers=auth_headers(student)
    )

    assert response.status_code == 403


def test_add_lesson_to_missing_course(client, teacher, auth_headers):
    response = client.post(
        "/api/lessons", json=lesson_payload(9999), headers=auth_headers(teacher)
    )

    assert response.status_code == 404


def test_new_lesson_appears_in_course_detail(client, teacher, course, auth_headers):
    client.post("/api/lessons", json=lesson_payload(course.id), headers=auth_headers(teacher))

    data = client.get(f"/api/courses/{course.id}").json()

    assert data["numberOfLessons"] == 1
    assert data["lessons"][0]["title"] == "Angles"


def test_get_lesson_anonymous(client, course, make_lesson):
    lesson = make_lesson(course, "Triangles")

    response = client.get(f"/api/lessons/{lesson.id}")

    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "Triangles"
    assert data["content"] == {"body": "Triangles body"}
    assert data["isCompleted"] is False


def test_get_missing_lesson(client):
    assert client.get("/api/lessons/9999").status_code == 404


def test_complete_requires_authentication(client, course, make_lesson):
    lesson = make_lesson(course)

    response = client.post(f"/api/lessons/{lesson.id}/complete")

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_complete_lesson(client, student, course, make_lesson, auth_headers):
    lesson = make_lesson(course)

    response = client.post(f"/api/lessons/{lesson.id}/complete", headers=auth_headers(student))

    assert response.status_code == 200
    data = response.json()
    assert data["lessonId"] == lesson.id
    assert data["completedAt"]

    detail = client.get(f"/api/lessons/{lesson.id}", headers=auth_headers(student)).json()
    assert detail["isCompleted"] is True


def test_complete_lesson_twice_keeps_one_record(client, db, student, course, make_lesson, auth_headers):
    lesson = make_lesson(course)
    headers = auth_headers(student)

    first = client.post(f"/api/lessons/{lesson.id}/complete", headers=headers)
    second = client.post(f"/api/lessons/{lesson.id}/complete", headers=headers)

    assert first.status_code == second.status_code == 200
    count = db.scalar(
        select(func.count(LessonCompletion.id)).where(
            LessonCompletion.user_id == student.id,
            LessonCompletion.lesson_id == lesson.id,
        )
    )
    assert count == 1
    assert client.get(f"/api/lessons/{lesson.id}", headers=headers).json()["isCompleted"] is True


def test_completion_is_per_user(client, make_user, student, course, make_lesson, auth_headers):
    lesson = make_lesson(course)
    other = make_user(UserRole.STUDENT)

    client.post(f"/api/lessons/{lesson.id}/complete", headers=auth_headers(student))

    detail = client.get(f"/api/lessons/{lesson.id}", headers=auth_headers(other)).json()
    assert detail["isCompleted"] is False


def test_complete_missing_lesson(client, student, auth_headers):
    response = client.post("/api/lessons/9999/complete", headers=auth_headers(student))

    assert response.status_code == 404
    assert response.json()["detail"] == "Lesson not found"


def test_complete_lesson_id_out_of_range(client, student, auth_headers):
    response = client.post(
        "/api/lessons/2147483648000000000000/complete", headers=auth_headers(student)
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "Lesson not found"


def test_get_lesson_id_out_of_range(client):
    assert client.get("/api/lessons/2147483648").status_code == 404


def test_add_lesson_to_out_of_range_course(client, teacher, auth_headers):
    response = client.post(
        "/api/lessons", json=lesson_payload(2**40), headers=auth_headers(teacher)
    )

    assert response.status_code == 404


def test_complete_with_token_for_unknown_user(client, db, course, make_lesson):
    lesson = make_lesson(course)
    token = create_access_token(subject="9999", additional_claims={"role": "student"})

    response = client.post(
        f"/api/lessons/{lesson.id}/complete", headers={"Authorization": f"Bearer {token}"}
    )

    assert response.status_code == 401
    assert db.scalar(select(func.count(LessonCompletion.id))) == 0
