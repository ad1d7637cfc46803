"""Tests for data model classes."""
import dataclasses

import pytest

from quizdeck.models import Question, Stats


def test_question_from_api():
    q = Question.from_api({
        "id": 7, "topic": "Java", "question": "What is JPA?", "answer": "Persistence API",
        "known": True, "viewCount": 3,
    })
    assert q.id == 7
    assert q.topic == "Java"
    assert q.question == "What is JPA?"
    assert q.answer == "Persistence API"
    assert q.known is True
    assert q.view_count == 3


def test_question_from_api_defaults():
    q = Question.from_api({"id": 1, "topic": "Java", "question": "Q?", "answer": "A"})
    assert q.known is False
    assert q.view_count == 0


def test_question_from_api_null_fields():
    q = Question.from_api({"id": 1, "topic": None, "question": None, "answer": None, "viewCount": None})
    assert q.topic == ""
    assert q.question == ""
    assert q.answer == ""
    assert q.view_count == 0


def test_question_from_api_negative_view_count_clamped():
    q = Question.from_api({"id": 1, "viewCount": -4})
    assert q.view_count == 0


def test_question_is_immutable():
    q = Question(id=1, topic="T", question="Q", answer="A")
    with pytest.raises(dataclasses.FrozenInstanceError):
        q.known = True


def test_stats_defaults():
    s = Stats()
    assert s.total == 0
    assert s.known == 0
    assert s.pct == 0


def test_stats_pct():
    assert Stats(total=4, known=1).pct == 25
    assert Stats(total=3, known=1).pct == 33
    assert Stats(total=3, known=2).pct == 67
    assert Stats(total=5, known=5).pct == 100


def test_stats_pct_rounds_half_up():
    assert Stats(total=8, known=1).pct == 13
    assert Stats(total=8, known=3).pct == 38
