# tests/test_stats.py
from conftest import make_question
from quizdeck.stats import compute_stats, progress_label, progress_color


def test_compute_stats_empty():
    stats = compute_stats([])
    assert stats.total == 0
    assert stats.known == 0
    assert stats.pct == 0


def test_compute_stats_counts_known():
    questions = [make_question(1, known=True), make_question(2), make_question(3, known=True)]
    stats = compute_stats(questions)
    assert stats.total == 3
    assert stats.known == 2
    assert stats.pct == 67


def test_compute_stats_all_known_is_100():
    questions = [make_question(i, known=True) for i in range(1, 8)]
    stats = compute_stats(questions)
    assert stats.known == stats.total == 7
    assert stats.pct == 100


def test_compute_stats_bounds():
    for n in range(0, 6):
        for k in range(0, n + 1):
            questions = [make_question(i, known=i < k) for i in range(n)]
            stats = compute_stats(questions)
            assert stats.total == n
            assert 0 <= stats.known <= stats.total


def test_compute_stats_accepts_generator():
    stats = compute_stats(make_question(i) for i in range(4))
    assert stats.total == 4


def test_progress_label():
    assert progress_label(100) == "DONE"
    assert progress_label(80) == "GOOD"
    assert progress_label(50) == "HALFWAY"
    assert progress_label(10) == "STARTED"
    assert progress_label(0) == "NOT STARTED"


def test_progress_color():
    assert progress_color(100) == "green"
    assert progress_color(75) == "yellow"
    assert progress_color(60) == "dark_orange"
    assert progress_color(0) == "red"
