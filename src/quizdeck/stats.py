"""Progress statistics over a loaded question set."""
from typing import Iterable

from quizdeck.models import Question, Stats


def compute_stats(questions: Iterable[Question]) -> Stats:
    total = 0
    known = 0
    for q in questions:
        total += 1
        if q.known:
            known += 1
    return Stats(total=total, known=known)


def progress_label(pct: int) -> str:
    if pct >= 100:
        return "DONE"
    elif pct >= 75:
        return "GOOD"
    elif pct >= 50:
        return "HALFWAY"
    elif pct > 0:
        return "STARTED"
    return "NOT STARTED"


def progress_color(pct: int) -> str:
    if pct >= 100:
        return "green"
    elif pct >= 75:
        return "yellow"
    elif pct >= 50:
        return "dark_orange"
    return "red"
