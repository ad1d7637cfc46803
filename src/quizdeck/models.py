"""Data classes for questions and derived progress."""
from dataclasses import dataclass

Topic = str


@dataclass(frozen=True)
class Question:
    id: int
    topic: str
    question: str
    answer: str
    known: bool = False
    view_count: int = 0

    @classmethod
    def from_api(cls, data: dict) -> "Question":
        """Build a Question from the backend's JSON representation."""
        return cls(
            id=data["id"],
            topic=data.get("topic") or "",
            question=data.get("question") or "",
            answer=data.get("answer") or "",
            known=bool(data.get("known", False)),
            view_count=max(0, int(data.get("viewCount") or 0)),
        )


@dataclass(frozen=True)
class Stats:
    total: int = 0
    known: int = 0

    @property
    def pct(self) -> int:
        if self.total == 0:
            return 0
        # Half-up, not Python's banker's rounding
        return int(self.known * 100 / self.total + 0.5)
