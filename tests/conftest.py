import pytest

from quizdeck.errors import ServerError
from quizdeck.models import Question
from quizdeck.session import StudySession


def make_question(id, topic="Networking", known=False, view_count=0):
    return Question(
        id=id, topic=topic, question=f"Question {id}?", answer=f"Answer {id}",
        known=known, view_count=view_count,
    )


class FakeApi:
    """In-memory stand-in for QuestionApi that records every call."""

    def __init__(self):
        self.topics = ["Networking", "Storage"]
        self.questions = {
            "Networking": [make_question(1), make_question(2), make_question(3)],
            "Storage": [make_question(10, topic="Storage")],
        }
        self.calls = []
        self.failures = {}
        self.upload_reply = {"message": "File uploaded successfully", "count": 4}
        # hooks run during a call, before it returns
        self.during = {}

    def fail(self, method, error=None):
        self.failures[method] = error or ServerError(500, "boom")

    def _call(self, method, *args):
        self.calls.append((method, *args))
        if method in self.during:
            self.during[method]()
        if method in self.failures:
            raise self.failures[method]

    def list_topics(self):
        self._call("list_topics")
        return list(self.topics)

    def list_questions(self, topic):
        self._call("list_questions", topic)
        return list(self.questions.get(topic, []))

    def upload(self, path):
        self._call("upload", path)
        return self.upload_reply

    def mark_known(self, question_id):
        self._call("mark_known", question_id)

    def increment_view(self, question_id):
        self._call("increment_view", question_id)

    def clear_all(self):
        self._call("clear_all")

    def called(self, method):
        return [c for c in self.calls if c[0] == method]


@pytest.fixture
def api():
    return FakeApi()


@pytest.fixture
def session(api):
    return StudySession(api)


@pytest.fixture
def notices(session):
    """Collect every notice the session publishes."""
    received = []
    session.subscribe(received.append)
    return received
