"""Study session state: topic selection, question cursor and progress."""
import logging
import threading
from dataclasses import dataclass, replace
from typing import Callable, Iterable

from quizdeck.errors import QuizDeckError, ServerError
from quizdeck.models import Question, Stats, Topic
from quizdeck.stats import compute_stats

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notice:
    level: str  # "info" or "error"
    message: str


Listener = Callable[[Notice], None]


def describe_error(error: QuizDeckError) -> str:
    if isinstance(error, ServerError) and error.message:
        return error.message
    return str(error)


class StudySession:
    """Owns all state of one study session and talks to the backend.

    Every handler catches backend errors itself: failures are logged and
    published as a ``Notice`` to subscribers, never raised. State changes
    happen under a lock; network calls do not hold it. Responses that
    arrive after the user has navigated away (or picked another topic)
    are fenced off with generation counters.
    """

    def __init__(self, api):
        self.api = api
        self._lock = threading.RLock()
        self._listeners: list[Listener] = []
        # bumped on every cursor move, topic change and clear
        self._generation = 0
        # bumped on every topic change and clear
        self._selection = 0
        self.topics: tuple[Topic, ...] = ()
        self.selected_topic: Topic | None = None
        self._questions: tuple[Question, ...] = ()
        self.stats = Stats()
        self.current_index = 0
        self.show_answer = False
        self.selected_file = None

    # --- state -------------------------------------------------------

    @property
    def questions(self) -> tuple[Question, ...]:
        return self._questions

    @questions.setter
    def questions(self, value: Iterable[Question]) -> None:
        with self._lock:
            self._questions = tuple(value)
            self.stats = compute_stats(self._questions)

    @property
    def current_question(self) -> Question | None:
        with self._lock:
            if not self._questions:
                return None
            return self._questions[self.current_index]

    @property
    def position(self) -> tuple[int, int]:
        """1-based position of the cursor and the number of questions."""
        with self._lock:
            if not self._questions:
                return 0, 0
            return self.current_index + 1, len(self._questions)

    @property
    def can_navigate(self) -> bool:
        return len(self._questions) > 1

    # --- notices -----------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a notice listener. Returns a function that removes it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)
        return unsubscribe

    def _notify(self, level: str, message: str) -> None:
        notice = Notice(level, message)
        with self._lock:
            listeners = list(self._listeners)
        # listeners run outside the lock
        for listener in listeners:
            try:
                listener(notice)
            except Exception:
                log.exception("Notice listener %r failed", listener)

    def _fail(self, action: str, error: QuizDeckError) -> None:
        log.error("%s: %s", action, error)
        self._notify("error", f"{action}: {describe_error(error)}")

    # --- loading -----------------------------------------------------

    def load_topics(self) -> tuple[Topic, ...] | None:
        try:
            topics = self.api.list_topics()
        except QuizDeckError as e:
            self._fail("Could not load topics", e)
            return None
        with self._lock:
            self.topics = tuple(topics)
            return self.topics

    def select_topic(self, topic: Topic) -> tuple[Question, ...] | None:
        with self._lock:
            self.selected_topic = topic
            self.current_index = 0
            self.show_answer = False
            self._generation += 1
            self._selection += 1
        return self.load_questions(topic)

    def load_questions(self, topic: Topic) -> tuple[Question, ...] | None:
        with self._lock:
            selection = self._selection
        try:
            questions = self.api.list_questions(topic)
        except QuizDeckError as e:
            self._fail(f"Could not load questions for {topic!r}", e)
            return None
        with self._lock:
            if selection != self._selection:
                log.debug("Dropping questions for %r, topic changed meanwhile", topic)
                return None
            self.questions = questions
            self.current_index = 0
            self.show_answer = False
            self._generation += 1
            return self._questions

    # --- navigation --------------------------------------------------

    def _step(self, offset: int) -> None:
        with self._lock:
            if self._questions:
                self.current_index = (self.current_index + offset) % len(self._questions)
            self.show_answer = False
            self._generation += 1

    def next(self) -> None:
        self._step(1)

    def prev(self) -> None:
        self._step(-1)

    def skip(self) -> None:
        """Move on without revealing the answer."""
        self.next()

    # --- question actions --------------------------------------------

    def reveal(self) -> bool:
        """Show the answer and count a view on the backend.

        The local view count is left as loaded; it refreshes on the next
        question load.
        """
        with self._lock:
            question = self.current_question
            if question is None:
                return False
            generation = self._generation
        try:
            self.api.increment_view(question.id)
        except QuizDeckError as e:
            self._fail("Could not record view", e)
            return False
        with self._lock:
            if generation != self._generation:
                log.debug("Dropping reveal of question %s, cursor moved", question.id)
                return False
            self.show_answer = True
        return True

    def mark_known(self) -> bool:
        with self._lock:
            question = self.current_question
            if question is None or question.known:
                return False
            generation = self._generation
        try:
            self.api.mark_known(question.id)
        except QuizDeckError as e:
            self._fail("Could not mark question as known", e)
            return False
        with self._lock:
            self.questions = [
                replace(q, known=True) if q.id == question.id else q
                for q in self._questions
            ]
            if generation == self._generation:
                self.next()
            else:
                log.debug("Question %s marked known after the cursor moved", question.id)
        return True

    # --- data management ---------------------------------------------

    def choose_file(self, path) -> None:
        with self._lock:
            self.selected_file = path

    def upload(self, file=None) -> dict | None:
        path = file if file is not None else self.selected_file
        if path is None:
            log.debug("Upload requested without a file")
            return None
        try:
            reply = self.api.upload(path)
        except QuizDeckError as e:
            log.error("Upload of %s failed: %s", path, e)
            self._notify("error", f"Upload failed: {describe_error(e)}")
            return None
        count = reply.get("count")
        message = "File uploaded"
        if count is not None:
            message += f" ({count} questions)"
        self._notify("info", message)
        self.load_topics()
        with self._lock:
            self.selected_file = None
        return reply

    def clear_all(self, confirm: Callable[[], bool]) -> bool:
        """Delete every question on the backend once ``confirm()`` agrees."""
        if not confirm():
            return False
        try:
            self.api.clear_all()
        except QuizDeckError as e:
            self._fail("Could not clear data", e)
            return False
        with self._lock:
            self.topics = ()
            self.questions = ()
            self.selected_topic = None
            self.current_index = 0
            self.show_answer = False
            self._generation += 1
            self._selection += 1
        self._notify("info", "All data deleted")
        return True
