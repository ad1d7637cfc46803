"""REST client for the question backend."""
import logging
import mimetypes
from pathlib import Path
from urllib.parse import quote

import requests

from quizdeck.config import DEFAULT_API_URL, DEFAULT_TIMEOUT
from quizdeck.errors import ServerError, TransportError, ValidationError
from quizdeck.models import Question

log = logging.getLogger(__name__)

SPREADSHEET_TYPES = {
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".xls": "application/vnd.ms-excel",
}


def guess_content_type(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix in SPREADSHEET_TYPES:
        return SPREADSHEET_TYPES[suffix]
    return mimetypes.guess_type(path.name)[0] or "application/octet-stream"


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text.strip()
    if isinstance(body, dict):
        return str(body.get("error") or body.get("message") or "")
    return ""


def _json_list(response: requests.Response) -> list:
    try:
        body = response.json()
    except ValueError as e:
        raise ServerError(response.status_code, "invalid response body") from e
    if not isinstance(body, list):
        raise ServerError(response.status_code, "invalid response body")
    return body


class QuestionApi:
    """Thin wrapper over the ``/questions`` endpoints.

    Every method raises ``TransportError`` when the backend cannot be
    reached and ``ServerError`` on a non-2xx response or a reply body
    that cannot be decoded.
    """

    def __init__(self, base_url: str = DEFAULT_API_URL, timeout: float | None = DEFAULT_TIMEOUT,
                 session: requests.Session | None = None):
        self.base_url = base_url.rstrip("/") + "/questions"
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = self.base_url + path
        log.debug("%s %s", method, url)
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}") from e
        if not response.ok:
            raise ServerError(response.status_code, _error_message(response))
        return response

    def list_topics(self) -> list[str]:
        response = self._request("GET", "/topics")
        return [str(topic) for topic in _json_list(response)]

    def list_questions(self, topic: str) -> list[Question]:
        response = self._request("GET", f"/topic/{quote(topic, safe='')}")
        try:
            return [Question.from_api(item) for item in _json_list(response)]
        except (KeyError, TypeError, ValueError) as e:
            raise ServerError(response.status_code, "invalid response body") from e

    def upload(self, file_path) -> dict:
        """Send a spreadsheet as the multipart field ``file``.

        Returns the backend's JSON reply (``message`` and ``count``), or
        an empty dict when the reply has no JSON body.
        """
        path = Path(file_path)
        try:
            fh = path.open("rb")
        except OSError as e:
            raise ValidationError(f"Cannot read {path}: {e}") from e
        with fh:
            response = self._request(
                "POST", "/upload",
                files={"file": (path.name, fh, guess_content_type(path))},
            )
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}

    def mark_known(self, question_id) -> None:
        self._request("PUT", f"/{question_id}/mark-known")

    def increment_view(self, question_id) -> None:
        self._request("PUT", f"/{question_id}/increment-view")

    def clear_all(self) -> None:
        self._request("DELETE", "/clear-all")
