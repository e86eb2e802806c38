"""
Async HTTP access to the student service.

Every call is independent: no locking, coalescing or retry happens here.
Failures are translated into the roster client's own error types so callers
never have to handle httpx exceptions directly.
"""

from typing import Any, List, Optional

import httpx
import structlog

from .errors import NetworkError, NotFoundError
from .models import Student, StudentDraft
from .settings import SERVICE_PORT

logger = structlog.get_logger(__name__)

STUDENTS_PATH = "/alunos"


class RemoteStudentStore:
    """
    Client for the student service's /alunos resource.

    Args:
        host: Service host name or address, port is always 8080
        timeout: Request timeout in seconds, None waits forever
        transport: Optional httpx transport, used by tests
    """

    def __init__(self,
                 host: str = "localhost",
                 timeout: Optional[float] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self._host = host
        self.http_client = httpx.AsyncClient(
            base_url=self._base_url(host),
            timeout=timeout,
            transport=transport,
        )

    @staticmethod
    def _base_url(host: str) -> str:
        return f"http://{host}:{SERVICE_PORT}"

    @property
    def host(self) -> str:
        return self._host

    def set_host(self, host: str) -> None:
        """Point subsequent requests at a different host."""
        self._host = host
        self.http_client.base_url = self._base_url(host)
        logger.info(f"Student service host set to {self.http_client.base_url}")

    async def __aenter__(self) -> "RemoteStudentStore":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.http_client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = await self.http_client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.error(f"{method} {path} failed with HTTP {status_code}")
            raise NetworkError(f"HTTP error {status_code} on {method} {path}", status_code=status_code) from e
        except httpx.RequestError as e:
            logger.error(f"Could not reach student service at {self.http_client.base_url}: {e}")
            raise NetworkError(f"Request failed: {type(e).__name__}: {e}") from e

        logger.debug("request completed", method=method, path=path, status=response.status_code)
        return response

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise NetworkError(f"Invalid JSON from student service: {e}",
                               status_code=response.status_code) from e

    @staticmethod
    def _to_student(payload: Any) -> Student:
        try:
            return Student.model_validate(payload)
        except ValueError as e:
            raise NetworkError(f"Unexpected student payload: {e}") from e

    async def list(self) -> List[Student]:
        """Get all students in the order the service returns them."""
        response = await self._request("GET", STUDENTS_PATH)
        data = self._decode(response)
        if not isinstance(data, list):
            raise NetworkError(f"Expected a list of students, got {type(data).__name__}",
                               status_code=response.status_code)
        return [self._to_student(item) for item in data]

    async def create(self, draft: StudentDraft) -> Student:
        """Create a student, the service assigns the id."""
        response = await self._request("POST", STUDENTS_PATH, json=draft.to_payload())
        student = self._to_student(self._decode(response))
        logger.info(f"Student created: {student.id}")
        return student

    async def update(self, student_id: Any, draft: StudentDraft) -> Student:
        """Replace a student's fields."""
        try:
            response = await self._request("PUT", f"{STUDENTS_PATH}/{student_id}", json=draft.to_payload())
        except NetworkError as e:
            if e.status_code == 404:
                raise NotFoundError(student_id) from e
            raise
        student = self._to_student(self._decode(response))
        logger.info(f"Student updated: {student_id}")
        return student

    async def delete(self, student_id: Any) -> None:
        """Delete a student by id."""
        await self._request("DELETE", f"{STUDENTS_PATH}/{student_id}")
        logger.info(f"Student deleted: {student_id}")
