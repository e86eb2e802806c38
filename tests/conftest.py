# tests/conftest.py

import json

import httpx
import pytest

from roster_client.controller import RosterController
from roster_client.store import RemoteStudentStore


# Run anyio-marked tests on asyncio only
@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


class FakeStudentService:
    """In-memory stand-in for the /alunos service, recording every request."""

    def __init__(self, students=None):
        self.students = {s["id"]: dict(s) for s in (students or [])}
        self.next_id = max(self.students, default=0) + 1
        self.requests = []
        self.fail_with = None  # status code returned for every request when set
        self.fail_method = None  # limit fail_with to one HTTP method

    def requests_for(self, method):
        return [r for r in self.requests if r.method == method]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if self.fail_with is not None and self.fail_method in (None, request.method):
            return httpx.Response(self.fail_with, json={"error": "boom"})

        parts = request.url.path.strip("/").split("/")
        if parts[0] != "alunos":
            return httpx.Response(404)

        if len(parts) == 1:
            if request.method == "GET":
                return httpx.Response(200, json=list(self.students.values()))
            if request.method == "POST":
                body = json.loads(request.content)
                student = self._stored(self.next_id, body)
                self.next_id += 1
                return httpx.Response(201, json=student)
            return httpx.Response(405)

        student_id = int(parts[1])
        if student_id not in self.students:
            return httpx.Response(404, json={"error": "not found"})
        if request.method == "PUT":
            body = json.loads(request.content)
            return httpx.Response(200, json=self._stored(student_id, body))
        if request.method == "DELETE":
            del self.students[student_id]
            return httpx.Response(204)
        return httpx.Response(405)

    def _stored(self, student_id, body):
        year, month, day = (int(p) for p in body["dataNascimento"].split("-"))
        student = {
            "id": student_id,
            "nome": body["nome"],
            "idade": body["idade"],
            "dataNascimento": [year, month, day],
        }
        self.students[student_id] = student
        return student


def make_student(student_id, nome, idade=10, data=(2012, 5, 9)):
    return {"id": student_id, "nome": nome, "idade": idade, "dataNascimento": list(data)}


@pytest.fixture
def service():
    return FakeStudentService([
        make_student(1, "Ana", 12, (2012, 5, 9)),
        make_student(2, "Bruno", 11, (2013, 11, 23)),
    ])


@pytest.fixture
async def store(service):
    store = RemoteStudentStore(host="roster.test", transport=httpx.MockTransport(service.handler))
    yield store
    await store.aclose()


@pytest.fixture
async def controller(store):
    return RosterController(store)
