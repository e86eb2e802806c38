"""
Fetch the roster once and print it.

    python -m roster_client --host 192.168.0.10
"""

import argparse
import asyncio
import sys

from .controller import RosterController
from .errors import NetworkError
from .logging_config import configure_logging
from .settings import get_settings
from .store import RemoteStudentStore


def format_row(student) -> str:
    return f"{student.name} | {student.age} anos | Birth date: {student.birth_date_display}"


async def main(host: str, timeout=None) -> int:
    store = RemoteStudentStore(host=host, timeout=timeout)

    async with RosterController(store) as controller:
        try:
            await controller.start()
        except NetworkError as e:
            print(f"Could not load students from {host}: {e}", file=sys.stderr)
            return 1

        for student in controller.roster:
            print(format_row(student))
        print(f"{len(controller.roster)} students")
    return 0


def run() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="List the students held by the roster service")
    parser.add_argument("--host", default=settings.host, help="Student service host (port is always 8080)")
    parser.add_argument("--json", action="store_true", default=settings.log_json, help="Log as JSON lines")
    args = parser.parse_args()

    configure_logging(settings.log_level, args.json)
    sys.exit(asyncio.run(main(args.host, settings.request_timeout)))


if __name__ == "__main__":
    run()
