"""Sample usage: mock HTTP requests pushed through an Observable.

Run with ``python -m rxlite.demo``.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TypedDict

from rxlite.observable import Subscription, from_iterable

logger = logging.getLogger("rxlite.demo")

HTTP_POST_METHOD = "POST"
HTTP_GET_METHOD = "GET"

HTTP_STATUS_OK = 200
HTTP_STATUS_INTERNAL_SERVER_ERROR = 500


class User(TypedDict):
    name: str
    age: int
    roles: list[str]
    created_at: datetime
    is_deleted: bool


class _RequestParams(TypedDict, total=False):
    id: str


class _MockRequestBase(TypedDict):
    method: str
    host: str
    path: str
    params: _RequestParams


class MockRequest(_MockRequestBase, total=False):
    body: User | None


USER_MOCK: User = {
    "name": "User Name",
    "age": 26,
    "roles": ["user", "admin"],
    "created_at": datetime.now(),
    "is_deleted": False,
}

REQUESTS_MOCK: list[MockRequest] = [
    {
        "method": HTTP_POST_METHOD,
        "host": "service.example",
        "path": "user",
        "body": USER_MOCK,
        "params": {},
    },
    {
        "method": HTTP_GET_METHOD,
        "host": "service.example",
        "path": "user",
        "params": {"id": "3f5h67s4s"},
    },
]


def handle_request(request: MockRequest) -> dict:
    logger.info("%s %s/%s", request["method"], request["host"], request["path"])
    return {"status": HTTP_STATUS_OK}


def handle_error(error: BaseException) -> dict:
    logger.error("request stream failed: %s", error)
    return {"status": HTTP_STATUS_INTERNAL_SERVER_ERROR}


def handle_complete() -> None:
    logger.info("complete")


def main() -> Subscription:
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    requests = from_iterable(REQUESTS_MOCK)
    subscription = requests.subscribe({
        "next": handle_request,
        "error": handle_error,
        "complete": handle_complete,
    })
    subscription.unsubscribe()
    return subscription


if __name__ == "__main__":
    main()
