"""Extract status details from the errors raised by patched ogen clients.

The error-body fix leaves the response body of an unexpected status readable
after the decoder returns. This module is the consumer side of that contract:

    try:
        client.some_method(request)
    except Exception as err:
        if (status := ogenerror.parse(err)) is not None:
            print(f"Status: {status.status_code}, Body: {status.body!r}")
"""

from dataclasses import dataclass
from typing import IO, Any


class UnexpectedStatusCodeError(Exception):
    """A response with a status code the API description does not document.

    `payload` is the response object; its `body` is a readable binary stream or `None`.
    """

    def __init__(self, status_code: int, payload: Any = None):
        super().__init__(f"unexpected status code: {status_code}")
        self.status_code = status_code
        self.payload = payload


@dataclass
class UnexpectedStatus:
    status_code: int
    body: bytes = b""


def _find_status_error(err: BaseException) -> UnexpectedStatusCodeError | None:
    seen: set[int] = set()
    current: BaseException | None = err
    while current is not None and id(current) not in seen:
        if isinstance(current, UnexpectedStatusCodeError):
            return current
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return None


def _read_body(payload: Any) -> bytes:
    body: IO[bytes] | None = getattr(payload, "body", None) if payload is not None else None
    if body is None:
        return b""
    try:
        return body.read()
    except Exception:
        # Any read failure, whatever the client raises, must not hide the status code itself.
        return b""


def parse(err: BaseException | None) -> UnexpectedStatus | None:
    """Return status code and body of the first `UnexpectedStatusCodeError` in the chain of `err`, else None."""
    if err is None:
        return None
    status_err = _find_status_error(err)
    if status_err is None:
        return None
    return UnexpectedStatus(status_code=status_err.status_code, body=_read_body(status_err.payload))


def status_code(err: BaseException | None) -> int:
    """The status code of an unexpected status error, 0 for any other error."""
    if (status := parse(err)) is not None:
        return status.status_code
    return 0


def is_status(err: BaseException | None, code: int) -> bool:
    return status_code(err) == code


def is_4xx(err: BaseException | None) -> bool:
    return 400 <= status_code(err) <= 499


def is_5xx(err: BaseException | None) -> bool:
    return 500 <= status_code(err) <= 599
