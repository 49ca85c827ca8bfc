"""
Request dispatching shared by all the routes

Parameters are looked up in the path first, then in the query string and
finally in the JSON body. Commands run in the thread pool of the server,
one worker per request.
"""
import json
from typing import Any, Callable, Dict, Mapping, Optional

from fastapi import Request
from starlette.concurrency import run_in_threadpool

from exceptions import (
    InternalError,
    InvalidContentType,
    InvalidJSONBody,
    InvalidParameter,
    MissingParameters,
    NLPServerError,
)
from logger import get_logger

logger = get_logger(__name__)

JSON_CONTENT_TYPE = "application/json"


async def read_json_body(request: Request) -> Dict[str, Any]:
    """
    Read the JSON object in the body of a request

    Raises:
        InvalidContentType: If the request is not declared as JSON
        InvalidJSONBody: If the body is not a JSON object
    """
    content_type = request.headers.get("content-type", "")
    if content_type.split(";")[0].strip().lower() != JSON_CONTENT_TYPE:
        raise InvalidContentType(JSON_CONTENT_TYPE, content_type)

    raw = await request.body()
    try:
        body = json.loads(raw) if raw.strip() else None
    except ValueError as e:
        raise InvalidJSONBody(str(e)) from e

    if not isinstance(body, dict):
        raise InvalidJSONBody()

    return body


def is_true(value: Optional[str]) -> bool:
    """A flag is set when it is given without a value or equals 'true'"""
    return value is not None and (value == "" or value.lower() == "true")


class RequestParams:
    """The parameters of a request, from its path, query string and JSON body"""

    def __init__(self,
                 path: Optional[Mapping[str, Any]] = None,
                 query: Optional[Mapping[str, Any]] = None,
                 body: Optional[Mapping[str, Any]] = None):
        self.path = dict(path or {})
        self.query = dict(query or {})
        self.body = dict(body or {})

    @classmethod
    async def from_request(cls, request: Request) -> "RequestParams":
        """The body of a POST request must be a JSON object, GET requests have none"""
        body = await read_json_body(request) if request.method == "POST" else None
        return cls(path=request.path_params, query=request.query_params, body=body)

    def get(self, name: str) -> Optional[Any]:
        for source in (self.path, self.query, self.body):
            if source.get(name) is not None:
                return source[name]
        return None

    def get_str(self, name: str) -> Optional[str]:
        value = self.get(name)
        if value is not None and not isinstance(value, str):
            raise InvalidParameter(name, "expected a string")
        return value

    def require(self, *names: str) -> Dict[str, Any]:
        """
        Raises:
            MissingParameters: Naming all the required parameters not given
        """
        values = {name: self.get(name) for name in names}
        missing = [name for name, value in values.items() if value is None]
        if missing:
            raise MissingParameters(missing)
        return values

    def text(self) -> str:
        self.require("text")
        return self.get_str("text")

    def lang(self) -> Optional[str]:
        return self.get_str("lang") or None

    def domain(self) -> Optional[str]:
        return self.get_str("domain") or None

    def flag(self, name: str) -> bool:
        """Boolean flags are read from the query string only"""
        return is_true(self.query.get(name))


async def run_command(command: Callable[..., Any], *args, **kwargs) -> Any:
    """
    Run a blocking command in the thread pool

    Errors of the server taxonomy propagate as they are, any other exception
    is logged with its traceback and turned into an InternalError.
    """
    try:
        return await run_in_threadpool(command, *args, **kwargs)
    except NLPServerError:
        raise
    except Exception as e:
        name = getattr(command, "__qualname__", type(command).__name__)
        logger.error(f"Command {name} failed: {e}", exc_info=True)
        raise InternalError() from e
