# utils/request.py
"""
Request parameters as seen by models and behaviors.

Form fields like `User[email]` are parsed into nested dicts so a model can pick
its own fields by form name:

     data = RequestData.from_mapping({"User[email]": "ana@example.com"})
     data.post("User")  # {"email": "ana@example.com"}

The request of the current call is bound with `bind_request()` and read back
with `current_request()`; code running without a bound request sees None.
"""
import re
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple

from fastapi import HTTPException, Request, status

_KEY_PATTERN = re.compile(r"^([^\[\]]+)((?:\[[^\[\]]*\])*)$")

_current_request: ContextVar[Optional["RequestData"]] = ContextVar("current_request", default=None)


def _key_path(key: str) -> list:
     match = _KEY_PATTERN.match(key)
     if not match:
          return [key]
     head, rest = match.groups()
     return [head] + re.findall(r"\[([^\[\]]*)\]", rest)


def parse_bracketed(items: Iterable[Tuple[str, Any]]) -> Dict[str, Any]:
     """
     Build nested dicts from bracketed keys.

     `Tenant[user][email]=x` becomes {"Tenant": {"user": {"email": "x"}}} and
     `tags[]=a&tags[]=b` becomes {"tags": ["a", "b"]}. A repeated plain key
     keeps its last value.
     """
     result: Dict[str, Any] = {}
     for key, value in items:
          path = _key_path(key)
          node = result
          for i, part in enumerate(path[:-1]):
               is_list = path[i + 1] == "" and i + 1 == len(path) - 1
               child = node.get(part)
               if is_list:
                    if not isinstance(child, list):
                         child = node[part] = []
                    child.append(value)
                    break
               if not isinstance(child, dict):
                    child = node[part] = {}
               node = child
          else:
               node[path[-1]] = value
     return result


@dataclass
class RequestData:
     """POST (body) and GET (query string) parameters of a request."""
     post_params: Dict[str, Any] = field(default_factory=dict)
     query_params: Dict[str, Any] = field(default_factory=dict)

     def post(self, name: Optional[str] = None, default: Any = None) -> Any:
          if name is None:
               return self.post_params
          return self.post_params.get(name, default)

     def get(self, name: Optional[str] = None, default: Any = None) -> Any:
          if name is None:
               return self.query_params
          return self.query_params.get(name, default)

     @classmethod
     def from_mapping(
          cls,
          post: Optional[Mapping[str, Any]] = None,
          query: Optional[Mapping[str, Any]] = None,
     ) -> "RequestData":
          return cls(
               post_params=parse_bracketed((post or {}).items()),
               query_params=parse_bracketed((query or {}).items()),
          )

     @classmethod
     async def from_request(cls, request: Request) -> "RequestData":
          """Read form or JSON body and query string from a FastAPI request."""
          content_type = request.headers.get("content-type", "")
          post_params: Dict[str, Any] = {}
          if content_type.startswith("application/json"):
               try:
                    body = await request.json()
               except ValueError:
                    raise HTTPException(
                         status_code=status.HTTP_400_BAD_REQUEST,
                         detail="Request body is not valid JSON"
                    )
               if isinstance(body, dict):
                    post_params = body
          elif content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
               form = await request.form()
               post_params = parse_bracketed(form.multi_items())
          return cls(
               post_params=post_params,
               query_params=parse_bracketed(request.query_params.multi_items()),
          )


async def get_request_data(request: Request) -> RequestData:
     """
     FastAPI dependency that parses the incoming request.

     Usage:
          @router.post("/items")
          def create_item(data: RequestData = Depends(get_request_data)):
               with bind_request(data):
                    ...
     """
     return await RequestData.from_request(request)


def current_request() -> Optional[RequestData]:
     return _current_request.get()


@contextmanager
def bind_request(data: RequestData) -> Iterator[RequestData]:
     """Make `data` the current request for the duration of the block."""
     token = _current_request.set(data)
     try:
          yield data
     finally:
          _current_request.reset(token)
