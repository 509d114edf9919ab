# utils/__init__.py
from .request import RequestData, bind_request, current_request, get_request_data, parse_bracketed

__all__ = [
     "RequestData",
     "bind_request",
     "current_request",
     "get_request_data",
     "parse_bracketed",
]
