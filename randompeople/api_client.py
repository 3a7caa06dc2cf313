#!/usr/bin/env python3

# ------------------------------------------------------------------------------------------
# --------------------- HTTP clients for the RandomUser API ---------------------------------
# ------------------------------------------------------------------------------------------
# Two interchangeable ways of sending the same GET request:
#   - RequestsClient: the requests library (a wrapping HTTP library)
#   - UrllibClient:   urllib.request.urlopen (the standard library's native primitive)
# Both return the decoded JSON body and raise the errors from errors.py.
# They block, so the async get() runs the call in a worker thread.
import asyncio
import json
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Dict, Optional, Protocol

import requests

from .errors import HttpStatusError, NetworkError

JsonBody = Dict[str, Any]


def build_url(api_url: str, gender: Optional[str], country: str, results: int = 12) -> str:
    # gender=None (unspecified) is still sent, as an empty value: ?results=12&gender=&nat=US
    query = urllib.parse.urlencode(
        {"results": results, "gender": gender or "", "nat": country}
    )
    return f"{api_url}?{query}"


class HttpClient(Protocol):
    name: str

    async def get(self, url: str) -> JsonBody:
        ...


class RequestsClient:
    """HttpClient backed by requests.get()."""

    name = "requests"

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout

    def get_sync(self, url: str) -> JsonBody:
        try:
            resp = requests.get(url, timeout=self.timeout)
            resp.raise_for_status()  # 4xx/5xx -> requests.HTTPError
        except requests.HTTPError as exc:
            raise HttpStatusError(exc.response.status_code, exc.response.reason) from exc
        except (requests.ConnectionError, requests.Timeout) as exc:
            raise NetworkError(str(exc)) from exc
        # requests.JSONDecodeError is a ValueError; it is left to the caller to classify.
        return resp.json()

    async def get(self, url: str) -> JsonBody:
        return await asyncio.to_thread(self.get_sync, url)


class UrllibClient:
    """HttpClient backed by urllib.request.urlopen()."""

    name = "urllib"

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout

    def get_sync(self, url: str) -> JsonBody:
        request = urllib.request.Request(url, headers={"Accept": "application/json"})
        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as resp:
                body = resp.read()
        except urllib.error.HTTPError as exc:  # must come before OSError: HTTPError is one
            if exc.fp is not None:
                exc.close()  # the error carries the open response body
            raise HttpStatusError(exc.code, str(exc.reason)) from exc
        except OSError as exc:  # URLError, refused connections, socket timeouts
            raise NetworkError(str(exc)) from exc
        return json.loads(body)

    async def get(self, url: str) -> JsonBody:
        return await asyncio.to_thread(self.get_sync, url)
