"""Moderation backend ("webapp") client using aiohttp."""

import asyncio
import json
import sys
from typing import Any, Dict

import aiohttp

from modrelay.adapters.webapp.signer import RequestSigner
from modrelay.errors import WebappTransportError
from modrelay.ports.outbound import Parsed, ResponseBody, Unparsed, WebappResult


def _log(msg: str):
    print(msg, file=sys.stderr)


def _decode(text: str) -> ResponseBody:
    try:
        return Parsed(json.loads(text))
    except ValueError:
        return Unparsed(text)


class WebappClient:
    """Signed GET/POST against the backend. One attempt per call, no retries."""

    def __init__(self, base_url: str, signer: RequestSigner):
        self.base_url = base_url.rstrip("/")
        self._signer = signer

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    @staticmethod
    async def _normalize(resp: aiohttp.ClientResponse) -> WebappResult:
        text = await resp.text()
        return WebappResult(
            ok=200 <= resp.status < 300,
            status=resp.status,
            raw_body=text,
            body=_decode(text),
        )

    async def get(self, path: str) -> WebappResult:
        headers = self._signer.headers()
        try:
            async with aiohttp.ClientSession() as session:
                async with session.get(self._url(path), headers=headers) as resp:
                    result = await self._normalize(resp)
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            _log(f"[webapp] GET {path} transport error: {e!r}")
            raise WebappTransportError("GET", path, str(e) or type(e).__name__) from e
        _log(f"[webapp] GET {path} -> {result.status}")
        return result

    async def post(self, path: str, body: Dict[str, Any]) -> WebappResult:
        headers = self._signer.headers()
        headers["Content-Type"] = "application/json"
        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(self._url(path), headers=headers, data=json.dumps(body)) as resp:
                    result = await self._normalize(resp)
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            _log(f"[webapp] POST {path} transport error: {e!r}")
            raise WebappTransportError("POST", path, str(e) or type(e).__name__) from e
        _log(f"[webapp] POST {path} -> {result.status}")
        return result
