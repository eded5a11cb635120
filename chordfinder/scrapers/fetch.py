from __future__ import annotations

import asyncio
from typing import Awaitable, Callable

import httpx

from chordfinder.config import DEFAULT_USER_AGENT

Fetcher = Callable[[str, float], Awaitable[str]]

# Timeouts surface either from httpx itself or from the outer asyncio.wait_for.
# InvalidURL is raised while the request is built and is not an HTTPError.
TRANSPORT_ERRORS = (httpx.HTTPError, httpx.InvalidURL, asyncio.TimeoutError)


def make_httpx_fetcher(user_agent: str = DEFAULT_USER_AGENT) -> Fetcher:
    """Build the default fetcher: one fresh GET per call, non-2xx raises."""

    async def fetch(url: str, timeout: float) -> str:
        async with httpx.AsyncClient(
            timeout=timeout,
            headers={"User-Agent": user_agent},
            follow_redirects=True,
        ) as client:
            response = await client.get(url)
            response.raise_for_status()
            return response.text

    return fetch


async def fetch_with_deadline(fetcher: Fetcher, url: str, timeout: float) -> str:
    """Run a fetch with a hard overall deadline.

    httpx timeouts apply per network operation, so a slow trickling response
    could outlive them; wait_for abandons the request once `timeout` elapses.
    """
    return await asyncio.wait_for(fetcher(url, timeout), timeout=timeout)
