from __future__ import annotations

import asyncio
from typing import Awaitable, Callable

import aiohttp

DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_USER_AGENT = "lyrics-learner/0.1"

AsyncFetcher = Callable[[str], Awaitable[str]]


class FetchError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class FetchTimeoutError(FetchError):
    pass


class FetchStatusError(FetchError):
    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


async def fetch_text_async(
    url: str,
    session: aiohttp.ClientSession,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> str:
    timeout_config = aiohttp.ClientTimeout(total=timeout)
    try:
        async with session.get(
            url,
            headers={"User-Agent": DEFAULT_USER_AGENT},
            timeout=timeout_config,
        ) as response:
            payload = await response.text(errors="replace")
            if response.status >= 400:
                raise FetchStatusError(
                    f"Failed to fetch {url}", status_code=response.status
                )
            return payload
    except FetchStatusError:
        raise
    except asyncio.TimeoutError as exc:
        raise FetchTimeoutError(f"Failed to fetch {url}") from exc
    except aiohttp.ClientError as exc:
        raise FetchError(f"Failed to fetch {url}") from exc


def build_async_fetcher(
    session: aiohttp.ClientSession,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> AsyncFetcher:
    in_flight: dict[str, asyncio.Task[str]] = {}

    async def fetch(url: str) -> str:
        existing = in_flight.get(url)
        if existing is not None:
            return await existing

        task = asyncio.create_task(fetch_text_async(url, session, timeout))
        in_flight[url] = task
        try:
            return await task
        finally:
            current = in_flight.get(url)
            if current is task:
                del in_flight[url]

    return fetch
