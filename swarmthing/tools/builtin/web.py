"""Web capabilities: a mock search and a plain-HTTP page scraper."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import aiohttp
from bs4 import BeautifulSoup

from swarmthing.core.worker import WorkCancelled
from swarmthing.utils.logger import tool_logger

if TYPE_CHECKING:
    from swarmthing.tools.tool_manager import ToolManager

_NOISE_TAGS = ("script", "style", "noscript", "template")


def search(query: str) -> str:
    # No search backend is wired in; results are canned.
    tool_logger.info("Searching", query=query)
    return (
        f"Mock search results for '{query}': \n"
        "1. Python is a general-purpose programming language.\n"
        "2. Tools are plain Python functions loaded at runtime."
    )


def extract_text(html: str, word_limit: int) -> str:
    """Whitespace-normalised text of the <body>, cut to word_limit words."""
    soup = BeautifulSoup(html, "html.parser")
    body = soup.body
    if body is None:
        return "No body found"
    for element in body.find_all(_NOISE_TAGS):
        element.decompose()
    words = body.get_text(separator=" ").split()
    return " ".join(words[:word_limit])


async def fetch_html(url: str, *, timeout: float, user_agent: str | None) -> str:
    headers = {"User-Agent": user_agent} if user_agent else None
    client_timeout = aiohttp.ClientTimeout(total=timeout)
    async with aiohttp.ClientSession(timeout=client_timeout, headers=headers) as session:
        async with session.get(url, allow_redirects=True) as resp:
            return await resp.text(errors="replace")


def build(manager: ToolManager) -> dict[str, Callable[..., Any]]:
    def scrape_url(url: str) -> str:
        tool_logger.info("Scraping URL", url=url)
        try:
            html = manager.worker.submit(
                fetch_html(
                    url,
                    timeout=manager.network_timeout,
                    user_agent=manager.user_agent,
                ),
                manager.network_timeout,
                manager.cancel_token,
            )
        except TimeoutError:
            return f"Error fetching URL: timed out after {manager.network_timeout:g}s"
        except WorkCancelled:
            return "Error fetching URL: cancelled"
        except (aiohttp.ClientError, ValueError) as e:
            return f"Error fetching URL: {e}"
        return extract_text(html, manager.scrape_word_limit)

    return {"search": search, "scrape_url": scrape_url}
