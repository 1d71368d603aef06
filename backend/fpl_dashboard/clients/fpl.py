"""Client for the public FPL bootstrap-static feed."""
import logging
from typing import Any, Dict

import httpx
from pydantic import ValidationError

from fpl_dashboard.clients.http import make_client
from fpl_dashboard.core.config import settings
from fpl_dashboard.core.errors import UpstreamMalformed, UpstreamTimeout, UpstreamUnavailable
from fpl_dashboard.schemas.feed import RawFeed

logger = logging.getLogger(__name__)

REQUIRED_COLLECTIONS = ("events", "teams", "element_types", "elements")


def fetch_raw(url: str | None = None, client: httpx.Client | None = None) -> Dict[str, Any]:
    """GET the feed and return the decoded JSON object, unvalidated.

    No retry: the caller decides whether to try again.
    """
    url = url or settings.FPL_API_URL
    owns_client = client is None
    client = client or make_client()
    try:
        try:
            resp = client.get(url)
        except httpx.TimeoutException as exc:
            raise UpstreamTimeout(f"{url} timed out: {exc.__class__.__name__}") from exc
        except httpx.HTTPError as exc:
            raise UpstreamUnavailable(f"{url} request failed: {exc.__class__.__name__}: {exc}") from exc

        if not resp.is_success:
            raise UpstreamUnavailable(f"{url} answered HTTP {resp.status_code}")

        try:
            payload = resp.json()
        except ValueError as exc:
            raise UpstreamMalformed(f"{url} did not return JSON") from exc
    finally:
        if owns_client:
            client.close()

    if not isinstance(payload, dict):
        raise UpstreamMalformed(f"expected a JSON object, got {type(payload).__name__}")
    return payload


def parse_feed(payload: Dict[str, Any]) -> RawFeed:
    missing = [k for k in REQUIRED_COLLECTIONS if not isinstance(payload.get(k), list)]
    if missing:
        raise UpstreamMalformed(f"feed is missing collections: {', '.join(missing)}")
    try:
        return RawFeed.model_validate(payload)
    except ValidationError as exc:
        raise UpstreamMalformed(f"feed failed validation ({exc.error_count()} errors): {exc.errors()[:3]}") from exc


def fetch_snapshot(url: str | None = None, client: httpx.Client | None = None) -> RawFeed:
    payload = fetch_raw(url, client)
    feed = parse_feed(payload)
    logger.info(
        "Fetched feed: %d events, %d teams, %d positions, %d players",
        len(feed.events),
        len(feed.teams),
        len(feed.element_types),
        len(feed.elements),
    )
    return feed
