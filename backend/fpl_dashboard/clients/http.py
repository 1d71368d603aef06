import httpx

from fpl_dashboard.core.config import settings

DEFAULT_HEADERS = {
    "User-Agent": "fpl-snapshot-dashboard/0.1 (weekly refresh)",
    "Accept": "application/json",
}


def make_client(timeout_s: float | None = None, transport: httpx.BaseTransport | None = None) -> httpx.Client:
    t = settings.FPL_TIMEOUT_S if timeout_s is None else timeout_s
    # connect fails fast; the bootstrap document is ~2MB so read gets the full budget
    timeout = httpx.Timeout(t, connect=min(10.0, t))
    return httpx.Client(
        headers=DEFAULT_HEADERS,
        timeout=timeout,
        follow_redirects=True,
        transport=transport,
    )
