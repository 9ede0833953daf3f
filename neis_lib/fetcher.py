import logging
from datetime import date
from typing import Callable, Iterable, Optional, Tuple

import requests

from .config import DEFAULT_CONFIG, NeisConfig
from .exceptions import AllProxiesExhausted
from .webpage import neis_meal_api_url, neis_proxy_urls

logger = logging.getLogger(__name__)

# Shared session; the public CORS proxies answer 403 to requests without a browser User-Agent
_HTTP_SESSION = None


def _get_http_session() -> requests.Session:
    global _HTTP_SESSION
    if _HTTP_SESSION is None:
        session = requests.Session()
        session.headers.update({
            'User-Agent': 'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/127.0.0.0 Safari/537.36',
            'Accept': 'application/xml,text/xml;q=0.9,*/*;q=0.8',
            'Accept-Language': 'ko-KR,ko;q=0.9,en-US;q=0.8',
            'Connection': 'keep-alive',
        })
        _HTTP_SESSION = session
    return _HTTP_SESSION


def first_successful(attempts: Iterable[Tuple[str, Callable[[], str]]]) -> str:
    """
    Run the attempts in order and return the first result.

    An attempt that raises requests.RequestException is logged and the next
    one is tried. Later attempts only start after the previous one failed.

    Parameters:
        attempts: (label, callable) pairs in priority order

    Returns:
        str: Result of the first attempt that did not fail

    Raises:
        AllProxiesExhausted: every attempt failed (or there were none)
    """
    last_error: Optional[str] = None
    for label, attempt in attempts:
        try:
            return attempt()
        except requests.RequestException as e:
            last_error = str(e) or type(e).__name__
            logger.warning(f"Proxy failed: {label} ({last_error})")
    raise AllProxiesExhausted(last_error)


def _get_text(session: requests.Session, url: str, timeout: Optional[float]) -> str:
    logger.info(f"Trying proxy: {url}")
    response = session.get(url, timeout=timeout, allow_redirects=True)
    response.raise_for_status()
    # text/* without a charset makes requests fall back to latin-1
    if not response.encoding or response.encoding.lower() == 'iso-8859-1':
        response.encoding = 'utf-8'
    return response.text


def neis_meal_payload_retrieve(dt: date, config: NeisConfig = DEFAULT_CONFIG,
                               session: Optional[requests.Session] = None) -> str:
    """
    Fetch the raw mealServiceDietInfo XML for a date through the proxy list.

    Parameters:
        dt (date): Day to query
        config (NeisConfig): API and proxy settings
        session: Optional requests session (defaults to the shared one)

    Returns:
        str: The response body of the first proxy that answered with 2xx

    Raises:
        AllProxiesExhausted: no proxy produced a usable response
    """
    session = session or _get_http_session()
    api_url = neis_meal_api_url(dt, config)
    logger.info(f"API URL: {api_url}")

    attempts = [
        (proxy_url, lambda proxy_url=proxy_url: _get_text(session, proxy_url, config.timeout))
        for proxy_url in neis_proxy_urls(api_url, config)
    ]
    return first_successful(attempts)
