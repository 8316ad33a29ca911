from __future__ import annotations

import logging
import uuid
from typing import Optional
from urllib.parse import urlparse

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


def new_node_id() -> str:
    return uuid.uuid4().hex


def register_node(
    url: str,
    *,
    node_id: str,
    email: str,
    timeout: float = DEFAULT_TIMEOUT,
    session: Optional[requests.Session] = None,
    dry_run: bool = False,
) -> bool:
    """Announce this node to the registration endpoint.

    Returns True on a 2xx response. Network errors are logged and reported
    as False; registration never blocks an install.
    """

    if urlparse(url).scheme != "https":
        logger.warning("Registration URL %s is not HTTPS; the e-mail address is sent in clear text", url)

    if dry_run:
        logger.info("Would register node %s at %s", node_id, url)
        return True

    http = session or requests.Session()
    try:
        r = http.get(url, params={"id": node_id, "email": email}, timeout=timeout)
        r.raise_for_status()
    except requests.RequestException as e:
        logger.warning("Registration failed: %s", e)
        return False

    logger.info("Node %s registered (HTTP %s)", node_id, r.status_code)
    return True
