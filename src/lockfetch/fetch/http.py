"""
Thin HTTP helpers over requests.

No retries are attempted; every transport failure surfaces as a
:class:`~lockfetch.errors.NetworkError`.
"""

import logging
from typing import Dict, Optional

import requests

from ..errors import NetworkError

logger = logging.getLogger(__name__)


def http_get(
    url: str,
    params: Optional[Dict[str, str]] = None,
    timeout: Optional[float] = None,
) -> requests.Response:
    """
    Issue a single GET and return the fully read response.
    """
    logger.debug(f"GET {url} params={params}")
    try:
        return requests.get(url, params=params, timeout=timeout)
    except requests.RequestException as e:
        raise NetworkError(f"Request failed: {e}", url=url) from e


def download(url: str, timeout: Optional[float] = None) -> bytes:
    """
    Download the body of ``url``; any status other than 200 is an error.
    """
    response = http_get(url, timeout=timeout)
    if response.status_code != requests.codes.ok:
        status = f"{response.status_code} {response.reason or ''}".strip()
        raise NetworkError(
            f"failed getting tarball: status {status} (URL: {url})",
            url=url,
            status=response.status_code,
        )
    return response.content
