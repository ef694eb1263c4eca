import logging

import requests

logger = logging.getLogger(__name__)


class UpstreamFetchError(RuntimeError):
    """The blank form could not be downloaded."""


def fetch_source_pdf(url: str, timeout: float = 15) -> bytes:
    """
    Downloads the blank W-4 from the IRS. Every call fetches a fresh copy;
    failures are not retried.
    """
    logger.info("Fetching source PDF from %s", url)
    try:
        response = requests.get(url, timeout=timeout)
    except requests.RequestException as exc:
        raise UpstreamFetchError(f"Failed to fetch W-4 PDF from IRS: {exc}") from exc

    if not response.ok:
        logger.warning("Source PDF request returned HTTP %s", response.status_code)
        raise UpstreamFetchError("Failed to fetch W-4 PDF from IRS")
    return response.content
