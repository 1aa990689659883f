# armcosts/prices/query.py
from __future__ import annotations

import logging
from typing import Optional, TYPE_CHECKING

import requests

from armcosts.config import DEFAULT_CURRENCY, DEFAULT_HTTP_TIMEOUT, resolve_endpoint
from armcosts.errors import CatalogFetchError
from armcosts.prices.catalog import CatalogResponse

if TYPE_CHECKING:
    from armcosts.costs.context import RunContext


def _armcosts_user_agent() -> str:
    from armcosts import __version__

    return f"armcosts-{__version__}" if __version__ else "armcosts"


def base_query(base_url: str, currency: str) -> str:
    """
    Shared prefix of every catalog query. Strategies only append their own
    filter clause after the trailing ``and``.
    """
    return f"{base_url}?currencyCode='{currency}'&$filter=priceType eq 'Consumption' and "


class RetailPricesClient:
    """
    Fetches Retail Prices API responses, caching each one in the run context
    under its exact URL.
    """

    def __init__(
        self,
        base_url: str | None = None,
        currency: str = DEFAULT_CURRENCY,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = resolve_endpoint(base_url)
        self.currency = currency
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def base_query(self) -> str:
        return base_query(self.base_url, self.currency)

    def build_url(self, clause: str) -> str:
        return f"{self.base_query}{clause}"

    def fetch(self, url: str, context: "RunContext") -> Optional[CatalogResponse]:
        """
        Return the catalog response for ``url``, or None when the API answers
        with a client error. Other failures raise CatalogFetchError. Every
        outcome is remembered, so a URL is requested at most once per run.
        """
        cached = context.cached_response(url)
        if cached is not None:
            logging.debug("Getting Retail API data for %s from cache.", url)
            return cached
        if context.has_failed(url):
            logging.debug("Retail API request for %s already failed in this run.", url)
            error = context.failure(url)
            if error is not None:
                raise error
            return None

        context.fetch_count += 1
        try:
            data = self._get(url)
        except CatalogFetchError as e:
            context.record_failure(url, e)
            raise
        if data is None:
            context.record_failure(url, None)
        else:
            context.store_response(url, data)
        return data

    def _get(self, url: str) -> Optional[CatalogResponse]:
        logging.debug("Getting Retail API data from %s", url)
        headers = {"User-Agent": _armcosts_user_agent(), "Accept": "application/json"}
        try:
            resp = self.session.get(url, headers=headers, timeout=self.timeout)
        except requests.Timeout as e:
            raise CatalogFetchError(f"Retail API request timed out after {self.timeout}s: {e}") from e
        except requests.RequestException as e:
            raise CatalogFetchError(f"Retail API request failed: {e}") from e

        if 400 <= resp.status_code < 500:
            logging.warning("Retail API returned %s for %s", resp.status_code, url)
            return None
        try:
            resp.raise_for_status()
        except requests.HTTPError as e:
            raise CatalogFetchError(f"Retail API returned {resp.status_code}: {e}") from e

        try:
            return CatalogResponse.from_json(resp.json())
        except ValueError as e:
            raise CatalogFetchError(f"Could not decode Retail API response: {e}") from e
