"""Asynchronous library documentation fetcher."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from types import TracebackType

import httpx
import structlog

from hintplane.config.models import DocsConfig
from hintplane.core.errors import DocsError
from hintplane.docs.decoding import decode_bundle
from hintplane.index.models import ModuleSummary

logger = structlog.get_logger()


class DocsFetcher:
    """Downloads and decodes documentation bundles over HTTP.

    A library identifier (``author/name/version``) maps to the locator
    ``<base_url><identifier>/``; the bundle lives at
    ``<locator><bundle_filename>``.
    """

    def __init__(self, config: DocsConfig | None = None, client: httpx.AsyncClient | None = None) -> None:
        self.config = config or DocsConfig()
        self._client = client
        self._owns_client = client is None

    def locator(self, package: str) -> str:
        return f"{self.config.base_url}{package.strip('/')}/"

    def bundle_url(self, package: str) -> str:
        return self.locator(package) + self.config.bundle_filename

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.config.timeout_sec,
                follow_redirects=True,
            )
        return self._client

    async def fetch_package(self, package: str) -> list[ModuleSummary]:
        """Fetch one library's modules.

        Raises:
            DocsError: On network, HTTP status, or decode failure.
        """
        url = self.bundle_url(package)
        logger.debug("docs_fetch_started", package=package, url=url)
        try:
            response = await self._get_client().get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise DocsError.fetch_failed(url, str(e) or type(e).__name__) from e

        modules = decode_bundle(response.content, self.locator(package), url=url)
        logger.debug("docs_fetch_completed", package=package, modules=len(modules))
        return modules

    async def fetch_packages(self, packages: Iterable[str]) -> list[ModuleSummary]:
        """Fetch several libraries; any single failure fails the whole request."""
        semaphore = asyncio.Semaphore(self.config.max_concurrent_fetches)

        async def bounded(package: str) -> list[ModuleSummary]:
            async with semaphore:
                return await self.fetch_package(package)

        results = await asyncio.gather(*(bounded(p) for p in packages), return_exceptions=True)
        modules: list[ModuleSummary] = []
        for result in results:
            if isinstance(result, BaseException):
                raise result
            modules.extend(result)
        return modules

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> DocsFetcher:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
