# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qkrump

"""
Branding asset resolution.

Reports embed logos as ``data:`` URIs so that the exported SVG is
self-contained. Fetching happens here, strictly before rendering:

1. :class:`AssetResolver` fetches every configured asset (HTTP(S) URLs
   through a retrying :class:`requests.Session`, local paths and
   ``file://`` URLs from disk) and base64 encodes it.
2. The resulting :class:`AssetBundle` is handed to a ``render_*``
   function, which only reads already resolved URIs.

If any asset fails, :class:`~qkrump_engine.errors.AssetFetchError` is
raised and no bundle is produced, so a report is never rendered with a
subset of its branding.

Examples
--------
>>> from qkrump_engine.assets import AssetResolver
>>> with AssetResolver() as resolver:
...     bundle = resolver.resolve({"logo_left": "https://example.com/logo.png"})
>>> bundle["logo_left"][:22]
'data:image/png;base64,'
"""

from __future__ import annotations

import asyncio
import base64
import logging
import mimetypes
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any
from urllib.parse import unquote, urlparse
from urllib.request import url2pathname

import requests
from qkrump_engine.config import ASSET_SLOTS, Config, get_config
from qkrump_engine.errors import AssetFetchError
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry


logger = logging.getLogger(__name__)

DEFAULT_MIME = "application/octet-stream"
USER_AGENT = "qkrump-engine/0.1"


class AssetBundle(Mapping[str, str]):
    """
    Immutable mapping of asset slot to ``data:`` URI.

    Parameters
    ----------
    assets : mapping, optional
        Slot name to data URI.
    """

    __slots__ = ("_data",)

    def __init__(self, assets: Mapping[str, str] | None = None) -> None:
        self._data = MappingProxyType(dict(assets or {}))

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"AssetBundle(slots={sorted(self._data)!r})"


EMPTY_BUNDLE = AssetBundle()


def to_data_uri(payload: bytes, mime: str) -> str:
    """Encode bytes as a base64 ``data:`` URI."""
    encoded = base64.b64encode(payload).decode("ascii")
    return f"data:{mime};base64,{encoded}"


def guess_mime(source: str) -> str:
    """Guess a MIME type from a path or URL, defaulting to octet-stream."""
    mime, _ = mimetypes.guess_type(urlparse(source).path or source)
    return mime or DEFAULT_MIME


class AssetResolver:
    """
    Fetches branding assets and converts them to data URIs.

    Parameters
    ----------
    config : Config, optional
        Timeouts, retry policy and default asset sources. Defaults to
        :func:`~qkrump_engine.config.get_config`.
    session : requests.Session, optional
        Preconfigured session. A retrying session is created otherwise.

    Attributes
    ----------
    config : Config
        Active configuration.
    session : requests.Session
        HTTP session used for remote assets.
    """

    def __init__(
        self,
        config: Config | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config or get_config()
        self.session = session or self._create_session()

    def _create_session(self) -> requests.Session:
        session = requests.Session()
        session.headers.update({"User-Agent": USER_AGENT, "Accept": "image/*"})

        retry_strategy = Retry(
            total=self.config.asset_retry_attempts,
            backoff_factor=self.config.asset_retry_backoff,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["HEAD", "GET"],
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        return session

    # -------------------------------------------------------------------------
    # Single asset
    # -------------------------------------------------------------------------

    def fetch(self, name: str, source: str) -> str:
        """
        Fetch one asset and return it as a data URI.

        Parameters
        ----------
        name : str
            Slot name, used in error messages.
        source : str
            ``http(s)://`` URL, ``file://`` URL, local path, or an
            existing ``data:`` URI (returned unchanged).

        Raises
        ------
        AssetFetchError
            If the asset cannot be retrieved.
        """
        if source.startswith("data:"):
            return source

        scheme = urlparse(source).scheme.lower()
        if scheme in ("http", "https"):
            return self._fetch_http(name, source)
        if scheme in ("", "file") or len(scheme) == 1:
            return self._fetch_file(name, source)
        raise AssetFetchError(name, source, f"unsupported scheme {scheme!r}")

    def _fetch_http(self, name: str, source: str) -> str:
        try:
            response = self.session.get(source, timeout=self.config.asset_timeout)
        except requests.exceptions.Timeout as e:
            raise AssetFetchError(
                name, source, f"timeout after {self.config.asset_timeout}s"
            ) from e
        except requests.exceptions.RequestException as e:
            raise AssetFetchError(name, source, str(e)) from e

        logger.debug("Asset %s GET %s -> %d", name, source, response.status_code)
        if not response.ok:
            raise AssetFetchError(name, source, f"HTTP {response.status_code}")

        content_type = response.headers.get("Content-Type", "")
        mime = content_type.split(";", 1)[0].strip() or guess_mime(source)
        return to_data_uri(response.content, mime)

    def _fetch_file(self, name: str, source: str) -> str:
        parsed = urlparse(source)
        if parsed.scheme.lower() == "file":
            path = Path(url2pathname(unquote(parsed.path)))
        else:
            path = Path(source).expanduser()
        try:
            payload = path.read_bytes()
        except OSError as e:
            raise AssetFetchError(name, source, str(e)) from e
        logger.debug("Asset %s read %d bytes from %s", name, len(payload), path)
        return to_data_uri(payload, guess_mime(str(path)))

    # -------------------------------------------------------------------------
    # Bundles
    # -------------------------------------------------------------------------

    def _sources(self, sources: Mapping[str, str] | None) -> dict[str, str]:
        if not self.config.embed_assets:
            return {}
        selected = dict(self.config.brand_assets if sources is None else sources)
        unknown = set(selected) - set(ASSET_SLOTS)
        if unknown:
            raise ValueError(f"Unknown asset slots: {sorted(unknown)}")
        return {k: v for k, v in selected.items() if v}

    def resolve(self, sources: Mapping[str, str] | None = None) -> AssetBundle:
        """
        Fetch all assets sequentially.

        Parameters
        ----------
        sources : mapping, optional
            Slot name to source. Defaults to ``config.brand_assets``.
            Ignored (empty bundle) when ``config.embed_assets`` is off.

        Returns
        -------
        AssetBundle
            One data URI per requested slot.

        Raises
        ------
        AssetFetchError
            On the first failing asset.
        """
        selected = self._sources(sources)
        if not selected:
            return EMPTY_BUNDLE
        bundle = AssetBundle({name: self.fetch(name, src) for name, src in selected.items()})
        logger.info("Resolved %d branding assets", len(bundle))
        return bundle

    async def aresolve(self, sources: Mapping[str, str] | None = None) -> AssetBundle:
        """
        Fetch all assets concurrently.

        Each fetch runs in a worker thread and is bounded by
        ``config.asset_timeout``. Semantics otherwise match
        :meth:`resolve`: all or nothing.
        """
        selected = self._sources(sources)
        if not selected:
            return EMPTY_BUNDLE

        async def _one(name: str, source: str) -> tuple[str, str]:
            try:
                uri = await asyncio.wait_for(
                    asyncio.to_thread(self.fetch, name, source),
                    timeout=self.config.asset_timeout,
                )
            except asyncio.TimeoutError as e:
                raise AssetFetchError(
                    name, source, f"timeout after {self.config.asset_timeout}s"
                ) from e
            return name, uri

        tasks = [asyncio.ensure_future(_one(n, s)) for n, s in selected.items()]
        try:
            pairs = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            # Collect sibling outcomes so no exception goes unretrieved.
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        bundle = AssetBundle(dict(pairs))
        logger.info("Resolved %d branding assets", len(bundle))
        return bundle

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()

    def __enter__(self) -> AssetResolver:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
