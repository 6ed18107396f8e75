"""Fetch and cache the acutest single-header test framework."""

import os
import ssl
from pathlib import Path
from typing import Optional

import httpx
import truststore
from platformdirs import user_cache_dir
from rich.markup import escape

from .display import PLAIN, DisplayOptions, warn
from .errors import HeaderUnavailableError

APP_NAME = "c-init"
ACUTEST_URL = "https://raw.githubusercontent.com/mity/acutest/master/include/acutest.h"
HEADER_NAME = "acutest.h"
HEADER_PATH = "tests/test-deps/acutest.h"

ssl_context = truststore.SSLContext(ssl.PROTOCOL_TLS_CLIENT)


def acutest_url() -> str:
    return (os.getenv("C_INIT_ACUTEST_URL") or "").strip() or ACUTEST_URL


def cache_dir() -> Path:
    override = (os.getenv("C_INIT_CACHE_DIR") or "").strip()
    if override:
        return Path(override)
    return Path(user_cache_dir(APP_NAME))


def fetch_header(
    url: Optional[str] = None,
    cache: Optional[Path] = None,
    *,
    client: Optional[httpx.Client] = None,
    display: DisplayOptions = PLAIN,
) -> bytes:
    """Return acutest.h, from the cache when present, otherwise downloaded.

    A successful download is written back to the cache. Failing to cache is
    only warned about; failing to obtain the header at all is an error.
    """
    url = url or acutest_url()
    cache = cache if cache is not None else cache_dir()
    cached = cache / HEADER_NAME
    if cached.is_file():
        return cached.read_bytes()

    owns_client = client is None
    if owns_client:
        client = httpx.Client(verify=ssl_context)
    try:
        response = client.get(url, timeout=30, follow_redirects=True)
        if response.status_code != 200:
            raise RuntimeError(f"server returned {response.status_code}")
        content = response.content
    except (httpx.HTTPError, RuntimeError) as e:
        raise HeaderUnavailableError(
            f"could not download {HEADER_NAME} from {url} ({e}); use --no-tests to skip test generation"
        ) from e
    finally:
        if owns_client:
            client.close()

    try:
        cache.mkdir(parents=True, exist_ok=True)
        cached.write_bytes(content)
    except OSError as e:
        warn(display, f"could not cache {HEADER_NAME} in {escape(str(cache))} ({escape(str(e))})")
    return content
