import asyncio, logging
from typing import Optional

import httpx

from models import FetchResult, ScanConfig

log = logging.getLogger(__name__)

# Note: proxies come from env (HTTP_PROXY / HTTPS_PROXY), httpx picks them up itself

def build_client(config: ScanConfig, transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    limits = httpx.Limits(
        max_keepalive_connections=config.concurrency,
        max_connections=config.concurrency,
        keepalive_expiry=config.keepalive,
    )
    # handshake is part of the connect phase in httpx
    timeout = httpx.Timeout(config.timeout, connect=config.connect_timeout)
    headers = {'User-Agent': config.user_agent, 'Accept': '*/*'}
    # abandoned infrastructure often serves self-signed or expired certs
    return httpx.AsyncClient(
        verify=False,
        follow_redirects=True,
        limits=limits,
        timeout=timeout,
        headers=headers,
        transport=transport,
    )

async def fetch_one(client: httpx.AsyncClient, host: str, timeout: float) -> FetchResult:
    try:
        r = await asyncio.wait_for(client.get(host), timeout=timeout)
    except asyncio.TimeoutError:
        return FetchResult(host, error=f"timed out after {timeout:g}s")
    # malformed entries fail while the request is built (bad IDNA labels, empty authority)
    except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
        msg = str(e) or type(e).__name__
        return FetchResult(host, error=msg)
    log.debug("%s -> %s (%d bytes)", host, r.status_code, len(r.content))
    return FetchResult(host, body=r.content, status=r.status_code)
