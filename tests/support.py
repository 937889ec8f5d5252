import asyncio

import httpx

SLOW = "slow"

def make_transport(pages):
    """Serve canned pages keyed by hostname.

    A value is ``(status, text)``, ``(status, text, delay)`` or ``SLOW``; hosts
    missing from ``pages`` fail like an unresolvable name.
    """
    async def handler(request: httpx.Request) -> httpx.Response:
        page = pages.get(request.url.host)
        if page == SLOW:
            await asyncio.sleep(30)
        if page is None:
            raise httpx.ConnectError("Name or service not known", request=request)
        if len(page) == 3:
            await asyncio.sleep(page[2])
        return httpx.Response(page[0], text=page[1])
    return httpx.MockTransport(handler)

S3_PAGE = (404, "<Error><Code>NoSuchBucket</Code><Message>The specified bucket does not exist</Message></Error>")
PAGES_PAGE = (404, "<html><body><h1>404</h1><p>There isn't a GitHub Pages site here.</p></body></html>")
README_PAGE = (404, "<h1>Project doesnt exist... yet!</h1>")
CLEAN_PAGE = (200, "<html><title>Welcome</title><body>hello</body></html>")
