import httpx
from loguru import logger
from ..core.exceptions import FetchError

# Downloads invoice documents from their hosted URL (Cloudinary or any HTTP host).
# No retries and no content-type check: whatever bytes come back are attached as-is.


class DocumentFetcher:
    def __init__(self, client: httpx.AsyncClient | None = None):
        self._client = client

    async def fetch(self, url: str) -> bytes:
        try:
            if self._client is not None:
                r = await self._client.get(url, follow_redirects=True)
                r.raise_for_status()
                content = r.content
            else:
                async with httpx.AsyncClient() as client:
                    r = await client.get(url, follow_redirects=True)
                    r.raise_for_status()
                    content = r.content
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error("Document download failed: {error}", url=url, error=str(e))
            raise FetchError(f"Failed to download invoice document: {e}", error=str(e)) from e

        logger.info("Downloaded document", url=url, size_bytes=len(content))
        return content
