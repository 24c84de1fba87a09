import httpx
from typing import Dict, List, Optional
import logging

from app.core.config import settings
from app.core.exceptions import UpstreamError

logger = logging.getLogger(__name__)

NO_DESCRIPTION = "No description available"
NO_ALT_DESCRIPTION = "No Alternate description available"


class UnsplashClient:
    """Thin async client for the Unsplash photo search API."""

    def __init__(
        self,
        access_key: Optional[str] = None,
        api_url: Optional[str] = None,
        per_page: Optional[int] = None,
        timeout: Optional[float] = None,
    ):
        self.access_key = access_key or settings.UNSPLASH_ACCESS_KEY
        self.api_url = api_url or settings.UNSPLASH_API_URL
        self.per_page = per_page or settings.UNSPLASH_PER_PAGE
        self.timeout = timeout or settings.UNSPLASH_TIMEOUT

    async def search_images(self, query: str) -> Dict:
        """
        Search the provider for images matching a free-text query.

        Returns {"photos": [...]} or, when nothing matched,
        {"message": "No images found for given query"}.

        Raises:
            UpstreamError: If the provider is unreachable, misconfigured or
                returns an error. The provider's own error text is logged only.
        """
        if not self.access_key:
            logger.error("Unsplash access key is missing, check UNSPLASH_ACCESS_KEY")
            raise UpstreamError()

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(
                    self.api_url,
                    headers={"Authorization": f"Client-ID {self.access_key}"},
                    params={"query": query, "per_page": self.per_page},
                )
                response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error fetching images from Unsplash: {str(e)}")
            raise UpstreamError() from e

        photos = self._parse_results(payload.get("results") or [])
        if not photos:
            return {"message": "No images found for given query"}
        return {"photos": photos}

    def _parse_results(self, results: List[Dict]) -> List[Dict]:
        photos = []
        for result in results:
            urls = result.get("urls") or {}
            photos.append(
                {
                    "image_url": urls.get("regular") or "",
                    "description": result.get("description") or NO_DESCRIPTION,
                    "alt_description": result.get("alt_description")
                    or NO_ALT_DESCRIPTION,
                }
            )
        return photos


async def search_external_images(query: str) -> Dict:
    return await UnsplashClient().search_images(query)
