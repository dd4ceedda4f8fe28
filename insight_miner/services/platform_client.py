"""Cumul.io client for listing datasets and creating dashboards"""
import logging
from typing import Any, Dict, Iterable, List, Optional

import httpx
from pydantic import ValidationError

from ..config import settings
from ..exceptions import PlatformError
from ..models import Dataset

logger = logging.getLogger(__name__)


class CumulioClient:
    """Client for the Cumul.io core API"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_token: Optional[str] = None,
        host: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_key = api_key if api_key is not None else settings.CUMULIO_API_KEY
        self.api_token = api_token if api_token is not None else settings.CUMULIO_API_SECRET
        self.host = (host or settings.cumulio_host).rstrip("/")
        self.version = settings.CUMULIO_API_VERSION
        self.timeout = settings.CUMULIO_TIMEOUT
        self.language = settings.DASHBOARD_LANGUAGE
        self.transport = transport

    async def _request(self, resource: str, action: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Send one action to a platform resource.

        Args:
            resource: Resource name, e.g. 'securable'
            action: API action, e.g. 'get' or 'create'
            payload: Action-specific fields ('find', 'properties', ...)

        Returns:
            Decoded JSON response

        Raises:
            PlatformError: on transport errors, HTTP errors or API error payloads
        """
        url = f"{self.host}/{self.version}/{resource}"
        body = {
            "action": action,
            "version": self.version,
            "key": self.api_key,
            "token": self.api_token,
            **payload
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(url, json=body)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise PlatformError(
                f"{action} {resource} failed with HTTP {e.response.status_code}: {e.response.text}",
                status_code=e.response.status_code
            ) from e
        except httpx.HTTPError as e:
            raise PlatformError(f"{action} {resource} failed: {e}") from e
        except ValueError as e:
            raise PlatformError(f"{action} {resource} returned a non-JSON body") from e

        if not isinstance(data, dict):
            raise PlatformError(f"{action} {resource} returned {type(data).__name__}, expected an object")
        if data.get("error"):
            raise PlatformError(f"{action} {resource} rejected: {data['error']}")

        return data

    async def get(self, resource: str, find: Dict[str, Any]) -> Dict[str, Any]:
        """Query a resource"""
        return await self._request(resource, "get", {"find": find})

    async def create(self, resource: str, properties: Dict[str, Any]) -> Dict[str, Any]:
        """Create a new instance of a resource"""
        return await self._request(resource, "create", {"properties": properties})

    async def list_datasets(self, exclude_ids: Iterable[str] = ()) -> List[Dataset]:
        """
        List datasets with their columns, skipping already known ones.

        Args:
            exclude_ids: Dataset ids to leave out of the result

        Returns:
            Datasets in platform order
        """
        find = {
            "attributes": ["id", "name"],
            "where": {
                "type": "dataset",
                "id": {"notIn": list(exclude_ids)}
            },
            "include": [{
                "model": "Column",
                "attributes": ["id", "type", "name"]
            }]
        }

        data = await self.get("securable", find)
        rows = data.get("rows") or []
        if not isinstance(rows, list):
            raise PlatformError(f"Dataset listing returned {type(rows).__name__} rows, expected a list")
        logger.debug(f"Listing returned {len(rows)} dataset(s)")

        datasets = []
        for row in rows:
            try:
                datasets.append(Dataset.from_securable(row, self.language))
            except (KeyError, TypeError, AttributeError, ValidationError) as e:
                logger.warning(f"Skipping malformed dataset row {row!r}: {e!r}")
        return datasets

    async def create_dashboard(self, dashboard: Dict[str, Any]) -> Optional[str]:
        """
        Create a dashboard securable.

        Args:
            dashboard: Dashboard properties (type, name, description, contents)

        Returns:
            Id of the created dashboard, if the platform returned one
        """
        created = await self.create("securable", dashboard)
        dashboard_id = created.get("id")
        logger.info(f"Created dashboard {dashboard_id}")
        return dashboard_id


# Global client instance
_client: Optional[CumulioClient] = None


def get_cumulio_client() -> CumulioClient:
    """Get global Cumul.io client instance"""
    global _client
    if _client is None:
        _client = CumulioClient()
    return _client
