"""Sesam node client.

Downloads the current configuration bundle of a node as a ZIP archive
with a single authenticated GET. There are no retries.

Execution Context:
    Library module - imported by sesamdiff_core.differ

Dependencies:
    - requests: HTTP client

Metadata:
    Version: 0.1.0
    Author: SesamDiff Team
"""
from __future__ import annotations

import logging

import requests

from sesamdiff_core.errors import FetchError
from sesamdiff_core.models import CONFIG_ENDPOINT
from sesamdiff_core.models import RunConfig

logger = logging.getLogger(__name__)


# ---- Node Client Class --------------------------------------------------------------------------------------


class NodeClient:
    """Authenticated client for one Sesam node.

    Attributes:
        node: Node hostname.
        timeout: Request timeout in seconds (None blocks indefinitely).
        session: requests session used for the call.
    """

    def __init__(
            self,
            node: str,
            jwt: str,
            timeout: float | None = None,
            session: requests.Session | None = None,
    ) -> None:
        """Initialize node client.

        Args:
            node: Node hostname.
            jwt: Bearer token for the Authorization header.
            timeout: Request timeout in seconds (optional).
            session: Session to reuse (optional).
        """
        self.node = node
        self._jwt = jwt
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(
            cls,
            config: RunConfig,
    ) -> NodeClient:
        """Create a client from a run configuration."""
        return cls(node=config.node, jwt=config.jwt, timeout=config.timeout)

    @property
    def config_url(
            self,
    ) -> str:
        """Config endpoint of the node."""
        return CONFIG_ENDPOINT.format(node=self.node)

    @property
    def headers(
            self,
    ) -> dict[str, str]:
        """Request headers for the config download."""
        return {
            "Accept": "application/zip",
            "Authorization": f"Bearer {self._jwt}",
        }

    def fetch_config(
            self,
    ) -> bytes:
        """Download the node config archive.

        Returns:
            Raw response body.

        Raises:
            FetchError: If the request fails or the node answers with status >= 400.
        """
        logger.info("Fetching config from %s", self.config_url)
        try:
            response = self.session.get(self.config_url, headers=self.headers, timeout=self.timeout)
        except requests.exceptions.RequestException as request_error:
            msg = f"Failed to reach node {self.node}: {request_error}"
            raise FetchError(msg) from request_error

        if response.status_code >= 400:
            raise FetchError(f"{response.status_code} {response.reason}", status_code=response.status_code)

        payload = response.content
        logger.debug("Received %d bytes from %s", len(payload), self.node)
        return payload
