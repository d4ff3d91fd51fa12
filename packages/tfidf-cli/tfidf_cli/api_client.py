"""API client for the TF-IDF Gateway"""
import asyncio
import os
from typing import Any, Dict, Optional

import httpx


class GatewayClient:
    """Client for interacting with the TF-IDF Gateway API"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: int = 30,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize gateway client

        Args:
            base_url: Gateway base URL (defaults to env GATEWAY_URL)
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url or os.getenv(
            "GATEWAY_URL",
            f"http://{os.getenv('GATEWAY_HOST', 'localhost')}:{os.getenv('GATEWAY_PORT', '8000')}"
        )
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self.transport
        )

    async def health_check(self) -> Dict[str, Any]:
        """Check gateway health"""
        async with self._client() as client:
            response = await client.get("/health")
            response.raise_for_status()
            return response.json()

    async def push_document(self, title: str, content: str) -> Dict[str, Any]:
        """
        Push a document for indexing

        Returns:
            Corpus response with every document's siblings
        """
        async with self._client() as client:
            response = await client.put(
                "/pushDocument",
                json={"title": title, "content": content}
            )
            response.raise_for_status()
            return response.json()

    async def list_documents(self) -> Dict[str, Any]:
        """Current corpus with siblings"""
        async with self._client() as client:
            response = await client.get("/documents")
            response.raise_for_status()
            return response.json()


def run_async(coro):
    """Helper to run async functions in sync context"""
    return asyncio.run(coro)
