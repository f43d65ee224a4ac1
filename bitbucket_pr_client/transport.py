"""HTTP transport for the Bitbucket REST API using httpx.

Every request gets a fresh client from the factory so proxy settings are
picked up per call and no client state is shared between threads. No
timeout is set here; httpx's default applies.
"""

import logging

import httpx
from pydantic import ValidationError

from .models import Credentials
from .settings import get_proxy_settings

logger = logging.getLogger(__name__)


class HttpClientFactory:
    """Builds httpx clients, routed through the configured proxy if any."""

    INSTANCE: "HttpClientFactory"

    def get_instance_http_client(self) -> httpx.Client:
        try:
            proxy = get_proxy_settings()
        except ValidationError:
            logger.warning("Ignoring invalid proxy configuration", exc_info=True)
            return httpx.Client()
        if not proxy.host:
            return httpx.Client()

        logger.info("Bitbucket proxy: %s:%s", proxy.host, proxy.port)
        proxy_url = f"http://{proxy.host}:{proxy.port}"
        if proxy.username and proxy.username.strip():
            logger.info("Using proxy authentication (user=%s)", proxy.username)
            return httpx.Client(
                proxy=httpx.Proxy(proxy_url, auth=(proxy.username, proxy.password or ""))
            )
        return httpx.Client(proxy=proxy_url)


HttpClientFactory.INSTANCE = HttpClientFactory()


class Transport:
    """Sends authenticated requests and hands back raw response bodies.

    Bodies are returned whatever the status code. Transport errors are
    logged and reported as None.
    """

    def __init__(self, credentials: Credentials, factory: HttpClientFactory | None = None):
        self.credentials = credentials
        self.factory = factory or HttpClientFactory.INSTANCE

    def get(self, url: str) -> str | None:
        return self._send("GET", url)

    def post(self, url: str, data: dict[str, str]) -> str | None:
        return self._send("POST", url, data)

    def put(self, url: str, data: dict[str, str]) -> None:
        self._send("PUT", url, data)

    def delete(self, url: str) -> None:
        self._send("DELETE", url)

    def _send(self, method: str, url: str, data: dict[str, str] | None = None) -> str | None:
        client = self.factory.get_instance_http_client()
        # BasicAuth sets the Authorization header on the first request,
        # without waiting for a 401 challenge
        auth = httpx.BasicAuth(self.credentials.username, self.credentials.password)
        try:
            # Redirects are followed for GET only
            response = client.request(
                method, url, data=data, auth=auth, follow_redirects=method == "GET"
            )
            return response.text
        except httpx.HTTPError:
            logger.warning("Failed to send request. %s %s", method, url, exc_info=True)
        finally:
            client.close()
        return None
