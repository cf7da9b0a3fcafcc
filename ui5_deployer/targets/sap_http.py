"""HTTP client base for SAP NetWeaver services"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from ..api.exceptions import ConfigError, TargetConnectionError, TransportError
from ..models.config import DeployerConfig


def encode_uri_component(value: str) -> str:
    """Percent-encode a value the way browsers encode a URI component"""
    return quote(value, safe="!~*'()")


class SapHttpClient:
    """Shared connection handling for the ADT and OData clients

    Holds one ``httpx.AsyncClient`` with the system's base URL, client and
    language parameters, and a cookie jar that keeps the session after the
    first authenticated request.
    """

    def __init__(self,
                 deployer: DeployerConfig,
                 logger: Optional[logging.Logger] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize HTTP client

        Args:
            deployer: Deployer configuration
            logger: Logger to use
            transport: Custom httpx transport
        """
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self._credentials = deployer.credentials
        self._connection = deployer.connection
        self._abap_repository = deployer.abap_repository
        if self._abap_repository is None:
            raise ConfigError("Deployer configuration requires 'abapRepository'")
        self._csrf_token = ""
        self._client = self._build_client(deployer, transport)

    def _build_client(self,
                      deployer: DeployerConfig,
                      transport: Optional[httpx.AsyncBaseTransport]) -> httpx.AsyncClient:
        """Create the httpx client with the defaults for every request"""
        connection = deployer.connection
        if connection.proxy:
            raise ConfigError("Proxy not supported at the moment!")
        if not connection.url:
            raise ConfigError("Deployer configuration requires 'connection.url'")

        params = {}
        if self._abap_repository.client:
            params["sap-client"] = self._abap_repository.client
        if self._abap_repository.language:
            params["sap-language"] = self._abap_repository.language.upper()

        verify: Any = False
        if connection.strict_ssl:
            verify = connection.ssl_certificate_path or True

        kwargs: Dict[str, Any] = {}
        if transport is not None:
            kwargs["transport"] = transport

        return httpx.AsyncClient(
            base_url=connection.url,
            params=params,
            headers={"accept": "*/*", "Connection": "keep-alive"},
            verify=verify,
            **kwargs
        )

    @property
    def csrf_token(self) -> str:
        return self._csrf_token

    async def _fetch_csrf_token(self, url: str) -> httpx.Response:
        """Authenticate with basic auth and fetch a CSRF token"""
        self.logger.info(f"Connecting to {self._connection.url}")
        try:
            response = await self._client.get(
                url,
                auth=(self._credentials.username, self._credentials.password),
                headers={"x-csrf-token": "Fetch"},
            )
        except httpx.RequestError as e:
            raise TargetConnectionError(f"Cannot reach {self._connection.url}: {e}") from e

        if response.status_code in (401, 403):
            self._log_response_error(response)
            raise TargetConnectionError(
                f"Authentication failed: {response.status_code} - {response.reason_phrase}"
            )
        if response.is_error:
            self._response_error(response)

        self._csrf_token = response.headers.get("x-csrf-token", "")
        return response

    async def _request(self,
                       method: str,
                       url: str,
                       allow_not_found: bool = False,
                       **kwargs) -> httpx.Response:
        """
        Send a request and raise on error statuses

        Args:
            method: HTTP method
            url: URL relative to the system base URL
            allow_not_found: Return 404 responses instead of raising
            **kwargs: Passed to ``httpx.AsyncClient.request``

        Returns:
            HTTP response

        Raises:
            TransportError: If the response has an error status
        """
        response = await self._client.request(method, url, **kwargs)
        if response.status_code == 404 and allow_not_found:
            return response
        if response.is_error:
            self._response_error(response)
        return response

    def _log_response_error(self, response: httpx.Response) -> None:
        self.logger.error(f"{response.status_code} {response.reason_phrase}")
        self.logger.error("Request:")
        self.logger.error(str(response.request.url))
        self.logger.error("Request headers:")
        self.logger.error(self._safe_headers(response.request.headers))
        self.logger.error("Response headers:")
        self.logger.error(dict(response.headers))
        if response.status_code != 404:
            self.logger.error("Response body:")
            self.logger.error(response.text)

    def _response_error(self, response: httpx.Response) -> None:
        """Log a failed response and raise

        Raises:
            TransportError: Always
        """
        self._log_response_error(response)
        raise TransportError(response.status_code, response.reason_phrase, str(response.request.url))

    @staticmethod
    def _safe_headers(headers: httpx.Headers) -> Dict[str, str]:
        return {k: ("***" if k.lower() == "authorization" else v) for k, v in headers.items()}

    async def close(self) -> None:
        """Close the HTTP client"""
        await self._client.aclose()

    async def __aenter__(self):
        """Async context manager entry"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()
