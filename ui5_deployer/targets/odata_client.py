"""Client for the SAP ABAP repository OData service"""

import base64
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union
from xml.sax.saxutils import escape, quoteattr

import aiofiles
import httpx

from ..constants import CONTENT_TYPE_ATOM_XML, ODATA_METADATA_PATH, ODATA_PATH
from .sap_http import SapHttpClient, encode_uri_component

_DATASERVICES_NS = "http://schemas.microsoft.com/ado/2007/08/dataservices"


class ODataClient(SapHttpClient):
    """Uploads a whole application as a zip archive

    Unlike the ADT filestore, the repository service replaces the BSP
    application in one request; there is no per-resource reconciliation.
    """

    async def connect(self) -> None:
        """Authenticate against the service metadata and fetch a CSRF token"""
        self.logger.info(f"OData API: {self._connection.url.rstrip('/')}/{ODATA_PATH}")
        await self._fetch_csrf_token(ODATA_METADATA_PATH)

    @property
    def repository_path(self) -> str:
        return f"{ODATA_PATH}/Repositories('{encode_uri_component(self._abap_repository.bsp_application)}')"

    async def sync_remote_server(self, archive_path: Union[str, Path]) -> httpx.Response:
        """
        Create or replace the BSP application with the archive content

        Args:
            archive_path: Zip archive of the application

        Returns:
            HTTP response of the create or update request
        """
        existing = await self._get_bsp_application()
        payload = await self.build_payload(archive_path)
        if existing is not None and existing.content:
            return await self._update_bsp_application(payload)
        return await self._create_bsp_application(payload)

    async def _get_bsp_application(self) -> Optional[httpx.Response]:
        self.logger.info(f"Getting BSP Application: {self._abap_repository.bsp_application}")
        self.logger.info(self.repository_path)
        response = await self._request("GET", self.repository_path, allow_not_found=True)
        if response.status_code == 404:
            return None
        return response

    async def _create_bsp_application(self, payload: str) -> httpx.Response:
        path = f"{ODATA_PATH}/Repositories"
        self.logger.info(f"Creating BSP Application {path}")
        return await self._request("POST", path, content=payload.encode("utf-8"), **self.request_options())

    async def _update_bsp_application(self, payload: str) -> httpx.Response:
        self.logger.info(f"Updating BSP Application {self.repository_path}")
        return await self._request(
            "PUT", self.repository_path, content=payload.encode("utf-8"), **self.request_options()
        )

    def request_options(self) -> Dict[str, Any]:
        """Query parameters and headers for create and update requests"""
        return {
            "params": {
                "CodePage": "UTF8",
                "CondenseMessagesInHttpResponseHeader": "X",
                "format": "json",
                "TransportRequest": self._abap_repository.transport_request,
            },
            "headers": {
                "Content-Type": CONTENT_TYPE_ATOM_XML,
                "x-csrf-token": self.csrf_token,
                "type": "entry",
                "charset": "UTF8",
            },
        }

    async def build_payload(self, archive_path: Union[str, Path]) -> str:
        """
        Build the Atom entry carrying the base64 encoded archive

        Args:
            archive_path: Zip archive of the application

        Returns:
            Atom entry XML
        """
        async with aiofiles.open(archive_path, 'rb') as f:
            archive = base64.b64encode(await f.read()).decode("ascii")

        repository = self._abap_repository
        name = escape(repository.bsp_application)
        service_url = f"{self._connection.url.rstrip('/')}/{ODATA_PATH}"
        entity = f"Repositories('{repository.bsp_application}')"

        return " ".join([
            '<entry xmlns="http://www.w3.org/2005/Atom"',
            'xmlns:m="http://schemas.microsoft.com/ado/2007/08/dataservices/metadata"',
            f'xmlns:d="{_DATASERVICES_NS}"',
            f'xml:base={quoteattr(service_url)}>',
            f"<id>{escape(service_url + '/' + entity)}</id>",
            f'<title type="text">{escape(entity)}</title>',
            f"<updated>{datetime.now(timezone.utc).isoformat()}</updated>",
            '<category term="/UI5/ABAP_REPOSITORY_SRV.Repository" '
            f'scheme="{_DATASERVICES_NS}/scheme"/>',
            f'<link href={quoteattr(entity)} rel="edit" title="Repository"/>',
            '<content type="application/xml">',
            '<m:properties>',
            f"<d:Name>{name}</d:Name>",
            f"<d:Package>{escape(repository.package.upper())}</d:Package>",
            f"<d:Description>{escape(repository.bsp_application_text)}</d:Description>",
            f"<d:ZipArchive>{archive}</d:ZipArchive>",
            '<d:Info/>',
            '</m:properties>',
            '</content>',
            '</entry>',
        ])
