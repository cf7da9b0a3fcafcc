"""Client for the SAP ABAP Development Tools (ADT) filestore API"""

import logging
import re
import xml.etree.ElementTree as ET
from typing import Dict, Optional

import httpx

from ..api.exceptions import AdtValidationError, DiscoveryError
from ..constants import (
    ADT_APP_INDEX_PATH,
    ADT_BSP_PATH,
    ADT_CONTENT_PATH,
    ADT_CTS_CHECKS_PATH,
    ADT_CTS_PATH,
    ADT_DISCOVERY_PATH,
    ADT_FILE_CHARSET,
    ADT_PACKAGE_PATH,
    ATOM_NAMESPACE,
    CONTENT_TYPE_OCTET_STREAM,
    PATH_SEPARATOR,
)
from ..core.transport import ResourceTransport
from ..models.config import DeployerConfig
from ..models.resource import RemoteListing
from ..utils.file_utils import is_binary_content
from .sap_http import SapHttpClient, encode_uri_component

_ATOM = {"atom": ATOM_NAMESPACE}


class AdtClient(SapHttpClient, ResourceTransport):
    """Resource transport backed by the ADT UI5 BSP filestore

    Remote ids handed out by :meth:`list_entries` are the escaped ``atom:id``
    values of the listing (``ZAPP%2fjs``). Mutations take paths relative to
    the BSP application (``/js/main.js``).
    """

    def __init__(self,
                 deployer: DeployerConfig,
                 logger: Optional[logging.Logger] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        super().__init__(deployer, logger=logger, transport=transport)
        self._transport_request = self._abap_repository.transport_request

    @property
    def bsp_application(self) -> str:
        return self._abap_repository.bsp_application

    @property
    def transport_request(self) -> str:
        """Transport request attached to every change, empty for local packages"""
        return self._transport_request

    async def connect(self) -> None:
        """
        Authenticate, validate the system and prepare the BSP application

        Creates the BSP application if it does not exist yet.

        Raises:
            TargetConnectionError: If authentication fails
            AdtValidationError: If the system lacks a required ADT service
            TransportError: If any of the checks fails
        """
        response = await self._fetch_csrf_token(ADT_DISCOVERY_PATH)
        self._validate_adt_discovery(response.text)
        await self._get_package(self._abap_repository.package)
        if self._abap_repository.is_local_package:
            self._transport_request = ""
        else:
            await self._get_transport_request(self._transport_request)
        await self._get_bsp_application(self.bsp_application)

    def _validate_adt_discovery(self, xml: str) -> None:
        if self._abap_repository.skip_adt_validations:
            self.logger.warning("All ADT validations will be skipped!")
            return

        missing = [
            path for path in (ADT_BSP_PATH, ADT_CTS_PATH, ADT_PACKAGE_PATH)
            if not self._has_adt_collection(path, xml)
        ]
        for path in missing:
            self.logger.error(f"{path} not found in discovery!")
        if missing:
            self.logger.error(f"For more information, check {ADT_DISCOVERY_PATH}")
            raise AdtValidationError(missing)

    @staticmethod
    def _has_adt_collection(path: str, xml: str) -> bool:
        return re.search(f'<app:collection href="/?{re.escape(path)}">', xml) is not None

    async def _get_package(self, package: str) -> Optional[httpx.Response]:
        self.logger.info(f"Getting ABAP package {ADT_PACKAGE_PATH}/{package}")
        if self._abap_repository.skip_adt_validations:
            return None
        return await self._request(
            "GET",
            f"{ADT_PACKAGE_PATH}/{encode_uri_component(package)}",
            headers={"x-csrf-token": self.csrf_token},
        )

    async def _get_transport_request(self, transport_request: str) -> Optional[httpx.Response]:
        self.logger.info(f"Getting ABAP Transport Request {ADT_CTS_PATH}/{transport_request}")
        if self._abap_repository.skip_adt_validations:
            return None
        return await self._request(
            "POST",
            f"{ADT_CTS_PATH}/{encode_uri_component(transport_request)}{ADT_CTS_CHECKS_PATH}",
            headers={"x-csrf-token": self.csrf_token},
        )

    async def _get_bsp_application(self, bsp_application: str) -> httpx.Response:
        self.logger.info(f"Getting BSP Application {ADT_BSP_PATH}/{bsp_application}")
        response = await self._request(
            "GET",
            f"{ADT_BSP_PATH}/{encode_uri_component(bsp_application)}",
            allow_not_found=True,
        )
        if response.status_code == 404:
            return await self._create_bsp_application()
        return response

    async def _create_bsp_application(self) -> httpx.Response:
        self.logger.info(f"Creating BSP Application {ADT_BSP_PATH}/{self.bsp_application}")
        return await self._request(
            "POST",
            f"{ADT_BSP_PATH}/%20{ADT_CONTENT_PATH}",
            params={
                "type": "folder",
                "isBinary": "false",
                "name": self.bsp_application,
                "description": self._abap_repository.bsp_application_text,
                "devclass": self._abap_repository.package,
                "corrNr": self._transport_request,
            },
            headers={
                "Content-Type": CONTENT_TYPE_OCTET_STREAM,
                "x-csrf-token": self.csrf_token,
            },
        )

    async def list_entries(self, folder_path: str) -> RemoteListing:
        """
        List the direct children of a BSP folder

        Args:
            folder_path: Escaped remote id (``ZAPP`` or ``ZAPP%2fjs``)

        Returns:
            Raw folder and file ids

        Raises:
            DiscoveryError: If the listing is not a valid Atom feed
        """
        response = await self._request("GET", f"{ADT_BSP_PATH}/{folder_path}{ADT_CONTENT_PATH}")
        return self.parse_listing(response.text)

    @staticmethod
    def parse_listing(xml: str) -> RemoteListing:
        """Extract folder and file ids from an ADT Atom feed"""
        try:
            root = ET.fromstring(xml)
        except ET.ParseError as e:
            raise DiscoveryError(f"Invalid remote listing: {e}") from e

        listing = RemoteListing()
        for entry in root.findall("atom:entry", _ATOM):
            category = entry.find("atom:category", _ATOM)
            term = category.get("term") if category is not None else None
            if term not in ("folder", "file"):
                continue
            entry_id = entry.findtext("atom:id", namespaces=_ATOM)
            if not entry_id:
                raise DiscoveryError(f"Remote {term} entry without id")
            if term == "folder":
                listing.folders.append(entry_id)
            else:
                listing.files.append(entry_id)
        return listing

    def _content_url(self, path: str) -> str:
        return (
            f"{ADT_BSP_PATH}/{encode_uri_component(self.bsp_application)}"
            f"{encode_uri_component(path)}{ADT_CONTENT_PATH}"
        )

    def _change_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": CONTENT_TYPE_OCTET_STREAM,
            "x-csrf-token": self.csrf_token,
            "If-Match": "*",
        }

    async def create_folder(self, path: str) -> None:
        self.logger.info(f"Creating folder {self.bsp_application}{path}")
        parent, _, name = path.rpartition(PATH_SEPARATOR)
        await self._request(
            "POST",
            self._content_url(parent),
            params={
                "type": "folder",
                "isBinary": "false",
                "name": name,
                "devclass": self._abap_repository.package,
                "corrNr": self._transport_request,
            },
            headers=self._change_headers(),
        )

    async def delete_folder(self, path: str) -> None:
        self.logger.info(f"Deleting folder {self.bsp_application}{path}")
        await self._request(
            "DELETE",
            self._content_url(path),
            params={"deleteChildren": "true", "corrNr": self._transport_request},
            headers=self._change_headers(),
        )

    async def create_file(self, path: str, content: bytes) -> None:
        self.logger.info(f"Creating file {self.bsp_application}{path}")
        parent, _, name = path.rpartition(PATH_SEPARATOR)
        await self._request(
            "POST",
            self._content_url(parent),
            content=content or b" ",
            params={
                "type": "file",
                "isBinary": _bool_param(is_binary_content(content)),
                "name": name,
                "charset": ADT_FILE_CHARSET,
                "devclass": self._abap_repository.package,
                "corrNr": self._transport_request,
            },
            headers=self._change_headers(),
        )

    async def update_file(self, path: str, content: bytes) -> None:
        self.logger.info(f"Updating file {self.bsp_application}{path}")
        await self._request(
            "PUT",
            self._content_url(path),
            content=content or b" ",
            params={
                "charset": ADT_FILE_CHARSET,
                "isBinary": _bool_param(is_binary_content(content)),
                "corrNr": self._transport_request,
            },
            headers=self._change_headers(),
        )

    async def delete_file(self, path: str) -> None:
        self.logger.info(f"Deleting file {self.bsp_application}{path}")
        await self._request(
            "DELETE",
            self._content_url(path),
            params={"corrNr": self._transport_request},
            headers=self._change_headers(),
        )

    async def app_index_calculation(self) -> Optional[httpx.Response]:
        """Recalculate the UI5 application index if enabled"""
        if not self._abap_repository.app_index_calculate:
            return None
        self.logger.info("Calculating app index")
        return await self._request(
            "POST",
            f"{ADT_APP_INDEX_PATH}/{encode_uri_component(self.bsp_application)}",
            headers={
                "Content-Type": CONTENT_TYPE_OCTET_STREAM,
                "x-csrf-token": self.csrf_token,
            },
        )


def _bool_param(value: bool) -> str:
    return "true" if value else "false"
