"""Shared fixtures for ui5-deployer tests."""

from pathlib import Path
from typing import Dict, Optional

import pytest

from ui5_deployer.models import (
    AbapRepositoryConfig,
    ConnectionConfig,
    Credentials,
    DeployerConfig,
    ProjectConfig,
)


def _write_tree(base: Path, files: Dict[str, bytes]) -> Path:
    for relative_path, content in files.items():
        target = base / relative_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
    return base


def _make_abap_project(tmp_path: Path,
                       deployer_type: str = "sap-netweaver",
                       package: str = "ZPKG",
                       skip_adt_validations: bool = False,
                       app_index_calculate: bool = False,
                       client: Optional[str] = "100") -> ProjectConfig:
    deployer = DeployerConfig(
        type=deployer_type,
        source_path="dist/",
        connection=ConnectionConfig(url="https://sap.example.com:443"),
        credentials=Credentials(username="DEVELOPER", password="secret"),
        abap_repository=AbapRepositoryConfig(
            bsp_application="ZAPP",
            bsp_application_text="My App",
            package=package,
            transport_request="K900123",
            client=client,
            language="en",
            app_index_calculate=app_index_calculate,
            skip_adt_validations=skip_adt_validations,
        ),
    )
    return ProjectConfig(name="my.app", deployer=deployer, path=str(tmp_path))


@pytest.fixture
def write_tree():
    """Write a dict of relative path -> content below a base directory."""
    return _write_tree


@pytest.fixture
def make_abap_project():
    """Factory for ABAP repository projects rooted at a directory."""
    return _make_abap_project


@pytest.fixture
def abap_project(tmp_path):
    """ABAP project with a small build output in dist/."""
    _write_tree(tmp_path / "dist", {
        "index.html": b"<html></html>",
        "js/main.js": b"console.log('hi');",
    })
    return _make_abap_project(tmp_path)
