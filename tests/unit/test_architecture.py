"""Tests to verify hexagonal architecture structure."""

from pathlib import Path

import pytest

from scrapdesk.domain.errors import (
    EmptyQueueError,
    InvalidWorkflowTransitionError,
    MalformedPayloadError,
)
from scrapdesk.domain.exceptions import ScrapdeskError

# Compute project root relative to this test file
PROJECT_ROOT = Path(__file__).parent.parent.parent


@pytest.fixture
def package_path() -> Path:
    """Return the package directory path."""
    return PROJECT_ROOT / "scrapdesk"


def test_main_layers_exist(package_path: Path) -> None:
    """Verify all main layer directories exist."""
    layers = ["domain", "application", "infrastructure", "config", "bootstrap"]
    for layer in layers:
        assert (package_path / layer).is_dir(), f"Missing layer: {layer}"
        assert (package_path / layer / "__init__.py").is_file(), (
            f"Missing {layer}/__init__.py"
        )


def test_domain_subdirectories_exist(package_path: Path) -> None:
    """Verify domain layer has required subdirectories."""
    domain = package_path / "domain"
    for subdir in ["models", "services", "events", "errors"]:
        assert (domain / subdir / "__init__.py").is_file(), (
            f"Missing domain/{subdir}/__init__.py"
        )


def test_application_subdirectories_exist(package_path: Path) -> None:
    application = package_path / "application"
    for subdir in ["ports", "services"]:
        assert (application / subdir / "__init__.py").is_file(), (
            f"Missing application/{subdir}/__init__.py"
        )


def test_domain_has_no_external_layer_imports(package_path: Path) -> None:
    """Verify domain layer imports NOTHING from other layers."""
    forbidden = [
        "scrapdesk.application",
        "scrapdesk.infrastructure",
        "scrapdesk.config",
        "scrapdesk.bootstrap",
    ]
    for py_file in (package_path / "domain").rglob("*.py"):
        content = py_file.read_text()
        for module in forbidden:
            assert f"from {module}" not in content, (
                f"{py_file} contains forbidden import: {module}"
            )
            assert f"import {module}" not in content, (
                f"{py_file} contains forbidden import: {module}"
            )


def test_domain_has_no_logging(package_path: Path) -> None:
    """Domain is pure: logging happens in the application layer."""
    for py_file in (package_path / "domain").rglob("*.py"):
        content = py_file.read_text()
        assert "import structlog" not in content, f"{py_file} imports structlog"


@pytest.mark.parametrize(
    "error_class",
    [EmptyQueueError, InvalidWorkflowTransitionError, MalformedPayloadError],
)
def test_domain_errors_share_base(error_class: type) -> None:
    """All domain errors derive from ScrapdeskError."""
    assert issubclass(error_class, ScrapdeskError)
