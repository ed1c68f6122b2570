"""Unit tests for the import boundary checking script.

Tests verify that the layering rules are enforced:
- domain/ imports NOTHING from other package layers
- config/ imports from domain/ only
- application/ imports from domain/ and config/ (plus observability)
- infrastructure/ imports from domain/ and application/
- bootstrap/ imports from everything
"""

import ast

# Import from scripts directory
import sys
import tempfile
from collections.abc import Iterator
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "scripts"))

from check_imports import (
    ALLOWED_IMPORTS,
    LAYER_HIERARCHY,
    check_file_imports,
    check_import_boundaries,
    format_violations,
    get_import_module,
)

PACKAGE_DIR = Path(__file__).parent.parent.parent / "scrapdesk"


class TestLayerRules:
    """Test that the layer rules are correctly defined."""

    def test_domain_is_innermost(self) -> None:
        assert LAYER_HIERARCHY["domain"] == 0
        assert ALLOWED_IMPORTS["domain"] == set()

    def test_bootstrap_is_outermost(self) -> None:
        assert LAYER_HIERARCHY["bootstrap"] == max(LAYER_HIERARCHY.values())
        assert ALLOWED_IMPORTS["bootstrap"] == set(LAYER_HIERARCHY) - {"bootstrap"}

    def test_no_layer_imports_outward(self) -> None:
        """Every allowed import points at a more inner layer."""
        for layer, allowed in ALLOWED_IMPORTS.items():
            for target in allowed:
                assert LAYER_HIERARCHY[target] < LAYER_HIERARCHY[layer]


class TestGetImportModule:
    """Test the get_import_module helper function."""

    def test_import_from_statement(self) -> None:
        node = ast.parse("from scrapdesk.domain.models import notification").body[0]
        assert isinstance(node, ast.ImportFrom)
        assert get_import_module(node) == "scrapdesk.domain.models"

    def test_import_statement(self) -> None:
        node = ast.parse("import scrapdesk.domain.models").body[0]
        assert isinstance(node, ast.Import)
        assert get_import_module(node) == "scrapdesk.domain.models"

    def test_none_for_relative_import(self) -> None:
        node = ast.parse("from . import something").body[0]
        assert isinstance(node, ast.ImportFrom)
        assert get_import_module(node) is None


class TestCheckFileImports:
    """Test the check_file_imports function with temporary files."""

    @pytest.fixture
    def temp_package_dir(self) -> Iterator[Path]:
        """Create a temporary package directory structure."""
        with tempfile.TemporaryDirectory() as tmpdir:
            package_dir = Path(tmpdir) / "scrapdesk"
            package_dir.mkdir()
            for layer in LAYER_HIERARCHY:
                (package_dir / layer).mkdir()
                (package_dir / layer / "__init__.py").write_text("")
            yield package_dir

    def _write(self, package_dir: Path, layer: str, source: str) -> Path:
        module = package_dir / layer / "module.py"
        module.write_text(source)
        return module

    def test_stdlib_and_third_party_ignored(self, temp_package_dir: Path) -> None:
        module = self._write(
            temp_package_dir, "domain", "import os\nimport structlog\nfrom pydantic import BaseModel"
        )
        assert check_file_imports(module, temp_package_dir) == []

    @pytest.mark.parametrize(
        "layer, source",
        [
            ("domain", "from scrapdesk.domain.models import notification"),
            ("config", "from scrapdesk.domain.models.queue_policy import QueuePolicy"),
            ("application", "from scrapdesk.config import NotificationEngineConfig"),
            (
                "application",
                "from scrapdesk.infrastructure.observability.session_context import x",
            ),
            ("infrastructure", "from scrapdesk.application.ports import change_feed"),
            ("bootstrap", "from scrapdesk.infrastructure.stubs import ChangeFeedStub"),
        ],
    )
    def test_allowed(self, temp_package_dir: Path, layer: str, source: str) -> None:
        module = self._write(temp_package_dir, layer, source)
        assert check_file_imports(module, temp_package_dir) == []

    @pytest.mark.parametrize(
        "layer, source, message",
        [
            ("domain", "from scrapdesk.config import X", "domain layer cannot import from config"),
            (
                "domain",
                "import scrapdesk.application.services",
                "domain layer cannot import from application",
            ),
            (
                "application",
                "from scrapdesk.infrastructure.stubs import ChangeFeedStub",
                "application layer cannot import from infrastructure",
            ),
            (
                "infrastructure",
                "from scrapdesk.bootstrap import create_notification_engine",
                "infrastructure layer cannot import from bootstrap",
            ),
        ],
    )
    def test_violation(
        self, temp_package_dir: Path, layer: str, source: str, message: str
    ) -> None:
        module = self._write(temp_package_dir, layer, source)

        violations = check_file_imports(module, temp_package_dir)

        assert len(violations) == 1
        assert violations[0][0] == str(module)
        assert violations[0][1] == 1
        assert message in violations[0][2]
        assert "1 violation(s)" in format_violations(violations)

    def test_top_level_module_has_no_layer(self, temp_package_dir: Path) -> None:
        module = temp_package_dir / "__init__.py"
        module.write_text("from scrapdesk.bootstrap import anything")
        assert check_file_imports(module, temp_package_dir) == []


class TestPackageBoundaries:
    """The real package respects its own rules."""

    def test_package_has_no_violations(self) -> None:
        violations = check_import_boundaries(PACKAGE_DIR)
        assert violations == [], format_violations(violations)
