"""Packaging correctness verification for json-element.

Tests validate:
- The public names import from the top-level package
- py.typed marker is present in the source tree and the wheel
- Pytest plugin entry point is registered
- Package metadata is correct

These tests inspect the built wheel and current installation rather than
creating temporary virtualenvs (faster, more reliable in CI).
"""

from __future__ import annotations

import subprocess
import zipfile
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent.parent


class TestTopLevelImport:
    """The installed package surface."""

    def test_all_names_resolve(self):  # type: ignore[no-untyped-def]
        """Every name in __all__ is importable from json_element."""
        import json_element

        missing = [name for name in json_element.__all__ if not hasattr(json_element, name)]
        assert not missing, f"Names in __all__ but not importable: {missing}"

    def test_import_has_no_pytest_side_effects(self):  # type: ignore[no-untyped-def]
        """The pytest plugin module is only loaded by pytest, not by the package."""
        import json_element

        assert not hasattr(json_element, "assert_json_equal")

    def test_null_handler_installed(self):  # type: ignore[no-untyped-def]
        """The package logger carries a NullHandler."""
        import logging

        handlers = logging.getLogger("json_element").handlers
        assert any(isinstance(handler, logging.NullHandler) for handler in handlers)

    def test_py_typed_in_source(self):  # type: ignore[no-untyped-def]
        """The typing marker ships with the sources."""
        assert (PROJECT_ROOT / "src" / "json_element" / "py.typed").is_file()


class TestWheelContents:
    """Verify the built wheel contains required files."""

    @pytest.fixture(scope="class")
    def wheel_path(self) -> Path:
        """Build a fresh wheel and return its path."""
        dist_dir = PROJECT_ROOT / "dist"
        # Use poetry build since that's the project's build system
        try:
            result = subprocess.run(
                ["poetry", "build", "-f", "wheel"],
                cwd=str(PROJECT_ROOT),
                capture_output=True,
                text=True,
            )
        except FileNotFoundError:
            pytest.skip("poetry is not installed")
        if result.returncode != 0:
            pytest.skip(f"poetry build failed: {result.stderr}")

        wheels = sorted(dist_dir.glob("*.whl"), key=lambda p: p.stat().st_mtime)
        if not wheels:
            pytest.skip("No wheel found in dist/")
        return wheels[-1]

    def test_py_typed_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        """The typing marker ships in the wheel."""
        with zipfile.ZipFile(wheel_path) as zf:
            names = zf.namelist()
            assert any(n.endswith("json_element/py.typed") for n in names), (
                f"py.typed not found in wheel. Contents: {names}"
            )

    def test_all_source_modules_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        """Every module is packaged."""
        expected_modules = [
            "json_element/__init__.py",
            "json_element/config.py",
            "json_element/engine.py",
            "json_element/errors.py",
            "json_element/parser.py",
            "json_element/path.py",
            "json_element/token/__init__.py",
            "json_element/token/decoders.py",
            "json_element/token/scanner.py",
            "json_element/tree/__init__.py",
            "json_element/tree/builder.py",
            "json_element/tree/nodes.py",
            "json_element/integrations/__init__.py",
            "json_element/integrations/_pytest_plugin.py",
        ]
        with zipfile.ZipFile(wheel_path) as zf:
            names = zf.namelist()
            for module in expected_modules:
                assert any(module in n for n in names), (
                    f"Module {module} not found in wheel"
                )

    def test_metadata_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        """Name and version appear in METADATA."""
        with zipfile.ZipFile(wheel_path) as zf:
            metadata_files = [n for n in zf.namelist() if "METADATA" in n]
            assert metadata_files, "No METADATA found in wheel"
            metadata = zf.read(metadata_files[0]).decode()
            assert "json-element" in metadata.lower() or "json_element" in metadata.lower()
            assert "0.1.0" in metadata


class TestPytestPluginDiscovery:
    """Verify the pytest plugin is discoverable."""

    def test_entry_point_registered(self):  # type: ignore[no-untyped-def]
        """pytest11 entry point must be registered for json-element."""
        from importlib.metadata import entry_points

        pytest11_eps = entry_points(group="pytest11")
        ours = [ep for ep in pytest11_eps if ep.value == "json_element.integrations._pytest_plugin"]
        assert ours, (
            f"No pytest11 entry point found for json-element. "
            f"Available: {[ep.name for ep in pytest11_eps]}"
        )

    def test_fixture_available(self):  # type: ignore[no-untyped-def]
        """assert_json_equal fixture must be importable from plugin."""
        import importlib

        mod = importlib.import_module("json_element.integrations._pytest_plugin")
        assert hasattr(mod, "assert_json_equal")
        assert callable(mod.assert_json_equal)
