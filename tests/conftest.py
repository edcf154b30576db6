"""Pytest configuration and shared fixtures for linker-script parser tests."""

import sys
import os
from pathlib import Path

import pytest

# Ensure project root is on path
sys.path.insert(0, str(Path(__file__).parent.parent))

from ldscript_parser import parse, parse_with_diagnostics

DEFAULT_SAMPLES_DIR = Path(__file__).parent / "samples"


def pytest_addoption(parser):
    parser.addoption(
        "--samples-dir",
        action="store",
        default=os.environ.get("LDSCRIPT_SAMPLES_DIR", str(DEFAULT_SAMPLES_DIR)),
        help="Path to linker-script sample files directory",
    )


@pytest.fixture
def parse_snippet():
    """Parse linker-script text and return a Script node."""
    def _parse(text):
        return parse(text, filename="<test>")
    return _parse


@pytest.fixture
def parse_snippet_with_warnings():
    """Parse linker-script text and return (Script, warnings)."""
    def _parse(text):
        return parse_with_diagnostics(text, filename="<test>")
    return _parse


@pytest.fixture
def samples_dir(request):
    """Path to the linker-script samples directory."""
    return Path(request.config.getoption("--samples-dir"))


@pytest.fixture
def sample_files(samples_dir):
    """List of all ``*.ld`` sample file paths."""
    if not samples_dir.is_dir():
        pytest.skip(f"Samples dir not found: {samples_dir}")
    files = []
    for dirpath, _, filenames in os.walk(samples_dir):
        for fn in sorted(filenames):
            if fn.endswith('.ld'):
                files.append(Path(dirpath) / fn)
    return files
