"""Tests for the package itself."""

import warnings
from pathlib import Path

import tfsdrive


def test_sources_compile_without_escape_warnings():
    """Backslash paths in docstrings must not be invalid escape sequences."""
    for path in Path(tfsdrive.__file__).parent.rglob("*.py"):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            compile(path.read_text(encoding="utf-8"), str(path), "exec")


def test_usage_example_shows_drive_path():
    assert r'drive.session(r"Configuration\Settings")' in tfsdrive.__doc__
    assert tfsdrive.__version__ == "0.1.0"
