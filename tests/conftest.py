"""Pytest configuration and fixtures."""

import pytest
import tempfile
from pathlib import Path
from openpyxl import Workbook


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def sample_locale_tree():
    """Sample locale document with nested mappings and arrays."""
    return {
        "app": {
            "title": "Cruise Management",
            "subtitle": ""
        },
        "menu": {
            "items": [
                {"label": "Home", "href": "/"},
                {"label": "Settings", "href": "/settings"}
            ],
            "tags": ["new", "beta"]
        },
        "counts": {
            "max": 10,
            "enabled": True
        }
    }


@pytest.fixture
def sample_flat_map():
    """Flat form of sample_locale_tree."""
    return {
        "app.title": "Cruise Management",
        "app.subtitle": "",
        "menu.items.0.label": "Home",
        "menu.items.0.href": "/",
        "menu.items.1.label": "Settings",
        "menu.items.1.href": "/settings",
        "menu.tags.0": "new",
        "menu.tags.1": "beta",
        "counts.max": 10,
        "counts.enabled": True
    }


@pytest.fixture
def sample_rows():
    """Sheet rows with a key column and two locale columns."""
    return [
        {"Key": "app.title", "en-US": "Welcome", "zh-CN": "欢迎"},
        {"Key": "app.menu.0", "en-US": "Home", "zh-CN": "首页"},
        {"Key": "app.menu.1", "en-US": "About", "zh-CN": ""},
        {"Key": "", "en-US": "orphan", "zh-CN": "孤儿"},
    ]


@pytest.fixture
def write_workbook():
    """Factory writing a list of value rows (header first) to an .xlsx file."""
    def _write(path: Path, rows):
        workbook = Workbook()
        worksheet = workbook.active
        for row in rows:
            worksheet.append(list(row))
        path.parent.mkdir(parents=True, exist_ok=True)
        workbook.save(str(path))
        return path

    return _write
