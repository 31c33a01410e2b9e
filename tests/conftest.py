"""Shared fixtures for zdoc tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from zdoc.core.catalog import DeclarationCatalog
from zdoc.core.rules import AnnotateRules


@pytest.fixture
def api_dump() -> dict[str, Any]:
    """API dump with one documented class and one bare class."""
    return {
        "classes": [
            {
                "name": "zombie.test.TestClass",
                "parent": "java.lang.Object",
                "comment": "Test class.",
                "fields": [
                    {"name": "counter", "type": "java.lang.Integer", "modifiers": ["public", "static"]},
                    {"name": "title", "type": "java.lang.String", "modifiers": ["protected"]},
                ],
                "methods": [
                    {
                        "name": "test",
                        "returnType": "java.lang.Object",
                        "params": [
                            {"name": "param1", "type": "java.lang.String"},
                            {"name": "param2", "type": "java.lang.Integer"},
                        ],
                        "modifiers": ["public"],
                    },
                    {
                        "name": "test",
                        "returnType": "java.lang.Object",
                        "params": [
                            {"name": "param1", "type": "java.lang.String"},
                            {"name": "rest", "type": "java.lang.Integer"},
                        ],
                        "varArg": True,
                        "modifiers": ["public"],
                    },
                    {
                        "name": "getName",
                        "returnType": "java.lang.String",
                        "params": [],
                        "modifiers": ["public"],
                        "comment": "Returns the name.",
                    },
                    {"name": "break", "returnType": "void", "params": [], "modifiers": ["public"]},
                    {
                        "name": "create",
                        "returnType": "zombie.test.TestClass",
                        "params": [{"name": "name", "type": "java.lang.String"}],
                        "modifiers": ["public", "static"],
                    },
                ],
            },
            {
                "name": "zombie.test.OtherClass",
                "methods": [{"name": "run", "returnType": "void", "params": []}],
            },
        ]
    }


@pytest.fixture
def catalog(api_dump) -> DeclarationCatalog:
    return DeclarationCatalog.from_api_dump(api_dump)


@pytest.fixture
def rules() -> AnnotateRules:
    return AnnotateRules()


@pytest.fixture
def api_file(tmp_path: Path, api_dump) -> Path:
    """API dump written to disk."""
    path = tmp_path / "api.json"
    path.write_text(json.dumps(api_dump), encoding="utf-8")
    return path
