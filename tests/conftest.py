"""Shared fixtures: a small four-layer traceability dataset."""

import json

import pytest


@pytest.fixture
def trace_data():
    """Raw scanner output.

    Links: REQ1 -> ARC1 -> IMP1 -> UT1, REQ2 -> IMP2, and UT1 also names a
    parent that does not exist.
    """
    return {
        "layers": [
            {"name": "Requirement"},
            {"name": "Architecture"},
            {"name": "Implementation"},
            {"name": "Unit Test"},
        ],
        "files": [
            {"file": "docs/01_requirements.md", "version": "git:abc1234"},
            {"file": "docs/02_architecture.md", "version": "mtime:2025-12-26T10:30:45Z"},
            {"file": "src/main.sh", "version": "unknown"},
            {"file": "test/unit_test.sh", "version": "git:def5678"},
        ],
        "trace_tags": [
            {
                "id": "@REQ1@",
                "layer_id": 0,
                "file_id": 0,
                "line": 3,
                "description": "Login",
                "from_tags": ["NONE"],
            },
            {
                "id": "@REQ2@",
                "layer_id": 0,
                "file_id": 0,
                "line": 8,
                "description": "Logout",
                "from_tags": ["NONE"],
            },
            {
                "id": "@ARC1@",
                "layer_id": 1,
                "file_id": 1,
                "line": 5,
                "description": "Auth service",
                "from_tags": ["@REQ1@"],
            },
            {
                "id": "@IMP1@",
                "layer_id": 2,
                "file_id": 2,
                "line": 10,
                "description": "login()",
                "from_tags": ["@ARC1@"],
            },
            {
                "id": "@IMP2@",
                "layer_id": 2,
                "file_id": 2,
                "line": 20,
                "description": "logout()",
                "from_tags": ["@REQ2@"],
            },
            {
                "id": "@UT1@",
                "layer_id": 3,
                "file_id": 3,
                "line": 4,
                "description": "test_login",
                "from_tags": ["@IMP1@", "@MISSING@"],
            },
        ],
        "health": {
            "total_tags": 6,
            "tags_with_links": 5,
            "isolated_tags": 2,
            "dangling_references": 1,
            "isolated_tag_list": [
                {"id": "@UT1@", "file_id": 3, "line": 4},
                {"id": "@IMP2@", "file_id": 2, "line": 20},
            ],
            "dangling_reference_list": [
                {"child_tag": "@UT1@", "missing_parent": "@MISSING@", "file_id": 3, "line": 4}
            ],
        },
    }


@pytest.fixture
def dataset(trace_data):
    """Parsed TraceDataset for ``trace_data``."""
    from traceviz.dataset import TraceDataset

    return TraceDataset.from_dict(trace_data)


@pytest.fixture
def session(dataset):
    """RenderSession over the sample dataset with default settings."""
    from traceviz.session import RenderSession

    return RenderSession(dataset)


@pytest.fixture
def data_file(tmp_path, trace_data):
    """Sample dataset written to a JSON file."""
    path = tmp_path / "trace.json"
    path.write_text(json.dumps(trace_data), encoding="utf-8")
    return path


LAYERS = ["Requirement", "Architecture", "Implementation", "Unit Test"]


@pytest.fixture
def layer_order():
    return list(LAYERS)
