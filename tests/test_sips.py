"""Unit tests for the SIP directory service."""

from unittest.mock import patch

import pytest

from services.sips import iter_sip_files, list_sips, validate_sip_file

CLEAN_SIP = (
    "---\nsip: 1\ntitle: One\nstatus: Draft\ncategory: Core\n"
    "author: Jane Doe (@janedoe)\ncreated: 2020-01-01\n---\n\nBody.\n"
)
BROKEN_SIP = "---\nsip: two\ntitle: Two\n---\n\nBody.\n"


@pytest.fixture()
def tmp_sips(tmp_path):
    """Temp SIP directory with one clean, one broken and one hidden file."""
    (tmp_path / "sip-1.md").write_text(CLEAN_SIP)
    drafts = tmp_path / "drafts"
    drafts.mkdir()
    (drafts / "sip-2.md").write_text(BROKEN_SIP)
    hidden = tmp_path / ".git"
    hidden.mkdir()
    (hidden / "ignored.md").write_text(BROKEN_SIP)
    (tmp_path / "notes.txt").write_text("not a SIP")

    with patch("services.sips.SIP_DIR", str(tmp_path)):
        yield tmp_path


def test_iter_sip_files(tmp_sips):
    assert iter_sip_files(str(tmp_sips)) == ["drafts/sip-2.md", "sip-1.md"]


def test_validate_clean_file(tmp_sips):
    result = validate_sip_file("sip-1.md")
    assert result == {"path": "sip-1.md", "ok": True, "diagnostics": []}


def test_validate_broken_file(tmp_sips):
    result = validate_sip_file("drafts/sip-2.md")
    assert result["ok"] is False
    assert result["diagnostics"] == [
        {"message": "The front-matter is not proper YAML", "line": 1, "path": "drafts/sip-2.md"}
    ]


def test_validate_missing_file(tmp_sips):
    assert validate_sip_file("nope.md") == {"error": "File not found"}


def test_validate_traversal(tmp_sips):
    assert validate_sip_file("../../etc/passwd") == {"error": "Path traversal detected"}


def test_list_sips(tmp_sips):
    result = list_sips()
    assert result == {
        "sips": [
            {"path": "drafts/sip-2.md", "ok": False, "diagnostic_count": 1},
            {"path": "sip-1.md", "ok": True, "diagnostic_count": 0},
        ]
    }


def test_list_sips_missing_dir(tmp_path):
    assert list_sips(str(tmp_path / "missing")) == {"error": "SIP directory not found"}
