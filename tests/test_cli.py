"""Tests for the sip-validate command line."""

import io

import pytest

from cli import collect_files, main, validate_paths

CLEAN_SIP = (
    "---\nsip: 1\ntitle: One\nstatus: Review\ncategory: Blockchain\n"
    "author: Jane Doe (@janedoe)\ncreated: 2020-01-01\n---\n\nBody.\n"
)


@pytest.fixture()
def sip_tree(tmp_path):
    (tmp_path / "sip-1.md").write_text(CLEAN_SIP)
    no_handle = CLEAN_SIP.replace("author: Jane Doe (@janedoe)", "author: Jane Doe")
    (tmp_path / "sip-2.md").write_text(no_handle)
    return tmp_path


def test_collect_files(sip_tree):
    files, missing = collect_files([str(sip_tree), str(sip_tree / "nope.md")])
    assert files == [str(sip_tree / "sip-1.md"), str(sip_tree / "sip-2.md")]
    assert missing == [str(sip_tree / "nope.md")]


def test_clean_file_exits_zero(sip_tree):
    out = io.StringIO()
    assert validate_paths([str(sip_tree / "sip-1.md")], out=out) == 0
    assert "1 file(s) checked, 0 problem(s)" in out.getvalue()


def test_problems_are_printed_with_location(sip_tree):
    out = io.StringIO()
    assert validate_paths([str(sip_tree)], out=out) == 1
    lines = out.getvalue().splitlines()
    assert lines[0] == (
        f"{sip_tree / 'sip-2.md'}:1: "
        'Preamble header "author" doesn\'t have at least one github account'
    )
    assert lines[-1] == "2 file(s) checked, 1 problem(s)"


def test_missing_path_exits_two(sip_tree):
    out = io.StringIO()
    assert validate_paths([str(sip_tree / "missing")], out=out) == 2
    assert "no such file or directory" in out.getvalue()


def test_main_exit_status(sip_tree, capsys):
    with pytest.raises(SystemExit) as exc:
        main([str(sip_tree / "sip-1.md")])
    assert exc.value.code == 0
    assert "0 problem(s)" in capsys.readouterr().out
