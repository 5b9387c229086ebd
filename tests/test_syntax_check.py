from __future__ import annotations
import os

import pytest

from xml_checks import ScanReport, SyntaxProblem
from xml_checks.common import (
    XML_SYNTAX_CHECK_FAILED_OUTPUT_INDICATOR,
    XML_SYNTAX_CHECK_PASSED_OUTPUT_INDICATOR,
)
from xml_checks.errors import CheckFailedError, ConfigurationError
from xml_checks.syntax import check_xml_syntax, discover_xml_files, run_syntax_check

VALID_XML = '''
<?xml version="1.0" encoding="utf-8"?>
<shape xmlns:android="http://schemas.android.com/apk/res/android"
  android:shape="rectangle">
  <solid android:color="#3333334D" />
  <size android:height="1dp" />
</shape>
'''

MISMATCHED_END_TAG = '''
<?xml version="1.0" encoding="utf-8"?>
<shape xmlns:android="http://schemas.android.com/apk/res/android"
  android:shape="rectangle">
  <solid android:color="#3333334D" />
  <size android:height="1dp" />
</shapes>
'''

INVALID_OPENING_TAG = '''
<?xml version="1.0" encoding="utf-8"?>
<shape xmlns:android="http://schemas.android.com/apk/res/android"
  android:shape="rectangle">
  <<solid android:color="#3333334D" />
  <size android:height="1dp" />
</shape>
'''


def _stdout_lines(capsys):
    return capsys.readouterr().out.strip().splitlines()


def test_valid_xml_passes(testfiles, write_file, capsys):
    write_file(testfiles, "TestFile.xml", VALID_XML)
    report = check_xml_syntax(str(testfiles))
    assert report.passed
    assert capsys.readouterr().out.strip() == XML_SYNTAX_CHECK_PASSED_OUTPUT_INDICATOR


def test_empty_tree_passes(testfiles, capsys):
    check_xml_syntax(str(testfiles))
    assert capsys.readouterr().out.strip() == XML_SYNTAX_CHECK_PASSED_OUTPUT_INDICATOR


def test_mismatched_end_tag_fails(testfiles, write_file, capsys):
    write_file(testfiles, "TestFile.xml", MISMATCHED_END_TAG)
    with pytest.raises(CheckFailedError) as excinfo:
        check_xml_syntax(str(testfiles))
    assert XML_SYNTAX_CHECK_FAILED_OUTPUT_INDICATOR in str(excinfo.value)

    lines = _stdout_lines(capsys)
    assert lines == [
        f"{testfiles}/TestFile.xml:6:10: Opening and ending tag mismatch: shape line 2 and shapes",
    ]
    assert excinfo.value.report == "\n".join(lines)


def test_multiple_invalid_files_report_most_recent_first(testfiles, write_file, capsys):
    write_file(testfiles, "TestFile1.xml", INVALID_OPENING_TAG)
    write_file(testfiles, "TestFile2.xml", MISMATCHED_END_TAG)
    with pytest.raises(CheckFailedError):
        check_xml_syntax(str(testfiles))

    assert _stdout_lines(capsys) == [
        f"{testfiles}/TestFile2.xml:6:10: Opening and ending tag mismatch: shape line 2 and shapes",
        f"{testfiles}/TestFile1.xml:4:4: StartTag: invalid element name",
    ]


def test_unreadable_file_does_not_stop_the_scan(testfiles, write_file, capsys):
    write_file(testfiles, "Bad.xml", MISMATCHED_END_TAG)
    write_file(testfiles, "Good.xml", VALID_XML)
    try:
        os.symlink(testfiles / "gone.xml", testfiles / "Dangling.xml")
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not available")
    with pytest.raises(CheckFailedError) as excinfo:
        check_xml_syntax(str(testfiles))

    report = excinfo.value.result
    assert report.files_scanned == 3
    assert [path for path, _ in report.problems_by_file] == [
        str(testfiles / "Bad.xml"),
        str(testfiles / "Dangling.xml"),
    ]
    lines = _stdout_lines(capsys)
    assert lines[0].startswith(f"{testfiles}/Dangling.xml:1:1: Cannot read file")
    assert lines[1].startswith(f"{testfiles}/Bad.xml:6:10:")


def test_valid_files_contribute_nothing(testfiles, write_file):
    write_file(testfiles, "a/Good.xml", VALID_XML)
    write_file(testfiles, "b/Bad.xml", MISMATCHED_END_TAG)
    report = run_syntax_check(testfiles)
    assert report.files_scanned == 2
    assert [path for path, _ in report.problems_by_file] == [str(testfiles / "b" / "Bad.xml")]


def test_render_reverses_scan_order():
    report = ScanReport(
        problems_by_file=(
            ("/r/a.xml", (SyntaxProblem("/r/a.xml", 1, 2, "first"), SyntaxProblem("/r/a.xml", 3, 4, "second"))),
            ("/r/b.xml", (SyntaxProblem("/r/b.xml", 5, 6, "third"),)),
        ),
        files_scanned=3,
    )
    assert not report.passed
    assert report.render() == "/r/b.xml:5:6: third\n/r/a.xml:1:2: first\n/r/a.xml:3:4: second"


def test_discovery_is_sorted_and_skips_non_xml(testfiles, write_file):
    write_file(testfiles, "res/values/strings.xml", VALID_XML)
    write_file(testfiles, "AndroidManifest.xml", VALID_XML)
    write_file(testfiles, "res/layout/main.XML", VALID_XML)
    write_file(testfiles, "README.md", "# not xml")
    found = discover_xml_files(testfiles)
    assert found == sorted(found)
    assert str(testfiles / "README.md") not in found
    assert len(found) == 3


def test_excluded_directories_are_not_scanned(testfiles, write_file, capsys):
    write_file(testfiles, ".git/config.xml", MISMATCHED_END_TAG)
    write_file(testfiles, "build/generated.xml", MISMATCHED_END_TAG)
    write_file(testfiles, "bazel-out/k8/out.xml", MISMATCHED_END_TAG)
    write_file(testfiles, "app/res/ok.xml", VALID_XML)
    check_xml_syntax(str(testfiles))
    assert capsys.readouterr().out.strip() == XML_SYNTAX_CHECK_PASSED_OUTPUT_INDICATOR


def test_exempt_paths_are_skipped(testfiles, write_file, capsys):
    write_file(testfiles, "third_party/broken.xml", MISMATCHED_END_TAG)
    write_file(testfiles, "app/Broken.xml", MISMATCHED_END_TAG)
    check_xml_syntax(str(testfiles), exempt_paths=["third_party", "app/Broken.xml"])
    assert capsys.readouterr().out.strip() == XML_SYNTAX_CHECK_PASSED_OUTPUT_INDICATOR


def test_exempt_prefix_does_not_match_sibling(testfiles, write_file):
    write_file(testfiles, "third_party_extra/broken.xml", MISMATCHED_END_TAG)
    report = run_syntax_check(testfiles, exempt_paths=["third_party"])
    assert not report.passed


def test_missing_root_is_a_configuration_error(tmp_path):
    with pytest.raises(ConfigurationError):
        run_syntax_check(tmp_path / "does-not-exist")


def test_running_twice_gives_identical_reports(testfiles, write_file, capsys):
    write_file(testfiles, "TestFile1.xml", INVALID_OPENING_TAG)
    write_file(testfiles, "TestFile2.xml", MISMATCHED_END_TAG)
    with pytest.raises(CheckFailedError):
        check_xml_syntax(str(testfiles))
    first = capsys.readouterr().out
    with pytest.raises(CheckFailedError):
        check_xml_syntax(str(testfiles))
    assert capsys.readouterr().out == first
