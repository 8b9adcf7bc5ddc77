"""Tests for the violations.xml and per-file XML parsers."""

import pytest

from conftest import write_file_xml, write_violations_xml
from violations.core.model import Severity
from violations.core.parser import (
    ModelParseError,
    file_xml_path,
    parse_build_model,
    parse_file_model,
)


class TestParseBuildModel:
    def test_counts_and_files(self, tmp_path):
        xml_file = write_violations_xml(
            tmp_path,
            {"pmd": 5, "checkstyle": 12},
            files={
                "src/B.java": {"checkstyle": 2},
                "src/A.java": {"checkstyle": 10, "pmd": 5},
            },
        )
        result = parse_build_model(xml_file)

        assert result.ok
        model = result.model
        assert model.type_counts == {"pmd": 5, "checkstyle": 12}
        assert list(model.file_model_map) == ["src/A.java", "src/B.java"]
        assert [fc.name for fc in model.type_files["checkstyle"]] == ["src/A.java", "src/B.java"]
        assert [fc.name for fc in model.type_files["pmd"]] == ["src/A.java"]

    def test_proxy_points_at_file_artifact(self, tmp_path):
        xml_file = write_violations_xml(tmp_path, {}, files={"src/A.java": {"pmd": 1}})
        proxy = parse_build_model(xml_file).model.file_model_map["src/A.java"]
        assert proxy.xml_file == file_xml_path(tmp_path, "src/A.java")
        assert proxy.xml_file == tmp_path / "violations" / "file" / "src" / "A.java.xml"
        assert not proxy.is_loaded()

    def test_negative_count_kept(self, tmp_path):
        xml_file = write_violations_xml(tmp_path, {"cpd": -1})
        assert parse_build_model(xml_file).model.type_counts == {"cpd": -1}

    def test_missing_file(self, tmp_path):
        result = parse_build_model(tmp_path / "violations" / "violations.xml")
        assert not result.ok
        assert result.model is None
        assert isinstance(result.error, ModelParseError)
        assert "cannot read" in result.error.message

    def test_malformed_xml(self, tmp_path):
        xml_file = tmp_path / "violations.xml"
        xml_file.write_text("<violations><type name='pmd' count='1'>")
        result = parse_build_model(xml_file)
        assert not result.ok
        assert "malformed" in result.error.message

    def test_wrong_root(self, tmp_path):
        xml_file = tmp_path / "violations.xml"
        xml_file.write_text("<report/>")
        result = parse_build_model(xml_file)
        assert "expected <violations>" in result.error.message

    def test_non_integer_count(self, tmp_path):
        xml_file = tmp_path / "violations.xml"
        xml_file.write_text("<violations><type name='pmd' count='many'/></violations>")
        result = parse_build_model(xml_file)
        assert not result.ok
        assert result.error.path == xml_file


class TestParseFileModel:
    def test_violations_grouped_and_sorted(self, tmp_path):
        xml_file = write_file_xml(tmp_path, "src/A.java", [
            {"line": 30, "type": "pmd", "source": "UnusedImport", "severity": "Low", "message": "m1"},
            {"line": 4, "type": "pmd", "source": "EmptyCatch", "severity-level": 0, "message": "m2"},
            {"line": 12, "type": "checkstyle", "source": "Indent", "message": "m3",
             "popup-message": "popup"},
        ])
        fm = parse_file_model(xml_file)

        assert fm.display_name == "src/A.java"
        assert fm.source_file == "/src/src/A.java"
        assert fm.last_modified == 1700000000000
        assert fm.count() == 3
        assert fm.count("pmd") == 2
        assert [v.line for v in fm.violations["pmd"]] == [4, 30]
        assert fm.violations["pmd"][0].severity is Severity.HIGH
        assert fm.violations["pmd"][1].severity is Severity.LOW
        assert fm.violations["checkstyle"][0].severity is Severity.MEDIUM
        assert fm.violations["checkstyle"][0].popup_message == "popup"
        assert fm.lines() == [4, 12, 30]

    def test_to_dict_applies_limit(self, tmp_path):
        xml_file = write_file_xml(tmp_path, "a.py", [
            {"line": n, "type": "pylint", "source": "C0301", "message": "long"} for n in range(5)
        ])
        d = parse_file_model(xml_file).to_dict(limit=2)
        assert d["total"] == 5
        assert d["types"]["pylint"]["count"] == 5
        assert len(d["types"]["pylint"]["violations"]) == 2

    def test_malformed_raises(self, tmp_path):
        xml_file = tmp_path / "a.py.xml"
        xml_file.write_text("<file name='a.py'><violation")
        with pytest.raises(ModelParseError):
            parse_file_model(xml_file)


class TestSeverity:
    def test_levels(self):
        assert Severity.HIGH.level == 0
        assert Severity.LOW.level == 4
        assert Severity.from_level(2) is Severity.MEDIUM
        assert Severity.from_level(99) is Severity.LOW
        assert Severity.from_level(-3) is Severity.HIGH

    def test_from_name(self):
        assert Severity.from_name("medium high") is Severity.MEDIUM_HIGH
        assert Severity.from_name("MEDIUM_LOW") is Severity.MEDIUM_LOW
        assert Severity.from_name("bogus") is Severity.MEDIUM
        assert Severity.from_name(None) is Severity.MEDIUM
