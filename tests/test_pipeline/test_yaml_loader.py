"""Tests for YAML loading, payload extraction and schema validation."""

from cv_tailor.models import Metadata, Resume
from cv_tailor.pipeline.files import METADATA, RESUME, build_files_to_validate
from cv_tailor.pipeline.yaml_loader import (
    extract_payload,
    load_yaml_files,
    read_yaml,
    validate_schema,
    validate_yaml_files_pipeline,
)


class TestReadYaml:
    def test_reads_mapping(self, tmp_path):
        path = tmp_path / "a.yaml"
        path.write_text("key: value\n")
        assert read_yaml(path).data == {"key": "value"}

    def test_missing_file(self, tmp_path):
        path = tmp_path / "missing.yaml"
        result = read_yaml(path)
        assert result.error == f"Failed to read {path}"

    def test_malformed_yaml(self, tmp_path):
        """Parse errors are tagged separately from read errors."""
        path = tmp_path / "bad.yaml"
        path.write_text("key: value\n  nested: bad\n")
        result = read_yaml(path)
        assert result.error == "Invalid YAML"
        assert result.details


class TestExtractPayload:
    def test_unwraps_key(self):
        assert extract_payload({"resume": {"name": "x"}}, "resume") == {"name": "x"}

    def test_missing_key_returns_raw(self):
        raw = {"name": "x"}
        assert extract_payload(raw, "resume") is raw

    def test_falsy_value_returns_raw(self):
        """An empty wrapper value leaves the document as is."""
        raw = {"resume": None, "name": "x"}
        assert extract_payload(raw, "resume") is raw

    def test_no_wrapper_key(self):
        raw = {"company": "x"}
        assert extract_payload(raw, None) is raw

    def test_non_mapping_passes_through(self):
        assert extract_payload(["a"], "resume") == ["a"]


class TestLoadYamlFiles:
    def test_wrapped_and_unwrapped_files_load_the_same(self, make_company, resume_data):
        """The wrapper key is optional in the file."""
        wrapped = make_company("wrapped", {"resume.yaml": {"resume": resume_data}})
        bare = make_company("bare", {"resume.yaml": resume_data})
        a = load_yaml_files(build_files_to_validate(wrapped, [RESUME])).data[0]
        b = load_yaml_files(build_files_to_validate(bare, [RESUME])).data[0]
        assert a.data == b.data == resume_data

    def test_stops_at_first_unreadable_file(self, make_company, metadata_data):
        directory = make_company("broken", {
            "metadata.yaml": "company: [unclosed\n",
            "resume.yaml": "resume: {}\n",
        })
        result = load_yaml_files(build_files_to_validate(directory, [METADATA, RESUME]))
        assert result.error == "Invalid YAML"


class TestValidateSchema:
    def test_valid(self, metadata_data):
        result = validate_schema(Metadata, metadata_data, "metadata.yaml", "/x/metadata.yaml")
        assert isinstance(result.data, Metadata)

    def test_empty_required_field(self, metadata_data):
        metadata_data["company"] = ""
        result = validate_schema(Metadata, metadata_data, "metadata.yaml", "/x/metadata.yaml")
        assert result.error == "metadata.yaml validation failed"
        assert result.file_path == "/x/metadata.yaml"
        assert result.details.startswith("  - company: ")

    def test_nested_path_in_details(self, resume_data):
        resume_data["education"][0]["program"] = ""
        result = validate_schema(Resume, resume_data, "resume.yaml", "resume.yaml")
        assert "  - education.0.program: " in result.details

    def test_root_level_error(self):
        """Errors without a field path are reported under root."""
        result = validate_schema(Metadata, "just a string", "metadata.yaml", "metadata.yaml")
        assert result.details.startswith("  - root: ")

    def test_one_line_per_issue(self):
        result = validate_schema(Metadata, {}, "metadata.yaml", "metadata.yaml")
        assert len(result.details.splitlines()) == 3


class TestPipeline:
    def test_full_company(self, company_dir):
        result = validate_yaml_files_pipeline(build_files_to_validate(company_dir))
        assert result.success
        assert isinstance(result.data[2].data, Resume)

    def test_schema_failure_reports_file(self, company_dir):
        (company_dir / "metadata.yaml").write_text("company: ''\nposition: X\nlast_updated: today\n")
        result = validate_yaml_files_pipeline(build_files_to_validate(company_dir))
        assert result.error == "metadata.yaml validation failed"
        assert result.file_path == str(company_dir / "metadata.yaml")

    def test_missing_files_fail_before_loading(self, make_company):
        """Existence is checked before any file is parsed."""
        directory = make_company("partial", {"metadata.yaml": "not: [valid\n"})
        result = validate_yaml_files_pipeline(build_files_to_validate(directory))
        assert result.error == "Missing 3 required file(s):"

    def test_partial_allowed(self, make_company, metadata_data):
        directory = make_company("partial", {"metadata.yaml": metadata_data})
        result = validate_yaml_files_pipeline(
            build_files_to_validate(directory), allow_partial=True
        )
        assert [f.file_name for f in result.data] == ["metadata.yaml"]
