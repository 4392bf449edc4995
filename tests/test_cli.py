"""Tests for the typer CLI."""

import json

import pytest
import yaml
from typer.testing import CliRunner

from cv_tailor.cli import app

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        yaml.safe_dump({"paths": {"project_root": str(tmp_path)}, "logging": {"emoji": False}})
    )
    return str(path)


class TestValidate:
    def test_valid_company(self, config_file, company_dir):
        result = runner.invoke(app, ["validate", "-C", "tech-corp", "--config", config_file])
        assert result.exit_code == 0
        assert "Validation passed" in result.output

    def test_company_name_normalized(self, config_file, company_dir):
        """-C values are normalized before resolution."""
        result = runner.invoke(app, ["validate", "-C", "Tech Corp", "--config", config_file])
        assert result.exit_code == 0
        assert "tech-corp" in result.output

    def test_single_type(self, config_file, company_dir):
        result = runner.invoke(app, ["validate", "resume", "-C", "tech-corp", "--config", config_file])
        assert result.exit_code == 0
        assert "Resume" in result.output

    def test_schema_error_exit_code(self, config_file, company_dir):
        """Validation failures exit with status 1."""
        (company_dir / "metadata.yaml").write_text("company: ''\nposition: X\nlast_updated: x\n")
        result = runner.invoke(app, ["validate", "-C", "tech-corp", "--config", config_file])
        assert result.exit_code == 1
        assert "metadata.yaml validation failed" in result.output

    def test_both_options(self, config_file):
        result = runner.invoke(
            app, ["validate", "-C", "a", "-P", "/tmp/b", "--config", config_file]
        )
        assert result.exit_code == 1
        assert "Path option validation failed" in result.output

    def test_json_output(self, config_file, company_dir):
        """--json prints a machine-readable summary instead of the success line."""
        result = runner.invoke(
            app, ["validate", "metadata", "-C", "tech-corp", "--json", "--config", config_file]
        )
        assert result.exit_code == 0
        assert "Validation passed" not in result.output
        payload = json.loads(result.output[result.output.index("{"):])
        assert payload == {
            "path": str(company_dir),
            "validated_files": [{"file": "metadata.yaml", "name": "Metadata"}],
        }


class TestSetEnv:
    def test_set_env_and_check(self, config_file, company_dir, tmp_path):
        result = runner.invoke(app, ["set-env", "-C", "tech-corp", "--config", config_file])
        assert result.exit_code == 0, result.output
        assert (tmp_path / ".tailor" / "tailor-context.yaml").exists()
        assert (tmp_path / "generated" / "application_data.py").exists()

        check = runner.invoke(app, ["check-context", "--config", config_file])
        assert check.exit_code == 0
        assert "tech-corp" in check.output

    def test_unknown_company(self, config_file, company_dir):
        result = runner.invoke(app, ["set-env", "-C", "acme", "--config", config_file])
        assert result.exit_code == 1
        assert "Available companies: tech-corp" in result.output


class TestOtherCommands:
    def test_generate_data(self, config_file, company_dir, tmp_path):
        result = runner.invoke(app, ["generate-data", "-C", "tech-corp", "--config", config_file])
        assert result.exit_code == 0
        assert (tmp_path / "generated" / "application_data.py").exists()

    def test_check_context_missing(self, config_file):
        result = runner.invoke(app, ["check-context", "--config", config_file])
        assert result.exit_code == 1

    def test_generate_pdf_needs_context(self, config_file):
        result = runner.invoke(app, ["generate-pdf", "--config", config_file])
        assert result.exit_code == 1

    def test_themes(self):
        result = runner.invoke(app, ["themes"])
        assert result.exit_code == 0
        assert "modern" in result.output
        assert "classic" in result.output

    def test_companies(self, config_file, company_dir):
        result = runner.invoke(app, ["companies", "--config", config_file])
        assert "tech-corp" in result.output

    def test_invalid_config(self, tmp_path):
        bad = tmp_path / "bad.yaml"
        bad.write_text("watch:\n  debounce_ms: -1\n")
        result = runner.invoke(app, ["companies", "--config", str(bad)])
        assert result.exit_code == 1
