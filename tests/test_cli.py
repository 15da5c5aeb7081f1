"""Tests for the i18nvalidate command-line interface."""

import json
import logging

import pytest
from typer.testing import CliRunner

from i18nvalidate.cli import app, load_model


MODELS_SOURCE = '''
from dataclasses import dataclass, field


@dataclass
class Contact:
    FirstName: str = field(
        default="",
        metadata={"validate": "required", "trans": "en:First Name;pt:Primeiro Nome"},
    )
    Email: str = field(
        default="",
        metadata={"validate": "required,email", "trans": "en:Email;pt:E-mail"},
    )


class NotARecord:
    pass
'''


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def runner():
    """Create CLI runner."""
    return CliRunner()


@pytest.fixture
def models(tmp_path, monkeypatch):
    """Importable module holding the record types."""
    (tmp_path / "cli_models.py").write_text(MODELS_SOURCE, encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))
    return "cli_models"


@pytest.fixture
def contacts_csv(tmp_path):
    path = tmp_path / "contacts.csv"
    path.write_text(
        "FirstName,Email\n"
        "Ana,ana@example.com\n"
        ",not-an-email\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("DEFAULT_LOCALE", "LOCALES", "CATALOG_DIR", "LOG_LEVEL"):
        monkeypatch.delenv(f"I18NVALIDATE_{name}", raising=False)
    yield
    # check attaches a handler bound to the runner's stderr
    package_logger = logging.getLogger("i18nvalidate")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)


# =============================================================================
# Model Loading
# =============================================================================


class TestLoadModel:
    """Tests for load_model."""

    def test_loads_dataclass(self, models):
        model = load_model(f"{models}:Contact")

        assert model.__name__ == "Contact"

    @pytest.mark.parametrize("target", ["Contact", ":Contact", "cli_models:", ""])
    def test_malformed_target(self, target):
        with pytest.raises(ValueError, match="module:ClassName"):
            load_model(target)

    def test_missing_module(self):
        with pytest.raises(ValueError, match="Cannot import"):
            load_model("no_such_module_xyz:Contact")

    def test_not_a_dataclass(self, models):
        with pytest.raises(ValueError, match="not a dataclass"):
            load_model(f"{models}:NotARecord")
        with pytest.raises(ValueError, match="not a dataclass"):
            load_model(f"{models}:Missing")


# =============================================================================
# check
# =============================================================================


class TestCheckCommand:
    """Tests for the check command."""

    def test_json_output(self, runner, models, contacts_csv):
        result = runner.invoke(
            app, ["check", str(contacts_csv), "-m", f"{models}:Contact", "-f", "json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["row_count"] == 2
        assert data["failed_rows"] == 1
        assert data["locale"] == "en"
        assert [e["message"] for e in data["errors"]] == [
            "First Name is a required field",
            "Email must be a valid email address",
        ]

    def test_locale_option(self, runner, models, tmp_path, contacts_csv):
        config = tmp_path / "config.yaml"
        config.write_text("locales: [en, pt]\n", encoding="utf-8")

        result = runner.invoke(
            app,
            [
                "check", str(contacts_csv),
                "--model", f"{models}:Contact",
                "--config", str(config),
                "--locale", "pt",
                "--format", "json",
            ],
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["locale"] == "pt"
        assert data["errors"][0]["message"] == "Primeiro Nome é obrigatório"

    def test_locale_option_without_config(self, runner, models, contacts_csv):
        result = runner.invoke(
            app,
            ["check", str(contacts_csv), "-m", f"{models}:Contact", "-l", "pt", "-f", "json"],
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["locale"] == "pt"
        assert data["errors"][0]["message"] == "Primeiro Nome é obrigatório"

    def test_locale_option_without_default_messages(self, runner, models, contacts_csv):
        result = runner.invoke(
            app,
            ["check", str(contacts_csv), "-m", f"{models}:Contact", "-l", "es", "-f", "json"],
        )

        assert result.exit_code == 0
        assert json.loads(result.stdout)["locale"] == "en"

    def test_env_configuration(self, runner, models, contacts_csv, monkeypatch):
        monkeypatch.setenv("I18NVALIDATE_DEFAULT_LOCALE", "pt")

        result = runner.invoke(
            app, ["check", str(contacts_csv), "-m", f"{models}:Contact", "-f", "json"]
        )

        assert result.exit_code == 0
        assert json.loads(result.stdout)["locale"] == "pt"

    def test_console_output(self, runner, models, contacts_csv):
        result = runner.invoke(app, ["check", str(contacts_csv), "-m", f"{models}:Contact"])

        assert result.exit_code == 0
        assert "Validation Report" in result.stdout
        assert "Summary" in result.stdout

    def test_output_file(self, runner, models, tmp_path, contacts_csv):
        output = tmp_path / "report.json"

        result = runner.invoke(
            app,
            ["check", str(contacts_csv), "-m", f"{models}:Contact", "-f", "json", "-o", str(output)],
        )

        assert result.exit_code == 0
        assert "Report written" in result.stdout
        assert json.loads(output.read_text(encoding="utf-8"))["row_count"] == 2

    def test_console_output_file(self, runner, models, tmp_path, contacts_csv):
        output = tmp_path / "report.txt"

        result = runner.invoke(
            app, ["check", str(contacts_csv), "-m", f"{models}:Contact", "-o", str(output)]
        )

        assert result.exit_code == 0
        assert "Report written" in result.stdout
        assert "Validation Report" not in result.stdout
        text = output.read_text(encoding="utf-8")
        assert "Validation Report" in text
        assert "Contact.FirstName" in text

    def test_strict_fails_on_errors(self, runner, models, contacts_csv):
        result = runner.invoke(
            app, ["check", str(contacts_csv), "-m", f"{models}:Contact", "--strict"]
        )

        assert result.exit_code == 1

    def test_strict_passes_valid_file(self, runner, models, tmp_path):
        path = tmp_path / "valid.csv"
        path.write_text("FirstName,Email\nAna,ana@example.com\n", encoding="utf-8")

        result = runner.invoke(app, ["check", str(path), "-m", f"{models}:Contact", "--strict"])

        assert result.exit_code == 0
        assert "All 1 rows are valid" in result.stdout

    def test_missing_file(self, runner, models, tmp_path):
        result = runner.invoke(
            app, ["check", str(tmp_path / "missing.csv"), "-m", f"{models}:Contact"]
        )

        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_bad_model(self, runner, contacts_csv):
        result = runner.invoke(app, ["check", str(contacts_csv), "-m", "Contact"])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_unsupported_locale_in_config(self, runner, models, tmp_path, contacts_csv):
        config = tmp_path / "config.yaml"
        config.write_text("locales: [en, xx]\n", encoding="utf-8")

        result = runner.invoke(
            app, ["check", str(contacts_csv), "-m", f"{models}:Contact", "-c", str(config)]
        )

        assert result.exit_code == 1
        assert "xx" in result.output


# =============================================================================
# locales
# =============================================================================


class TestLocalesCommand:
    """Tests for the locales command."""

    def test_lists_builtin_locales(self, runner):
        result = runner.invoke(app, ["locales"])

        assert result.exit_code == 0
        assert "* en" in result.stdout
        assert "* pt_BR" in result.stdout
        assert "  es" in result.stdout
        assert "Português" in result.stdout
        assert "default rule messages available" in result.stdout
