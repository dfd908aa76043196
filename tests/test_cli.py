import pytest
from unittest.mock import patch
from click.testing import CliRunner

from casegen.models import AggregationResult, CsvResult, CSV_HEADER
from casegen.pipeline import IssueLookupError
from main import cli


@pytest.fixture
def runner(monkeypatch, tmp_path):
    monkeypatch.setattr('casegen.config.load_dotenv', lambda: None)
    monkeypatch.setenv('CASEGEN_CONFIG', str(tmp_path / "missing.yaml"))
    monkeypatch.setenv('OPENAI_API_KEY', 'sk-env')
    monkeypatch.delenv('LINEAR_API_KEY', raising=False)
    # Root logger handlers added by the CLI are not needed between tests
    monkeypatch.setattr('main.setup_logging', lambda verbose=False: None)
    return CliRunner()


class TestGenerateCommand:

    @patch('main.TestCaseGenerator')
    def test_prints_header_and_rows(self, mock_generator_cls, runner):
        mock_generator_cls.return_value.generate.return_value = CsvResult(csv="row1\nrow2")

        result = runner.invoke(cli, ['generate', '--description', 'ログイン', '--cases', '3'])

        assert result.exit_code == 0
        assert result.output == f"{CSV_HEADER}\nrow1\nrow2\n"
        request, credentials = mock_generator_cls.return_value.generate.call_args.args
        assert request.description == "ログイン"
        assert request.cases == 3
        assert request.model == "gpt-4o-mini"
        assert credentials.openai_api_key == "sk-env"

    @patch('main.TestCaseGenerator')
    def test_identifiers_are_normalized(self, mock_generator_cls, runner):
        mock_generator_cls.return_value.generate.return_value = CsvResult(csv="row1")

        result = runner.invoke(cli, ['generate', 'eng-1,ENG-2', 'ENG-1', '--no-header'])

        assert result.exit_code == 0
        assert result.output == "row1\n"
        request, _ = mock_generator_cls.return_value.generate.call_args.args
        assert request.identifiers == ["ENG-1", "ENG-2"]

    @patch('main.TestCaseGenerator')
    def test_errors_exit_non_zero(self, mock_generator_cls, runner):
        mock_generator_cls.return_value.generate.side_effect = IssueLookupError("Failed to fetch Linear description: nope")

        result = runner.invoke(cli, ['generate', 'ENG-1'])

        assert result.exit_code == 1
        assert "Failed to fetch Linear description: nope" in result.output


class TestResolveCommand:

    def test_requires_linear_key(self, runner):
        result = runner.invoke(cli, ['resolve', 'ENG-1'])

        assert result.exit_code == 1
        assert "LINEAR_API_KEY is required" in result.output

    @patch('main.TestCaseGenerator')
    def test_prints_combined_description(self, mock_generator_cls, runner):
        aggregator = mock_generator_cls.return_value.create_aggregator.return_value
        aggregator.aggregate.return_value = AggregationResult(success=True, description="ENG-1 Login")

        result = runner.invoke(cli, ['resolve', 'ENG-1', '--linear-api-key', 'lin-cli'])

        assert result.exit_code == 0
        assert result.output == "ENG-1 Login\n"
        mock_generator_cls.return_value.create_aggregator.assert_called_once_with('lin-cli')


def test_env_status(runner):
    result = runner.invoke(cli, ['env-status'])

    assert result.exit_code == 0
    assert "OpenAI API key: ✅ configured" in result.output
    assert "Linear API key: ❌ not set" in result.output
