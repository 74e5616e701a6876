"""Tests for configuration loading."""

from ghtimecard.config import Config, load_config, parse_config


class TestParseConfig:
    def test_defaults(self):
        config = parse_config("")
        assert config == Config()
        assert config.openai_model == "gpt-4"
        assert config.temperature == 0.2
        assert config.max_tokens == 180

    def test_values_and_comments(self):
        config = parse_config(
            "# GitHub\n"
            "GITHUB_USER=alice\n"
            'GITHUB_TOKEN="ghp_abc#123"  # quoted keeps the hash\n'
            "OPENAI_MODEL=gpt-4o # inline comment\n"
            "SUMMARIZER=Claude\n"
            "TEMPERATURE=0.5\n"
            "MAX_TOKENS=300\n"
            "DEFAULT_STYLE=Detailed\n"
            "not a setting\n"
        )

        assert config.github_user == "alice"
        assert config.github_token == "ghp_abc#123"
        assert config.openai_model == "gpt-4o"
        assert config.summarizer == "claude"
        assert config.temperature == 0.5
        assert config.max_tokens == 300
        assert config.default_style == "detailed"

    def test_invalid_numbers_keep_defaults(self, caplog):
        config = parse_config("MAX_TOKENS=lots\nREQUEST_TIMEOUT=soon\n")

        assert config.max_tokens == 180
        assert config.request_timeout == 60
        assert "Ignoring invalid MAX_TOKENS" in caplog.text

    def test_unknown_summarizer(self, caplog):
        config = parse_config("SUMMARIZER=parrot\n")
        assert config.summarizer == "openai"
        assert "Unknown SUMMARIZER" in caplog.text


class TestLoadConfig:
    def test_missing_file(self, tmp_path):
        config = load_config(tmp_path / "nope.conf", environ={})
        assert config == Config()

    def test_reads_file(self, tmp_path):
        path = tmp_path / "ghtimecard.conf"
        path.write_text("GITHUB_USER=alice\nOPENAI_TOKEN=sk-file\n")

        config = load_config(path, environ={})

        assert config.github_user == "alice"
        assert config.openai_token == "sk-file"

    def test_environment_wins(self, tmp_path):
        path = tmp_path / "ghtimecard.conf"
        path.write_text("GITHUB_TOKEN=from-file\nGITHUB_USER=alice\n")

        config = load_config(path, environ={"GITHUB_TOKEN": "from-env", "GITHUB_USER": ""})

        assert config.github_token == "from-env"
        assert config.github_user == "alice"
