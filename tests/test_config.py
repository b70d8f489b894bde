"""
Configuration tests

Tests environment-driven settings and YAML word-list loading.
"""

import pytest

from studiolex.config.settings import AppSettings
from studiolex.lib.patterns import BUILTINS, KEYWORDS
from studiolex.lib.wordlists import WordListError, wordlists_load


class TestAppSettings:
    """Test STUDIOLEX_ environment configuration"""

    def test_defaults(self, monkeypatch):
        for name in ("KEYWORDS", "BUILTINS", "OUTPUT_FORMAT", "PYGMENTS_STYLE", "WORDLISTS_FILE"):
            monkeypatch.delenv(f"STUDIOLEX_{name}", raising=False)
        settings = AppSettings(_env_file=None)
        assert settings.keywords == list(KEYWORDS)
        assert settings.builtins == list(BUILTINS)
        assert settings.output_format == "tokens"
        assert settings.pygments_style == "monokai"
        assert settings.wordlists_file is None

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("STUDIOLEX_OUTPUT_FORMAT", "html")
        monkeypatch.setenv("STUDIOLEX_BUILTINS", '["hab", " sup-run "]')
        settings = AppSettings(_env_file=None)
        assert settings.output_format == "html"
        assert settings.builtins == ["hab", "sup-run"]

    def test_invalid_format_rejected(self, monkeypatch):
        monkeypatch.setenv("STUDIOLEX_OUTPUT_FORMAT", "pdf")
        with pytest.raises(ValueError):
            AppSettings(_env_file=None)

    def test_output_name(self):
        settings = AppSettings(_env_file=None, output_format="tokens")
        assert settings.outputName_make("setup.studio") == "setup.studio.tokens"
        assert settings.outputName_make("setup.studio", "html") == "setup.studio.html"


class TestWordLists:
    """Test YAML word-list files"""

    def test_load_both_lists(self, tmp_path):
        path = tmp_path / "words.yaml"
        path.write_text("keywords: [if, fi]\nbuiltins:\n  - hab\n  - sup-run\n")
        assert wordlists_load(path) == (["if", "fi"], ["hab", "sup-run"])

    def test_missing_key_keeps_fallback(self, tmp_path):
        path = tmp_path / "words.yaml"
        path.write_text("builtins: [hab]\n")
        keywords, builtins = wordlists_load(path, keywords=["then"], builtins=["sl"])
        assert keywords == ["then"]
        assert builtins == ["hab"]

    def test_empty_file(self, tmp_path):
        path = tmp_path / "words.yaml"
        path.write_text("")
        assert wordlists_load(path, ["if"], ["hab"]) == (["if"], ["hab"])

    def test_missing_file(self, tmp_path):
        with pytest.raises(WordListError, match="not found"):
            wordlists_load(tmp_path / "absent.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "words.yaml"
        path.write_text("keywords: [if\n")
        with pytest.raises(WordListError, match="Failed to parse"):
            wordlists_load(path)

    def test_list_required(self, tmp_path):
        path = tmp_path / "words.yaml"
        path.write_text("keywords: if\n")
        with pytest.raises(WordListError, match="must be a list"):
            wordlists_load(path)

    def test_entries_must_be_strings(self, tmp_path):
        path = tmp_path / "words.yaml"
        path.write_text("builtins: [hab, 3]\n")
        with pytest.raises(WordListError, match="non-empty strings"):
            wordlists_load(path)

    def test_top_level_mapping_required(self, tmp_path):
        path = tmp_path / "words.yaml"
        path.write_text("- hab\n")
        with pytest.raises(WordListError, match="mapping"):
            wordlists_load(path)
