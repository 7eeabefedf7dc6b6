"""Unit tests for prompt loading."""
import pytest

from aiagent.prompts import clear_cache, get_persona_prompt, load_prompt


@pytest.fixture(autouse=True)
def _fresh_prompt_cache():
    clear_cache()
    yield
    clear_cache()


class TestLoadPrompt:
    """Tests for load_prompt."""

    def test_packaged_persona_exists(self, tmp_path, monkeypatch):
        """Test that the packaged persona prompt loads and is trimmed."""
        monkeypatch.chdir(tmp_path)

        prompt = get_persona_prompt()

        assert prompt
        assert prompt == prompt.strip()
        assert "coding assistant" in prompt

    def test_working_directory_overrides_package(self, tmp_path, monkeypatch):
        """Test that ./prompts/{name}.txt takes precedence."""
        (tmp_path / "prompts").mkdir()
        (tmp_path / "prompts" / "persona.txt").write_text("  Talk like a pirate.\n")
        monkeypatch.chdir(tmp_path)

        assert get_persona_prompt() == "Talk like a pirate."

    def test_missing_prompt_raises(self, tmp_path, monkeypatch):
        """Test that an unknown prompt name raises FileNotFoundError."""
        monkeypatch.chdir(tmp_path)

        with pytest.raises(FileNotFoundError):
            load_prompt("does-not-exist")

    def test_results_are_cached(self, tmp_path, monkeypatch):
        """Test that edits are only seen after clear_cache()."""
        prompts_dir = tmp_path / "prompts"
        prompts_dir.mkdir()
        prompt_file = prompts_dir / "greeting.txt"
        prompt_file.write_text("first")
        monkeypatch.chdir(tmp_path)

        assert load_prompt("greeting") == "first"
        prompt_file.write_text("second")
        assert load_prompt("greeting") == "first"

        clear_cache()
        assert load_prompt("greeting") == "second"
