import pytest
from pydantic import ValidationError

from memorymatch.config import Settings, get_settings
from memorymatch.constants import DEFAULT_MISMATCH_DELAY_MS
from memorymatch.models import Difficulty


def test_defaults():
    settings = get_settings()
    assert settings.difficulty == Difficulty.Normal
    assert settings.mismatch_delay_ms == DEFAULT_MISMATCH_DELAY_MS == 1000
    assert settings.seed is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("MEMORYMATCH_DIFFICULTY", "expert")
    monkeypatch.setenv("MEMORYMATCH_MISMATCH_DELAY_MS", "250")
    monkeypatch.setenv("MEMORYMATCH_SEED", "7")

    settings = get_settings()

    assert settings.difficulty == Difficulty.Expert
    assert settings.mismatch_delay_ms == 250
    assert settings.seed == 7


def test_dotenv_file_is_read(tmp_path):
    (tmp_path / ".env").write_text("MEMORYMATCH_DIFFICULTY=hard\n")
    settings = Settings(_env_file=tmp_path / ".env")
    assert settings.difficulty == Difficulty.Hard


@pytest.mark.parametrize(
    "name, value",
    [
        ("MEMORYMATCH_DIFFICULTY", "impossible"),
        ("MEMORYMATCH_MISMATCH_DELAY_MS", "-5"),
    ],
)
def test_invalid_environment_values(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError):
        get_settings()
