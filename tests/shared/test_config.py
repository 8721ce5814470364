import pytest

from shared.config import env_int


class TestEnvInt:
    """Configuração numérica via variáveis de ambiente."""

    def test_default_when_unset(self, monkeypatch) -> None:
        monkeypatch.delenv("SOME_BOUND", raising=False)
        assert env_int("SOME_BOUND", 10) == 10

    def test_default_when_empty(self, monkeypatch) -> None:
        monkeypatch.setenv("SOME_BOUND", "")
        assert env_int("SOME_BOUND", 10) == 10

    def test_reads_value(self, monkeypatch) -> None:
        monkeypatch.setenv("SOME_BOUND", "30")
        assert env_int("SOME_BOUND", 10) == 30

    def test_invalid_value(self, monkeypatch) -> None:
        monkeypatch.setenv("SOME_BOUND", "ten")
        with pytest.raises(ValueError, match="SOME_BOUND"):
            env_int("SOME_BOUND", 10)
