# tests/conftest.py
import pytest

from common.config import CONFIG_ENV_VAR, TrainerConfig
from common.prng import Lcg


@pytest.fixture
def config() -> TrainerConfig:
    """Built-in defaults, independent of any config file on disk."""
    return TrainerConfig()


@pytest.fixture
def rng() -> Lcg:
    return Lcg.from_seed(42)


@pytest.fixture
def no_config_file(monkeypatch, tmp_path):
    """Point TRAINER_CONFIG at a path that does not exist."""
    monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "missing.yaml"))
    return tmp_path
