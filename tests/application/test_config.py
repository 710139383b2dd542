from pathlib import Path

import pytest
from pydantic import ValidationError

from habla.application.config import DEFAULT_PHRASES_FILE, resolve_config
from habla.application.factory import build_quiz_service, get_progress_store
from habla.infrastructure.stores.json_store import JsonProgressStore
from habla.infrastructure.stores.memory import InMemoryProgressStore


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, mock_home):
    for var in ("HABLA_MIN_SIMILARITY", "HABLA_STORE_BACKEND", "HABLA_STRICT_ACCENTS"):
        monkeypatch.delenv(var, raising=False)


def test_defaults(mock_home):
    config = resolve_config()
    assert config.phrases_file == DEFAULT_PHRASES_FILE
    assert config.store_backend == "json"
    assert config.progress_file == mock_home / ".config/habla/progress.json"
    assert config.min_similarity == 0.85
    assert config.max_distance is None

    options = config.match_options()
    assert options.min_similarity == 0.85
    assert not options.strict_accents

    params = config.schedule_parameters()
    assert params.initial_ease == 2.5
    assert params.minimum_ease == 1.3


def test_env_vars(monkeypatch):
    monkeypatch.setenv("HABLA_MIN_SIMILARITY", "0.9")
    monkeypatch.setenv("HABLA_STRICT_ACCENTS", "true")
    config = resolve_config()
    assert config.min_similarity == 0.9
    assert config.strict_accents is True


def test_toml_file(mock_home):
    cfg = mock_home / ".config/habla"
    cfg.mkdir(parents=True)
    (cfg / "config.toml").write_text('store_backend = "memory"\nmax_distance = 2\n')

    config = resolve_config()
    assert config.store_backend == "memory"
    assert config.max_distance == 2


def test_overrides_beat_env(monkeypatch):
    monkeypatch.setenv("HABLA_STORE_BACKEND", "memory")
    config = resolve_config({"store_backend": "json", "max_distance": None})
    assert config.store_backend == "json"


def test_invalid_similarity():
    with pytest.raises(ValidationError):
        resolve_config({"min_similarity": 1.5})


def test_paths_are_resolved(tmp_path):
    config = resolve_config({"progress_file": str(tmp_path / "p.json")})
    assert config.progress_file == (tmp_path / "p.json").resolve()
    assert isinstance(config.progress_file, Path)


def test_store_selection(tmp_path):
    assert isinstance(get_progress_store(resolve_config({"store_backend": "memory"})), InMemoryProgressStore)

    store = get_progress_store(resolve_config({"progress_file": tmp_path / "p.json"}))
    assert isinstance(store, JsonProgressStore)
    assert store.path == (tmp_path / "p.json").resolve()


def test_build_quiz_service_uses_config():
    service = build_quiz_service(resolve_config({"store_backend": "memory", "strict_accents": True}))
    assert service.matcher.options.strict_accents is True
    assert len(service.catalog) > 0
