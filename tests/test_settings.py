from infra.settings import Settings, load_settings


def test_defaults_without_environment(monkeypatch):
    for name in ("LOG_LEVEL", "LOG_JSON", "SEED", "RANDOMIZE_TOKENS"):
        monkeypatch.delenv(f"HIDDEN_STATIONS_{name}", raising=False)
    assert Settings.from_env() == Settings()


def test_values_from_dotenv_file(tmp_path, monkeypatch):
    for name in ("LOG_LEVEL", "LOG_JSON", "SEED", "RANDOMIZE_TOKENS"):
        monkeypatch.delenv(f"HIDDEN_STATIONS_{name}", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text(
        "HIDDEN_STATIONS_LOG_LEVEL=debug\n"
        "HIDDEN_STATIONS_LOG_JSON=yes\n"
        "HIDDEN_STATIONS_SEED=17\n"
        "HIDDEN_STATIONS_RANDOMIZE_TOKENS=0\n",
        encoding="utf-8",
    )
    settings = load_settings(env_file)
    for name in ("LOG_LEVEL", "LOG_JSON", "SEED", "RANDOMIZE_TOKENS"):
        monkeypatch.delenv(f"HIDDEN_STATIONS_{name}", raising=False)

    assert settings == Settings(log_level="DEBUG", log_json=True, seed=17, randomize_tokens=False)
