import pytest
from pr_triage import config
from pr_triage.errors import MissingCredentials
from pr_triage.preferences import get_language_preference, set_language_preference


class DummyKeyring:
    def __init__(self, stored=None, fail=False):
        self.stored = stored
        self.fail = fail

    def get_password(self, service, user):
        if self.fail:
            raise RuntimeError("no backend")
        assert (service, user) == (config.KEYRING_SERVICE, config.KEYRING_USER)
        return self.stored


@pytest.fixture
def no_dotenv(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)


def test_command_line_token_wins(monkeypatch, no_dotenv):
    monkeypatch.setenv("GITHUB_API_TOKEN", "from-env")
    assert config.resolve_token("  from-cli  ") == "from-cli"


def test_environment_token(monkeypatch, no_dotenv):
    monkeypatch.setenv("GITHUB_API_TOKEN", " from-env\n")
    monkeypatch.setattr(config, "load_key", lambda: "from-keyring")
    assert config.resolve_token(None) == "from-env"


def test_dotenv_file_in_working_directory(monkeypatch, tmp_path):
    (tmp_path / ".env").write_text("GITHUB_API_TOKEN=from-dotenv\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    # undo whatever load_dotenv puts into os.environ
    monkeypatch.setenv("GITHUB_API_TOKEN", "")
    monkeypatch.delenv("GITHUB_API_TOKEN")
    assert config.load_env_token() == "from-dotenv"


def test_keyring_fallback(monkeypatch, no_dotenv):
    monkeypatch.setattr(config, "KEYRING_AVAILABLE", True)
    monkeypatch.setattr(config, "keyring", DummyKeyring("from-keyring"), raising=False)
    assert config.resolve_token("") == "from-keyring"


def test_keyring_failure_is_not_fatal(monkeypatch):
    monkeypatch.setattr(config, "KEYRING_AVAILABLE", True)
    monkeypatch.setattr(config, "keyring", DummyKeyring(fail=True), raising=False)
    assert config.load_key() is None


def test_missing_token(monkeypatch, no_dotenv):
    monkeypatch.setattr(config, "load_key", lambda: None)
    with pytest.raises(MissingCredentials) as exc:
        config.resolve_token(None)
    assert "$GITHUB_API_TOKEN" in str(exc.value)


def test_language_preference_round_trip(isolated_config):
    assert get_language_preference() is None
    set_language_preference("tr")
    assert get_language_preference() == "tr"
    assert (isolated_config / "preferences.json").is_file()


def test_corrupt_preferences_are_ignored(isolated_config):
    isolated_config.mkdir(parents=True, exist_ok=True)
    (isolated_config / "preferences.json").write_text("{not json", encoding="utf-8")
    assert get_language_preference() is None
