import os
from typing import Optional
from dotenv import find_dotenv, load_dotenv
from pr_triage import constants
from pr_triage.errors import MissingCredentials
from pr_triage.i18n import t
KEYRING_SERVICE = "pr-triage"
KEYRING_USER = "github_token"
try:
    import keyring
    KEYRING_AVAILABLE = True
except Exception:
    KEYRING_AVAILABLE = False


def ensure_config_dir():
    if os.path.isdir(constants.CONFIG_DIR):
        return
    os.makedirs(constants.CONFIG_DIR, mode=0o700, exist_ok=True)
    if os.name != 'nt':
        try:
            os.chmod(constants.CONFIG_DIR, 0o700)
        except OSError as e:
            from pr_triage.logging_utils import log
            log(f"Directory chmod failed: {e}", level="WARN")


def load_key() -> Optional[str]:
    """Read a token saved in the OS credential store, if any."""
    if not KEYRING_AVAILABLE:
        return None
    try:
        return keyring.get_password(KEYRING_SERVICE, KEYRING_USER) or None
    except Exception as e:
        from pr_triage.logging_utils import log
        log(f"Key load from keyring failed: {e}", level="WARN")
        return None


def load_env_token() -> Optional[str]:
    """Read the token from the environment, loading a ``.env`` file first."""
    load_dotenv(find_dotenv(usecwd=True))
    value = os.environ.get(constants.TOKEN_ENV_VAR, "").strip()
    return value or None


def resolve_token(cli_token: Optional[str] = None) -> str:
    """Pick the bearer token: CLI argument, then environment, then keyring."""
    from pr_triage.logging_utils import log
    if cli_token and cli_token.strip():
        log("Using token from command line")
        return cli_token.strip()
    env_token = load_env_token()
    if env_token:
        log(f"Using token from ${constants.TOKEN_ENV_VAR}")
        return env_token
    stored = load_key()
    if stored:
        log("Using token from OS keyring")
        return stored
    raise MissingCredentials(t("errors.missing_token", env_var=constants.TOKEN_ENV_VAR))
