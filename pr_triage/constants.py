import os
HOME_DIR = os.path.expanduser("~")
CONFIG_DIR = os.path.join(HOME_DIR, ".pr-triage")
LOG_FILE = os.path.join(CONFIG_DIR, "pr-triage.log")
PREFERENCES_FILE = os.path.join(CONFIG_DIR, "preferences.json")
GRAPHQL_URL = "https://api.github.com/graphql"
TOKEN_ENV_VAR = "GITHUB_API_TOKEN"
LANG_ENV_VAR = "PR_TRIAGE_LANG"
DEFAULT_TIMEOUT = 15
MAX_RESPONSE_BYTES = 2_000_000
EXAMPLE_REPOSITORY = "facebook/graphql"
