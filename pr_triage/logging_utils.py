import os
from datetime import datetime
from pr_triage import constants
from pr_triage import print_utils
from pr_triage.utils import mask_sensitive
MAX_LOG_BYTES = 1024 * 1024
def _prepare_log_file(path):
    log_dir = os.path.dirname(path)
    if not os.path.isdir(log_dir):
        os.makedirs(log_dir, exist_ok=True)
        try:
            os.chmod(log_dir, 0o700)
        except OSError:
            pass
    if os.path.isfile(path) and os.path.getsize(path) > MAX_LOG_BYTES:
        os.remove(path)
def log(msg, level="INFO"):
    """Append a masked line to the log file; echo it when verbose output is on."""
    masked = mask_sensitive(str(msg))
    if print_utils.VERBOSE:
        print_utils.Print.action(masked)
    path = constants.LOG_FILE
    try:
        _prepare_log_file(path)
        with open(path, "a", encoding="utf-8") as f:
            f.write(f"[{datetime.now().isoformat()}] [{level}] {masked}\n")
        try:
            os.chmod(path, 0o600)
        except OSError:
            pass
    except OSError as e:
        if print_utils.VERBOSE:
            print_utils.Print.warn(f"Log file error: {e}")
