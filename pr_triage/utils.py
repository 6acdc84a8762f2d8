import re
_TOKEN_PATTERNS = (
    (re.compile(r"(ghp|gho|ghu|ghs|ghr)_[A-Za-z0-9_]{30,}"), r"\1_********************"),
    (re.compile(r"github_pat_[A-Za-z0-9_]{50,}"), "github_pat_********************"),
    (re.compile(r"(?i)(bearer\s+)[A-Za-z0-9_\-\.=]{8,}"), r"\1********"),
)
def mask_sensitive(text: str) -> str:
    """Mask tokens and bearer credentials before logging/displaying."""
    if not isinstance(text, str):
        return text
    for pattern, replacement in _TOKEN_PATTERNS:
        text = pattern.sub(replacement, text)
    return text
