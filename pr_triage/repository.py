"""Parsing of ``owner/name`` repository identifiers."""
from dataclasses import dataclass
from pr_triage.constants import EXAMPLE_REPOSITORY
from pr_triage.errors import InvalidRepositoryFormat


@dataclass(frozen=True)
class RepositoryRef:
    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    def __iter__(self):
        yield self.owner
        yield self.name


def parse_repository(text: str) -> RepositoryRef:
    """Split ``text`` on its first ``/`` into owner and name.

    Raises InvalidRepositoryFormat when there is no separator or either side
    is empty.
    """
    owner, sep, name = text.partition("/")
    if not sep or not owner or not name:
        raise InvalidRepositoryFormat(text, EXAMPLE_REPOSITORY)
    return RepositoryRef(owner=owner, name=name)
