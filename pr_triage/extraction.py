"""Path-aware traversal of decoded response trees.

A ``Hop`` wraps a value reached by walking the tree together with the path
taken to reach it. Each step either yields the next node or leaves the hop
absent; once absent, later steps stay absent. A step marked ``required``
raises RequiredFieldMissing when its own result is null, naming the path.

    Hop(data, "data").field("repository", required=True).field("pullRequests")
"""
from typing import Any, Optional, Type
from pr_triage.errors import RequiredFieldMissing, UnexpectedResultCardinality
from pr_triage.models import LastPullRequestData, PullRequestSummary, UserActor, graphql_name


class Hop:
    __slots__ = ("value", "path", "absent_at")

    def __init__(self, value: Any, path: str = "data", absent_at: Optional[str] = None):
        self.value = value
        self.path = path
        # where the walk first hit a null, if it did
        self.absent_at = absent_at if absent_at is not None else (path if value is None else None)

    @property
    def missing(self) -> bool:
        return self.value is None

    def _next(self, value, segment: str, required: bool) -> "Hop":
        path = f"{self.path}{segment}"
        if value is None and required:
            raise RequiredFieldMissing(path)
        return Hop(value, path, self.absent_at)

    def field(self, attr: str, required: bool = False) -> "Hop":
        if self.missing:
            return self._absent(f".{attr}")
        name = graphql_name(self.value, attr)
        return self._next(getattr(self.value, attr), f".{name}", required)

    def only(self) -> "Hop":
        """Step into the single element of a list; any other count is an error."""
        if self.missing:
            return self._absent("[0]")
        count = len(self.value)
        if count != 1:
            raise UnexpectedResultCardinality(self.path, count)
        return self._next(self.value[0], "[0]", required=False)

    def first(self) -> "Hop":
        """Step into the first element of a list; an empty list is absent."""
        if self.missing:
            return self._absent("[0]")
        return self._next(self.value[0] if self.value else None, "[0]", required=False)

    def on(self, variant: Type) -> "Hop":
        """Keep the value only if it is the given variant; anything else is absent."""
        segment = f".on({getattr(variant, 'TYPENAME', '') or variant.__name__})"
        if self.missing or not isinstance(self.value, variant):
            return self._absent(segment)
        return Hop(self.value, f"{self.path}{segment}", self.absent_at)

    def require(self) -> "Hop":
        """Promote absence so far into RequiredFieldMissing."""
        if self.missing:
            raise RequiredFieldMissing(self.absent_at or self.path)
        return self

    def get(self, default=None):
        return default if self.value is None else self.value

    def _absent(self, segment: str) -> "Hop":
        path = f"{self.path}{segment}"
        return Hop(None, path, self.absent_at or path)

    def __repr__(self):
        return f"Hop({self.path}={self.value!r})"


def extract_pull_request_summary(data: LastPullRequestData) -> PullRequestSummary:
    """Flatten the last-pull-request tree into the ids the workflow needs.

    The repository, its pull requests, the node list, the single node and its
    id are mandatory. Author and suggested reviewer are optional; an author
    that is not a User counts as absent.
    """
    nodes = (
        Hop(data, "data")
        .field("repository", required=True)
        .field("pull_requests", required=True)
        .field("nodes", required=True)
    )
    node = nodes.only().require()
    pr_id = node.field("id", required=True).value
    author = node.field("author").on(UserActor)
    reviewer = node.field("suggested_reviewers").first().field("reviewer")
    return PullRequestSummary(
        id=pr_id,
        suggested_reviewer_id=reviewer.field("id").get(),
        author_id=author.field("id").get(),
        number=node.field("number").get(),
        title=node.field("title").get(),
        author_login=author.field("login").get(),
        suggested_reviewer_login=reviewer.field("login").get(),
    )
