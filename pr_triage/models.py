"""Typed response trees for the GraphQL operations pr-triage issues.

Every field GitHub may return as ``null`` is ``Optional`` here, mirroring the
response shape one class per object type. ``from_dict`` checks JSON types
only; deciding which nulls are fatal is the job of ``extraction``.

Dataclass fields whose GraphQL name differs from the Python attribute carry it
in ``metadata["graphql"]`` so extraction paths read like the response.
"""
from dataclasses import dataclass, field, fields
from typing import Any, Callable, ClassVar, Dict, Optional, Tuple, Type, Union
from pr_triage.errors import MalformedPayload
GRAPHQL_NAME = "graphql"


def gql(name: str, **kwargs):
    """Dataclass field whose GraphQL name is ``name``."""
    return field(metadata={GRAPHQL_NAME: name}, **kwargs)


def graphql_name(obj, attr: str) -> str:
    for f in fields(obj):
        if f.name == attr:
            return f.metadata.get(GRAPHQL_NAME, attr)
    raise AttributeError(f"{type(obj).__name__} has no field {attr!r}")


def json_type(value) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def expect_mapping(value, path: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise MalformedPayload(f"expected an object, got {json_type(value)}", path)
    return value


def _scalar(raw: Dict[str, Any], key: str, path: str, kinds, label: str):
    value = raw.get(key)
    if value is None:
        return None
    # bool is an int subclass; never accept it where a number is expected
    if not isinstance(value, kinds) or (isinstance(value, bool) and bool not in kinds):
        raise MalformedPayload(f"expected {label}, got {json_type(value)}", f"{path}.{key}")
    return value


def optional_str(raw, key, path) -> Optional[str]:
    return _scalar(raw, key, path, (str,), "a string")


def opaque_id(raw, key, path) -> Optional[str]:
    """A server-issued id; an empty string counts as null."""
    return optional_str(raw, key, path) or None


def optional_int(raw, key, path) -> Optional[int]:
    return _scalar(raw, key, path, (int,), "an integer")


def optional_bool(raw, key, path) -> Optional[bool]:
    return _scalar(raw, key, path, (bool,), "a boolean")


def optional_object(raw, key, path, decode: Callable[[Any, str], Any]):
    value = raw.get(key)
    if value is None:
        return None
    return decode(value, f"{path}.{key}")


def optional_list(raw, key, path, decode: Callable[[Any, str], Any]) -> Optional[Tuple]:
    """Decode a list whose items are each independently nullable."""
    value = raw.get(key)
    if value is None:
        return None
    if not isinstance(value, list):
        raise MalformedPayload(f"expected an array, got {json_type(value)}", f"{path}.{key}")
    return tuple(
        None if item is None else decode(item, f"{path}.{key}[{index}]")
        for index, item in enumerate(value)
    )


# Actors

@dataclass(frozen=True)
class _Actor:
    id: Optional[str]
    login: Optional[str]
    TYPENAME: ClassVar[str] = ""

    @property
    def typename(self) -> str:
        return self.TYPENAME

    @classmethod
    def from_dict(cls, raw, path: str):
        raw = expect_mapping(raw, path)
        return cls(id=opaque_id(raw, "id", path), login=optional_str(raw, "login", path))


@dataclass(frozen=True)
class UserActor(_Actor):
    TYPENAME = "User"


@dataclass(frozen=True)
class BotActor(_Actor):
    TYPENAME = "Bot"


@dataclass(frozen=True)
class OrganizationActor(_Actor):
    TYPENAME = "Organization"


@dataclass(frozen=True)
class MannequinActor(_Actor):
    TYPENAME = "Mannequin"


@dataclass(frozen=True)
class EnterpriseUserAccountActor(_Actor):
    TYPENAME = "EnterpriseUserAccount"


@dataclass(frozen=True)
class UnknownActor(_Actor):
    """An actor kind this client does not know about."""
    raw_typename: str = ""

    @property
    def typename(self) -> str:
        return self.raw_typename


Actor = Union[
    UserActor, BotActor, OrganizationActor, MannequinActor, EnterpriseUserAccountActor, UnknownActor
]
ACTOR_TYPES: Dict[str, Type[_Actor]] = {
    cls.TYPENAME: cls
    for cls in (UserActor, BotActor, OrganizationActor, MannequinActor, EnterpriseUserAccountActor)
}


def decode_actor(raw, path: str) -> Actor:
    raw = expect_mapping(raw, path)
    typename = optional_str(raw, "__typename", path) or ""
    actor_type = ACTOR_TYPES.get(typename)
    if actor_type is not None:
        return actor_type.from_dict(raw, path)
    return UnknownActor(
        id=opaque_id(raw, "id", path),
        login=optional_str(raw, "login", path),
        raw_typename=typename,
    )


# LastPullRequest

@dataclass(frozen=True)
class SuggestedReviewer:
    reviewer: Optional[UserActor]
    is_author: Optional[bool] = gql("isAuthor", default=None)
    is_commenter: Optional[bool] = gql("isCommenter", default=None)

    @classmethod
    def from_dict(cls, raw, path: str) -> "SuggestedReviewer":
        raw = expect_mapping(raw, path)
        return cls(
            reviewer=optional_object(raw, "reviewer", path, UserActor.from_dict),
            is_author=optional_bool(raw, "isAuthor", path),
            is_commenter=optional_bool(raw, "isCommenter", path),
        )


@dataclass(frozen=True)
class PullRequestNode:
    id: Optional[str]
    number: Optional[int] = None
    title: Optional[str] = None
    author: Optional[Actor] = None
    suggested_reviewers: Optional[Tuple[Optional[SuggestedReviewer], ...]] = gql(
        "suggestedReviewers", default=None
    )

    @classmethod
    def from_dict(cls, raw, path: str) -> "PullRequestNode":
        raw = expect_mapping(raw, path)
        return cls(
            id=opaque_id(raw, "id", path),
            number=optional_int(raw, "number", path),
            title=optional_str(raw, "title", path),
            author=optional_object(raw, "author", path, decode_actor),
            suggested_reviewers=optional_list(raw, "suggestedReviewers", path, SuggestedReviewer.from_dict),
        )


@dataclass(frozen=True)
class PullRequestConnection:
    nodes: Optional[Tuple[Optional[PullRequestNode], ...]]

    @classmethod
    def from_dict(cls, raw, path: str) -> "PullRequestConnection":
        raw = expect_mapping(raw, path)
        return cls(nodes=optional_list(raw, "nodes", path, PullRequestNode.from_dict))


@dataclass(frozen=True)
class RepositoryNode:
    pull_requests: Optional[PullRequestConnection] = gql("pullRequests")

    @classmethod
    def from_dict(cls, raw, path: str) -> "RepositoryNode":
        raw = expect_mapping(raw, path)
        return cls(pull_requests=optional_object(raw, "pullRequests", path, PullRequestConnection.from_dict))


@dataclass(frozen=True)
class LastPullRequestData:
    repository: Optional[RepositoryNode]

    @classmethod
    def from_dict(cls, raw, path: str = "data") -> "LastPullRequestData":
        raw = expect_mapping(raw, path)
        return cls(repository=optional_object(raw, "repository", path, RepositoryNode.from_dict))


# AssignAuthor

@dataclass(frozen=True)
class AssigneeConnection:
    nodes: Optional[Tuple[Optional[UserActor], ...]]

    @classmethod
    def from_dict(cls, raw, path: str) -> "AssigneeConnection":
        raw = expect_mapping(raw, path)
        return cls(nodes=optional_list(raw, "nodes", path, UserActor.from_dict))


@dataclass(frozen=True)
class Assignable:
    typename: Optional[str] = gql("__typename")
    id: Optional[str] = None
    assignees: Optional[AssigneeConnection] = None

    @classmethod
    def from_dict(cls, raw, path: str) -> "Assignable":
        raw = expect_mapping(raw, path)
        return cls(
            typename=optional_str(raw, "__typename", path),
            id=opaque_id(raw, "id", path),
            assignees=optional_object(raw, "assignees", path, AssigneeConnection.from_dict),
        )


@dataclass(frozen=True)
class AddAssigneesPayload:
    assignable: Optional[Assignable]
    client_mutation_id: Optional[str] = gql("clientMutationId", default=None)

    @classmethod
    def from_dict(cls, raw, path: str) -> "AddAssigneesPayload":
        raw = expect_mapping(raw, path)
        return cls(
            assignable=optional_object(raw, "assignable", path, Assignable.from_dict),
            client_mutation_id=optional_str(raw, "clientMutationId", path),
        )


@dataclass(frozen=True)
class AssignAuthorData:
    add_assignees_to_assignable: Optional[AddAssigneesPayload] = gql("addAssigneesToAssignable")

    @classmethod
    def from_dict(cls, raw, path: str = "data") -> "AssignAuthorData":
        raw = expect_mapping(raw, path)
        return cls(
            add_assignees_to_assignable=optional_object(
                raw, "addAssigneesToAssignable", path, AddAssigneesPayload.from_dict
            )
        )


# RequestReviews

@dataclass(frozen=True)
class ReviewRequestConnection:
    total_count: Optional[int] = gql("totalCount")

    @classmethod
    def from_dict(cls, raw, path: str) -> "ReviewRequestConnection":
        raw = expect_mapping(raw, path)
        return cls(total_count=optional_int(raw, "totalCount", path))


@dataclass(frozen=True)
class ReviewedPullRequest:
    id: Optional[str]
    review_requests: Optional[ReviewRequestConnection] = gql("reviewRequests", default=None)

    @classmethod
    def from_dict(cls, raw, path: str) -> "ReviewedPullRequest":
        raw = expect_mapping(raw, path)
        return cls(
            id=opaque_id(raw, "id", path),
            review_requests=optional_object(raw, "reviewRequests", path, ReviewRequestConnection.from_dict),
        )


@dataclass(frozen=True)
class RequestReviewsPayload:
    pull_request: Optional[ReviewedPullRequest] = gql("pullRequest")
    client_mutation_id: Optional[str] = gql("clientMutationId", default=None)

    @classmethod
    def from_dict(cls, raw, path: str) -> "RequestReviewsPayload":
        raw = expect_mapping(raw, path)
        return cls(
            pull_request=optional_object(raw, "pullRequest", path, ReviewedPullRequest.from_dict),
            client_mutation_id=optional_str(raw, "clientMutationId", path),
        )


@dataclass(frozen=True)
class RequestReviewsData:
    request_reviews: Optional[RequestReviewsPayload] = gql("requestReviews")

    @classmethod
    def from_dict(cls, raw, path: str = "data") -> "RequestReviewsData":
        raw = expect_mapping(raw, path)
        return cls(
            request_reviews=optional_object(raw, "requestReviews", path, RequestReviewsPayload.from_dict)
        )


# Flattened projection

@dataclass(frozen=True)
class PullRequestSummary:
    """What the workflow needs from the last pull request."""
    id: str
    suggested_reviewer_id: Optional[str] = None
    author_id: Optional[str] = None
    number: Optional[int] = None
    title: Optional[str] = None
    author_login: Optional[str] = None
    suggested_reviewer_login: Optional[str] = None
