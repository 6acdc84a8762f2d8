"""GitHub GraphQL query and mutation builder for the triage workflow."""
import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union
from pr_triage.models import PullRequestSummary
from pr_triage.repository import RepositoryRef
QUERIES_DIR = os.path.join(os.path.dirname(__file__), "queries")


def _load_query(filename: str) -> str:
    with open(os.path.join(QUERIES_DIR, filename), "r", encoding="utf-8") as f:
        return f.read()


@dataclass(frozen=True)
class LastPullRequestVariables:
    owner: str
    name: str

    @classmethod
    def for_repository(cls, ref: RepositoryRef) -> "LastPullRequestVariables":
        return cls(owner=ref.owner, name=ref.name)

    def to_variables(self) -> Dict[str, Any]:
        return {"owner": self.owner, "name": self.name}


@dataclass(frozen=True)
class AssignAuthorInput:
    assignable_id: str
    assignee_ids: Tuple[str, ...]
    client_mutation_id: Optional[str] = None

    @classmethod
    def for_pull_request(
        cls, summary: PullRequestSummary, client_mutation_id: Optional[str] = None
    ) -> Optional["AssignAuthorInput"]:
        """Assign the pull request to its own author; None when no User author was found."""
        if not summary.author_id:
            return None
        return cls(
            assignable_id=summary.id,
            assignee_ids=(summary.author_id,),
            client_mutation_id=client_mutation_id,
        )

    def to_variables(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "assignableId": self.assignable_id,
            "assigneeIds": list(self.assignee_ids),
        }
        if self.client_mutation_id is not None:
            payload["clientMutationId"] = self.client_mutation_id
        return {"input": payload}


@dataclass(frozen=True)
class RequestReviewsInput:
    pull_request_id: str
    user_ids: Tuple[str, ...]
    team_ids: Tuple[str, ...] = ()
    union: bool = True
    client_mutation_id: Optional[str] = None

    @classmethod
    def for_pull_request(
        cls, summary: PullRequestSummary, client_mutation_id: Optional[str] = None
    ) -> Optional["RequestReviewsInput"]:
        """Request a review from the first suggested reviewer; None when there is no suggestion."""
        if not summary.suggested_reviewer_id:
            return None
        return cls(
            pull_request_id=summary.id,
            user_ids=(summary.suggested_reviewer_id,),
            client_mutation_id=client_mutation_id,
        )

    def to_variables(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "pullRequestId": self.pull_request_id,
            "userIds": list(self.user_ids),
            "teamIds": list(self.team_ids),
            "union": self.union,
        }
        if self.client_mutation_id is not None:
            payload["clientMutationId"] = self.client_mutation_id
        return {"input": payload}


Variables = Union[LastPullRequestVariables, AssignAuthorInput, RequestReviewsInput]


class OperationKind(Enum):
    LAST_PULL_REQUEST = ("LastPullRequest", "last_pull_request.graphql", LastPullRequestVariables)
    ASSIGN_AUTHOR = ("AssignAuthor", "assign_author.graphql", AssignAuthorInput)
    REQUEST_REVIEWS = ("RequestReviews", "request_reviews.graphql", RequestReviewsInput)

    def __init__(self, operation_name, filename, variables_type):
        self.operation_name = operation_name
        self.filename = filename
        self.variables_type = variables_type


@dataclass(frozen=True)
class GraphQLDocument:
    operation_name: str
    query_text: str
    variables: Variables

    def to_payload(self) -> Dict[str, Any]:
        """Request body as sent over the wire."""
        return {
            "query": self.query_text,
            "variables": self.variables.to_variables(),
            "operationName": self.operation_name,
        }


class GraphQLClient:
    """Builds GraphQL request documents for the operations pr-triage issues."""
    QUERIES = {kind: _load_query(kind.filename) for kind in OperationKind}

    @staticmethod
    def build(operation: OperationKind, variables: Variables) -> GraphQLDocument:
        if not isinstance(variables, operation.variables_type):
            raise TypeError(
                f"{operation.operation_name} expects {operation.variables_type.__name__}, "
                f"got {type(variables).__name__}"
            )
        return GraphQLDocument(
            operation_name=operation.operation_name,
            query_text=GraphQLClient.QUERIES[operation],
            variables=variables,
        )

    @staticmethod
    def build_last_pull_request_query(ref: RepositoryRef) -> GraphQLDocument:
        """Build the query for the most recent pull request of ``ref``."""
        return GraphQLClient.build(
            OperationKind.LAST_PULL_REQUEST, LastPullRequestVariables.for_repository(ref)
        )

    @staticmethod
    def build_assign_author_mutation(assign_input: AssignAuthorInput) -> GraphQLDocument:
        return GraphQLClient.build(OperationKind.ASSIGN_AUTHOR, assign_input)

    @staticmethod
    def build_request_reviews_mutation(reviews_input: RequestReviewsInput) -> GraphQLDocument:
        return GraphQLClient.build(OperationKind.REQUEST_REVIEWS, reviews_input)
