"""Read-then-write triage of the most recent pull request of a repository.

One run moves linearly through FETCHING -> EXTRACTING -> (ASSIGNING) ->
REPORTING and stops at the first fatal error. The follow-up mutation is built
only from the PullRequestSummary extracted from the read, never from the read
request itself.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Type
from pr_triage.diagnostics import report_graphql_errors
from pr_triage.errors import GraphQLRequestFailed
from pr_triage.extraction import Hop, extract_pull_request_summary
from pr_triage.graphql_client import AssignAuthorInput, GraphQLClient, GraphQLDocument, RequestReviewsInput
from pr_triage.logging_utils import log
from pr_triage.models import AssignAuthorData, LastPullRequestData, PullRequestSummary, RequestReviewsData
from pr_triage.repository import RepositoryRef, parse_repository
from pr_triage.response import GraphQLEnvelope, GraphQLErrorEntry, decode_envelope


class WorkflowState(Enum):
    FETCHING = "fetching"
    EXTRACTING = "extracting"
    ASSIGNING = "assigning"
    REPORTING = "reporting"


class FollowUp(Enum):
    """Which mutation to send after the read."""
    ASSIGN = "assign"
    REQUEST_REVIEW = "request-review"
    NONE = "none"


class Outcome(Enum):
    ASSIGNED = "assigned"
    REVIEWS_REQUESTED = "reviews_requested"
    SKIPPED_NO_AUTHOR = "skipped_no_author"
    SKIPPED_NO_SUGGESTION = "skipped_no_suggestion"
    DISABLED = "disabled"
    UNCONFIRMED = "unconfirmed"


@dataclass
class WorkflowResult:
    repository: RepositoryRef
    summary: PullRequestSummary
    follow_up: FollowUp
    outcome: Outcome
    errors: List[GraphQLErrorEntry] = field(default_factory=list)
    writes: int = 0


class TriageWorkflow:
    """Runs one triage against a transport exposing ``request(document) -> bytes``."""

    def __init__(
        self,
        transport,
        follow_up: FollowUp = FollowUp.ASSIGN,
        client_mutation_id: Optional[str] = None,
        reporter: Callable = report_graphql_errors,
    ):
        self.transport = transport
        self.follow_up = follow_up
        self.client_mutation_id = client_mutation_id
        self.reporter = reporter
        self.state: Optional[WorkflowState] = None
        self._errors: List[GraphQLErrorEntry] = []

    def _enter(self, state: WorkflowState):
        log(f"Workflow state: {self.state.value if self.state else 'start'} -> {state.value}")
        self.state = state

    def _send(self, document: GraphQLDocument, data_type: Type) -> GraphQLEnvelope:
        raw = self.transport.request(document)
        envelope = decode_envelope(raw, data_type)
        log(f"{document.operation_name} response: {envelope}")
        return envelope

    def _checked_data(self, envelope: GraphQLEnvelope, operation_name: str):
        """Report server errors; fail only when no data came back with them."""
        if envelope.errors:
            self._errors.extend(envelope.errors)
            self.reporter(envelope.errors, operation_name)
        if envelope.data is None:
            raise GraphQLRequestFailed(operation_name, envelope.errors or ())
        return envelope.data

    def run(self, repository: str) -> WorkflowResult:
        self._errors = []
        self._enter(WorkflowState.FETCHING)
        ref = parse_repository(repository)
        query = GraphQLClient.build_last_pull_request_query(ref)
        envelope = self._send(query, LastPullRequestData)

        self._enter(WorkflowState.EXTRACTING)
        data = self._checked_data(envelope, query.operation_name)
        summary = extract_pull_request_summary(data)
        log(f"Extracted {summary}")

        outcome, writes = self._run_follow_up(summary)

        self._enter(WorkflowState.REPORTING)
        return WorkflowResult(
            repository=ref,
            summary=summary,
            follow_up=self.follow_up,
            outcome=outcome,
            errors=list(self._errors),
            writes=writes,
        )

    def _run_follow_up(self, summary: PullRequestSummary):
        if self.follow_up is FollowUp.NONE:
            return Outcome.DISABLED, 0
        if self.follow_up is FollowUp.ASSIGN:
            assign_input = AssignAuthorInput.for_pull_request(summary, self.client_mutation_id)
            if assign_input is None:
                log("No User author on the pull request; skipping assignment")
                return Outcome.SKIPPED_NO_AUTHOR, 0
            return self._assign_author(assign_input), 1
        reviews_input = RequestReviewsInput.for_pull_request(summary, self.client_mutation_id)
        if reviews_input is None:
            log("No suggested reviewer on the pull request; skipping review request")
            return Outcome.SKIPPED_NO_SUGGESTION, 0
        return self._request_reviews(reviews_input), 1

    def _assign_author(self, assign_input: AssignAuthorInput) -> Outcome:
        self._enter(WorkflowState.ASSIGNING)
        mutation = GraphQLClient.build_assign_author_mutation(assign_input)
        data = self._checked_data(self._send(mutation, AssignAuthorData), mutation.operation_name)
        assigned_id = (
            Hop(data, "data")
            .field("add_assignees_to_assignable")
            .field("assignable")
            .field("id")
            .get()
        )
        return Outcome.ASSIGNED if assigned_id == assign_input.assignable_id else Outcome.UNCONFIRMED

    def _request_reviews(self, reviews_input: RequestReviewsInput) -> Outcome:
        self._enter(WorkflowState.ASSIGNING)
        mutation = GraphQLClient.build_request_reviews_mutation(reviews_input)
        data = self._checked_data(self._send(mutation, RequestReviewsData), mutation.operation_name)
        reviewed_id = (
            Hop(data, "data")
            .field("request_reviews")
            .field("pull_request")
            .field("id")
            .get()
        )
        return Outcome.REVIEWS_REQUESTED if reviewed_id == reviews_input.pull_request_id else Outcome.UNCONFIRMED
