import dataclasses

import pytest

from pr_triage.graphql_client import (
    AssignAuthorInput,
    GraphQLClient,
    LastPullRequestVariables,
    OperationKind,
    RequestReviewsInput,
)
from pr_triage.models import PullRequestSummary
from pr_triage.repository import RepositoryRef


def test_last_pull_request_query_payload():
    document = GraphQLClient.build_last_pull_request_query(RepositoryRef("octo-org", "octo-repo"))

    payload = document.to_payload()

    assert document.operation_name == "LastPullRequest"
    assert payload["operationName"] == "LastPullRequest"
    assert payload["variables"] == {"owner": "octo-org", "name": "octo-repo"}
    assert "query LastPullRequest($owner: String!, $name: String!)" in payload["query"]
    assert "pullRequests(last: 1)" in payload["query"]
    assert "... on User" in payload["query"]


def test_query_text_is_loaded_once_per_operation():
    first = GraphQLClient.build_last_pull_request_query(RepositoryRef("a", "b"))
    second = GraphQLClient.build_last_pull_request_query(RepositoryRef("c", "d"))

    assert first.query_text is second.query_text
    assert set(GraphQLClient.QUERIES) == set(OperationKind)


def test_documents_are_immutable():
    document = GraphQLClient.build_last_pull_request_query(RepositoryRef("a", "b"))

    with pytest.raises(dataclasses.FrozenInstanceError):
        document.query_text = "query { viewer { login } }"


def test_assign_author_input_from_summary():
    summary = PullRequestSummary(id="PR_1", author_id="U_1", suggested_reviewer_id="U_2")

    assign_input = AssignAuthorInput.for_pull_request(summary, client_mutation_id="run-1")
    document = GraphQLClient.build_assign_author_mutation(assign_input)

    assert document.operation_name == "AssignAuthor"
    assert "addAssigneesToAssignable(input: $input)" in document.query_text
    assert document.to_payload()["variables"] == {
        "input": {"assignableId": "PR_1", "assigneeIds": ["U_1"], "clientMutationId": "run-1"}
    }


def test_assign_author_input_requires_author():
    summary = PullRequestSummary(id="PR_1", author_id=None)

    assert AssignAuthorInput.for_pull_request(summary) is None


def test_client_mutation_id_omitted_when_not_given():
    assign_input = AssignAuthorInput(assignable_id="PR_1", assignee_ids=("U_1",))

    assert "clientMutationId" not in assign_input.to_variables()["input"]


def test_request_reviews_input_from_summary():
    summary = PullRequestSummary(id="PR_1", author_id="U_1", suggested_reviewer_id="U_2")

    reviews_input = RequestReviewsInput.for_pull_request(summary)
    document = GraphQLClient.build_request_reviews_mutation(reviews_input)

    assert document.operation_name == "RequestReviews"
    assert document.to_payload()["variables"] == {
        "input": {"pullRequestId": "PR_1", "userIds": ["U_2"], "teamIds": [], "union": True}
    }


def test_request_reviews_input_requires_suggestion():
    assert RequestReviewsInput.for_pull_request(PullRequestSummary(id="PR_1")) is None


def test_build_rejects_variables_of_another_operation():
    with pytest.raises(TypeError):
        GraphQLClient.build(OperationKind.ASSIGN_AUTHOR, LastPullRequestVariables(owner="a", name="b"))
