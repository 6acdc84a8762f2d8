"""Triage command: inspect the last pull request and run the follow-up mutation."""
from tabulate import tabulate
from ..api import GraphQLTransport
from ..config import resolve_token
from ..i18n import t
from ..logging_utils import log
from ..print_utils import Print, colorize, safe_print
from ..repository import parse_repository
from ..workflow import FollowUp, Outcome, TriageWorkflow, WorkflowResult
OUTCOME_STYLES = {
    Outcome.ASSIGNED: Print.success,
    Outcome.REVIEWS_REQUESTED: Print.success,
    Outcome.SKIPPED_NO_AUTHOR: Print.info,
    Outcome.SKIPPED_NO_SUGGESTION: Print.info,
    Outcome.DISABLED: Print.info,
    Outcome.UNCONFIRMED: Print.warn,
}


def _v(value):
    return value if value not in (None, "") else t("report.none")


def render_report(result: WorkflowResult):
    summary = result.summary
    safe_print("")
    safe_print(colorize(f"[*] {t('report.header', repo=result.repository.full_name)}", '96'))
    author = summary.author_login or summary.author_id
    reviewer = summary.suggested_reviewer_login or summary.suggested_reviewer_id
    rows = [
        (t("report.labels.pull_request_id"), summary.id),
        (t("report.labels.number"), f"#{summary.number}" if summary.number is not None else t("report.none")),
        (t("report.labels.title"), _v(summary.title)),
        (t("report.labels.author"), _v(author)),
        (t("report.labels.author_id"), _v(summary.author_id)),
        (t("report.labels.suggested_reviewer"), _v(reviewer)),
        (t("report.labels.suggested_reviewer_id"), _v(summary.suggested_reviewer_id)),
    ]
    safe_print(tabulate(rows, tablefmt="simple"))
    safe_print("")
    OUTCOME_STYLES[result.outcome](
        t(f"report.outcome.{result.outcome.value}", author=_v(author), reviewer=_v(reviewer))
    )
    if result.errors:
        Print.warn(t("report.errors_reported", count=len(result.errors)))
    safe_print("")


def cmd_triage(args):
    """Run the triage workflow for ``args.repository``; fatal errors propagate."""
    repository = (args.repository or "").strip()
    # reject a bad name before touching the environment or keyring
    parse_repository(repository)
    token = resolve_token(getattr(args, "repo_token", None))
    follow_up = FollowUp(getattr(args, "action", None) or FollowUp.ASSIGN.value)
    transport = GraphQLTransport(token)
    workflow = TriageWorkflow(
        transport,
        follow_up=follow_up,
        client_mutation_id=getattr(args, "client_mutation_id", None),
    )
    result = workflow.run(repository)
    log(f"Triage of {result.repository.full_name} finished: {result.outcome.value}, writes={result.writes}")
    render_report(result)
    return result
