from typing import Iterable, Optional
from pr_triage.i18n import t
from pr_triage.logging_utils import log
from pr_triage.print_utils import Print
from pr_triage.response import GraphQLErrorEntry


def report_graphql_errors(errors: Optional[Iterable[GraphQLErrorEntry]], operation_name: str) -> int:
    """Print and log every server-reported error; return how many there were.

    Never raises: whether the run continues is decided by the caller.
    """
    if not errors:
        return 0
    errors = list(errors)
    Print.warn(t("diagnostics.header", operation=operation_name, count=len(errors)))
    for error in errors:
        where = error.path_text or t("diagnostics.no_path")
        kind = f" [{error.error_type}]" if error.error_type else ""
        Print.warn(t("diagnostics.entry", path=where, message=error.message, kind=kind))
        log(f"GraphQL error in {operation_name}: path={where} type={error.error_type} message={error.message}", level="WARN")
    return len(errors)
