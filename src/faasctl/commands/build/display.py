"""Display formatters for build and push results."""

from faasctl.builder.dispatcher import BuildResult, DispatchSummary
from faasctl.lib.formatters import format_seconds, format_table
from faasctl.lib.output import error, header, plain, success


def _result_label(result: BuildResult) -> str:
    if not result.ok:
        return "failed"
    if result.skipped:
        return f"skipped ({result.reason})"
    return "ok"


def display_summary(summary: DispatchSummary, action: str = "Build") -> None:
    """Print a results table followed by one line per failure.

    Parameters
    ----------
    summary : DispatchSummary
        Dispatch results.
    action : str, optional
        "Build" or "Push", used in the heading.
    """
    if not summary.results:
        return

    header(f"{action} summary")
    rows = [
        [
            result.name,
            _result_label(result),
            "-" if result.worker is None else str(result.worker),
            format_seconds(result.duration),
        ]
        for result in summary.results
    ]
    plain(format_table(["Function", "Result", "Worker", "Time"], rows))
    plain("")

    for result in summary.failed:
        error(f"{result.name}: {result.error}")

    if summary.ok:
        success(
            f"{len(summary.built)} function(s) processed, {len(summary.skipped)} skipped"
        )
