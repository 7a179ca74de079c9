"""Console summaries for Lighthouse reports."""

from rich.console import Console
from rich.table import Table

from lighthouse_audit.models.model_report import Report, ScoreCategory
from lighthouse_audit.reporting.renderer import classify_score, format_timestamp

TIER_COLORS = {
    "good": "green",
    "average": "yellow",
    "poor": "red",
    "missing": "dim",
}


def colored_score(score: int | None) -> str:
    """Return a rich-markup score string colored by tier."""
    color = TIER_COLORS[classify_score(score)]
    text = "N/A" if score is None else f"{score}/100"
    return f"[{color}]{text}[/{color}]"


def print_report_summary(report: Report, console: Console | None = None) -> None:
    """Print scores and Core Web Vitals for a single report."""
    console = console or Console()

    console.print("\n[bold]Lighthouse Report Summary[/bold]")
    console.print(f"URL: {report.url}")
    console.print(f"Time: {format_timestamp(report.timestamp)}")

    scores_table = Table(title="Performance Scores")
    scores_table.add_column("Category", style="cyan")
    scores_table.add_column("Score", justify="right")
    for category in ScoreCategory:
        scores_table.add_row(category.label, colored_score(report.scores.get(category)))
    if report.scores.pwa is not None:
        scores_table.add_row("PWA", colored_score(report.scores.pwa))
    console.print(scores_table)

    metrics = report.metrics
    vitals_table = Table(title="Core Web Vitals")
    vitals_table.add_column("Metric", style="cyan")
    vitals_table.add_column("Value", justify="right", style="magenta")
    vitals_table.add_row("FCP", f"{metrics.fcp:.2f}ms")
    vitals_table.add_row("LCP", f"{metrics.lcp:.2f}ms")
    vitals_table.add_row("CLS", f"{metrics.cls:.3f}")
    vitals_table.add_row("TTFB", f"{metrics.ttfb:.2f}ms")
    console.print(vitals_table)


def history_table(reports: list[Report]) -> Table:
    """Build a table of stored reports, in the order given."""
    table = Table(title=f"Lighthouse Report History ({len(reports)} reports)")
    table.add_column("Timestamp", style="dim")
    table.add_column("URL", style="cyan")
    for category in ScoreCategory:
        table.add_column(category.label, justify="right")
    table.add_column("LCP", justify="right", style="magenta")

    for report in reports:
        table.add_row(
            format_timestamp(report.timestamp),
            report.url,
            *[colored_score(report.scores.get(category)) for category in ScoreCategory],
            f"{report.metrics.lcp:.0f}ms",
        )
    return table
