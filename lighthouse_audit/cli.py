"""CLI interface for lighthouse-audit."""

import logging
import os

import typer
from rich.console import Console

from lighthouse_audit.consts import ENV_TARGET_URL
from lighthouse_audit.evaluators.thresholds import (
    assert_metrics_below_threshold,
    assert_scores_above_threshold,
    find_bottlenecks,
)
from lighthouse_audit.models.model_thresholds import MetricThresholds, ScoreThresholds
from lighthouse_audit.pipeline import (
    default_runner,
    load_history,
    run_audit_pipeline,
    run_dashboard_pipeline,
    run_preserve_pipeline,
)
from lighthouse_audit.reporting.console import history_table, print_report_summary
from lighthouse_audit.runner.lighthouse_runner import LighthouseError
from lighthouse_audit.runner.preflight import check_target_reachable

app = typer.Typer(
    name="lha",
    help="lighthouse-audit - Run Lighthouse audits, keep their history and render a dashboard",
)

console = Console()


def _configure_logging(verbose: bool, default_level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else default_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _score_thresholds(
    min_performance: int | None,
    min_accessibility: int | None,
    min_best_practices: int | None,
    min_seo: int | None,
) -> ScoreThresholds:
    """Build score thresholds, keeping defaults for options not given."""
    overrides = {
        "performance": min_performance,
        "accessibility": min_accessibility,
        "best_practices": min_best_practices,
        "seo": min_seo,
    }
    return ScoreThresholds(**{k: v for k, v in overrides.items() if v is not None})


def _metric_thresholds(
    max_fcp: float | None,
    max_lcp: float | None,
    max_cls: float | None,
    max_ttfb: float | None,
) -> MetricThresholds:
    """Build metric budgets, keeping defaults for options not given."""
    overrides = {"fcp": max_fcp, "lcp": max_lcp, "cls": max_cls, "ttfb": max_ttfb}
    return MetricThresholds(**{k: v for k, v in overrides.items() if v is not None})


@app.command()
def audit(
    url: str = typer.Argument(None, help=f"Target URL (default: ${ENV_TARGET_URL})"),
    reports_dir: str = typer.Option(None, "--reports-dir", help="Report root directory"),
    preflight: bool = typer.Option(False, "--preflight", help="Check the target answers before auditing"),
    dashboard: bool = typer.Option(False, "--dashboard", help="Regenerate the dashboard after saving"),
    dashboard_dir: str = typer.Option(None, "--dashboard-dir", help="Dashboard output directory"),
    min_performance: int = typer.Option(None, "--min-performance", help="Minimum performance score"),
    min_accessibility: int = typer.Option(None, "--min-accessibility", help="Minimum accessibility score"),
    min_best_practices: int = typer.Option(None, "--min-best-practices", help="Minimum best practices score"),
    min_seo: int = typer.Option(None, "--min-seo", help="Minimum SEO score"),
    fail_on_threshold: bool = typer.Option(False, "--fail-on-threshold", help="Exit 1 on score violations"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Run a Lighthouse audit and save the report."""
    _configure_logging(verbose)

    url = url or os.getenv(ENV_TARGET_URL, "").strip()
    if not url:
        console.print(f"[red]Error:[/red] No URL given and {ENV_TARGET_URL} is not set")
        raise typer.Exit(1)

    runner = default_runner()
    if not runner.is_lighthouse_installed():
        console.print("[red]Error: Lighthouse not installed[/red]")
        console.print("\nInstall with: npm install -g lighthouse")
        raise typer.Exit(1)

    if preflight and not check_target_reachable(url):
        console.print(f"[red]Error:[/red] Target is not reachable: {url}")
        raise typer.Exit(1)

    console.print(f"\n[bold]Running Lighthouse audit for {url}...[/bold]\n")

    try:
        report, path = run_audit_pipeline(url, reports_dir=reports_dir, runner=runner)
    except LighthouseError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[red]Error saving report:[/red] {e}")
        raise typer.Exit(1)

    print_report_summary(report, console)
    console.print(f"\n[green]Report saved to {path}[/green]")

    thresholds = _score_thresholds(min_performance, min_accessibility, min_best_practices, min_seo)
    score_result = assert_scores_above_threshold(report.scores, thresholds)
    if not score_result.passed:
        console.print("\n[yellow]Threshold violations:[/yellow]")
        for issue in score_result.issues:
            console.print(f"  - {issue}")

    bottlenecks = find_bottlenecks(report.metrics)
    if bottlenecks:
        console.print("\n[yellow]Performance bottlenecks detected:[/yellow]")
        for bottleneck in bottlenecks:
            console.print(f"  - {bottleneck}")

    # A missing dashboard never fails the audit itself
    if dashboard:
        try:
            dashboard_path = run_dashboard_pipeline(reports_dir=reports_dir, dashboard_dir=dashboard_dir)
            console.print(f"[green]Dashboard updated: {dashboard_path}[/green]")
        except Exception as e:
            console.print(f"[yellow]Warning:[/yellow] Failed to generate dashboard: {e}")

    if fail_on_threshold and not score_result.passed:
        raise typer.Exit(1)


@app.command()
def render(
    reports_dir: str = typer.Option(None, "--reports-dir", help="Report root directory"),
    dashboard_dir: str = typer.Option(None, "--dashboard-dir", help="Dashboard output directory"),
    timestamped: bool = typer.Option(
        False, "--timestamped", help="Write lighthouse-report-<date>_<time>.html instead of the latest file"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Aggregate all stored reports into an HTML dashboard."""
    _configure_logging(verbose, default_level=logging.WARNING)

    try:
        path = run_dashboard_pipeline(
            reports_dir=reports_dir,
            dashboard_dir=dashboard_dir,
            timestamped=timestamped,
        )
    except Exception as e:
        console.print(f"[red]Error rendering dashboard:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"[green]Dashboard written to {path}[/green]")


@app.command()
def history(
    reports_dir: str = typer.Option(None, "--reports-dir", help="Report root directory"),
    limit: int = typer.Option(20, "--limit", "-l", help="Number of reports to show"),
) -> None:
    """List stored reports, most recent first."""
    _configure_logging(False, default_level=logging.WARNING)

    reports = load_history(reports_dir)
    if not reports:
        console.print("[yellow]No Lighthouse reports found. Run 'lha audit' first.[/yellow]")
        return

    console.print(history_table(reports[:limit]))


@app.command()
def check(
    reports_dir: str = typer.Option(None, "--reports-dir", help="Report root directory"),
    min_performance: int = typer.Option(None, "--min-performance", help="Minimum performance score"),
    min_accessibility: int = typer.Option(None, "--min-accessibility", help="Minimum accessibility score"),
    min_best_practices: int = typer.Option(None, "--min-best-practices", help="Minimum best practices score"),
    min_seo: int = typer.Option(None, "--min-seo", help="Minimum SEO score"),
    metrics: bool = typer.Option(False, "--metrics", help="Also check Core Web Vitals budgets"),
    max_fcp: float = typer.Option(None, "--max-fcp", help="FCP budget in ms (implies --metrics)"),
    max_lcp: float = typer.Option(None, "--max-lcp", help="LCP budget in ms (implies --metrics)"),
    max_cls: float = typer.Option(None, "--max-cls", help="CLS budget (implies --metrics)"),
    max_ttfb: float = typer.Option(None, "--max-ttfb", help="TTFB budget in ms (implies --metrics)"),
) -> None:
    """Check the most recent report against score thresholds."""
    _configure_logging(False, default_level=logging.WARNING)

    reports = load_history(reports_dir)
    if not reports:
        console.print("[yellow]No Lighthouse reports found. Run 'lha audit' first.[/yellow]")
        raise typer.Exit(1)

    latest = reports[0]
    thresholds = _score_thresholds(min_performance, min_accessibility, min_best_practices, min_seo)
    issues = list(assert_scores_above_threshold(latest.scores, thresholds).issues)
    budgets = (max_fcp, max_lcp, max_cls, max_ttfb)
    if metrics or any(b is not None for b in budgets):
        metric_thresholds = _metric_thresholds(*budgets)
        issues.extend(assert_metrics_below_threshold(latest.metrics, metric_thresholds).issues)

    console.print(f"Checking latest report: {latest.url}")
    if issues:
        console.print(f"[red]{len(issues)} threshold violation(s):[/red]")
        for issue in issues:
            console.print(f"  - {issue}")
        raise typer.Exit(1)

    console.print("[green]All thresholds met[/green]")


@app.command()
def preserve(
    dashboard_dir: str = typer.Option(None, "--dashboard-dir", help="Dashboard directory"),
    preserve_dir: str = typer.Option(None, "--preserve-dir", help="Destination directory"),
) -> None:
    """Copy rendered dashboards into the test runner's report folder."""
    _configure_logging(False, default_level=logging.WARNING)

    copied = run_preserve_pipeline(dashboard_dir=dashboard_dir, preserve_dir=preserve_dir)
    if not copied:
        console.print("[yellow]No Lighthouse dashboards to preserve[/yellow]")
        return

    for path in copied:
        console.print(f"Preserved: {path.name}")
    console.print(f"[green]Lighthouse dashboards preserved in {copied[0].parent}[/green]")


if __name__ == "__main__":
    app()
