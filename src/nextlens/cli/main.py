"""
nextlens CLI
Main entry point for the command-line interface

Usage:
    nextlens analyze <path>                  # Full report as JSON
    nextlens analyze <path> --stage routes   # One stage as JSON
    nextlens summary <path>                  # Scores and counts as tables
    nextlens diagram <path>                  # Mermaid dependency diagram
    nextlens version
"""

import json
from pathlib import Path
from typing import Any, Optional

import typer
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from nextlens import __version__
from nextlens.analysis.application.dependency_graph_builder import generate_dependency_diagram
from nextlens.analysis.application.project_analyzer import AnalysisStage, ProjectAnalyzer
from nextlens.analysis.domain.dependencies import CycleSeverity
from nextlens.analysis.domain.principles import IssueSeverity
from nextlens.analysis.domain.report import ProjectReport
from nextlens.shared.domain.exceptions import ConfigurationError
from nextlens.shared.infrastructure.config import Settings
from nextlens.shared.infrastructure.logging import configure_logging, get_logger

app = typer.Typer(
    name="nextlens",
    help="nextlens - static architecture analysis for React / Next.js projects",
    add_completion=False,
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)
logger = get_logger(__name__)

EXIT_FAILURE = 1
EXIT_CONFIGURATION = 2

SEVERITY_STYLES = {
    IssueSeverity.CRITICAL: "red bold",
    IssueSeverity.WARNING: "yellow",
    IssueSeverity.INFO: "dim",
}


@app.callback()
def _configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr"),
):
    """Logs go to stderr; reports go to stdout."""
    configure_logging(settings=Settings(log_level="DEBUG") if verbose else None)


def _score_style(score: float) -> str:
    if score >= 80:
        return "green"
    if score >= 50:
        return "yellow"
    return "red"


def _run_stage(path: Path, stage: AnalysisStage) -> Any:
    """Run a stage, mapping fatal errors to exit codes."""
    analyzer = ProjectAnalyzer(path)
    try:
        return analyzer.analyze_stage(stage)
    except ConfigurationError as e:
        err_console.print(Panel(
            f"[bold]{e}[/bold]",
            title=f"[red]{type(e).__name__}[/red]",
            border_style="red",
        ))
        raise typer.Exit(code=EXIT_CONFIGURATION)
    except Exception as e:
        logger.error("analysis_failed", root=str(path), stage=stage.value, error=str(e))
        err_console.print(f"[red]Analysis failed: {e}[/red]")
        raise typer.Exit(code=EXIT_FAILURE)


@app.command()
def analyze(
    path: Path = typer.Argument(Path("."), help="Project root (default: current directory)"),
    stage: AnalysisStage = typer.Option(AnalysisStage.ALL, "--stage", "-s", help="Stage to run"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write JSON to this file"),
    indent: int = typer.Option(2, "--indent", help="JSON indentation (0 for compact)"),
):
    """
    Analyze a project and print the report as JSON

    Example:
        nextlens analyze ./my-app
        nextlens analyze ./my-app --stage solid -o solid.json
    """
    result = _run_stage(path, stage)
    document = json.dumps(result.to_json(), indent=indent or None, ensure_ascii=False)

    if output is None:
        typer.echo(document)
        return

    try:
        output.write_text(document + "\n", encoding="utf-8")
    except OSError as e:
        err_console.print(f"[red]Cannot write {output}: {e}[/red]")
        raise typer.Exit(code=EXIT_FAILURE)
    err_console.print(f"[green]Report written to {output}[/green]")


def _overview_table(report: ProjectReport) -> Table:
    table = Table(title="Project Overview", box=box.ROUNDED, show_header=False)
    table.add_column("Metric", style="cyan bold", width=22)
    table.add_column("Value", style="white")

    critical_cycles = sum(
        1 for cycle in report.dependencies.circular_dependencies
        if cycle.severity == CycleSeverity.CRITICAL
    )
    table.add_row("Files", f"{report.structure.stats.total}")
    table.add_row("Analyzed", f"[green]{report.solid.stats.files_analyzed}[/green]")
    table.add_row("Failed", f"[red]{len(report.source_failures)}[/red]")
    table.add_row("Partially parsed", f"[yellow]{len(report.partial_files)}[/yellow]")
    table.add_row("Components", f"{report.components.stats.total_components}")
    table.add_row("Routes", f"{report.routes.stats.total_routes}")
    table.add_row("Types", f"{report.types.stats.total_types}")
    table.add_row(
        "Circular dependencies",
        f"{len(report.dependencies.circular_dependencies)} ([red]{critical_cycles} critical[/red])",
    )
    table.add_row("Suggestions", f"{report.refactor.stats.total_suggestions}")
    return table


def _score_table(report: ProjectReport) -> Table:
    score = report.solid.score
    table = Table(title="Principle Scores", box=box.ROUNDED)
    table.add_column("Principle", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Issues", justify="right")

    for label, value in (("SRP", score.srp), ("OCP", score.ocp), ("LSP", score.lsp),
                         ("ISP", score.isp), ("DIP", score.dip)):
        issues = sum(1 for issue in report.solid.issues if issue.principle.value == label)
        table.add_row(label, f"[{_score_style(value)}]{value:.1f}[/]", f"{issues}")
    table.add_row(
        "[bold]Overall[/bold]",
        f"[bold {_score_style(score.overall)}]{score.overall}[/]",
        f"{report.solid.stats.total_issues}",
    )
    return table


def _issue_table(report: ProjectReport, limit: int) -> Table:
    table = Table(title=f"Top Issues (max {limit})", box=box.ROUNDED)
    table.add_column("Severity", width=10)
    table.add_column("Principle", width=9)
    table.add_column("File", style="cyan", overflow="fold")
    table.add_column("Description")

    order = {IssueSeverity.CRITICAL: 0, IssueSeverity.WARNING: 1, IssueSeverity.INFO: 2}
    ranked = sorted(report.solid.issues, key=lambda issue: order[issue.severity])
    root = Path(report.structure.structure.path)
    for issue in ranked[:limit]:
        try:
            shown = str(Path(issue.file_path).relative_to(root))
        except ValueError:
            shown = issue.file_path
        style = SEVERITY_STYLES[issue.severity]
        table.add_row(f"[{style}]{issue.severity.value}[/]", issue.principle.value, shown, issue.description)
    return table


@app.command()
def summary(
    path: Path = typer.Argument(Path("."), help="Project root (default: current directory)"),
    limit: int = typer.Option(10, "--limit", "-n", help="Number of issues to list"),
):
    """
    Show scores, counts and the most severe issues

    Example:
        nextlens summary ./my-app
    """
    report: ProjectReport = _run_stage(path, AnalysisStage.ALL)

    console.print(_overview_table(report))
    console.print(_score_table(report))
    if report.solid.issues and limit > 0:
        console.print(_issue_table(report, limit))
    if report.source_failures:
        console.print(Panel(
            "\n".join(f"{failure.file_path}: {failure.message}" for failure in report.source_failures),
            title="[yellow]Files skipped[/yellow]",
            border_style="yellow",
        ))


@app.command()
def diagram(
    path: Path = typer.Argument(Path("."), help="Project root (default: current directory)"),
):
    """
    Print the module dependency graph as a Mermaid flowchart

    Example:
        nextlens diagram ./my-app > deps.mmd
    """
    graph = _run_stage(path, AnalysisStage.DEPENDENCIES)
    typer.echo(generate_dependency_diagram(graph), nl=False)


@app.command()
def version():
    """Show nextlens version information"""
    console.print(Panel.fit(
        "[bold cyan]nextlens[/bold cyan]\n"
        f"[dim]Version:[/dim] {__version__}\n",
        title="About nextlens",
        border_style="cyan",
    ))


def main():
    """Main entry point"""
    app()


if __name__ == "__main__":
    main()
