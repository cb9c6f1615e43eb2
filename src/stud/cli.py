"""Command-line interface for stud."""

import logging
import sys
from contextlib import nullcontext

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from stud import __version__
from stud.cleanup.interaction import ConsoleInteraction
from stud.cleanup.models import BranchReport, BranchStatus, CleanupSummary
from stud.cleanup.orchestrator import BranchCleanOrchestrator
from stud.config import ConfigurationError, StudConfig
from stud.github.client import GitHubClient
from stud.github.models import parse_github_remote
from stud.vcs.base import VCSManager
from stud.vcs.exceptions import VCSError
from stud.vcs.git.manager import GitManager

app = typer.Typer(
    name="stud",
    help="Developer workflow CLI for git and GitHub",
    add_completion=False,
)
console = Console()
logger = logging.getLogger(__name__)

# Help text constants
VERBOSE_OUTPUT_HELP = "Verbose output"
ENV_FILE_HELP = "Path to custom environment file (default: .env.stud or .env)"
BASE_BRANCH_HELP = "Branch that merged branches are compared against (overrides config)"
REMOTE_HELP = "Remote holding the shared branches (overrides config)"

STATUS_STYLES = {
    BranchStatus.MERGED: "green",
    BranchStatus.STALE: "yellow",
    BranchStatus.ACTIVE_PR: "cyan",
    BranchStatus.ACTIVE: "white",
    BranchStatus.UNKNOWN: "red",
}


def setup_logging(verbose: bool) -> None:
    """Setup logging configuration.

    Args:
        verbose: If True, enable debug logging
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )

    # Request logs would interleave with the command output
    if not verbose:
        logging.getLogger("httpx").setLevel(logging.WARNING)


def load_config(env_file: str | None, base_branch: str | None, remote: str | None) -> StudConfig:
    """Load configuration and apply command-line overrides.

    Args:
        env_file: Optional custom env file
        base_branch: Base branch override
        remote: Remote name override

    Returns:
        Configuration object

    Raises:
        ConfigurationError: If the configuration is invalid
    """
    overrides = {}
    if base_branch:
        overrides["base_branch"] = base_branch
    if remote:
        overrides["remote_name"] = remote
    return StudConfig(env_file=env_file, **overrides)


def create_github_client(config: StudConfig, vcs: VCSManager) -> GitHubClient | None:
    """Create a GitHub client when pull request checks are possible.

    Owner and repository default to the ones in the remote URL.

    Args:
        config: Configuration object
        vcs: VCS manager used to read the remote URL

    Returns:
        GitHub client, or None when pull request checks are disabled
    """
    if not config.has_github_token:
        logger.debug("GITHUB_TOKEN not configured, skipping pull request checks")
        return None

    owner, repo = config.github_owner, config.github_repo
    if not (owner and repo):
        parsed = parse_github_remote(vcs.get_remote_url(config.remote_name))
        if parsed is None:
            console.print(
                f"[yellow]Could not determine the GitHub repository from remote {config.remote_name}; "
                "skipping pull request checks. Set GITHUB_OWNER and GITHUB_REPO.[/yellow]"
            )
            return None
        owner = owner or parsed[0]
        repo = repo or parsed[1]

    return GitHubClient(config, owner, repo)


def _create_orchestrator(config: StudConfig, vcs: VCSManager, client: GitHubClient | None) -> BranchCleanOrchestrator:
    return BranchCleanOrchestrator(
        vcs,
        client,
        ConsoleInteraction(console),
        base_branch=config.base_branch,
        remote_name=config.remote_name,
        protected_branches=config.protected_branches,
        console=console,
    )


def _display_clean_results(summary: CleanupSummary, verbose: bool) -> None:
    """Display cleanup results.

    Args:
        summary: Cleanup summary to display
        verbose: Also list every branch that could not be deleted
    """
    if summary.cancelled or not summary.outcomes:
        return

    if summary.deleted_count > 0:
        console.print(f"\n[green]✓ Deleted {summary.deleted_count} branch(es)[/green]")

    if summary.has_failures:
        console.print(f"[yellow]{summary.failed_count} branch(es) could not be deleted[/yellow]")
        if verbose:
            for outcome in summary.outcomes:
                if outcome.failed:
                    console.print(f"  [red]✗[/red] {outcome.branch} ({outcome.failure_kind.value}): {outcome.error_message}")


def _display_branch_reports(reports: list[BranchReport]) -> None:
    """Display the branch report as a table.

    Args:
        reports: Branch reports to display
    """
    table = Table(title="Branches")
    table.add_column("Branch")
    table.add_column("Status")
    table.add_column("Remote", justify="center")
    table.add_column("PR", justify="center")

    for report in reports:
        name = f"{report.name} (current)" if report.is_current else report.name
        style = STATUS_STYLES[report.status]
        table.add_row(
            name,
            f"[{style}]{report.status.value}[/{style}]",
            "✓" if report.on_remote else "✗",
            f"#{report.pull_request_number}" if report.has_pull_request else "✗",
        )

    console.print(table)


@app.command()
def clean(
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Do not ask for confirmation and keep remote branches (for CI)",
    ),
    base_branch: str | None = typer.Option(
        None,
        "--base-branch",
        "-b",
        help=BASE_BRANCH_HELP,
    ),
    remote: str | None = typer.Option(
        None,
        "--remote",
        help=REMOTE_HELP,
    ),
    env_file: str | None = typer.Option(
        None,
        "--env-file",
        help=ENV_FILE_HELP,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help=VERBOSE_OUTPUT_HELP,
    ),
) -> None:
    """Delete local branches that are merged into the base branch.

    Protected branches, the current branch and branches with an open pull
    request are kept. Failures on individual branches do not change the
    exit status.
    """
    setup_logging(verbose)

    try:
        config = load_config(env_file, base_branch, remote)
        vcs = GitManager()

        console.print("\n[bold cyan]Branch Cleanup[/bold cyan]")
        console.print(f"  Base branch: {config.base_branch}")
        console.print(f"  Remote: {config.remote_name}\n")

        client = create_github_client(config, vcs)
        with client or nullcontext():
            summary = _create_orchestrator(config, vcs, client).clean(quiet=quiet)

        _display_clean_results(summary, verbose)

    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        sys.exit(1)
    except VCSError as e:
        console.print(f"[red]Git error: {e}[/red]")
        if verbose:
            console.print_exception()
        sys.exit(1)


@app.command()
def branches(
    base_branch: str | None = typer.Option(
        None,
        "--base-branch",
        "-b",
        help=BASE_BRANCH_HELP,
    ),
    remote: str | None = typer.Option(
        None,
        "--remote",
        help=REMOTE_HELP,
    ),
    env_file: str | None = typer.Option(
        None,
        "--env-file",
        help=ENV_FILE_HELP,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help=VERBOSE_OUTPUT_HELP,
    ),
) -> None:
    """List local branches with their merge, remote and pull request status."""
    setup_logging(verbose)

    try:
        config = load_config(env_file, base_branch, remote)
        vcs = GitManager()

        client = create_github_client(config, vcs)
        with client or nullcontext():
            reports = _create_orchestrator(config, vcs, client).report_branches()

        if not reports:
            console.print("No local branches found.")
            return

        _display_branch_reports(reports)

    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        sys.exit(1)
    except VCSError as e:
        console.print(f"[red]Git error: {e}[/red]")
        if verbose:
            console.print_exception()
        sys.exit(1)


@app.command()
def config(
    env_file: str | None = typer.Option(
        None,
        "--env-file",
        help=ENV_FILE_HELP,
    ),
) -> None:
    """Show current configuration."""
    try:
        cfg = StudConfig(env_file=env_file)
        env_path = StudConfig.find_env_file() if env_file is None else env_file
        console.print("[bold]Current Configuration:[/bold]\n")
        console.print(f"  Env file: {env_path or 'none'}")
        console.print(f"  Base branch: {cfg.base_branch}")
        console.print(f"  Remote: {cfg.remote_name}")
        console.print(f"  Protected branches: {', '.join(cfg.protected_branches)}")
        console.print("\n[bold]GitHub:[/bold]")
        console.print(f"  API URL: {cfg.github_api_url}")
        console.print(f"  Token: {'configured' if cfg.has_github_token else 'not set (pull request checks disabled)'}")
        console.print(f"  Owner: {cfg.github_owner or 'from remote URL'}")
        console.print(f"  Repository: {cfg.github_repo or 'from remote URL'}")
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        sys.exit(1)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"stud version {__version__}")


if __name__ == "__main__":
    app()
