"""Main CLI interface for issue-git."""

from pathlib import Path
from typing import NoReturn, Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from issue_git.config import Config, load_config
from issue_git.core.workflow import IssueGit
from issue_git.debug import configure_logging
from issue_git.errors import IssueGitError, NoChangesError

console = Console()


def _find_project_root(start: Path) -> Optional[Path]:
    """Find the nearest directory containing a .git entry."""
    start = start.resolve()
    for parent in [start] + list(start.parents):
        if (parent / ".git").exists():
            return parent
    return None


def abort_with(error: IssueGitError) -> NoReturn:
    """Report a controlled error and stop the command."""
    console.print(f"[red]Error: {escape(str(error))}[/red]")
    raise click.Abort() from error


def get_issue_git_or_exit(ctx: click.Context) -> IssueGit:
    """Load config and open the repository, or exit with an error message."""
    repo_path: Path = ctx.obj["repo"]
    project_root = _find_project_root(repo_path) or repo_path
    try:
        config: Config = load_config(project_root)
        return IssueGit(config).init(project_root)
    except IssueGitError as e:
        abort_with(e)


@click.group()
@click.version_option(package_name="issue-git")
@click.option(
    "--repo",
    type=click.Path(file_okay=False, path_type=Path),
    default=".",
    help="Path to the repository",
)
@click.option("--debug", is_flag=True, help="Show debug logging")
@click.pass_context
def main(ctx: click.Context, repo: Path, debug: bool):
    """issue-git - Branch per issue, summary per branch."""
    configure_logging(debug)
    ctx.ensure_object(dict)
    ctx.obj["repo"] = repo


@main.command()
@click.argument("issue")
@click.pass_context
def start(ctx: click.Context, issue: str):
    """Create and check out a branch for ISSUE from the remote default branch."""
    issue_git = get_issue_git_or_exit(ctx)
    try:
        name = issue_git.create_issue_branch(issue)
    except IssueGitError as e:
        abort_with(e)

    console.print(
        f"[green]✅ Switched to {name} "
        f"(from {issue_git.config.git.base_ref})[/green]"
    )
    if issue_git.last_stash:
        console.print(
            f"[yellow]Local changes were stashed as '{issue_git.last_stash}'. "
            "Run 'git stash pop' to restore them.[/yellow]"
        )


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Print the summary as JSON")
@click.pass_context
def info(ctx: click.Context, as_json: bool):
    """Show the commits and issues of the current branch."""
    issue_git = get_issue_git_or_exit(ctx)
    try:
        branch_info = issue_git.get_branch_info()
    except NoChangesError:
        console.print("[yellow]Nothing to summarize: no commits ahead of the remote base[/yellow]")
        return
    except IssueGitError as e:
        abort_with(e)

    if as_json:
        click.echo(branch_info.model_dump_json(indent=2))
        return

    table = Table(title=f"Branch {branch_info.name}")
    table.add_column("#", style="cyan", no_wrap=True)
    table.add_column("Message", style="green")
    table.add_column("Issues", style="yellow")
    for index, commit in enumerate(branch_info.commits, start=1):
        table.add_row(str(index), escape(commit.message), ", ".join(commit.issues))
    console.print(table)

    if branch_info.issues:
        console.print(f"[bold]Issues:[/bold] {', '.join(branch_info.issues)}")


@main.command()
@click.pass_context
def issue(ctx: click.Context):
    """Print the issue identifier of the current branch."""
    issue_git = get_issue_git_or_exit(ctx)
    try:
        click.echo(issue_git.extract_issue_from_current_branch())
    except IssueGitError as e:
        abort_with(e)


@main.command()
@click.pass_context
def push(ctx: click.Context):
    """Push the current branch and open a pull request (not implemented)."""
    issue_git = get_issue_git_or_exit(ctx)
    issue_git.push_branch_to_github()
    console.print("[yellow]Pushing branches is not implemented yet[/yellow]")


if __name__ == "__main__":
    main()
