"""CLI interface for postflow."""

import contextlib
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from postflow.authors import AuthorRegistry
from postflow.config import CONFIG_FILENAME, PostflowConfig, load_config, merge_cli_overrides
from postflow.content import PostStore, PublicationState
from postflow.errors import PostflowError
from postflow.generator import Generator
from postflow.log import setup_logging

app = typer.Typer(
    name="postflow",
    help="Create, edit, and publish blog posts for a static-site generator.",
    no_args_is_help=True,
)
author_app = typer.Typer(help="Register and list post authors.", no_args_is_help=True)
app.add_typer(author_app, name="author")

console = Console()


@dataclass
class _Site:
    """Per-invocation state shared by all commands."""

    root: Path
    config: PostflowConfig

    @property
    def posts(self) -> PostStore:
        return PostStore(self.config.content_path(self.root))

    @property
    def authors(self) -> AuthorRegistry:
        return AuthorRegistry(self.config.authors_path(self.root))

    @property
    def generator(self) -> Generator:
        return Generator(self.config.generator, site_root=self.root)


@contextlib.contextmanager
def _reporting_errors():
    """Turn library errors into a red message and exit code 1."""
    try:
        yield
    except PostflowError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1) from exc


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from postflow import __version__

        console.print(f"postflow {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    root: Annotated[
        Path,
        typer.Option(
            "--root",
            "-r",
            help="Site root containing the content and authors directories.",
            file_okay=False,
            dir_okay=True,
        ),
    ] = Path("."),
    config_path: Annotated[
        Optional[Path],
        typer.Option(
            "--config",
            "-c",
            help=(
                f"Config file. Defaults to <root>/{CONFIG_FILENAME}, "
                "then ~/.config/postflow/config.toml."
            ),
        ),
    ] = None,
    content_dir: Annotated[
        Optional[str],
        typer.Option("--content-dir", help="Override [site] content_dir."),
    ] = None,
    authors_dir: Annotated[
        Optional[str],
        typer.Option("--authors-dir", help="Override [site] authors_dir."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Show debug logging."),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """postflow - draft-to-published workflow for blog posts."""
    setup_logging(verbose)

    config = load_config(config_path, search_dir=root)
    config = merge_cli_overrides(config, content_dir=content_dir, authors_dir=authors_dir)

    ctx.obj = _Site(root=root, config=config)


def _site(ctx: typer.Context) -> _Site:
    return ctx.obj


# ── Post lifecycle ───────────────────────────────────────────────


@app.command(name="new")
def new_cmd(
    ctx: typer.Context,
    title: Annotated[str, typer.Argument(help="Post title; the slug is derived from it.")],
    author: Annotated[
        Optional[str],
        typer.Option("--author", "-a", help="Author handle. Defaults to [defaults] author."),
    ] = None,
) -> None:
    """Create a new draft post."""
    site = _site(ctx)
    handle = author or site.config.defaults.author or None

    with _reporting_errors():
        item = site.posts.create(title, author=handle)

    console.print(f"[green]Created draft[/green] {item.slug} → {item.file_path}")
    if handle and not site.authors.exists(handle):
        console.print(
            f"[yellow]Note:[/yellow] author '{handle}' is not registered; "
            "the post will render without author details."
        )


@app.command(name="edit")
def edit_cmd(
    ctx: typer.Context,
    slug: Annotated[str, typer.Argument(help="Slug of the post to edit.")],
    body: Annotated[
        Optional[str],
        typer.Option("--body", "-b", help="Replacement body text."),
    ] = None,
    body_file: Annotated[
        Optional[Path],
        typer.Option(
            "--file",
            "-f",
            help="Read the replacement body from a file.",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    author: Annotated[
        Optional[str],
        typer.Option("--author", "-a", help="Replace the author handle."),
    ] = None,
) -> None:
    """Replace a post's body and optionally its author.

    The post's draft/published state is not changed.
    """
    if body is not None and body_file is not None:
        console.print("[red]Error:[/red] Use either --body or --file, not both.")
        raise typer.Exit(1)
    if body is None and body_file is None:
        console.print("[red]Error:[/red] Provide the new body with --body or --file.")
        raise typer.Exit(1)

    text = body if body is not None else body_file.read_text(encoding="utf-8")
    site = _site(ctx)

    with _reporting_errors():
        item = site.posts.edit(slug, text, author)

    console.print(f"[green]Updated[/green] {item.slug} ({item.state.value})")


@app.command(name="publish")
def publish_cmd(
    ctx: typer.Context,
    slug: Annotated[str, typer.Argument(help="Slug of the post to publish.")],
) -> None:
    """Mark a post as published.

    It goes live after the next push triggers the CI build.
    """
    site = _site(ctx)
    with _reporting_errors():
        item = site.posts.publish(slug)

    if not item.body.strip():
        console.print(f"[yellow]Warning:[/yellow] {item.slug} has an empty body.")
    console.print(f"[green]Published[/green] {item.slug}")


@app.command(name="unpublish")
def unpublish_cmd(
    ctx: typer.Context,
    slug: Annotated[str, typer.Argument(help="Slug of the post to revert.")],
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip the confirmation prompt."),
    ] = False,
) -> None:
    """Revert a published post to draft.

    This removes the post from the public site on the next build.
    """
    site = _site(ctx)
    with _reporting_errors():
        item = site.posts.require(slug)

    if item.draft:
        console.print(f"{item.slug} is already a draft.")
        return

    if not yes and not typer.confirm(f"Take '{item.title}' off the public site?"):
        console.print("Aborted.")
        raise typer.Exit(1)

    with _reporting_errors():
        site.posts.unpublish(slug)
    console.print(f"[yellow]Reverted[/yellow] {slug} to draft")


@app.command(name="status")
def status_cmd(
    ctx: typer.Context,
    state: Annotated[
        Optional[PublicationState],
        typer.Option("--state", "-s", help="Only show posts in this state."),
    ] = None,
) -> None:
    """List posts with their publication state and author."""
    site = _site(ctx)
    items = site.posts.list(state=state)
    if not items:
        console.print("No posts found.")
        return

    authors = site.authors
    table = Table(title=f"Posts in {site.posts.content_dir}")
    table.add_column("Slug")
    table.add_column("Title")
    table.add_column("State")
    table.add_column("Author")
    table.add_column("Created")

    for item in items:
        state_cell = "[yellow]draft[/yellow]" if item.draft else "[green]published[/green]"
        record = authors.resolve(item)
        if record is not None:
            author_cell = record.name or record.handle
        elif item.author:
            author_cell = f"{item.author} [dim](unregistered)[/dim]"
        else:
            author_cell = "[dim]-[/dim]"
        table.add_row(
            item.slug,
            item.title,
            state_cell,
            author_cell,
            item.created_at.strftime("%Y-%m-%d"),
        )

    console.print(table)


@app.command(name="show")
def show_cmd(
    ctx: typer.Context,
    slug: Annotated[str, typer.Argument(help="Slug of the post to show.")],
) -> None:
    """Print a post's attributes and body."""
    site = _site(ctx)
    with _reporting_errors():
        item = site.posts.require(slug)

    console.print(f"[bold]{item.title}[/bold]")
    console.print(f"slug:    {item.slug}")
    console.print(f"state:   {item.state.value}")
    console.print(f"author:  {item.author or '-'}")
    console.print(f"created: {item.created_at.isoformat()}")
    console.print(f"file:    {item.file_path}")
    console.print()
    console.print(item.body or "[dim](empty body)[/dim]", markup=False)


@app.command(name="check")
def check_cmd(ctx: typer.Context) -> None:
    """Report posts whose author handle is not registered.

    Informational only: dangling handles do not block a build.
    """
    site = _site(ctx)
    dangling = site.authors.dangling(site.posts.list())
    if not dangling:
        console.print("[green]All author references resolve.[/green]")
        return

    console.print(f"[yellow]{len(dangling)} post(s) reference unregistered authors:[/yellow]")
    for slug, handle in dangling:
        console.print(f"  {slug} → {handle}")


# ── Generator ────────────────────────────────────────────────────


@app.command(name="build")
def build_cmd(
    ctx: typer.Context,
    preview: Annotated[
        bool,
        typer.Option("--preview/--no-preview", help="Include drafts in the output."),
    ] = False,
) -> None:
    """Render the site with the external generator."""
    site = _site(ctx)
    included = site.posts.visible(preview=preview)
    console.print(f"Rendering {len(included)} post(s){' including drafts' if preview else ''}.")

    with _reporting_errors():
        output = site.generator.build(preview=preview)
    if output:
        console.print(output, markup=False)
    console.print("[green]Build finished.[/green]")


@app.command(name="serve")
def serve_cmd(ctx: typer.Context) -> None:
    """Run the generator's local preview server, drafts included."""
    site = _site(ctx)
    with _reporting_errors():
        code = site.generator.serve()
    if code != 0:
        raise typer.Exit(code)


# ── Authors ──────────────────────────────────────────────────────


@author_app.command(name="add")
def author_add_cmd(
    ctx: typer.Context,
    handle: Annotated[str, typer.Argument(help="File-system-safe handle, e.g. 'kay'.")],
    name: Annotated[str, typer.Option("--name", "-n", help="Display name.")],
    meta: Annotated[
        Optional[list[str]],
        typer.Option("--meta", "-m", help="Extra metadata as key=value. Repeatable."),
    ] = None,
) -> None:
    """Register a new author."""
    metadata: dict[str, str] = {}
    for pair in meta or []:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            console.print(f"[red]Error:[/red] Expected key=value, got {pair!r}")
            raise typer.Exit(1)
        metadata[key.strip()] = value.strip()

    site = _site(ctx)
    with _reporting_errors():
        record = site.authors.register(handle, name, metadata)
    console.print(f"[green]Registered[/green] {record.handle} ({record.name})")


@author_app.command(name="list")
def author_list_cmd(ctx: typer.Context) -> None:
    """List registered authors."""
    site = _site(ctx)
    records = site.authors.list()
    if not records:
        console.print("No authors registered.")
        return

    table = Table(title="Authors")
    table.add_column("Handle")
    table.add_column("Name")
    table.add_column("Metadata")
    for record in records:
        extra = ", ".join(f"{k}={v}" for k, v in sorted(record.metadata.items()))
        table.add_row(record.handle, record.name, extra)
    console.print(table)
