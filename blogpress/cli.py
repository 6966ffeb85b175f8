"""Click CLI interface for blogpress."""

import asyncio
from datetime import datetime, timezone
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from blogpress.builder import HtmlBuilder
from blogpress.config import BlogpressConfig
from blogpress.exceptions import BlogpressError, HandledBuildError
from blogpress.linkdata import LinkDataSetBuilder
from blogpress.publish import PublishRecord, update_frontmatter
from blogpress.vault import Vault

console = Console()


def _load_config(config: Path | None, vault: Path | None) -> BlogpressConfig:
    overrides = {"vault_dir": vault} if vault is not None else {}
    return BlogpressConfig(config_file=config, **overrides)


def _summary_table(title: str, rows: list[tuple[str, list[str] | str]]) -> Table:
    table = Table(title=title, show_header=False, box=None, padding=(0, 2))
    table.add_column("Field", style="dim", width=12)
    table.add_column("Value", style="white")

    for name, value in rows:
        if isinstance(value, list):
            value = ", ".join(value) if value else "[dim]none[/dim]"
        table.add_row(f"{name}:", value)
    return table


async def _build(builder: HtmlBuilder, note: Path):
    try:
        return await builder.build_bundle(note)
    except BlogpressError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise HandledBuildError(str(e)) from e
    finally:
        builder.teardown()


config_option = click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, file_okay=True, path_type=Path),
    help="Path to configuration file (defaults to ~/.blogpress/config.yml)",
)
vault_option = click.option(
    "--vault",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Vault directory (overrides vault_dir from the configuration)",
)


@click.group()
@click.version_option()
def main() -> None:
    """blogpress - Convert vault notes into blog-ready HTML."""
    pass


@main.command()
@click.argument("note", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@config_option
@vault_option
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the HTML here instead of printing it",
)
@click.option(
    "--hidden-links/--no-hidden-links",
    default=False,
    help="Append hidden links to published related notes",
)
def convert(
    note: Path,
    config: Path | None,
    vault: Path | None,
    output: Path | None,
    hidden_links: bool,
) -> None:
    """Convert a note to HTML."""
    builder = HtmlBuilder(_load_config(config, vault))

    try:
        bundle = asyncio.run(_build(builder, note.resolve()))
    except HandledBuildError:
        raise click.Abort() from None

    html = bundle.with_hidden_links() if hidden_links else bundle.content

    console.print(
        _summary_table(
            "Converted note",
            [("Title", bundle.title), ("Labels", bundle.labels), ("Tags", bundle.tags)],
        )
    )

    if output is None:
        click.echo(html)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html, encoding="utf-8")
    console.print(f"[green]✓[/green] Wrote {output}")


@main.command()
@click.argument("note", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@config_option
@vault_option
def links(note: Path, config: Path | None, vault: Path | None) -> None:
    """Show the backlinks, outlinks, labels and tags of a note."""
    blog_config = _load_config(config, vault)
    link_data = LinkDataSetBuilder(Vault(blog_config.vault_dir), blog_config.links).build(
        note.resolve()
    )

    console.print(
        _summary_table(
            note.stem,
            [
                ("Backlinks", link_data.backlinks),
                ("Outlinks", link_data.outlinks),
                ("Labels", link_data.labels),
                ("Tags", link_data.tags),
            ],
        )
    )


@main.command()
@click.argument("note", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--article-id", required=True, help="Id of the published post")
@click.option("--url", required=True, help="Public URL of the published post")
@click.option("--draft/--published", default=False, help="Publish state of the post")
@click.option("--labels", default=None, help="Comma separated post labels")
def stamp(
    note: Path, article_id: str, url: str, draft: bool, labels: str | None
) -> None:
    """Record publish results in a note's frontmatter."""
    now = datetime.now(timezone.utc)
    record = PublishRecord(
        blog_article_id=article_id,
        blog_article_url=url,
        blog_is_draft=draft,
        blog_labels=labels,
        blog_updated=now,
        blog_published=None if draft else now,
    )

    try:
        update_frontmatter(note, record)
    except BlogpressError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise click.Abort() from None

    console.print(f"[green]✓[/green] Recorded {url} in {note}")


if __name__ == "__main__":
    main()
