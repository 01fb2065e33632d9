"""Command line interface for Repo Reader."""

import json
import logging
import sys
from pathlib import Path
from typing import Callable, Optional, Tuple

import click
from rich.console import Console
from rich.table import Table

from . import __version__
from .exceptions import RepoReaderError
from .local_reference import create_local_reference
from .prompts import SETUP_INSTRUCTION_PROMPT
from .tools import RepoReaderTools

console = Console(stderr=True)


def _get_tools(ctx: click.Context) -> RepoReaderTools:
    """Create the tools for the selected project, once per invocation."""
    if "tools" not in ctx.obj:
        reference = create_local_reference(
            ctx.obj["path"],
            name=ctx.obj["name"],
            files_override=list(ctx.obj["files"]) or None,
            depth_override=ctx.obj["depth"],
            config_path=ctx.obj["config"],
        )
        ctx.obj["tools"] = RepoReaderTools(reference)
    tools: RepoReaderTools = ctx.obj["tools"]
    return tools


def _globs(values: Tuple[str, ...]) -> Optional[list]:
    return list(values) or None


def _run(func: Callable[[], str]) -> None:
    """Print the text result of a tool call, mapping failures to exit code 1."""
    try:
        result = func()
    except RepoReaderError as e:
        console.print(f"❌ {e}", style="red", markup=False)
        sys.exit(1)
    click.echo(result)


@click.group()
@click.option(
    "--path",
    "-p",
    type=click.Path(path_type=Path),
    default=".",
    show_default=True,
    help="Project directory to expose",
)
@click.option("--name", help="Repository name (overrides the config file)")
@click.option(
    "--files",
    multiple=True,
    help="Include glob overriding the config file (repeatable)",
)
@click.option("--depth", type=int, help="Default menu depth (-1 for unlimited)")
@click.option(
    "--config",
    "-c",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file used instead of repo-reader.config.json",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.version_option(version=__version__, prog_name="repo-reader")
@click.pass_context
def cli(
    ctx,
    path: Path,
    name: Optional[str],
    files: Tuple[str, ...],
    depth: Optional[int],
    config: Optional[Path],
    verbose: bool,
):
    """Browse a local repository the way an AI agent does.

    \b
    EXAMPLES:
      repo-reader -p ./project menu --depth 2
      repo-reader read README.md --line 10 --range 5
      repo-reader search "def main" --include "src/**" --page-size 5
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s:%(name)s:%(message)s",
    )

    ctx.ensure_object(dict)
    ctx.obj.update(
        path=path, name=name, files=files, depth=depth, config=config, verbose=verbose
    )


@cli.command()
@click.option("--sub-path", help="Only show the menu of this sub path")
@click.option("--depth", type=int, help="Levels to show (-1 for unlimited)")
@click.option("--include", multiple=True, help="Include glob (repeatable)")
@click.option("--exclude", multiple=True, help="Exclude glob (repeatable)")
@click.pass_context
def menu(ctx, sub_path, depth, include, exclude):
    """Show the directory hierarchy of the project."""
    _run(
        lambda: _get_tools(ctx).hierarchy_menu(
            depth=depth,
            sub_path=sub_path,
            include_globs=_globs(include),
            exclude_globs=_globs(exclude),
        )
    )


@cli.command()
@click.argument("file_path")
@click.option("--line", type=int, help="1-based line to center the output on")
@click.option("--range", "line_range", type=int, help="Lines before and after --line")
@click.option("--include", multiple=True, help="Include glob (repeatable)")
@click.option("--exclude", multiple=True, help="Exclude glob (repeatable)")
@click.pass_context
def read(ctx, file_path, line, line_range, include, exclude):
    """Read a file by path or (unique) file name."""
    _run(
        lambda: _get_tools(ctx).read_document(
            file_path,
            line=line,
            range=line_range,
            include_globs=_globs(include),
            exclude_globs=_globs(exclude),
        )
    )


@cli.command()
@click.argument("query")
@click.option("--case-sensitive", is_flag=True, help="Match case exactly")
@click.option("--whole-word", is_flag=True, help="Match whole words only")
@click.option("--regex", is_flag=True, help="Treat QUERY as a regular expression")
@click.option("--include", multiple=True, help="Include glob (repeatable)")
@click.option("--exclude", multiple=True, help="Exclude glob (repeatable)")
@click.option("--page", type=int, default=1, show_default=True, help="1-based page")
@click.option("--page-size", type=int, help="Results per page (default: all)")
@click.option("--files-only", is_flag=True, help="List matching files only")
@click.pass_context
def search(
    ctx,
    query,
    case_sensitive,
    whole_word,
    regex,
    include,
    exclude,
    page,
    page_size,
    files_only,
):
    """Search file contents for text or a regular expression."""
    _run(
        lambda: _get_tools(ctx).search(
            query,
            case_sensitive=case_sensitive,
            whole_word=whole_word,
            regex=regex,
            include_globs=_globs(include),
            exclude_globs=_globs(exclude),
            page=page,
            page_size=page_size,
            files_only=files_only,
        )
    )


@cli.command("config")
@click.pass_context
def show_config(ctx):
    """Print the resolved configuration as JSON."""
    _run(
        lambda: json.dumps(
            _get_tools(ctx).reference.config.model_dump(), indent=2, sort_keys=True
        )
    )


@cli.command()
def setup():
    """Explain how to write repo-reader.config.json."""
    click.echo(SETUP_INSTRUCTION_PROMPT)


@cli.command("tools")
@click.pass_context
def list_tools(ctx):
    """List the tools exposed for the project."""
    try:
        tools = _get_tools(ctx)
    except RepoReaderError as e:
        console.print(f"❌ {e}", style="red", markup=False)
        sys.exit(1)

    table = Table(title=f"Tools for {tools.name}")
    table.add_column("Tool", style="cyan", no_wrap=True)
    table.add_column("Description")
    for tool in tools.describe():
        table.add_row(tool.name, tool.description)
    Console().print(table)


def main():
    """Console script entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
