"""CLI entrypoints."""

import logging
from collections.abc import Callable

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from tqdm import tqdm

from batchrename.filesystem import LocalFileSource, LocalRenameExecutor
from batchrename.models.files import SelectionCriteria, SourceFile
from batchrename.models.preview import PreviewPlan
from batchrename.models.progress import BatchRun, RenameProgress, RenameStatus
from batchrename.models.template import (
    DEFAULT_DIGIT_COUNT,
    DEFAULT_START_NUMBER,
    RenameTemplate,
    SortStrategy,
)
from batchrename.processors.batch_executor import BatchExecutor
from batchrename.processors.conflict_resolver import DEFAULT_REPLACEMENT, ConflictResolver
from batchrename.processors.name_validator import NameValidator
from batchrename.processors.preview_planner import PreviewPlanner


console = Console()

# Longest reason shown in the preview table before truncation
MAX_REASON_WIDTH = 60


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _parse_overrides(ctx: click.Context, param: click.Parameter, values: tuple[str, ...]) -> dict[str, str]:
    """Parse repeated `OLD=NEW` options into a mapping of current name to new name."""
    overrides: dict[str, str] = {}
    for value in values:
        old, sep, new = value.partition("=")
        if not sep or not old:
            raise click.BadParameter(f"Expected OLD=NEW, got '{value}'", ctx=ctx, param=param)
        overrides[old] = new
    return overrides


def plan_options(func: Callable) -> Callable:
    """Template, selection and override options shared by `preview` and `rename`."""
    options = [
        click.argument("directory", type=click.Path(exists=True, file_okay=False)),
        click.option("-p", "--prefix", type=str, required=True, help="Text placed before the sequence number."),
        click.option("--start", type=int, default=DEFAULT_START_NUMBER, help="Number given to the first file."),
        click.option("--digits", type=int, default=DEFAULT_DIGIT_COUNT, help="Zero-pad numbers to this width."),
        click.option(
            "--keep-extension/--drop-extension",
            default=True,
            help="Keep the original file extension.",
        ),
        click.option(
            "--sort",
            "sort_strategy",
            type=click.Choice([strategy.value for strategy in SortStrategy]),
            default=SortStrategy.NATURAL.value,
            help="Order applied before numbering.",
        ),
        click.option("--images/--no-images", default=True, help="Include image files."),
        click.option("--videos/--no-videos", default=True, help="Include video files."),
        click.option("--audio/--no-audio", default=False, help="Include audio files."),
        click.option("--ext", "extensions", multiple=True, help="Always include files with this extension."),
        click.option("--min-size", type=int, default=None, help="Minimum file size in bytes."),
        click.option("--max-size", type=int, default=None, help="Maximum file size in bytes."),
        click.option("--include-hidden", is_flag=True, default=False, help="Include hidden (dot) files."),
        click.option(
            "--set",
            "overrides",
            multiple=True,
            callback=_parse_overrides,
            help="Manually name a file: --set OLD=NEW (repeatable).",
        ),
        click.option(
            "--auto-resolve",
            is_flag=True,
            default=False,
            help="Append _1, _2, ... to duplicate names instead of reporting them.",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _build_plan(
    directory: str,
    prefix: str,
    start: int,
    digits: int,
    keep_extension: bool,
    sort_strategy: str,
    images: bool,
    videos: bool,
    audio: bool,
    extensions: tuple[str, ...],
    min_size: int | None,
    max_size: int | None,
    include_hidden: bool,
    overrides: dict[str, str],
    auto_resolve: bool,
) -> tuple[list[SourceFile], RenameTemplate, PreviewPlan]:
    """Select files, build the template and compute the preview."""
    criteria = SelectionCriteria(
        directory=directory,
        include_images=images,
        include_videos=videos,
        include_audio=audio,
        extensions=list(extensions),
        min_size=min_size,
        max_size=max_size,
        include_hidden=include_hidden,
    )
    try:
        files = LocalFileSource().list_files(criteria)
    except OSError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise SystemExit(1) from e

    template = RenameTemplate(
        prefix=prefix,
        start_number=start,
        digit_count=digits,
        preserve_extension=keep_extension,
        sort_strategy=SortStrategy(sort_strategy),
    )

    ids_by_name = {file.name: file.id for file in files}
    unknown = [name for name in overrides if name not in ids_by_name]
    if unknown:
        raise click.BadParameter(f"No selected file named: {', '.join(unknown)}", param_hint="'--set'")

    planner = PreviewPlanner()
    plan = planner.plan(files, template, {ids_by_name[old]: new for old, new in overrides.items()})
    if auto_resolve:
        plan = planner.auto_resolve(plan)

    return files, template, plan


def _print_plan(plan: PreviewPlan) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Original", style="cyan")
    table.add_column("New Name", style="green")
    table.add_column("Status")

    for ix, entry in enumerate(plan.entries, start=1):
        if entry.has_conflict:
            reason = entry.conflict_reason or ""
            if len(reason) > MAX_REASON_WIDTH:
                reason = reason[:MAX_REASON_WIDTH] + "..."
            status = f"[red]{escape(reason)}[/red]"
        elif not entry.is_changed:
            status = "[dim]unchanged[/dim]"
        else:
            status = "[green]ok[/green]"

        new_name = escape(entry.candidate_name)
        if entry.overridden:
            new_name += " [yellow](edited)[/yellow]"
        table.add_row(str(ix), escape(entry.source_file.name), new_name, status)

    console.print(table)

    summary = plan.summary
    style = "green" if summary.can_proceed else "yellow"
    console.print(f"[{style}]{summary.message}[/{style}]")


@click.group(context_settings=dict(show_default=True, auto_envvar_prefix="BATCHRENAME"))
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show debug logging.")
def cli(verbose: bool) -> None:
    """batchrename - Rename batches of files to a numbered naming template."""
    _configure_logging(verbose)


@cli.command("preview")
@plan_options
def preview(**kwargs) -> None:
    """Show how the files in DIRECTORY would be renamed, without renaming anything.

    Examples:

        batchrename preview ./photos --prefix holiday_ --digits 4

        batchrename preview ./photos -p img --sort date_modified --set "a.jpg=cover.jpg"
    """
    files, template, plan = _build_plan(**kwargs)
    console.print(
        f"Previewing [bold cyan]{len(files)}[/bold cyan] file(s) with template "
        f"[bold magenta]{escape(str(template))}[/bold magenta]"
    )

    if not files:
        console.print("[yellow]No files matched the selection.[/yellow]")
        return

    _print_plan(plan)

    if not plan.summary.can_proceed:
        raise SystemExit(1)


@cli.command("rename")
@plan_options
@click.option(
    "-y",
    "--yes",
    is_flag=True,
    default=False,
    help="Apply renames without asking for confirmation.",
)
def rename(yes: bool, **kwargs) -> None:
    """Rename the files in DIRECTORY to a numbered naming template.

    A preview is shown first; renaming only starts when the preview has no conflicts.
    Individual failures do not stop the batch.

    Examples:

        batchrename rename ./photos --prefix photo --digits 3 --yes
    """
    files, template, plan = _build_plan(**kwargs)

    template_error = template.validation_error()
    if template_error is not None:
        console.print(f"[bold red]Error:[/bold red] {escape(template_error)}")
        raise SystemExit(1)

    if not files:
        console.print("[yellow]No files matched the selection.[/yellow]")
        return

    console.print(
        f"Renaming [bold cyan]{len(files)}[/bold cyan] file(s) with template "
        f"[bold magenta]{escape(str(template))}[/bold magenta]"
    )
    _print_plan(plan)
    console.print()

    if not plan.summary.can_proceed:
        console.print("[bold red]Resolve the conflicts above before renaming.[/bold red]")
        raise SystemExit(1)

    if not plan.executable_entries:
        console.print("[yellow]Nothing to rename.[/yellow]")
        return

    if not yes and not click.confirm("Apply these renames?", default=False):
        console.print("[yellow]Aborted. No files were renamed.[/yellow]")
        return

    executor = BatchExecutor(renamer=LocalRenameExecutor())
    events = executor.execute(plan.entries, template=template)
    problems: list[RenameProgress] = []

    with tqdm(total=len(plan.executable_entries), desc="Renaming files...", unit="file") as progress_bar:
        try:
            for event in events:
                if isinstance(event, BatchRun):
                    continue
                if event.status.is_terminal:
                    progress_bar.update(1)
                if event.status in (RenameStatus.FAILED, RenameStatus.SKIPPED):
                    problems.append(event)
        except KeyboardInterrupt:
            events.close()
            console.print("[yellow]Cancelled. Files already renamed keep their new names.[/yellow]")

    run = executor.run
    for event in problems:
        style = "red" if event.status is RenameStatus.FAILED else "yellow"
        console.print(
            f"  [{style}]{event.status.value}[/{style}] {escape(event.file.name)} -> {escape(event.target_name)}: "
            f"{escape(event.message)}"
        )

    console.print()
    console.print("[bold]Rename Summary:[/bold]")
    console.print(f"  Succeeded: [green]{run.succeeded_count}[/green]")
    console.print(f"  Failed: [red]{run.failed_count}[/red]")
    console.print(f"  Skipped: [yellow]{run.skipped_count}[/yellow]")
    if run.cancelled:
        console.print(f"  Not processed: [dim]{run.total - run.processed_count}[/dim]")

    if run.failed_count:
        raise SystemExit(1)

    console.print("[bold green]All done.[/bold green]")


@cli.command("check")
@click.argument("names", nargs=-1, required=True)
def check(names: tuple[str, ...]) -> None:
    """Check whether NAMES are legal filenames."""
    validator = NameValidator()
    all_valid = True

    for name in names:
        result = validator.validate(name)
        if result.is_valid:
            console.print(f"[green]valid[/green]    {escape(name)}")
        else:
            all_valid = False
            console.print(f"[red]invalid[/red]  {escape(name)}: {escape(result.reason or '')}")

    if not all_valid:
        raise SystemExit(1)


@cli.command("sanitize")
@click.argument("names", nargs=-1, required=True)
@click.option(
    "--replacement",
    type=str,
    default=DEFAULT_REPLACEMENT,
    help="Character substituted for illegal characters.",
)
def sanitize(names: tuple[str, ...], replacement: str) -> None:
    """Print a legal filename for each of NAMES."""
    resolver = ConflictResolver()
    try:
        sanitized = [resolver.sanitize(name, replacement=replacement) for name in names]
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise SystemExit(1) from e

    for name in sanitized:
        click.echo(name)
