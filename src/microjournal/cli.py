"""microjournal CLI - guided check-ins, history, trends and export."""

import json
import logging
import sys
from datetime import date
from pathlib import Path

import click

from .config import load_config
from .core.entries import Entry, FormSession
from .core.errors import ParseError
from .core.questions import QuestionDef, QuestionKind
from .core.series import METRICS
from .workflows import Journal


def _journal(ctx: click.Context) -> Journal:
    """Build the journal lazily so every command shares one instance."""
    if ctx.obj.get("journal") is None:
        try:
            ctx.obj["journal"] = Journal.from_config(ctx.obj["config"])
        except (ParseError, OSError) as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
    return ctx.obj["journal"]


@click.group()
@click.version_option()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, debug: bool):
    """microjournal - private, on-device microdosing journal."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if debug else logging.WARNING,
    )
    ctx.ensure_object(dict)
    if "config" not in ctx.obj:
        ctx.obj["config"] = load_config()
    ctx.obj.setdefault("journal", None)


# ============== Form rendering ==============


def _coerce_number(raw: str):
    """Numeric answer, or the raw text if it doesn't parse. Empty stays empty."""
    raw = raw.strip()
    if not raw:
        return ""
    try:
        number = float(raw)
    except ValueError:
        return raw
    return int(number) if number.is_integer() else number


def _ask_select(q: QuestionDef, current) -> str:
    options = list(q.options or [])
    for i, opt in enumerate(options, start=1):
        click.echo(f"  {i}. {opt}")
    default = options.index(current) + 1 if current in options else 0
    choice = click.prompt(
        f"{q.label} (0 to skip)",
        type=click.IntRange(0, len(options)),
        default=default,
    )
    return options[choice - 1] if choice else ""


def _ask_range(q: QuestionDef, current):
    low = q.min if q.min is not None else 1
    high = q.max if q.max is not None else 10
    if all(isinstance(v, int) for v in (low, high)):
        kind = click.IntRange(low, high)
    else:
        kind = click.FloatRange(low, high)
    return click.prompt(f"{q.label} [{low}-{high}]", type=kind, default=current)


def ask(q: QuestionDef, current):
    """Prompt for one question using the widget for its kind."""
    match q.kind:
        case QuestionKind.TEXT | QuestionKind.DATE | QuestionKind.TIME:
            return click.prompt(q.label, default=current or "", show_default=bool(current))
        case QuestionKind.TEXTAREA:
            return click.prompt(q.label, default=current or "", show_default=False)
        case QuestionKind.NUMBER:
            raw = click.prompt(q.label, default=str(current), show_default=current != "")
            return _coerce_number(raw)
        case QuestionKind.SELECT:
            return _ask_select(q, current)
        case QuestionKind.RANGE:
            return _ask_range(q, current)


def fill_session(session: FormSession) -> None:
    """Walk the schema in display order and record each answer."""
    for q in session.schema:
        session.set(q.key, ask(q, session.get(q.key)))


# ============== Commands ==============


@main.command()
@click.pass_context
def new(ctx):
    """Guided check-in: answer the questions and save an entry."""
    journal = _journal(ctx)
    session = journal.new_session()

    click.echo(f"New entry for {date.today().isoformat()}\n")
    fill_session(session)

    try:
        entry = journal.save_entry(session)
    except OSError as e:
        click.echo(f"Error: could not save entry: {e}", err=True)
        sys.exit(1)
    click.echo(f"\n✓ Saved entry {entry.id}")


def _truncate(value, width: int) -> str:
    text = "" if value is None else str(value).replace("\n", " ")
    return text if len(text) <= width else text[: width - 1] + "…"


HISTORY_COLUMNS = [
    ("Date", None, 10),
    ("Protocol", "protocol", 12),
    ("Day", "dayType", 11),
    ("Dose", "doseMg", 5),
    ("Mood", "mood", 4),
    ("Anx", "anxiety", 4),
    ("Foc", "focus", 4),
    ("Ener", "energy", 4),
    ("Notes", "notes", 32),
]


def _history_row(entry: Entry) -> str:
    cells = []
    for _, key, width in HISTORY_COLUMNS:
        value = entry.display_date if key is None else entry.get(key)
        cells.append(f"{_truncate(value, width):{width}}")
    return "  ".join(cells).rstrip()


@main.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def list_entries(ctx, as_json: bool):
    """Show saved entries, newest first."""
    entries = _journal(ctx).entries.load_all()

    if as_json:
        click.echo(json.dumps([e.to_record() for e in entries], indent=2, ensure_ascii=False))
        return

    if not entries:
        click.echo("Nothing here yet. Your saved entries will appear here.")
        return

    click.echo("  ".join(f"{title:{width}}" for title, _, width in HISTORY_COLUMNS).rstrip())
    for entry in entries:
        click.echo(f"{_history_row(entry)}  [{entry.id}]")


@main.command()
@click.argument("entry_id")
@click.option("--yes", "-y", is_flag=True, help="Delete without asking")
@click.pass_context
def delete(ctx, entry_id: str, yes: bool):
    """Delete an entry by id."""
    journal = _journal(ctx)

    def confirm(entry: Entry) -> bool:
        return yes or click.confirm(f"Delete entry from {entry.display_date}?")

    if journal.entries.get(entry_id) is None:
        click.echo(f"No entry with id {entry_id}.", err=True)
        sys.exit(1)

    try:
        deleted = journal.delete_entry(entry_id, confirm)
    except OSError as e:
        click.echo(f"Error: could not delete entry: {e}", err=True)
        sys.exit(1)
    click.echo("Deleted." if deleted else "Kept.")


@main.command()
@click.option("--window", "-w", type=int, default=None, help="Number of entries to chart")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def trends(ctx, window: int | None, as_json: bool):
    """Show mood, anxiety, focus and energy over recent entries."""
    window = window if window is not None else ctx.obj["config"].chart_window
    points = _journal(ctx).trends(window)

    if as_json:
        click.echo(
            json.dumps(
                [{"date": p.date, **p.metrics} for p in points],
                indent=2,
            )
        )
        return

    if not points:
        click.echo("No data yet. Add entries to see your trends.")
        return

    click.echo(f"Trends (last {window} entries)\n")
    names = list(METRICS)
    click.echo(f"{'Date':12}" + "".join(f"{n:>9}" for n in names))
    for point in points:
        click.echo(f"{point.date:12}" + "".join(f"{point.metrics[n]:>9}" for n in names))


@main.command()
@click.option("--format", "fmt", type=click.Choice(["csv", "json"]), default="csv", help="Export format")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Write to a file instead of stdout")
@click.pass_context
def export(ctx, fmt: str, output: Path | None):
    """Export all entries as CSV or JSON."""
    journal = _journal(ctx)
    data = journal.export(fmt)

    if output is None:
        click.echo(data)
        return

    output.write_text(data, encoding="utf-8")
    click.echo(f"✓ Exported {len(journal.entries)} entries to {output}")


@main.command("import")
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--yes", "-y", is_flag=True, help="Replace existing entries without asking")
@click.pass_context
def import_entries(ctx, source: Path, yes: bool):
    """Replace all entries with a JSON export."""
    journal = _journal(ctx)

    if len(journal.entries) and not yes:
        if not click.confirm(f"Replace {len(journal.entries)} existing entries?"):
            return

    try:
        imported = journal.import_json(source.read_text(encoding="utf-8"))
    except ParseError as e:
        click.echo(f"Error: Invalid import file: {e}", err=True)
        sys.exit(1)
    except OSError as e:
        click.echo(f"Error: could not import entries: {e}", err=True)
        sys.exit(1)
    click.echo(f"✓ Imported {len(imported)} entries")


@main.group(invoke_without_command=True)
@click.pass_context
def questions(ctx):
    """Show or customize the check-in questions."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(questions_show)


def _schema_json(defs: list[QuestionDef]) -> str:
    return json.dumps([q.to_dict() for q in defs], indent=2, ensure_ascii=False)


@questions.command("show")
@click.pass_context
def questions_show(ctx):
    """Print the active questions as JSON."""
    click.echo(_schema_json(_journal(ctx).schema.load()))


@questions.command("edit")
@click.pass_context
def questions_edit(ctx):
    """Edit the questions JSON in $EDITOR. Keep key values unique."""
    journal = _journal(ctx)
    edited = click.edit(_schema_json(journal.schema.load()), extension=".json")
    if edited is None:
        click.echo("No changes.")
        return

    try:
        saved = journal.schema.save_json(edited)
    except ParseError as e:
        click.echo(f"Error: Invalid JSON for questions: {e}", err=True)
        sys.exit(1)

    keys = [q.key for q in saved]
    duplicates = sorted({k for k in keys if keys.count(k) > 1})
    if duplicates:
        click.echo(f"Warning: duplicate keys {', '.join(duplicates)}", err=True)
    click.echo(f"✓ Saved {len(saved)} questions")


@questions.command("reset")
@click.option("--yes", "-y", is_flag=True, help="Reset without asking")
@click.pass_context
def questions_reset(ctx, yes: bool):
    """Restore the built-in questions."""
    if not yes and not click.confirm("Reset questions to defaults?"):
        return
    saved = _journal(ctx).schema.reset()
    click.echo(f"✓ Restored {len(saved)} default questions")


@main.command()
@click.pass_context
def status(ctx):
    """Show today's date, entry count and where data lives."""
    config = ctx.obj["config"]
    journal = _journal(ctx)

    click.echo(f"Today:         {date.today().isoformat()}")
    click.echo(f"Total entries: {len(journal.entries)}")
    click.echo(f"Storage:       {config.resolved_data_dir}")
    click.echo(f"Mirror:        {config.mirror_url or 'off'}")


if __name__ == "__main__":
    main()
