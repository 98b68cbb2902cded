"""Fretboard Voicing Engine — command-line entry point.

Commands:
    chord        parse a chord name and show one fingering
    voicings     list every CAGED voicing of a chord
    progression  optimize a progression for minimal hand movement
    search       route a query to a progression, chord, or song

The Streamlit app lives in ``app/streamlit_app.py``.
"""

from __future__ import annotations

from pathlib import Path

import click

from src.config import engine_defaults, setup_logging
from src.chord_engine.arrange import save_arrangement
from src.chord_engine.chord_parser import parse_chord_name
from src.chord_engine.cost_model import MovementCostModel
from src.chord_engine.notes import chord_notes
from src.chord_engine.progression_parser import parse_progression
from src.chord_engine.search import handle_search
from src.chord_engine.solver import optimize_progression, progression_cost
from src.chord_engine.voicings import Voicing, generate_all_voicings, resolve_chord_positions


def _format_positions(positions) -> str:
    return " ".join(
        f"{p.string}:{p.fret}{'*' if p.is_root else ''}" for p in positions
    )


def _voicing_row(voicing: Voicing) -> str:
    return (
        f"  {voicing.chord_name:<8} {voicing.shape_family}-shape  "
        f"base {voicing.base_fret:>2}  span {voicing.fret_span}  "
        f"avg {voicing.avg_fret:5.2f}  [{_format_positions(voicing.positions)}]"
    )


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """Fretboard Voicing Engine — chord names to guitar fingerings."""
    setup_logging(verbose)


@main.command()
@click.argument("name")
@click.option("--flats", is_flag=True, help="Spell accidentals as flats.")
def chord(name: str, flats: bool) -> None:
    """Parse NAME and show its notes and one fingering."""
    symbol = parse_chord_name(name)
    if symbol is None:
        raise click.ClickException(f"Could not parse chord: {name!r}")

    click.echo(f"Root    : {symbol.root}")
    click.echo(f"Quality : {symbol.quality.value}")
    if symbol.bass:
        click.echo(f"Bass    : {symbol.bass}")
    click.echo(f"Notes   : {' '.join(chord_notes(symbol.root, symbol.quality, use_flats=flats))}")
    click.echo(f"Shape   : {_format_positions(resolve_chord_positions(symbol))}")


@main.command()
@click.argument("name")
@click.option("--max-fret", type=click.IntRange(0, 24), default=None, help="Highest fret to use.")
def voicings(name: str, max_fret: int | None) -> None:
    """List every CAGED voicing of NAME, lowest position first."""
    if max_fret is None:
        max_fret = engine_defaults()["max_fret"]

    found = generate_all_voicings(name, max_fret=max_fret)
    if not found:
        raise click.ClickException(f"No voicings for {name!r}")

    click.echo(f"{len(found)} voicing(s) for {name}:")
    for voicing in found:
        click.echo(_voicing_row(voicing))


@main.command()
@click.argument("text")
@click.option("--preferred-fret", type=int, default=None, help="Hand position to start from.")
@click.option("--fret-range", type=int, default=None, help="Search window around the preferred fret.")
@click.option("--max-fret", type=click.IntRange(0, 24), default=None, help="Highest fret to use.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Cost-config YAML (defaults to configs/movement_costs.yaml).",
)
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Save <name>_voicings.json (and MIDI) here.",
)
@click.option("--name", default="progression", show_default=True, help="Base name for output files.")
@click.option("--midi", is_flag=True, help="Also export a strummed MIDI file (needs --output-dir).")
def progression(
    text: str,
    preferred_fret: int | None,
    fret_range: int | None,
    max_fret: int | None,
    config_path: Path | None,
    output_dir: Path | None,
    name: str,
    midi: bool,
) -> None:
    """Optimize the voicings of a progression such as "Am, F, C, G"."""
    try:
        defaults = engine_defaults(config_path)
        preferred_fret = defaults["preferred_fret"] if preferred_fret is None else preferred_fret
        fret_range = defaults["fret_range"] if fret_range is None else fret_range
        max_fret = defaults["max_fret"] if max_fret is None else max_fret

        chords = parse_progression(text)
        if not chords:
            raise click.ClickException(f"No valid chords in {text!r}")

        cost_model = MovementCostModel(config_path)
        path = optimize_progression(
            chords,
            preferred_fret=preferred_fret,
            fret_range=fret_range,
            max_fret=max_fret,
            cost_model=cost_model,
        )
        if output_dir is not None:
            save_arrangement(path, output_dir=output_dir, name=name, export_midi_file=midi)
    except (FileNotFoundError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(f"Progression: {' - '.join(chords)}")
    for voicing in path:
        click.echo(_voicing_row(voicing))
    click.echo(f"Total cost: {progression_cost(path, preferred_fret, cost_model):.2f}")

    if output_dir is not None:
        click.echo(f"Saved to: {output_dir}")


@main.command()
@click.argument("query")
def search(query: str) -> None:
    """Look QUERY up as a progression, a chord, or a song."""
    outcome = handle_search(query)

    if outcome.kind == "progression":
        click.echo(f"Progression detected: {', '.join(outcome.result)}")
    elif outcome.kind == "chord":
        chord_info = outcome.result
        click.echo(f"Chord {chord_info['name']}: {' '.join(chord_info['notes'])}")
    elif outcome.kind == "songs":
        for song in outcome.result:
            click.echo(f"{song.title} — {song.artist} ({song.key}): {', '.join(song.chords)}")
    else:
        click.echo(f"No results for {query!r}")


if __name__ == "__main__":
    main()
