"""Fretboard Voicing Engine — Streamlit UI.

Minimal interactive application:
    1. Type a chord name or a progression ("Am, F, C, G")
    2. Run the voicing optimizer
    3. View the chosen voicings and step through them
    4. Download the arrangement JSON and/or a strummed MIDI file

Constraints:
    - No plotting libraries
    - No in-browser audio playback
    - Simple, readable code
"""

from __future__ import annotations

import sys
import tempfile
from pathlib import Path

import pandas as pd
import streamlit as st

# Ensure the project root is importable
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from src.config import engine_defaults  # noqa: E402
from src.chord_engine.arrange import arrangement_to_json_bytes  # noqa: E402
from src.chord_engine.midi_export import export_midi  # noqa: E402
from src.chord_engine.search import handle_search  # noqa: E402
from src.chord_engine.session import ProgressionSession  # noqa: E402

# ── Page config ───────────────────────────────────────────────
st.set_page_config(
    page_title="Fretboard Voicing Engine",
    page_icon="🎸",
    layout="wide",
)

st.title("🎸 Fretboard Voicing Engine")
st.markdown(
    "Enter a chord or a progression, run the dynamic-programming optimizer, "
    "and download the voicings that keep hand movement to a minimum."
)
st.divider()

defaults = engine_defaults()

# ── Inputs ────────────────────────────────────────────────────
query = st.text_input("Chord, progression or song", placeholder="Am, F, C, G")
col_pref, col_range, col_max = st.columns(3)
preferred_fret = col_pref.slider("Preferred fret", 0, 15, defaults["preferred_fret"])
fret_range = col_range.slider("Fret range", 1, 12, defaults["fret_range"])
max_fret = col_max.slider("Max fret", 5, 22, defaults["max_fret"])

if query:
    outcome = handle_search(query)

    if outcome.kind == "songs":
        st.subheader("Songs")
        for song in outcome.result:
            st.markdown(f"**{song.title}** — {song.artist} ({song.key}): `{', '.join(song.chords)}`")
        chords = list(outcome.result[0].chords)
    elif outcome.kind == "progression":
        chords = outcome.result
    elif outcome.kind == "chord":
        chords = [outcome.result["name"]]
        st.info(f"Notes: {' '.join(outcome.result['notes'])}")
    else:
        chords = []
        st.warning(f"No chords or songs found for **{query}**")

    if chords:
        with st.spinner("Running DP optimizer …"):
            try:
                session = ProgressionSession.load(
                    chords,
                    preferred_fret=preferred_fret,
                    fret_range=fret_range,
                    max_fret=max_fret,
                )
            except ValueError as exc:
                st.error(str(exc))
                st.stop()

        # ── Summary stats ─────────────────────────────────────
        st.subheader("Summary")
        c1, c2, c3 = st.columns(3)
        c1.metric("Chords", len(session))
        c2.metric("Shape changes", sum(
            1 for a, b in zip(session.voicings, session.voicings[1:])
            if a.shape_family != b.shape_family
        ))
        c3.metric("Highest fret", max(p.fret for v in session.voicings for p in v.positions))

        # ── Voicing table ─────────────────────────────────────
        st.subheader("Voicings")
        arrangement = [v.to_dict() for v in session.voicings]
        df = pd.DataFrame(
            [
                {
                    "Chord": v.chord_name,
                    "Shape": f"{v.shape_family}-shape",
                    "Base fret": v.base_fret,
                    "Span": v.fret_span,
                    "Avg fret": round(v.avg_fret, 2),
                    "Frets (6→1)": " ".join(f"{p.string}:{p.fret}" for p in v.positions),
                }
                for v in session.voicings
            ]
        )
        st.dataframe(df, use_container_width=True)

        # ── Step through ──────────────────────────────────────
        index = st.number_input("Show chord #", 1, len(session), 1) - 1
        current = session.go_to(int(index))
        if current is not None:
            st.code(
                "\n".join(
                    f"string {p.string}: fret {p.fret}{'  (root)' if p.is_root else ''}"
                    for p in current.positions
                ),
                language="text",
            )

        # ── Downloads ─────────────────────────────────────────
        st.subheader("Downloads")
        st.download_button(
            label="⬇  Download voicings.json",
            data=arrangement_to_json_bytes(arrangement),
            file_name="voicings.json",
            mime="application/json",
        )
        with tempfile.TemporaryDirectory() as out_dir:
            midi_path = export_midi(session.voicings, Path(out_dir) / "progression.mid")
            st.download_button(
                label="⬇  Download strummed MIDI",
                data=midi_path.read_bytes(),
                file_name="progression.mid",
                mime="audio/midi",
            )
