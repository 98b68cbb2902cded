"""Chord Engine — chord-name parsing, voicing generation and progression optimization.

Sub-package containing:
    notes               – pitch classes, spelling, fretboard note lookup
    templates           – interval sets and CAGED shape templates
    chord_parser        – chord name → ChordSymbol (ordered quality rules)
    voicings            – single resolver and exhaustive CAGED generator
    progression_parser  – free text → chord tokens
    cost_model          – configurable movement cost between voicings
    solver              – DP optimizer over a progression
    session             – caller-owned progression navigation state
    midi_export         – strummed MIDI rendering of voicings
    search              – query routing and song lookup
    arrange             – orchestrates the pipeline and exports results
"""
