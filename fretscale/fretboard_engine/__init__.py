"""Fretboard Engine — enumerate and rank scale fingerings.

Sub-package containing:
    instrument      – pitches, positions, fixed instrument and step patterns
    position_table  – fretboard layout and pitch → positions index
    scale           – scale generation from a root and a step pattern
    enumerator      – cross-product of per-note positions
    scorer          – consistency filter and compactness ranking
    render          – PNG fretboard diagrams
    report          – JSON / CSV / MIDI artifacts
    annotate        – orchestrates the pipeline per scale request
"""
