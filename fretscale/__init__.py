"""fretscale — scale fingering search for fretted instruments.

Sub-packages:
    fretboard_engine – fretboard model, enumeration, ranking and rendering
"""

__version__ = "0.1.0"
