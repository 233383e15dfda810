"""
Grad School Survival - Turn-based resource management engine

A deterministic, injectable-randomness engine for a game about surviving
graduate school. The engine provides:
- Bounded stat vectors and clamping
- Fixed action and random event catalogs
- Single-draw cumulative event resolution
- Turn processing with calendar and win/loss evaluation
- Session storage, an HTTP API and a command-line front end
"""

__version__ = "0.1.0"
