"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain layer (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the API layer or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass

# Type aliases to make GameModel easier to read
GlyphRow = str
CoordinatePair = tuple[int, int]


@dataclass
class GameModel:
    """Transport-safe representation of a game used between API, Service, and Game layers."""

    rows: list[GlyphRow]
    turn: str
    status: str
    moves: list[tuple[CoordinatePair, CoordinatePair]]
    material: dict[str, int]
