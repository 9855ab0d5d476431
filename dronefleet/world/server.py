"""Fixed service points of the simulated plane."""

from __future__ import annotations

from dataclasses import dataclass, field

from dronefleet.geometry import Vector2D

from .color import Color


@dataclass(eq=False)
class Server:
    """A named, positioned and coloured service point.

    Name, position and colour do not change once the server is loaded. The
    neighbour list records adjacent servers for display purposes; no
    simulation algorithm reads it.

    Attributes:
        name (str): Unique name within a scenario, used by drones as a target.
        position (Vector2D): Location on the canvas plane.
        color (Color): RGB colour of the server's coverage region.
        neighbors (list[Server]): Adjacent servers, emptied by ``clear``.
    """

    name: str
    position: Vector2D
    color: Color
    neighbors: list[Server] = field(default_factory=list, repr=False)

    def add_neighbor(self, neighbor: Server) -> None:
        self.neighbors.append(neighbor)

    def clear(self) -> None:
        """Forget all neighbours. Name, position and colour are left untouched."""
        self.neighbors.clear()
