"""Nearest-server classification of the plane (brute-force Voronoi).

The coverage map is not built from geometric cells. Every query point is
compared against every server and assigned to the closest one, which makes a
full map cost ``O(samples * servers)``. The returned colour carries a lightness
shade (lighter close to the server, darker further away) that is purely
visual and never changes which server wins.

Example:
    >>> from dronefleet.geometry import Vector2D
    >>> a = Server("A", Vector2D(0, 0), (255, 0, 0))
    >>> b = Server("B", Vector2D(100, 0), (0, 0, 255))
    >>> voronoi = VoronoiClassifier([a, b])
    >>> voronoi.classify(Vector2D(90, 0))[0].name
    'B'
    >>> voronoi.classify(Vector2D(50, 0))[0].name  # tie goes to the first server
    'A'
"""

from collections.abc import Iterable, Sequence
import math

import numpy as np

from dronefleet.config import BACKGROUND_COLOR, SHADE_FAR, SHADE_NEAR, SHADE_RADIUS
from dronefleet.geometry import Vector2D

from .color import Color, adjust_lightness
from .server import Server


class VoronoiClassifier:
    """Owns the server list and answers nearest-server queries.

    Attributes:
        _servers (list[Server]): Servers in load order; the order decides ties.
    """

    _servers: list[Server]

    def __init__(self, servers: Iterable[Server] = ()):
        self._servers = list(servers)

    @property
    def servers(self) -> Sequence[Server]:
        """Servers in load order (read-only view)."""
        return tuple(self._servers)

    def set_servers(self, servers: Iterable[Server]) -> None:
        """Replace the whole server list. Must not be called during a tick."""
        self._servers = list(servers)

    def nearest(self, point: Vector2D) -> tuple[Server | None, float]:
        """Return the closest server and its distance to ``point``.

        Ties keep the server that appears first in the list. With no servers
        the result is ``(None, inf)``.
        """
        best: Server | None = None
        min_distance = math.inf
        for server in self._servers:
            distance = (server.position - point).length()
            if distance < min_distance:
                min_distance = distance
                best = server
        return best, min_distance

    def classify(self, point: Vector2D) -> tuple[Server | None, Color]:
        """Classify ``point`` to its nearest server and derive its shaded colour.

        The colour is the server colour with its lightness raised by
        ``SHADE_NEAR`` within ``SHADE_RADIUS`` of the server and shifted by
        ``SHADE_FAR`` beyond it. Without servers the background colour is
        returned with no server.

        Args:
            point (Vector2D): Query location on the canvas plane.

        Returns:
            tuple[Server | None, Color]: Winning server and display colour.
        """
        server, distance = self.nearest(point)
        if server is None:
            return None, BACKGROUND_COLOR
        delta = SHADE_NEAR if distance < SHADE_RADIUS else SHADE_FAR
        return server, adjust_lightness(server.color, delta)

    def find_by_name(self, name: str) -> Server | None:
        """Linear lookup of a server by name; None when absent."""
        for server in self._servers:
            if server.name == name:
                return server
        return None

    def clear(self) -> None:
        """Reset every server's neighbour list. Classification is unaffected."""
        for server in self._servers:
            server.clear()

    def coverage_map(self, width: int, height: int, shaded: bool = True) -> np.ndarray:
        """Render the coverage of a ``width`` x ``height`` canvas.

        Each integer pixel ``(x, y)`` is classified independently. With
        ``shaded=False`` pixels take the raw colour of their server, as the
        canvas background does; otherwise the shaded colour of ``classify``.

        Returns:
            np.ndarray: ``(height, width, 3)`` array of ``uint8`` RGB values.

        Raises:
            ValueError: If either dimension is not positive.
        """
        if width <= 0 or height <= 0:
            msg = f"Invalid coverage map size: {width}x{height}"
            raise ValueError(msg)

        image = np.empty((height, width, 3), dtype=np.uint8)
        for x in range(width):
            for y in range(height):
                point = Vector2D(float(x), float(y))
                if shaded:
                    _, color = self.classify(point)
                else:
                    server, _ = self.nearest(point)
                    color = server.color if server is not None else BACKGROUND_COLOR
                image[y, x] = color
        return image

    def __len__(self) -> int:
        return len(self._servers)
