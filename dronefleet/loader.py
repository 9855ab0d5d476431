"""Scenario files: servers and drones to load into a ``FleetSimulator``.

A scenario is a JSON object with two arrays::

    {
        "servers": [{"name": "north", "position": "120,80", "color": "red"}],
        "drones": [{"name": "D1", "position": "50,50", "color": "#3366ff", "server": "north"}]
    }

Positions are ``"x,y"`` strings. Colours are anything matplotlib understands
(names or ``#rrggbb``). A drone's colour is validated but not kept; drones are
drawn in black.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
import json
from pathlib import Path
from typing import Any

from dronefleet.console import CONSOLE
from dronefleet.geometry import Vector2D
from dronefleet.vehicles import Drone
from dronefleet.world import Color, Server, parse_color


class ScenarioError(ValueError):
    """Raised when a scenario file or document is malformed."""


@dataclass
class Scenario:
    """Servers and drones ready to be handed to ``FleetSimulator.load``."""

    servers: list[Server] = field(default_factory=list)
    drones: list[Drone] = field(default_factory=list)


def _require(entry: Mapping[str, Any], key: str, where: str) -> str:
    value = entry.get(key)
    if not isinstance(value, str):
        msg = f"{where}: missing or non-string field '{key}'"
        raise ScenarioError(msg)
    return value


def _position(text: str, where: str) -> Vector2D:
    try:
        return Vector2D.from_str(text)
    except ValueError as e:
        msg = f"{where}: invalid position '{text}'"
        raise ScenarioError(msg) from e


def _color(text: str, where: str) -> Color:
    try:
        return parse_color(text)
    except ValueError as e:
        msg = f"{where}: invalid color '{text}'"
        raise ScenarioError(msg) from e


def _entries(data: Mapping[str, Any], key: str) -> list[Mapping[str, Any]]:
    entries = data.get(key, [])
    if not isinstance(entries, list) or not all(isinstance(e, Mapping) for e in entries):
        msg = f"'{key}' must be a list of objects"
        raise ScenarioError(msg)
    return entries


def parse_scenario(data: Any) -> Scenario:
    """Build servers and drones from a decoded scenario document.

    Server names and drone names must each be unique. A drone may target a
    server that does not exist; it then keeps its default goal.

    Raises:
        ScenarioError: If the document is not an object, a field is missing or
            malformed, or a name is duplicated.
    """
    if not isinstance(data, Mapping):
        msg = "Scenario must be a JSON object"
        raise ScenarioError(msg)

    scenario = Scenario()
    server_names: set[str] = set()
    for i, entry in enumerate(_entries(data, "servers")):
        where = f"servers[{i}]"
        name = _require(entry, "name", where)
        if name in server_names:
            msg = f"{where}: duplicate server name '{name}'"
            raise ScenarioError(msg)
        server_names.add(name)
        position_text = _require(entry, "position", where)
        color_text = _require(entry, "color", where)
        scenario.servers.append(
            Server(name, _position(position_text, where), _color(color_text, where))
        )
        CONSOLE.log(f"Loaded server: {name} at position: {position_text} with color: {color_text}")

    drone_names: set[str] = set()
    for i, entry in enumerate(_entries(data, "drones")):
        where = f"drones[{i}]"
        name = _require(entry, "name", where)
        if name in drone_names:
            msg = f"{where}: duplicate drone name '{name}'"
            raise ScenarioError(msg)
        drone_names.add(name)
        position = _position(_require(entry, "position", where), where)
        if "color" in entry:
            _color(_require(entry, "color", where), where)
        server = entry.get("server", "")
        if not isinstance(server, str):
            msg = f"{where}: non-string field 'server'"
            raise ScenarioError(msg)

        drone = Drone(name)
        drone.set_initial_position(position)
        drone.set_target_server(server)
        scenario.drones.append(drone)
        CONSOLE.log(f"Loaded drone: {name} at position: {position} targeting: {server or '-'}")

    return scenario


def load_scenario(path: str | Path) -> Scenario:
    """Read and parse the scenario file at ``path``.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ScenarioError: If the file is not valid JSON or not a valid scenario.
    """
    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            msg = f"{path}: invalid JSON ({e.msg} at line {e.lineno})"
            raise ScenarioError(msg) from e
    return parse_scenario(data)
