"""Serializers for routing outputs."""

from __future__ import annotations

import csv
import io
import math

from ...schemas.routing import RouteResponse


def _coordinates_text(coordinates: list[float]) -> str:
    return " ".join(repr(float(value)) for value in coordinates)


def routing_response_to_text(response: RouteResponse) -> str:
    lines: list[str] = []
    if response.route is None:
        lines.append("No feasible route found.")
    else:
        lines.append("Result:")
        lines.extend(_coordinates_text(row) for row in response.route)
        lines.append("")
    length = response.length if response.length is not None else -1
    lines.append(f"Length = {length}")
    lines.append(f"Time: {response.elapsed_ms:.0f}ms")
    return "\n".join(lines) + "\n"


def routing_response_to_json(response: RouteResponse) -> dict:
    return response.model_dump()


def routing_response_to_csv(response: RouteResponse) -> str:
    buffer = io.StringIO()
    dimension = response.dimension or 0
    fieldnames = ["sequence"] + [f"x{axis}" for axis in range(dimension)] + ["distance_from_prev"]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    previous: list[float] | None = None
    for sequence, row in enumerate(response.route or [], start=1):
        step = 0.0 if previous is None else math.dist(previous, row)
        writer.writerow(
            {
                "sequence": sequence,
                **{f"x{axis}": value for axis, value in enumerate(row)},
                "distance_from_prev": step,
            }
        )
        previous = row
    return buffer.getvalue()
