"""
Floor plan geometry helpers
"""

import math
from typing import List, Tuple

from planner.core.config import settings

def seat_radius(table_type: str) -> int:
    """Distance from a table's centre to its seats"""
    if table_type == "rectangular":
        return settings.RECT_SEAT_RADIUS
    return settings.ROUND_SEAT_RADIUS

def table_size(table_type: str) -> Tuple[int, int]:
    if table_type == "rectangular":
        return settings.RECT_TABLE_WIDTH, settings.RECT_TABLE_HEIGHT
    return settings.ROUND_TABLE_SIZE, settings.ROUND_TABLE_SIZE

def seat_ring(center_x: int, center_y: int, seat_count: int, radius: int) -> List[Tuple[int, int]]:
    """Positions of ``seat_count`` seats spaced evenly around a centre.

    The first seat sits straight above the centre (-90 degrees) and the rest
    follow clockwise in screen coordinates.
    """
    if seat_count <= 0:
        return []

    step = 2 * math.pi / seat_count
    positions = []
    for i in range(seat_count):
        angle = i * step - math.pi / 2
        positions.append((
            int(round(center_x + math.cos(angle) * radius)),
            int(round(center_y + math.sin(angle) * radius)),
        ))
    return positions

def clamp_position(x: int, y: int, width: int, height: int) -> Tuple[int, int]:
    """Keep an element's centre inside the canvas, away from the padding"""
    pad = settings.CANVAS_PADDING
    min_x = pad + width / 2
    max_x = settings.CANVAS_WIDTH - pad - width / 2
    min_y = pad + height / 2
    max_y = settings.CANVAS_HEIGHT - pad - height / 2

    clamped_x = min(max(x, min_x), max_x)
    clamped_y = min(max(y, min_y), max_y)
    return int(round(clamped_x)), int(round(clamped_y))
