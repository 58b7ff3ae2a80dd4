"""Gallery Layout — room sizing and wall placement for the virtual exhibition.

Invariants:
    - Every artwork id appears exactly once in the arrangement, in input order
    - Artworks on one wall never overlap: consecutive centres differ by
      (w_a + w_b) / 2 + MIN_GAP
    - Room is never smaller than MIN_ROOM_WIDTH x MIN_ROOM_DEPTH
    - Missing or zero aspect ratios are treated as 1.0 (square)

Design Decisions:
    - Pure dataclasses instead of a 3D math library: positions are plain (x, y, z)
      and a yaw rotation; the renderer owns quaternions/Euler conversion
    - Walls filled greedily north -> east -> south -> west; leftovers go to centre
      pedestals so the function is total for any artwork count
"""

import math
from dataclasses import dataclass, asdict

MAX_ARTWORK_SIZE = 2.0
MIN_GAP = 0.5
ART_CENTER_HEIGHT = 1.8
WALL_OFFSET = 0.35
ROOM_HEIGHT = 4.0
MIN_ROOM_WIDTH = 8
MIN_ROOM_DEPTH = 8
FALLBACK_WIDTH_PER_ARTWORK = 2.5
PEDESTAL_RADIUS = 2.0
PEDESTAL_HEIGHT = 1.0
PEDESTAL_SLOTS = 3


@dataclass(frozen=True)
class GalleryDimensions:
    width: float
    height: float
    depth: float


@dataclass(frozen=True)
class ArtworkPlacement:
    id: str
    position: tuple[float, float, float]
    rotation_y: float
    wall: str  # north | east | south | west | center

    def to_dict(self) -> dict:
        return asdict(self)


def artwork_dimensions(aspect_ratio: float | None) -> tuple[float, float]:
    """(width, height) of an artwork scaled so its longest side is MAX_ARTWORK_SIZE."""
    ratio = aspect_ratio or 1.0
    if ratio >= 1:
        return MAX_ARTWORK_SIZE, MAX_ARTWORK_SIZE / ratio
    return MAX_ARTWORK_SIZE * ratio, MAX_ARTWORK_SIZE


def calculate_room_dimensions(
    artwork_count: int, aspect_ratios: list[float] | None = None,
) -> GalleryDimensions:
    """Room big enough to hang every artwork across the four walls."""
    if aspect_ratios:
        total_wall_space = sum(
            artwork_dimensions(r)[0] + MIN_GAP for r in aspect_ratios
        )
    else:
        total_wall_space = artwork_count * FALLBACK_WIDTH_PER_ARTWORK

    per_wall = total_wall_space / 4
    return GalleryDimensions(
        width=max(MIN_ROOM_WIDTH, math.ceil(per_wall) + 2),
        height=ROOM_HEIGHT,
        depth=max(MIN_ROOM_DEPTH, math.ceil(per_wall) + 2),
    )


def auto_arrange_artworks(
    artwork_ids: list[str],
    dimensions: GalleryDimensions,
    aspect_ratios: list[float] | None = None,
) -> list[ArtworkPlacement]:
    """Place artworks on walls (centred runs), spilling onto centre pedestals."""
    ratios = aspect_ratios or []
    widths = [
        artwork_dimensions(ratios[i] if i < len(ratios) else None)[0]
        for i in range(len(artwork_ids))
    ]
    half_w = dimensions.width / 2
    half_d = dimensions.depth / 2

    # (wall, usable length, yaw, offset -> (x, z))
    walls = (
        ("north", dimensions.width - 1, 0.0,
         lambda o: (o, -half_d + WALL_OFFSET)),
        ("east", dimensions.depth - 1, -math.pi / 2,
         lambda o: (half_w - WALL_OFFSET, o)),
        ("south", dimensions.width - 1, math.pi,
         lambda o: (-o, half_d - WALL_OFFSET)),
        ("west", dimensions.depth - 1, math.pi / 2,
         lambda o: (-half_w + WALL_OFFSET, -o)),
    )

    placements: list[ArtworkPlacement] = []
    next_index = 0
    for wall, available, yaw, to_xz in walls:
        run, used = _fill_wall(widths, next_index, available)
        next_index += len(run)
        offset = -used / 2
        for idx in run:
            x, z = to_xz(offset + widths[idx] / 2)
            placements.append(ArtworkPlacement(
                id=artwork_ids[idx],
                position=(x, ART_CENTER_HEIGHT, z),
                rotation_y=yaw,
                wall=wall,
            ))
            offset += widths[idx] + MIN_GAP

    for idx in range(next_index, len(artwork_ids)):
        angle = idx * 2 * math.pi / PEDESTAL_SLOTS
        placements.append(ArtworkPlacement(
            id=artwork_ids[idx],
            position=(
                math.cos(angle) * PEDESTAL_RADIUS,
                PEDESTAL_HEIGHT,
                math.sin(angle) * PEDESTAL_RADIUS,
            ),
            rotation_y=-angle,
            wall="center",
        ))
    return placements


def _fill_wall(
    widths: list[float], start: int, available: float,
) -> tuple[list[int], float]:
    """Greedy run of artwork indices from `start` that fits in `available`."""
    run: list[int] = []
    used = 0.0
    idx = start
    while idx < len(widths):
        needed = widths[idx] + (MIN_GAP if run else 0.0)
        if used + needed > available:
            break
        run.append(idx)
        used += needed
        idx += 1
    return run, used


def build_gallery_layout(
    artwork_ids: list[str], aspect_ratios: list[float] | None = None,
) -> dict:
    """Room dimensions + placements, serialisable for the API."""
    dims = calculate_room_dimensions(len(artwork_ids), aspect_ratios)
    placements = auto_arrange_artworks(artwork_ids, dims, aspect_ratios)
    return {
        "dimensions": asdict(dims),
        "placements": [p.to_dict() for p in placements],
    }
