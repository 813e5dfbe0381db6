"""
Wheel Topology — physical wheel neighbourhoods and partition lookups.

Neighbour sets are derived from the fixed European wheel order. Partition
ownership (sequence / square / sector) is served from reverse-lookup tables
built once from the static definitions in config.
"""

from config import (
    WHEEL_ORDER, NUMBER_TO_POSITION,
    SEQUENCES, SQUARES, SECTORS,
)


def build_owner_map(partition):
    """number → class id, for every number that belongs to some class."""
    owners = {}
    for class_id, numbers in partition.items():
        for n in numbers:
            owners[n] = class_id
    return owners


# Pre-compute membership for fast lookup
SEQUENCE_MAP = build_owner_map(SEQUENCES)
SQUARE_MAP = build_owner_map(SQUARES)
SECTOR_MAP = build_owner_map(SECTORS)

OWNER_MAPS = {
    'sequences': SEQUENCE_MAP,
    'squares': SQUARE_MAP,
    'sectors': SECTOR_MAP,
}

PARTITIONS = {
    'sequences': SEQUENCES,
    'squares': SQUARES,
    'sectors': SECTORS,
}


def get_neighbors(center, k):
    """Return the center plus k pockets on each side of it along the wheel.

    Returns an empty set when `center` is not a pocket on the wheel.
    """
    idx = NUMBER_TO_POSITION.get(center)
    if idx is None:
        return set()

    wheel_len = len(WHEEL_ORDER)
    neighbors = {center}
    for i in range(1, k + 1):
        neighbors.add(WHEEL_ORDER[(idx - i) % wheel_len])  # counter-clockwise
        neighbors.add(WHEEL_ORDER[(idx + i) % wheel_len])  # clockwise
    return neighbors


def get_centers_covering(target, k):
    """Pockets (in wheel order) whose ±k neighbourhood contains `target`."""
    return [c for c in WHEEL_ORDER if target in get_neighbors(c, k)]


def sequence_of(number):
    return SEQUENCE_MAP.get(number)


def square_of(number):
    return SQUARE_MAP.get(number)


def sector_of(number):
    return SECTOR_MAP.get(number)


def class_of(family, number):
    """Owning class of `number` within a partition family, or None."""
    return OWNER_MAPS[family].get(number)
