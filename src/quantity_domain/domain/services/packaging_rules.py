"""Pieces-per-box rules and catalog choices for tile products."""

from typing import Optional

AVAILABLE_SIZES = ["1×1", "1×1.5", "1×2", "2×2", "2×4", "16×16"]

TILE_TYPES: dict[str, list[str]] = {
    "Wall": [],
    "Floor": ["Matte", "Glossy", "High Glossy", "Rough"],
    "Parking": [],
    "Other": [],  # free-form, user supplies the details
}

SIZE_BY_TYPE: dict[str, object] = {
    "Wall": ["1×1.5", "1×2"],
    "Floor": {
        "Matte": ["2×2"],
        "Glossy": ["2×2", "2×4"],
        "High Glossy": ["2×2", "2×4"],
        "Rough": ["2×4", "1×1"],
    },
    "Parking": ["16×16"],
    "Other": list(AVAILABLE_SIZES),
}

HSN_NUMBERS = ["69072100", "69072200", "69072300"]

LOCATIONS = ["Ground Floor", "First Floor"]

# (type, sub_type, size) -> allowed pieces per box; the first entry is the default
_TYPED_OPTIONS: dict[tuple[str, Optional[str], str], list[int]] = {
    ("Wall", None, "1×1.5"): [6],
    ("Wall", None, "1×2"): [6, 5],
    ("Floor", "Matte", "2×2"): [4],
    ("Floor", "Glossy", "2×4"): [2],
    ("Floor", "Glossy", "2×2"): [4],
    ("Floor", "High Glossy", "2×4"): [2],
    ("Floor", "High Glossy", "2×2"): [4],
    ("Floor", "Rough", "2×4"): [2],
    ("Floor", "Rough", "1×1"): [9],
    ("Parking", None, "16×16"): [5],
}

# Size-only mapping for products created before types were recorded
_SIZE_OPTIONS: dict[str, list[int]] = {
    "1×1": [9],
    "1×1.5": [6],
    "1×2": [6, 5],
    "2×2": [4],
    "2×4": [2],
    "16×16": [5],
}


def _lookup(size: str, tile_type: Optional[str], sub_type: Optional[str]) -> list[int]:
    if tile_type:
        key_sub_type = sub_type if tile_type == "Floor" else None
        options = _TYPED_OPTIONS.get((tile_type, key_sub_type, size))
        if options:
            return options
    return _SIZE_OPTIONS.get(size, [])


def get_pieces_per_box(size: str, tile_type: Optional[str] = None, sub_type: Optional[str] = None) -> Optional[int]:
    """Default pieces per box for a tile, or None when the size is unknown."""
    options = _lookup(size, tile_type, sub_type)
    return options[0] if options else None


def get_pieces_per_box_options(
    size: str, tile_type: Optional[str] = None, sub_type: Optional[str] = None
) -> list[int]:
    """All pieces-per-box values a user may pick for a tile, in ascending order."""
    return sorted(_lookup(size, tile_type, sub_type))


def get_available_sizes(tile_type: str, sub_type: Optional[str] = None) -> list[str]:
    sizes = SIZE_BY_TYPE.get(tile_type)
    if isinstance(sizes, dict):
        return list(sizes.get(sub_type, [])) if sub_type else []
    return list(sizes or [])
