from .normalize import points_from_arrays, points_from_frame, points_from_pairs, points_from_records

__all__ = [
    "points_from_arrays",
    "points_from_frame",
    "points_from_pairs",
    "points_from_records",
]
