"""Generic persistent zipper and whole-tree transforms."""

from .cursor import Zipper, zipper
from .ops import ELEMENT_OPS, ElementZipOps, ZipOps
from .transform import TransformStats, transform, transform_with_stats

__all__ = [
    "Zipper",
    "zipper",
    "ELEMENT_OPS",
    "ElementZipOps",
    "ZipOps",
    "TransformStats",
    "transform",
    "transform_with_stats",
]
