from .core import PERMUTATION, fade, lerp, remap
from .factory import construct
from .gradients import GradientSet
from .noise_1d import Perlin1D
from .noise_2d import Perlin2D

__all__ = [
    "PERMUTATION",
    "GradientSet",
    "Perlin1D",
    "Perlin2D",
    "construct",
    "fade",
    "lerp",
    "remap",
]
