"""2D reconstruction filter kernels. / 二维重建滤波器核。

This package provides the separable Box, Triangle, Gaussian, Mitchell-Netravali and Lanczos filters used to
weight point samples when reconstructing an image, together with a quasi-Monte Carlo estimate of their
normalisation factor. / 本包提供用于图像重建时对点采样加权的可分离 Box、Triangle、Gaussian、Mitchell-Netravali
与 Lanczos 滤波器，并提供基于拟蒙特卡罗的归一化因子估计。
"""

from .config import FILTER_TYPES, FilterConfig, create_filter
from .filters import (
    Box,
    BoxFilter2,
    Filter2,
    Gaussian,
    GaussianFilter2,
    InvalidFilterParameter,
    Lanczos,
    LanczosFilter2,
    Mitchell,
    MitchellFilter2,
    Triangle,
    TriangleFilter2,
    sinc,
)
from .normalization import NormalizedFilter, normalization_factor, normalized
from .qmc import hammersley_point, hammersley_sequence, radical_inverse, radical_inverse_base2

__all__ = [
    "Box",
    "BoxFilter2",
    "FILTER_TYPES",
    "Filter2",
    "FilterConfig",
    "Gaussian",
    "GaussianFilter2",
    "InvalidFilterParameter",
    "Lanczos",
    "LanczosFilter2",
    "Mitchell",
    "MitchellFilter2",
    "NormalizedFilter",
    "Triangle",
    "TriangleFilter2",
    "create_filter",
    "hammersley_point",
    "hammersley_sequence",
    "normalization_factor",
    "normalized",
    "radical_inverse",
    "radical_inverse_base2",
    "sinc",
]
