"""Selecting and building filters from settings. / 根据设置选择并构建滤波器。"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping, Tuple, Type

import torch

from .filters import (
    BoxFilter2,
    Filter2,
    GaussianFilter2,
    InvalidFilterParameter,
    LanczosFilter2,
    MitchellFilter2,
    TriangleFilter2,
)

logger = logging.getLogger(__name__)

FILTER_TYPES: Dict[str, Type[Filter2]] = {
    "box": BoxFilter2,
    "triangle": TriangleFilter2,
    "gaussian": GaussianFilter2,
    "mitchell": MitchellFilter2,
    "lanczos": LanczosFilter2,
}

# Shape parameters each filter takes in addition to its radii. / 各滤波器在半径之外需要的形状参数。
FILTER_PARAMETERS: Dict[str, Tuple[str, ...]] = {
    "box": (),
    "triangle": (),
    "gaussian": ("alpha",),
    "mitchell": ("b", "c"),
    "lanczos": ("tau",),
}


def _lookup(name: str) -> str:
    key = str(name).strip().lower()
    if key not in FILTER_TYPES:
        raise InvalidFilterParameter(
            f"Unknown filter {name!r}; expected one of {', '.join(sorted(FILTER_TYPES))}"
        )
    return key


def create_filter(
    name: str, xradius: float, yradius: float, *, dtype: torch.dtype = torch.float64, **params: float
) -> Filter2:
    """Construct a filter by name (case-insensitive). / 按名称（不区分大小写）构造滤波器。

    ``params`` must contain exactly the shape parameters of that filter, e.g. ``alpha`` for ``"gaussian"``. /
    ``params`` 必须恰好包含该滤波器的形状参数，例如 ``"gaussian"`` 需要 ``alpha``。
    """

    key = _lookup(name)
    expected = set(FILTER_PARAMETERS[key])
    unexpected = sorted(set(params) - expected)
    missing = sorted(expected - set(params))
    if unexpected:
        raise InvalidFilterParameter(f"{key} filter does not take parameter(s) {', '.join(unexpected)}")
    if missing:
        raise InvalidFilterParameter(f"{key} filter requires parameter(s) {', '.join(missing)}")
    logger.debug("Creating %s filter with radii (%s, %s) and %s", key, xradius, yradius, params)
    return FILTER_TYPES[key](xradius, yradius, dtype=dtype, **params)


@dataclass
class FilterConfig:
    """Reconstruction filter settings as read from render settings. / 从渲染设置中读取的重建滤波器配置。"""

    name: str = "mitchell"
    xradius: float = 2.0
    yradius: float = 2.0
    alpha: float = 8.0  # Gaussian falloff / 高斯衰减率
    b: float = 1.0 / 3.0  # Mitchell B / Mitchell 参数 B
    c: float = 1.0 / 3.0  # Mitchell C / Mitchell 参数 C
    tau: float = 3.0  # Lanczos window / Lanczos 窗口宽度
    dtype: torch.dtype = field(default=torch.float64)

    def validate(self) -> None:
        _lookup(self.name)
        for attr in ("xradius", "yradius"):
            value = getattr(self, attr)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0 < value < float("inf"):
                raise InvalidFilterParameter(f"{attr} must be a finite positive number, got {value!r}")
        if not isinstance(self.dtype, torch.dtype) or not self.dtype.is_floating_point:
            raise InvalidFilterParameter(f"dtype must be a floating point torch.dtype, got {self.dtype!r}")

    def build(self) -> Filter2:
        """Validate the settings and construct the selected filter. / 校验配置并构造所选滤波器。"""

        self.validate()
        key = _lookup(self.name)
        params = {param: getattr(self, param) for param in FILTER_PARAMETERS[key]}
        return create_filter(key, self.xradius, self.yradius, dtype=self.dtype, **params)

    @classmethod
    def from_dict(cls, settings: Mapping[str, Any]) -> "FilterConfig":
        """Build a config from a plain mapping; ``dtype`` may be a name such as ``"float32"``. /
        由普通映射构建配置；``dtype`` 可以是 ``"float32"`` 之类的名称。
        """

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(settings) - known)
        if unknown:
            raise InvalidFilterParameter(f"Unknown filter setting(s): {', '.join(unknown)}")
        values = dict(settings)
        if isinstance(values.get("dtype"), str):
            dtype = getattr(torch, values["dtype"], None)
            if not isinstance(dtype, torch.dtype):
                raise InvalidFilterParameter(f"Unknown dtype {values['dtype']!r}")
            values["dtype"] = dtype
        config = cls(**values)
        config.validate()
        return config


__all__ = ["FILTER_PARAMETERS", "FILTER_TYPES", "FilterConfig", "create_filter"]
