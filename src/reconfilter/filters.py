"""Separable 2D reconstruction filters. / 可分离的二维重建滤波器。

A reconstruction filter weights the point samples that fall near a pixel so a continuous signal can be rebuilt
from them. / 重建滤波器为像素附近的点采样赋予权重，从而由离散样本重建连续信号。
Every filter here has a rectangular support ``[-xradius, xradius] x [-yradius, yradius]`` and is the product of
one 1D response along each axis, evaluated on the coordinate divided by the radius of that axis. /
这里的每个滤波器都具有矩形支撑 ``[-xradius, xradius] x [-yradius, yradius]``，其值等于两个轴向一维响应的乘积，
一维响应作用于除以对应半径后的归一化坐标。

The filters are **not** normalised: they do not integrate to 1 over their support. Use
:func:`reconfilter.normalization.normalization_factor` to obtain the integral. / 这些滤波器**未**归一化，
其在支撑域上的积分不为 1；如需积分值，请使用 :func:`reconfilter.normalization.normalization_factor`。
The value returned by :meth:`Filter2.evaluate` is undefined outside the support; callers must bound their
queries. / 在支撑域之外 :meth:`Filter2.evaluate` 的返回值未定义，调用方需自行限制查询范围。
"""
from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Union

import torch

Tensor = torch.Tensor
Scalar = Union[float, int]

logger = logging.getLogger(__name__)


class InvalidFilterParameter(ValueError):
    """Raised when a filter or its integrator receives an unusable parameter. / 滤波器或其积分器收到无效参数时抛出。"""


def _finite(name: str, value: Scalar) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidFilterParameter(f"{name} must be a real number, got {value!r}") from exc
    if not math.isfinite(value):
        raise InvalidFilterParameter(f"{name} must be finite, got {value}")
    return value


def _positive(name: str, value: Scalar) -> float:
    value = _finite(name, value)
    if value <= 0.0:
        raise InvalidFilterParameter(f"{name} must be strictly positive, got {value}")
    return value


def _constant(value: float, dtype: torch.dtype) -> Tensor:
    return torch.tensor(value, dtype=dtype)


def sinc(x: Union[Scalar, Tensor]) -> Union[float, Tensor]:
    """Unnormalised sinc ``sin(x) / x`` with the removable singularity ``sinc(0) = 1``. / 非归一化 sinc，且 ``sinc(0) = 1``。

    Note that :func:`torch.sinc` is the *normalised* variant ``sin(pi x) / (pi x)``. /
    注意 :func:`torch.sinc` 是*归一化*版本 ``sin(pi x) / (pi x)``。
    """

    if not isinstance(x, Tensor):
        return 1.0 if x == 0 else math.sin(x) / x
    zero = x == 0
    # Replace zeros before dividing so no 0/0 is ever formed. / 先替换零值再做除法，避免出现 0/0。
    safe = torch.where(zero, torch.ones_like(x), x)
    return torch.where(zero, torch.ones_like(x), torch.sin(safe) / safe)


@dataclass(frozen=True)
class Filter2(ABC):
    """Base class for 2D reconstruction filters. / 二维重建滤波器的基类。

    Parameters
    ----------
    xradius, yradius:
        Half-widths of the support along each axis; finite and strictly positive. /
        支撑域在各轴上的半宽，必须为有限正数。
    dtype:
        Floating point precision of the derived constants and of tensor results. /
        派生常量与张量结果所使用的浮点精度。
    """

    xradius: float
    yradius: float
    dtype: torch.dtype = field(default=torch.float64, kw_only=True)
    rcp_xradius: Tensor = field(init=False, repr=False, compare=False)
    rcp_yradius: Tensor = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.dtype, torch.dtype) or not self.dtype.is_floating_point:
            raise InvalidFilterParameter(f"dtype must be a floating point torch.dtype, got {self.dtype!r}")
        xradius = _positive("xradius", self.xradius)
        yradius = _positive("yradius", self.yradius)
        # Frozen dataclass: derived state is written once through object.__setattr__. / 冻结数据类：派生状态只写入一次。
        object.__setattr__(self, "xradius", xradius)
        object.__setattr__(self, "yradius", yradius)
        object.__setattr__(self, "rcp_xradius", 1.0 / _constant(xradius, self.dtype))
        object.__setattr__(self, "rcp_yradius", 1.0 / _constant(yradius, self.dtype))

    def get_xradius(self) -> float:
        return self.xradius

    def get_yradius(self) -> float:
        return self.yradius

    @abstractmethod
    def response(self, n: Tensor) -> Tensor:
        """1D response for coordinates ``n`` normalised to ``[-1, 1]``. / 针对归一化到 ``[-1, 1]`` 的坐标 ``n`` 的一维响应。"""

    def evaluate(self, x: Union[Scalar, Tensor], y: Union[Scalar, Tensor]) -> Union[float, Tensor]:
        """Return the filter weight at offset ``(x, y)`` from the filter centre. / 返回相对滤波器中心偏移 ``(x, y)`` 处的权重。

        Python numbers give a Python ``float``; if either argument is a tensor the two are broadcast and a tensor
        in the filter's ``dtype`` is returned. / 传入 Python 数值时返回 ``float``；任一参数为张量时二者广播，
        返回滤波器 ``dtype`` 的张量。
        The result is only meaningful for ``|x| <= xradius`` and ``|y| <= yradius``. /
        仅当 ``|x| <= xradius`` 且 ``|y| <= yradius`` 时结果才有意义。
        """

        numbers = not isinstance(x, Tensor) and not isinstance(y, Tensor)
        x = torch.as_tensor(x, dtype=self.dtype)
        y = torch.as_tensor(y, dtype=self.dtype)
        weight = self.response(x * self.rcp_xradius) * self.response(y * self.rcp_yradius)
        # Sequences and arrays give a tensor even though neither argument is one. / 序列或数组输入同样返回张量。
        return weight.item() if numbers and weight.dim() == 0 else weight


@dataclass(frozen=True)
class BoxFilter2(Filter2):
    """Constant weight over the whole support. / 在整个支撑域上权重恒定。"""

    def response(self, n: Tensor) -> Tensor:
        return torch.ones_like(n)


@dataclass(frozen=True)
class TriangleFilter2(Filter2):
    """Tent filter, linear falloff to zero at the support edge. / 帐篷滤波器，线性衰减至支撑边界处为零。"""

    def response(self, n: Tensor) -> Tensor:
        return 1.0 - torch.abs(n)


@dataclass(frozen=True)
class GaussianFilter2(Filter2):
    """Gaussian ``exp(-alpha n^2)`` shifted down so it reaches exactly zero at ``|n| = 1``. /
    平移后的高斯 ``exp(-alpha n^2)``，在 ``|n| = 1`` 处恰好为零。

    Without the shift adjacent pixel footprints would meet at a non-zero value and leave a visible seam. /
    若不平移，相邻像素的滤波足迹会在非零值处相接，从而产生可见接缝。
    """

    alpha: float
    shift: Tensor = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        super().__post_init__()
        alpha = _finite("alpha", self.alpha)
        object.__setattr__(self, "alpha", alpha)
        # Same expression as response() at n = 1, so the boundary cancels exactly. / 与 n = 1 时 response() 的表达式相同，边界处精确抵消。
        object.__setattr__(self, "shift", torch.exp(_constant(-alpha, self.dtype)))

    def response(self, n: Tensor) -> Tensor:
        return torch.exp(-self.alpha * n * n) - self.shift


@dataclass(frozen=True)
class MitchellFilter2(Filter2):
    """Mitchell-Netravali cubic filter with design parameters ``b`` and ``c``. / 参数为 ``b``、``c`` 的 Mitchell-Netravali 三次滤波器。

    The piecewise cubic is evaluated at ``t = |2n|``: the inner polynomial for ``t < 1`` and the outer one for
    ``1 <= t <= 2``. / 分段三次多项式在 ``t = |2n|`` 处求值：``t < 1`` 时使用内段，``1 <= t <= 2`` 时使用外段。
    Both coefficient sets are derived once at construction. / 两组系数均在构造时一次性求出。

    Reference: D. Mitchell and A. Netravali, "Reconstruction Filters in Computer Graphics", SIGGRAPH 1988.
    """

    b: float
    c: float
    coefficients: Tensor = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        super().__post_init__()
        b = _finite("b", self.b)
        c = _finite("c", self.c)
        object.__setattr__(self, "b", b)
        object.__setattr__(self, "c", c)

        b_ = _constant(b, self.dtype)
        c_ = _constant(c, self.dtype)
        sixth = 1.0 / 6.0
        coefficients = torch.stack(
            [
                sixth * (12.0 - 9.0 * b_ - 6.0 * c_),  # a3
                sixth * (-18.0 + 12.0 * b_ + 6.0 * c_),  # a2
                sixth * (6.0 - 2.0 * b_),  # a0
                sixth * (-b_ - 6.0 * c_),  # b3
                sixth * (6.0 * b_ + 30.0 * c_),  # b2
                sixth * (-12.0 * b_ - 48.0 * c_),  # b1
                sixth * (8.0 * b_ + 24.0 * c_),  # b0
            ]
        )
        object.__setattr__(self, "coefficients", coefficients)
        logger.debug("Mitchell(b=%s, c=%s) coefficients: %s", b, c, coefficients)

    def response(self, n: Tensor) -> Tensor:
        a3, a2, a0, b3, b2, b1, b0 = self.coefficients.unbind()
        t1 = torch.abs(n + n)
        t2 = t1 * t1
        t3 = t2 * t1
        inner = a3 * t3 + a2 * t2 + a0
        outer = b3 * t3 + b2 * t2 + b1 * t1 + b0
        # Strict comparison: t == 1 belongs to the outer segment. / 严格比较：t == 1 归入外段。
        return torch.where(t1 < 1.0, inner, outer)


@dataclass(frozen=True)
class LanczosFilter2(Filter2):
    """Windowed sinc ``sinc(pi n / tau) * sinc(pi n)``. / 加窗 sinc ``sinc(pi n / tau) * sinc(pi n)``。"""

    tau: float
    rcp_tau: Tensor = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        super().__post_init__()
        tau = _positive("tau", self.tau)
        object.__setattr__(self, "tau", tau)
        object.__setattr__(self, "rcp_tau", 1.0 / _constant(tau, self.dtype))

    def response(self, n: Tensor) -> Tensor:
        theta = torch.pi * n
        centre = theta == 0
        value = sinc(theta * self.rcp_tau) * sinc(theta)
        return torch.where(centre, torch.ones_like(theta), value)


Box = BoxFilter2
Triangle = TriangleFilter2
Gaussian = GaussianFilter2
Mitchell = MitchellFilter2
Lanczos = LanczosFilter2


__all__ = [
    "Box",
    "BoxFilter2",
    "Filter2",
    "Gaussian",
    "GaussianFilter2",
    "InvalidFilterParameter",
    "Lanczos",
    "LanczosFilter2",
    "Mitchell",
    "MitchellFilter2",
    "Triangle",
    "TriangleFilter2",
    "sinc",
]
