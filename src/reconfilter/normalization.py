"""Quasi-Monte Carlo normalisation of reconstruction filters. / 重建滤波器的拟蒙特卡罗归一化。

The integral of a filter over its support is estimated from the 2D radix-2 Hammersley set mapped onto the
support rectangle. / 滤波器在支撑域上的积分由映射到支撑矩形上的二维基数 2 Hammersley 点集估计。
Dividing a filter's weights by that estimate makes it integrate to one. / 将滤波器权重除以该估计值即可使其积分为 1。
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol, Union

import torch

from .filters import Filter2, InvalidFilterParameter
from .qmc import hammersley_sequence

Tensor = torch.Tensor

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_COUNT = 1024


class FilterLike(Protocol):
    """Anything with a rectangular support and a scalar ``evaluate``. / 具有矩形支撑和标量 ``evaluate`` 的任意对象。"""

    def get_xradius(self) -> float: ...

    def get_yradius(self) -> float: ...

    def evaluate(self, x: float, y: float) -> float: ...


def _accepts_tensors(filter: FilterLike) -> bool:
    if isinstance(filter, Filter2):
        return True
    if isinstance(filter, NormalizedFilter):
        return _accepts_tensors(filter.filter)
    return False


def normalization_factor(filter: FilterLike, sample_count: int = DEFAULT_SAMPLE_COUNT) -> float:
    """Estimate ``∫∫ filter.evaluate(x, y) dx dy`` over the filter support. / 估计滤波器在其支撑域上的积分。

    Each Hammersley point ``s`` in ``[0, 1)^2`` maps to ``(xradius (2 s0 - 1), yradius (2 s1 - 1))``; the mean
    weight is scaled by the support area ``4 xradius yradius``. / 每个 Hammersley 点 ``s`` 映射为
    ``(xradius (2 s0 - 1), yradius (2 s1 - 1))``，平均权重再乘以支撑面积 ``4 xradius yradius``。
    :class:`Filter2` instances are evaluated on all points at once; any other filter is called once per point
    with Python floats. / :class:`Filter2` 实例在全部点上一次性求值；其他滤波器则逐点以 Python 浮点数调用。
    The point set is deterministic, so repeated calls return bit-identical results. /
    点集是确定性的，因此重复调用会返回逐位相同的结果。
    """

    if isinstance(sample_count, bool) or not isinstance(sample_count, int) or sample_count <= 0:
        raise InvalidFilterParameter(f"sample_count must be a positive integer, got {sample_count!r}")

    xradius = filter.get_xradius()
    yradius = filter.get_yradius()
    dtype = getattr(filter, "dtype", torch.float64)

    s = hammersley_sequence(sample_count, bases=(2,), dtype=dtype)
    px = xradius * (2.0 * s[:, 0] - 1.0)
    py = yradius * (2.0 * s[:, 1] - 1.0)

    if _accepts_tensors(filter):
        total = torch.as_tensor(filter.evaluate(px, py), dtype=dtype).sum().item()
    else:
        total = 0.0
        for x, y in zip(px.tolist(), py.tolist()):
            total += float(filter.evaluate(x, y))

    result = total * (4.0 * xradius * yradius) / sample_count
    logger.debug("normalization_factor(%r, sample_count=%d) = %r", filter, sample_count, result)
    return result


@dataclass(frozen=True)
class NormalizedFilter:
    """A filter divided by its estimated integral. / 除以其积分估计值后的滤波器。"""

    filter: FilterLike
    factor: float

    @property
    def dtype(self) -> torch.dtype:
        return getattr(self.filter, "dtype", torch.float64)

    def get_xradius(self) -> float:
        return self.filter.get_xradius()

    def get_yradius(self) -> float:
        return self.filter.get_yradius()

    def evaluate(self, x: Union[float, Tensor], y: Union[float, Tensor]) -> Union[float, Tensor]:
        return self.filter.evaluate(x, y) / self.factor


def normalized(filter: FilterLike, sample_count: int = DEFAULT_SAMPLE_COUNT) -> NormalizedFilter:
    """Wrap ``filter`` so that it integrates to (approximately) one. / 包装 ``filter`` 使其积分（近似）为 1。"""

    factor = normalization_factor(filter, sample_count)
    if factor == 0.0:
        raise InvalidFilterParameter(f"{filter!r} integrates to zero and cannot be normalised")
    return NormalizedFilter(filter=filter, factor=factor)


__all__ = [
    "DEFAULT_SAMPLE_COUNT",
    "FilterLike",
    "NormalizedFilter",
    "normalization_factor",
    "normalized",
]
