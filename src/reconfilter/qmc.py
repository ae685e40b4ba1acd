"""Low-discrepancy point sets. / 低差异点集。

Quasi-Monte Carlo integration replaces pseudo-random samples with deterministic points that cover the unit
square more evenly, so the integration error shrinks close to ``O(1/n)`` instead of ``O(1/sqrt(n))``. /
拟蒙特卡罗积分用确定性点代替伪随机样本，使其更均匀地覆盖单位正方形，误差因此接近 ``O(1/n)`` 而非 ``O(1/sqrt(n))``。
The Hammersley set pairs ``i / n`` with radical inverses of ``i`` in one or more bases. /
Hammersley 点集将 ``i / n`` 与 ``i`` 在一个或多个基数下的根式反演组合在一起。
"""
from __future__ import annotations

from typing import Sequence, Tuple, Union

import torch

Tensor = torch.Tensor

MAX_INDEX = 1 << 32  # 32-bit bit reversal / 32 位按位反转


def _as_indices(indices: Union[int, Sequence[int], Tensor]) -> Tensor:
    indices = torch.as_tensor(indices)
    if indices.dtype == torch.bool or indices.is_floating_point() or indices.is_complex():
        raise ValueError(f"indices must be integers, got dtype {indices.dtype}")
    indices = indices.to(torch.int64)
    if indices.numel() and (bool((indices < 0).any()) or bool((indices >= MAX_INDEX).any())):
        raise ValueError(f"indices must lie in [0, 2**32), got range [{int(indices.min())}, {int(indices.max())}]")
    return indices


def _check_sample_count(sample_count: int) -> None:
    if isinstance(sample_count, bool) or not isinstance(sample_count, int):
        raise ValueError(f"sample_count must be an integer, got {sample_count!r}")
    if not 0 < sample_count < MAX_INDEX:
        raise ValueError(f"sample_count must lie in [1, 2**32), got {sample_count}")


def _below_one(values: Tensor, dtype: torch.dtype) -> Tensor:
    """Cast to ``dtype`` and keep results inside ``[0, 1)``. / 转换为 ``dtype`` 并保证结果位于 ``[0, 1)``。

    Narrow dtypes such as ``float32`` would otherwise round values just below one up to exactly one. /
    否则 ``float32`` 等较窄精度会把略小于 1 的值舍入为 1。
    """

    one = torch.tensor(1.0, dtype=dtype)
    largest = torch.nextafter(one, torch.tensor(0.0, dtype=dtype))
    return torch.clamp(values.to(dtype), max=largest)


def radical_inverse_base2(indices: Union[int, Sequence[int], Tensor], dtype: torch.dtype = torch.float64) -> Tensor:
    """Van der Corput radical inverse in base 2 via 32-bit reversal. / 通过 32 位按位反转计算以 2 为底的 Van der Corput 根式反演。"""

    bits = _as_indices(indices)
    bits = ((bits << 16) | (bits >> 16)) & 0xFFFFFFFF
    bits = ((bits & 0x55555555) << 1) | ((bits & 0xAAAAAAAA) >> 1)
    bits = ((bits & 0x33333333) << 2) | ((bits & 0xCCCCCCCC) >> 2)
    bits = ((bits & 0x0F0F0F0F) << 4) | ((bits & 0xF0F0F0F0) >> 4)
    bits = ((bits & 0x00FF00FF) << 8) | ((bits & 0xFF00FF00) >> 8)
    return _below_one(bits.to(torch.float64) * 2.0**-32, dtype)


def radical_inverse(
    base: int, indices: Union[int, Sequence[int], Tensor], dtype: torch.dtype = torch.float64
) -> Tensor:
    """Mirror the base-``base`` digits of ``indices`` around the radix point. / 将 ``indices`` 的 ``base`` 进制数字以小数点为轴镜像。

    Parameters
    ----------
    base:
        Integer radix, at least 2. Base 2 uses the bit reversal fast path. / 整数基数，至少为 2；基数为 2 时使用按位反转的快速路径。
    indices:
        Non-negative integers below ``2**32``, any shape. / 小于 ``2**32`` 的非负整数，形状任意。
    """

    if isinstance(base, bool) or not isinstance(base, int) or base < 2:
        raise ValueError(f"base must be an integer >= 2, got {base!r}")
    if base == 2:
        return radical_inverse_base2(indices, dtype)

    remaining = _as_indices(indices).clone()
    result = torch.zeros(remaining.shape, dtype=torch.float64)
    rcp_base = 1.0 / base
    scale = rcp_base
    while bool((remaining > 0).any()):
        result += (remaining % base).to(torch.float64) * scale
        remaining = torch.div(remaining, base, rounding_mode="floor")
        scale *= rcp_base
    return _below_one(result, dtype)


def hammersley_sequence(
    sample_count: int, bases: Sequence[int] = (2,), dtype: torch.dtype = torch.float64
) -> Tensor:
    """Return the full Hammersley point set as a ``(sample_count, 1 + len(bases))`` tensor. /
    以 ``(sample_count, 1 + len(bases))`` 张量返回完整的 Hammersley 点集。

    Column 0 is ``i / sample_count``; column ``k + 1`` is the radical inverse of ``i`` in ``bases[k]``. /
    第 0 列为 ``i / sample_count``；第 ``k + 1`` 列为 ``i`` 在 ``bases[k]`` 下的根式反演。
    """

    _check_sample_count(sample_count)
    indices = torch.arange(sample_count, dtype=torch.int64)
    columns = [_below_one(indices.to(torch.float64) / sample_count, dtype)]
    columns.extend(radical_inverse(base, indices, dtype) for base in bases)
    return torch.stack(columns, dim=-1)


def hammersley_point(index: int, sample_count: int, bases: Sequence[int] = (2,)) -> Tuple[float, ...]:
    """Single Hammersley point ``index`` out of ``sample_count``. / ``sample_count`` 个 Hammersley 点中的第 ``index`` 个。"""

    _check_sample_count(sample_count)
    if isinstance(index, bool) or not isinstance(index, int):
        raise ValueError(f"index must be an integer, got {index!r}")
    if not 0 <= index < sample_count:
        raise ValueError(f"index must lie in [0, {sample_count}), got {index}")
    return (index / sample_count, *(float(radical_inverse(base, index)) for base in bases))


__all__ = [
    "MAX_INDEX",
    "hammersley_point",
    "hammersley_sequence",
    "radical_inverse",
    "radical_inverse_base2",
]
