"""Rasterise every reconstruction filter to a grayscale PNG. / 将每种重建滤波器栅格化为灰度 PNG。

Run the script with ``python examples/plot_filter_kernels.py``; it saves one PNG per filter next to this file and
prints each filter's normalisation factor. / 使用 ``python examples/plot_filter_kernels.py`` 运行脚本，
会在本文件旁为每种滤波器保存一张 PNG，并打印其归一化因子。
Negative lobes (Mitchell, Lanczos) show up darker than the zero level, which is drawn mid-gray. /
负瓣（Mitchell、Lanczos）显示为比零值更暗的颜色，零值以中灰色绘制。
"""
from __future__ import annotations

import logging
from pathlib import Path

import torch
from PIL import Image

from reconfilter import FILTER_TYPES, Filter2, FilterConfig, normalization_factor

OUTPUT_DIR = Path(__file__).parent
RESOLUTION = 256


def weight_image(filter: Filter2, resolution: int = RESOLUTION) -> Image.Image:
    # Sample the support on a regular grid; rows run along y. / 在规则网格上采样支撑域，行对应 y 方向。
    xs = torch.linspace(-filter.get_xradius(), filter.get_xradius(), resolution, dtype=filter.dtype)
    ys = torch.linspace(-filter.get_yradius(), filter.get_yradius(), resolution, dtype=filter.dtype)
    grid_y, grid_x = torch.meshgrid(ys, xs, indexing="ij")
    weights = filter.evaluate(grid_x, grid_y)

    peak = weights.abs().max().clamp(min=1e-12)
    gray = 0.5 + 0.5 * weights / peak
    gray_np = (gray.clamp(0.0, 1.0).cpu().numpy() * 255.0).astype("uint8")
    return Image.fromarray(gray_np)


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    for name in FILTER_TYPES:
        f = FilterConfig(name=name, xradius=2.0, yradius=2.0).build()
        output_path = OUTPUT_DIR / f"{name}_filter.png"
        weight_image(f).save(output_path)
        print(f"{name:>9}: normalization factor {normalization_factor(f):.6f}, saved {output_path}")


if __name__ == "__main__":
    main()
