import math

import pytest
import torch

from reconfilter import (
    Box,
    Filter2,
    Gaussian,
    InvalidFilterParameter,
    Lanczos,
    Mitchell,
    Triangle,
    sinc,
)


def _all_filters(xradius: float = 2.0, yradius: float = 1.5) -> list:
    return [
        Box(xradius, yradius),
        Triangle(xradius, yradius),
        Gaussian(xradius, yradius, alpha=4.0),
        Mitchell(xradius, yradius, b=1.0 / 3.0, c=1.0 / 3.0),
        Lanczos(xradius, yradius, tau=3.0),
    ]


def test_radius_accessors() -> None:
    for f in _all_filters(2.0, 0.5):
        assert f.get_xradius() == 2.0
        assert f.get_yradius() == 0.5


def test_centre_weight_is_finite_and_positive() -> None:
    for f in _all_filters():
        value = f.evaluate(0.0, 0.0)
        assert isinstance(value, float)
        assert math.isfinite(value)
        assert value > 0.0


@pytest.mark.parametrize("radius", [0.0, -1.0, float("inf"), float("nan")])
def test_invalid_radius_is_rejected(radius: float) -> None:
    with pytest.raises(InvalidFilterParameter):
        Box(radius, 1.0)
    with pytest.raises(InvalidFilterParameter):
        Triangle(1.0, radius)


def test_invalid_shape_parameters_are_rejected() -> None:
    with pytest.raises(InvalidFilterParameter):
        Gaussian(1.0, 1.0, alpha=float("nan"))
    with pytest.raises(InvalidFilterParameter):
        Mitchell(1.0, 1.0, b=float("inf"), c=0.0)
    with pytest.raises(InvalidFilterParameter):
        Lanczos(1.0, 1.0, tau=0.0)
    with pytest.raises(InvalidFilterParameter):
        Box(1.0, 1.0, dtype=torch.int32)


def test_base_class_is_abstract() -> None:
    with pytest.raises(TypeError):
        Filter2(1.0, 1.0)  # type: ignore[abstract]


def test_filters_are_immutable() -> None:
    f = Gaussian(1.0, 1.0, alpha=2.0)
    with pytest.raises(AttributeError):
        f.alpha = 3.0  # type: ignore[misc]


def test_box_is_constant() -> None:
    f = Box(2.0, 3.0)
    for x, y in [(0.0, 0.0), (2.0, 3.0), (-1.3, 0.7), (-2.0, -3.0)]:
        assert f.evaluate(x, y) == 1.0


def test_triangle_vanishes_on_boundary() -> None:
    f = Triangle(2.0, 4.0)
    assert f.evaluate(2.0, 0.0) == 0.0
    assert f.evaluate(0.0, 4.0) == 0.0
    assert f.evaluate(-2.0, 0.0) == 0.0
    assert f.evaluate(0.0, 0.0) == 1.0
    assert f.evaluate(1.0, 2.0) == pytest.approx(0.25)
    xs = torch.linspace(-2.0, 2.0, 41, dtype=torch.float64)
    assert torch.all(f.evaluate(xs, 0.0) <= f.evaluate(0.0, 0.0))


def test_gaussian_vanishes_on_boundary() -> None:
    f = Gaussian(1.5, 2.5, alpha=6.0)
    for y in [-2.5, -1.0, 0.0, 0.3, 2.5]:
        assert f.evaluate(1.5, y) == pytest.approx(0.0, abs=1e-12)
        assert f.evaluate(-1.5, y) == pytest.approx(0.0, abs=1e-12)
    expected = (1.0 - math.exp(-6.0)) ** 2
    assert f.evaluate(0.0, 0.0) == pytest.approx(expected)


def test_gaussian_boundary_is_exactly_zero_for_unit_radius() -> None:
    f = Gaussian(1.0, 1.0, alpha=2.0)
    assert f.evaluate(1.0, 0.0) == 0.0


def test_mitchell_golden_values() -> None:
    f = Mitchell(1.0, 1.0, b=1.0 / 3.0, c=1.0 / 3.0)
    centre = 8.0 / 9.0
    assert f.evaluate(0.0, 0.0) == pytest.approx(centre * centre)
    # n = 0.5 is the junction of both segments and takes the outer one. / n = 0.5 为两段交界处，取外段。
    assert f.evaluate(0.5, 0.0) == pytest.approx((1.0 / 18.0) * centre)
    assert f.evaluate(1.0, 0.0) == pytest.approx(0.0, abs=1e-12)
    assert f.evaluate(0.0, 1.0) == pytest.approx(0.0, abs=1e-12)


def test_mitchell_segments_meet_continuously() -> None:
    f = Mitchell(1.0, 1.0, b=0.2, c=0.4)
    below = f.evaluate(0.5 - 1e-9, 0.0)
    at = f.evaluate(0.5, 0.0)
    assert below == pytest.approx(at, abs=1e-6)


def test_mitchell_coefficients_follow_closed_form() -> None:
    b, c = 0.5, 0.25
    f = Mitchell(1.0, 1.0, b=b, c=c)
    expected = torch.tensor(
        [
            (12 - 9 * b - 6 * c) / 6,
            (-18 + 12 * b + 6 * c) / 6,
            (6 - 2 * b) / 6,
            (-b - 6 * c) / 6,
            (6 * b + 30 * c) / 6,
            (-12 * b - 48 * c) / 6,
            (8 * b + 24 * c) / 6,
        ],
        dtype=torch.float64,
    )
    assert torch.allclose(f.coefficients, expected)


def test_lanczos_centre_and_sinc() -> None:
    f = Lanczos(2.0, 2.0, tau=3.0)
    assert f.evaluate(0.0, 0.0) == 1.0
    assert sinc(0.0) == 1.0
    for theta in [0.1, -0.7, 2.0, math.pi / 3.0]:
        assert sinc(theta) == pytest.approx(math.sin(theta) / theta)
    thetas = torch.tensor([0.0, 0.5, -1.25], dtype=torch.float64)
    values = sinc(thetas)
    assert values[0].item() == 1.0
    assert values[1].item() == pytest.approx(math.sin(0.5) / 0.5)


def test_lanczos_matches_windowed_sinc() -> None:
    tau = 3.0
    f = Lanczos(1.0, 1.0, tau=tau)
    n = 0.4
    theta = math.pi * n
    expected = (math.sin(theta / tau) / (theta / tau)) * (math.sin(theta) / theta)
    assert f.evaluate(n, 0.0) == pytest.approx(expected)


def test_separability() -> None:
    points = [(0.3, -0.2), (-1.1, 0.9), (1.7, 1.2), (0.5, 0.75)]
    for f in _all_filters():
        centre = f.evaluate(0.0, 0.0)
        for x, y in points:
            expected = f.evaluate(x, 0.0) * f.evaluate(0.0, y) / centre
            assert f.evaluate(x, y) == pytest.approx(expected, rel=1e-9, abs=1e-12)


def test_tensor_evaluation_matches_scalar() -> None:
    xs = torch.tensor([-1.5, -0.25, 0.0, 0.8, 2.0], dtype=torch.float64)
    ys = torch.tensor([0.1, -1.0, 0.0, 1.4, -0.6], dtype=torch.float64)
    for f in _all_filters():
        weights = f.evaluate(xs, ys)
        assert weights.shape == xs.shape
        assert weights.dtype == torch.float64
        for i in range(xs.numel()):
            assert weights[i].item() == pytest.approx(f.evaluate(xs[i].item(), ys[i].item()))


def test_tensor_evaluation_broadcasts_grid() -> None:
    f = Triangle(1.0, 1.0)
    xs = torch.linspace(-1.0, 1.0, 5, dtype=torch.float64)
    ys = torch.linspace(-1.0, 1.0, 3, dtype=torch.float64)
    weights = f.evaluate(xs.unsqueeze(0), ys.unsqueeze(1))
    assert weights.shape == (3, 5)
    assert weights[1, 2].item() == 1.0


def test_float32_filters_stay_float32() -> None:
    f = Mitchell(1.0, 1.0, b=1.0 / 3.0, c=1.0 / 3.0, dtype=torch.float32)
    assert f.coefficients.dtype == torch.float32
    weights = f.evaluate(torch.zeros(4), torch.zeros(4))
    assert weights.dtype == torch.float32
    assert f.evaluate(0.0, 0.0) == pytest.approx((8.0 / 9.0) ** 2, rel=1e-6)


def test_sequence_offsets_return_tensor() -> None:
    f = Triangle(1.0, 1.0)
    weights = f.evaluate([0.0, 0.5], 0.0)
    assert isinstance(weights, torch.Tensor)
    assert weights.tolist() == [1.0, 0.5]
    assert f.evaluate(0.5, [0.0, 1.0]).tolist() == [0.5, 0.0]
