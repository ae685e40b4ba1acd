import pytest
import torch

from reconfilter import (
    FILTER_TYPES,
    BoxFilter2,
    FilterConfig,
    GaussianFilter2,
    InvalidFilterParameter,
    LanczosFilter2,
    MitchellFilter2,
    create_filter,
)


def test_create_filter_by_name() -> None:
    f = create_filter("Gaussian", 1.0, 2.0, alpha=2.0)
    assert isinstance(f, GaussianFilter2)
    assert f.alpha == 2.0
    assert f.get_yradius() == 2.0
    assert isinstance(create_filter(" box ", 1.0, 1.0), BoxFilter2)
    assert set(FILTER_TYPES) == {"box", "triangle", "gaussian", "mitchell", "lanczos"}


def test_create_filter_rejects_bad_input() -> None:
    with pytest.raises(InvalidFilterParameter):
        create_filter("sinc", 1.0, 1.0)
    with pytest.raises(InvalidFilterParameter):
        create_filter("mitchell", 1.0, 1.0, b=0.3)
    with pytest.raises(InvalidFilterParameter):
        create_filter("box", 1.0, 1.0, alpha=2.0)


def test_default_config_builds_mitchell() -> None:
    f = FilterConfig().build()
    assert isinstance(f, MitchellFilter2)
    assert f.b == pytest.approx(1.0 / 3.0)
    assert f.c == pytest.approx(1.0 / 3.0)
    assert f.get_xradius() == 2.0


def test_config_from_dict() -> None:
    config = FilterConfig.from_dict({"name": "Lanczos", "xradius": 1.5, "tau": 2.0, "dtype": "float32"})
    f = config.build()
    assert isinstance(f, LanczosFilter2)
    assert f.tau == 2.0
    assert f.dtype == torch.float32
    assert f.get_xradius() == 1.5
    assert f.get_yradius() == 2.0


def test_config_validation() -> None:
    with pytest.raises(InvalidFilterParameter):
        FilterConfig.from_dict({"name": "box", "width": 3})
    with pytest.raises(InvalidFilterParameter):
        FilterConfig.from_dict({"dtype": "bogus"})
    with pytest.raises(InvalidFilterParameter):
        FilterConfig(name="unknown").validate()
    with pytest.raises(InvalidFilterParameter):
        FilterConfig(xradius=-1.0).build()
    with pytest.raises(InvalidFilterParameter):
        FilterConfig(yradius=float("nan")).validate()
