import pytest
from app.analytics.pricing import pricing_multiplier

def test_peak_and_trough_adjustments():
    # spread 17 -> 1.17, peak above 15 -> x1.2, trough below 5 -> x0.9
    assert pricing_multiplier([3, 20, 4]) == pytest.approx(1.2636)

def test_flat_mid_demand_is_neutral():
    assert pricing_multiplier([10, 10, 10]) == pytest.approx(1.0)

def test_multiplier_is_capped():
    assert pricing_multiplier([10, 300]) == 2.0

def test_empty_series_is_rejected():
    with pytest.raises(ValueError):
        pricing_multiplier([])
