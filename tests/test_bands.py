from typing import Union

import pytest

from adif_tools.bands import BAND_ORDER, BANDS, freq_to_band


@pytest.mark.parametrize(
    "freq,expected",
    [
        (432.1, "70cm"),
        (146.52, "2m"),
        ("50.313", "6m"),
        (28, "10m"),
        (29.7, "10m"),
        (24.915, "12m"),
        ("21.074", "15m"),
        (18.1, "17m"),
        ("14.075678", "20m"),
        (10.136, "30m"),
        ("7.025", "40m"),
        (3.573, "80m"),
        (1.84, "160m"),
        (5.357, "UNKNOWN"),
        (14.351, "UNKNOWN"),
        ("", "UNKNOWN"),
        ("fourteen", "UNKNOWN"),
    ],
)
def test_freq_to_band(freq: Union[str, float], expected: str) -> None:
    assert freq_to_band(freq) == expected


def test_band_order() -> None:
    # Every band we can match shows up in reports
    for band in BANDS:
        assert band.name in BAND_ORDER
