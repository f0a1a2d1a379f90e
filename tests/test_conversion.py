
import pytest
from pytest import approx

from geodraw.conversion import *


def test_convert_to_meters():
    assert convert_to_meters(1., 'm') == 1.
    assert convert_to_meters(1.5, 'km') == 1500.
    assert convert_to_meters(1., 'mi') == approx(1609.34)
    assert convert_to_meters(10., 'ft') == approx(3.048)
    assert convert_to_meters(2., 'nmi') == 3704.
    assert convert_to_meters(1., 'yd') == approx(0.9144)

    # Case insensitive
    assert convert_to_meters(2., 'KM') == 2000.

    assert convert_to_meters(-0.5, 'km') == -500.


def test_convert_to_meters_invalid():
    with pytest.raises(ValueError):
        convert_to_meters(1., 'furlong')
