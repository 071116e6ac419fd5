import pytest

from confstack.memory import HashSource
from confstack.random import RandomSource, normalize
from confstack.value import RandValue


def load():
    target = HashSource("test")
    RandomSource().load(target.prefixed())
    return target


def test_name():
    assert RandomSource().name == "random_generator"


@pytest.mark.parametrize("kind", list(RandValue))
def test_load_offers_every_kind(kind):
    assert load().get_value(f"random.{kind.value}") is kind


def test_load_lists_all_children():
    assert load().collect_keys("random").str_keys == {kind.value for kind in RandValue}


@pytest.mark.parametrize("kind", list(RandValue))
def test_normalize_within_range(kind):
    bounds = kind.range
    for _ in range(20):
        number = bounds.convert(normalize(kind), "random")
        assert bounds.minimum <= number <= bounds.maximum


def test_u128_values_differ():
    bounds = RandValue.U128.range
    numbers = [bounds.convert(normalize(RandValue.U128), "random") for _ in range(10)]
    assert len(set(numbers)) == 10
    assert all(0 <= n <= 2**128 - 1 for n in numbers)


def test_u8_covers_small_range():
    seen = {normalize(RandValue.U8) for _ in range(2000)}
    assert all(isinstance(n, int) and 0 <= n <= 255 for n in seen)
    assert len(seen) > 100


def test_i8_takes_negative_values():
    seen = {normalize(RandValue.I8) for _ in range(2000)}
    assert min(seen) < 0 <= max(seen)
    assert min(seen) >= -128 and max(seen) <= 127