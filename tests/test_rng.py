import pytest

from storyterm.core.rng import RNG


def test_rng_determinism_same_seed() -> None:
    rng_a = RNG(12345)
    rng_b = RNG(12345)

    draws_a = [rng_a.randrange(3, 100) for _ in range(10)]
    draws_b = [rng_b.randrange(3, 100) for _ in range(10)]

    assert draws_a == draws_b


def test_rng_different_seed() -> None:
    rng_a = RNG(11111)
    rng_b = RNG(22222)

    draws_a = [rng_a.randrange(1, 101) for _ in range(5)]
    draws_b = [rng_b.randrange(1, 101) for _ in range(5)]

    assert draws_a != draws_b


def test_randrange_stays_in_half_open_range() -> None:
    rng = RNG(7)
    draws = {rng.randrange(2, 5) for _ in range(200)}

    assert draws == {2, 3, 4}


def test_randrange_single_value_range() -> None:
    assert RNG(1).randrange(4, 5) == 4


def test_randrange_empty_range_raises() -> None:
    with pytest.raises(ValueError):
        RNG(1).randrange(3, 3)
