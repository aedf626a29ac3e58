import numpy as np
import pytest

from stepwise.optimize import InvalidParameterError, modify_param, random_param


def test_random_param_within_bounds(rng):
    lower = np.array([-1.0, 0.0, 10.0])
    upper = np.array([1.0, 0.5, 20.0])
    for _ in range(100):
        value = random_param(lower, upper, rng)
        assert value.shape == (3,)
        assert np.all(lower <= value)
        assert np.all(value <= upper)


def test_random_param_is_reproducible_from_seed():
    lower = np.zeros(4)
    upper = np.ones(4)
    assert np.array_equal(random_param(lower, upper, 7), random_param(lower, upper, 7))


@pytest.mark.parametrize(
    "lower,upper",
    [
        (np.array([0.0, 1.0]), np.array([1.0, 1.0])),
        (np.array([2.0]), np.array([1.0])),
        (np.zeros(2), np.ones(3)),
    ],
)
def test_random_param_rejects_bad_bounds_before_sampling(lower, upper):
    rng = np.random.default_rng(3)
    with pytest.raises(InvalidParameterError):
        random_param(lower, upper, rng)
    # the generator was not advanced
    assert rng.random() == np.random.default_rng(3).random()


def test_random_param_rejects_non_generator():
    with pytest.raises(InvalidParameterError):
        random_param(np.zeros(1), np.ones(1), "seed")


def test_modify_param_changes_one_coordinate_within_bounds(rng):
    lower = np.full(5, -0.5)
    upper = np.full(5, 0.5)
    param = np.zeros(5)
    for _ in range(50):
        candidate = modify_param(param, lower, upper, rng)
        assert np.count_nonzero(candidate != param) <= 1
        assert np.all(lower <= candidate)
        assert np.all(candidate <= upper)
    assert np.array_equal(param, np.zeros(5))


def test_modify_param_respects_constraint(rng):
    lower = np.full(2, -5.0)
    upper = np.full(2, 5.0)
    candidate = modify_param(
        np.zeros(2), lower, upper, rng, constraint=lambda p: float(np.sum(p)) > 0.1
    )
    assert np.sum(candidate) > 0.1


def test_modify_param_gives_up_on_impossible_constraint(rng):
    with pytest.raises(RuntimeError):
        modify_param(
            np.zeros(2),
            np.full(2, -1.0),
            np.full(2, 1.0),
            rng,
            constraint=lambda p: False,
            max_attempts=10,
        )


def test_modify_param_shape_mismatch(rng):
    with pytest.raises(InvalidParameterError):
        modify_param(np.zeros(3), np.zeros(2), np.ones(2), rng)
