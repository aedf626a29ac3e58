import math

import pytest

from stepwise.optimize import (
    Brent,
    CostOperator,
    Executor,
    InvalidParameterError,
    Problem,
    TerminationReason,
)


def brent_fun(x: float) -> float:
    return math.exp(-x) - math.exp(5 - x / 2)


class RecordingObserver:
    def __init__(self):
        self.states = []

    def observe_init(self, name, kv):
        pass

    def observe_iter(self, state, kv):
        self.states.append(state)


def test_brent_reference_run():
    res = Executor(Problem(fun=brent_fun), Brent(-10.0, 10.0), math.nan).max_iters(13).run()
    assert res.termination_reason is TerminationReason.TARGET_PRECISION_REACHED
    assert res.nit == 13
    assert res.nfev == 13
    assert res.x == -8.613701289624956
    assert res.prev_x == -8.613701289624956
    assert res.best_x == -8.613701289624956
    assert res.fun == -5506.616448675639
    assert res.prev_fun == -5506.616448675639
    assert res.best_fun == -5506.616448675639
    assert res.success


def test_brent_final_error_within_three_tol():
    x_min = 2 * math.log(2 * math.exp(-5))
    solver = Brent(-10.0, 10.0)
    res = Executor(Problem(fun=brent_fun), solver, math.nan).run()
    tol = solver.eps * abs(res.x) + solver.t
    assert abs(res.x - x_min) <= 3 * tol


def test_brent_runs_are_deterministic():
    # a finite initial parameter keeps every snapshot field comparable with ==
    first, second = [
        Executor(Problem(fun=brent_fun), Brent(-10.0, 10.0), 0.0).run() for _ in range(2)
    ]
    assert first.state == second.state
    assert first == second
    assert str(first) == str(second)


def test_brent_best_cost_never_exceeds_current_cost():
    observer = RecordingObserver()
    Executor(Problem(fun=brent_fun), Brent(-10.0, 10.0), math.nan).add_observer(
        observer
    ).run()
    assert observer.states
    best_costs = [state.best_cost for state in observer.states]
    for state in observer.states:
        assert state.best_cost <= state.cost
    assert all(b <= a for a, b in zip(best_costs, best_costs[1:]))


def test_brent_degenerate_bracket_terminates_immediately():
    res = Executor(Problem(fun=lambda x: (x - 1.0) ** 2), Brent(2.0, 2.0), math.nan).run()
    assert res.nfev == 1
    assert res.nit == 1
    assert res.x == 2.0
    assert res.termination_reason is TerminationReason.TARGET_PRECISION_REACHED


def test_brent_one_evaluation_per_iteration():
    res = Executor(
        Problem(fun=lambda x: (x - 0.3) ** 2 + 1.0), Brent(-2.0, 5.0), math.nan
    ).run()
    # init evaluates once; the terminating iteration does not evaluate
    assert res.nfev == res.nit
    assert res.x == pytest.approx(0.3, abs=1e-4)
    assert res.fun == pytest.approx(1.0)


def test_brent_stays_inside_bracket():
    seen = []

    class Linear(CostOperator):
        def apply(self, x):
            seen.append(x)
            return x

    res = Executor(Linear(), Brent(1.0, 3.0), math.nan).run()
    assert all(1.0 <= x <= 3.0 for x in seen)
    assert res.x == pytest.approx(1.0, abs=1e-4)


def test_brent_set_tolerance_changes_precision():
    coarse = Executor(
        Problem(fun=brent_fun), Brent(-10.0, 10.0).set_tolerance(1e-3, 1e-2), math.nan
    ).run()
    fine = Executor(Problem(fun=brent_fun), Brent(-10.0, 10.0), math.nan).run()
    assert coarse.nfev < fine.nfev


@pytest.mark.parametrize(
    "lower,upper",
    [(1.0, 0.0), (math.nan, 1.0), (0.0, math.inf)],
)
def test_brent_invalid_bracket(lower, upper):
    with pytest.raises(InvalidParameterError):
        Brent(lower, upper)


@pytest.mark.parametrize("eps,t", [(0.0, 1e-5), (1e-8, -1.0), (math.nan, 1e-5)])
def test_brent_invalid_tolerance(eps, t):
    with pytest.raises(InvalidParameterError):
        Brent(0.0, 1.0).set_tolerance(eps, t)
