import pytest

from param_sweep.sweep import Assignment, Classification, ConfigurationError, ResultSet, TrialOutcome


def _outcome(iteration: int, ok: bool, y: float = 0.5) -> TrialOutcome:
    return TrialOutcome(
        iteration=iteration,
        assignment=Assignment({"x": y}),
        output=y,
        classification=Classification.OK if ok else Classification.NG,
    )


def test_record_counts_and_retains_until_capacity():
    results = ResultSet(ok_capacity=2, ng_capacity=1)
    retained = [results.record(_outcome(i, ok=i % 2 == 0)) for i in range(1, 9)]
    assert results.counters() == {"total": 8, "ok_hits": 4, "ng_hits": 4}
    assert [o.iteration for o in results.ok_outcomes] == [2, 4]
    assert [o.iteration for o in results.ng_outcomes] == [1]
    assert retained == [True, True, False, True, False, False, False, False]
    assert results.ok_full and results.ng_full
    assert len(results) == 3


def test_full_list_never_grows():
    results = ResultSet(ok_capacity=3, ng_capacity=0)
    for i in range(1, 101):
        results.record(_outcome(i, ok=True))
        assert len(results.ok_outcomes) == min(i, 3)
    assert results.ok_hits == 100
    assert results.ng_outcomes == ()


def test_ratios_and_empty_set():
    empty = ResultSet()
    assert empty.ok_ratio == 0.0 and empty.ng_ratio == 0.0
    results = ResultSet()
    for i in range(4):
        results.record(_outcome(i, ok=i == 0))
    assert results.ok_ratio == pytest.approx(0.25)
    assert results.ng_ratio == pytest.approx(0.75)


def test_outcomes_by_kind_and_snapshots():
    results = ResultSet()
    results.record(_outcome(1, ok=True))
    snapshot = results.ok_outcomes
    results.record(_outcome(2, ok=True))
    assert len(snapshot) == 1
    assert results.outcomes("OK") == results.ok_outcomes
    assert results.outcomes(Classification.NG) == ()


@pytest.mark.parametrize("capacity", [-1, 1.5, "3", None, True])
def test_invalid_capacity(capacity):
    with pytest.raises(ConfigurationError):
        ResultSet(ok_capacity=capacity)


def test_to_dict():
    results = ResultSet(ok_capacity=1, ng_capacity=1)
    results.record(_outcome(1, ok=True, y=0.75))
    payload = results.to_dict()
    assert payload["total"] == 1
    assert payload["ok"] == [{"iteration": 1, "parameters": {"x": 0.75}, "output": 0.75, "classification": "OK"}]
    assert payload["ng"] == []
