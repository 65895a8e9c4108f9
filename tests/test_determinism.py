# tests/test_determinism.py
import copy

import parakontra


def test_identical_runs_identical_outputs():
    contract = parakontra.define_contract(
        {
            "ids": {"type": "list", "length": {"min": 1, "max": 3}},
            "status": {"in": {"b", "a", "c"}},
            "meta": {"type": "map", "inner": {"k": {"type": "string", "required": True}}},
        }
    )
    values = {"ids": [], "status": "z", "meta": {"k": 1}}
    snapshot = copy.deepcopy(values)

    out1 = parakontra.validate(contract, values)
    out2 = parakontra.validate(contract, values)

    assert out1 == out2
    assert out1.to_json() == out2.to_json()
    assert out1.errors["status"] == ["must be one of ['a', 'b', 'c']"]
    # inputs are never mutated
    assert values == snapshot


def test_contract_shared_across_threads():
    from concurrent.futures import ThreadPoolExecutor

    contract = parakontra.define_contract({"n": {"type": "integer", "numericality": {"gte": 0}}})
    inputs = [{"n": i - 50} for i in range(100)]

    with ThreadPoolExecutor(max_workers=8) as pool:
        outcomes = list(pool.map(lambda v: parakontra.validate(contract, v), inputs))

    assert [o.passed for o in outcomes] == [v["n"] >= 0 for v in inputs]
