from ofituner.constants import (
    NUM_ALGORITHMS,
    NUM_FUNCTIONS,
    NUM_PROTOCOLS,
    Algorithm,
    CollFunc,
    Platform,
    Protocol,
    TunerType,
)


def test_algorithm_count_matches_table_width():
    defined = [a for a in Algorithm if a != Algorithm.UNDEF]
    assert len(defined) == NUM_ALGORITHMS
    assert sorted(int(a) for a in defined) == list(range(NUM_ALGORITHMS))
    assert [Algorithm(int(a)) for a in defined] == defined


def test_algorithm_lookup_by_value():
    assert Algorithm(0) is Algorithm.TREE
    assert Algorithm(1) is Algorithm.RING
    assert Algorithm(5) is Algorithm.NVLS_TREE
    assert Algorithm(6) is Algorithm.PAT


def test_protocol_count_matches_table_width():
    defined = [p for p in Protocol if p != Protocol.UNDEF]
    assert sorted(int(p) for p in defined) == list(range(NUM_PROTOCOLS))
    assert Protocol(0) is Protocol.LL
    assert Protocol(1) is Protocol.LL128
    assert Protocol(2) is Protocol.SIMPLE


def test_function_count():
    assert sorted(int(f) for f in CollFunc) == list(range(NUM_FUNCTIONS))
    assert [CollFunc(int(f)) for f in CollFunc] == list(CollFunc)


def test_tuner_type_values():
    assert TunerType(0) is TunerType.REGION
    assert TunerType(1) is TunerType.MODEL


def test_platform_max_is_unknown():
    assert Platform["PLATFORM_MAX"] is Platform.UNKNOWN
    assert Platform(0) is Platform.P5_P5E
    assert Platform(1) is Platform.P5EN