from debtor.services.mode import DEFAULT_EXACT_THRESHOLD, SolveMode, select_mode


def test_default_threshold():
    assert DEFAULT_EXACT_THRESHOLD == 20
    assert select_mode(20) is SolveMode.EXACT
    assert select_mode(21) is SolveMode.APPROX


def test_custom_threshold():
    assert select_mode(5, threshold=4) is SolveMode.APPROX
    assert select_mode(4, threshold=4) is SolveMode.EXACT


def test_forced_mode_wins():
    assert select_mode(100, forced=SolveMode.EXACT) is SolveMode.EXACT
    assert select_mode(2, forced=SolveMode.APPROX) is SolveMode.APPROX


def test_empty_population_is_exact():
    assert select_mode(0) is SolveMode.EXACT
