import pytest

from core.enums import FinalizePolicy


def test_iterability_and_uniqueness():
    values = [m.value for m in FinalizePolicy]
    assert len(values) == len(set(values))
    assert set(FinalizePolicy) == {FinalizePolicy.ROLLBACK_ON_ERROR, FinalizePolicy.ALWAYS_COMMIT}


@pytest.mark.parametrize(
    "value,expected",
    [
        (FinalizePolicy.ALWAYS_COMMIT, FinalizePolicy.ALWAYS_COMMIT),
        ("rollback_on_error", FinalizePolicy.ROLLBACK_ON_ERROR),
        ("always_commit", FinalizePolicy.ALWAYS_COMMIT),
        ("ALWAYS_COMMIT", FinalizePolicy.ALWAYS_COMMIT),
        ("Rollback-On-Error", FinalizePolicy.ROLLBACK_ON_ERROR),
        (" rollback ", FinalizePolicy.ROLLBACK_ON_ERROR),
        ("strict", FinalizePolicy.ROLLBACK_ON_ERROR),
        ("commit", FinalizePolicy.ALWAYS_COMMIT),
        ("always", FinalizePolicy.ALWAYS_COMMIT),
    ],
)
def test_from_any_valid(value, expected):
    assert FinalizePolicy.from_any(value) is expected


@pytest.mark.parametrize("bad", ["", "sometimes", None, 1, []])
def test_from_any_invalid_raises(bad):
    with pytest.raises(ValueError):
        FinalizePolicy.from_any(bad)


def test_commits_on_error():
    assert FinalizePolicy.ALWAYS_COMMIT.commits_on_error()
    assert not FinalizePolicy.ROLLBACK_ON_ERROR.commits_on_error()


def test_labels_are_human_friendly():
    assert FinalizePolicy.ROLLBACK_ON_ERROR.label == "Rollback on error"
    assert FinalizePolicy.ALWAYS_COMMIT.label == "Always commit"
