# tests/test_convert.py
import logging

import pytest

from densesparse import asdense, assparse, denselist, is_denselist, is_sparselist, safe_to_dense, sparselist


# ---------------------
# asdense / assparse
# ---------------------
def test_asdense():
    """Test asdense wraps a copy of the sequence."""
    source = [1, 2, 3]
    dl = asdense(source)
    assert isinstance(dl, denselist)
    assert dl.to_list() == [1, 2, 3]
    source.append(4)
    assert len(dl) == 3


def test_asdense_does_not_validate():
    """Test asdense trusts the caller even when None is present."""
    dl = asdense([1, None])
    assert len(dl) == 2


@pytest.mark.parametrize(
    "data, expected_list",
    [
        ([1, None, 3], [1, None, 3]),
        ({0: "a", 2: "c"}, ["a", None, "c"]),
        ([], []),
    ],
    ids=["list", "dict", "empty"],
)
def test_assparse(data, expected_list):
    """Test assparse builds a sparselist with holes where values are missing."""
    sl = assparse(data)
    assert isinstance(sl, sparselist)
    assert sl.to_list() == expected_list


# ---------------------
# Type predicates
# ---------------------
@pytest.mark.parametrize(
    "value, dense, sparse",
    [
        (denselist(), True, False),
        (sparselist(), False, True),
        ([1, 2, 3], False, False),
        (None, False, False),
        ({}, False, False),
        ("test", False, False),
    ],
    ids=["denselist", "sparselist", "list", "none", "dict", "string"],
)
def test_type_predicates(value, dense, sparse):
    """Test the predicates tell the two containers apart by type, not shape."""
    assert is_denselist(value) is dense
    assert is_sparselist(value) is sparse


def test_type_predicates_same_contents():
    """Test containers with identical contents are still told apart."""
    dl = denselist([1, 2])
    sl = sparselist([1, 2])
    assert is_denselist(dl) and not is_denselist(sl)
    assert is_sparselist(sl) and not is_sparselist(dl)


# ---------------------
# safe_to_dense
# ---------------------
@pytest.mark.parametrize(
    "data, expected_list",
    [
        ([1, 2, 3], [1, 2, 3]),
        ((1, 2), [1, 2]),
        ([], []),
        ({0: "a", 1: "b"}, ["a", "b"]),
        (sparselist([1, 2]), [1, 2]),
        (denselist([4]), [4]),
        ([0, False, ""], [0, False, ""]),
    ],
    ids=["list", "tuple", "empty", "contiguous_dict", "sparselist_without_holes", "denselist", "falsy"],
)
def test_safe_to_dense_accepts(data, expected_list):
    """Test conversion succeeds when there are no holes."""
    result = safe_to_dense(data)
    assert isinstance(result, denselist)
    assert result.to_list() == expected_list


@pytest.mark.parametrize(
    "data",
    [
        [1, None, 3],
        [None],
        {0: 1, 2: 3},
        {1: "b"},
        {0: None},
        sparselist([1, None, 3]),
        sparselist(None, size=2),
    ],
    ids=["none_value", "only_none", "dict_gap", "dict_missing_start", "dict_none", "sparselist_hole", "all_holes"],
)
def test_safe_to_dense_rejects(data):
    """Test conversion reports failure as None when any hole exists."""
    assert safe_to_dense(data) is None


def test_safe_to_dense_from_grown_sparselist():
    """Test a sparselist whose holes were created by growth is rejected."""
    sl = sparselist()
    sl.set(2, "c")
    assert safe_to_dense(sl) is None
    sl.set(0, "a")
    sl.set(1, "b")
    assert safe_to_dense(sl) == ["a", "b", "c"]


def test_safe_to_dense_result_is_independent():
    """Test the converted denselist does not share storage with its source."""
    source = denselist([1, 2])
    result = safe_to_dense(source)
    result.append(3)
    assert len(source) == 2


def test_safe_to_dense_logs_rejection(caplog):
    """Test rejections are traced at debug level."""
    caplog.set_level(logging.DEBUG, logger="densesparse.convert")
    safe_to_dense([1, None])
    assert "Rejected sequence with None at index 1" in caplog.text
