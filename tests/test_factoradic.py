"""Tests for the factoradic counter."""

import math

import numpy as np
import pytest

from lexperm.errors import FactoradicOverflowError, InvalidDigitError
from lexperm.factoradic import Factoradic


class TestConstruction:
    """Tests for Factoradic(), new() and from_digits()."""

    def test_new_is_zero(self):
        f = Factoradic.new(3)
        np.testing.assert_array_equal(f.digits, [0, 0, 0])
        assert f.has_overflowed is False
        assert f.size == 3
        assert len(f) == 3

    def test_size_zero_is_legal(self):
        f = Factoradic(0)
        assert f.size == 0
        assert f.has_overflowed is False

    def test_negative_size_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            Factoradic(-1)

    def test_from_digits_accepts_maximum(self):
        f = Factoradic.from_digits([5, 4, 3, 2, 1, 0])
        np.testing.assert_array_equal(f.digits, [5, 4, 3, 2, 1, 0])
        assert f.has_overflowed is False

    def test_from_digits_empty(self):
        assert Factoradic.from_digits([]) == Factoradic(0)

    @pytest.mark.parametrize(
        "digits",
        [[1], [2, 0], [3, 0, 0], [4, 0, 0, 0], [5, 0, 0, 0, 0]],
    )
    def test_from_digits_rejects_leading_overflow(self, digits):
        with pytest.raises(InvalidDigitError, match="position 0"):
            Factoradic.from_digits(digits)

    def test_rejects_nonzero_last_digit(self):
        with pytest.raises(InvalidDigitError) as excinfo:
            Factoradic.from_digits([0, 0, 1])
        assert excinfo.value.position == 2
        assert excinfo.value.digit == 1
        assert excinfo.value.maximum == 0

    def test_rejects_negative_digit(self):
        with pytest.raises(InvalidDigitError):
            Factoradic.from_digits([-1, 0])

    def test_invalid_digit_is_value_error(self):
        with pytest.raises(ValueError):
            Factoradic.from_digits([5, 0, 0, 0, 0])

    def test_rejects_non_integer_digits(self):
        with pytest.raises(TypeError, match="integers"):
            Factoradic.from_digits([0.5, 0.0])

    @pytest.mark.parametrize("digits", [[2**64, 0], [2**63, -1, 0]])
    def test_rejects_digits_beyond_int64(self, digits):
        with pytest.raises(InvalidDigitError) as excinfo:
            Factoradic.from_digits(digits)
        assert excinfo.value.position == 0
        assert excinfo.value.digit == digits[0]

    def test_rejects_nested_sequences(self):
        with pytest.raises(TypeError, match="integers"):
            Factoradic.from_digits([[]])
        with pytest.raises(TypeError, match="integers"):
            Factoradic.from_digits([[1], [0]])

    def test_accepts_numpy_integer_digits(self):
        f = Factoradic.from_digits(np.array([2, 1, 0], dtype=np.uint8))
        assert f.to_integer() == 5

    def test_from_digits_copies_input(self):
        src = np.array([1, 0], dtype=np.intp)
        f = Factoradic.from_digits(src)
        src[0] = 0
        np.testing.assert_array_equal(f.digits, [1, 0])


class TestIncrement:
    """Tests for the mixed-radix carry."""

    def test_sequence_of_size_three(self):
        f = Factoradic(3)
        expected = [
            [0, 1, 0],
            [1, 0, 0],
            [1, 1, 0],
            [2, 0, 0],
            [2, 1, 0],
        ]
        for digits in expected:
            f.increment()
            assert f == Factoradic.from_digits(digits)

    def test_overflow_wraps_to_zero(self):
        f = Factoradic.from_digits([2, 1, 0])
        f.increment()
        assert f.has_overflowed is True
        np.testing.assert_array_equal(f.digits, [0, 0, 0])

    def test_overflowed_increment_is_noop(self):
        f = Factoradic.from_digits([1, 0])
        f.increment()
        f.increment()
        f.increment()
        assert f.has_overflowed is True
        np.testing.assert_array_equal(f.digits, [0, 0])

    def test_returns_self(self):
        f = Factoradic(3)
        assert f.increment().increment() is f
        assert f.to_integer() == 2

    def test_size_zero_overflows_on_first_increment(self):
        f = Factoradic(0)
        f.increment()
        assert f.has_overflowed is True

    def test_size_one_overflows_on_first_increment(self):
        f = Factoradic(1)
        f.increment()
        assert f.has_overflowed is True

    @pytest.mark.parametrize("n", [0, 1, 2, 3, 4, 5])
    def test_k_increments_give_ordinal_k(self, n):
        f = Factoradic(n)
        for k in range(math.factorial(n)):
            assert f.has_overflowed is False
            assert f.to_integer() == k
            f.increment()
        assert f.has_overflowed is True

    def test_overflowed_is_not_equal_to_zero(self):
        wrapped = Factoradic.from_digits([1, 0]).increment()
        assert wrapped != Factoradic(2)


class TestToInteger:
    """Tests for the ordinal conversion."""

    @pytest.mark.parametrize(
        "digits, expected",
        [
            ([0, 0, 0], 0),
            ([0, 1, 0], 1),
            ([1, 0, 0], 2),
            ([1, 1, 0], 3),
            ([2, 0, 0], 4),
            ([2, 1, 0], 5),
        ],
    )
    def test_size_three(self, digits, expected):
        assert Factoradic.from_digits(digits).to_integer() == expected

    def test_maximum_is_factorial_minus_one(self):
        f = Factoradic.from_digits(list(range(9, -1, -1)))
        assert f.to_integer() == math.factorial(10) - 1

    def test_size_twenty_fits_uint64(self):
        f = Factoradic.from_digits(list(range(19, -1, -1)))
        assert f.to_integer() == math.factorial(20) - 1
        assert f.to_integer() < 2**64

    def test_warns_beyond_uint64_range(self):
        with pytest.warns(RuntimeWarning, match="64-bit"):
            Factoradic(21).to_integer()

    def test_overflowed_raises(self):
        f = Factoradic.from_digits([1, 0]).increment()
        with pytest.raises(FactoradicOverflowError):
            f.to_integer()


class TestFromInteger:
    """Tests for Factoradic.from_integer."""

    def test_known_value(self):
        assert Factoradic.from_integer(3, 3) == Factoradic.from_digits([1, 1, 0])

    def test_inverse_of_to_integer(self):
        for k in range(math.factorial(5)):
            assert Factoradic.from_integer(k, 5).to_integer() == k

    def test_out_of_range(self):
        with pytest.raises(ValueError, match="ordinal"):
            Factoradic.from_integer(6, 3)
        with pytest.raises(ValueError, match="ordinal"):
            Factoradic.from_integer(-1, 3)

    def test_size_zero(self):
        assert Factoradic.from_integer(0, 0) == Factoradic(0)


class TestToPermutation:
    """Tests for Lehmer decoding."""

    @pytest.mark.parametrize(
        "digits, expected",
        [
            ([0, 0, 0], [0, 1, 2]),
            ([0, 1, 0], [0, 2, 1]),
            ([1, 0, 0], [1, 0, 2]),
            ([1, 1, 0], [1, 2, 0]),
            ([2, 0, 0], [2, 0, 1]),
            ([2, 1, 0], [2, 1, 0]),
            ([0, 0, 0, 0], [0, 1, 2, 3]),
        ],
    )
    def test_known_decodings(self, digits, expected):
        perm = Factoradic.from_digits(digits).to_permutation()
        np.testing.assert_array_equal(perm, expected)

    def test_last_is_reverse(self):
        perm = Factoradic.from_digits([3, 2, 1, 0]).to_permutation()
        np.testing.assert_array_equal(perm, [3, 2, 1, 0])

    @pytest.mark.parametrize("backend", ["scan", "fenwick"])
    def test_every_value_is_a_permutation(self, backend):
        n = 5
        f = Factoradic(n)
        seen = set()
        while not f.has_overflowed:
            perm = f.to_permutation(backend=backend)
            assert sorted(perm.tolist()) == list(range(n))
            seen.add(tuple(perm.tolist()))
            f.increment()
        assert len(seen) == math.factorial(n)

    def test_empty(self):
        perm = Factoradic(0).to_permutation()
        assert perm.shape == (0,)

    def test_overflowed_raises(self):
        f = Factoradic.from_digits([0]).increment()
        with pytest.raises(FactoradicOverflowError):
            f.to_permutation()


def test_repr():
    assert repr(Factoradic.from_digits([1, 0])) == (
        "Factoradic(digits=[1, 0], has_overflowed=False)"
    )
