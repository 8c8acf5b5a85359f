"""
Foundation module tests: field.py, polynomial.py, domain.py
"""
import pytest
from py_ecc.fields import bn128_FQ as FQ
from py_ecc.fields import bn128_FQ2 as FQ2

from kzg_study.errors import (
    AlgebraError,
    ConfigMismatchError,
    DivisionByZeroError,
    NonInvertibleError,
    RemainderMismatchError,
)
from kzg_study.field import (
    ext_gcd,
    extension_field,
    is_quadratic_residue,
    prime_field,
)
from kzg_study.polynomial import Polynomial, fft, ifft, poly_div, lagrange_basis
from kzg_study.domain import (
    get_root_of_unity,
    get_roots_of_unity,
    vanishing_poly_eval,
    lagrange_basis_eval,
)


# =====================================================================
# FieldElement
# =====================================================================

class TestFieldElement:
    def test_creation_reduces(self, F7):
        """Values are reduced into [0, p)."""
        assert int(F7(0)) == 0
        assert int(F7(7)) == 0
        assert int(F7(10)) == 3
        assert int(F7(-1)) == 6

    def test_same_modulus_same_class(self):
        """prime_field caches one class per modulus."""
        assert prime_field(101) is prime_field(101)

    def test_invalid_modulus(self):
        """Modulus below 2 is rejected."""
        with pytest.raises(ValueError):
            prime_field(1)

    def test_addition(self, F7):
        """3 + 5 == 1 (mod 7)."""
        assert F7(3) + F7(5) == F7(1)
        assert F7(3).add(F7(5)) == F7(1)

    def test_subtraction_wrap(self, F7):
        """Subtraction wraps around the modulus."""
        assert F7(3) - F7(5) == F7(5)
        assert F7(0).subtract(F7(1)) == F7(6)

    def test_multiplication(self, F7):
        """3 · 5 == 1 (mod 7)."""
        assert F7(3) * F7(5) == F7(1)
        assert F7(6).multiply(F7(0)) == F7(0)

    def test_negate(self, F7):
        """-2 == 5 (mod 7)."""
        assert -F7(2) == F7(5)
        assert F7(0).negate() == F7(0)

    def test_int_operands_lifted(self, F7):
        """Plain ints are lifted into the field."""
        assert F7(3) + 5 == F7(1)
        assert 5 - F7(3) == F7(2)
        assert 2 * F7(4) == F7(1)

    def test_equality_with_int(self, F7):
        """F7(10) == 3."""
        assert F7(10) == 3
        assert F7(3) != F7(4)

    def test_inverse(self, F7):
        """3⁻¹ == 5 (mod 7), a · a⁻¹ == 1."""
        assert F7(3).inverse() == F7(5)
        for v in range(1, 7):
            assert F7(v) * F7(v).inverse() == F7(1)

    def test_inverse_of_zero(self, F7):
        """Zero has no inverse."""
        with pytest.raises(NonInvertibleError):
            F7(0).inverse()

    def test_non_invertible_composite(self):
        """5 has no inverse mod 15."""
        F15 = prime_field(15)
        with pytest.raises(NonInvertibleError):
            F15(5).inverse()
        # NonInvertibleError는 ZeroDivisionError / ValueError로도 잡힌다
        with pytest.raises(ZeroDivisionError):
            F15(5).inverse()
        with pytest.raises(ValueError):
            F15(6).inverse()

    def test_division(self, F7):
        """2 / 4 == 4 (mod 7)."""
        assert F7(2) / F7(4) == F7(4)
        assert F7(2).divide(F7(4)) == F7(4)

    def test_division_by_zero(self, F7):
        """Division by zero raises NonInvertibleError."""
        with pytest.raises(NonInvertibleError):
            F7(3) / F7(0)

    def test_pow(self, F7):
        """a^0 == 1 including 0^0."""
        assert F7(3) ** 0 == F7(1)
        assert F7(0) ** 0 == F7(1)
        assert F7(0) ** 5 == F7(0)
        assert F7(2).pow(3) == F7(1)

    def test_pow_f11(self):
        """2^5 == 10 (mod 11)."""
        F11 = prime_field(11)
        assert F11(2) ** 5 == F11(10)

    def test_pow_negative(self, F7):
        """Negative exponents go through the inverse."""
        assert F7(3) ** -1 == F7(5)
        assert F7(3) ** -2 == F7(5) * F7(5)

    def test_fermat_little_theorem(self, F101):
        """a^(p-1) == 1."""
        for v in (1, 2, 50, 100):
            assert F101(v) ** 100 == F101(1)

    def test_modulus_mismatch(self, F7):
        """Mixing moduli raises ConfigMismatchError."""
        F11 = prime_field(11)
        with pytest.raises(ConfigMismatchError):
            F7(1) + F11(1)
        with pytest.raises(ConfigMismatchError):
            F7(1) * F11(1)
        with pytest.raises(ConfigMismatchError):
            F7(F11(3))

    def test_errors_share_base(self):
        """All errors derive from AlgebraError(ValueError)."""
        assert issubclass(ConfigMismatchError, AlgebraError)
        assert issubclass(AlgebraError, ValueError)

    def test_hashable(self, F7):
        """Equal elements hash equal."""
        assert len({F7(1), F7(8), F7(2)}) == 2

    def test_hash_matches_int(self, F7):
        """Elements and their int representative share a hash."""
        assert 3 in {F7(3)}
        assert F7(3) in {3}
        assert hash(F7(10)) == hash(3)
        assert {F7(3): "a"}[3] == "a"

    def test_int_equality_canonical_only(self, F7):
        """Ints equal an element only as the canonical representative."""
        assert F7(3) == 3
        assert F7(3) != 10
        assert F7(6) != -1

    def test_repr(self, F101):
        """repr shows field and value."""
        assert repr(F101(3)) == "F101(3)"

    def test_ext_gcd(self):
        """s·a + t·b == gcd(a, b)."""
        s, t, g = ext_gcd(240, 46)
        assert g == 2
        assert 240 * s + 46 * t == 2

    def test_quadratic_residue(self, F101):
        """Euler criterion for squares mod 101."""
        assert is_quadratic_residue(F101(4))
        assert not is_quadratic_residue(F101(-2))
        assert not is_quadratic_residue(F101(0))


# =====================================================================
# FieldElementExt
# =====================================================================

class TestFieldElementExt:
    def test_u_squared(self, F101_2):
        """u² == -2."""
        u = F101_2(0, 1)
        assert u * u == F101_2(-2)
        assert u * u == F101_2(99, 0)

    def test_multiply(self, F101_2):
        """(1 + u)(1 - u) == 3."""
        # (1 + u)(1 - u) = 1 - u² = 3
        assert F101_2(1, 1) * F101_2(1, -1) == F101_2(3)

    def test_add_sub_negate(self, F101_2):
        """Addition wraps per component."""
        x = F101_2(3, 7)
        y = F101_2(100, 95)
        assert x + y == F101_2(2, 1)
        assert x - x == F101_2.zero()
        assert x + (-x) == F101_2.zero()

    def test_base_lift(self, F101, F101_2):
        """Base elements and ints lift to a + 0·u."""
        x = F101_2(3, 7)
        assert x + F101(1) == F101_2(4, 7)
        assert 2 * x == F101_2(6, 14)
        assert F101_2.from_base(F101(5)) == F101(5)

    def test_conjugate_norm(self, F101_2):
        """x · conj(x) == norm(x)."""
        x = F101_2(3, 7)
        assert x * x.conjugate() == F101_2(x.norm())

    def test_inverse(self, F101_2):
        """x · x⁻¹ == 1."""
        for a, b in ((1, 0), (3, 7), (0, 31), (100, 100)):
            x = F101_2(a, b)
            assert x * x.inverse() == F101_2.one()
            assert x / x == F101_2.one()

    def test_inverse_of_zero(self, F101_2):
        """Zero has no inverse in the extension."""
        with pytest.raises(NonInvertibleError):
            F101_2.zero().inverse()

    def test_hash_consistent(self, F101, F101_2):
        """Hash agrees with base elements and ints when b == 0."""
        assert hash(F101_2(5, 0)) == hash(F101(5)) == hash(5)
        assert F101(5) in {F101_2(5, 0)}
        assert len({F101_2(3, 7), F101_2(3, 7), F101_2(3, 8)}) == 2

    def test_pow(self, F101_2):
        """x^(p² - 1) == 1."""
        x = F101_2(3, 7)
        assert x ** 0 == F101_2.one()
        assert x ** 3 == x * x * x
        # 확대체의 곱셈군 위수는 p² - 1
        assert x ** (101 * 101 - 1) == F101_2.one()

    def test_residue_rejected(self, F101):
        """A quadratic residue cannot build an extension."""
        with pytest.raises(ConfigMismatchError):
            extension_field(F101, 4)
        with pytest.raises(ConfigMismatchError):
            extension_field(F101, 0)

    def test_extension_mismatch(self, F101_2):
        """Mixing extensions raises ConfigMismatchError."""
        other = extension_field(prime_field(103), -1)
        with pytest.raises(ConfigMismatchError):
            F101_2(1, 1) + other(1, 1)

    def test_matches_py_ecc_fq2(self):
        """bn128의 F_p² (u² = -1)에서 py_ecc FQ2와 결과가 같다."""
        F2 = extension_field(prime_field(FQ.field_modulus), -1)
        x, y = F2(3, 7), F2(11, 13)
        x_ref, y_ref = FQ2([3, 7]), FQ2([11, 13])

        def to_ints(v):
            return [int(c) for c in v.coeffs]

        prod = x * y
        assert [int(prod.a), int(prod.b)] == to_ints(x_ref * y_ref)
        inv = x.inverse()
        assert [int(inv.a), int(inv.b)] == to_ints(x_ref.inv())
        q = x / y
        assert [int(q.a), int(q.b)] == to_ints(x_ref / y_ref)


# =====================================================================
# Polynomial
# =====================================================================

class TestPolynomial:
    def test_trailing_zeros_trimmed(self, F7):
        """Trailing zero coefficients are trimmed."""
        p = Polynomial([1, 2, 0, 0], F7)
        assert p.coeffs == (F7(1), F7(2))
        assert p.degree == 1

    def test_zero_polynomial(self, F7):
        """Zero polynomial is (0,) with degree 0."""
        z = Polynomial([], F7)
        assert z.is_zero()
        assert z.coeffs == (F7(0),)
        assert z.degree == 0
        assert Polynomial([0, 0], F7) == Polynomial.zero(F7)

    def test_field_inferred(self, F7):
        """Field is inferred from FieldElement coefficients."""
        p = Polynomial([F7(1), 2])
        assert p.field is F7

    def test_field_required_for_ints(self):
        """Int-only coefficients need an explicit field."""
        with pytest.raises(ConfigMismatchError):
            Polynomial([1, 2])

    def test_evaluate(self, F101):
        """Horner evaluation: p(2) == 17."""
        p = Polynomial([1, 2, 3], F101)
        assert p.evaluate(2) == F101(17)
        assert p.evaluate(0) == F101(1)

    def test_add_sub(self, F17):
        """Pointwise add and subtract with zero padding."""
        p = Polynomial([1, 2], F17)
        q = Polynomial([3, 4, 5], F17)
        assert p + q == Polynomial([4, 6, 5], F17)
        assert q - p == Polynomial([2, 2, 5], F17)
        assert p - p == Polynomial.zero(F17)

    def test_multiply(self, F17):
        """Convolution length == len(a) + len(b) - 1."""
        p = Polynomial([1, 2], F17)
        q = Polynomial([3, 4], F17)
        product = p * q
        assert product == Polynomial([3, 10, 8], F17)
        assert len(product) == len(p) + len(q) - 1

    def test_scalar_mul(self, F17):
        """Scalar multiplication scales every coefficient."""
        p = Polynomial([1, 2], F17)
        assert p.scalar_mul(3) == Polynomial([3, 6], F17)
        assert p * F17(3) == Polynomial([3, 6], F17)

    def test_mixed_field_rejected(self, F7, F17):
        """Polynomials over different fields cannot mix."""
        with pytest.raises(ConfigMismatchError):
            Polynomial([1], F7) + Polynomial([1], F17)

    def test_divide(self, F7):
        """(1 + 2x + 3x²) / (2 + x) == (3 + 3x, 2) over F7."""
        # (1 + 2x + 3x²) / (2 + x) = 3 + 3x, 나머지 2
        a = Polynomial([1, 2, 3], F7)
        b = Polynomial([2, 1], F7)
        q, r = a.divide(b)
        assert q == Polynomial([3, 3], F7)
        assert r == Polynomial([2], F7)
        assert q * b + r == a

    def test_divide_exact(self, F17):
        """Exact division leaves a zero remainder."""
        a = Polynomial([1, 2], F17) * Polynomial([5, 1], F17)
        q, r = poly_div(a, Polynomial([5, 1], F17))
        assert q == Polynomial([1, 2], F17)
        assert r.is_zero()

    def test_divide_by_constant(self, F17):
        """Constant divisor is scalar division."""
        q, r = Polynomial([2, 4], F17).divide(Polynomial([2], F17))
        assert q == Polynomial([1, 2], F17)
        assert r.is_zero()

    def test_divide_lower_degree(self, F17):
        """Lower-degree dividend is the remainder."""
        a = Polynomial([1, 2], F17)
        q, r = a.divide(Polynomial([1, 0, 1], F17))
        assert q.is_zero()
        assert r == a

    def test_divide_by_zero(self, F7):
        """Division by the zero polynomial is rejected."""
        with pytest.raises(DivisionByZeroError):
            Polynomial([1, 2], F7).divide(Polynomial.zero(F7))

    def test_vanishing_polynomial(self, F7):
        """x² - 1 over F7 == [6, 0, 1]."""
        z = Polynomial.vanishing_polynomial(2, F7)
        assert z.coeffs == (F7(6), F7(0), F7(1))
        assert z.evaluate(1) == 0
        assert z.evaluate(6) == 0

    def test_vanishing_polynomial_invalid(self, F7):
        """Domain size 0 is rejected."""
        with pytest.raises(ValueError):
            Polynomial.vanishing_polynomial(0, F7)

    def test_divide_by_vanishing(self, F17):
        """Exact division by x^n - 1, mismatch otherwise."""
        z = Polynomial.vanishing_polynomial(2, F17)
        p = z * Polynomial([1, 1], F17)
        assert p.divide_by_vanishing(2) == Polynomial([1, 1], F17)
        with pytest.raises(RemainderMismatchError):
            (p + 1).divide_by_vanishing(2)

    def test_lagrange_interpolate(self, F7):
        """Interpolated polynomial passes through every point."""
        points = [(0, 1), (1, 2), (2, 4)]
        p = Polynomial.lagrange_interpolate(points, F7)
        assert p.degree <= 2
        for x, y in points:
            assert p.evaluate(x) == y

    def test_lagrange_interpolate_single_point(self, F17):
        """A single point gives a constant."""
        p = Polynomial.lagrange_interpolate([(F17(3), F17(5))])
        assert p == Polynomial([5], F17)

    def test_lagrange_interpolate_empty(self, F7):
        """Interpolation needs at least one point."""
        with pytest.raises(ValueError):
            Polynomial.lagrange_interpolate([], F7)

    def test_lagrange_interpolate_duplicate_x(self, F7):
        """Duplicate x-coordinates raise DivisionByZeroError."""
        with pytest.raises(DivisionByZeroError):
            Polynomial.lagrange_interpolate([(1, 2), (1, 3)], F7)

    def test_lagrange_basis_delta(self, F17):
        """L_i(d_j) == δ_ij."""
        domain = [F17(1), F17(2), F17(5)]
        for i in range(3):
            L = lagrange_basis(domain, i)
            for j, d in enumerate(domain):
                assert L.evaluate(d) == (1 if i == j else 0)

    def test_repr(self, F7):
        """repr lists nonzero terms."""
        assert repr(Polynomial([1, 0, 3], F7)) == "Poly(1 + 3*x^2)"
        assert repr(Polynomial.zero(F7)) == "Poly(0)"


# =====================================================================
# FFT / evaluation domain
# =====================================================================

class TestDomain:
    def test_root_of_unity(self, F17):
        """ω^4 == 1 and ω^2 != 1."""
        omega = get_root_of_unity(4, F17)
        assert omega ** 4 == 1
        assert omega ** 2 != 1

    def test_root_of_unity_one(self, F17):
        """The first root of unity is 1."""
        assert get_root_of_unity(1, F17) == 1

    def test_root_of_unity_invalid(self, F17):
        """3 does not divide 16."""
        with pytest.raises(ValueError):
            get_root_of_unity(3, F17)

    def test_roots_of_unity(self, F17):
        """Eight distinct 8th roots of unity."""
        roots = get_roots_of_unity(8, F17)
        assert len(roots) == 8
        assert len(set(roots)) == 8
        assert roots[0] == 1
        for r in roots:
            assert r ** 8 == 1

    def test_vanishing_poly_eval(self, F17):
        """Z_H vanishes on the domain and matches x^n - 1."""
        for r in get_roots_of_unity(4, F17):
            assert vanishing_poly_eval(4, r) == 0
        z = Polynomial.vanishing_polynomial(4, F17)
        assert vanishing_poly_eval(4, F17(3)) == z.evaluate(3)

    def test_lagrange_basis_eval(self, F17):
        """Closed-form L_i(ζ) matches the coefficient form."""
        n = 4
        omega = get_root_of_unity(n, F17)
        domain = get_roots_of_unity(n, F17)
        for i in range(n):
            for j in range(n):
                assert lagrange_basis_eval(i, n, omega, domain[j]) == (1 if i == j else 0)
            # 도메인 밖의 점에서도 계수 형태와 일치
            assert lagrange_basis_eval(i, n, omega, F17(3)) == lagrange_basis(domain, i).evaluate(3)

    def test_fft_matches_evaluate(self, F17):
        """FFT equals evaluation at the powers of ω."""
        omega = get_root_of_unity(4, F17)
        p = Polynomial([1, 2, 3, 4], F17)
        evals = fft(list(p.coeffs), omega)
        assert evals == [p.evaluate(omega ** i) for i in range(4)]

    def test_fft_ifft_inverse(self, F17):
        """IFFT undoes FFT."""
        omega = get_root_of_unity(8, F17)
        coeffs = [F17(c) for c in (5, 0, 3, 16, 1, 1, 0, 2)]
        assert ifft(fft(coeffs, omega), omega) == coeffs

    def test_fft_invalid_length(self, F17):
        """FFT length must be a power of two."""
        with pytest.raises(ValueError):
            fft([F17(1), F17(2), F17(3)], get_root_of_unity(4, F17))

    def test_from_evaluations(self, F17):
        """from_evaluations recovers the polynomial."""
        omega = get_root_of_unity(4, F17)
        p = Polynomial([7, 0, 1], F17)
        evals = [p.evaluate(omega ** i) for i in range(4)]
        assert Polynomial.from_evaluations(evals, omega) == p
