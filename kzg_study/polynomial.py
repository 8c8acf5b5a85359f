"""
KZG 스터디 기반 모듈: 다항식(Polynomial) 클래스와 FFT
======================================================

이 모듈은 KZG 커밋먼트에서 사용되는 모든 다항식 연산을 제공한다.

**Polynomial 클래스**:
  계수(coefficient) 표현 기반의 밀집(dense) 다항식. p(x) = c₀ + c₁·x + c₂·x² + ...
  모든 계수는 같은 유한체(prime_field)의 원소이며, 다른 필드의 다항식과 섞으면
  ConfigMismatchError가 발생한다.

**다항식 나눗셈 (poly_div)**:
  KZG 열기 증명의 핵심이다. p(z) = y 이면 (x - z)가 p(x) - y를 나누므로
  몫 q(x) = (p(x) - y) / (x - z)가 다항식이 된다.

**Lagrange 보간**:
  k개의 점 (xᵢ, yᵢ)을 지나는 유일한 (k-1)차 이하 다항식을 구성한다.

**FFT/IFFT (Number Theoretic Transform)**:
  2의 거듭제곱 크기 평가 도메인 위에서 계수 표현 ↔ 평가 표현 변환.

사용 예시:
    >>> from kzg_study.field import prime_field
    >>> from kzg_study.polynomial import Polynomial
    >>> F7 = prime_field(7)
    >>> p = Polynomial([1, 2, 3], F7)   # 1 + 2x + 3x²
    >>> p.evaluate(2)                  # 1 + 4 + 12 = 17 ≡ F7(3)
"""

from kzg_study.errors import (
    ConfigMismatchError,
    DivisionByZeroError,
    RemainderMismatchError,
)
from kzg_study.field import FieldElement


# ─────────────────────────────────────────────────────────────────────
# Polynomial 클래스
# ─────────────────────────────────────────────────────────────────────

class Polynomial:
    """유한체 위의 다항식.

    계수 튜플로 표현: coeffs = (c₀, c₁, c₂, ...) → c₀ + c₁x + c₂x² + ...
    최고차 계수가 0인 항은 항상 제거되며, 영 다항식은 (0,) 이다.
    모든 연산은 새 Polynomial을 반환한다 (불변 객체).

    KZG에서의 역할:
    - 커밋 대상 다항식 p(x)
    - 열기 증명의 몫 다항식 q(x) = (p(x) - y) / (x - z)

    예시:
        >>> F17 = prime_field(17)
        >>> p = Polynomial([1, 2], F17)   # 1 + 2x
        >>> q = Polynomial([3, 4], F17)   # 3 + 4x
        >>> p + q                         # 4 + 6x
        >>> p * q                         # 3 + 10x + 8x²
    """

    def __init__(self, coeffs=None, field=None):
        """다항식 생성.

        Args:
            coeffs: 계수 리스트 [c₀, c₁, ...]. FieldElement 또는 정수.
                    None이거나 비어 있으면 영 다항식을 생성한다.
            field: 계수 필드 클래스. 생략하면 FieldElement 계수에서 추론한다.

        Raises:
            ConfigMismatchError: 필드를 알 수 없거나 계수의 모듈러스가 다를 때
        """
        coeffs = list(coeffs) if coeffs is not None else []
        if field is None:
            for c in coeffs:
                if isinstance(c, FieldElement):
                    field = type(c)
                    break
            else:
                raise ConfigMismatchError(
                    "정수 계수만으로는 필드를 알 수 없습니다 (field 인자가 필요합니다)"
                )
        self.field = field
        normalized = [field(c) for c in coeffs] or [field(0)]
        # 최고차 계수가 0인 항 제거: [1, 2, 0, 0] → [1, 2]
        while len(normalized) > 1 and normalized[-1].is_zero():
            normalized.pop()
        self.coeffs = tuple(normalized)

    def _coerce(self, other):
        """다른 피연산자를 같은 필드의 Polynomial로 변환한다."""
        if isinstance(other, Polynomial):
            if other.field.modulus != self.field.modulus:
                raise ConfigMismatchError(
                    f"다항식의 필드가 다릅니다: {self.field.modulus} != {other.field.modulus}"
                )
            return other
        if isinstance(other, (int, FieldElement)):
            return Polynomial([other], self.field)
        return NotImplemented

    @property
    def degree(self):
        """다항식의 차수. 영 다항식의 차수는 0으로 정의한다."""
        return len(self.coeffs) - 1

    def is_zero(self):
        """영 다항식인지 확인."""
        return len(self.coeffs) == 1 and self.coeffs[0].is_zero()

    def evaluate(self, point):
        """다항식을 주어진 점에서 평가한다 (Horner's method).

        Horner's method: p(x) = c₀ + x(c₁ + x(c₂ + ...))
        최고차 계수부터 누적하므로 곱셈이 n번이면 충분하다.

        Args:
            point: 평가할 점 (같은 필드의 원소 또는 정수)

        Returns:
            FieldElement: p(point) 값

        예시:
            >>> Polynomial([1, 2, 3], prime_field(101)).evaluate(2)   # F101(17)
        """
        point = self.field(point)
        result = self.field.zero()
        for coeff in reversed(self.coeffs):
            result = result * point + coeff
        return result

    def __add__(self, other):
        """다항식 덧셈: p(x) + q(x)."""
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        max_len = max(len(self.coeffs), len(other.coeffs))
        zero = self.field.zero()
        result = []
        for i in range(max_len):
            a = self.coeffs[i] if i < len(self.coeffs) else zero
            b = other.coeffs[i] if i < len(other.coeffs) else zero
            result.append(a + b)
        return Polynomial(result, self.field)

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        """다항식 뺄셈: p(x) - q(x)."""
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return self + (-other)

    def __rsub__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return other - self

    def __neg__(self):
        """다항식 부호 반전: -p(x)."""
        return Polynomial([-c for c in self.coeffs], self.field)

    def __mul__(self, other):
        """다항식 곱셈: p(x) · q(x) 또는 스칼라곱.

        다항식 × 다항식: O(n·m) 합성곱(convolution), 결과 길이 n + m - 1
        다항식 × 스칼라: 각 계수에 스칼라를 곱함
        """
        if isinstance(other, (int, FieldElement)):
            return self.scalar_mul(other)
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        result = [self.field.zero()] * (len(self.coeffs) + len(other.coeffs) - 1)
        for i, a in enumerate(self.coeffs):
            for j, b in enumerate(other.coeffs):
                result[i + j] = result[i + j] + a * b
        return Polynomial(result, self.field)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __eq__(self, other):
        """다항식 동등 비교."""
        if isinstance(other, (int, FieldElement)):
            other = Polynomial([other], self.field)
        if not isinstance(other, Polynomial):
            return NotImplemented
        return (self.field.modulus == other.field.modulus
                and self.coeffs == other.coeffs)

    def __hash__(self):
        return hash((self.field.modulus, self.coeffs))

    def __repr__(self):
        terms = []
        for i, c in enumerate(self.coeffs):
            if c.is_zero():
                continue
            if i == 0:
                terms.append(str(int(c)))
            elif i == 1:
                terms.append(f"{int(c)}*x")
            else:
                terms.append(f"{int(c)}*x^{i}")
        return "Poly(" + " + ".join(terms) + ")" if terms else "Poly(0)"

    def __len__(self):
        """계수 개수 반환 (차수 + 1)."""
        return len(self.coeffs)

    def scalar_mul(self, scalar):
        """스칼라곱: scalar · p(x).

        Args:
            scalar: 같은 필드의 원소 또는 정수

        Returns:
            Polynomial: scalar · p(x)
        """
        scalar = self.field(scalar)
        return Polynomial([c * scalar for c in self.coeffs], self.field)

    def divide(self, divisor):
        """다항식 나눗셈: self = quotient · divisor + remainder.

        Returns:
            tuple: (몫 Polynomial, 나머지 Polynomial)

        Raises:
            DivisionByZeroError: 제수가 영 다항식인 경우
        """
        return poly_div(self, divisor)

    def divide_by_vanishing(self, n):
        """소거 다항식 Z_H(x) = x^n - 1 로 나눈다.

        나머지가 0이 아니면 이 다항식이 도메인 H 전체에서 0이 되지 않는다는 뜻이다.

        Args:
            n: 도메인 크기 (Z_H(x) = x^n - 1의 n)

        Returns:
            Polynomial: 몫 다항식

        Raises:
            RemainderMismatchError: 나머지가 0이 아닌 경우
        """
        q, r = poly_div(self, Polynomial.vanishing_polynomial(n, self.field))
        if not r.is_zero():
            raise RemainderMismatchError("소거 다항식으로 나누어 떨어지지 않습니다")
        return q

    @classmethod
    def zero(cls, field):
        """영 다항식 p(x) = 0."""
        return cls([field(0)], field)

    @classmethod
    def one(cls, field):
        """상수 다항식 p(x) = 1."""
        return cls([field(1)], field)

    @classmethod
    def vanishing_polynomial(cls, n, field):
        """소거 다항식 Z_H(x) = x^n - 1.

        ∏(x - ωⁱ) 대신 x^n - 1을 바로 만든다. 도메인 H가 크기 n의
        곱셈 부분군이면 모든 원소가 x^n = 1을 만족하므로 두 식은 같다.
        계수는 [-1, 0, ..., 0, 1] (길이 n+1).

        예시:
            >>> F7 = prime_field(7)
            >>> z = Polynomial.vanishing_polynomial(2, F7)   # x² - 1
            >>> z.evaluate(1), z.evaluate(6)                 # (F7(0), F7(0))
        """
        if n < 1:
            raise ValueError(f"도메인 크기는 1 이상이어야 합니다: {n}")
        coeffs = [field(0)] * (n + 1)
        coeffs[0] = field(-1)
        coeffs[n] = field(1)
        return cls(coeffs, field)

    @classmethod
    def lagrange_interpolate(cls, points, field=None):
        """점들을 지나는 다항식을 Lagrange 보간으로 구성한다.

        P(x) = Σᵢ yᵢ · lᵢ(x),   lᵢ(x) = ∏_{j≠i} (x - xⱼ) / (xᵢ - xⱼ)

        k개의 점에 대해 O(k²)번의 다항식 곱셈이 필요하다.

        Args:
            points: (x, y) 쌍의 리스트
            field: 필드 클래스. 생략하면 좌표의 FieldElement에서 추론한다.

        Returns:
            Polynomial: 보간 다항식

        Raises:
            ValueError: 점이 하나도 없을 때
            DivisionByZeroError: x좌표가 중복될 때 (분모 xᵢ - xⱼ = 0)

        예시:
            >>> F7 = prime_field(7)
            >>> p = Polynomial.lagrange_interpolate([(0, 1), (1, 2), (2, 4)], F7)
            >>> [p.evaluate(x) for x in (0, 1, 2)]   # [F7(1), F7(2), F7(4)]
        """
        points = list(points)
        if not points:
            raise ValueError("보간에는 최소 한 개의 점이 필요합니다")
        if field is None:
            for x, y in points:
                for v in (x, y):
                    if isinstance(v, FieldElement):
                        field = type(v)
                        break
                if field is not None:
                    break
            else:
                raise ConfigMismatchError(
                    "정수 좌표만으로는 필드를 알 수 없습니다 (field 인자가 필요합니다)"
                )
        xs = [field(x) for x, _ in points]
        ys = [field(y) for _, y in points]
        if len(set(xs)) != len(xs):
            raise DivisionByZeroError("x좌표가 중복된 점으로는 보간할 수 없습니다")

        result = cls.zero(field)
        for i, y in enumerate(ys):
            result = result + lagrange_basis(xs, i) * y
        return result

    @classmethod
    def from_evaluations(cls, evals, omega):
        """평가값에서 다항식을 복원한다 (IFFT 사용).

        도메인 {1, ω, ω², ..., ω^(n-1)}에서의 평가값이 주어지면,
        이 값들을 보간하는 유일한 (n-1)차 이하 다항식을 반환한다.

        Args:
            evals: [p(1), p(ω), p(ω²), ...]
            omega: n차 원시 단위근

        Returns:
            Polynomial: 보간된 다항식
        """
        return cls(ifft(evals, omega), type(omega))


# ─────────────────────────────────────────────────────────────────────
# 다항식 나눗셈 (Synthetic / Long Division)
# ─────────────────────────────────────────────────────────────────────

def poly_div(a, b):
    """다항식 나눗셈: a(x) = b(x) · q(x) + r(x),  deg r < deg b.

    최고차항부터 하나씩 소거하는 긴 나눗셈(synthetic division)으로
    몫 q(x)와 나머지 r(x)를 계산한다.
    제수가 상수이면 스칼라 나눗셈으로 처리하고 나머지는 0이다.

    KZG에서의 사용:
    - 열기 증명에서 (p(x) - p(z)) / (x - z) 계산

    Args:
        a: 피제수 다항식 (Polynomial)
        b: 제수 다항식 (Polynomial)

    Returns:
        tuple: (몫 Polynomial, 나머지 Polynomial)

    Raises:
        DivisionByZeroError: 제수가 영 다항식인 경우
        ConfigMismatchError: 두 다항식의 필드가 다른 경우

    예시:
        >>> F7 = prime_field(7)
        >>> q, r = poly_div(Polynomial([1, 2, 3], F7), Polynomial([2, 1], F7))
        >>> q, r   # (Poly(3 + 3*x), Poly(2))
    """
    if a.field.modulus != b.field.modulus:
        raise ConfigMismatchError(
            f"다항식의 필드가 다릅니다: {a.field.modulus} != {b.field.modulus}"
        )
    if b.is_zero():
        raise DivisionByZeroError("영 다항식으로 나눌 수 없습니다")

    field = a.field
    if b.degree == 0:
        inv = b.coeffs[0].inverse()
        return Polynomial([c * inv for c in a.coeffs], field), Polynomial.zero(field)

    # 나머지를 복사 (수정할 것이므로)
    remainder = list(a.coeffs)
    divisor = b.coeffs
    deg_b = len(divisor) - 1
    deg_a = len(remainder) - 1

    if deg_a < deg_b:
        return Polynomial.zero(field), Polynomial(remainder, field)

    # 몫 계수 (최고차부터 계산)
    quotient = [field.zero()] * (deg_a - deg_b + 1)
    lead_inv = divisor[-1].inverse()  # 제수 최고차 계수의 역원

    for i in range(deg_a - deg_b, -1, -1):
        coeff = remainder[i + deg_b] * lead_inv
        quotient[i] = coeff
        for j in range(deg_b + 1):
            remainder[i + j] = remainder[i + j] - coeff * divisor[j]

    return Polynomial(quotient, field), Polynomial(remainder[:deg_b], field)


def lagrange_basis(domain, i):
    """i번째 Lagrange 기저 다항식 L_i(x)를 계수 형태로 반환한다.

    L_i(x) = ∏_{j≠i} (x - d_j) / (d_i - d_j)

    성질: L_i(d_j) = δ_{ij} (크로네커 델타)

    Args:
        domain: 같은 필드 원소의 리스트 [d₀, d₁, ..., d_{n-1}]
        i: 기저 인덱스

    Returns:
        Polynomial: L_i(x)

    Raises:
        DivisionByZeroError: 도메인에 d_i와 같은 원소가 또 있을 때
    """
    field = type(domain[i])
    result = Polynomial.one(field)
    denominator = field.one()

    for j, d in enumerate(domain):
        if j == i:
            continue
        # (x - d_j) 항을 곱한다
        result = result * Polynomial([-d, field.one()], field)
        denominator = denominator * (domain[i] - d)

    if denominator.is_zero():
        raise DivisionByZeroError(f"도메인 원소 {int(domain[i])}이(가) 중복되었습니다")
    return result * denominator.inverse()


# ─────────────────────────────────────────────────────────────────────
# FFT / IFFT (Number Theoretic Transform)
# ─────────────────────────────────────────────────────────────────────

def fft(coeffs, omega):
    """Fast Fourier Transform (NTT): 계수 → 평가값.

    재귀적 Cooley-Tukey radix-2 알고리즘.

    입력 다항식 p(x) = c₀ + c₁x + ... + c_{n-1}x^{n-1}을
    n개의 단위근 {1, ω, ω², ..., ω^{n-1}}에서 평가한다.

    알고리즘:
        1. n=1이면 계수를 그대로 반환
        2. 짝수/홀수 인덱스로 분리: even = [c₀, c₂, ...], odd = [c₁, c₃, ...]
        3. 재귀 호출: FFT(even, ω²), FFT(odd, ω²)
        4. 버터플라이 결합: y[k] = even[k] + ω^k · odd[k]
                           y[k+n/2] = even[k] - ω^k · odd[k]

    Args:
        coeffs: 계수 리스트 (길이는 2의 거듭제곱)
        omega: n차 원시 단위근 (계수 필드의 원소)

    Returns:
        list: [p(1), p(ω), p(ω²), ..., p(ω^{n-1})]

    Raises:
        ValueError: 길이가 2의 거듭제곱이 아닐 때
    """
    field = type(omega)
    n = len(coeffs)
    if n < 1 or (n & (n - 1)) != 0:
        raise ValueError(f"FFT 입력 길이는 2의 거듭제곱이어야 합니다: {n}")
    if n == 1:
        return [field(coeffs[0])]

    even = [coeffs[i] for i in range(0, n, 2)]
    odd = [coeffs[i] for i in range(1, n, 2)]

    # ω²는 n/2차 단위근
    omega_sq = omega * omega
    even_vals = fft(even, omega_sq)
    odd_vals = fft(odd, omega_sq)

    result = [field.zero()] * n
    omega_k = field.one()
    half = n // 2
    for k in range(half):
        t = omega_k * odd_vals[k]
        result[k] = even_vals[k] + t
        result[k + half] = even_vals[k] - t
        omega_k = omega_k * omega

    return result


def ifft(evals, omega):
    """Inverse FFT (INTT): 평가값 → 계수.

    역 단위근 ω⁻¹로 FFT를 수행한 후 n으로 나눈다.
    F⁻¹ = (1/n) · F(ω⁻¹)

    Args:
        evals: [p(1), p(ω), ..., p(ω^{n-1})]
        omega: n차 원시 단위근

    Returns:
        list: [c₀, c₁, ..., c_{n-1}] 계수 리스트
    """
    field = type(omega)
    n = len(evals)
    coeffs = fft(evals, omega.inverse())
    n_inv = field(n).inverse()
    return [c * n_inv for c in coeffs]
