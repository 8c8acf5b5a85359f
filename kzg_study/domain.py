"""
KZG 스터디 유틸리티: 평가 도메인(Evaluation Domain)
=====================================================

평가 도메인 H = {1, ω, ω², ..., ω^(n-1)} 은 유한체의 크기 n 곱셈 부분군이다.
H의 모든 원소가 x^n = 1 을 만족하기 때문에 소거 다항식이 Z_H(x) = x^n - 1 로
간단해진다 (Polynomial.vanishing_polynomial 참고).

**주요 기능**:
  - get_root_of_unity: n차 원시 단위근 ω
  - get_roots_of_unity: 도메인 [1, ω, ..., ω^(n-1)]
  - vanishing_poly_eval: Z_H(ζ) = ζ^n - 1 평가
  - lagrange_basis_eval: i번째 Lagrange 기저 L_i(ζ) 평가

토이 곡선의 스칼라 필드 F_17 은 p - 1 = 16 = 2⁴ 이므로
크기 1, 2, 4, 8, 16 의 도메인을 지원한다.

사용 예시:
    >>> F17 = prime_field(17)
    >>> omega = get_root_of_unity(4, F17)
    >>> omega ** 4 == F17(1)   # True
"""


def _prime_factors(n):
    factors = set()
    d = 2
    while d * d <= n:
        while n % d == 0:
            factors.add(d)
            n //= d
        d += 1
    if n > 1:
        factors.add(n)
    return factors


def get_root_of_unity(n, field):
    """n차 원시 단위근(primitive n-th root of unity) ω를 반환한다.

    ω^n = 1이고, ω^k ≠ 1 (0 < k < n)인 원소 ω를 찾는다.
    후보 g = 2, 3, ... 에 대해 ω = g^((p-1)/n)을 계산하고,
    n의 모든 소인수 q에 대해 ω^(n/q) ≠ 1 이면 원시 단위근이다.

    Args:
        n: 단위근의 차수 (p - 1의 약수)
        field: 소수 모듈러스 필드 클래스

    Returns:
        FieldElement: n차 원시 단위근

    Raises:
        ValueError: n이 p - 1을 나누지 않을 때

    예시:
        >>> omega = get_root_of_unity(4, prime_field(17))
        >>> omega ** 2 != 1   # True (원시 단위근)
    """
    p = field.modulus
    if n < 1 or (p - 1) % n != 0:
        raise ValueError(f"n은 p - 1 = {p - 1}의 약수여야 합니다: {n}")
    if n == 1:
        return field.one()

    exponent = (p - 1) // n
    factors = _prime_factors(n)
    for g in range(2, p):
        omega = field(g) ** exponent
        if all(omega ** (n // q) != 1 for q in factors):
            return omega
    raise ValueError(f"모듈러스 {p}에서 {n}차 원시 단위근을 찾지 못했습니다")


def get_roots_of_unity(n, field):
    """n개의 단위근 리스트 [1, ω, ω², ..., ω^(n-1)]을 반환한다.

    예시:
        >>> roots = get_roots_of_unity(4, prime_field(17))
        >>> len(roots), roots[0]   # (4, F17(1))
    """
    omega = get_root_of_unity(n, field)
    roots = []
    current = field.one()
    for _ in range(n):
        roots.append(current)
        current = current * omega
    return roots


def vanishing_poly_eval(n, zeta):
    """소거 다항식 Z_H(ζ) = ζ^n - 1 을 평가한다.

    다항식 전체를 만들지 않고 O(log n) 거듭제곱으로 계산한다.
    """
    return zeta ** n - 1


def lagrange_basis_eval(i, n, omega, zeta):
    """i번째 Lagrange 기저 다항식 L_i(ζ)를 평가한다.

    공식:
        L_i(ζ) = (ω^i / n) · (ζ^n - 1) / (ζ - ω^i)

    성질: L_i(ω^j) = δ_{ij} (크로네커 델타)

    Args:
        i: 기저 인덱스 (0 ≤ i < n)
        n: 도메인 크기
        omega: n차 원시 단위근
        zeta: 평가 점

    Returns:
        FieldElement: L_i(ζ)
    """
    field = type(omega)
    zeta = field(zeta)
    omega_i = omega ** i

    denominator = zeta - omega_i
    if denominator.is_zero():
        return field.one()
    # ζ가 i가 아닌 다른 도메인 점이면 Z_H(ζ) = 0 이 되어 0이 나온다.
    return omega_i * vanishing_poly_eval(n, zeta) / (field(n) * denominator)
