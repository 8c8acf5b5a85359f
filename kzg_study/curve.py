"""
KZG 스터디 모듈: 타원곡선(Elliptic Curve) 군 연산
==================================================

짧은 바이어슈트라스(short Weierstrass) 곡선 y² = x³ + a·x + b 위의 군 연산.

**G1**: 기반 필드 F_p 위의 점 (좌표가 FieldElement)
**G2**: 이차 확대체 F_p² 위의 점 (좌표가 FieldElementExt), 같은 군 법칙을 따른다.

**점 표현**:
  무한원점(항등원)과 아핀 점을 서로 다른 타입으로 구분한다.
  - Infinity: 좌표가 없는 항등원 (INFINITY 하나만 사용)
  - Affine(x, y): 곡선 위의 아핀 점
  "무한원점인데 좌표가 있는" 잘못된 상태는 표현할 수 없다.

**군 법칙**:
  - P + ∞ = P,  ∞ + P = P
  - P + (-P) = ∞
  - 두 배(doubling): m = (3x₁² + a) / (2y₁)
  - 일반 덧셈:        m = (y₂ - y₁) / (x₂ - x₁)
  - x₃ = m² - x₁ - x₂,  y₃ = m·(x₁ - x₃) - y₁

**곡선 프리셋**:
  - toy_curve(): F_101 위의 y² = x³ + 3, G1 = (1, 2), 부분군 위수 17,
    G2 = (36, 31u) (u² = -2). 손으로 계산 가능한 학습용 곡선.
  - bn128_curve(): py_ecc의 bn128 상수로 만든 같은 형태의 실제 곡선.

사용 예시:
    >>> from kzg_study.curve import toy_curve
    >>> curve = toy_curve()
    >>> G = curve.generator_g1()
    >>> curve.add(G, G)                 # Affine(68, 74)
    >>> curve.scalar_mul(G, 17)         # Infinity
"""

from functools import lru_cache

from py_ecc import bn128
from py_ecc.fields import bn128_FQ as FQ

from kzg_study.errors import ConfigMismatchError, InvalidCurveError
from kzg_study.field import (
    FieldElement,
    FieldElementExt,
    extension_field,
    prime_field,
)


# ─────────────────────────────────────────────────────────────────────
# 점(Point) 표현
# ─────────────────────────────────────────────────────────────────────

class Point:
    """곡선 점의 기반 클래스. Infinity 또는 Affine 중 하나이다."""

    __slots__ = ()
    is_infinity = False

    def scalar_mul(self, curve, scalar):
        """스칼라 곱셈 [scalar]·self. curve.scalar_mul 과 같다."""
        return curve.scalar_mul(self, scalar)


class Infinity(Point):
    """무한원점 (군의 항등원). G1, G2 모두 같은 값을 사용한다."""

    __slots__ = ()
    is_infinity = True

    def __eq__(self, other):
        if isinstance(other, Point):
            return other.is_infinity
        return NotImplemented

    def __hash__(self):
        return hash("Infinity")

    def __repr__(self):
        return "Infinity"


INFINITY = Infinity()


class Affine(Point):
    """아핀 좌표 (x, y)의 곡선 점.

    좌표가 FieldElement이면 G1, FieldElementExt이면 G2의 점이다.
    튜플처럼 `x, y = P` 로 풀어 쓸 수 있다.
    """

    __slots__ = ("x", "y")

    def __init__(self, x, y):
        self.x = x
        self.y = y

    def __iter__(self):
        return iter((self.x, self.y))

    def __eq__(self, other):
        if isinstance(other, Affine):
            return (type(self.x) is type(other.x)
                    and self.x == other.x and self.y == other.y)
        if isinstance(other, Point):
            return False
        return NotImplemented

    def __hash__(self):
        return hash((self.x, self.y))

    def __repr__(self):
        return f"Affine({self.x!r}, {self.y!r})"


# ─────────────────────────────────────────────────────────────────────
# 타원곡선
# ─────────────────────────────────────────────────────────────────────

class EllipticCurve:
    """짧은 바이어슈트라스 곡선과 G1/G2 생성자.

    생성 시 다음을 검증한다:
      - 판별식 -16(4a³ + 27b²) ≠ 0 (특이 곡선 거부)
      - 두 생성자가 각자의 곡선 위에 있음
      - [subgroup_order]·G1 = ∞, [subgroup_order]·G2 = ∞

    속성:
        a, b: G1 곡선 계수 (기반 필드 원소)
        a2, b2: G2 곡선 계수 (확대체 원소). b2를 주지 않으면 b를 그대로 끌어올린다.
        subgroup_order: 생성자가 만드는 부분군의 위수 r
        base_field, ext_field: 좌표 필드 클래스
        scalar_field: 스칼라 필드 F_r (KZG 다항식의 계수 필드)
    """

    def __init__(self, a, b, generator_g1, generator_g2, subgroup_order, b2=None, name=None):
        base = type(a)
        ext = type(generator_g2.x)
        if not issubclass(base, FieldElement) or not issubclass(ext, FieldElementExt):
            raise ConfigMismatchError("G1 좌표는 FieldElement, G2 좌표는 FieldElementExt여야 합니다")
        if ext.base.modulus != base.modulus:
            raise ConfigMismatchError(
                f"확대체의 기반 필드가 다릅니다: {ext.base.modulus} != {base.modulus}"
            )
        b = base(b)

        discriminant = -16 * (4 * a ** 3 + 27 * b ** 2)
        if discriminant.is_zero():
            raise InvalidCurveError(f"특이 곡선입니다 (판별식 = 0): a={int(a)}, b={int(b)}")

        self.name = name
        self.a = a
        self.b = b
        self.a2 = ext.from_base(a)
        if b2 is None:
            self.b2 = ext.from_base(b)
        elif isinstance(b2, FieldElementExt):
            self.b2 = b2
        else:
            self.b2 = ext.from_base(b2)
        self.base_field = base
        self.ext_field = ext
        self.subgroup_order = int(subgroup_order)
        self.scalar_field = prime_field(self.subgroup_order)
        self.g1 = generator_g1
        self.g2 = generator_g2

        for label, g in (("G1", self.g1), ("G2", self.g2)):
            if g.is_infinity or not self.is_on_curve(g):
                raise InvalidCurveError(f"{label} 생성자가 곡선 위에 있지 않습니다: {g!r}")
            if self.scalar_mul(g, self.subgroup_order) != INFINITY:
                raise InvalidCurveError(
                    f"{label} 생성자의 위수가 {self.subgroup_order}가 아닙니다"
                )

    def __repr__(self):
        return (f"EllipticCurve(name={self.name!r}, p={self.base_field.modulus}, "
                f"r={self.subgroup_order})")

    # ── 생성자 / 항등원 ──

    def generator_g1(self):
        return self.g1

    def generator_g2(self):
        return self.g2

    def infinity(self):
        return INFINITY

    # ── 점 생성과 검증 ──

    def _is_ext(self, p):
        return not p.is_infinity and isinstance(p.x, FieldElementExt)

    def is_on_curve(self, p):
        """y² = x³ + a·x + b 를 만족하는지 확인한다 (무한원점은 항상 참)."""
        if p.is_infinity:
            return True
        a, b = (self.a2, self.b2) if self._is_ext(p) else (self.a, self.b)
        x, y = p
        return y * y == x * x * x + a * x + b

    def point(self, x, y):
        """G1 점을 만든다.

        Raises:
            InvalidCurveError: 점이 곡선 위에 있지 않을 때
        """
        p = Affine(self.base_field(x), self.base_field(y))
        if not self.is_on_curve(p):
            raise InvalidCurveError(f"점 ({int(p.x)}, {int(p.y)})이(가) 곡선 위에 없습니다")
        return p

    def point_ext(self, x, y):
        """G2 점을 만든다. 좌표는 확대체 원소 또는 (a, b) 쌍.

        Raises:
            InvalidCurveError: 점이 곡선 위에 있지 않을 때
        """
        x = x if isinstance(x, FieldElementExt) else self.ext_field(*x)
        y = y if isinstance(y, FieldElementExt) else self.ext_field(*y)
        p = Affine(self.ext_field(x.a, x.b), self.ext_field(y.a, y.b))
        if not self.is_on_curve(p):
            raise InvalidCurveError(f"점 ({x!r}, {y!r})이(가) 곡선 위에 없습니다")
        return p

    def _check_group(self, p, ext):
        if p.is_infinity:
            return
        if ext:
            ok = isinstance(p.x, FieldElementExt) and p.x.base.modulus == self.base_field.modulus
        else:
            ok = isinstance(p.x, FieldElement) and p.x.modulus == self.base_field.modulus
        if not ok:
            raise ConfigMismatchError(f"{'G2' if ext else 'G1'}의 점이 아닙니다: {p!r}")

    # ── 군 연산 ──

    @staticmethod
    def _add(p1, p2, a):
        if p1.is_infinity:
            return p2
        if p2.is_infinity:
            return p1
        x1, y1 = p1
        x2, y2 = p2
        if x1 == x2:
            # y₁ = -y₂ 이면 P + (-P) = ∞ (y = 0 인 점의 두 배 포함)
            if y1 != y2 or y1.is_zero():
                return INFINITY
            m = (3 * x1 * x1 + a) / (2 * y1)
        else:
            m = (y2 - y1) / (x2 - x1)
        x3 = m * m - x1 - x2
        y3 = m * (x1 - x3) - y1
        return Affine(x3, y3)

    def add(self, p1, p2):
        """G1 점 덧셈 p1 + p2."""
        self._check_group(p1, ext=False)
        self._check_group(p2, ext=False)
        return self._add(p1, p2, self.a)

    def add_ext(self, p1, p2):
        """G2 점 덧셈 p1 + p2 (확대체에서의 나눗셈 사용)."""
        self._check_group(p1, ext=True)
        self._check_group(p2, ext=True)
        return self._add(p1, p2, self.a2)

    def neg(self, p):
        """역원 -P = (x, -y)."""
        if p.is_infinity:
            return INFINITY
        return Affine(p.x, -p.y)

    def scalar_mul(self, point, scalar):
        """스칼라 곱셈 [scalar]·point (double-and-add).

        스칼라의 최하위 비트부터 올라가며, 비트가 1이면 누적값에 더하고
        매 단계 점을 두 배로 만든다. O(log scalar)번의 군 연산.
        G1, G2 모두 지원하며 음수 스칼라는 -point의 곱으로 처리한다.

        Args:
            point: G1 또는 G2의 점
            scalar: 정수 또는 FieldElement (값을 정수로 사용)

        예시:
            >>> curve.scalar_mul(curve.generator_g1(), 2)   # Affine(68, 74)
        """
        if isinstance(scalar, FieldElement):
            scalar = scalar.value
        scalar = int(scalar)
        if scalar < 0:
            return self.scalar_mul(self.neg(point), -scalar)
        add = self.add_ext if self._is_ext(point) else self.add
        result = INFINITY
        temp = point
        while scalar > 0:
            if scalar & 1:
                result = add(result, temp)
            temp = add(temp, temp)
            scalar >>= 1
        return result

    def multi_scalar_mul(self, points, scalars):
        """다중 스칼라 곱셈 Σᵢ [scalarᵢ]·pointᵢ.

        각 항은 서로 독립이고 점 덧셈은 교환·결합 법칙을 만족하므로
        순서와 무관하게 누적할 수 있다. 군(G1/G2)은 무한원점이 아닌
        점의 좌표로 한 번만 정한다.

        Raises:
            ValueError: 점과 스칼라의 개수가 다를 때
        """
        points = list(points)
        scalars = list(scalars)
        if len(points) != len(scalars):
            raise ValueError(
                f"점과 스칼라의 개수가 다릅니다: {len(points)} != {len(scalars)}"
            )
        add = self.add_ext if any(self._is_ext(p) for p in points) else self.add
        result = INFINITY
        for point, scalar in zip(points, scalars):
            result = add(result, self.scalar_mul(point, scalar))
        return result


# ─────────────────────────────────────────────────────────────────────
# 곡선 프리셋
# ─────────────────────────────────────────────────────────────────────

# 학습용 곡선 파라미터
TOY_FIELD_MODULUS = 101
TOY_SUBGROUP_ORDER = 17
TOY_NON_RESIDUE = -2


@lru_cache(maxsize=None)
def toy_curve():
    """학습용 곡선: F_101 위의 y² = x³ + 3.

    - G1 = (1, 2), 부분군 위수 17 (G1이 만드는 점이 17개)
    - 확대체 F_101[u]/(u² + 2), G2 = (36, 31u)
    - 임베딩 차수(embedding degree) 2: 17 | 101² - 1
    """
    F = prime_field(TOY_FIELD_MODULUS)
    F2 = extension_field(F, TOY_NON_RESIDUE)
    return EllipticCurve(
        a=F(0),
        b=F(3),
        generator_g1=Affine(F(1), F(2)),
        generator_g2=Affine(F2(36, 0), F2(0, 31)),
        subgroup_order=TOY_SUBGROUP_ORDER,
        name="toy101",
    )


@lru_cache(maxsize=None)
def bn128_curve():
    """bn128 (alt_bn128) 곡선: py_ecc의 상수로 구성한다.

    G1 곡선은 학습용 곡선과 같은 y² = x³ + 3, G1 = (1, 2) 이고
    G2는 F_p[u]/(u² + 1) 위의 트위스트 곡선 y² = x³ + 3/(9 + u) 의 점이다.
    군 연산은 이 모듈의 구현을 그대로 사용한다 (py_ecc는 상수 출처일 뿐).
    """
    F = prime_field(FQ.field_modulus)
    F2 = extension_field(F, -1)
    g1x, g1y = bn128.G1
    g2x, g2y = bn128.G2
    h = Affine(
        F2(*[int(c) for c in g2x.coeffs]),
        F2(*[int(c) for c in g2y.coeffs]),
    )
    # 트위스트 계수 b₂ = y² - x³ (생성자에서 복원)
    b2 = h.y * h.y - h.x * h.x * h.x
    return EllipticCurve(
        a=F(0),
        b=F(3),
        generator_g1=Affine(F(int(g1x)), F(int(g1y))),
        generator_g2=h,
        subgroup_order=bn128.curve_order,
        b2=b2,
        name="bn128",
    )


CURVES = {
    "toy101": toy_curve,
    "bn128": bn128_curve,
}


def get_curve(name):
    """이름으로 곡선 프리셋을 찾는다.

    Raises:
        ConfigMismatchError: 알 수 없는 곡선 이름
    """
    try:
        factory = CURVES[name]
    except KeyError:
        raise ConfigMismatchError(
            f"알 수 없는 곡선입니다: {name!r} (사용 가능: {sorted(CURVES)})"
        ) from None
    return factory()
