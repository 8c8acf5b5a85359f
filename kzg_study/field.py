"""
KZG 스터디 기반 모듈: 유한체(Finite Field)와 이차 확대체
==========================================================

이 모듈은 KZG 스택 전체에서 사용되는 가장 기본적인 대수 도구를 정의한다.

**유한체 FieldElement**:
  모듈러스 p 위의 모듈러 산술. 모듈러스마다 하나의 클래스가 만들어지며
  (`prime_field(p)`), 서로 다른 모듈러스의 원소를 섞으면
  ConfigMismatchError가 발생한다. 즉 "같은 필드" 조건이 타입 수준에서 보장된다.
  - 모든 결과는 [0, p) 범위로 정규화된다.
  - 역원은 확장 유클리드 알고리즘으로 계산하며, gcd(value, p) ≠ 1이면
    NonInvertibleError를 발생시킨다 (0을 돌려주는 "센티널" 방식이 아님).

**이차 확대체 FieldElementExt**:
  F_p[u] / (u² - c), c는 F_p의 이차 비잉여(quadratic non-residue).
  원소는 a + b·u 로 표현되며, G2 곡선 점의 좌표로 사용된다.

사용 예시:
    >>> from kzg_study.field import prime_field, extension_field
    >>> F101 = prime_field(101)
    >>> a = F101(3)
    >>> a * F101(34)        # F101(1) → 34는 3의 역원
    >>> F2 = extension_field(F101, -2)   # u² = -2
    >>> F2(36, 0) + F2(0, 31)           # 36 + 31u
"""

from functools import lru_cache

from kzg_study.errors import ConfigMismatchError, NonInvertibleError


# ─────────────────────────────────────────────────────────────────────
# 확장 유클리드 알고리즘
# ─────────────────────────────────────────────────────────────────────

def ext_gcd(a, b):
    """확장 유클리드 알고리즘.

    s·a + t·b = gcd(a, b) 를 만족하는 (s, t, gcd)를 반환한다.

    예시:
        >>> ext_gcd(3, 7)   # 3·(-2) + 7·1 = 1
        (-2, 1, 1)
    """
    old_r, r = a, b
    old_s, s = 1, 0
    old_t, t = 0, 1
    while r != 0:
        quotient = old_r // r
        old_r, r = r, old_r - quotient * r
        old_s, s = s, old_s - quotient * s
        old_t, t = t, old_t - quotient * t
    return old_s, old_t, old_r


# ─────────────────────────────────────────────────────────────────────
# 유한체(Finite Field) 원소
# ─────────────────────────────────────────────────────────────────────

class FieldElement:
    """모듈러스 `modulus` 위의 유한체 원소.

    직접 인스턴스화하지 않고 `prime_field(p)`가 돌려주는 서브클래스를 사용한다.
    (py_ecc의 `class FR(FQ): field_modulus = ...` 와 같은 방식)

    속성:
        value: [0, modulus) 범위의 정수 대표값
        modulus: 클래스 속성, 필드의 크기

    예시:
        >>> F7 = prime_field(7)
        >>> F7(3) + F7(5)    # F7(1)
        >>> F7(3) ** 0       # F7(1)
        >>> F7(2) / F7(4)    # F7(4)  (2 · 4⁻¹ = 2 · 2)
    """

    modulus = None
    __slots__ = ("value",)

    def __init__(self, value):
        if self.modulus is None:
            raise TypeError("prime_field(p)로 만든 필드 클래스를 사용해야 합니다")
        if isinstance(value, FieldElement):
            if value.modulus != self.modulus:
                raise ConfigMismatchError(
                    f"모듈러스가 다릅니다: {value.modulus} != {self.modulus}"
                )
            value = value.value
        self.value = int(value) % self.modulus

    def _coerce(self, other):
        """피연산자를 같은 필드의 정수 대표값으로 변환한다."""
        if isinstance(other, FieldElement):
            if other.modulus != self.modulus:
                raise ConfigMismatchError(
                    f"모듈러스가 다릅니다: {self.modulus} != {other.modulus}"
                )
            return other.value
        if isinstance(other, int):
            return other % self.modulus
        return NotImplemented

    # ── 기본 원소 ──

    @classmethod
    def zero(cls):
        return cls(0)

    @classmethod
    def one(cls):
        return cls(1)

    def is_zero(self):
        return self.value == 0

    # ── 필드 연산 ──

    def add(self, other):
        v = self._coerce(other)
        if v is NotImplemented:
            return v
        return type(self)(self.value + v)

    def subtract(self, other):
        v = self._coerce(other)
        if v is NotImplemented:
            return v
        return type(self)(self.value - v)

    def multiply(self, other):
        v = self._coerce(other)
        if v is NotImplemented:
            return v
        return type(self)(self.value * v)

    def negate(self):
        return type(self)(-self.value)

    def inverse(self):
        """곱셈 역원 a⁻¹ (확장 유클리드 알고리즘).

        Raises:
            NonInvertibleError: gcd(value, modulus) ≠ 1 인 경우 (0 포함)

        예시:
            >>> prime_field(7)(3).inverse()   # F7(5), 3·5 = 15 ≡ 1
        """
        s, _, g = ext_gcd(self.value, self.modulus)
        if g != 1:
            raise NonInvertibleError(
                f"{self.value}은(는) 모듈러스 {self.modulus}에서 역원이 없습니다"
            )
        return type(self)(s)

    def divide(self, other):
        v = self._coerce(other)
        if v is NotImplemented:
            return v
        return self.multiply(type(self)(v).inverse())

    def pow(self, exp):
        """거듭제곱 a^exp (square-and-multiply).

        지수의 최상위 비트부터 내려오면서 매 비트마다 제곱하고,
        비트가 1이면 밑을 한 번 더 곱한다. a^0 = 1 (a = 0 포함).
        음수 지수는 역원의 거듭제곱으로 처리한다.
        """
        exp = int(exp)
        if exp < 0:
            return self.inverse().pow(-exp)
        result = self.one()
        for bit in bin(exp)[2:]:
            result = result.multiply(result)
            if bit == "1":
                result = result.multiply(self)
        return result

    # ── 연산자 ──

    def __add__(self, other):
        return self.add(other)

    def __radd__(self, other):
        return self.add(other)

    def __sub__(self, other):
        return self.subtract(other)

    def __rsub__(self, other):
        v = self._coerce(other)
        if v is NotImplemented:
            return v
        return type(self)(v - self.value)

    def __mul__(self, other):
        return self.multiply(other)

    def __rmul__(self, other):
        return self.multiply(other)

    def __truediv__(self, other):
        return self.divide(other)

    def __rtruediv__(self, other):
        v = self._coerce(other)
        if v is NotImplemented:
            return v
        return type(self)(v).divide(self)

    def __pow__(self, exp):
        return self.pow(exp)

    def __neg__(self):
        return self.negate()

    def __eq__(self, other):
        if isinstance(other, FieldElement):
            return self.modulus == other.modulus and self.value == other.value
        if isinstance(other, int):
            # 정수는 대표값 [0, modulus) 과만 같다 (hash(F(v)) == hash(v))
            return self.value == other
        return NotImplemented

    def __hash__(self):
        return hash(self.value)

    def __int__(self):
        return self.value

    def __repr__(self):
        return f"{type(self).__name__}({self.value})"


@lru_cache(maxsize=None)
def prime_field(modulus):
    """모듈러스 p의 유한체 클래스를 반환한다.

    같은 모듈러스에 대해서는 항상 같은 클래스가 반환된다.

    Args:
        modulus: 필드 크기 (2 이상의 정수, 보통 소수)

    Returns:
        type: FieldElement 서브클래스

    예시:
        >>> F101 = prime_field(101)
        >>> F101 is prime_field(101)   # True
    """
    modulus = int(modulus)
    if modulus < 2:
        raise ValueError(f"모듈러스는 2 이상이어야 합니다: {modulus}")
    return type(f"F{modulus}", (FieldElement,), {"modulus": modulus, "__slots__": ()})


def is_quadratic_residue(x):
    """x가 0이 아닌 제곱수인지 오일러 판정법으로 확인한다.

    x^((p-1)/2) == 1 ⟺ x는 이차 잉여 (p는 홀수 소수)
    """
    if x.is_zero():
        return False
    return x ** ((x.modulus - 1) // 2) == 1


# ─────────────────────────────────────────────────────────────────────
# 이차 확대체 F_p²
# ─────────────────────────────────────────────────────────────────────

class FieldElementExt:
    """이차 확대체 F_p[u]/(u² - c)의 원소 a + b·u.

    `extension_field(base, c)`가 돌려주는 서브클래스를 사용한다.
    기반 필드 원소나 정수와 섞어 연산하면 a + 0·u 로 끌어올린다.

    속성:
        a, b: 기반 필드 원소
        base: 클래스 속성, 기반 필드 클래스
        non_residue: 클래스 속성, u² = c 의 c (기반 필드 원소)

    예시:
        >>> F2 = extension_field(prime_field(101), -2)
        >>> u = F2(0, 1)
        >>> u * u == F2(-2)    # True
    """

    base = None
    non_residue = None
    __slots__ = ("a", "b")

    def __init__(self, a, b=0):
        if self.base is None:
            raise TypeError("extension_field(...)로 만든 클래스를 사용해야 합니다")
        self.a = self.base(a)
        self.b = self.base(b)

    def _coerce(self, other):
        if isinstance(other, FieldElementExt):
            if (other.base.modulus != self.base.modulus
                    or other.non_residue != self.non_residue):
                raise ConfigMismatchError(
                    f"확대체가 다릅니다: {type(self).__name__} != {type(other).__name__}"
                )
            return other.a, other.b
        if isinstance(other, (FieldElement, int)):
            return self.base(other), self.base.zero()
        return NotImplemented

    @classmethod
    def zero(cls):
        return cls(0, 0)

    @classmethod
    def one(cls):
        return cls(1, 0)

    @classmethod
    def from_base(cls, x):
        """기반 필드 원소 x를 x + 0·u 로 끌어올린다."""
        return cls(x, 0)

    def is_zero(self):
        return self.a.is_zero() and self.b.is_zero()

    def add(self, other):
        o = self._coerce(other)
        if o is NotImplemented:
            return o
        return type(self)(self.a + o[0], self.b + o[1])

    def subtract(self, other):
        o = self._coerce(other)
        if o is NotImplemented:
            return o
        return type(self)(self.a - o[0], self.b - o[1])

    def multiply(self, other):
        """(a + bu)(c + du) = (ac + bd·c₀) + (ad + bc)u"""
        o = self._coerce(other)
        if o is NotImplemented:
            return o
        c, d = o
        return type(self)(
            self.a * c + self.b * d * self.non_residue,
            self.a * d + self.b * c,
        )

    def negate(self):
        return type(self)(-self.a, -self.b)

    def conjugate(self):
        """켤레 a - b·u."""
        return type(self)(self.a, -self.b)

    def norm(self):
        """노름 (a + bu)(a - bu) = a² - c₀·b² (기반 필드 원소)."""
        return self.a * self.a - self.non_residue * self.b * self.b

    def inverse(self):
        """(a + bu)⁻¹ = (a - bu) / (a² - c₀b²).

        Raises:
            NonInvertibleError: 0의 역원 요청
        """
        n = self.norm()
        if n.is_zero():
            raise NonInvertibleError(f"{self!r}은(는) 역원이 없습니다")
        n_inv = n.inverse()
        return type(self)(self.a * n_inv, -self.b * n_inv)

    def divide(self, other):
        o = self._coerce(other)
        if o is NotImplemented:
            return o
        return self.multiply(type(self)(*o).inverse())

    def pow(self, exp):
        exp = int(exp)
        if exp < 0:
            return self.inverse().pow(-exp)
        result = self.one()
        for bit in bin(exp)[2:]:
            result = result.multiply(result)
            if bit == "1":
                result = result.multiply(self)
        return result

    def __add__(self, other):
        return self.add(other)

    def __radd__(self, other):
        return self.add(other)

    def __sub__(self, other):
        return self.subtract(other)

    def __rsub__(self, other):
        o = self._coerce(other)
        if o is NotImplemented:
            return o
        return type(self)(*o).subtract(self)

    def __mul__(self, other):
        return self.multiply(other)

    def __rmul__(self, other):
        return self.multiply(other)

    def __truediv__(self, other):
        return self.divide(other)

    def __rtruediv__(self, other):
        o = self._coerce(other)
        if o is NotImplemented:
            return o
        return type(self)(*o).divide(self)

    def __pow__(self, exp):
        return self.pow(exp)

    def __neg__(self):
        return self.negate()

    def __eq__(self, other):
        if isinstance(other, FieldElementExt):
            return (self.base.modulus == other.base.modulus
                    and self.non_residue == other.non_residue
                    and self.a == other.a and self.b == other.b)
        if isinstance(other, FieldElement):
            return self.b.is_zero() and self.a == other
        if isinstance(other, int):
            return self.b.is_zero() and self.a == other
        return NotImplemented

    def __hash__(self):
        if self.b.is_zero():
            return hash(self.a)
        return hash((self.a.value, self.b.value, self.base.modulus, self.non_residue.value))

    def __repr__(self):
        return f"{type(self).__name__}({self.a.value} + {self.b.value}u)"


@lru_cache(maxsize=None)
def _extension_class(base, non_residue):
    return type(
        f"F{base.modulus}_2",
        (FieldElementExt,),
        {"base": base, "non_residue": base(non_residue), "__slots__": ()},
    )


def extension_field(base, non_residue):
    """기반 필드 `base` 위의 이차 확대체 클래스 F_p[u]/(u² - c)를 반환한다.

    Args:
        base: FieldElement 서브클래스 (prime_field로 생성)
        non_residue: u² = c 의 c. 기반 필드의 이차 비잉여여야 한다.

    Returns:
        type: FieldElementExt 서브클래스

    Raises:
        ConfigMismatchError: c가 이차 잉여이거나 0인 경우 (확대체가 되지 않음)

    예시:
        >>> F101_2 = extension_field(prime_field(101), -2)
    """
    c = base(non_residue)
    if c.is_zero() or is_quadratic_residue(c):
        raise ConfigMismatchError(
            f"{int(c)}은(는) 모듈러스 {base.modulus}의 이차 비잉여가 아닙니다"
        )
    return _extension_class(base, int(c))
