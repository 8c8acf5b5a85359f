"""
KZG 스터디 모듈: 페어링(Pairing)
=================================

KZG 검증은 페어링 e: G1 × G2 → G_T 하나만 사용한다.

**쌍선형성(Bilinearity)**:
  e([a]P, [b]Q) = e(P, Q)^(ab)
  이 성질 덕분에 검증자는 τ를 모르고도 "q(τ)·(τ - z) = p(τ) - y"를
  군 원소끼리 비교할 수 있다.

**구현**:
  - ToyPairing: 점의 x좌표를 그냥 곱하는 자리표시(placeholder).
    쌍선형이 아니므로 검증 결과에 의미가 없다. 인터페이스만 맞춘다.
  - TatePairing: 임베딩 차수(embedding degree) 2인 곡선에서의
    축약 Tate 페어링(reduced Tate pairing).
        e(P, Q) = f_{r,P}(Q)^((p² - 1) / r)
    f_{r,P}는 Miller 루프로 계산한다. 학습용 곡선(p = 101, r = 17)의
    최종 지수는 (101² - 1) / 17 = 600 이다.

KZG는 Pairing 인터페이스(`pair`, `is_bilinear`)에만 의존하므로
구현을 바꿔 끼워도 프로토콜 코드는 그대로이다.

사용 예시:
    >>> curve = toy_curve()
    >>> e = TatePairing(curve)
    >>> G, H = curve.generator_g1(), curve.generator_g2()
    >>> e.pair(curve.scalar_mul(G, 3), H) == e.pair(G, H) ** 3   # True
"""

from kzg_study.errors import ConfigMismatchError


class Pairing:
    """페어링 인터페이스.

    pair(p, q)는 G1 점 p와 G2 점 q를 받아 곱셈과 == 비교를 지원하는
    목표군(target group) 원소를 반환한다.
    """

    is_bilinear = False

    def pair(self, p, q):
        raise NotImplementedError

    def __call__(self, p, q):
        return self.pair(p, q)


# ─────────────────────────────────────────────────────────────────────
# 자리표시 페어링
# ─────────────────────────────────────────────────────────────────────

class ToyPairingValue:
    """자리표시 페어링의 출력값. 필드 원소 하나를 감싼다.

    new(a, b) = a · b 로 만들어지며 mul, pow 를 제공한다.
    """

    __slots__ = ("value",)

    def __init__(self, a, b):
        self.value = a * b

    @classmethod
    def _wrap(cls, value):
        out = cls.__new__(cls)
        out.value = value
        return out

    def mul(self, other):
        return self._wrap(self.value * other.value)

    def pow(self, n):
        """double-and-add 방식의 거듭제곱 (출력 필드 안에서)."""
        result = self._wrap(type(self.value).one())
        base = self
        n = int(n)
        while n > 0:
            if n & 1:
                result = result.mul(base)
            base = base.mul(base)
            n >>= 1
        return result

    def __mul__(self, other):
        if isinstance(other, ToyPairingValue):
            return self.mul(other)
        return NotImplemented

    def __pow__(self, n):
        return self.pow(n)

    def __eq__(self, other):
        if isinstance(other, ToyPairingValue):
            return self.value == other.value
        return NotImplemented

    def __hash__(self):
        return hash(("ToyPairingValue", self.value))

    def __repr__(self):
        return f"ToyPairingValue({self.value!r})"


class ToyPairing(Pairing):
    """G1 점은 x, G2 점은 x의 실수부 a, 무한원점은 1로 보내 곱한다.

    e([a]P, [b]Q) = e(P, Q)^(ab) 를 만족하지 않는다.
    """

    is_bilinear = False

    def __init__(self, curve):
        self.curve = curve

    def _project_g1(self, p):
        if p.is_infinity:
            return self.curve.base_field.one()
        return p.x

    def _project_g2(self, q):
        if q.is_infinity:
            return self.curve.base_field.one()
        return q.x.a

    def pair(self, p, q):
        return ToyPairingValue(self._project_g1(p), self._project_g2(q))


# ─────────────────────────────────────────────────────────────────────
# 축약 Tate 페어링
# ─────────────────────────────────────────────────────────────────────

class TatePairing(Pairing):
    """임베딩 차수 2 곡선 위의 축약 Tate 페어링.

    조건: r | p² - 1 이고 r ∤ p - 1 (r: 부분군 위수).
    G1 점 P의 좌표를 확대체로 끌어올려 Miller 루프를 돌리고,
    G2 점 Q에서 직선 함수를 평가한다.

    Raises:
        ConfigMismatchError: 곡선의 임베딩 차수가 2가 아닐 때
    """

    is_bilinear = True

    def __init__(self, curve):
        if not self.supports(curve):
            raise ConfigMismatchError(
                f"임베딩 차수 2인 곡선만 지원합니다: {curve!r}"
            )
        self.curve = curve
        p = curve.base_field.modulus
        self.final_exponent = (p * p - 1) // curve.subgroup_order

    @staticmethod
    def supports(curve):
        p = curve.base_field.modulus
        r = curve.subgroup_order
        return (p * p - 1) % r == 0 and (p - 1) % r != 0

    def _lift(self, p):
        ext = self.curve.ext_field
        return type(p)(ext.from_base(p.x), ext.from_base(p.y))

    def _line(self, p1, p2, t):
        """p1, p2를 지나는 직선(같으면 접선)을 점 t에서 평가한다.

        세로선이면 x_t - x₁ 을 반환한다.
        """
        x1, y1 = p1
        x2, y2 = p2
        xt, yt = t
        if x1 != x2:
            m = (y2 - y1) / (x2 - x1)
            return m * (xt - x1) - (yt - y1)
        elif y1 == y2:
            m = (3 * x1 * x1 + self.curve.a2) / (2 * y1)
            return m * (xt - x1) - (yt - y1)
        else:
            return xt - x1

    def _vertical(self, p, t):
        """p를 지나는 세로선 x - x_p 를 t에서 평가한다 (무한원점이면 1)."""
        if p.is_infinity:
            return self.curve.ext_field.one()
        return t.x - p.x

    def miller_loop(self, p, q):
        """f_{r,P}(Q)를 계산한다.

        r의 최상위 비트 다음부터 내려가며
          f ← f² · ℓ_{R,R}(Q) / v_{2R}(Q),  R ← 2R
          (비트가 1이면) f ← f · ℓ_{R,P}(Q) / v_{R+P}(Q),  R ← R + P
        """
        curve = self.curve
        p = self._lift(p)
        f = curve.ext_field.one()
        r_point = p
        for bit in bin(curve.subgroup_order)[3:]:
            doubled = curve.add_ext(r_point, r_point)
            f = f * f * self._line(r_point, r_point, q) / self._vertical(doubled, q)
            r_point = doubled
            if bit == "1":
                added = curve.add_ext(r_point, p)
                f = f * self._line(r_point, p, q) / self._vertical(added, q)
                r_point = added
        return f

    def pair(self, p, q):
        if p.is_infinity or q.is_infinity:
            return self.curve.ext_field.one()
        return self.miller_loop(p, q) ** self.final_exponent


def default_pairing(curve):
    """곡선에 맞는 기본 페어링. Tate 페어링을 쓸 수 없으면 ToyPairing."""
    if TatePairing.supports(curve):
        return TatePairing(curve)
    return ToyPairing(curve)
