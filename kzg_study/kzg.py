"""
KZG 다항식 커밋먼트 스킴
=========================

Kate-Zaverucha-Goldberg (KZG) 커밋먼트.

**KZG 커밋먼트란?**
  다항식 p(x)에 대한 간결한 "지문"(커밋먼트)을 타원곡선 점으로 생성한다.
  - 커밋먼트: C = p(τ)·G1 (τ는 SRS의 비밀 값)
  - 바인딩(binding): 한 번 커밋하면 다른 다항식으로 바꿀 수 없음
  - 하이딩(hiding): 커밋먼트에서 원래 다항식을 복원할 수 없음

**열기 증명 (Opening Proof)**:
  "p(z) = y" 임을 증명하는 방법:
  1. 몫 다항식 q(x) = (p(x) - y) / (x - z) 계산
     (p(z) = y이면 (x-z)가 (p(x)-y)를 나누므로 q(x)는 다항식)
  2. 증명 π = q(τ)·G1
  3. 검증: e(C - y·G1, H) == e(π, τ·H - z·H)
     즉, 페어링으로 다항식 관계 q(τ)·(τ - z) = p(τ) - y 를 확인

**상태**:
  KZG 객체를 만들면 Setup이 실행되어 SRS가 준비된다 (Uninitialized → Ready).
  이후 commit / open / verify 를 몇 번이든 호출할 수 있다.

사용 예시:
    >>> from kzg_study.kzg import KZG
    >>> kzg = KZG(max_degree=2, seed=42)
    >>> F = kzg.curve.scalar_field
    >>> p = Polynomial([1, 2], F)          # 1 + 2x
    >>> C = kzg.commit(p)
    >>> y, proof = kzg.open(p, 3)          # y = 7, proof = [2]·G1
    >>> kzg.verify(C, 3, y, proof)         # True
"""

import logging

from kzg_study.config import config
from kzg_study.errors import (
    ConfigMismatchError,
    DegreeExceededError,
    RemainderMismatchError,
)
from kzg_study.pairing import default_pairing
from kzg_study.polynomial import Polynomial, poly_div
from kzg_study.srs import SRS

logger = logging.getLogger(__name__)


class KZG:
    """KZG Setup / Commit / Open / Verify.

    Args:
        max_degree: 커밋할 수 있는 최대 차수. 생략하면 config.max_degree.
        rng: τ를 뽑을 난수원 (randrange). 생략하면 secrets.SystemRandom().
        curve: EllipticCurve. 생략하면 config.curve.
        pairing: Pairing 구현. 생략하면 곡선에 맞는 기본 페어링.
        seed: 결정론적 τ (교육용). rng보다 우선한다.
    """

    def __init__(self, max_degree=None, rng=None, curve=None, pairing=None, seed=None):
        if max_degree is None:
            max_degree = config.max_degree
        if curve is None:
            curve = config.curve
        self.curve = curve
        self.pairing = pairing if pairing is not None else default_pairing(curve)
        self.srs = SRS.generate(curve, max_degree, rng=rng, seed=seed)

    @property
    def max_degree(self):
        return self.srs.max_degree

    @property
    def setup_g1(self):
        """[G1, τ·G1, ..., τ^d·G1]"""
        return self.srs.g1_powers

    @property
    def setup_g2(self):
        """[H, τ·H]"""
        return self.srs.g2_powers

    def _check_poly(self, poly):
        if poly.field.modulus != self.curve.scalar_field.modulus:
            raise ConfigMismatchError(
                f"다항식은 스칼라 필드 F_{self.curve.subgroup_order} 위에 있어야 합니다: "
                f"F_{poly.field.modulus}"
            )
        if poly.degree > self.srs.max_degree:
            raise DegreeExceededError(
                f"다항식 차수 {poly.degree}가 SRS 최대 차수 {self.srs.max_degree}를 초과합니다"
            )

    def commit(self, poly):
        """다항식을 KZG 커밋한다.

        C = Σᵢ cᵢ · [τⁱ]₁ = p(τ) · G1

        SRS의 G1 powers [G1, τG1, τ²G1, ...]에 다항식 계수를 곱하여
        선형결합한다. τ를 모르는 상태에서 p(τ)·G1을 계산하는 것이다.

        Args:
            poly: 커밋할 다항식 (스칼라 필드 위의 Polynomial)

        Returns:
            Point: 커밋먼트 C (G1 점)

        Raises:
            ConfigMismatchError: 다항식이 스칼라 필드 위에 있지 않을 때
            DegreeExceededError: 다항식 차수가 SRS 최대 차수를 초과할 때

        예시:
            >>> p = Polynomial([1, 2, 3], F)  # 1 + 2x + 3x²
            >>> C = kzg.commit(p)             # (1 + 2τ + 3τ²)·G1
        """
        self._check_poly(poly)
        return self.curve.multi_scalar_mul(self.srs.g1_powers, poly.coeffs)

    def open(self, poly, point):
        """p(z)를 계산하고 열기 증명을 생성한다.

        q(x) = (p(x) - y) / (x - z) 를 계산하여 π = commit(q) 를 반환한다.

        수학적 근거:
            p(z) = y이면 (p(x) - y)는 (x - z)로 나누어 떨어진다.
            (다항식의 인수정리: f(a) = 0 ⟺ (x-a) | f(x))

        Args:
            poly: 열어볼 다항식 p(x)
            point: 평가 점 z (스칼라 필드 원소 또는 정수)

        Returns:
            tuple: (y, π)

        Raises:
            RemainderMismatchError: 나머지가 0이 아닐 때

        예시:
            >>> p = Polynomial([1, 2], F)  # 1 + 2x
            >>> kzg.open(p, 3)             # (F17(7), [2]·G1)
        """
        self._check_poly(poly)
        field = poly.field
        z = field(point)

        # y = p(z)
        y = poly.evaluate(z)

        # q(x) = (p(x) - y) / (x - z)
        quotient, remainder = poly_div(poly - y, Polynomial([-z, field.one()], field))

        # 나머지가 0이어야 함 (p(z) = y이므로)
        if not remainder.is_zero():
            raise RemainderMismatchError("열기 증명 생성 실패: 나머지가 0이 아닙니다")

        return y, self.commit(quotient)

    def verify(self, commitment, point, evaluation, proof):
        """KZG 열기 증명을 검증한다.

        검증 방정식 (페어링):
            e(C - y·G1, H) == e(π, τ·H - z·H)

        Args:
            commitment: 다항식 커밋먼트 C (G1 점)
            point: 평가 점 z
            evaluation: 주장하는 평가값 y = p(z)
            proof: 열기 증명 π (G1 점)

        Returns:
            bool: 검증 성공 여부
        """
        if not self.pairing.is_bilinear:
            logger.warning(
                "%s는 쌍선형이 아닙니다: 검증 결과에 암호학적 의미가 없습니다",
                type(self.pairing).__name__,
            )
        curve = self.curve
        field = curve.scalar_field
        z = field(point)
        y = field(evaluation)

        # C - y·G1
        c_minus_y = curve.add(commitment, curve.neg(curve.scalar_mul(curve.generator_g1(), y)))

        # τ·H - z·H = [τ-z]₂
        tau_h, h = self.srs.g2_powers[1], self.srs.g2_powers[0]
        tau_minus_z = curve.add_ext(tau_h, curve.neg(curve.scalar_mul(h, z)))

        lhs = self.pairing.pair(c_minus_y, h)
        rhs = self.pairing.pair(proof, tau_minus_z)
        logger.debug("KZG 검증: lhs=%r, rhs=%r", lhs, rhs)
        return lhs == rhs
