"""
KZG Structured Reference String (SRS)
======================================

신뢰 설정(trusted setup)으로 KZG 공개 파라미터를 생성한다.

**SRS란?**
  KZG 다항식 커밋먼트 스킴에 필요한 공개 파라미터이다.
  비밀 값 τ ("toxic waste")를 사용하여 생성되며,
  생성 후 τ는 반드시 폐기되어야 한다.

  SRS = {
      G1 powers: [G1, τ·G1, τ²·G1, ..., τ^d·G1]
      G2 powers: [H, τ·H]
  }

**스칼라 필드**:
  τ와 그 거듭제곱은 곡선 부분군 위수 r을 모듈러스로 하는 F_r 의 원소이다.
  [r]·G1 = ∞ 이므로 τ^i 를 r로 줄여도 같은 점이 나온다.
  학습용 곡선에서는 r = 17 이라 τ ∈ {1, ..., 16}.

**보안**:
  τ를 아는 사람은 임의의 거짓 증명을 만들 수 있다.
  실제 시스템에서는 MPC(Multi-Party Computation)로 τ를 생성한다.
  여기서는 주입된 난수원(rng)을 쓰거나, 교육용으로 seed에서 결정론적으로 만든다.

사용 예시:
    >>> srs = SRS.generate(toy_curve(), max_degree=4, seed=42)
    >>> len(srs.g1_powers)  # 5 (0차부터 4차까지)
"""

import hashlib
import logging
import secrets

logger = logging.getLogger(__name__)


class SRS:
    """Structured Reference String: KZG 커밋먼트용 공개 파라미터.

    속성:
        g1_powers: (G1, τ·G1, τ²·G1, ..., τ^d·G1)
        g2_powers: (H, τ·H)
        max_degree: 지원하는 최대 다항식 차수 d
        curve: 점들이 속한 EllipticCurve
    """

    def __init__(self, g1_powers, g2_powers, max_degree, curve):
        self.g1_powers = tuple(g1_powers)
        self.g2_powers = tuple(g2_powers)
        self.max_degree = max_degree
        self.curve = curve

    def __repr__(self):
        return f"SRS(max_degree={self.max_degree}, curve={self.curve.name!r})"

    @staticmethod
    def sample_tau(curve, rng=None, seed=None):
        """τ ∈ [1, r) 를 뽑는다.

        seed가 주어지면 sha256(seed)에서 결정론적으로 만들고,
        아니면 rng.randrange(1, r) 를 사용한다 (기본: secrets.SystemRandom).
        """
        r = curve.subgroup_order
        if seed is not None:
            h = hashlib.sha256(str(seed).encode()).digest()
            tau_int = int.from_bytes(h, "big") % (r - 1) + 1
        else:
            if rng is None:
                rng = secrets.SystemRandom()
            tau_int = rng.randrange(1, r)
        return curve.scalar_field(tau_int)

    @classmethod
    def generate(cls, curve, max_degree, rng=None, seed=None):
        """SRS를 생성한다.

        Args:
            curve: 사용할 EllipticCurve
            max_degree: 지원할 최대 다항식 차수 (0 이상)
            rng: randrange를 가진 난수원
            seed: 결정론적 생성을 위한 시드 (교육용)

        Returns:
            SRS: 생성된 구조화 참조 문자열

        Raises:
            ValueError: max_degree가 음수일 때

        예시:
            >>> srs = SRS.generate(toy_curve(), max_degree=2, seed=1234)
            >>> # 2차까지의 다항식을 커밋할 수 있음
        """
        if max_degree < 0:
            raise ValueError(f"max_degree는 0 이상이어야 합니다: {max_degree}")

        # toxic waste τ 생성
        tau = cls.sample_tau(curve, rng=rng, seed=seed)

        # G1 powers: [G1, τ·G1, τ²·G1, ..., τ^d·G1]
        g1 = curve.generator_g1()
        g1_powers = []
        tau_power = curve.scalar_field.one()  # τ^0 = 1
        for _ in range(max_degree + 1):
            g1_powers.append(curve.scalar_mul(g1, tau_power))
            tau_power = tau_power * tau

        # G2 powers: [H, τ·H]
        h = curve.generator_g2()
        g2_powers = [h, curve.scalar_mul(h, tau)]

        logger.debug("SRS 생성 완료: curve=%s, max_degree=%d", curve.name, max_degree)
        return cls(g1_powers, g2_powers, max_degree, curve)
