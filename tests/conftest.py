import sys
import os
import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from kzg_study.curve import toy_curve, bn128_curve
from kzg_study.field import prime_field, extension_field
from kzg_study.kzg import KZG
from kzg_study.pairing import TatePairing


# ── 테스트 상수 ──
TOY_TAU = 9
TOY_MAX_DEGREE = 4


@pytest.fixture(scope="session")
def F7():
    return prime_field(7)


@pytest.fixture(scope="session")
def F17():
    """학습용 곡선의 스칼라 필드."""
    return prime_field(17)


@pytest.fixture(scope="session")
def F101():
    """학습용 곡선의 기반 필드."""
    return prime_field(101)


@pytest.fixture(scope="session")
def F101_2(F101):
    """F_101[u]/(u² + 2)"""
    return extension_field(F101, -2)


@pytest.fixture(scope="session")
def curve():
    return toy_curve()


@pytest.fixture(scope="session")
def bn():
    """bn128 곡선 (생성 시 [r]G 검증이 있어 세션당 한 번만 만든다)."""
    return bn128_curve()


@pytest.fixture(scope="session")
def tate(curve):
    return TatePairing(curve)


@pytest.fixture
def kzg(curve):
    """τ = 9 고정 KZG (max_degree=4)."""
    return KZG(max_degree=TOY_MAX_DEGREE, curve=curve, rng=FixedRandom(TOY_TAU))


class FixedRandom:
    """randrange가 항상 같은 값을 돌려주는 난수원."""

    def __init__(self, value):
        self.value = value
        self.calls = []

    def randrange(self, start, stop):
        self.calls.append((start, stop))
        return self.value


@pytest.fixture
def fixed_random():
    return FixedRandom
