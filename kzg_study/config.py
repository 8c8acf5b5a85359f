"""
KZG 스터디 설정
곡선 프리셋과 SRS 최대 차수의 기본값을 환경 변수에서 읽는다
"""

import os

from kzg_study.curve import get_curve

# 기본 설정
DEFAULT_CURVE = os.getenv('KZG_STUDY_CURVE', 'toy101')
DEFAULT_MAX_DEGREE = int(os.getenv('KZG_STUDY_MAX_DEGREE', 8))


class Config:
    """설정 클래스"""

    def __init__(self):
        self.curve_name = DEFAULT_CURVE
        self.max_degree = DEFAULT_MAX_DEGREE

    @property
    def curve(self):
        return get_curve(self.curve_name)


# 전역 설정 인스턴스
config = Config()
