"""
KZG 스터디 모듈: 오류 종류
===========================

대수 연산 중 발생할 수 있는 실패를 종류별로 구분한다.
모든 오류는 ValueError를 상속하므로 기존처럼 `except ValueError`로도 잡을 수 있다.

  - ConfigMismatchError: 서로 다른 필드(모듈러스)의 값을 섞어 연산
  - NonInvertibleError: 모듈러스와 서로소가 아닌 값의 역원 요청
  - DivisionByZeroError: 영 다항식으로 나누기, 중복 x좌표로 보간
  - DegreeExceededError: SRS 최대 차수를 넘는 다항식을 커밋/열기
  - RemainderMismatchError: 나누어 떨어져야 할 나눗셈의 나머지가 0이 아님
  - InvalidCurveError: 특이(singular) 곡선, 곡선 위에 없는 점
"""


class AlgebraError(ValueError):
    """이 패키지에서 발생하는 모든 대수 오류의 기반 클래스."""


class ConfigMismatchError(AlgebraError):
    pass


class NonInvertibleError(AlgebraError, ZeroDivisionError):
    pass


class DivisionByZeroError(AlgebraError, ZeroDivisionError):
    pass


class DegreeExceededError(AlgebraError):
    pass


class RemainderMismatchError(AlgebraError):
    pass


class InvalidCurveError(AlgebraError):
    pass
