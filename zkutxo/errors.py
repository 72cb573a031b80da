"""
zkutxo 예외 계층
=================

**전제조건 위반 (PreconditionViolation)**:
  잘못된 트리 깊이, 인덱스 오버플로, 역원이 없는 공개 지수 등.
  연산을 중단시키며 조용히 복구하지 않는다.

**검증 실패**:
  커밋먼트 불일치, 알 수 없는 루트, 멤버십 실패는 예외가 아니라
  False / SPEND_DENIED 로 반환된다 (zkutxo.utxo 참고).

**상위 라이브러리 실패**:
  gmpy2 등에서 발생한 예외는 변환 없이 그대로 전파된다.
"""


class ZkUtxoError(Exception):
    """zkutxo 예외의 기반 클래스."""


class PreconditionViolation(ZkUtxoError, ValueError):
    """호출자가 지켜야 할 전제조건이 깨졌을 때 발생한다."""
