"""
zkutxo: RSA 트랩도어 기반 UTXO 커밋먼트/널리파이어 프로토콜의 호스트 측 구현
=============================================================================

회로(circuit) 바깥에서 필요한 모든 값을 계산한다.

  - field:          BN254 스칼라 필드 FR
  - poseidon2:      Poseidon2 순열 해시 (t=3)
  - merkle:         증분(incremental) 머클 누적자
  - rsa:            RSA 트랩도어 키쌍 (e=65537 / 임의 지수)
  - utxo:           노트(UTXO) 발행 / 검사 / 소비
  - user:           사용자(참여자) 오케스트레이션
  - circuit_inputs: 외부 회로에 넣을 입력 신호 생성
"""
