"""
프로토콜 공통 상수
===================

외부 회로(circom)와 이 패키지가 공유하는 설정값이다.
회로 쪽 선언과 값이 어긋나면 증인(witness) 생성이 실패하므로
함부로 바꾸지 않는다.
"""

# 청크(limb) 설정: 2048비트 모듈러스 = 64비트 × 32개
CHUNK_SIZE = 64
CHUNK_NUM = 32

# 1024비트 모듈러스용 청크 개수 (64비트 × 16개)
CHUNK_NUM_1024 = 16

# 소수 p, q 의 비트 길이 (N 은 약 2 × SECURITY_BIT 비트)
SECURITY_BIT = 1024

# 머클 누적자
MT_ZERO = 513
MT_DEPTH = 20

# RSA 고정 공개 지수
RSA_EXP = 65537

# 키 생성 시 gcd(e, φ(N)) != 1 이면 재샘플링하는 최대 횟수
MAX_KEYGEN_ATTEMPTS = 16

# Poseidon2 파라미터 (bn254, t=3)
POSEIDON2_T = 3
POSEIDON2_D = 5
POSEIDON2_ROUNDS_F = 8
POSEIDON2_ROUNDS_P = 56

# 회로의 relayer 관련 공개 입력 기본값
RELAYER_DEFAULTS = {
    "receipt": 0,
    "relayer": 0,
    "fee": 0,
    "refund": 0,
}
