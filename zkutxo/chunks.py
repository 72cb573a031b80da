"""
청크 정수 (Chunked Integer)
============================

외부 회로는 제한된 폭의 limb 위에서만 큰 정수를 다룬다.
큰 정수 x 를 chunk_size 비트 limb chunk_num 개로 분해(리틀 엔디안)한다.

  x = Σᵢ limb[i] · 2^(chunk_size · i),   0 ≤ limb[i] < 2^chunk_size

chunk_size · chunk_num 이 x 의 비트 길이보다 작으면 상위 비트가 잘린다.
이것은 호출자의 책임이며, fits() 로 미리 확인할 수 있다.

사용 예시:
    >>> bigint_to_array(64, 2, 2**64 + 5)
    [5, 1]
    >>> array_to_bigint(64, [5, 1])
    18446744073709551621
"""

from zkutxo.errors import PreconditionViolation


def _check_params(n, k):
    if n < 1 or k < 1:
        raise PreconditionViolation(
            f"chunk_size, chunk_num 은 1 이상이어야 합니다: ({n}, {k})"
        )


def bigint_to_array(n, k, x):
    """x 를 n 비트 limb k 개로 분해한다 (하위 limb 먼저).

    Args:
        n: chunk_size (limb 비트 수)
        k: chunk_num (limb 개수)
        x: 음이 아닌 정수

    Returns:
        list[int]: 길이 k 의 limb 리스트
    """
    _check_params(n, k)
    x = int(x)
    if x < 0:
        raise PreconditionViolation(f"음수는 분해할 수 없습니다: {x}")

    mask = (1 << n) - 1
    ret = []
    for _ in range(k):
        ret.append(x & mask)
        x >>= n
    return ret


def array_to_bigint(n, limbs):
    """bigint_to_array 의 역연산: Σ limb[i] · 2^(n·i)."""
    result = 0
    for i, limb in enumerate(limbs):
        limb = int(limb)
        if limb < 0 or limb >> n:
            raise PreconditionViolation(
                f"limb[{i}] = {limb} 가 {n} 비트 범위를 벗어납니다"
            )
        result += limb << (n * i)
    return result


def fits(n, k, x):
    """x 가 잘림 없이 n 비트 × k 개로 표현되는지 확인한다."""
    return int(x).bit_length() <= n * k


def bigint_to_bits(x, bit_length):
    """x 의 하위 bit_length 비트를 LSB 우선 리스트로 반환한다."""
    x = int(x)
    return [(x >> i) & 1 for i in range(bit_length)]


class ChunkedInteger:
    """고정 폭 limb 배열과 원래 정수 사이의 변환을 묶은 값 객체.

    속성:
        chunk_size: limb 비트 수
        limbs: 리틀 엔디안 limb 리스트
    """

    def __init__(self, chunk_size, limbs):
        self.chunk_size = chunk_size
        self.limbs = list(limbs)
        # limb 범위 검사
        array_to_bigint(chunk_size, self.limbs)

    @classmethod
    def from_int(cls, x, chunk_size, chunk_num):
        return cls(chunk_size, bigint_to_array(chunk_size, chunk_num, x))

    @property
    def chunk_num(self):
        return len(self.limbs)

    def to_int(self):
        return array_to_bigint(self.chunk_size, self.limbs)

    def __getitem__(self, i):
        return self.limbs[i]

    def __len__(self):
        return len(self.limbs)

    def __iter__(self):
        return iter(self.limbs)

    def __eq__(self, other):
        if not isinstance(other, ChunkedInteger):
            return NotImplemented
        return self.chunk_size == other.chunk_size and self.limbs == other.limbs

    def __repr__(self):
        return f"ChunkedInteger(chunk_size={self.chunk_size}, limbs={self.limbs})"
