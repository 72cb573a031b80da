"""
증분(Incremental) 머클 누적자
==============================

Poseidon2 위에 구축한 고정 깊이, 추가 전용(append-only) 집합 소속 구조.
노트 커밋먼트를 잎(leaf)으로 받아들이고, 지금까지 나온 모든 루트를 기록한다.

**프론티어(frontier)**:
  전체 트리를 저장하지 않고, 레벨마다 값 하나(element_path)와
  좌/우 플래그 하나(index_path)만 유지한다. 삽입은 O(depth) 이다.

  레벨 i 에서 (tmp = 현재까지의 해시)
    index_path[i] == 0  →  tmp = H(tmp, element_path[i], 1)   (tmp 가 왼쪽 자식)
    index_path[i] == 1  →  tmp = H(element_path[i], tmp, 1)   (tmp 가 오른쪽 자식)

**증명(MerkleProof)**:
  삽입 직전의 (element_path, index_path) 스냅샷이다.
  나중에 다시 계산하지 않으며, 이후 삽입이 있어도 당시 루트로 검증된다.

**루트 이력**:
  check_membership 은 재계산 값이 root 와 같고, root 가 이력에 있을 때만
  True 를 반환한다. 이력에 없는 루트는 재계산 없이 경고 후 False.

사용 예시:
    >>> mt = MerkleTree.build(513, 20)
    >>> root, proof = mt.insert(commitment)
    >>> mt.check_membership(commitment, root, proof)  # True
"""

import logging
import threading

from zkutxo.chunks import bigint_to_bits
from zkutxo.errors import PreconditionViolation
from zkutxo.field import to_fr
from zkutxo.poseidon2 import hash3

logger = logging.getLogger(__name__)


def reverse_binary_array(x, length):
    """x 를 length 비트로 0-패딩한 이진 표현을 LSB 우선으로 반환한다.

    예시:
        >>> reverse_binary_array(6, 4)
        [0, 1, 1, 0]
    """
    if x < 0 or x.bit_length() > length:
        raise PreconditionViolation(f"{x} 는 {length} 비트로 표현할 수 없습니다")
    return bigint_to_bits(x, length)


def _hash_level(tmp, sibling, index_bit):
    if index_bit == 0:
        return hash3(tmp, sibling, 1)
    return hash3(sibling, tmp, 1)


class MerkleProof:
    """잎에서 루트까지의 형제 값과 좌/우 플래그.

    속성:
        path_elements: 레벨별 형제 값 (FR)
        path_indices: 레벨별 플래그 (0: 왼쪽, 1: 오른쪽)
    """

    def __init__(self, path_elements, path_indices):
        self.path_elements = list(path_elements)
        self.path_indices = list(path_indices)

    def __iter__(self):
        # (elements, indices) 로 언패킹할 수 있게 한다
        return iter((self.path_elements, self.path_indices))

    def __len__(self):
        return len(self.path_elements)

    def __eq__(self, other):
        if not isinstance(other, MerkleProof):
            return NotImplemented
        return (self.path_elements == other.path_elements
                and self.path_indices == other.path_indices)

    def __repr__(self):
        return f"MerkleProof(depth={len(self.path_elements)})"


class MerkleTree:
    """프론티어만 유지하는 증분 머클 누적자.

    속성:
        zero: 빈 잎 값
        depth: 트리 깊이
        root: 현재 루트
        roots: 지금까지의 모든 루트 (추가 전용, 마지막 원소 == root)
        element_path: 레벨별 프론티어 값
        index_path: reverse_binary_array(index, depth)
        index: 다음 잎의 위치

    삽입은 잠금으로 직렬화한다. 멤버십 검사는 루트 이력의 불변 스냅샷만 읽는다.
    """

    def __init__(self, zero, depth, root, roots, element_path, index_path, index):
        self.zero = zero
        self.depth = depth
        self.root = root
        self._roots = tuple(roots)
        self.element_path = element_path
        self.index_path = index_path
        self.index = index
        self._lock = threading.Lock()

    @classmethod
    def build(cls, zero, depth):
        """빈 트리를 만든다.

        tmp = zero 에서 시작해 depth 번 tmp ← H(tmp, 1, 1) 을 반복하며
        각 레벨의 프론티어 값을 채운다. 마지막 tmp 가 빈 트리의 루트이다.

        Raises:
            PreconditionViolation: depth < 1
        """
        if depth < 1:
            raise PreconditionViolation(f"트리 깊이는 1 이상이어야 합니다: {depth}")

        element_path = []
        tmp = to_fr(zero)
        for _ in range(depth):
            element_path.append(tmp)
            tmp = hash3(tmp, 1, 1)

        return cls(zero, depth, tmp, [tmp], element_path, [0] * depth, 0)

    @property
    def roots(self):
        return self._roots

    @property
    def last_root(self):
        return self._roots[-1]

    @property
    def size(self):
        """지금까지 삽입된 잎의 개수."""
        return self.index

    @property
    def capacity(self):
        """삽입 가능한 최대 잎 개수 (2^depth - 1)."""
        return (1 << self.depth) - 1

    def insert(self, commitment):
        """잎을 삽입하고 (새 루트, 삽입 직전 프론티어로 만든 증명) 을 반환한다.

        Raises:
            PreconditionViolation: 인덱스 오버플로 (capacity 초과)
        """
        with self._lock:
            if self.index >= self.capacity:
                raise PreconditionViolation(
                    f"머클 트리가 가득 찼습니다 (depth={self.depth}, index={self.index})"
                )

            new_element_path = []
            tmp = to_fr(commitment)
            for i in range(self.depth):
                new_element_path.append(tmp)
                tmp = _hash_level(tmp, self.element_path[i], self.index_path[i])

            mt_proof = MerkleProof(self.element_path, self.index_path)

            self.root = tmp
            self._roots = self._roots + (tmp,)
            self.element_path = new_element_path
            self.index += 1
            self.index_path = reverse_binary_array(self.index, self.depth)

            return self.root, mt_proof

    def is_known_root(self, root):
        return root in self._roots

    def check_membership(self, commitment, root, proof):
        """proof 경로를 따라 재계산한 값이 root 이고 root 가 이력에 있는지 검사한다.

        Args:
            commitment: 잎 값
            root: 삽입 당시의 루트
            proof: MerkleProof 또는 (path_elements, path_indices)

        Returns:
            bool
        """
        if not self.is_known_root(root):
            logger.warning("Root is not recognised in the set of valid roots: %s", int(root))
            return False

        path_elements, path_indices = proof
        if len(path_elements) != self.depth or len(path_indices) != self.depth:
            logger.warning("Merkle proof depth does not match the tree depth %d", self.depth)
            return False

        tmp = to_fr(commitment)
        for sibling, index_bit in zip(path_elements, path_indices):
            tmp = _hash_level(tmp, sibling, index_bit)

        return tmp == root

    def __repr__(self):
        return f"MerkleTree(depth={self.depth}, index={self.index}, root={int(self.root)})"
