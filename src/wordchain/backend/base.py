"""
Proof Backend Interface

The transition program never proves anything itself. It consumes a backend
through four calls:

    hash(fields)                                  -> commitment
    compile(program)                              -> VerificationKey
    generate_proof(vk, method, public_input, ...) -> Proof
    verify_proof(proof, vk)                       -> bool

A program handed to compile() exposes `name`, `params` and `methods()`, the
latter mapping method names to ProgramMethod entries.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional, Sequence, Tuple

from ..hashing import commit


@dataclass(frozen=True)
class ProgramMethod:
    """
    One provable method of a program.

    check(public_input, *private_inputs) raises on any failed requirement.
    proof_arity is the number of earlier proofs the method consumes.
    """
    name: str
    proof_arity: int
    check: Callable[..., None]


@dataclass(frozen=True)
class VerificationKey:
    """Key produced once by compile() and shared read-only afterwards."""
    program_name: str
    digest: bytes
    methods: Tuple[Tuple[str, int], ...]

    def arity(self, method: str) -> Optional[int]:
        """Proof arity of a method, or None if the program lacks it."""
        for name, arity in self.methods:
            if name == method:
                return arity
        return None


def _read(data: bytes, offset: int, size: int) -> Tuple[bytes, int]:
    if offset + size > len(data):
        raise ValueError("Truncated proof")
    return data[offset:offset + size], offset + size


def _read_prefixed(data: bytes, offset: int) -> Tuple[bytes, int]:
    raw, offset = _read(data, offset, 4)
    return _read(data, offset, int.from_bytes(raw, 'big'))


@dataclass(frozen=True)
class Proof:
    """
    Proof that a program method was evaluated to reach public_input.

    Contains:
    - program_digest: digest of the verification key it was minted under
    - method: name of the method that produced it
    - public_input: the commitment the proof is bound to
    - children: receipts of the proofs the method consumed
    - receipt: backend-specific attestation over all of the above
    """
    program_digest: bytes
    method: str
    public_input: bytes
    children: Tuple[bytes, ...]
    receipt: bytes

    def serialize(self) -> bytes:
        """Serialize proof for transmission."""
        method = self.method.encode('utf-8')
        parts = [
            len(self.program_digest).to_bytes(4, 'big'),
            self.program_digest,
            len(method).to_bytes(4, 'big'),
            method,
            len(self.public_input).to_bytes(4, 'big'),
            self.public_input,
            len(self.children).to_bytes(4, 'big'),
        ]
        for child in self.children:
            parts.append(len(child).to_bytes(4, 'big'))
            parts.append(child)
        parts.append(len(self.receipt).to_bytes(4, 'big'))
        parts.append(self.receipt)
        return b''.join(parts)

    @classmethod
    def deserialize(cls, data: bytes) -> 'Proof':
        """Deserialize from bytes."""
        offset = 0

        program_digest, offset = _read_prefixed(data, offset)
        method, offset = _read_prefixed(data, offset)
        public_input, offset = _read_prefixed(data, offset)

        raw, offset = _read(data, offset, 4)
        children = []
        for _ in range(int.from_bytes(raw, 'big')):
            child, offset = _read_prefixed(data, offset)
            children.append(child)

        receipt, offset = _read_prefixed(data, offset)

        if offset != len(data):
            raise ValueError(f"Trailing bytes in proof: {len(data) - offset}")

        return cls(
            program_digest=program_digest,
            method=method.decode('utf-8'),
            public_input=public_input,
            children=tuple(children),
            receipt=receipt,
        )

    def to_json(self) -> Dict[str, Any]:
        """JSON-compatible form with hex-encoded byte fields."""
        return {
            'program_digest': self.program_digest.hex(),
            'method': self.method,
            'public_input': self.public_input.hex(),
            'children': [c.hex() for c in self.children],
            'receipt': self.receipt.hex(),
        }

    @classmethod
    def from_json(cls, obj: Dict[str, Any]) -> 'Proof':
        try:
            return cls(
                program_digest=bytes.fromhex(obj['program_digest']),
                method=obj['method'],
                public_input=bytes.fromhex(obj['public_input']),
                children=tuple(bytes.fromhex(c) for c in obj['children']),
                receipt=bytes.fromhex(obj['receipt']),
            )
        except KeyError as e:
            raise ValueError(f"Missing proof field: {e}") from e

    def __repr__(self) -> str:
        return (
            f"Proof(method={self.method!r}, "
            f"public_input={self.public_input[:8].hex()}..., "
            f"children={len(self.children)})"
        )


class ProofBackend(ABC):
    """Abstract proof backend."""

    def hash(self, fields: Iterable[int]) -> bytes:
        """Commitment over field elements."""
        return commit(fields)

    @abstractmethod
    def compile(self, program) -> VerificationKey:
        """One-time setup. Must run before proofs are generated."""
        pass

    @abstractmethod
    def generate_proof(
        self,
        vk: VerificationKey,
        method: str,
        public_input: bytes,
        private_inputs: Sequence[Any]
    ) -> Proof:
        """
        Run method's checks and return a proof bound to public_input.

        Raises whatever the method's check raises; no proof is produced then.
        """
        pass

    @abstractmethod
    def verify_proof(self, proof: Proof, vk: VerificationKey) -> bool:
        """Stateless check. Returns False rather than raising."""
        pass
