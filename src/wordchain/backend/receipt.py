"""
Receipt Backend

Reference backend that attests to method evaluations with hash receipts:

    vk      = H(PROGRAM ‖ H(params) ‖ name ‖ (method, arity)...)
    receipt = H(PROOF ‖ vk ‖ method ‖ public_input ‖ child receipts...)

A receipt is only minted after the method's check has run to completion,
and each check verifies the receipts of the proofs it consumes, so a valid
receipt transitively covers the whole lineage down to an Init.

This is a transparent, non-succinct stand-in for a real proving system:
receipts are not zero-knowledge and anyone holding the key can recompute
them. It exists so the protocol can run end to end.
"""

from typing import Any, Dict, List, Sequence
import logging
import threading

from ..errors import ProgramNotCompiledError, ProtocolViolation, UnknownMethodError
from ..hashing import tagged_hash
from ..tags import ChainTag
from .base import Proof, ProofBackend, VerificationKey

logger = logging.getLogger(__name__)


def compute_receipt(
    program_digest: bytes,
    method: str,
    public_input: bytes,
    children: Sequence[bytes]
) -> bytes:
    """Receipt for one method evaluation."""
    return tagged_hash(
        ChainTag.PROOF,
        program_digest,
        method.encode('utf-8'),
        public_input,
        len(children).to_bytes(4, 'big'),
        *children
    )


class ReceiptBackend(ProofBackend):
    """
    Hash-receipt proof backend.

    The only mutable state is the table of compiled programs, written once
    per compile() call.
    """

    def __init__(self):
        self._programs: Dict[bytes, Any] = {}
        self._lock = threading.Lock()

    def compile(self, program) -> VerificationKey:
        methods = sorted(
            (m.name, m.proof_arity) for m in program.methods().values()
        )

        parts: List[bytes] = [
            program.params.hash(),
            program.name.encode('utf-8'),
        ]
        for name, arity in methods:
            parts.append(name.encode('utf-8'))
            parts.append(arity.to_bytes(2, 'big'))
        digest = tagged_hash(ChainTag.PROGRAM, *parts)

        with self._lock:
            self._programs[digest] = program

        logger.debug("Compiled %s (%s)", program.name, digest[:8].hex())
        return VerificationKey(
            program_name=program.name,
            digest=digest,
            methods=tuple(methods),
        )

    def generate_proof(
        self,
        vk: VerificationKey,
        method: str,
        public_input: bytes,
        private_inputs: Sequence[Any]
    ) -> Proof:
        program = self._programs.get(vk.digest)
        if program is None:
            raise ProgramNotCompiledError(
                f"Program {vk.program_name!r} was not compiled by this backend"
            )

        method_entry = program.methods().get(method)
        if method_entry is None:
            raise UnknownMethodError(f"Unknown method: {method!r}")

        children = [p for p in private_inputs if isinstance(p, Proof)]
        if len(children) != method_entry.proof_arity:
            raise ProtocolViolation(
                f"{method} consumes {method_entry.proof_arity} proofs, got {len(children)}"
            )

        method_entry.check(public_input, *private_inputs)

        child_receipts = tuple(c.receipt for c in children)
        proof = Proof(
            program_digest=vk.digest,
            method=method,
            public_input=public_input,
            children=child_receipts,
            receipt=compute_receipt(vk.digest, method, public_input, child_receipts),
        )
        logger.debug("Proved %s -> %s", method, public_input[:8].hex())
        return proof

    def verify_proof(self, proof: Proof, vk: VerificationKey) -> bool:
        if not isinstance(proof, Proof):
            return False
        if proof.program_digest != vk.digest:
            return False

        arity = vk.arity(proof.method)
        if arity is None or len(proof.children) != arity:
            return False

        expected = compute_receipt(
            vk.digest, proof.method, proof.public_input, proof.children
        )
        return proof.receipt == expected
