"""
Proof Backends

The abstract interface consumed by the transition program, and a reference
hash-receipt implementation.
"""

from .base import (
    ProgramMethod,
    VerificationKey,
    Proof,
    ProofBackend,
)
from .receipt import ReceiptBackend, compute_receipt

__all__ = [
    'ProgramMethod',
    'VerificationKey',
    'Proof',
    'ProofBackend',
    'ReceiptBackend',
    'compute_receipt',
]
