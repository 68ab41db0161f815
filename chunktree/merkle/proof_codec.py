"""
Proof Wire Format
Compact binary encoding of an inclusion proof for an external verifier.

Layout (big-endian):
    count   : uint32           number of steps
    records : count * 33 bytes 32-byte sibling hash + 1 flag byte

Flag byte is 0x01 when the sibling goes on the right, 0x00 otherwise.
Any other value is rejected.
"""
from __future__ import annotations

import struct

from chunktree.crypto.hashing import HASH_SIZE
from chunktree.merkle.merkle_proofs import InclusionProof, ProofLike, ProofStep
from chunktree.schemas.errors import ProofEncodingException


_HEADER = struct.Struct("!I")
RECORD_SIZE: int = HASH_SIZE + 1

# A tree of 2**64 leaves is far beyond anything buildable in memory
MAX_PROOF_STEPS: int = 64

_FLAG_RIGHT = 0x01
_FLAG_LEFT = 0x00


def encode_proof(proof: ProofLike) -> bytes:
    """
    Serialize a proof to the length-prefixed record format.

    Raises:
        ProofEncodingException: If a step has a sibling that is not a
            32-byte digest or there are more than MAX_PROOF_STEPS steps
    """
    steps = list(proof)
    if len(steps) > MAX_PROOF_STEPS:
        raise ProofEncodingException(
            f"Proof has {len(steps)} steps, maximum is {MAX_PROOF_STEPS}",
            details={"steps": len(steps)},
        )

    parts = [_HEADER.pack(len(steps))]
    for i, (sibling, on_right) in enumerate(steps):
        if not isinstance(sibling, (bytes, bytearray)) or len(sibling) != HASH_SIZE:
            raise ProofEncodingException(
                f"Step {i} sibling must be {HASH_SIZE} bytes",
                details={"step": i},
            )
        parts.append(bytes(sibling))
        parts.append(bytes([_FLAG_RIGHT if on_right else _FLAG_LEFT]))
    return b"".join(parts)


def decode_proof(data: bytes) -> InclusionProof:
    """
    Parse the format written by encode_proof().

    Raises:
        ProofEncodingException: On a short header, an implausible step
            count, a payload whose length disagrees with the count, or an
            unknown flag byte
    """
    data = bytes(data)
    if len(data) < _HEADER.size:
        raise ProofEncodingException(
            f"Proof payload too short: {len(data)} bytes",
            details={"length": len(data)},
        )

    (count,) = _HEADER.unpack_from(data, 0)
    if count > MAX_PROOF_STEPS:
        raise ProofEncodingException(
            f"Declared step count {count} exceeds maximum {MAX_PROOF_STEPS}",
            details={"count": count},
        )

    expected = _HEADER.size + count * RECORD_SIZE
    if len(data) != expected:
        raise ProofEncodingException(
            f"Proof payload is {len(data)} bytes, expected {expected} for {count} steps",
            details={"count": count, "length": len(data), "expected": expected},
        )

    steps: list[ProofStep] = []
    offset = _HEADER.size
    for i in range(count):
        sibling = data[offset:offset + HASH_SIZE]
        flag = data[offset + HASH_SIZE]
        if flag not in (_FLAG_LEFT, _FLAG_RIGHT):
            raise ProofEncodingException(
                f"Step {i} has invalid flag byte 0x{flag:02x}",
                details={"step": i, "flag": flag},
            )
        steps.append(ProofStep(sibling, flag == _FLAG_RIGHT))
        offset += RECORD_SIZE

    return InclusionProof(steps=tuple(steps))


__all__ = [
    "RECORD_SIZE",
    "MAX_PROOF_STEPS",
    "encode_proof",
    "decode_proof",
]
