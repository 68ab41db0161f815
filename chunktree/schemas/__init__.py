"""
Schemas

Error taxonomy and serializable proof documents.
"""

from .errors import (
    ErrorCodes,
    ChunkTreeError,
    ChunkTreeException,
    TreePreconditionException,
    MerkleVerificationException,
    ProofEncodingException,
    ConfigurationException,
)
from .proof import SCHEMA_VERSION, ProofStepModel, ProofDocument

__all__ = [
    "ErrorCodes",
    "ChunkTreeError",
    "ChunkTreeException",
    "TreePreconditionException",
    "MerkleVerificationException",
    "ProofEncodingException",
    "ConfigurationException",
    "SCHEMA_VERSION",
    "ProofStepModel",
    "ProofDocument",
]
