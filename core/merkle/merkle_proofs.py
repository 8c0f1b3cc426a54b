"""
Merkle - Proofs Convenience Wrappers
Thin wrappers around core Merkle tree functions for cleaner API.

This module provides class-based interfaces:
- MerkleProver: Generate proofs for leaves or entitlement records
- MerkleVerifier: Verify proofs, including the independent entitlement
  check that mirrors what an on-chain verifier reconstructs

The verifier intentionally rebuilds the leaf from (address, amount) and
never consults a MerkleTree instance, so it can catch construction bugs.
"""
from __future__ import annotations

from typing import Iterable, Sequence

from core.crypto.hashing import from_hex, hash_entitlement_leaf
from core.merkle.merkle_tree import (
    MerkleProof,
    build_merkle_proof,
    build_merkle_root,
    verify_merkle_path,
    verify_merkle_proof,
)


class MerkleProver:
    """
    Convenience class for generating Merkle proofs.

    Example:
        >>> leaves = [keccak256(b"a"), keccak256(b"b"), keccak256(b"c")]
        >>> proof = MerkleProver.prove(leaves, leaves[1])
        >>> proof.leaf == leaves[1]
        True
    """

    @staticmethod
    def prove(leaves: Sequence[bytes], leaf: bytes) -> MerkleProof:
        """
        Generate a Merkle proof for a leaf.

        Raises:
            ValueError: If leaves is empty or leaf is not among them
        """
        return build_merkle_proof(leaves, leaf)

    @staticmethod
    def prove_entitlement(
        records: Iterable[tuple[str, int]],
        address: str,
        amount: int,
    ) -> MerkleProof:
        """
        Generate a proof for an (address, amount) record among records.

        Records are hashed with the packed entitlement leaf encoding.
        """
        leaves = [hash_entitlement_leaf(a, v) for a, v in records]
        return build_merkle_proof(leaves, hash_entitlement_leaf(address, amount))

    @staticmethod
    def compute_root(leaves: Sequence[bytes]) -> bytes:
        """Compute the Merkle root for a collection of leaves."""
        return build_merkle_root(leaves)

    @staticmethod
    def compute_root_from_records(records: Iterable[tuple[str, int]]) -> bytes:
        """Compute the Merkle root for a collection of (address, amount) records."""
        return build_merkle_root([hash_entitlement_leaf(a, v) for a, v in records])


class MerkleVerifier:
    """
    Convenience class for verifying Merkle proofs.

    Example:
        >>> MerkleVerifier.verify_entitlement(address, 1000, proof_hex, root_hex)
        True
    """

    @staticmethod
    def verify(proof: MerkleProof) -> bool:
        """Verify a Merkle proof against its claimed root."""
        return verify_merkle_proof(proof)

    @staticmethod
    def verify_leaf_in_root(
        leaf: bytes,
        siblings: Sequence[bytes],
        root: bytes,
    ) -> bool:
        """Verify a leaf is included in a Merkle root using raw components."""
        return verify_merkle_path(leaf, siblings, root)

    @staticmethod
    def verify_entitlement(
        address: str,
        amount: int,
        proof: Sequence[str | bytes],
        root: str | bytes,
    ) -> bool:
        """
        Verify that (address, amount) is committed to by root.

        Accepts hex strings (as returned by the manager) or raw bytes for
        the proof hashes and root. Malformed address or amount raises
        the corresponding ledger exception; malformed hex raises ValueError.
        """
        leaf = hash_entitlement_leaf(address, amount)
        siblings = [from_hex(h) if isinstance(h, str) else h for h in proof]
        root_bytes = from_hex(root) if isinstance(root, str) else root
        return verify_merkle_path(leaf, siblings, root_bytes)


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
