"""
Merkle Tree and Commitments
Deterministic sorted-pair Merkle tree construction + proof generation/verification.

This module provides:
- MerkleProof: Dataclass representing a Merkle inclusion proof
- MerkleTree: Immutable tree built once per whitelist snapshot
- build_merkle_root: Compute root from leaf hashes
- build_merkle_proof: Generate proof for a specific leaf
- verify_merkle_proof: Verify a proof against its claimed root

Canonical Commitment Rules:
1. Leaf hashing: keccak256(address_20 ++ uint256_amount_32)
2. Leaves sorted ascending before layering
3. Parent hashing: keccak256(sorted(left, right))
4. Odd node at any level: promoted unchanged
5. Empty tree: 32 zero bytes
6. Single leaf: root = leaf

Usage:
    from core.merkle import MerkleTree, verify_merkle_proof
    from core.crypto import hash_entitlement_leaf

    leaves = [hash_entitlement_leaf(addr, amount) for addr, amount in records]
    tree = MerkleTree(leaves)
    proof = tree.get_proof(leaves[0])
    assert verify_merkle_proof(proof)
"""
from .merkle_tree import (
    EMPTY_TREE_ROOT,
    MerkleProof,
    MerkleTree,
    merkle_parent,
    build_merkle_layers,
    build_merkle_root,
    build_merkle_proof,
    compute_root_from_path,
    verify_merkle_path,
    verify_merkle_proof,
    compute_tree_depth,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "MerkleProof",
    "MerkleTree",
    "EMPTY_TREE_ROOT",
    # Core functions
    "merkle_parent",
    "build_merkle_layers",
    "build_merkle_root",
    "build_merkle_proof",
    "compute_root_from_path",
    "verify_merkle_path",
    "verify_merkle_proof",
    "compute_tree_depth",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
