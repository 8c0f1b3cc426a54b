"""
Merkle - Tree Implementation
Deterministic Merkle tree construction, proof generation, and verification.

This module provides:
- Deterministic Merkle root computation over a *set* of leaves
- Merkle proof generation for any leaf
- Merkle proof verification that needs no position bits
- MerkleTree: an immutable, cached tree built once per whitelist snapshot

Canonical Commitment Rules (Hard Contracts):
1. Leaf ordering: leaves are sorted ascending as raw bytes before layering,
   so the root is independent of insertion order
2. Parent hashing: parent = keccak256(min(a, b) + max(a, b))  ("sorted pairs")
3. Odd node rule: PROMOTE - the last node of an odd-sized layer is carried
   to the next layer unchanged and contributes no sibling to proofs
4. Empty leaves: build_merkle_root([]) returns 32 zero bytes
5. Single leaf: root = leaf, proof = []

Rule 2 is what on-chain verifiers such as OpenZeppelin MerkleProof expect:
the verifier folds siblings in with a symmetric hash and never needs to know
whether a node was a left or right child.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from core.crypto.hashing import HASH_LENGTH, keccak256


# Empty tree sentinel: 32 zero bytes (bytes32(0) on-chain)
EMPTY_TREE_ROOT: bytes = b"\x00" * HASH_LENGTH


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle proof for a single leaf in a Merkle tree.

    Attributes:
        leaf: The leaf hash being proven
        index: Position of the leaf in the sorted leaf layer
        siblings: Sibling hashes from bottom to top of tree
        root: The Merkle root this proof is against
    """
    leaf: bytes
    index: int
    siblings: list[bytes] = field(default_factory=list)
    root: bytes = EMPTY_TREE_ROOT

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")


def merkle_parent(left: bytes, right: bytes) -> bytes:
    """
    Compute the parent hash of two child nodes.

    Children are sorted before concatenation, so
    merkle_parent(a, b) == merkle_parent(b, a).
    """
    if right < left:
        left, right = right, left
    return keccak256(left + right)


def build_merkle_layers(leaves: Sequence[bytes]) -> list[list[bytes]]:
    """
    Build every layer of the tree, leaves first and root last.

    Algorithm:
    1. Sort the leaves
    2. Pair adjacent nodes and compute sorted-pair parent hashes
    3. If a layer has an odd node count, promote the last node unchanged
    4. Repeat until a single node remains

    Example: [a, b, c] -> [[a, b, c], [parent(a, b), c], [parent(parent(a, b), c)]]

    Returns:
        List of layers; empty list for no leaves
    """
    if len(leaves) == 0:
        return []

    current_layer: list[bytes] = sorted(leaves)
    layers: list[list[bytes]] = [current_layer]

    while len(current_layer) > 1:
        next_layer: list[bytes] = [
            merkle_parent(current_layer[i], current_layer[i + 1])
            for i in range(0, len(current_layer) - 1, 2)
        ]
        if len(current_layer) % 2 == 1:
            next_layer.append(current_layer[-1])
        layers.append(next_layer)
        current_layer = next_layer

    return layers


def build_merkle_root(leaves: Sequence[bytes]) -> bytes:
    """
    Build a Merkle root from a collection of leaf hashes.

    Input order does not matter; leaves are sorted first.

    Returns:
        32-byte Merkle root, EMPTY_TREE_ROOT when there are no leaves
    """
    layers = build_merkle_layers(leaves)
    if not layers:
        return EMPTY_TREE_ROOT
    return layers[-1][0]


def _proof_from_layers(layers: list[list[bytes]], index: int) -> MerkleProof:
    """Collect the sibling path for the leaf at a sorted-layer index."""
    siblings: list[bytes] = []
    current_index = index

    for layer in layers[:-1]:
        sibling_index = current_index ^ 1
        # A promoted node has no sibling at this layer
        if sibling_index < len(layer):
            siblings.append(layer[sibling_index])
        current_index //= 2

    return MerkleProof(
        leaf=layers[0][index],
        index=index,
        siblings=siblings,
        root=layers[-1][0],
    )


def build_merkle_proof(leaves: Sequence[bytes], leaf: bytes) -> MerkleProof:
    """
    Generate a Merkle proof for a leaf.

    Args:
        leaves: Collection of leaf hashes (any order)
        leaf: The leaf hash to prove

    Raises:
        ValueError: If leaves is empty or leaf is not among them
    """
    if len(leaves) == 0:
        raise ValueError("Cannot generate proof for empty leaf list")

    layers = build_merkle_layers(leaves)
    try:
        index = layers[0].index(leaf)
    except ValueError:
        raise ValueError(f"Leaf 0x{leaf.hex()} is not in the tree") from None

    return _proof_from_layers(layers, index)


def compute_root_from_path(leaf: bytes, siblings: Iterable[bytes]) -> bytes:
    """Fold a sibling path into a root using sorted-pair hashing."""
    current_hash = leaf
    for sibling in siblings:
        current_hash = merkle_parent(current_hash, sibling)
    return current_hash


def verify_merkle_path(leaf: bytes, siblings: Iterable[bytes], root: bytes) -> bool:
    """Check that a leaf and its sibling path reproduce the given root."""
    return compute_root_from_path(leaf, siblings) == root


def verify_merkle_proof(proof: MerkleProof) -> bool:
    """
    Verify a Merkle proof against its claimed root.

    The stored index is informational; sorted-pair hashing makes
    verification independent of left/right position.
    """
    return verify_merkle_path(proof.leaf, proof.siblings, proof.root)


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the number of layers of a tree with the given number of leaves.

    A single leaf has depth 1, two leaves have depth 2, three have depth 3
    (the odd node is promoted, not duplicated).

    Returns:
        Tree depth (0 for empty tree)
    """
    if num_leaves <= 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1
    return depth


class MerkleTree:
    """
    Immutable Merkle tree over a fixed set of leaves.

    Built once from a whitelist snapshot and never patched; a new
    whitelist state gets a new tree. Leaf lookup for proofs is O(1).

    Example:
        >>> tree = MerkleTree([leaf_a, leaf_b, leaf_c])
        >>> proof = tree.get_proof(leaf_b)
        >>> verify_merkle_proof(proof)
        True
    """

    def __init__(self, leaves: Iterable[bytes]):
        self._layers = build_merkle_layers(list(leaves))
        self._positions: dict[bytes, int] = {}
        if self._layers:
            for i, leaf in enumerate(self._layers[0]):
                self._positions.setdefault(leaf, i)

    @property
    def root(self) -> bytes:
        if not self._layers:
            return EMPTY_TREE_ROOT
        return self._layers[-1][0]

    @property
    def leaves(self) -> list[bytes]:
        """Leaves in sorted order."""
        return list(self._layers[0]) if self._layers else []

    @property
    def depth(self) -> int:
        return len(self._layers)

    def __len__(self) -> int:
        return len(self._layers[0]) if self._layers else 0

    def __contains__(self, leaf: object) -> bool:
        return leaf in self._positions

    def get_proof(self, leaf: bytes) -> MerkleProof:
        """
        Get the inclusion proof for a leaf.

        Raises:
            KeyError: If the leaf is not in the tree
        """
        if leaf not in self._positions:
            raise KeyError(f"Leaf 0x{leaf.hex()} is not in the tree")
        return _proof_from_layers(self._layers, self._positions[leaf])

    def verify(self, proof: MerkleProof) -> bool:
        """Verify a proof against this tree's root."""
        return verify_merkle_path(proof.leaf, proof.siblings, self.root)


__all__ = [
    "EMPTY_TREE_ROOT",
    "MerkleProof",
    "MerkleTree",
    "merkle_parent",
    "build_merkle_layers",
    "build_merkle_root",
    "build_merkle_proof",
    "compute_root_from_path",
    "verify_merkle_path",
    "verify_merkle_proof",
    "compute_tree_depth",
]
