"""
Whitelist - Entitlement Commitment Manager

Owns the whitelist mapping (canonical address -> amount in wei), rebuilds a
Merkle commitment over it after every mutation, and answers proof and
membership queries.

Lifecycle:
- Starts empty with root = 32 zero bytes
- Every mutation rebuilds the tree from scratch; nothing is patched in place
- Batch and import operations rebuild exactly once for the whole batch

Concurrency:
All public operations are serialized on one re-entrant lock. A rebuild
builds the new tree first and then publishes tree and root together in a
single assignment, so no reader can observe a half-built tree or a root
that lags a completed mutation.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Optional, Union

from core.crypto.addresses import is_valid_address, normalize_address
from core.crypto.hashing import hash_entitlement_leaf, to_hex
from core.merkle.merkle_proofs import MerkleVerifier
from core.merkle.merkle_tree import EMPTY_TREE_ROOT, MerkleTree
from core.schemas.entitlement import (
    BatchAddResult,
    EntitlementAddResult,
    EntitlementProof,
    EntitlementRecord,
    EntitlementRemoveResult,
    ImportResult,
    RejectedRecord,
    WhitelistSnapshot,
    WhitelistStats,
)
from core.schemas.errors import (
    InternalInconsistencyException,
    InvalidSnapshotException,
    LedgerException,
    NotWhitelistedException,
)
from core.whitelist.amounts import format_ether, parse_amount


logger = logging.getLogger(__name__)


RecordLike = Union[EntitlementRecord, Mapping[str, Any], tuple, list]


@dataclass(frozen=True)
class _Commitment:
    """A fully built tree and its root, published as one unit."""
    tree: Optional[MerkleTree]
    root: bytes


_EMPTY_COMMITMENT = _Commitment(tree=None, root=EMPTY_TREE_ROOT)


def _unpack_record(record: RecordLike) -> tuple[Any, Any]:
    """Extract (address, amount) from any accepted record shape."""
    if isinstance(record, EntitlementRecord):
        return record.address, record.amount
    if isinstance(record, Mapping):
        return record.get("address"), record.get("amount")
    if isinstance(record, (tuple, list)) and len(record) == 2:
        return record[0], record[1]
    return None, None


class EntitlementManager:
    """
    Entitlement Commitment Manager.

    Example:
        >>> manager = EntitlementManager()
        >>> manager.add_entitlement("0xAAA...", 1000)
        >>> proof = manager.get_proof("0xAAA...")
        >>> proof.is_valid
        True
    """

    def __init__(self, records: Optional[Iterable[RecordLike]] = None):
        self._lock = threading.RLock()
        self._entitlements: dict[str, int] = {}
        self._commitment: _Commitment = _EMPTY_COMMITMENT
        self._rebuild_count = 0

        if records is not None:
            self.batch_add_entitlements(records)

    # -------------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _validate(address: Any, amount: Any) -> tuple[str, int]:
        """Validate a record with the add_entitlement rules."""
        return normalize_address(address), parse_amount(amount)

    def _rebuild(self) -> None:
        """Recompute tree and root from the current whitelist. Caller holds the lock."""
        if not self._entitlements:
            commitment = _EMPTY_COMMITMENT
        else:
            tree = MerkleTree(
                hash_entitlement_leaf(address, amount)
                for address, amount in self._entitlements.items()
            )
            commitment = _Commitment(tree=tree, root=tree.root)

        self._commitment = commitment
        self._rebuild_count += 1

        logger.info(
            f"Merkle tree regenerated. Root: {to_hex(commitment.root)} "
            f"({len(self._entitlements)} whitelisted)"
        )

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_entitlement(self, address: Any, amount: Any) -> EntitlementAddResult:
        """
        Insert or overwrite the entitlement for an address.

        Raises:
            InvalidAddressException: If the address is malformed
            InvalidAmountException: If the amount is zero, negative or unparseable
        """
        canonical, value = self._validate(address, amount)

        with self._lock:
            self._entitlements[canonical] = value
            self._rebuild()
            root = self._commitment.root

        logger.info(f"User {canonical} added to whitelist with amount: {format_ether(value)} ETH")
        return EntitlementAddResult(address=canonical, amount=value, root=to_hex(root))

    def remove_entitlement(self, address: Any) -> EntitlementRemoveResult:
        """
        Remove an address from the whitelist.

        Removing a non-member is not an error: removed=False and the root
        is returned unchanged without a rebuild.

        Raises:
            InvalidAddressException: If the address is malformed
        """
        canonical = normalize_address(address)

        with self._lock:
            removed = self._entitlements.pop(canonical, None) is not None
            if removed:
                self._rebuild()
            root = self._commitment.root

        if removed:
            logger.info(f"User {canonical} removed from whitelist")
        else:
            logger.debug(f"User {canonical} was not whitelisted; nothing removed")

        return EntitlementRemoveResult(address=canonical, removed=removed, root=to_hex(root))

    def batch_add_entitlements(self, records: Iterable[RecordLike]) -> BatchAddResult:
        """
        Add many records with a single rebuild.

        Each record is validated independently; invalid records are skipped
        and reported in `rejected`, never aborting the batch.
        """
        validated: list[tuple[str, int]] = []
        rejected: list[RejectedRecord] = []

        for record in records:
            raw_address, raw_amount = _unpack_record(record)
            try:
                validated.append(self._validate(raw_address, raw_amount))
            except LedgerException as e:
                logger.warning(f"Skipping batch record for {raw_address!r}: {e.message}")
                rejected.append(RejectedRecord(
                    address=None if raw_address is None else str(raw_address),
                    code=e.code,
                    reason=e.message,
                ))

        with self._lock:
            for canonical, value in validated:
                self._entitlements[canonical] = value
            if validated:
                self._rebuild()
            total = len(self._entitlements)
            root = self._commitment.root

        if validated:
            logger.info(f"Batch operation completed. Added {len(validated)} users.")

        return BatchAddResult(
            added_count=len(validated),
            skipped_count=len(rejected),
            total=total,
            root=to_hex(root),
            rejected=rejected,
        )

    def clear(self) -> str:
        """Remove every entitlement and return the empty-tree root."""
        with self._lock:
            self._entitlements.clear()
            self._rebuild()
            return to_hex(self._commitment.root)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_proof(self, address: Any) -> EntitlementProof:
        """
        Build and self-verify the inclusion proof for a whitelisted address.

        Raises:
            InvalidAddressException: If the address is malformed
            NotWhitelistedException: If the address is not a member
            InternalInconsistencyException: If the built proof fails
                verification against the current root
        """
        canonical = normalize_address(address)

        with self._lock:
            amount = self._entitlements.get(canonical)
            if amount is None:
                raise NotWhitelistedException(canonical)
            commitment = self._commitment

        if commitment.tree is None:
            logger.error(f"Whitelist has {canonical} but no Merkle tree is built")
            raise InternalInconsistencyException(
                "Merkle tree not generated for a non-empty whitelist",
                details={"address": canonical},
            )

        leaf = hash_entitlement_leaf(canonical, amount)
        try:
            proof = commitment.tree.get_proof(leaf)
        except KeyError:
            logger.error(f"Leaf for {canonical} missing from the current tree")
            raise InternalInconsistencyException(
                "Leaf missing from the current Merkle tree",
                details={"address": canonical, "leaf": to_hex(leaf)},
            ) from None

        siblings = [to_hex(h) for h in proof.siblings]
        root_hex = to_hex(commitment.root)

        is_valid = MerkleVerifier.verify_entitlement(canonical, amount, siblings, root_hex)
        if not is_valid:
            logger.error(f"Proof for {canonical} failed self-verification against {root_hex}")
            raise InternalInconsistencyException(
                "Generated proof does not verify against the current root",
                details={"address": canonical, "root": root_hex, "leaf": to_hex(leaf)},
            )

        return EntitlementProof(
            address=canonical,
            amount=amount,
            proof=siblings,
            root=root_hex,
            leaf=to_hex(leaf),
            is_valid=is_valid,
        )

    def is_whitelisted(self, address: Any) -> bool:
        """Membership check. Malformed addresses return False."""
        if not is_valid_address(address):
            return False
        canonical = normalize_address(address)
        with self._lock:
            return canonical in self._entitlements

    def get_entitlement(self, address: Any) -> Optional[int]:
        """Withdrawable amount for an address, or None if absent or malformed."""
        if not is_valid_address(address):
            return None
        canonical = normalize_address(address)
        with self._lock:
            return self._entitlements.get(canonical)

    def get_root(self) -> str:
        """Current Merkle root as 0x-prefixed hex."""
        with self._lock:
            return to_hex(self._commitment.root)

    def get_stats(self) -> WhitelistStats:
        with self._lock:
            return WhitelistStats(
                total_entries=len(self._entitlements),
                root=to_hex(self._commitment.root),
                has_tree=self._commitment.tree is not None,
                total_amount=sum(self._entitlements.values()),
            )

    def list_entitlements(self) -> list[EntitlementRecord]:
        """All records sorted by address, with ether-formatted amounts."""
        with self._lock:
            items = sorted(self._entitlements.items())
        return [
            EntitlementRecord(address=address, amount=amount, amount_eth=format_ether(amount))
            for address, amount in items
        ]

    @property
    def rebuild_count(self) -> int:
        """Number of tree rebuilds since construction."""
        with self._lock:
            return self._rebuild_count

    def __len__(self) -> int:
        with self._lock:
            return len(self._entitlements)

    def __contains__(self, address: object) -> bool:
        return self.is_whitelisted(address)

    # -------------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------------

    def export_snapshot(self) -> WhitelistSnapshot:
        """Serializable copy of the whitelist and its root."""
        with self._lock:
            records = {address: str(amount) for address, amount in sorted(self._entitlements.items())}
            root = to_hex(self._commitment.root)
        return WhitelistSnapshot(
            records=records,
            root=root,
            timestamp=datetime.now(timezone.utc),
        )

    def import_snapshot(self, snapshot: Union[WhitelistSnapshot, Mapping[str, Any]]) -> ImportResult:
        """
        Replace the whole whitelist with the contents of a snapshot.

        Accepts a WhitelistSnapshot or a mapping with a `records` (or legacy
        `users`) key holding either {address: amount} or a list of records.
        Entries are validated with the add_entitlement rules; malformed ones
        are skipped. Exactly one rebuild happens.

        Raises:
            InvalidSnapshotException: If the snapshot has no usable records
                container; state is left untouched
        """
        if isinstance(snapshot, WhitelistSnapshot):
            raw_records: Any = snapshot.records
            declared_root: Optional[str] = snapshot.root
        elif isinstance(snapshot, Mapping):
            if "records" in snapshot:
                raw_records = snapshot["records"]
            else:
                raw_records = snapshot.get("users")
            declared_root = snapshot.get("root", snapshot.get("merkleRoot"))
        else:
            raise InvalidSnapshotException(
                f"Unsupported snapshot type: {type(snapshot).__name__}"
            )

        if isinstance(raw_records, Mapping):
            entries: list[tuple[Any, Any]] = list(raw_records.items())
        elif isinstance(raw_records, list):
            entries = [_unpack_record(r) for r in raw_records]
        else:
            keys = sorted(str(k) for k in snapshot.keys()) if isinstance(snapshot, Mapping) else []
            raise InvalidSnapshotException(
                "Invalid whitelist data: snapshot has no records",
                details={"keys": keys},
            )

        replacement: dict[str, int] = {}
        rejected: list[RejectedRecord] = []
        for raw_address, raw_amount in entries:
            try:
                canonical, value = self._validate(raw_address, raw_amount)
            except LedgerException as e:
                logger.warning(f"Skipping snapshot record for {raw_address!r}: {e.message}")
                rejected.append(RejectedRecord(
                    address=None if raw_address is None else str(raw_address),
                    code=e.code,
                    reason=e.message,
                ))
                continue
            replacement[canonical] = value

        with self._lock:
            self._entitlements = replacement
            self._rebuild()
            root_hex = to_hex(self._commitment.root)
            total = len(self._entitlements)

        root_matches: Optional[bool] = None
        if isinstance(declared_root, str):
            root_matches = declared_root.lower() == root_hex
            if not root_matches:
                logger.warning(
                    f"Imported whitelist root {root_hex} differs from snapshot root {declared_root}"
                )

        logger.info(f"Whitelist imported. {total} users loaded.")

        return ImportResult(
            imported=len(replacement),
            skipped=len(rejected),
            total=total,
            root=root_hex,
            declared_root=declared_root if isinstance(declared_root, str) else None,
            root_matches=root_matches,
            rejected=rejected,
        )


__all__ = [
    "EntitlementManager",
    "RecordLike",
]
