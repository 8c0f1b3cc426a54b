"""
Schemas - Entitlement Records & Results
File: entitlement.py

Purpose: Pydantic models returned by the Entitlement Commitment Manager
and the snapshot format used for backup/restore.

Amounts are Python ints (up to 2**256 - 1). When dumped in JSON mode they
are rendered as decimal strings, since JSON consumers such as JavaScript
lose precision above 2**53.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


SNAPSHOT_VERSION = "1"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class EntitlementRecord(BaseModel):
    """A single (address, amount) whitelist entry."""

    model_config = ConfigDict(extra="forbid")

    address: str = Field(..., description="Canonical lowercase 0x address")
    amount: int = Field(..., description="Withdrawable amount in wei", gt=0)
    amount_eth: str | None = Field(
        default=None,
        description="Amount formatted in ether, for display only",
    )

    @field_serializer("amount", when_used="json")
    def _amount_as_str(self, value: int) -> str:
        return str(value)


class EntitlementAddResult(BaseModel):
    """Result of add_entitlement."""

    model_config = ConfigDict(extra="forbid")

    address: str
    amount: int
    root: str = Field(..., description="Merkle root after the insert")

    @field_serializer("amount", when_used="json")
    def _amount_as_str(self, value: int) -> str:
        return str(value)


class EntitlementRemoveResult(BaseModel):
    """Result of remove_entitlement. root is unchanged when removed is False."""

    model_config = ConfigDict(extra="forbid")

    address: str
    removed: bool
    root: str


class RejectedRecord(BaseModel):
    """A batch or import entry that failed validation."""

    model_config = ConfigDict(extra="forbid")

    address: str | None = None
    code: str
    reason: str


class BatchAddResult(BaseModel):
    """Result of batch_add_entitlements."""

    model_config = ConfigDict(extra="forbid")

    added_count: int = Field(..., ge=0, description="Records validated and written")
    skipped_count: int = Field(default=0, ge=0)
    total: int = Field(..., ge=0, description="Whitelist size after the batch")
    root: str
    rejected: list[RejectedRecord] = Field(default_factory=list)


class EntitlementProof(BaseModel):
    """
    Inclusion proof for a whitelisted address.

    proof holds the sibling hashes from leaf to root, each 0x-prefixed.
    An on-chain verifier reconstructs leaf from (address, amount) and folds
    the proof with sorted-pair keccak256.
    """

    model_config = ConfigDict(extra="forbid")

    address: str
    amount: int
    proof: list[str] = Field(default_factory=list)
    root: str
    leaf: str
    is_valid: bool

    @field_serializer("amount", when_used="json")
    def _amount_as_str(self, value: int) -> str:
        return str(value)


class WhitelistSnapshot(BaseModel):
    """
    Serializable copy of the whole whitelist.

    records maps canonical address to the amount as a decimal string.
    """

    model_config = ConfigDict(extra="forbid")

    version: str = Field(default=SNAPSHOT_VERSION)
    records: dict[str, str] = Field(default_factory=dict)
    root: str
    timestamp: datetime = Field(default_factory=_utc_now)

    @field_validator("records", mode="before")
    @classmethod
    def _stringify_amounts(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {
                k: str(v) if isinstance(v, int) and not isinstance(v, bool) else v
                for k, v in value.items()
            }
        return value


class ImportResult(BaseModel):
    """Result of import_snapshot."""

    model_config = ConfigDict(extra="forbid")

    imported: int = Field(..., ge=0)
    skipped: int = Field(default=0, ge=0)
    total: int = Field(..., ge=0)
    root: str
    declared_root: str | None = None
    root_matches: bool | None = Field(
        default=None,
        description="Whether the rebuilt root equals the snapshot's declared root",
    )
    rejected: list[RejectedRecord] = Field(default_factory=list)


class WhitelistStats(BaseModel):
    """Summary of the current whitelist state."""

    model_config = ConfigDict(extra="forbid")

    total_entries: int = Field(..., ge=0)
    root: str
    has_tree: bool
    total_amount: int = Field(default=0, ge=0)

    @field_serializer("total_amount", when_used="json")
    def _amount_as_str(self, value: int) -> str:
        return str(value)
