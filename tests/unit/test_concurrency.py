"""
Concurrency Tests
Tests for thread safety of core/whitelist/manager.py

Readers running alongside writers must only ever observe a root that
some completed mutation published, and every proof they get must verify
against the root it was issued with.
"""
import threading

import pytest

from core.merkle.merkle_proofs import MerkleVerifier
from core.schemas.errors import NotWhitelistedException
from core.whitelist.manager import EntitlementManager

from fixtures import ADDR_A, ADDR_B, ADDR_C, ADDR_D, ADDR_E, make_manager


WRITER_ROUNDS = 40


@pytest.mark.slow
class TestConcurrentAccess:
    """Mixed readers and writers on one manager."""

    def test_proofs_always_verify_during_writes(self):
        manager = make_manager([(ADDR_A, 1000), (ADDR_B, 2000)])
        errors: list[str] = []
        done = threading.Event()

        def writer():
            try:
                for i in range(WRITER_ROUNDS):
                    manager.add_entitlement(ADDR_C, 3000 + i)
                    manager.add_entitlement(ADDR_D, 4000 + i)
                    manager.remove_entitlement(ADDR_D)
            finally:
                done.set()

        def reader():
            while not done.is_set():
                proof = manager.get_proof(ADDR_A)
                if not MerkleVerifier.verify_entitlement(
                    proof.address, proof.amount, proof.proof, proof.root
                ):
                    errors.append(f"proof for {proof.address} did not verify against {proof.root}")

        threads = [threading.Thread(target=writer)]
        threads += [threading.Thread(target=reader) for _ in range(3)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=60)

        assert errors == []

    def test_observed_roots_were_published(self):
        """Every root a reader sees is a root some writer returned."""
        manager = EntitlementManager()
        published: set[str] = {manager.get_root()}
        observed: set[str] = set()
        lock = threading.Lock()
        done = threading.Event()

        def writer():
            try:
                for i in range(WRITER_ROUNDS):
                    result = manager.add_entitlement(ADDR_E, i + 1)
                    with lock:
                        published.add(result.root)
            finally:
                done.set()

        def reader():
            while not done.is_set():
                root = manager.get_root()
                with lock:
                    observed.add(root)

        threads = [threading.Thread(target=writer), threading.Thread(target=reader)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=60)

        assert observed <= published

    def test_parallel_adds_all_land(self):
        manager = EntitlementManager()
        addresses = [ADDR_A, ADDR_B, ADDR_C, ADDR_D, ADDR_E]

        threads = [
            threading.Thread(target=manager.add_entitlement, args=(address, 100 * (i + 1)))
            for i, address in enumerate(addresses)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=60)

        assert len(manager) == len(addresses)
        assert manager.get_root() == make_manager(
            [(a, 100 * (i + 1)) for i, a in enumerate(addresses)]
        ).get_root()

    def test_removed_member_never_gets_proof(self):
        manager = make_manager([(ADDR_A, 1000), (ADDR_B, 2000)])
        manager.remove_entitlement(ADDR_B)

        def reader(results: list):
            try:
                manager.get_proof(ADDR_B)
                results.append("proof")
            except NotWhitelistedException:
                results.append("not-whitelisted")

        results: list[str] = []
        threads = [threading.Thread(target=reader, args=(results,)) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=60)

        assert results == ["not-whitelisted"] * 4
