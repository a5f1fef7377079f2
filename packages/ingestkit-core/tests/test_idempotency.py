"""Tests for ingestkit_core.idempotency.compute_ingest_key."""

from __future__ import annotations

import hashlib

from ingestkit_core.idempotency import compute_ingest_key


class TestComputeIngestKey:

    def test_content_hash_is_sha256_of_bytes(self):
        ik = compute_ingest_key(b"PK\x05\x06" + b"\x00" * 18, parser_version="v")
        assert ik.content_hash == hashlib.sha256(b"PK\x05\x06" + b"\x00" * 18).hexdigest()

    def test_default_source_uri_derived_from_hash(self):
        ik = compute_ingest_key(b"payload", parser_version="v")
        assert ik.source_uri == f"upload:sha256:{ik.content_hash}"

    def test_source_uri_override(self):
        ik = compute_ingest_key(b"payload", parser_version="v", source_uri="s3://bucket/a.zip")
        assert ik.source_uri == "s3://bucket/a.zip"

    def test_same_bytes_same_key(self):
        k1 = compute_ingest_key(b"abc", parser_version="v", tenant_id="t").key
        k2 = compute_ingest_key(b"abc", parser_version="v", tenant_id="t").key
        assert k1 == k2

    def test_different_bytes_different_key(self):
        k1 = compute_ingest_key(b"abc", parser_version="v").key
        k2 = compute_ingest_key(b"abd", parser_version="v").key
        assert k1 != k2

    def test_tenant_recorded(self):
        ik = compute_ingest_key(b"abc", parser_version="v", tenant_id="tenant-1")
        assert ik.tenant_id == "tenant-1"
