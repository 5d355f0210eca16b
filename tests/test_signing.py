from __future__ import annotations

import hashlib
import itertools

from pybytedance._crypto.signing import compute_signature, verify_signature

# sha1("12enctok"), computed independently of this library.
_REFERENCE_DIGEST = "3ee172db12052d33ac124e9340f82b77bc386cae"


def test_compute_signature_matches_reference_digest() -> None:
    # sorted(["tok", "1", "2", "enc"]) == ["1", "2", "enc", "tok"]
    assert compute_signature("tok", "1", "2", "enc") == _REFERENCE_DIGEST


def test_compute_signature_is_lowercase_sha1_hex() -> None:
    signature = compute_signature("token", "1700000000", "nonce", "blob")
    assert signature == hashlib.sha1(b"1700000000blobnoncetoken").hexdigest()
    assert signature == signature.lower()
    assert len(signature) == 40


def test_signature_depends_on_content_not_argument_position() -> None:
    values = ("tok", "1", "2", "enc")
    for permutation in itertools.permutations(values):
        assert compute_signature(*permutation) == _REFERENCE_DIGEST


def test_changing_any_value_changes_signature() -> None:
    base = compute_signature("tok", "1", "2", "enc")
    assert compute_signature("tok2", "1", "2", "enc") != base
    assert compute_signature("tok", "10", "2", "enc") != base
    assert compute_signature("tok", "1", "3", "enc") != base
    assert compute_signature("tok", "1", "2", "enc=") != base


def test_verify_signature_accepts_matching_signature() -> None:
    assert verify_signature("tok", "1", "2", "enc", _REFERENCE_DIGEST)


def test_verify_signature_rejects_mismatch() -> None:
    assert not verify_signature("tok", "1", "2", "enc", _REFERENCE_DIGEST.upper())
    assert not verify_signature("tok", "1", "2", "enc", "")
    assert not verify_signature("other", "1", "2", "enc", _REFERENCE_DIGEST)


def test_verify_signature_tolerates_non_ascii_input() -> None:
    assert not verify_signature("tok", "1", "2", "enc", "签名")
