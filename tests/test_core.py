# tests/test_core.py
import json
import pytest
from datetime import datetime, timezone

from trusttime.address.codec import AddressCodec
from trusttime.core.types import AddressResult, LedgerTimestamp
from trusttime.core.encoding import b58encode, b58decode
from trusttime.core.canon import canonical_json, export_record
from trusttime.core.errors import AddressNotSeenError, LedgerQueryError, TrustTimeError


@pytest.fixture
def zero_address():
    return AddressCodec().derive_address(bytes(32))


def test_document_address_immutable(zero_address):
    with pytest.raises(AttributeError):
        zero_address.address = "1Forged"
    with pytest.raises(AttributeError):
        zero_address.detail.checksum = "00000000"


def test_document_address_to_dict(zero_address):
    d = zero_address.to_dict()
    assert d["address"] == "1L7YHmb2Qtk7MABJGhDfvmRLiLGGeZeMVY"
    assert d["sha256"] == "00" * 32
    assert d["detail"]["checksum"] == "8b7a9b6f"
    assert set(d["detail"]) == {
        "document_sha256", "ripemd160", "versioned", "sha256_once",
        "sha256_twice", "checksum", "with_checksum", "base58",
    }


def test_document_address_json_is_canonical(zero_address):
    text = zero_address.to_json()
    assert json.loads(text) == zero_address.to_dict()
    assert " " not in text
    assert text.index('"address"') < text.index('"detail"') < text.index('"sha256"')
    assert text == AddressCodec().derive_address(bytes(32)).to_json()


def test_base58_leading_zeros():
    assert b58encode(b"\x00\x00\x01") == "112"
    assert b58decode("112") == b"\x00\x00\x01"
    assert b58encode(b"") == ""


def test_canonical_json_sorting():
    messy = {
        "z": 1,
        "a": "hello",
        "nested": {"b": 2, "a": 1},
    }
    canon = canonical_json(messy).decode("utf-8")
    assert canon == '{"a":"hello","nested":{"a":1,"b":2},"z":1}'
    assert export_record(messy) == canon


def test_export_record_merges_timestamp(zero_address):
    stamp = LedgerTimestamp(address=zero_address.address, unix_time=100, transaction_count=3)
    text = export_record(zero_address.to_dict(), stamp.to_dict())
    record = json.loads(text)
    assert record["address"] == zero_address.address
    assert record["trusted_timestamp"] == {
        "unix_time": 100,
        "utc": "Thu, 01 Jan 1970 00:01:40 GMT",
        "transaction_count": 3,
    }
    assert "trusted_timestamp" not in zero_address.to_dict()


def test_ledger_timestamp_formats():
    stamp = LedgerTimestamp(address="1abc", unix_time=100)
    assert stamp.timestamp == datetime(1970, 1, 1, 0, 1, 40, tzinfo=timezone.utc)
    assert stamp.utc_string() == "Thu, 01 Jan 1970 00:01:40 GMT"


def test_address_result_truthiness(zero_address):
    ok = AddressResult(True, address=zero_address)
    failed = AddressResult(False, error=OSError("boom"))
    assert ok and not failed
    assert "✓" in str(ok)
    assert "boom" in str(failed)


def test_error_taxonomy():
    err = AddressNotSeenError("1abc")
    assert err.address == "1abc"
    assert "not seen" in str(err).lower()
    assert isinstance(err, TrustTimeError)
    assert not isinstance(err, LedgerQueryError)
    assert issubclass(LedgerQueryError, TrustTimeError)
