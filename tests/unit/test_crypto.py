import hashlib
import hmac

from hubsig.crypto import constant_time_equals, hmac_hex, to_bytes


def test_hmac_hex_is_lowercase_hex():
    digest = hmac_hex("key", b"data", hashlib.sha256)
    assert digest == hmac.new(b"key", b"data", hashlib.sha256).hexdigest()
    assert digest == digest.lower()


def test_hmac_hex_accepts_str_and_bytes_keys():
    assert hmac_hex("s3cr3t", "payload", hashlib.sha1) == hmac_hex(b"s3cr3t", b"payload", hashlib.sha1)


def test_constant_time_equals():
    assert constant_time_equals(b"sha1=abc", b"sha1=abc") is True
    assert constant_time_equals("sha1=abc", b"sha1=abc") is True
    assert constant_time_equals(b"sha1=abc", b"sha1=abd") is False
    assert constant_time_equals(b"sha1=abc", b"sha1=ab") is False
    assert constant_time_equals(b"", b"") is True


def test_constant_time_equals_non_ascii_does_not_raise():
    assert constant_time_equals("sha1=abc", "sha1=ábc") is False


def test_to_bytes():
    assert to_bytes("é") == "é".encode("utf-8")
    assert to_bytes(b"raw") == b"raw"
    assert to_bytes(bytearray(b"raw")) == b"raw"
