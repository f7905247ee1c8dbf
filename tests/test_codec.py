"""Tests for secret codec module."""

import pytest

from totp_auth import Base, DecodeError, decode, encode

RFC_SECRET = b"12345678901234567890"
RFC_SECRET_BASE32 = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"


class TestBase32:
    """Tests for the Base32 variant."""

    def test_known_value(self):
        """Test encoding against the RFC 6238 test secret."""
        assert encode(Base.BASE32, RFC_SECRET) == RFC_SECRET_BASE32
        assert decode(Base.BASE32, RFC_SECRET_BASE32) == RFC_SECRET

    def test_80_bit_secret_is_16_chars_unpadded(self):
        """Test that a 10 byte secret encodes to 16 characters."""
        encoded = encode(Base.BASE32, bytes(range(10)))
        assert len(encoded) == 16
        assert "=" not in encoded

    def test_unpadded_output(self):
        """Test that lengths needing padding are emitted without it."""
        encoded = encode(Base.BASE32, b"\x01\x02\x03")
        assert encoded == "AEBAG"
        assert decode(Base.BASE32, encoded) == b"\x01\x02\x03"

    def test_lower_case_and_spaces_accepted(self):
        """Test that secrets typed from an app are normalised."""
        assert decode(Base.BASE32, "gezd gnbv gy3t qojq gezd gnbv gy3t qojq") == RFC_SECRET

    def test_padded_input_accepted(self):
        """Test that padding is tolerated on input."""
        assert decode(Base.BASE32, "AEBAG===") == b"\x01\x02\x03"

    @pytest.mark.parametrize("garbage", [
        "GEZD!NBV",
        "01890189",
        "GEZDGNBV-Y3TQOJQ",
        "ÄÖÜÄÖÜÄÖ",
        "GEZDGNBVGY3TQOJſ",
        "GEZDGNBVGY3TQOJı",
        "GEZDGNBVGY3TQﬀJ",
        "GEZDGNBV\nY3TQOJQ",
    ])
    def test_invalid_alphabet_rejected(self, garbage):
        """Test that characters outside the alphabet raise DecodeError."""
        with pytest.raises(DecodeError):
            decode(Base.BASE32, garbage)

    @pytest.mark.parametrize("length", [1, 3, 6, 9])
    def test_invalid_length_rejected(self, length):
        """Test that lengths no byte string encodes to are rejected."""
        with pytest.raises(DecodeError):
            decode(Base.BASE32, "A" * length)

    @pytest.mark.parametrize("blank", ["", "   ", "===="])
    def test_empty_rejected(self, blank):
        """Test that an empty secret is not decoded to an empty key."""
        with pytest.raises(DecodeError):
            decode(Base.BASE32, blank)

    @pytest.mark.parametrize("secret", ["AB", "AEBAH", "ab"])
    def test_non_canonical_rejected(self, secret):
        """Test that non-zero unused trailing bits are rejected."""
        with pytest.raises(DecodeError):
            decode(Base.BASE32, secret)
        assert decode(Base.BASE32, "AA") == b"\x00"


class TestBase64:
    """Tests for the Base64 variant."""

    def test_padded_output(self):
        """Test that Base64 output keeps its padding."""
        encoded = encode(Base.BASE64, bytes(range(10)))
        assert encoded == "AAECAwQFBgcICQ=="

    @pytest.mark.parametrize("garbage", [
        "AAEC$wQFBgcICQ==",
        "AAECAwQFBgcICQ",
        "AAECAwQFBgcIC",
        "AAE CAwQF",
        "ÄAECAwQFBgcICQ==",
    ])
    def test_malformed_rejected(self, garbage):
        """Test that bad characters, padding or length raise DecodeError."""
        with pytest.raises(DecodeError):
            decode(Base.BASE64, garbage)

    @pytest.mark.parametrize("blank", ["", "  "])
    def test_empty_rejected(self, blank):
        """Test that an empty secret is not decoded to an empty key."""
        with pytest.raises(DecodeError):
            decode(Base.BASE64, blank)

    def test_non_canonical_rejected(self):
        """Test that non-zero unused trailing bits are rejected."""
        assert decode(Base.BASE64, "AA==") == b"\x00"
        with pytest.raises(DecodeError):
            decode(Base.BASE64, "AB==")


class TestRoundTrip:
    """Tests that decode inverts encode."""

    @pytest.mark.parametrize("base", list(Base))
    @pytest.mark.parametrize("length", [1, 5, 10, 16, 20, 32, 64])
    def test_round_trip(self, base, length):
        """Test round trip for secret lengths the generator produces."""
        data = bytes((i * 37 + 11) % 256 for i in range(length))
        assert decode(base, encode(base, data)) == data

    def test_decode_error_is_value_error(self):
        """Test that DecodeError can be caught as ValueError."""
        with pytest.raises(ValueError):
            decode(Base.BASE32, "!!!!")

    def test_non_string_rejected(self):
        """Test that bytes input is rejected."""
        with pytest.raises(DecodeError):
            decode(Base.BASE32, b"GEZDGNBV")
