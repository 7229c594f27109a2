"""Steam Guard code generation."""

import pytest

from sentinel.connector.guard import CODE_CHARS, generate_auth_code

from conftest import SHARED_SECRET


class TestGenerateAuthCode:
    def test_shape(self):
        code = generate_auth_code(SHARED_SECRET, timestamp=1_700_000_000)
        assert len(code) == 5
        assert all(c in CODE_CHARS for c in code)

    @pytest.mark.parametrize(
        "timestamp,expected",
        [(1_700_000_010, "RWW2N"), (0, "NW59D")],
    )
    def test_known_codes(self, timestamp, expected):
        # Reference values from the steam-totp getAuthCode algorithm.
        assert generate_auth_code(SHARED_SECRET, timestamp=timestamp) == expected

    def test_known_code_other_secret(self):
        assert generate_auth_code("b3RoZXJvdGhlcm90aGVy", timestamp=1_700_000_010) == "58GP4"

    def test_same_window_same_code(self):
        # 1_700_000_010 is the start of a 30s window
        a = generate_auth_code(SHARED_SECRET, timestamp=1_700_000_010)
        b = generate_auth_code(SHARED_SECRET, timestamp=1_700_000_039)
        assert a == b

    def test_time_offset_shifts_window(self):
        base = generate_auth_code(SHARED_SECRET, timestamp=1_700_000_010)
        shifted = generate_auth_code(SHARED_SECRET, time_offset=30, timestamp=1_699_999_980)
        assert base == shifted

    def test_different_secret_differs_somewhere(self):
        other = "b3RoZXJvdGhlcm90aGVy"
        codes = {
            generate_auth_code(SHARED_SECRET, timestamp=t) != generate_auth_code(other, timestamp=t)
            for t in range(1_700_000_010, 1_700_000_010 + 30 * 5, 30)
        }
        assert True in codes

    def test_invalid_secret_raises(self):
        with pytest.raises(ValueError):
            generate_auth_code("not base64!", timestamp=0)
