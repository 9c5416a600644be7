"""Tests for partita IVA check-digit validation."""

from __future__ import annotations

import pytest

from portale.decoders.partita_iva import is_valid_piva, normalize_piva


class TestNormalizePiva:
    def test_strips_whitespace(self) -> None:
        assert normalize_piva(" 0123 4567 897 ") == "01234567897"

    def test_strips_country_prefix(self) -> None:
        assert normalize_piva("it01234567897") == "01234567897"


class TestIsValidPiva:
    @pytest.mark.parametrize("piva", ["01234567897", "12345678903", "02116550159", "00000000000"])
    def test_valid(self, piva: str) -> None:
        assert is_valid_piva(piva) is True

    def test_valid_with_prefix_and_spaces(self) -> None:
        assert is_valid_piva("IT 01234567897") is True

    def test_wrong_check_digit(self) -> None:
        assert is_valid_piva("01234567890") is False

    @pytest.mark.parametrize("piva", ["", "1234567890", "123456789012", "0123456789A", "0123456789-"])
    def test_malformed(self, piva: str) -> None:
        assert is_valid_piva(piva) is False
