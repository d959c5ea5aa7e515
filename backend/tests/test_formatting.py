"""
Testes de formatação no padrão brasileiro.
"""

from datetime import date, datetime

import pytest

from propostas.services.formatting import (
    format_currency_br,
    format_date_br,
    format_number_br,
    format_percent_br,
    to_number,
)


class TestNumeros:

    @pytest.mark.parametrize(
        "valor, esperado",
        [
            (0, "0,00"),
            (1234.5, "1.234,50"),
            (1234567.891, "1.234.567,89"),
            ("99.9", "99,90"),
            (None, "0,00"),
            ("xyz", "0,00"),
        ],
    )
    def test_format_number_br(self, valor, esperado):
        assert format_number_br(valor) == esperado

    def test_moeda(self):
        assert format_currency_br(1234.5) == "R$ 1.234,50"

    def test_percentual(self):
        assert format_percent_br(12.5) == "12,50%"

    def test_to_number(self):
        assert to_number("1.234,50") == 1234.5
        assert to_number("") == 0.0
        assert to_number(None, default=1.0) == 1.0
        assert to_number(True) == 0.0
        assert to_number(float("nan")) == 0.0


class TestDatas:

    @pytest.mark.parametrize(
        "valor, esperado",
        [
            ("2024-03-05", "05/03/2024"),
            ("2024-03-05T14:30:00Z", "05/03/2024"),
            ("2024-03-05T23:30:00-03:00", "05/03/2024"),
            (date(2024, 12, 1), "01/12/2024"),
            (datetime(2024, 1, 2, 8, 0), "02/01/2024"),
        ],
    )
    def test_formata(self, valor, esperado):
        assert format_date_br(valor) == esperado

    @pytest.mark.parametrize("valor", [None, "", "ontem", 42])
    def test_invalida(self, valor):
        assert format_date_br(valor) is None
