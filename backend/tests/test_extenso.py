"""
Testes do valor por extenso (reais e centavos).
"""

import pytest

from propostas.services import extenso
from propostas.services.extenso import amount_in_words


class TestZero:
    """Valores nulos viram "zero reais"."""

    @pytest.mark.parametrize("valor", [0, 0.0, float("nan"), None])
    def test_zero_e_nan(self, valor):
        assert amount_in_words(valor) == "zero reais"

    def test_menos_de_meio_centavo(self):
        assert amount_in_words(0.004) == "zero reais"


class TestReais:

    def test_singular(self):
        assert amount_in_words(1) == "um real"

    def test_plural(self):
        assert amount_in_words(2) == "dois reais"

    @pytest.mark.parametrize(
        "valor, esperado",
        [
            (10, "dez reais"),
            (15, "quinze reais"),
            (20, "vinte reais"),
            (21, "vinte e um reais"),
            (99, "noventa e nove reais"),
            (100, "cem reais"),
            (101, "cento e um reais"),
            (115, "cento e quinze reais"),
            (340, "trezentos e quarenta reais"),
            (999, "novecentos e noventa e nove reais"),
        ],
    )
    def test_ate_999(self, valor, esperado):
        assert amount_in_words(valor) == esperado

    def test_quatorze_e_nao_catorze(self):
        assert amount_in_words(14) == "quatorze reais"
        assert amount_in_words(114) == "cento e quatorze reais"
        assert amount_in_words(0.14) == "quatorze centavos"

    def test_acima_de_mil_nao_e_expandido(self):
        assert amount_in_words(1000) == "mais de mil reais"
        assert amount_in_words(25000) == "mais de mil reais"


class TestCentavos:

    def test_reais_e_centavos(self):
        assert amount_in_words(21.50) == "vinte e um reais e cinquenta centavos"

    def test_so_centavos(self):
        assert amount_in_words(0.5) == "cinquenta centavos"

    def test_um_centavo(self):
        assert amount_in_words(0.01) == "um centavo"
        assert amount_in_words(1.01) == "um real e um centavo"

    def test_arredonda_para_duas_casas(self):
        assert amount_in_words(1.005) == "um real e um centavo"

    def test_centavos_com_valor_acima_de_mil(self):
        assert amount_in_words(1234.56) == "mais de mil reais e cinquenta e seis centavos"

    def test_maximo(self):
        assert amount_in_words(999.99) == (
            "novecentos e noventa e nove reais e noventa e nove centavos"
        )


class TestFallback:
    """Erro na conversão devolve o valor em dígitos."""

    def test_erro_interno(self, monkeypatch):
        def quebra(_):
            raise RuntimeError("falhou")

        monkeypatch.setattr(extenso, "_split_amount", quebra)
        assert amount_in_words(12.5) == "R$ 12,50"

    def test_valor_negativo(self):
        assert amount_in_words(-5) == "R$ -5,00"

    def test_texto_invalido(self):
        assert amount_in_words("abc") == "R$ 0,00"
