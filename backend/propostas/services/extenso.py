# backend/propostas/services/extenso.py
from __future__ import annotations

import logging
import math
import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Any

from num2words import num2words

from propostas.services.formatting import format_currency_br

logger = logging.getLogger(__name__)

# Só até 999 reais é escrito por extenso
ABOVE_LIMIT = "mais de mil"

# num2words escreve "catorze"; os documentos usam "quatorze"
_CATORZE = re.compile(r"\bcatorze\b")


def _words(n: int) -> str:
    return _CATORZE.sub("quatorze", num2words(n, lang="pt_BR"))


def _split_amount(amount: Any) -> tuple[int, int]:
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    if value < 0:
        raise ValueError(f"valor negativo: {amount!r}")

    reais = int(value)
    centavos = int((value - reais) * 100)
    return reais, centavos


def amount_in_words(amount: Any) -> str:
    """
    Valor monetário por extenso (reais + centavos).

    - None, NaN ou 0 -> "zero reais"
    - reais acima de 999 viram "mais de mil"
    - qualquer erro na conversão devolve o valor formatado em dígitos (R$ 0,00)
    """
    if amount is None:
        return "zero reais"

    try:
        if isinstance(amount, float) and math.isnan(amount):
            return "zero reais"
        if amount == 0:
            return "zero reais"

        reais, centavos = _split_amount(amount)

        parts = []

        if reais > 0:
            words = _words(reais) if reais < 1000 else ABOVE_LIMIT
            parts.append(f"{words} {'real' if reais == 1 else 'reais'}")

        if centavos > 0:
            parts.append(f"{_words(centavos)} {'centavo' if centavos == 1 else 'centavos'}")

        # menos de meio centavo arredonda para zero
        return " e ".join(parts) or "zero reais"

    except Exception:
        logger.exception("Erro ao converter valor por extenso: %r", amount)
        return format_currency_br(amount)
