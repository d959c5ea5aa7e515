# backend/propostas/services/formatting.py
"""Formatação no padrão brasileiro (moeda, percentual e datas)."""
from __future__ import annotations

import math
from datetime import date, datetime
from typing import Any, Optional


def to_number(value: Any, default: float = 0.0) -> float:
    """
    Converte campos numéricos do banco com tolerância:
    - int/float passam direto
    - strings numéricas ("1234.5", "1234,5") são convertidas
    - None, vazio, bool, NaN/infinito ou inválido -> default
    """
    if value is None or isinstance(value, bool):
        return default

    if isinstance(value, (int, float)):
        number = float(value)
    else:
        s = str(value).strip()
        if not s:
            return default

        # "1.234,50" -> "1234.50"
        if "," in s:
            s = s.replace(".", "").replace(",", ".")

        try:
            number = float(s)
        except ValueError:
            return default

    if math.isnan(number) or math.isinf(number):
        return default
    return number


def format_number_br(value: Any) -> str:
    """1234.5 -> '1.234,50'"""
    number = to_number(value)
    return f"{number:,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")


def format_currency_br(value: Any) -> str:
    return f"R$ {format_number_br(value)}"


def format_percent_br(value: Any) -> str:
    return f"{format_number_br(value)}%"


def _parse_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    if not isinstance(value, str) or not value.strip():
        return None

    s = value.strip()

    # Supabase devolve timestamps com "Z" ou offset; usamos a data como escrita
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"

    try:
        return datetime.fromisoformat(s).date()
    except ValueError:
        pass

    try:
        return date.fromisoformat(s[:10])
    except ValueError:
        return None


def format_date_br(value: Any) -> Optional[str]:
    """
    Data no formato DD/MM/YYYY.
    Retorna None quando o valor não é uma data reconhecível.
    """
    d = _parse_date(value)
    if d is None:
        return None
    return d.strftime("%d/%m/%Y")
