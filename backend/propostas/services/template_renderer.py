# backend/propostas/services/template_renderer.py
"""
Substituição de variáveis {{chave}} nos modelos de proposta.

O conteúdo do modelo é escrito pelo usuário no editor; os dados chegam num
"pacote" com quatro partes opcionais:

    {
        "proposta": {...},   # numero, titulo, created_at, data_vencimento, status,
                             # subtotal, desconto (%), acrescimo (%), valor_total,
                             # condicoes_pagamento, prazo_entrega, observacoes
        "cliente": {...},    # nome, empresa, email, telefone, endereco, cidade,
                             # estado, cnpj, cpf
        "servicos": [...],   # nome, quantidade, valor_base, valor_personalizado
        "empresa": {...},    # reservado
    }

Dado ausente nunca gera erro: vira um texto entre colchetes ("[Nome do Cliente]").
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, List, Mapping, Optional

from propostas.services.extenso import amount_in_words
from propostas.services.formatting import (
    format_currency_br,
    format_date_br,
    format_number_br,
    format_percent_br,
    to_number,
)
from propostas.services.html import render_html

INVALID_TEMPLATE = "[Erro: Template inválido]"

TOKEN_PATTERN = re.compile(r"\{\{(\w+)\}\}")


def as_mapping(obj: Any) -> Mapping[str, Any]:
    if obj is None:
        return {}
    if isinstance(obj, Mapping):
        return obj
    # modelos pydantic (payload da API)
    if hasattr(obj, "model_dump"):
        return obj.model_dump()
    return {}


def _text(value: Any, placeholder: str) -> str:
    if value is None or value == "" or value is False:
        return placeholder
    return str(value)


def _format_quantity(quantity: float) -> str:
    if quantity == int(quantity):
        return str(int(quantity))
    return format_number_br(quantity).rstrip("0").rstrip(",")


@dataclass(frozen=True)
class ServiceLine:
    name: str
    quantity: float
    unit_price: float

    @property
    def total(self) -> float:
        return self.unit_price * self.quantity

    @property
    def quantity_label(self) -> str:
        return _format_quantity(self.quantity)

    @property
    def unit_price_label(self) -> str:
        return format_number_br(self.unit_price)

    @property
    def total_label(self) -> str:
        return format_number_br(self.total)


def service_lines(services: Any) -> List[ServiceLine]:
    """Itens de serviço com o preço efetivo (valor personalizado, senão valor base)."""
    lines = []
    for raw in services or []:
        item = as_mapping(raw)
        unit_price = to_number(item.get("valor_personalizado")) or to_number(item.get("valor_base"))
        lines.append(
            ServiceLine(
                name=str(item.get("nome") or ""),
                quantity=to_number(item.get("quantidade"), default=1.0),
                unit_price=unit_price,
            )
        )
    return lines


@dataclass(frozen=True)
class Totals:
    subtotal: float
    discount_percent: float
    surcharge_percent: float
    discount: float
    surcharge: float
    total: float


def compute_totals(proposal: Mapping[str, Any]) -> Totals:
    subtotal = to_number(proposal.get("subtotal"))
    discount_percent = to_number(proposal.get("desconto"))
    surcharge_percent = to_number(proposal.get("acrescimo"))

    discount = subtotal * discount_percent / 100
    surcharge = subtotal * surcharge_percent / 100

    # valor_total informado prevalece; 0/ausente cai no cálculo
    total = to_number(proposal.get("valor_total")) or (subtotal - discount + surcharge)

    return Totals(
        subtotal=subtotal,
        discount_percent=discount_percent,
        surcharge_percent=surcharge_percent,
        discount=discount,
        surcharge=surcharge,
        total=total,
    )


class _RenderContext:
    def __init__(self, data: Any, today: Optional[date] = None):
        bundle = as_mapping(data)
        self.proposal = as_mapping(bundle.get("proposta"))
        self.client = as_mapping(bundle.get("cliente"))
        self.company = as_mapping(bundle.get("empresa"))
        self.services = service_lines(bundle.get("servicos"))
        self.today = today or date.today()
        self._totals: Optional[Totals] = None

    @property
    def totals(self) -> Totals:
        if self._totals is None:
            self._totals = compute_totals(self.proposal)
        return self._totals


def _client(field: str, placeholder: str) -> Callable[[_RenderContext], str]:
    return lambda ctx: _text(ctx.client.get(field), placeholder)


def _proposal(field: str, placeholder: str) -> Callable[[_RenderContext], str]:
    return lambda ctx: _text(ctx.proposal.get(field), placeholder)


def _proposal_date(field: str, placeholder: str) -> Callable[[_RenderContext], str]:
    return lambda ctx: format_date_br(ctx.proposal.get(field)) or placeholder


def _services_list(ctx: _RenderContext) -> str:
    return "\n".join(
        f"• {s.name} ({s.quantity_label}x) - R$ {s.total_label}" for s in ctx.services
    )


def _services_table(ctx: _RenderContext) -> str:
    return render_html("servicos_tabela.html", items=ctx.services)


RESOLVERS: Dict[str, Callable[[_RenderContext], str]] = {
    # Cliente
    "cliente_nome": _client("nome", "[Nome do Cliente]"),
    "cliente_empresa": _client("empresa", "[Empresa do Cliente]"),
    "cliente_email": _client("email", "[Email do Cliente]"),
    "cliente_telefone": _client("telefone", "[Telefone do Cliente]"),
    "cliente_endereco": _client("endereco", "[Endereço do Cliente]"),
    "cliente_cidade": _client("cidade", "[Cidade do Cliente]"),
    "cliente_estado": _client("estado", "[Estado do Cliente]"),
    "cliente_cnpj": _client("cnpj", "[CNPJ do Cliente]"),
    "cliente_cpf": _client("cpf", "[CPF do Cliente]"),
    # Proposta
    "proposta_numero": _proposal("numero", "[Número da Proposta]"),
    "proposta_titulo": _proposal("titulo", "[Título da Proposta]"),
    "proposta_data": _proposal_date("created_at", "[Data da Proposta]"),
    "proposta_validade": _proposal_date("data_vencimento", "[Data de Validade]"),
    "proposta_status": _proposal("status", "[Status da Proposta]"),
    # Valores
    "valor_subtotal": lambda ctx: format_currency_br(ctx.totals.subtotal),
    "valor_desconto": lambda ctx: format_currency_br(ctx.totals.discount),
    "valor_desconto_percentual": lambda ctx: format_percent_br(ctx.totals.discount_percent),
    "valor_acrescimo": lambda ctx: format_currency_br(ctx.totals.surcharge),
    "valor_acrescimo_percentual": lambda ctx: format_percent_br(ctx.totals.surcharge_percent),
    "valor_total": lambda ctx: format_currency_br(ctx.totals.total),
    "valor_total_extenso": lambda ctx: amount_in_words(ctx.totals.total),
    # Serviços
    "servicos_lista": _services_list,
    "servicos_tabela": _services_table,
    "servicos_total": lambda ctx: str(len(ctx.services)),
    # Outros
    "observacoes": _proposal("observacoes", "[Sem observações]"),
    "data_atual": lambda ctx: ctx.today.strftime("%d/%m/%Y"),
    "condicoes_pagamento": _proposal("condicoes_pagamento", "[Condições de Pagamento]"),
    "prazo_entrega": _proposal("prazo_entrega", "[Prazo de Entrega]"),
}


def process_variables(template: Any, data: Any = None, today: Optional[date] = None) -> str:
    """
    Substitui as variáveis reconhecidas de `template` com os dados do pacote.

    - template que não é string -> "[Erro: Template inválido]"
    - chaves desconhecidas ficam como estão ({{qualquer_coisa}})
    - cada chave é resolvida uma única vez por chamada; o valor substituído
      não é reprocessado (um nome de cliente "{{valor_total}}" sai literal)
    """
    if not isinstance(template, str):
        return INVALID_TEMPLATE

    ctx = _RenderContext(data, today=today)
    resolved: Dict[str, str] = {}

    def _replace(match: re.Match) -> str:
        key = match.group(1)
        resolver = RESOLVERS.get(key)
        if resolver is None:
            return match.group(0)
        if key not in resolved:
            resolved[key] = resolver(ctx)
        return resolved[key]

    return TOKEN_PATTERN.sub(_replace, template)


def extract_variables(template: Any) -> List[str]:
    """Chaves reconhecidas usadas no modelo, na ordem em que aparecem."""
    if not isinstance(template, str):
        return []

    keys: List[str] = []
    for match in TOKEN_PATTERN.finditer(template):
        key = match.group(1)
        if key in RESOLVERS and key not in keys:
            keys.append(key)
    return keys
