# backend/propostas/templates/variable_catalog.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class Category:
    id: str
    label: str
    color: str


@dataclass(frozen=True)
class Variable:
    id: str
    label: str
    category: str

    @property
    def token(self) -> str:
        return "{{" + self.id + "}}"


VARIABLE_CATEGORIES = (
    Category("cliente", "Dados do Cliente", "#2196F3"),
    Category("proposta", "Dados da Proposta", "#4CAF50"),
    Category("valores", "Valores Financeiros", "#9C27B0"),
    Category("servicos", "Serviços", "#F44336"),
    Category("outros", "Outros", "#607D8B"),
)

AVAILABLE_VARIABLES = (
    # ==================================================
    # CLIENTE
    # ==================================================
    Variable("cliente_nome", "Nome do Cliente", "cliente"),
    Variable("cliente_empresa", "Empresa do Cliente", "cliente"),
    Variable("cliente_email", "Email do Cliente", "cliente"),
    Variable("cliente_telefone", "Telefone do Cliente", "cliente"),
    Variable("cliente_endereco", "Endereço do Cliente", "cliente"),
    Variable("cliente_cidade", "Cidade do Cliente", "cliente"),
    Variable("cliente_estado", "Estado do Cliente", "cliente"),
    Variable("cliente_cnpj", "CNPJ do Cliente", "cliente"),
    Variable("cliente_cpf", "CPF do Cliente", "cliente"),

    # ==================================================
    # PROPOSTA
    # ==================================================
    Variable("proposta_numero", "Número da Proposta", "proposta"),
    Variable("proposta_titulo", "Título da Proposta", "proposta"),
    Variable("proposta_data", "Data da Proposta", "proposta"),
    Variable("proposta_validade", "Data de Validade", "proposta"),
    Variable("proposta_status", "Status da Proposta", "proposta"),

    # ==================================================
    # VALORES
    # ==================================================
    Variable("valor_subtotal", "Subtotal", "valores"),
    Variable("valor_desconto", "Valor do Desconto", "valores"),
    Variable("valor_desconto_percentual", "Percentual de Desconto", "valores"),
    Variable("valor_acrescimo", "Valor do Acréscimo", "valores"),
    Variable("valor_acrescimo_percentual", "Percentual de Acréscimo", "valores"),
    Variable("valor_total", "Valor Total", "valores"),
    Variable("valor_total_extenso", "Valor Total por Extenso", "valores"),

    # ==================================================
    # SERVIÇOS
    # ==================================================
    Variable("servicos_lista", "Lista de Serviços", "servicos"),
    Variable("servicos_tabela", "Tabela de Serviços", "servicos"),
    Variable("servicos_total", "Total de Serviços", "servicos"),

    # ==================================================
    # OUTROS
    # ==================================================
    Variable("observacoes", "Observações", "outros"),
    Variable("data_atual", "Data Atual", "outros"),
    Variable("condicoes_pagamento", "Condições de Pagamento", "outros"),
    Variable("prazo_entrega", "Prazo de Entrega", "outros"),
)


def variables_by_category() -> Dict[str, List[Variable]]:
    """Agrupa as variáveis por categoria, na ordem de VARIABLE_CATEGORIES (para o seletor do editor)."""
    grouped: Dict[str, List[Variable]] = {c.id: [] for c in VARIABLE_CATEGORIES}
    for v in AVAILABLE_VARIABLES:
        grouped[v.category].append(v)
    return grouped
