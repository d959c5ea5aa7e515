# backend/propostas/schemas.py
from __future__ import annotations

from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class _Record(BaseModel):
    # linhas do banco trazem colunas a mais (id, user_id, ...)
    model_config = ConfigDict(extra="allow")


class Cliente(_Record):
    nome: Optional[str] = None
    empresa: Optional[str] = None
    email: Optional[str] = None
    telefone: Optional[str] = None
    endereco: Optional[str] = None
    cidade: Optional[str] = None
    estado: Optional[str] = None
    cnpj: Optional[str] = None
    cpf: Optional[str] = None


class Proposta(_Record):
    numero: Optional[Union[int, str]] = None
    titulo: Optional[str] = None
    created_at: Optional[str] = None
    data_vencimento: Optional[str] = None
    status: Optional[str] = None
    subtotal: Optional[float] = None
    desconto: Optional[float] = Field(default=None, description="Percentual de desconto")
    acrescimo: Optional[float] = Field(default=None, description="Percentual de acréscimo")
    valor_total: Optional[float] = None
    condicoes_pagamento: Optional[str] = None
    prazo_entrega: Optional[str] = None
    observacoes: Optional[str] = None


class ServicoItem(_Record):
    nome: Optional[str] = None
    quantidade: Optional[float] = 1
    valor_base: Optional[float] = None
    valor_personalizado: Optional[float] = None


class DadosProposta(BaseModel):
    proposta: Proposta = Field(default_factory=Proposta)
    cliente: Cliente = Field(default_factory=Cliente)
    servicos: List[ServicoItem] = Field(default_factory=list)
    empresa: dict = Field(default_factory=dict)


class RenderRequest(BaseModel):
    # Any: template que não é texto devolve o marcador de erro, não 422
    template: Any = None
    dados: DadosProposta = Field(default_factory=DadosProposta)


class VisualRenderRequest(BaseModel):
    modelo: Any = None
    dados: DadosProposta = Field(default_factory=DadosProposta)
    titulo: Optional[str] = None


class PdfRequest(BaseModel):
    template: str
    dados: DadosProposta = Field(default_factory=DadosProposta)
    titulo: Optional[str] = None
