"""
Fixtures compartilhadas para os testes do gerador de propostas.
"""

from datetime import date

import pytest
from fastapi.testclient import TestClient

from propostas.main import create_app


@pytest.fixture
def hoje():
    """Data fixa para {{data_atual}}."""
    return date(2026, 10, 19)


@pytest.fixture
def servicos():
    """Dois serviços: um com valor base, outro com valor personalizado."""
    return [
        {"nome": "Site institucional", "quantidade": 2, "valor_base": 500},
        {"nome": "Logotipo", "quantidade": 1, "valor_base": 300, "valor_personalizado": 250},
    ]


@pytest.fixture
def cliente():
    return {
        "nome": "Ana Souza",
        "empresa": "Souza & Filhos",
        "email": "ana@souza.com.br",
        "telefone": "(11) 99999-0000",
        "endereco": "Rua das Flores, 10",
        "cidade": "São Paulo",
        "estado": "SP",
        "cnpj": "12.345.678/0001-90",
        "cpf": "123.456.789-00",
    }


@pytest.fixture
def proposta():
    return {
        "numero": "2024-001",
        "titulo": "Identidade visual",
        "created_at": "2024-03-05T14:30:00Z",
        "data_vencimento": "2024-04-04",
        "status": "enviada",
        "subtotal": 1000,
        "desconto": 10,
        "acrescimo": 5,
        "condicoes_pagamento": "50% na assinatura, 50% na entrega",
        "prazo_entrega": "30 dias",
        "observacoes": "Valores válidos para pagamento via PIX.",
    }


@pytest.fixture
def dados(proposta, cliente, servicos):
    """Pacote completo, como montado antes de renderizar."""
    return {"proposta": proposta, "cliente": cliente, "servicos": servicos, "empresa": {}}


@pytest.fixture
def client():
    """Cliente HTTP da API."""
    return TestClient(create_app())
