# backend/propostas/routes.py
from __future__ import annotations

import logging
import re
from dataclasses import asdict

from fastapi import APIRouter, HTTPException
from fastapi.responses import HTMLResponse, Response

from propostas.pdf.render_pdf import build_proposal_pdf
from propostas.schemas import PdfRequest, RenderRequest, VisualRenderRequest
from propostas.services.template_renderer import extract_variables, process_variables
from propostas.services.visual_renderer import render_visual_model
from propostas.templates.variable_catalog import (
    AVAILABLE_VARIABLES,
    VARIABLE_CATEGORIES,
    variables_by_category,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _pdf_filename(numero) -> str:
    slug = re.sub(r"[^A-Za-z0-9_-]+", "-", str(numero or "")).strip("-")
    return f"proposta_{slug or 'preview'}.pdf"


def _variable_json(v) -> dict:
    return {**asdict(v), "token": v.token}


@router.get("/variaveis")
def list_variables():
    """Catálogo para o seletor de variáveis do editor."""
    return {
        "categorias": [asdict(c) for c in VARIABLE_CATEGORIES],
        "variaveis": [_variable_json(v) for v in AVAILABLE_VARIABLES],
        "grupos": {
            category: [v.id for v in variables]
            for category, variables in variables_by_category().items()
        },
    }


@router.post("/render")
def render_template(body: RenderRequest):
    conteudo = process_variables(body.template, body.dados)
    variaveis = extract_variables(body.template)
    logger.debug("render: %d variáveis reconhecidas", len(variaveis))
    return {"conteudo": conteudo, "variaveis": variaveis}


@router.post("/render/visual", response_class=HTMLResponse)
def render_visual(body: VisualRenderRequest):
    html = render_visual_model(body.modelo, body.dados, title=body.titulo or "")
    return HTMLResponse(content=html)


@router.post("/render/pdf")
def render_pdf(body: PdfRequest):
    conteudo = process_variables(body.template, body.dados)

    try:
        pdf_bytes = build_proposal_pdf(
            title=body.titulo or "",
            body_text=conteudo,
            data=body.dados,
        )
    except Exception as e:
        logger.exception("Falha ao gerar PDF")
        raise HTTPException(status_code=500, detail="Erro ao gerar PDF") from e

    filename = _pdf_filename(body.dados.proposta.numero)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
