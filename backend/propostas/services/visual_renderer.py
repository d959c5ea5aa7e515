# backend/propostas/services/visual_renderer.py
"""
Renderização dos modelos "visuais" do editor: elementos posicionados
(texto, imagem, tabela, linha, espaçador) distribuídos em páginas.

Formato aceito:
    {"configuracoes": {...}, "paginas": [{"elementos": [...], "configuracoes": {...}}]}
    {"configuracoes": {...}, "elementos": [...]}            # formato antigo (1 página)
    {"template": {...}}                                      # como vem salvo em modelos.conteudo
"""
from __future__ import annotations

import json
import logging
from datetime import date
from typing import Any, Dict, List, Mapping, Optional

from markupsafe import Markup

from propostas.config import settings
from propostas.services.html import render_html
from propostas.services.template_renderer import process_variables

logger = logging.getLogger(__name__)

RENDER_ERROR = "Erro ao renderizar modelo"

# estilo do editor (camelCase) -> CSS
STYLE_PROPERTIES = (
    ("fontSize", "font-size"),
    ("fontWeight", "font-weight"),
    ("color", "color"),
    ("backgroundColor", "background-color"),
    ("textAlign", "text-align"),
    ("padding", "padding"),
    ("margin", "margin"),
    ("borderRadius", "border-radius"),
    ("border", "border"),
    ("width", "width"),
    ("height", "height"),
)


def _load_model(model: Any) -> Dict[str, Any]:
    if isinstance(model, str):
        model = json.loads(model)
    if not isinstance(model, dict):
        raise ValueError("modelo visual inválido")

    inner = model.get("template")
    if isinstance(inner, str):
        inner = json.loads(inner)
    if isinstance(inner, dict):
        return inner
    return model


def _page_settings(page_config: Mapping[str, Any], model_config: Mapping[str, Any]) -> Dict[str, str]:
    def pick(key: str, default: str) -> str:
        return page_config.get(key) or model_config.get(key) or default

    return {
        "width": pick("largura", settings.page_width),
        "background": pick("corFundo", settings.page_background),
        "padding": pick("padding", settings.page_padding),
        "font_family": pick("fontFamily", settings.page_font_family),
    }


def _element_style(element: Mapping[str, Any]) -> str:
    position = element.get("posicao") or {}
    style = element.get("estilo") or {}

    rules = [
        f"left: {position.get('x', 0)}px",
        f"top: {position.get('y', 0)}px",
    ]
    for key, prop in STYLE_PROPERTIES:
        value = style.get(key)
        if value not in (None, ""):
            rules.append(f"{prop}: {value}")
    rules.append("position: absolute")

    return "; ".join(rules) + ";"


def _build_element(element: Mapping[str, Any], data: Any, today: Optional[date]) -> Dict[str, Any]:
    kind = element.get("tipo")
    content = element.get("conteudo")
    style = element.get("estilo") or {}

    item: Dict[str, Any] = {"style": _element_style(element), "kind": kind}

    if kind == "imagem":
        src = content if isinstance(content, str) else ""
        if src.startswith("data:image/"):
            item["src"] = src
            item["border_radius"] = style.get("borderRadius") or "0"
            item["border"] = style.get("border") or "none"
        else:
            item["kind"] = "imagem_vazia"
    elif kind == "tabela":
        item["html"] = Markup(process_variables("{{servicos_tabela}}", data, today=today))
    elif kind == "linha":
        item["color"] = style.get("color") or "#000000"
    elif kind == "espacador":
        pass
    elif isinstance(content, str):
        # o conteúdo é HTML do próprio usuário
        processed = process_variables(content, data, today=today)
        item["kind"] = "texto"
        item["html"] = Markup(processed.replace("\n", "<br>"))
    else:
        item["kind"] = "nao_suportado"

    return item


def _build_pages(model: Dict[str, Any], data: Any, today: Optional[date]) -> List[Dict[str, Any]]:
    model_config = model.get("configuracoes") or {}

    raw_pages = model.get("paginas")
    if not isinstance(raw_pages, list):
        raw_pages = [{"elementos": model.get("elementos") or []}]

    pages = []
    for raw in raw_pages:
        page_config = raw.get("configuracoes") or {}
        pages.append(
            {
                "settings": _page_settings(page_config, model_config),
                "elements": [_build_element(e, data, today) for e in raw.get("elementos") or []],
            }
        )
    return pages


def render_visual_model(model: Any, data: Any = None, title: str = "", today: Optional[date] = None) -> str:
    """
    Gera o documento HTML completo (páginas A4 + CSS de impressão).
    Qualquer falha na montagem vira uma caixa "Erro ao renderizar modelo".
    """
    pages: List[Dict[str, Any]] = []
    error = None

    try:
        loaded = _load_model(model)
        pages = _build_pages(loaded, data, today)
        font_family = _page_settings({}, loaded.get("configuracoes") or {})["font_family"]
    except Exception:
        logger.exception("Falha ao renderizar modelo visual")
        error = RENDER_ERROR
        font_family = settings.page_font_family

    return render_html(
        "documento.html",
        title=title or "Proposta",
        font_family=font_family,
        pages=pages,
        error=error,
    )
