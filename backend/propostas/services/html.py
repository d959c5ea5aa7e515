# backend/propostas/services/html.py
import os
import re

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "templates")

_CSS_UNSAFE = re.compile(r"[<>{};\\]")


def css_value(value) -> Markup:
    """Valor para dentro de <style>: o texto é cru (sem entidades HTML), então só removemos o que fecha a regra/tag."""
    return Markup(_CSS_UNSAFE.sub("", str(value or "")))


env = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=select_autoescape(["html", "xml"]),
    trim_blocks=True,
    lstrip_blocks=True,
)
env.filters["css"] = css_value


def render_html(template_name: str, **context) -> str:
    return env.get_template(template_name).render(**context)
