import re
from html import unescape
from io import BytesIO
from datetime import datetime
from typing import Any, List, Optional
from xml.sax.saxutils import escape

from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.enums import TA_LEFT, TA_CENTER, TA_RIGHT
from reportlab.lib.units import cm
from reportlab.platypus import (
    SimpleDocTemplate,
    Paragraph,
    Spacer,
    ListFlowable,
    ListItem,
    Table,
    TableStyle,
)
from reportlab.lib.colors import black, HexColor

from propostas.config import settings
from propostas.services.formatting import format_currency_br, format_date_br, format_number_br
from propostas.services.template_renderer import (
    ServiceLine,
    as_mapping,
    compute_totals,
    service_lines,
)

TABLE_MARKER = "@@servicos_tabela@@"

_TABLE_RE = re.compile(r"<table\b.*?</table>", re.IGNORECASE | re.DOTALL)
_BR_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")


def _s(v: Any) -> str:
    if v is None:
        return ""
    return str(v)


def _strip_md_inline(text: str) -> str:
    t = text
    t = t.replace("**", "")
    t = t.replace("__", "")
    t = t.replace("`", "")
    return t


def _plain(text: str) -> str:
    """Texto seguro para Paragraph (que interpreta um mini-XML)."""
    return escape(_strip_md_inline(text))


def _html_to_text(body: str) -> str:
    """
    O corpo vem de process_variables e pode conter HTML:
    - <table> (servicos_tabela) vira um marcador -> tabela nativa do reportlab
    - <br> vira quebra de linha
    - demais tags são removidas e as entidades (&amp;, &nbsp;...) decodificadas
    """
    t = _TABLE_RE.sub("\n" + TABLE_MARKER + "\n", body or "")
    t = _BR_RE.sub("\n", t)
    t = unescape(_TAG_RE.sub("", t))
    return t.replace("\r\n", "\n").replace("\r", "\n").replace("\u00a0", " ")


def _footer_canvas(canvas, doc, generated_at: datetime):
    """
    Rodapé fixo em TODAS as páginas (discreto e profissional).
    """
    canvas.saveState()

    canvas.setStrokeColor(HexColor("#DDDDDD"))
    canvas.setLineWidth(0.6)
    y_line = 1.7 * cm
    canvas.line(doc.leftMargin, y_line, A4[0] - doc.rightMargin, y_line)

    canvas.setFillColor(HexColor("#666666"))
    canvas.setFont("Helvetica", 9)

    right_parts = [generated_at.strftime("%d/%m/%Y %H:%M")]
    if settings.brand_contact:
        right_parts.insert(0, settings.brand_contact)

    right_text = " • ".join(right_parts)

    y_text = 1.2 * cm
    canvas.drawString(doc.leftMargin, y_text, settings.brand_name)
    canvas.drawRightString(A4[0] - doc.rightMargin, y_text, right_text)

    canvas.restoreState()


def _services_table(lines: List[ServiceLine], styles) -> Table:
    rows = [["Serviço", "Qtd", "Valor Unit.", "Total"]]
    for s in lines:
        rows.append(
            [
                Paragraph(_plain(s.name), styles["CellStyle"]),
                s.quantity_label,
                f"R$ {s.unit_price_label}",
                f"R$ {s.total_label}",
            ]
        )

    table = Table(rows, colWidths=[8.5 * cm, 1.8 * cm, 3.2 * cm, 3.5 * cm], repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), HexColor("#F5F5F5")),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 10),
                ("GRID", (0, 0), (-1, -1), 0.5, HexColor("#DDDDDD")),
                ("ALIGN", (1, 0), (1, -1), "CENTER"),
                ("ALIGN", (2, 0), (-1, -1), "RIGHT"),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ("TOPPADDING", (0, 0), (-1, -1), 6),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
            ]
        )
    )
    return table


def build_proposal_pdf(title: str, body_text: str, data: Optional[Any] = None) -> bytes:
    """
    PDF da proposta a partir do texto já processado (process_variables):
    - resumo com cliente, número, validade e total
    - corpo com títulos (#) e bullets (- / •)
    - tabela de serviços nativa + totais
    - rodapé fixo em todas as páginas
    """
    bundle = as_mapping(data)
    proposal = as_mapping(bundle.get("proposta"))
    client = as_mapping(bundle.get("cliente"))
    lines = service_lines(bundle.get("servicos"))
    totals = compute_totals(proposal)

    title = _s(title) or f"Proposta - {_s(client.get('nome')) or 'Cliente'}"

    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=2 * cm,
        leftMargin=2 * cm,
        topMargin=2 * cm,
        bottomMargin=2.2 * cm,  # um pouco maior pra caber o rodapé
        title=title,
    )

    styles = getSampleStyleSheet()
    styles.add(
        ParagraphStyle(
            name="TitleStyle",
            fontSize=20,
            leading=24,
            spaceAfter=16,
            alignment=TA_CENTER,
            textColor=black,
        )
    )
    styles.add(
        ParagraphStyle(
            name="HeaderStyle",
            fontSize=14,
            leading=18,
            spaceBefore=12,
            spaceAfter=8,
            textColor=black,
        )
    )
    styles.add(
        ParagraphStyle(
            name="BodyStyle",
            fontSize=11,
            leading=15,
            spaceAfter=6,
            alignment=TA_LEFT,
        )
    )
    styles.add(ParagraphStyle(name="CellStyle", fontSize=10, leading=13))
    styles.add(
        ParagraphStyle(
            name="TotalStyle",
            fontSize=11,
            leading=15,
            alignment=TA_RIGHT,
        )
    )
    styles.add(
        ParagraphStyle(
            name="MutedStyle",
            fontSize=10,
            leading=14,
            textColor=HexColor("#555555"),
        )
    )

    story = []

    story.append(Paragraph(_plain(title), styles["TitleStyle"]))
    story.append(Spacer(1, 10))

    # Resumo
    summary = [
        ("Cliente", client.get("nome")),
        ("Proposta", proposal.get("numero")),
        ("Validade", format_date_br(proposal.get("data_vencimento"))),
        ("Investimento", format_currency_br(totals.total) if totals.total else None),
    ]
    summary = [(label, _s(value)) for label, value in summary if value]
    if summary:
        story.append(Paragraph("<b>Resumo</b>", styles["HeaderStyle"]))
        for label, value in summary:
            story.append(Paragraph(f"<b>{label}:</b> {_plain(value)}", styles["BodyStyle"]))
        story.append(Spacer(1, 14))

    story.append(Paragraph("<b>Proposta</b>", styles["HeaderStyle"]))

    table_done = False

    def add_table():
        story.append(_services_table(lines, styles))
        story.append(Spacer(1, 10))

    text = _html_to_text(body_text)

    if not text.strip():
        story.append(
            Paragraph(
                "Texto da proposta não foi encontrado. Verifique o modelo e tente gerar o PDF novamente.",
                styles["MutedStyle"],
            )
        )
    else:
        def flush_bullets(items):
            if not items:
                return
            story.append(
                ListFlowable(
                    items,
                    bulletType="bullet",
                    start="circle",
                    leftIndent=14,
                )
            )

        bullet_items = []

        for raw in text.splitlines():
            line = (raw or "").strip()

            if line == TABLE_MARKER:
                flush_bullets(bullet_items)
                bullet_items = []
                if lines:
                    add_table()
                    table_done = True
                continue

            if not line:
                flush_bullets(bullet_items)
                bullet_items = []
                story.append(Spacer(1, 6))
                continue

            if line.startswith("#"):
                flush_bullets(bullet_items)
                bullet_items = []
                heading = _plain(line.lstrip("#").strip())
                if heading:
                    story.append(Paragraph(heading, styles["HeaderStyle"]))
                continue

            if line.startswith("- ") or line.startswith("• "):
                bullet_items.append(
                    ListItem(
                        Paragraph(_plain(line[2:]), styles["BodyStyle"]),
                        leftIndent=10,
                    )
                )
                continue

            flush_bullets(bullet_items)
            bullet_items = []
            story.append(Paragraph(_plain(line), styles["BodyStyle"]))

        flush_bullets(bullet_items)

    # Serviços + totais
    if lines and not table_done:
        story.append(Paragraph("<b>Serviços</b>", styles["HeaderStyle"]))
        add_table()

    if lines or totals.total:
        story.append(Paragraph(f"<b>Subtotal:</b> {format_currency_br(totals.subtotal)}", styles["TotalStyle"]))
        if totals.discount_percent > 0:
            story.append(
                Paragraph(
                    f"<b>Desconto ({format_number_br(totals.discount_percent)}%):</b> "
                    f"-{format_currency_br(totals.discount)}",
                    styles["TotalStyle"],
                )
            )
        if totals.surcharge_percent > 0:
            story.append(
                Paragraph(
                    f"<b>Acréscimo ({format_number_br(totals.surcharge_percent)}%):</b> "
                    f"+{format_currency_br(totals.surcharge)}",
                    styles["TotalStyle"],
                )
            )
        story.append(Paragraph(f"<b>Total:</b> {format_currency_br(totals.total)}", styles["TotalStyle"]))

    generated_at = datetime.now()

    doc.build(
        story,
        onFirstPage=lambda canvas, d: _footer_canvas(canvas, d, generated_at),
        onLaterPages=lambda canvas, d: _footer_canvas(canvas, d, generated_at),
    )

    pdf = buffer.getvalue()
    buffer.close()
    return pdf
