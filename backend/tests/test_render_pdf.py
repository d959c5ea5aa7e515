"""
Testes da conversão do corpo processado para texto do PDF.
"""

from propostas.pdf.render_pdf import TABLE_MARKER, _html_to_text, build_proposal_pdf


class TestHtmlParaTexto:

    def test_entidades_decodificadas(self):
        assert _html_to_text("P&amp;D&nbsp;x<br>y") == "P&D x\ny"

    def test_texto_escapado_nao_vira_tag(self):
        assert _html_to_text("<p>&lt;b&gt;negrito&lt;/b&gt;</p>") == "<b>negrito</b>"

    def test_tabela_vira_marcador(self):
        texto = _html_to_text("antes<table><tr><td>A &amp; B</td></tr></table>depois")
        assert texto == f"antes\n{TABLE_MARKER}\ndepois"


class TestDocumento:

    def test_pdf_com_entidades(self, dados):
        pdf = build_proposal_pdf("P&D", "Cliente &amp; parceiro &lt;ok&gt;", data=dados)
        assert pdf.startswith(b"%PDF")
