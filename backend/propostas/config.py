import os
from dataclasses import dataclass
from dotenv import load_dotenv

# Carrega o .env que está na RAIZ do backend (um nível acima da pasta propostas)
load_dotenv(dotenv_path=os.path.join(os.path.dirname(__file__), "..", ".env"))


def _get_env(name: str, default: str = "") -> str:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip()


@dataclass(frozen=True)
class Settings:
    # =========================
    # App
    # =========================
    app_name: str = _get_env("APP_NAME", "Gerador de Propostas")
    log_level: str = _get_env("LOG_LEVEL", "INFO").upper()

    # =========================
    # Branding (rodapé do PDF)
    # =========================
    brand_name: str = _get_env("BRAND_NAME", "Gerador de Propostas")
    brand_contact: str = _get_env("BRAND_CONTACT", "")  # ex: "seusite.com"

    # =========================
    # Modelo visual (padrões de página)
    # =========================
    page_width: str = _get_env("PAGE_WIDTH", "800px")
    page_background: str = _get_env("PAGE_BACKGROUND", "#ffffff")
    page_padding: str = _get_env("PAGE_PADDING", "40px")
    page_font_family: str = _get_env("PAGE_FONT_FAMILY", "Arial, sans-serif")


settings = Settings()
