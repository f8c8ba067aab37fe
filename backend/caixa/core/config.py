from decimal import Decimal
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Keyword lists are plain data. Override them with JSON lists, e.g.
    SALARY_PAYER_NAMES='["maria souza"]'.
    """

    # Application
    PROJECT_NAME: str = "Caixa API"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: str = "*"  # In prod: "https://caixa.example.com"

    # Uploads
    MAX_UPLOAD_SIZE_MB: int = 5

    # Reconciliation
    BALANCE_TOLERANCE: Decimal = Decimal("0.01")

    # Exclusions valid in every scope (investment round-trips, ledger adjustments)
    IGNORE_PATTERNS: List[str] = [
        "resgate",
        "adicionado",
        "aplicacao rdb",
    ]

    # Only excluded from the all-months aggregate (bill settlements, internal transfers)
    IGNORE_PATTERNS_GLOBAL_ONLY: List[str] = [
        "pagamento de fatura",
        "pagamento fatura",
        "pagamento cartao",
        "transferencia entre contas",
        "transferencia interna",
    ]

    # Salary detection
    SALARY_KEYWORDS: List[str] = [
        "salario",
        "folha de pagamento",
        "proventos",
    ]
    SALARY_TRANSFER_PHRASES: List[str] = [
        "transferencia recebida",
        "ted recebida",
    ]
    SALARY_PAYER_NAMES: List[str] = [
        "otavio",
    ]

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


# Create a single instance to use across the app
settings = Settings()
