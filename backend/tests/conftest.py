"""Pytest configuration and fixtures for testing."""
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from caixa.main import app
from caixa.schemas.expenses import PlannedExpense
from caixa.schemas.transactions import Transaction
from caixa.utils.classifiers import ClassificationRules


@pytest.fixture
def client() -> TestClient:
    """HTTP client bound to the FastAPI app."""
    return TestClient(app)


@pytest.fixture
def rules() -> ClassificationRules:
    """Keyword tables pinned for tests, independent of the environment."""
    return ClassificationRules(
        ignore_patterns=["resgate", "adicionado", "aplicacao rdb"],
        ignore_patterns_global_only=["pagamento cartao", "pagamento de fatura", "transferencia entre contas"],
        salary_keywords=["salario", "folha de pagamento"],
        salary_transfer_phrases=["transferencia recebida", "ted recebida"],
        salary_payer_names=["otavio"],
    )


@pytest.fixture
def january_transactions():
    """Salary transfer plus a card bill payment in January 2024."""
    return [
        Transaction(
            date="2024-01-10",
            value=5000,
            type="entrada",
            description="TRANSFERENCIA RECEBIDA OTAVIO LOPES",
        ),
        Transaction(
            date="2024-01-15",
            value=1200,
            type="saida",
            description="PAGAMENTO CARTAO",
        ),
    ]


@pytest.fixture
def mixed_transactions(january_transactions):
    """Two months of movements with ignorable rows and other income."""
    return january_transactions + [
        Transaction(date="2024-01-20", value=300, type="entrada", description="Pix recebido Maria"),
        Transaction(date="2024-01-21", value=1000, type="entrada", description="APLICACAO RDB"),
        Transaction(date="2024-01-22", value=80, type="saida", description="Uber", category_ref=7),
        Transaction(date="2024-02-05", value=450, type="saida", description="Mercado Bom Preço", category_ref=2),
        Transaction(date="2024-02-06", value=200, type="entrada", description="Resgate RDB"),
        Transaction(date="2024-02-10", value=5100, type="entrada", description="Salário Empresa X"),
    ]


@pytest.fixture
def planned_expenses():
    return [
        PlannedExpense(month="janeiro 2024", name="Academia", quantity=1, total_value=Decimal("120")),
        PlannedExpense(month="fevereiro 2024", name="Gasolina", quantity=2, unit_value=Decimal("250")),
    ]
