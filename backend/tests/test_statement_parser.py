"""Tests for bank statement parsing."""
from datetime import date
from decimal import Decimal

import pytest

from caixa.schemas.transactions import TransactionType
from caixa.utils.statement_parser import (
    StatementParseError,
    parse_statement_file,
    parse_statement_rows,
    read_statement_rows,
)


# ============================================================================
# Row parsing
# ============================================================================

def test_negative_value_becomes_saida():
    result = parse_statement_rows([{"Date": "05/03/2024", "Value": "-150,50", "Description": "MERCADO X"}])

    assert result.warnings == []
    tx = result.transactions[0]
    assert tx.date == date(2024, 3, 5)
    assert tx.value == Decimal("150.50")
    assert tx.kind is TransactionType.SAIDA
    assert tx.description == "MERCADO X"
    assert tx.id is None


def test_positive_and_zero_values_become_entrada():
    result = parse_statement_rows([
        {"Data": "10/01/2024", "Valor": "5.000,00", "Descrição": "TRANSFERENCIA RECEBIDA"},
        {"Data": "11/01/2024", "Valor": "0,00", "Descrição": "Tarifa zerada"},
    ])

    assert [tx.kind for tx in result.transactions] == [TransactionType.ENTRADA, TransactionType.ENTRADA]
    assert result.transactions[0].value == Decimal("5000.00")


@pytest.mark.parametrize("header", ["Descrição", "Descricao", "descricao", "Histórico", "historico", "Description"])
def test_description_header_variants(header):
    result = parse_statement_rows([{"Data": "01/02/2024", "Valor": "-1,00", header: "Café"}])
    assert result.transactions[0].description == "Café"


def test_missing_description_is_empty():
    result = parse_statement_rows([{"Data": "01/02/2024", "Valor": "-1,00"}])
    assert result.transactions[0].description == ""


def test_malformed_date_is_surfaced_not_guessed():
    result = parse_statement_rows([
        {"Data": "2024-03-05", "Valor": "-10,00", "Descrição": "A"},
        {"Data": "", "Valor": "-10,00", "Descrição": "B"},
        {"Data": "05/03/2024", "Valor": "-10,00", "Descrição": "C"},
    ])

    assert [tx.date for tx in result.transactions] == [None, None, date(2024, 3, 5)]
    assert len(result.warnings) == 2
    assert result.warnings[0].startswith("Linha 2:")
    assert result.warnings[1].startswith("Linha 3:")


def test_unparseable_value_fails_whole_file():
    rows = [
        {"Data": "05/03/2024", "Valor": "-10,00", "Descrição": "ok"},
        {"Data": "06/03/2024", "Valor": "dez reais", "Descrição": "broken"},
    ]

    with pytest.raises(StatementParseError, match="Linha 3"):
        parse_statement_rows(rows)


def test_missing_value_fails_whole_file():
    with pytest.raises(StatementParseError):
        parse_statement_rows([{"Data": "05/03/2024", "Descrição": "sem valor"}])


def test_no_rows():
    result = parse_statement_rows([])
    assert result.transactions == []
    assert result.warnings == []


# ============================================================================
# File reading
# ============================================================================

def test_parse_semicolon_file():
    content = (
        "Data;Valor;Descrição\n"
        "05/03/2024;-150,50;MERCADO X\n"
        "06/03/2024;3.200,00;SALARIO ACME\n"
    ).encode("utf-8")

    result = parse_statement_file(content)

    assert len(result.transactions) == 2
    assert result.transactions[0].value == Decimal("150.50")
    assert result.transactions[1].kind is TransactionType.ENTRADA
    assert result.transactions[1].value == Decimal("3200.00")


def test_parse_comma_file_with_quoted_amounts():
    content = (
        'Date,Value,Description\n'
        '05/03/2024,"-150,50",MERCADO X\n'
    ).encode("utf-8")

    result = parse_statement_file(content)

    assert result.transactions[0].date == date(2024, 3, 5)
    assert result.transactions[0].value == Decimal("150.50")


def test_parse_latin1_file():
    content = "Data;Valor;Histórico\n07/03/2024;-9,90;PADARIA SÃO JOSÉ\n".encode("latin-1")

    result = parse_statement_file(content)

    assert result.transactions[0].description == "PADARIA SÃO JOSÉ"


def test_short_row_leaves_missing_cells_empty():
    content = "Data;Valor;Descrição\n05/03/2024;-150,50\n".encode("utf-8")

    result = parse_statement_file(content)

    assert result.transactions[0].description == ""
    assert result.transactions[0].value == Decimal("150.50")


def test_short_row_without_date_warns_with_empty_cell():
    content = "Valor;Descrição;Data\n-9,90;PADARIA\n".encode("utf-8")

    result = parse_statement_file(content)

    assert result.transactions[0].date is None
    assert result.warnings == ["Linha 2: data inválida None"]


def test_bom_header_is_recognized():
    content = "\ufeffData;Valor;Descrição\n07/03/2024;-9,90;X\n".encode("utf-8")

    rows = read_statement_rows(content)

    assert list(rows[0].keys())[0] == "Data"


def test_empty_file_is_rejected():
    with pytest.raises(StatementParseError):
        parse_statement_file(b"")
    with pytest.raises(StatementParseError):
        parse_statement_file(b"   \n  ")
