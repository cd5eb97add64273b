"""Core constants used across LedgerLens modules.

This module centralizes thresholds, column names, and issue messages.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

SOURCE_LABEL_COLUMN = "source_label"
COMPANY_CODE_COLUMN = "company_code"
COMPANY_NAME_COLUMN = "company_name"
LEDGER_ACCOUNT_COLUMN = "ledger_account"
AMOUNT_COLUMN = "standardized_amount"
MONTH_COLUMN = "month"
RELATED_RECORD_COUNT_COLUMN = "related_record_count"
RELATED_SOURCES_COLUMN = "related_sources"

DEFAULT_DIRECTORY_MARKER = "sociedad"
NO_NAME_PLACEHOLDER = "(Sin nombre)"
UNKNOWN_COMPANY_KEY = "N/A"
AMOUNT_ROUNDING_DIGITS = 2

DEFAULT_OUTLIER_THRESHOLD = 1e10
DEFAULT_HOT_COLUMN_RATIO = 0.1
DEFAULT_IQR_MULTIPLIER = 1.5
DEFAULT_ZSCORE_THRESHOLD = 3.0
DEFAULT_MIN_IQR_GROUP_SIZE = 4
DEFAULT_MIN_ZSCORE_GROUP_SIZE = 3

REQUIRED_COLUMNS = (COMPANY_NAME_COLUMN, COMPANY_CODE_COLUMN, SOURCE_LABEL_COLUMN)
REVENUE_KEYWORDS = ("venta", "ingres", "factur")
EXPENSE_KEYWORDS = ("gasto", "compr", "cost", "egreso")
DATE_COLUMN_CANDIDATES = ("Fecha", "fecha", "Date", "date", "Periodo", "periodo")
ISO_DATE_PATTERN = r"\d{4}-\d{1,2}-\d{1,2}"

MESSAGE_REQUIRED_MISSING = "Campo requerido vacío"
MESSAGE_INVALID_NUMBER = "Monto inválido (no numérico o no finito)"
MESSAGE_OUTLIER = "Posible outlier por magnitud absoluta"
MESSAGE_DUPLICATE = "Posible duplicado (mismos campos clave)"
MESSAGE_REVENUE_SIGN = "Monto negativo inesperado para tipo 'Ingresos/Ventas'"
MESSAGE_EXPENSE_SIGN = "Monto positivo inesperado para tipo 'Gastos/Compras'"
MESSAGE_IQR_ANOMALY = "Anomalía respecto a distribución histórica de la empresa (IQR)"
MESSAGE_ZSCORE_ANOMALY = "Anomalía mensual por empresa (z-score > {threshold:g})"

SUPPORTED_CSV_EXTENSIONS = (".csv", ".txt", ".tsv")
CSV_DELIMITER_CANDIDATES = ",;\t|"
CSV_SNIFF_SAMPLE_SIZE = 8192
ISSUES_CSV_HEADER = ("originalIndex", "column", "severity", "message")
