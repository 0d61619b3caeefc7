"""Structural editing of tariff tables.

All functions are pure: they take the ``companies`` list (or a single table
dict) and return a new value, leaving the input untouched. Tables are dicts of
the form ``{"title": str, "columns": [str], "rows": [[str | number]]}``.

Row and column deletions never remove the last remaining row or column; in that
case the table is returned unchanged. Resizing is capped at MAX_ROWS x MAX_COLS.
"""
from copy import deepcopy
from typing import Any

from app.errors import NotFoundError, ValidationError

MAX_ROWS = 100
MAX_COLS = 20
DEFAULT_TABLE_TITLE = "New Table"

Table = dict[str, Any]
Companies = list[dict[str, Any]]


def default_header(index: int) -> str:
    return f"Column {index + 1}"


def new_table(title: str | None = None) -> Table:
    """A fresh 1x1 table, so no table is ever created empty."""
    title = (title or "").strip() or DEFAULT_TABLE_TITLE
    return {"title": title, "columns": [default_header(0)], "rows": [[""]]}


def _columns(table: Table) -> list[str]:
    return list(table.get("columns") or [])


def _rows(table: Table) -> list[list[Any]]:
    return [list(r) for r in (table.get("rows") or [])]


# ---------------------------------------------------------------------------
# Table-level operations
# ---------------------------------------------------------------------------


def add_row(table: Table) -> Table:
    columns = _columns(table)
    rows = _rows(table)
    rows.append(["" for _ in columns])
    return {**deepcopy(table), "columns": columns, "rows": rows}


def delete_row(table: Table, index: int | None = None) -> Table:
    """Delete row ``index`` (default: last row). Last remaining row is kept."""
    rows = _rows(table)
    if len(rows) <= 1:
        return deepcopy(table)
    idx = len(rows) - 1 if index is None else index
    if idx < 0 or idx >= len(rows):
        return deepcopy(table)
    del rows[idx]
    return {**deepcopy(table), "rows": rows}


def add_column(table: Table, header: str | None = None) -> Table:
    columns = _columns(table)
    header = (header or "").strip() or default_header(len(columns))
    columns.append(header)
    rows = [r + [""] for r in _rows(table)]
    return {**deepcopy(table), "columns": columns, "rows": rows}


def delete_column(table: Table, index: int) -> Table:
    """Delete column ``index`` from the header and every row. Last remaining column is kept."""
    columns = _columns(table)
    if len(columns) <= 1 or index < 0 or index >= len(columns):
        return deepcopy(table)
    del columns[index]
    rows = [[c for i, c in enumerate(r) if i != index] for r in _rows(table)]
    return {**deepcopy(table), "columns": columns, "rows": rows}


def resize(table: Table, rows: int, cols: int) -> Table:
    """Set row/column counts directly, truncating or padding with empty cells."""
    if rows < 1 or cols < 1:
        raise ValidationError("Please enter valid positive numbers for rows and columns")
    if rows > MAX_ROWS or cols > MAX_COLS:
        raise ValidationError(f"Maximum size allowed is {MAX_ROWS} rows × {MAX_COLS} columns")
    old_columns = _columns(table)
    old_rows = _rows(table)
    columns = [
        old_columns[i] if i < len(old_columns) and old_columns[i] else default_header(i)
        for i in range(cols)
    ]
    new_rows = []
    for ri in range(rows):
        src = old_rows[ri] if ri < len(old_rows) else []
        new_rows.append([src[ci] if ci < len(src) and src[ci] is not None else "" for ci in range(cols)])
    return {**deepcopy(table), "columns": columns, "rows": new_rows}


def set_cell(table: Table, row: int, col: int, value: Any) -> Table:
    rows = _rows(table)
    if row < 0 or row >= len(rows) or col < 0 or col >= len(rows[row]):
        raise NotFoundError("Cell not found")
    rows[row][col] = value
    return {**deepcopy(table), "rows": rows}


def set_header(table: Table, col: int, value: str) -> Table:
    columns = _columns(table)
    if col < 0 or col >= len(columns):
        raise NotFoundError("Column not found")
    columns[col] = value
    return {**deepcopy(table), "columns": columns}


def set_title(table: Table, title: str) -> Table:
    return {**deepcopy(table), "title": title}


def table_shape_errors(table: Table) -> list[str]:
    """Rows whose length differs from the column count."""
    width = len(_columns(table))
    errors = []
    for i, row in enumerate(table.get("rows") or []):
        if len(row) != width:
            errors.append(f"row {i} has {len(row)} cells, expected {width}")
    return errors


def validate_table_shape(table: Table, label: str | None = None) -> None:
    errors = table_shape_errors(table)
    if errors:
        prefix = label or f"table '{table.get('title', '')}'"
        raise ValidationError(
            f"Row length does not match column count in {prefix}",
            details=[f"{prefix}: {e}" for e in errors],
        )


def validate_companies(companies: Companies) -> None:
    details = []
    for ci, company in enumerate(companies):
        for ti, table in enumerate(company.get("tables") or []):
            label = f"company '{company.get('name', ci)}' table '{table.get('title', ti)}'"
            details.extend(f"{label}: {e}" for e in table_shape_errors(table))
    if details:
        raise ValidationError("Row length does not match column count", details=details)


# ---------------------------------------------------------------------------
# Company / table collection operations
# ---------------------------------------------------------------------------


def _check_company_index(companies: Companies, index: int) -> None:
    if index < 0 or index >= len(companies):
        raise NotFoundError("Company not found")


def _check_table_index(companies: Companies, company_index: int, table_index: int) -> None:
    _check_company_index(companies, company_index)
    tables = companies[company_index].get("tables") or []
    if table_index < 0 or table_index >= len(tables):
        raise NotFoundError("Table not found")


def _clean_company_name(companies: Companies, name: str, exclude: int | None = None) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Please enter a company name")
    for i, c in enumerate(companies):
        if i != exclude and (c.get("name") or "").lower() == name.lower():
            raise ValidationError("A company with this name already exists")
    return name


def add_company(companies: Companies, name: str) -> Companies:
    name = _clean_company_name(companies, name)
    return deepcopy(companies) + [{"name": name, "tables": []}]


def rename_company(companies: Companies, index: int, name: str) -> Companies:
    _check_company_index(companies, index)
    name = _clean_company_name(companies, name, exclude=index)
    result = deepcopy(companies)
    result[index]["name"] = name
    return result


def delete_company(companies: Companies, index: int) -> Companies:
    _check_company_index(companies, index)
    return [deepcopy(c) for i, c in enumerate(companies) if i != index]


def add_table(companies: Companies, company_index: int, title: str | None = None) -> Companies:
    _check_company_index(companies, company_index)
    result = deepcopy(companies)
    result[company_index].setdefault("tables", []).append(new_table(title))
    return result


def delete_table(companies: Companies, company_index: int, table_index: int) -> Companies:
    _check_table_index(companies, company_index, table_index)
    result = deepcopy(companies)
    del result[company_index]["tables"][table_index]
    return result


def get_table(companies: Companies, company_index: int, table_index: int) -> Table:
    _check_table_index(companies, company_index, table_index)
    return deepcopy(companies[company_index]["tables"][table_index])


def replace_table(companies: Companies, company_index: int, table_index: int, table: Table) -> Companies:
    _check_table_index(companies, company_index, table_index)
    result = deepcopy(companies)
    result[company_index]["tables"][table_index] = deepcopy(table)
    return result
