"""
Unit tests for dbbench.database.statements module.
Tests the SQL generated from pglast AST nodes.
"""

import pglast
from pglast import ast

from dbbench.database.statements import (
    ALL_COLUMNS,
    DATA_COLUMNS,
    TABLE_NAME,
    insert_sql,
    max_pk_sql,
    select_by_pk_sql,
)


class TestStatements:
    """Test the generated statements."""

    def test_insert_sql(self):
        sql = insert_sql()

        assert sql.startswith(f"INSERT INTO {TABLE_NAME}")
        for column in DATA_COLUMNS:
            assert column in sql
        assert "$4" in sql and "$5" not in sql

        stmt = pglast.parse_sql(sql)[0].stmt
        assert isinstance(stmt, ast.InsertStmt)
        assert [col.name for col in stmt.cols] == list(DATA_COLUMNS)

    def test_select_by_pk_sql(self):
        sql = select_by_pk_sql()

        assert sql.startswith("SELECT")
        assert f"FROM {TABLE_NAME}" in sql
        assert "id = $1" in sql

        stmt = pglast.parse_sql(sql)[0].stmt
        assert isinstance(stmt, ast.SelectStmt)
        assert len(stmt.targetList) == len(ALL_COLUMNS)

    def test_max_pk_sql(self):
        sql = max_pk_sql()

        assert "max(id)" in sql.lower()
        assert f"FROM {TABLE_NAME}" in sql
