"""
SQL statements of the benchmark table, built from pglast AST nodes.

The statements use PostgreSQL positional parameters (``$1``, ``$2``...).
"""

from pglast import ast
from pglast.enums import A_Expr_Kind
from pglast.stream import RawStream

TABLE_NAME = "test_table"
COLUMN_PK_NAME = "id"
COLUMN_VARCHAR_NAME = "test_column_varchar"
COLUMN_INT_NAME = "test_column_int"
COLUMN_DECIMAL_NAME = "test_column_decimal"
COLUMN_DATE_NAME = "test_column_date"

DATA_COLUMNS = (COLUMN_VARCHAR_NAME, COLUMN_INT_NAME, COLUMN_DECIMAL_NAME, COLUMN_DATE_NAME)
ALL_COLUMNS = (COLUMN_PK_NAME,) + DATA_COLUMNS


def _column(name: str) -> ast.ColumnRef:
    return ast.ColumnRef(fields=[ast.String(sval=name)])


def _table() -> ast.RangeVar:
    return ast.RangeVar(relname=TABLE_NAME, inh=True)


def insert_sql() -> str:
    """INSERT of one row into the data columns."""
    insert_stmt = ast.InsertStmt(
        relation=_table(),
        cols=[ast.ResTarget(name=col) for col in DATA_COLUMNS],
        selectStmt=ast.SelectStmt(
            valuesLists=[tuple(ast.ParamRef(number=i + 1) for i in range(len(DATA_COLUMNS)))]
        ),
    )
    return RawStream()(insert_stmt)


def select_by_pk_sql() -> str:
    """SELECT of all columns of the row with the given primary key."""
    select_stmt = ast.SelectStmt(
        targetList=[ast.ResTarget(val=_column(col)) for col in ALL_COLUMNS],
        fromClause=[_table()],
        whereClause=ast.A_Expr(
            kind=A_Expr_Kind.AEXPR_OP,
            name=[ast.String(sval="=")],
            lexpr=_column(COLUMN_PK_NAME),
            rexpr=ast.ParamRef(number=1),
        ),
    )
    return RawStream()(select_stmt)


def max_pk_sql() -> str:
    select_stmt = ast.SelectStmt(
        targetList=[
            ast.ResTarget(
                val=ast.FuncCall(funcname=[ast.String(sval="max")], args=[_column(COLUMN_PK_NAME)])
            )
        ],
        fromClause=[_table()],
    )
    return RawStream()(select_stmt)
