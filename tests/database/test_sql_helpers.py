from __future__ import annotations

from datetime import time, timedelta

from src.class_attendance.class_attendance.database.bootstrap import _strip_create_db_and_use, iter_sql_statements
from src.class_attendance.class_attendance.database.mysql_base import chunked, escape_like, in_clause, normalize_mysql_time


def test_iter_sql_statements_splits_outside_quotes_and_comments():
    sql = """
    -- roster; demo
    INSERT INTO t VALUES ('a;b');
    INSERT INTO t VALUES ("c");
    SELECT 1
    """

    assert list(iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        'INSERT INTO t VALUES ("c")',
        "SELECT 1",
    ]


def test_strip_create_db_and_use():
    sql = "CREATE DATABASE IF NOT EXISTS x;\nUSE x;\nCREATE TABLE t (id INT);\n"

    assert list(iter_sql_statements(_strip_create_db_and_use(sql))) == ["CREATE TABLE t (id INT)"]


def test_normalize_mysql_time_variants():
    assert normalize_mysql_time(None) is None
    assert normalize_mysql_time(time(8, 0)) == time(8, 0)
    assert normalize_mysql_time(timedelta(hours=15, minutes=30)) == time(15, 30)
    assert normalize_mysql_time("11:00:00") == time(11, 0)


def test_like_and_in_helpers():
    assert escape_like("100%_done") == "100\\%\\_done"
    assert in_clause([1, 2, 3]) == "%s, %s, %s"
    assert [list(c) for c in chunked([1, 2, 3, 4, 5], 2)] == [[1, 2], [3, 4], [5]]
