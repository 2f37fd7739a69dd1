import mysql.connector
import pytest
from mysql.connector import errorcode

from src.hr_payroll.hr_payroll.core.exceptions import ConcurrentModification, ValidationError
from src.hr_payroll.hr_payroll.database.mysql_base import db_cursor


class FakeCursor:
    def __init__(self, error=None):
        self._error = error
        self.closed = False

    def execute(self, sql, params=None):
        if self._error is not None:
            raise self._error

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = self.rolled_back = self.closed = False

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnFactory:
    def __init__(self, conn):
        self._conn = conn

    def connect(self):
        return self._conn


def _run(error):
    conn = FakeConnection(FakeCursor(error))
    with pytest.raises(Exception) as info:
        with db_cursor(FakeConnFactory(conn)) as (_, cur):
            cur.execute("INSERT INTO attendance VALUES (%s)", (1,))
    return conn, info.value


def test_duplicate_key_becomes_validation_error():
    conn, err = _run(mysql.connector.errors.IntegrityError(msg="Duplicate entry", errno=errorcode.ER_DUP_ENTRY))

    assert isinstance(err, ValidationError)
    assert conn.rolled_back and conn.closed and not conn.committed


def test_other_integrity_errors_propagate():
    conn, err = _run(mysql.connector.errors.IntegrityError(msg="fk", errno=errorcode.ER_NO_REFERENCED_ROW_2))

    assert isinstance(err, mysql.connector.errors.IntegrityError)
    assert conn.rolled_back


def test_lock_wait_timeout_is_concurrent_modification():
    conn, err = _run(mysql.connector.errors.DatabaseError(msg="lock wait", errno=errorcode.ER_LOCK_WAIT_TIMEOUT))

    assert isinstance(err, ConcurrentModification)
    assert conn.closed


def test_clean_block_commits():
    conn = FakeConnection(FakeCursor())
    with db_cursor(FakeConnFactory(conn)) as (_, cur):
        cur.execute("SELECT 1")

    assert conn.committed and conn.closed and cur.closed
