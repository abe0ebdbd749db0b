"""
In-memory PEP 249 module speaking the MariaDB subset used by the benchmark batches.

Supported statements: `UPDATE world SET randomnumber = x WHERE id = y`,
`SET @var = expr` (expr: literals, placeholders, session variables joined by `^`),
`SELECT ROW_COUNT()` and `SELECT @a, @b, ...`. A call to execute() may hold several
statements separated by ';', each statement produces one result, walked with nextset().
"""
import re

apilevel = "2.0"
threadsafety = 1
paramstyle = "format"

UNREACHABLE_HOST = "unreachable.invalid"
DATABASE = "Fortunes"


class Error(Exception):

    def __init__(self, msg=None, errno=None, sqlstate=None):
        super(Error, self).__init__(msg)
        self.msg = msg
        self.errno = errno
        self.sqlstate = sqlstate


class InterfaceError(Error):
    pass


class DatabaseError(Error):
    pass


class OperationalError(DatabaseError):
    pass


class ProgrammingError(DatabaseError):
    pass


class Server:
    """Shared state of every connection: the `world` table."""

    def __init__(self, rows=10000):
        self.world = {}
        self.reset(rows)

    def reset(self, rows=10000):
        self.world = {i: i for i in range(1, rows + 1)}


server = Server()
connections = []

UPDATE_RE = re.compile(r"^UPDATE\s+world\s+SET\s+randomnumber\s*=\s*(%s|-?\d+)\s+WHERE\s+id\s*=\s*(%s|-?\d+)$",
                       re.IGNORECASE)
SET_RE = re.compile(r"^SET\s+@(\w+)\s*=\s*(.+)$", re.IGNORECASE)
ROW_COUNT_RE = re.compile(r"^SELECT\s+ROW_COUNT\(\s*\)$", re.IGNORECASE)
SELECT_VARS_RE = re.compile(r"^SELECT\s+(@\w+(?:\s*,\s*@\w+)*)$", re.IGNORECASE)


def connect(host="localhost", port=3306, database=None, user=None, password=None, autocommit=False,
            fail_after=None):
    if host == UNREACHABLE_HOST:
        raise InterfaceError("Can't connect to MySQL server on '" + host + ":" + str(port) + "'", 2003, "HY000")
    if database is not None and database != DATABASE:
        raise ProgrammingError("Unknown database '" + database + "'", 1049, "42000")
    conn = FakeConnection(autocommit, fail_after)
    connections.append(conn)
    return conn


class FakeConnection:

    def __init__(self, autocommit, fail_after):
        self.autocommit = autocommit
        self.fail_after = fail_after
        self.variables = {}
        self.row_count = -1
        self.executed = []
        self.closed = False
        self.cursors = []

    def cursor(self):
        if self.closed:
            raise InterfaceError("Connection is closed", 2055, "HY000")
        cursor = FakeCursor(self)
        self.cursors.append(cursor)
        return cursor

    def commit(self):
        pass

    def rollback(self):
        pass

    def close(self):
        self.closed = True

    def run(self, sql, params):
        if self.fail_after is not None and len(self.executed) >= self.fail_after:
            raise OperationalError("Lost connection to server during query", 2013, "HY000")
        self.executed.append((sql, list(params)))

        values = iter(params)
        results = []
        for statement in sql.split(";"):
            statement = " ".join(statement.split())
            if statement:
                results.append(self.run_statement(statement, values))
        return results

    def bind(self, token, values):
        if token == "%s":
            try:
                return next(values)
            except StopIteration:
                raise ProgrammingError("Not enough parameters for the SQL statement", 1210, "HY000")
        return int(token)

    def evaluate(self, expression, values):
        result = 0
        first = True
        for term in expression.split("^"):
            term = term.strip()
            if term.startswith("@"):
                value = self.variables.get(term[1:])
            elif term == "%s" or re.match(r"^-?\d+$", term):
                value = self.bind(term, values)
            else:
                raise ProgrammingError("You have an error in your SQL syntax near '" + term + "'", 1064, "42000")
            if first:
                result = value
                first = False
            elif result is None or value is None:
                result = None
            else:
                result = int(result) ^ int(value)
        return result

    def run_statement(self, statement, values):
        match = UPDATE_RE.match(statement)
        if match:
            new_value = self.bind(match.group(1), values)
            row_id = self.bind(match.group(2), values)
            affected = 0
            if row_id in server.world:
                server.world[row_id] = new_value
                affected = 1
            self.row_count = affected
            return None, None, affected

        match = SET_RE.match(statement)
        if match:
            self.variables[match.group(1)] = self.evaluate(match.group(2), values)
            self.row_count = 0
            return None, None, 0

        if ROW_COUNT_RE.match(statement):
            rows = [(self.row_count,)]
            self.row_count = -1
            return (("ROW_COUNT()", 8, None, None, None, None, True),), rows, 1

        match = SELECT_VARS_RE.match(statement)
        if match:
            names = [name.strip() for name in match.group(1).split(",")]
            rows = [tuple(self.variables.get(name[1:]) for name in names)]
            self.row_count = -1
            return tuple((name, 8, None, None, None, None, True) for name in names), rows, 1

        raise ProgrammingError("You have an error in your SQL syntax near '" + statement + "'", 1064, "42000")


class FakeCursor:

    def __init__(self, connection):
        self.connection = connection
        self.closed = False
        self.results = []
        self.position = 0
        self.rows = None
        self.description = None
        self.rowcount = -1

    def execute(self, operation, params=None):
        if self.closed:
            raise ProgrammingError("Cursor is not connected", 2055, "HY000")
        self.results = self.connection.run(operation, params or [])
        self.position = 0
        self.load()

    def load(self):
        description, rows, rowcount = self.results[self.position]
        self.description = description
        self.rows = list(rows) if rows is not None else None
        self.rowcount = rowcount

    def fetchone(self):
        if self.rows is None:
            raise InterfaceError("No result set to fetch from", -1, "HY000")
        if not self.rows:
            return None
        return self.rows.pop(0)

    def fetchall(self):
        if self.rows is None:
            raise InterfaceError("No result set to fetch from", -1, "HY000")
        rows, self.rows = self.rows, []
        return rows

    def nextset(self):
        if self.position + 1 >= len(self.results):
            self.description = None
            self.rows = None
            self.rowcount = -1
            return None
        self.position += 1
        self.load()
        return True

    def close(self):
        self.closed = True


def reset():
    server.reset()
    del connections[:]
