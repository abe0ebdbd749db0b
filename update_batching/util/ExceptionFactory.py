class SQLError(Exception):
    """Exception related to operation with database."""

    def __init__(self, msg, sql_state=None, error_code=-1, cause=None):
        super(SQLError, self).__init__(msg)
        self.msg = msg
        self.sql_state = sql_state
        self.error_code = error_code
        self.cause = cause
        # message without the context prefix and query dump
        self.reason = msg


class SQLTimeoutException(SQLError):
    """Exception occurring when timeout occurs."""


class SQLFeatureNotSupportedException(SQLError):
    """Feature is not supported"""


class SQLSyntaxErrorException(SQLError):
    """SQL syntax not supported"""


class SQLInvalidAuthorizationSpecException(SQLError):
    """SQL invalid"""


class SQLIntegrityConstraintViolationException(SQLError):
    """Constraint violation"""


class SQLNonTransientConnectionException(SQLError):
    """Connection error"""


class SQLTransientConnectionException(SQLError):
    """Connection error"""


SQL_STATE_CLASSES = {
    "0A": SQLFeatureNotSupportedException,
    "22": SQLSyntaxErrorException,
    "26": SQLSyntaxErrorException,
    "2F": SQLSyntaxErrorException,
    "20": SQLSyntaxErrorException,
    "42": SQLSyntaxErrorException,
    "XA": SQLSyntaxErrorException,
    "25": SQLInvalidAuthorizationSpecException,
    "28": SQLInvalidAuthorizationSpecException,
    "21": SQLIntegrityConstraintViolationException,
    "23": SQLIntegrityConstraintViolationException,
    "08": SQLNonTransientConnectionException,
    "HY": SQLError
}


class ExceptionFactory:
    """
    Builds exceptions carrying the benchmark context they were raised in.

    A factory is immutable, `of_case`, `at_iteration` and `with_sql` return
    derived factories.
    """

    def __init__(self, conf, case_name=None, iteration=None, sql=None):
        self.__conf = conf
        self.__case_name = case_name
        self.__iteration = iteration
        self.__sql = sql

    @staticmethod
    def build_msg_text(initial_message, case_name, iteration, conf, sql):

        msg = ""
        if case_name is not None:
            msg += "(case=" + case_name
            if iteration is not None:
                msg += ", iteration=" + str(iteration)
            msg += ") "

        msg += initial_message

        if conf.get('dump_queries_on_exception') and sql is not None:
            max_size = conf.get('max_query_size_to_log', 1024)
            if max_size != 0 and len(sql) > max_size - 3:
                msg += "\nQuery is: " + sql[0:max_size - 3] + "..."
            else:
                msg += "\nQuery is: " + sql

        return msg

    @property
    def case_name(self):
        return self.__case_name

    @property
    def iteration(self):
        return self.__iteration

    @property
    def sql(self):
        return self.__sql

    def of_case(self, case_name):
        return ExceptionFactory(self.__conf, case_name)

    def at_iteration(self, iteration):
        return ExceptionFactory(self.__conf, self.__case_name, iteration, self.__sql)

    def with_sql(self, sql):
        return ExceptionFactory(self.__conf, self.__case_name, self.__iteration, sql)

    def _create_exception(self, initial_message, sql_state="42000", error_code=-1, cause=None):
        msg = ExceptionFactory.build_msg_text(initial_message, self.__case_name, self.__iteration, self.__conf,
                                              self.__sql)

        if "70100" == sql_state:
            # ER_QUERY_INTERRUPTED
            exception_class = SQLTimeoutException
        else:
            sql_class = "42" if sql_state is None else sql_state[0:2]
            exception_class = SQL_STATE_CLASSES.get(sql_class, SQLTransientConnectionException)
        exception = exception_class(msg, sql_state, error_code, cause)
        exception.reason = initial_message
        return exception

    def not_supported(self, message):
        return self._create_exception(message, "0A000")

    def create(self, message, sql_state="42000", error_code=-1, cause=None):
        return self._create_exception(message, sql_state, error_code, cause)

    def wrap(self, err, sql_state=None):
        """
        Convert an error raised by the database module (or an already built SQLError)
        to an exception of this factory's context.

        mysql.connector errors expose the server diagnostic as `msg`, `sqlstate` and `errno`,
        a missing SQLSTATE falls back to HY000.
        """
        if isinstance(err, SQLError):
            message = err.reason
            state = sql_state or err.sql_state
            error_code = err.error_code
        else:
            message = getattr(err, "msg", None) or str(err) or type(err).__name__
            state = sql_state or getattr(err, "sqlstate", None) or "HY000"
            error_code = getattr(err, "errno", None)
            if error_code is None:
                error_code = -1
        return self._create_exception(message, state, error_code, err)
