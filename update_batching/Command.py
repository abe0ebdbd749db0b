import logging

from update_batching.DataReader import DataReader
from update_batching.Parameter import Parameter, ParameterDirection
from update_batching.util.ClientParser import parameter_parts


class Command:
    """
    A SQL batch bound to a connection, executed as a reader, a scalar or a non-query.

    The text uses '?' placeholders bound to the INPUT and INPUT_OUTPUT parameters of
    `parameters`, in declaration order. Output parameters map to session variables:
    an INPUT_OUTPUT parameter `name` prefixes the batch with `SET @name = ?;`, and
    every output parameter is read back by a trailing `SELECT @name, ...;`.
    """
    logger = logging.getLogger(__name__)

    def __init__(self, connection, text: str = ""):
        self.__connection = connection
        self.__closed = False
        self.__prepared_text = None
        self.__sql = None
        self.__statement_count = 0
        self.text = text
        self.parameters = []

    def add_with_value(self, name: str, value) -> Parameter:
        parameter = Parameter(name, value)
        self.parameters.append(parameter)
        return parameter

    def add_parameter(self, name: str, direction: ParameterDirection = ParameterDirection.INPUT,
                      value=None) -> Parameter:
        parameter = Parameter(name, value, direction)
        self.parameters.append(parameter)
        return parameter

    @property
    def connection(self):
        return self.__connection

    @property
    def sql(self) -> str:
        """Text sent to the server, in the driver's paramstyle."""
        self.__prepare()
        return self.__sql

    @property
    def statement_count(self) -> int:
        self.__prepare()
        return self.__statement_count

    def __output_parameters(self) -> list:
        return [p for p in self.parameters if p.is_output]

    def __prepare(self) -> None:
        if self.__prepared_text is not None and self.__prepared_text == self.text:
            return
        exception_factory = self.__connection.exception_factory.with_sql(self.text)

        input_count = sum(1 for p in self.parameters if p.direction == ParameterDirection.INPUT)
        no_backslash_escapes = self.__connection.no_backslash_escapes
        parser = parameter_parts(self.text, no_backslash_escapes)
        if input_count < parser.param_count:
            raise exception_factory.create('some parameters are not set', "07001")
        if input_count > parser.param_count:
            raise exception_factory.create(
                "command text has " + str(parser.param_count) + " placeholders for " + str(input_count)
                + " parameters", "07001")

        batch = ""
        for parameter in self.parameters:
            if parameter.direction == ParameterDirection.INPUT_OUTPUT:
                batch += "SET @" + parameter.name + " = ?;\n"
        batch += self.text
        output_parameters = self.__output_parameters()
        if output_parameters:
            if not batch.endswith("\n"):
                batch += "\n"
            batch += "SELECT " + ", ".join("@" + p.name for p in output_parameters) + ";\n"

        full_parser = parameter_parts(batch, no_backslash_escapes)
        try:
            self.__sql = full_parser.render(self.__connection.paramstyle)
        except ValueError as err:
            raise exception_factory.not_supported(str(err)) from err
        self.__statement_count = full_parser.statement_count
        self.__prepared_text = self.text
        self.logger.debug("prepared batch of %d statements, %d parameters", self.__statement_count,
                          full_parser.param_count)

    def __bind_values(self) -> list:
        values = [p.value for p in self.parameters if p.direction == ParameterDirection.INPUT_OUTPUT]
        values.extend(p.value for p in self.parameters if p.direction == ParameterDirection.INPUT)
        return values

    def __execute(self):
        self.check_not_closed()
        self.__prepare()
        cursor = self.__connection.cursor()
        try:
            cursor.execute(self.__sql, self.__bind_values())
        except Exception:
            cursor.close()
            raise
        return cursor

    def __check_no_output(self, method: str) -> None:
        if self.__output_parameters():
            raise self.__connection.exception_factory.not_supported(
                "output parameters are only read back by execute_non_query(), not " + method + "()")

    def execute_reader(self) -> DataReader:
        self.__check_no_output("execute_reader")
        return DataReader(self.__execute(), self.__connection.exception_factory)

    def execute_scalar(self):
        """Return the first column of the first row of the first result set, None if there is none."""
        self.__check_no_output("execute_scalar")
        with DataReader(self.__execute(), self.__connection.exception_factory) as reader:
            if reader.read():
                return reader.get_value(0)
            return None

    def execute_non_query(self) -> int:
        """
        Execute the batch without exposing any result set.

        Returns the number of affected rows (-1 if no statement reported one). Output
        parameters get the values of the last result set, the one appended by `sql`.
        """
        output_parameters = self.__output_parameters()
        last_row = None
        with DataReader(self.__execute(), self.__connection.exception_factory) as reader:
            while reader.has_rows:
                while reader.read():
                    last_row = tuple(reader.get_value(i) for i in range(len(output_parameters)))
                reader.next_result()
            records_affected = reader.records_affected

        if output_parameters:
            if last_row is None:
                raise self.__connection.exception_factory.with_sql(self.__sql).create(
                    "output parameters were not returned", "HY000")
            for parameter, value in zip(output_parameters, last_row):
                parameter.value = value
        return records_affected

    def close(self) -> None:
        self.__closed = True

    @property
    def closed(self) -> bool:
        return self.__closed

    def check_not_closed(self) -> None:
        if self.__closed:
            raise self.__connection.exception_factory.create("Command is closed", "HY000")
        self.__connection.check_not_closed()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
