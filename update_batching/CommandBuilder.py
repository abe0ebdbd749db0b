from enum import Enum
from random import Random

from update_batching.Command import Command
from update_batching.Parameter import ParameterDirection

ROWS_AFFECTED = "rowsAffected"
MAX_RANDOM = 10000


class ExecutionMode(Enum):
    MULTIPLE_READERS = "Multiple Readers"
    SINGLE_READER = "Single Reader"
    EXECUTE_SCALAR = "Execute Scalar"
    NON_QUERY_OUT = "NonQuery (Out param)"
    NON_QUERY_IN_OUT = "NonQuery (InOut param)"


ACCUMULATOR_MODES = (ExecutionMode.SINGLE_READER, ExecutionMode.EXECUTE_SCALAR, ExecutionMode.NON_QUERY_OUT,
                     ExecutionMode.NON_QUERY_IN_OUT)


def create_command(connection, mode: ExecutionMode, rnd: Random, pairs: int = 10) -> Command:
    """
    Build the batch of `pairs` UPDATE world statements for `mode`.

    Values and ids are drawn once from `rnd`, in [1, MAX_RANDOM], into parameters
    p0..p(2*pairs-1); callers reuse the command for every iteration. Accumulator
    modes XOR a doubling mask into @rowsAffected after each UPDATE whatever the
    row count was, so a complete batch always leaves 2**pairs - 1.
    """
    command = connection.create_command()

    if mode == ExecutionMode.NON_QUERY_OUT:
        command.add_parameter(ROWS_AFFECTED, ParameterDirection.OUTPUT)
    elif mode == ExecutionMode.NON_QUERY_IN_OUT:
        command.add_parameter(ROWS_AFFECTED, ParameterDirection.INPUT_OUTPUT, 0)

    lines = []
    if mode in (ExecutionMode.SINGLE_READER, ExecutionMode.EXECUTE_SCALAR, ExecutionMode.NON_QUERY_OUT):
        lines.append("SET @" + ROWS_AFFECTED + " = 0;")

    mask = 1
    for i in range(0, pairs * 2, 2):
        command.add_with_value("p" + str(i), rnd.randint(1, MAX_RANDOM))
        command.add_with_value("p" + str(i + 1), rnd.randint(1, MAX_RANDOM))

        lines.append("UPDATE world SET randomnumber = ? WHERE id = ?;")
        if mode == ExecutionMode.MULTIPLE_READERS:
            lines.append("SELECT ROW_COUNT();")
        else:
            lines.append("SET @" + ROWS_AFFECTED + " = @" + ROWS_AFFECTED + " ^ " + str(mask) + ";")
            mask = mask << 1

    if mode in (ExecutionMode.SINGLE_READER, ExecutionMode.EXECUTE_SCALAR):
        lines.append("SELECT @" + ROWS_AFFECTED + ";")

    command.text = "\n".join(lines) + "\n"
    return command
