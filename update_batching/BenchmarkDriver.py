import logging
import sys
from random import Random

from update_batching import CommandBuilder
from update_batching.CommandBuilder import ExecutionMode
from update_batching.Configuration import default_conf
from update_batching.Connection import Connection
from update_batching.Stopwatch import Stopwatch
from update_batching.util.ExceptionFactory import ExceptionFactory


class BenchmarkResult:

    __slots__ = ('name', 'total', 'iterations', 'observations')

    def __init__(self, name: str, total: int, iterations: int, observations=None):
        self.name = name
        self.total = total
        self.iterations = iterations
        self.observations = observations

    @property
    def average(self) -> float:
        return self.total / self.iterations


def print_results(name: str, total: int, iterations: int, out=None) -> None:
    if out is None:
        out = sys.stdout
    print(file=out)
    print("-- " + name + " --", file=out)
    print("Total ticks: " + str(total), file=out)
    print("Average ticks: " + str(total / iterations), file=out)


# Each function runs one timed execution and returns what it observed. The
# stopwatch brackets the execution call and the draining of its results, row
# counts are only collected when observations are recorded.

def _multiple_readers(command, sw: Stopwatch, record: bool):
    row_counts = [] if record else None
    sw.start()
    with command.execute_reader() as reader:
        while True:
            if reader.read() and record:
                row_counts.append(reader.get_value(0))
            if not reader.next_result():
                break
    sw.stop()
    return row_counts


def _single_reader(command, sw: Stopwatch, record: bool):
    value = None
    sw.start()
    with command.execute_reader() as reader:
        if reader.read():
            value = reader.get_value(0)
    sw.stop()
    return value


def _execute_scalar(command, sw: Stopwatch, record: bool):
    sw.start()
    value = command.execute_scalar()
    sw.stop()
    return value


def _execute_non_query(command, sw: Stopwatch, record: bool):
    sw.start()
    command.execute_non_query()
    sw.stop()
    return command.parameters[0].value


def _execute_non_query_in_out(command, sw: Stopwatch, record: bool):
    sw.start()
    command.parameters[0].value = 0
    command.execute_non_query()
    sw.stop()
    return command.parameters[0].value


EXECUTORS = {
    ExecutionMode.MULTIPLE_READERS: _multiple_readers,
    ExecutionMode.SINGLE_READER: _single_reader,
    ExecutionMode.EXECUTE_SCALAR: _execute_scalar,
    ExecutionMode.NON_QUERY_OUT: _execute_non_query,
    ExecutionMode.NON_QUERY_IN_OUT: _execute_non_query_in_out,
}


class BenchmarkDriver:
    """
    Runs the five batching strategies one after the other, each on its own
    connection, and prints the total and average ticks of every case.

    Any failure aborts the run: it is raised as a SQLError whose message names
    the case and the iteration, the database module's exception is kept as cause.
    """
    logger = logging.getLogger(__name__)

    def __init__(self, conf=None, rnd: Random = None):
        self.conf = default_conf(conf)
        if self.conf.get("iterations") <= 0:
            raise ValueError("iterations must be > 0, got " + str(self.conf.get("iterations")))
        if self.conf.get("pairs") <= 0:
            raise ValueError("pairs must be > 0, got " + str(self.conf.get("pairs")))
        self.random = rnd if rnd is not None else Random(self.conf.get("seed"))
        self.exception_factory = ExceptionFactory(self.conf)

    def run(self, mode: ExecutionMode) -> BenchmarkResult:
        conf = self.conf
        iterations = conf.get("iterations")
        record = conf.get("record_observations")
        exception_factory = self.exception_factory.of_case(mode.value)
        execute = EXECUTORS[mode]
        observations = [] if record else None
        total = 0

        self.logger.info("running '%s' for %d iterations", mode.value, iterations)
        with Connection.open(conf, exception_factory) as connection:
            with CommandBuilder.create_command(connection, mode, self.random, conf.get("pairs")) as command:
                try:
                    sql = command.sql
                except Exception as err:
                    raise exception_factory.with_sql(command.text).wrap(err) from err
                self.logger.debug("'%s' batch has %d statements:\n%s", mode.value, command.statement_count, sql)

                sw = Stopwatch(conf.get("clock"))

                for i in range(iterations):
                    try:
                        observation = execute(command, sw, record)
                    except Exception as err:
                        self.logger.debug("'%s' failed at iteration %d", mode.value, i, exc_info=True)
                        raise exception_factory.at_iteration(i).with_sql(sql).wrap(err) from err

                    total += sw.elapsed_ticks

                    sw.reset()

                    if record:
                        observations.append(observation)

                print_results(mode.value, total, iterations, conf.get("out"))

        result = BenchmarkResult(mode.value, total, iterations, observations)
        self.logger.info("'%s' done, average %.1f ticks", mode.value, result.average)
        return result

    def batching_multiple_readers(self) -> BenchmarkResult:
        return self.run(ExecutionMode.MULTIPLE_READERS)

    def batching_single_reader(self) -> BenchmarkResult:
        return self.run(ExecutionMode.SINGLE_READER)

    def batching_execute_scalar(self) -> BenchmarkResult:
        return self.run(ExecutionMode.EXECUTE_SCALAR)

    def batching_execute_non_query(self) -> BenchmarkResult:
        return self.run(ExecutionMode.NON_QUERY_OUT)

    def batching_execute_non_query_in_out(self) -> BenchmarkResult:
        return self.run(ExecutionMode.NON_QUERY_IN_OUT)

    def run_all(self) -> list:
        return [
            self.batching_multiple_readers(),
            self.batching_single_reader(),
            self.batching_execute_scalar(),
            self.batching_execute_non_query(),
            self.batching_execute_non_query_in_out(),
        ]
