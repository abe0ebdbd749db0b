from update_batching.BenchmarkDriver import BenchmarkDriver, BenchmarkResult, print_results
from update_batching.Command import Command
from update_batching.CommandBuilder import ExecutionMode, create_command
from update_batching.Configuration import default_conf
from update_batching.Connection import Connection
from update_batching.DataReader import DataReader
from update_batching.Parameter import Parameter, ParameterDirection
from update_batching.Stopwatch import Stopwatch
from update_batching.util.ExceptionFactory import SQLError

__version__ = "1.0.0"


def connect(**arg) -> Connection:
    return Connection.open(default_conf(arg))
