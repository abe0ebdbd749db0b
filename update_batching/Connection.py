import logging

from update_batching.Command import Command
from update_batching.Configuration import connect_kwargs, resolve_driver
from update_batching.util.ExceptionFactory import ExceptionFactory


class Connection:
    """A PEP 249 connection plus the factory for the commands it runs."""
    logger = logging.getLogger(__name__)

    def __init__(self, conf, driver, raw_connection, exception_factory: ExceptionFactory):
        self.conf = conf
        self.__driver = driver
        self.__raw = raw_connection
        self.__exception_factory = exception_factory
        self.__closed = False

    @staticmethod
    def open(conf, exception_factory: ExceptionFactory = None):
        if exception_factory is None:
            exception_factory = ExceptionFactory(conf)
        driver = resolve_driver(conf)
        kwargs = connect_kwargs(conf)
        Connection.logger.debug("connecting to %s:%s/%s using %s", conf.get("host"), conf.get("port"),
                                conf.get("database"), driver.__name__)
        try:
            raw_connection = driver.connect(**kwargs)
        except Exception as err:
            raise exception_factory.wrap(err, "08001") from err
        return Connection(conf, driver, raw_connection, exception_factory)

    def cursor(self):
        self.check_not_closed()
        return self.__raw.cursor()

    def create_command(self, text: str = "") -> Command:
        self.check_not_closed()
        return Command(self, text)

    @property
    def paramstyle(self) -> str:
        return getattr(self.__driver, "paramstyle", "qmark")

    @property
    def no_backslash_escapes(self) -> bool:
        """True when the server runs with sql_mode NO_BACKSLASH_ESCAPES."""
        return bool(self.conf.get("no_backslash_escapes"))

    @property
    def exception_factory(self) -> ExceptionFactory:
        return self.__exception_factory

    @property
    def raw(self):
        return self.__raw

    def close(self) -> None:
        if not self.__closed:
            self.__closed = True
            self.logger.debug("closing connection to %s:%s", self.conf.get("host"), self.conf.get("port"))
            self.__raw.close()

    def check_not_closed(self) -> None:
        if self.__closed:
            raise self.__exception_factory.create("Connection is closed", "08000", 1220)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
