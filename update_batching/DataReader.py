from update_batching.util.ExceptionFactory import ExceptionFactory


class DataReader:
    """
    Forward-only reader over the result sets of an executed batch.

    Statements that do not return rows (UPDATE, SET) are skipped: the reader is
    always positioned on a result set that has columns, their affected row
    counts are summed in `records_affected`. Closing the reader drains the
    remaining results and closes the underlying cursor.
    """

    def __init__(self, cursor, exception_factory: ExceptionFactory):
        self.__cursor = cursor
        self.__exception_factory = exception_factory
        self.__closed = False
        self.__row = None
        self.__pending_rows = False
        self.__records_affected = -1
        try:
            self.__has_result = self.__position(cursor.description is not None)
        except Exception:
            cursor.close()
            raise

    def __count_affected(self) -> None:
        rowcount = self.__cursor.rowcount
        if rowcount is not None and rowcount >= 0:
            if self.__records_affected < 0:
                self.__records_affected = 0
            self.__records_affected += rowcount

    def __position(self, on_result: bool) -> bool:
        while not on_result:
            self.__count_affected()
            if not self.__cursor.nextset():
                self.__pending_rows = False
                return False
            on_result = self.__cursor.description is not None
        self.__pending_rows = True
        return True

    def read(self) -> bool:
        self.check_not_closed()
        if not self.__has_result or not self.__pending_rows:
            self.__row = None
            return False
        self.__row = self.__cursor.fetchone()
        if self.__row is None:
            self.__pending_rows = False
            return False
        return True

    def get_value(self, index: int):
        if self.__row is None:
            raise self.__exception_factory.create("No data is present, call read() first", "HY000")
        return self.__row[index]

    @property
    def field_count(self) -> int:
        if not self.__has_result:
            return 0
        return len(self.__cursor.description)

    @property
    def has_rows(self) -> bool:
        return self.__has_result

    @property
    def records_affected(self) -> int:
        return self.__records_affected

    def next_result(self) -> bool:
        self.check_not_closed()
        self.__row = None
        if not self.__has_result:
            return False
        if self.__pending_rows:
            self.__cursor.fetchall()
        if not self.__cursor.nextset():
            self.__has_result = False
            self.__pending_rows = False
            return False
        self.__has_result = self.__position(self.__cursor.description is not None)
        return self.__has_result

    def close(self) -> None:
        if not self.__closed:
            try:
                while self.next_result():
                    pass
            finally:
                self.__closed = True
                self.__row = None
                self.__cursor.close()

    def check_not_closed(self) -> None:
        if self.__closed:
            raise self.__exception_factory.create("Reader is closed", "HY000")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
