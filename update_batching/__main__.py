import logging
import sys

from update_batching.BenchmarkDriver import BenchmarkDriver
from update_batching.util.ExceptionFactory import SQLError

logger = logging.getLogger("update_batching")


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s",
                        stream=sys.stderr)
    try:
        BenchmarkDriver().run_all()
    except SQLError as err:
        logger.error("benchmark aborted: %s", err)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
