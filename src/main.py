import sys
import logging
from typing import List, Optional

from errors import LedgerError
from payments_engine import PaymentsEngine
from report import snapshot_to_table

logger = logging.getLogger(__name__)

SAMPLE_INPUT = """
    type, client, tx, amount
    deposit, 1, 1, 1.0
    deposit, 2, 2, 2.0
    deposit, 1, 3, 2.0
    withdrawal, 1, 4, 1.5
    withdrawal, 2, 5, 3.0
"""


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(
        level=logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    args = sys.argv[1:] if argv is None else argv
    if len(args) > 1:
        print("Usage: payments-ledger [input.csv]", file=sys.stderr)
        return 1

    engine = PaymentsEngine()
    try:
        if args:
            accounts = engine.process_file(args[0])
        else:
            # No input given: run the bundled sample stream
            accounts = engine.process_text(SAMPLE_INPUT)
    except LedgerError as e:
        logger.error(str(e))
        return 1
    except OSError as e:
        logger.error(f"Cannot read {args[0]}: {e}")
        return 1

    print(snapshot_to_table(accounts))
    return 0


if __name__ == "__main__":
    sys.exit(main())
