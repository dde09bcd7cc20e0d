from decimal import Decimal
from typing import Dict

from models import ClientAccount

HEADER = "client,available,held,total,locked"


def format_decimal(value: Decimal) -> str:
    """Format decimal with up to 4 decimal places, removing trailing zeros."""
    normalized = value.normalize()
    return f"{normalized:f}"


def snapshot_to_table(accounts: Dict[int, ClientAccount]) -> str:
    """Render accounts as CSV text, one row per client ordered by client id."""
    rows = [HEADER]
    for client_id in sorted(accounts.keys()):
        account = accounts[client_id]
        rows.append(
            f"{client_id},"
            f"{format_decimal(account.available)},"
            f"{format_decimal(account.held)},"
            f"{format_decimal(account.total)},"
            f"{str(account.locked).lower()}"
        )
    return "\n".join(rows)
