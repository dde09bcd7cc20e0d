import sys
import os
from decimal import Decimal

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from models import ClientAccount
from report import format_decimal, snapshot_to_table


class TestFormatDecimal:
    def test_strips_trailing_zeros(self):
        assert format_decimal(Decimal("1.5000")) == "1.5"
        assert format_decimal(Decimal("2.0124")) == "2.0124"

    def test_integers_without_exponent(self):
        assert format_decimal(Decimal("100.0000")) == "100"
        assert format_decimal(Decimal("0.0000")) == "0"

    def test_negative(self):
        assert format_decimal(Decimal("-0.5")) == "-0.5"


class TestSnapshotToTable:
    def test_empty(self):
        assert snapshot_to_table({}) == "client,available,held,total,locked"

    def test_rows_sorted_by_client(self):
        accounts = {
            2: ClientAccount(client_id=2, available=Decimal("2.0"), total=Decimal("2.0")),
            1: ClientAccount(
                client_id=1,
                available=Decimal("0.5"),
                held=Decimal("1.0"),
                total=Decimal("1.5"),
                locked=True,
            ),
        }

        assert snapshot_to_table(accounts) == "\n".join([
            "client,available,held,total,locked",
            "1,0.5,1,1.5,true",
            "2,2,0,2,false",
        ])
