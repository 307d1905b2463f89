import random
import string
from datetime import date
from decimal import Decimal, ROUND_FLOOR

from pydantic import BaseModel, Field

VARCHAR_LENGTH = 20


def random_string(size: int) -> str:
    return "".join(random.choice(string.ascii_lowercase) for _ in range(size))


def random_int(max_value: int) -> int:
    """Random integer in ``[0, max_value)``."""
    return random.randrange(max_value)


def random_decimal(max_value: int, scale: int) -> Decimal:
    value = Decimal(random.randrange(max_value) + random.random())
    return value.quantize(Decimal(1).scaleb(-scale), rounding=ROUND_FLOOR)


class DbEntry(BaseModel):
    """
    A row of the benchmark table.
    """

    id: int | None = Field(default=None, description="Primary key, assigned by the database.")
    varchar_field: str = Field(max_length=VARCHAR_LENGTH)
    int_field: int
    decimal_field: Decimal = Field(max_digits=9, decimal_places=2)
    date_field: date

    @classmethod
    def random(cls) -> "DbEntry":
        return cls(
            varchar_field=random_string(VARCHAR_LENGTH),
            int_field=random_int(100000),
            decimal_field=random_decimal(100000, 2),
            date_field=date.today(),
        )

    def as_row(self) -> tuple:
        """Values in insert column order."""
        return self.varchar_field, self.int_field, self.decimal_field, self.date_field
