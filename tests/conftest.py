from __future__ import annotations

import pytest

from sankeysync.core.records import Record, make_records

# bedrooms/parking cascade table:
#   idx  bedrooms  parking
#   0    2         0
#   1    2         1
#   2    3         0
#   3    3         2
#   4    4         1
HOUSES = [
    {"bedrooms": 2, "parking": 0, "area": 3000, "price": 3_500_000},
    {"bedrooms": 2, "parking": 1, "area": 3200, "price": 3_900_000},
    {"bedrooms": 3, "parking": 0, "area": 4100, "price": 4_800_000},
    {"bedrooms": 3, "parking": 2, "area": 5000, "price": 6_100_000},
    {"bedrooms": 4, "parking": 1, "area": 6200, "price": 7_400_000},
]


@pytest.fixture
def houses() -> list[Record]:
    return make_records(HOUSES)
