import pytest


SAMPLE_REPORT = """\
-----------------------------------------------------------------------------------------
 Pair | Player Name                     |Total|Round|Round|Round|
 Num  | USCF ID / Rtg (Pre->Post)       | Pts |  1  |  2  |  3  |
-----------------------------------------------------------------------------------------
    1 | GARY HUA                        |2.5  |W   2|D   3|W   4|
   ON | 15445895 / R: 1794   ->1817     |N:2  |W    |B    |W    |
-----------------------------------------------------------------------------------------
    2 | DAKSHESH DARURI                 |1.5  |L   1|W   4|H    |
   MI | 14598900 / R: 1553   ->1663     |N:2  |B    |W    |     |
-----------------------------------------------------------------------------------------
    3 | ADITYA BAJAJ                    |2.5  |B    |D   1|X    |
   MI | 14959604 / R: 1384   ->1640     |N:2  |     |W    |     |
-----------------------------------------------------------------------------------------
    4 | PATRICK H SCHILLING             |0.0  |U    |L   2|L   1|
   MI |          / R: UNR   ->          |     |     |B    |B    |
-----------------------------------------------------------------------------------------
"""


@pytest.fixture
def sample_report() -> str:
    return SAMPLE_REPORT
