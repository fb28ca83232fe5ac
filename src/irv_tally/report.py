"""
Round report text. One report is printed per round while the election runs.
"""
from typing import List, Optional, Union

import decimal

from irv_tally.package_types import Tally

SEPARATOR = "-----"


def get_plural(count: Optional[Union[int, float, decimal.Decimal]]) -> str:
    """
    Returns the pluralization for a given count.
    The range [1, 2) is treated as non-plural.
    """
    return "" if count is not None and 1 <= count < 2 else "s"


def get_count_report(counts: Tally, candidates: List[str]) -> str:
    """
    Vote count lines, highest count first. Equal counts keep the candidate order.
    Candidates without a count are shown with 0 votes.

    :param counts: The vote count per candidate
    :type counts: Dict[str, decimal.Decimal]
    :param candidates: The candidates to report on
    :type candidates: List[str]
    :rtype: str
    """
    lines = []
    for c in sorted(candidates, key=lambda c: counts.get(c, 0), reverse=True):
        count = counts.get(c)
        lines.append(f"{c}: {int(count) if count is not None else 0} vote{get_plural(count)}")
    return "\n".join(lines)


def election_report(counts: Tally, winner: Optional[str], candidates: List[str], eliminated: Optional[str] = None) -> str:
    """
    Generates a round report string.

    :param counts: The vote count per candidate
    :type counts: Dict[str, decimal.Decimal]
    :param winner: The winner, if one exists
    :type winner: Optional[str]
    :param candidates: The candidates in the round
    :type candidates: List[str]
    :param eliminated: The candidate eliminated this round, used when there is no winner
    :type eliminated: Optional[str]
    :return: The report
    :rtype: str
    """
    if winner is None:
        result = f"{eliminated} eliminated\n\n"
    else:
        result = f"{winner} won!"

    return f"{get_count_report(counts, candidates)}\n{SEPARATOR}\n{result}"
