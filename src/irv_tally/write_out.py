"""
Round by round output, as a table or as a json-ready dictionary.
"""
from typing import Dict, List, Optional

import decimal
import json
import logging
import pathlib

import pandas as pd

from irv_tally.package_types import Path
from irv_tally.tabulation import ElectionResult

_log = logging.getLogger(__name__)

NAN = float("nan")


def decimal2float(stat, round_places: Optional[int] = 3):
    """Convert decimal objects used internally into float for reporting.

    Args:
        stat (any): Any value.
        round_places (int, optional): Places to round to. None leaves the float unrounded.

    Returns:
        any type not Decimal: If the stat passed is type Decimal, it is converted to float.
    """
    if isinstance(stat, decimal.Decimal):
        if round_places is None:
            return float(stat)
        return round(float(stat), round_places)
    return stat


def get_candidate_order(result: ElectionResult) -> List[str]:
    """
    Winner first, then candidates still standing, then eliminated candidates in descending
    order of the round they were eliminated in. Ties keep the original candidate order.
    """
    round_eliminated = {outcome.eliminated: outcome.round_num for outcome in result.rounds if outcome.eliminated}

    def sort_key(idx_cand):
        idx, cand = idx_cand
        if cand == result.winner:
            return (0, 0, idx)
        if cand not in round_eliminated:
            return (1, 0, idx)
        return (2, -round_eliminated[cand], idx)

    return [cand for _, cand in sorted(enumerate(result.candidates), key=sort_key)]


def get_round_by_round_table(result: ElectionResult) -> pd.DataFrame:
    """Create a table containing round by round counts for the election.

    One row per candidate plus a final 'colsum' row. For each round there is a count column and
    a percent column holding the candidate's share of the round total. Candidates have no
    values for rounds after their elimination.

    :param result: Election result returned by :func:`irv_tally.tabulation.process_election_rounds`
    :type result: ElectionResult
    :return: round by round table
    :rtype: pd.DataFrame
    """
    row_names = get_candidate_order(result)
    rows = {cand: {"candidate": cand} for cand in row_names}
    colsum = {"candidate": "colsum"}

    for outcome in result.rounds:

        rnd_count_col = f"r{outcome.round_num}_count"
        rnd_percent_col = f"r{outcome.round_num}_percent"

        rnd_total = sum(outcome.tally.values())

        for cand in row_names:
            if cand not in outcome.round_candidates:
                rows[cand][rnd_count_col] = NAN
                rows[cand][rnd_percent_col] = NAN
                continue

            count = outcome.tally.get(cand, 0)
            rows[cand][rnd_count_col] = decimal2float(decimal.Decimal(count))
            rows[cand][rnd_percent_col] = decimal2float(100 * decimal.Decimal(count) / rnd_total) if rnd_total else NAN

        colsum[rnd_count_col] = decimal2float(decimal.Decimal(rnd_total))
        colsum[rnd_percent_col] = 100.0 if rnd_total else NAN

    return pd.DataFrame([rows[cand] for cand in row_names] + [colsum])


def get_round_by_round_dict(result: ElectionResult) -> Dict:
    """
    Json-ready summary of the election, with one entry per round.
    """
    return {
        "candidates": list(result.candidates),
        "winner": result.winner,
        "error": result.error.value if result.error is not None else None,
        "rounds": [
            {
                "round": outcome.round_num,
                "tally": {cand: decimal2float(count, round_places=None) for cand, count in outcome.tally.items()},
                "winner": outcome.winner,
                "eliminated": outcome.eliminated,
            }
            for outcome in result.rounds
        ],
    }


def write_round_by_round_table(result: ElectionResult, save_path: Path) -> None:
    """Wrapper for :func:`get_round_by_round_table` that writes the table out as csv.

    :param result: Election result
    :type result: ElectionResult
    :param save_path: File to write to
    :type save_path: Union[str, pathlib.Path]
    """
    save_path = pathlib.Path(save_path)
    _log.info("Writing round by round table: %s", save_path)
    df = get_round_by_round_table(result)
    df.to_csv(save_path, index=False)


def write_round_by_round_json(result: ElectionResult, save_path: Path) -> None:
    save_path = pathlib.Path(save_path)
    _log.info("Writing round by round json: %s", save_path)
    with open(save_path, "w") as outfile:
        json.dump(get_round_by_round_dict(result), outfile, indent=2)
