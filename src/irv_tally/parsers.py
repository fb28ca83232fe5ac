"""
Ballot file readers.

A ballot file is a delimited table. The first row holds the candidate names, one per column.
Every following row is one voter, with the rank that voter gave each column's candidate.
"""
from typing import List, Tuple

import logging
import os
import pathlib
import re

import pandas as pd

from irv_tally.package_types import Ballot, Path, RawRecord

_log = logging.getLogger(__name__)

# lenient integer parse, reads the leading digits and ignores the rest
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def read_votes(file_name: Path, delimiter: str = ",", encoding: str = "utf8") -> List[RawRecord]:
    """
    Read the contents of a ballot file. Rows that are entirely blank are dropped.
    Cells past the width of the first row are ignored.

    :param file_name: Path to the ballot file.
    :type file_name: Union[str, pathlib.Path]
    :param delimiter: Cell delimiter, defaults to ","
    :type delimiter: str, optional
    :param encoding: File encoding, defaults to "utf8"
    :type encoding: str, optional
    :raises FileNotFoundError: If the path is not an existing file.
    :raises UnicodeDecodeError: If the file does not match the encoding.
    :return: File rows as lists of strings. Missing cells are returned as empty strings.
    :rtype: List[List[str]]
    """
    file_name = pathlib.Path(file_name)

    if os.path.isfile(file_name) is False:
        raise FileNotFoundError(f"not a valid file path: {file_name}")

    _log.info("Reading ballots: %s", file_name)

    read_args = {
        "sep": delimiter,
        "header": None,
        "dtype": str,
        "keep_default_na": False,
        "skip_blank_lines": True,
        "encoding": encoding,
        "engine": "python",
    }

    try:
        header = pd.read_csv(file_name, nrows=1, **read_args)
    except pd.errors.EmptyDataError:
        _log.info("Read 0 rows.")
        return []

    n_columns = len(header.columns)

    # rows wider than the header, usually from trailing delimiters, are cut to the header width
    def trim_row(row):
        _log.debug("Trimming row to %d cells: %r", n_columns, row)
        return row[:n_columns]

    votes = pd.read_csv(
        file_name,
        names=list(range(n_columns)),
        on_bad_lines=trim_row,
        **read_args,
    )

    rows = votes.fillna("").values.tolist()
    rows = [row for row in rows if "".join(row).strip()]

    _log.info("Read %d rows.", len(rows))
    return rows


def rank_value(token: str) -> int:
    """
    Integer value of a rank cell. Cells without leading digits count as 0.
    """
    if token is None:
        return 0
    match = _LEADING_INT.match(str(token))
    if not match:
        return 0
    return int(match.group(1))


def to_vote_rank(rank_order: RawRecord, candidate_list: List[str]) -> Ballot:
    """
    Convert a list of rank choices to a ranked list of candidates.
    Cells that are blank, non-numeric, zero or negative are treated as no preference.
    Equal ranks keep their column order.

    :param rank_order: The rank cells of one voter, as listed in the file (e.g., ["", "", "1", "2"])
    :type rank_order: List[str]
    :param candidate_list: The candidates, in the same order as rank_order
    :type candidate_list: List[str]
    :return: The candidates in rank order from most to least preferred
    :rtype: List[str]
    """
    ranked = [(rank_value(token), candidate) for token, candidate in zip(rank_order, candidate_list)]
    ranked = [(rank, candidate) for rank, candidate in ranked if rank > 0]
    return [candidate for _, candidate in sorted(ranked, key=lambda pair: pair[0])]


def load_election(votes: List[RawRecord]) -> Tuple[List[Ballot], List[str]]:
    """
    Split file rows into ballots and the candidate list taken from the header row.
    Blank names at the end of the header row are dropped.

    :param votes: Rows returned by :func:`read_votes`.
    :type votes: List[List[str]]
    :return: Ballots and candidate names.
    :rtype: Tuple[List[List[str]], List[str]]
    """
    if not votes:
        return [], []

    candidates = list(votes[0])

    # trailing delimiters on the header row leave unnamed columns
    while candidates and not candidates[-1].strip():
        candidates.pop()

    vote_records = [to_vote_rank(vote, candidates) for vote in votes[1:]]

    _log.info("Loaded %d ballots for %d candidates.", len(vote_records), len(candidates))
    return vote_records, candidates


def read_election(file_name: Path, delimiter: str = ",", encoding: str = "utf8") -> Tuple[List[Ballot], List[str]]:
    return load_election(read_votes(file_name, delimiter=delimiter, encoding=encoding))
