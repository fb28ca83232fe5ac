"""
Instant-runoff tabulation.

Each round counts the ballots, checks for a majority winner and, if there is none,
eliminates the lowest candidate and removes them from every ballot.
"""
from __future__ import annotations
from typing import Callable, List, Optional

import dataclasses
import decimal
import logging

from irv_tally.errors import ErrorKind
from irv_tally.package_types import Ballot, Tally
from irv_tally.report import election_report

_log = logging.getLogger(__name__)

# score given to candidates missing from a tally when picking who to eliminate
ABSENT_SCORE = -1


@dataclasses.dataclass
class RoundOutcome:
    """Result of one round. ``ballots`` and ``candidates`` are the inputs for the next round."""

    round_num: int
    tally: Tally
    round_candidates: List[str]
    ballots: List[Ballot]
    candidates: List[str]
    winner: Optional[str] = None
    eliminated: Optional[str] = None
    error: Optional[ErrorKind] = None

    def report(self) -> str:
        return election_report(self.tally, self.winner, self.round_candidates, eliminated=self.eliminated)


@dataclasses.dataclass
class ElectionResult:

    candidates: List[str]
    rounds: List[RoundOutcome] = dataclasses.field(default_factory=list)
    winner: Optional[str] = None
    error: Optional[ErrorKind] = None

    def n_rounds(self) -> int:
        return len(self.rounds)


def trim_empty_voters(vote_records: List[Ballot]) -> List[Ballot]:
    """
    Trims the vote records so only voters with remaining preferences are left.
    """
    return [vote for vote in vote_records if len(vote) > 0]


def remove_candidate(vote_records: List[Ballot], candidate: Optional[str]) -> List[Ballot]:
    """
    Remove a candidate from every ballot, keeping the order of the remaining candidates.
    Ballots left without any candidates are dropped.

    :param vote_records: Current vote records
    :type vote_records: List[List[str]]
    :param candidate: The candidate to remove. If None, the records are returned unchanged.
    :type candidate: Optional[str]
    :return: Vote records after removing the candidate
    :rtype: List[List[str]]
    """
    if candidate is None:
        return vote_records

    filtered = [[c for c in vote if c != candidate] for vote in vote_records]
    return trim_empty_voters(filtered)


def ballot_weight(position: int) -> decimal.Decimal:
    """Weight of a ballot mark at a zero-based position: 1, 0.1, 0.01, ..."""
    return decimal.Decimal(1).scaleb(-position)


def exact_context(values) -> decimal.Context:
    """
    Decimal context with enough digits to add up the values, or double any of them, without rounding.
    """
    values = [decimal.Decimal(v) for v in values if decimal.Decimal(v).is_finite()]
    places = max([-v.as_tuple().exponent for v in values] + [0])
    whole = sum(abs(int(v)) + 1 for v in values)
    return decimal.Context(prec=len(str(2 * whole)) + places + 1)


def get_vote_count(vote_records: List[Ballot]) -> Tally:
    """
    Gets a vote count per candidate. Every candidate on a ballot gets a share of it,
    1 for the first choice, 0.1 for the second, 0.01 for the third and so on.
    The small decimals break ties between low scoring candidates by their later preferences.

    Candidates not present on any ballot are not included.

    :param vote_records: Current vote records
    :type vote_records: List[List[str]]
    :return: The vote count per candidate
    :rtype: Dict[str, decimal.Decimal]
    """
    # exact sums: digits for the ballot count plus one per rank position
    longest = max((len(vote) for vote in vote_records), default=0)
    context = decimal.Context(prec=len(str(len(vote_records))) + longest + 1)

    vote_count = {}
    with decimal.localcontext(context):
        for vote in vote_records:
            for position, candidate in enumerate(vote):
                vote_count[candidate] = vote_count.get(candidate, 0) + ballot_weight(position)
    return vote_count


def get_winner(counts: Tally) -> Optional[str]:
    """
    Gets the name of the winner of the election for this round, if one exists.
    The winner must have strictly more than half of the total count, an exact half is not enough.

    :param counts: The vote count per candidate
    :type counts: Dict[str, decimal.Decimal]
    :return: The winning candidate, or None if there is not one
    :rtype: Optional[str]
    """
    with decimal.localcontext(exact_context(counts.values())):
        total = sum(counts.values())
        for candidate, count in counts.items():
            if count * 2 > total:
                return candidate
    return None


def get_eliminated_candidate(counts: Tally, candidates: List[str]) -> Optional[str]:
    """
    Gets the name of the candidate who received the lowest vote count.
    Listed candidates missing from the count score -1, so candidates no ballot mentions go first.
    Ties go to the candidate listed first.

    :param counts: The vote count per candidate
    :type counts: Dict[str, decimal.Decimal]
    :param candidates: The remaining candidates, in tie-break order
    :type candidates: List[str]
    :return: The lowest vote-earning candidate, or None if no counts or no candidates are given
    :rtype: Optional[str]
    """
    if not counts or not candidates:
        return None

    # min keeps the first of equal items
    return min(candidates, key=lambda c: counts.get(c, ABSENT_SCORE))


def process_round(vote_records: List[Ballot], candidates: List[str], round_num: int = 1) -> RoundOutcome:
    """
    Process a single round of vote counts.

    If there is a winner, the ballots and candidates are passed through unchanged.
    Otherwise the eliminated candidate is removed from both. If no one can be eliminated
    the outcome carries :attr:`ErrorKind.INVALID_VOTES`.

    :param vote_records: Vote records for the round
    :type vote_records: List[List[str]]
    :param candidates: The current candidates
    :type candidates: List[str]
    :param round_num: Round number, used for logging and reporting, defaults to 1
    :type round_num: int, optional
    :rtype: RoundOutcome
    """
    counts = get_vote_count(vote_records)
    winner = get_winner(counts)

    outcome = RoundOutcome(
        round_num=round_num,
        tally=counts,
        round_candidates=list(candidates),
        ballots=vote_records,
        candidates=candidates,
        winner=winner,
    )

    if winner is not None:
        _log.debug("round %d: %s won", round_num, winner)
        return outcome

    eliminated = get_eliminated_candidate(counts, candidates)
    if eliminated is None:
        _log.debug("round %d: no winner and no candidate to eliminate", round_num)
        outcome.error = ErrorKind.INVALID_VOTES
        return outcome

    _log.debug("round %d: %s eliminated", round_num, eliminated)
    outcome.eliminated = eliminated
    outcome.ballots = remove_candidate(vote_records, eliminated)
    outcome.candidates = [c for c in candidates if c != eliminated]
    return outcome


def process_election_rounds(
    vote_records: List[Ballot],
    candidates: List[str],
    echo: Optional[Callable[[str], None]] = None,
) -> ElectionResult:
    """
    Process the full election until a winner is found.

    Every round removes a candidate unless it produces a winner, so the loop ends after at most
    one round per candidate. Running out of candidates or ballots ends it with an error.

    :param vote_records: Vote records for the first round
    :type vote_records: List[List[str]]
    :param candidates: The candidates, in report and tie-break order
    :type candidates: List[str]
    :param echo: Called with each round report as rounds complete, defaults to None
    :type echo: Optional[Callable[[str], None]], optional
    :rtype: ElectionResult
    """
    result = ElectionResult(candidates=list(candidates))

    current_votes = vote_records
    current_candidates = list(candidates)
    round_num = 0

    while result.winner is None and result.error is None:
        round_num += 1
        outcome = process_round(current_votes, current_candidates, round_num=round_num)
        result.rounds.append(outcome)

        if outcome.error is not None:
            result.error = outcome.error
            break

        if echo is not None:
            echo(outcome.report())

        result.winner = outcome.winner
        current_votes = outcome.ballots
        current_candidates = outcome.candidates

    _log.info("election finished after %d rounds, winner: %s", result.n_rounds(), result.winner)
    return result
