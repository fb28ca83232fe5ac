from irv_tally.parsers import read_votes, to_vote_rank
from irv_tally.tabulation import (
    ElectionResult,
    RoundOutcome,
    get_eliminated_candidate,
    get_vote_count,
    get_winner,
    process_election_rounds,
    process_round,
    remove_candidate,
)

__version__ = "0.1.0"
