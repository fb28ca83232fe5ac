"""
Module that contains the command line app.

Why does this file exist, and why not put this in __main__?

  You might be tempted to import things from __main__ later, but that will cause
  problems: the code will get executed twice:

  - When you run `python -mirv_tally` python will execute
    ``__main__.py`` as a script. That means there won't be any
    ``irv_tally.__main__`` in ``sys.modules``.
  - When you import __main__ it will get executed again (as a module) because
    there's no ``irv_tally.__main__`` in ``sys.modules``.
"""
import argparse
import logging
import sys

import pandas as pd

import irv_tally.errors as errors
import irv_tally.parsers as parsers
import irv_tally.tabulation as tabulation
import irv_tally.write_out as write_out

_log = logging.getLogger(__name__)

DESCRIPTION = """\
Find the winner of an instant-runoff election.

The ballot file's first row lists the candidates, one per column. Each following
row is one voter, with the rank (1 = most preferred) given to each candidate.
Blank cells mean no preference.
"""


def create_argparser(prog="irv-tally"):
    """
    Return an ArgumentParser object.
    """
    p = argparse.ArgumentParser(prog=prog, description=DESCRIPTION,
                                formatter_class=argparse.RawDescriptionHelpFormatter)

    p.add_argument('votes_path', metavar='VOTES_PATH', help="Path to the ballot file.")
    p.add_argument('--delimiter', default=',', help="Cell delimiter used in the ballot file (default: ',').")
    p.add_argument('--encoding', default='utf8', help="Text encoding of the ballot file (default: utf8).")
    p.add_argument('--round-table', metavar='PATH', help="Write the round by round table to this csv file.")
    p.add_argument('--round-json', metavar='PATH', help="Write the round by round results to this json file.")
    p.add_argument('-q', '--quiet', action='store_true', help="Do not print the round reports.")
    p.add_argument('-v', '--verbose', action='store_true', help="Log debugging information.")

    return p


def run_election(votes_path, delimiter=",", encoding="utf8", echo=None):
    """
    Read a ballot file and run the election.

    :param votes_path: Path to the ballot file.
    :param delimiter: Cell delimiter of the ballot file.
    :param encoding: Text encoding of the ballot file.
    :param echo: Called with each round report, for example ``print``.
    :return: The election result. Its ``error`` is set if the file could not be read or the votes were invalid.
    :rtype: tabulation.ElectionResult
    """
    try:
        vote_records, candidates = parsers.read_election(votes_path, delimiter=delimiter, encoding=encoding)
    except FileNotFoundError:
        _log.debug("ballot file not found: %s", votes_path)
        return tabulation.ElectionResult(candidates=[], error=errors.ErrorKind.FILE_NOT_FOUND)
    except (OSError, UnicodeError, LookupError, pd.errors.ParserError) as e:
        _log.debug("ballot file could not be read: %s (%s)", votes_path, e)
        return tabulation.ElectionResult(candidates=[], error=errors.ErrorKind.READ_ERROR)

    return tabulation.process_election_rounds(vote_records, candidates, echo=echo)


def main(argv=None):

    p = create_argparser()

    # argparse exits on --help and on usage errors
    try:
        args = p.parse_args(argv)
    except SystemExit as e:
        if e.code == errors.EXIT_SUCCESS:
            return errors.EXIT_SUCCESS
        return errors.exit_status(errors.ErrorKind.USAGE)

    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    echo = None if args.quiet else print
    result = run_election(args.votes_path, delimiter=args.delimiter, encoding=args.encoding, echo=echo)

    if result.error is errors.ErrorKind.FILE_NOT_FOUND:
        print(f'Sorry, the file {args.votes_path} does not exist', file=sys.stderr)
        return errors.exit_status(result.error)

    if result.error is errors.ErrorKind.READ_ERROR:
        print(f'Sorry, the file {args.votes_path} could not be read', file=sys.stderr)
        return errors.exit_status(result.error)

    if args.round_table:
        write_out.write_round_by_round_table(result, args.round_table)

    if args.round_json:
        write_out.write_round_by_round_json(result, args.round_json)

    if result.error is errors.ErrorKind.INVALID_VOTES:
        print('Invalid votes', file=sys.stderr)

    return errors.exit_status(result.error)
