import json

import pytest

import irv_tally.cli as cli
import irv_tally.errors as errors
from irv_tally.errors import ErrorKind


def test_no_arguments(capsys):

    assert cli.main([]) == errors.EXIT_STATUS[ErrorKind.USAGE]
    assert "usage:" in capsys.readouterr().err


def test_help(capsys):

    assert cli.main(["--help"]) == errors.EXIT_SUCCESS
    assert "usage:" in capsys.readouterr().out


def test_missing_file(tmp_path, capsys):

    missing = tmp_path / "fake_csv_file.csv"

    assert cli.main([str(missing)]) == errors.EXIT_STATUS[ErrorKind.FILE_NOT_FOUND]

    captured = capsys.readouterr()
    assert captured.err.strip() == f"Sorry, the file {missing} does not exist"
    assert captured.out == ""


def test_directory_path(tmp_path, capsys):

    assert cli.main([str(tmp_path)]) == errors.EXIT_STATUS[ErrorKind.FILE_NOT_FOUND]
    assert capsys.readouterr().err.strip() == f"Sorry, the file {tmp_path} does not exist"


def test_wrong_encoding(tmp_path, capsys):

    path = tmp_path / "votes.csv"
    path.write_bytes("Jos\xe9,B\n1,2\n2,1\n1,\n".encode("latin-1"))

    assert cli.main([str(path)]) == errors.EXIT_STATUS[ErrorKind.READ_ERROR]
    captured = capsys.readouterr()
    assert captured.err.strip() == f"Sorry, the file {path} could not be read"
    assert captured.out == ""

    assert cli.main([str(path), "--encoding", "latin-1"]) == errors.EXIT_SUCCESS
    assert capsys.readouterr().out.endswith("Jos\xe9 won!\n")


def test_unknown_encoding(write_votes, election_rows, capsys):

    status = cli.main([str(write_votes(election_rows)), "--encoding", "not-a-codec"])

    assert status == errors.EXIT_STATUS[ErrorKind.READ_ERROR]
    assert "could not be read" in capsys.readouterr().err


def test_unreadable_file(write_votes, election_rows, monkeypatch, capsys):

    def read_election(*args, **kwargs):
        raise PermissionError("permission denied")

    monkeypatch.setattr(cli.parsers, "read_election", read_election)
    path = write_votes(election_rows)

    assert cli.main([str(path)]) == errors.EXIT_STATUS[ErrorKind.READ_ERROR]
    assert capsys.readouterr().err.strip() == f"Sorry, the file {path} could not be read"


def test_exit_statuses_are_distinct():
    statuses = [errors.EXIT_SUCCESS] + list(errors.EXIT_STATUS.values())
    assert len(set(statuses)) == len(statuses)
    assert errors.exit_status(None) == errors.EXIT_SUCCESS


def test_run_election(write_votes, election_rows):

    result = cli.run_election(write_votes(election_rows))

    assert result.winner == "A"
    assert result.error is None
    assert result.n_rounds() == 3


def test_run_election_missing_file(tmp_path):

    result = cli.run_election(tmp_path / "fake_csv_file.csv")

    assert result.winner is None
    assert result.error is ErrorKind.FILE_NOT_FOUND
    assert result.rounds == []


def test_main(write_votes, election_rows, capsys):

    path = write_votes(election_rows)

    assert cli.main([str(path)]) == errors.EXIT_SUCCESS

    out = capsys.readouterr().out
    assert out == (
        "A: 5 votes\nB: 2 votes\nD: 2 votes\nC: 1 vote\n-----\nC eliminated\n\n\n"
        "A: 5 votes\nD: 3 votes\nB: 2 votes\n-----\nB eliminated\n\n\n"
        "A: 6 votes\nD: 3 votes\n-----\nA won!\n"
    )
    assert out.splitlines()[-1] == "A won!"


def test_main_is_repeatable(write_votes, election_rows, capsys):

    path = write_votes(election_rows)

    cli.main([str(path)])
    first = capsys.readouterr().out
    cli.main([str(path)])
    second = capsys.readouterr().out

    assert first == second


def test_main_trailing_delimiters(tmp_path, capsys):

    path = tmp_path / "votes.csv"
    path.write_text("A,B,C\n1,2,3,\n2,1,\n1,,\n", encoding="utf8")

    assert cli.main([str(path)]) == errors.EXIT_SUCCESS
    assert capsys.readouterr().out.endswith("A won!\n")


def test_main_quiet(write_votes, election_rows, capsys):

    assert cli.main([str(write_votes(election_rows)), "--quiet"]) == errors.EXIT_SUCCESS
    assert capsys.readouterr().out == ""


def test_main_delimiter(write_votes, election_rows, capsys):

    path = write_votes(election_rows, file_name="votes.tsv", delimiter="\t")

    assert cli.main([str(path), "--delimiter", "\t"]) == errors.EXIT_SUCCESS
    assert capsys.readouterr().out.endswith("A won!\n")


@pytest.mark.parametrize("rows", [
    [["A", "B", "C"]],
    [["A", "B", "C"], ["", "", ""], ["0", "-1", "x"]],
])
def test_main_invalid_votes(write_votes, rows, capsys):

    assert cli.main([str(write_votes(rows))]) == errors.EXIT_STATUS[ErrorKind.INVALID_VOTES]

    captured = capsys.readouterr()
    assert captured.err.strip() == "Invalid votes"
    assert captured.out == ""


def test_main_round_outputs(write_votes, election_rows, tmp_path):

    table_path = tmp_path / "rounds.csv"
    json_path = tmp_path / "rounds.json"

    status = cli.main([
        str(write_votes(election_rows)),
        "--quiet",
        "--round-table", str(table_path),
        "--round-json", str(json_path),
    ])

    assert status == errors.EXIT_SUCCESS
    assert table_path.read_text().splitlines()[0] == (
        "candidate,r1_count,r1_percent,r2_count,r2_percent,r3_count,r3_percent"
    )
    with open(json_path) as infile:
        assert json.load(infile)["winner"] == "A"
