import pytest


@pytest.fixture
def write_votes(tmp_path):
    """
    Return a function that writes rows of cells to a ballot file and returns its path.
    An empty row is written as an empty line.
    """
    def _write_votes(rows, file_name="votes.csv", delimiter=","):
        path = tmp_path / file_name
        path.write_text("".join(delimiter.join(row) + "\n" for row in rows), encoding="utf8")
        return path

    return _write_votes


@pytest.fixture
def election_rows():
    return [
        ["A", "B", "C", "D"],
        ["1", "2", "3", "4"],
        ["1", "", "2"],
        ["3", "1", "2", "4"],
        ["", "1", "2", ""],
        ["3", "", "1", "2"],
        ["2", "", "", "1"],
        ["1", "", "", "2"],
        ["1", "2", "", ""],
        ["3", "", "2", "1"],
        ["1", "3", "2", ""],
    ]
