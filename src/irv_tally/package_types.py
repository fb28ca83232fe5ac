import decimal
import pathlib

from typing import (List, Union, Dict)

# used in parser functions
Path = Union[str, pathlib.Path]

# one row of the ballot file, cells as read
RawRecord = List[str]

# candidate names, most preferred first
Ballot = List[str]

# candidate name -> weighted vote count, returned from tabulation.get_vote_count
Tally = Dict[str, Union[int, decimal.Decimal]]
