"""
Input checks performed before a simulation is attempted.

The scheduler itself assumes well-formed input; everything that can be
wrong with user-supplied numbers is caught here and reported as a single
``ValidationError`` with a message suitable for display.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

_NON_NUMERIC = re.compile(r"[^\d\s]+")


class ValidationError(ValueError):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingInput(ValidationError):
    pass


class LengthMismatch(ValidationError):
    pass


class InvalidNumber(ValidationError):
    pass


def sanitize_numbers(text: str) -> str:
    """
    Drop every character that is neither a digit nor whitespace, the way
    the input fields filter keystrokes.
    """
    return _NON_NUMERIC.sub("", text)


def split_numbers(text: str) -> List[str]:
    return text.split()


def parse_int(token, *, name: str, minimum: int) -> int:
    try:
        value = int(str(token).strip())
    except (TypeError, ValueError) as exc:
        raise InvalidNumber(f"Please enter valid arrival and burst times. ({name}: {token!r})") from exc

    if value < minimum:
        raise InvalidNumber(f"Please enter valid arrival and burst times. ({name} must be >= {minimum}, got {value})")
    return value


def validate_sequences(
    process_ids: Sequence,
    arrivals: Sequence,
    bursts: Sequence,
    count: Optional[int] = None,
) -> Tuple[List[int], List[int], List[int]]:
    """
    Check three parallel sequences and convert them to integers.

    ``count`` is the declared number of processes; when omitted the length
    of ``process_ids`` is used.
    """
    if not process_ids or not arrivals or not bursts:
        raise MissingInput("Please fill in all fields.")

    n = len(process_ids) if count is None else count
    if len(process_ids) != n or len(arrivals) != n or len(bursts) != n:
        raise LengthMismatch(
            f"Arrival times must have exactly {n} values and burst times must have exactly {n} values."
        )

    ids = [parse_int(v, name="process id", minimum=1) for v in process_ids]
    if len(set(ids)) != len(ids):
        raise InvalidNumber(f"Process ids must be distinct: {ids}")

    arrival_values = [parse_int(v, name="arrival time", minimum=0) for v in arrivals]
    burst_values = [parse_int(v, name="burst time", minimum=1) for v in bursts]
    return ids, arrival_values, burst_values


def parse_form(count_text: str, arrivals_text: str, bursts_text: str) -> Tuple[List[int], List[int], List[int]]:
    """
    Validate the three free-text form fields and return
    ``(process_ids, arrivals, bursts)`` with ids numbered 1..N.
    """
    try:
        if not str(count_text).strip() or not arrivals_text.strip() or not bursts_text.strip():
            raise MissingInput("Please fill in all fields.")

        count = parse_int(count_text, name="number of processes", minimum=1)
        arrivals = split_numbers(sanitize_numbers(arrivals_text))
        bursts = split_numbers(sanitize_numbers(bursts_text))
        if not arrivals or not bursts:
            raise MissingInput("Please fill in all fields.")

        if len(arrivals) != count or len(bursts) != count:
            raise LengthMismatch(
                f"Arrival times must have exactly {count} values and burst times must have exactly {count} values."
            )

        process_ids = list(range(1, count + 1))
        return validate_sequences(process_ids, arrivals, bursts, count=count)
    except ValidationError as exc:
        logger.info("Rejected form input: %s", exc.message)
        raise
