"""
Parser for the network text format.

The format is line oriented and every line is trimmed before it is
read:

    <n>                         number of agents
    <opinion>,<receptivity>     repeated n times
    <resources>                 non-negative integer

Anything after the resources line is ignored. Numeric fields are read
strictly: a field either matches its full pattern or the whole parse
fails, and no partial network is ever returned.

Once agents and resources are known, the extremism of the network and
the effort of the all-selected strategy are computed, so every
returned Network already carries its derived fields.
"""

from typing import Iterable, Iterator, Optional, Tuple
import io
import logging
import re

from ..analysis.extremism import (
    all_selected_strategy,
    compute_effort,
    compute_extremism,
)
from ..errors import EngineError, ParseError
from .model import Agent, Network, OPINION_MAX, OPINION_MIN, RESOURCES_MAX

logger = logging.getLogger(__name__)


_SIGNED_INT = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_INT = re.compile(r"[0-9]+")
_FLOAT = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def _next_line(lines: Iterator[Tuple[int, str]]) -> Optional[Tuple[int, str]]:
    """Return the next (line number, trimmed text) pair, or None at the end."""
    try:
        number, raw = next(lines)
    except StopIteration:
        return None
    return number, raw.strip()


def _parse_agent_count(text: str, line_number: int) -> int:
    if not _SIGNED_INT.fullmatch(text):
        raise ParseError(f"invalid agent count: {text!r}", line_number)

    count = int(text)
    if count < 0:
        raise ParseError(f"invalid agent count: {text!r} is negative", line_number)
    return count


def _parse_agent(text: str, line_number: int) -> Agent:
    fields = text.split(",")
    if len(fields) != 2:
        raise ParseError(f"malformed line: {text}", line_number)

    opinion_text, receptivity_text = fields

    if not _SIGNED_INT.fullmatch(opinion_text):
        raise ParseError(f"invalid opinion: {opinion_text!r}", line_number)
    opinion = int(opinion_text)
    if not OPINION_MIN <= opinion <= OPINION_MAX:
        raise ParseError(
            f"invalid opinion: {opinion} is outside [{OPINION_MIN}, {OPINION_MAX}]",
            line_number,
        )

    if not _FLOAT.fullmatch(receptivity_text):
        raise ParseError(f"invalid receptivity: {receptivity_text!r}", line_number)
    receptivity = float(receptivity_text)
    if receptivity in (float("inf"), float("-inf")):
        # Exponents past the float range overflow to infinity
        raise ParseError(f"invalid receptivity: {receptivity_text!r} is out of range", line_number)

    return Agent(opinion=opinion, receptivity=receptivity)


def _parse_resources(text: str, line_number: int) -> int:
    if not _UNSIGNED_INT.fullmatch(text):
        raise ParseError(f"invalid resources value: {text!r}", line_number)

    resources = int(text)
    if resources > RESOURCES_MAX:
        raise ParseError(f"invalid resources value: {text!r} is out of range", line_number)
    return resources


def _with_metrics(network: Network) -> Network:
    """Attach extremism and the all-selected effort to a parsed network."""
    extremism = compute_extremism(network)
    strategy = all_selected_strategy(len(network.agents))

    try:
        effort = compute_effort(network, strategy)
    except EngineError as e:
        # The network is still usable without effort; keep the reason on it
        logger.warning(f"Effort computation failed, storing empty effort: {e}")
        return network.with_metrics(extremism, (), effort_error=str(e))

    return network.with_metrics(extremism, effort)


def parse_network(stream: Iterable[str]) -> Network:
    """
    Parse a network from a stream of text lines.

    Args:
        stream: Any iterable of lines, such as an open text file or an
            ``io.StringIO``. The stream is read but not closed.

    Returns:
        A complete Network with extremism and effort filled in.

    Raises:
        ParseError: The text does not follow the network format.
    """
    lines = enumerate(stream, start=1)

    first = _next_line(lines)
    if first is None:
        raise ParseError("stream empty or malformed")
    line_number, text = first
    count = _parse_agent_count(text, line_number)

    agents = []
    for index in range(count):
        entry = _next_line(lines)
        if entry is None:
            raise ParseError(
                f"insufficient agent lines: expected {count}, found {index}",
                line_number + 1,
            )
        line_number, text = entry
        if _UNSIGNED_INT.fullmatch(text):
            # A bare integer is the resources line arriving before the block is full
            raise ParseError(
                f"insufficient agent lines: expected {count}, found {index}",
                line_number,
            )
        agents.append(_parse_agent(text, line_number))

    entry = _next_line(lines)
    if entry is None:
        raise ParseError("missing resources value", line_number + 1)
    line_number, text = entry
    resources = _parse_resources(text, line_number)

    network = _with_metrics(Network(agents=agents, resources=resources))
    logger.debug(f"Parsed {network!r}")
    return network


def parse_network_text(text: str) -> Network:
    """Parse a network from a string."""
    return parse_network(io.StringIO(text))


def parse_network_file(path: str) -> Network:
    """Open a UTF-8 file, parse it as a network and close it."""
    # newline="\n" splits lines exactly as parse_network_text does
    with open(path, "r", encoding="utf-8", newline="\n") as f:
        return parse_network(f)
