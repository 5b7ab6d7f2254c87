"""Tests for the network text parser."""

import io
import logging

import pytest

from modex.errors import ParseError
from modex.network.model import Agent, Network
from modex.network.parser import (
    parse_network,
    parse_network_file,
    parse_network_text,
)


class TestParseValidInput:
    """Tests for well-formed network text."""

    def test_two_agents(self):
        network = parse_network_text("2\n1,0.5\n-1,0.9\n100\n")

        assert network.agents == (
            Agent(opinion=1, receptivity=0.5),
            Agent(opinion=-1, receptivity=0.9),
        )
        assert network.resources == 100

    def test_derived_fields_are_filled(self):
        network = parse_network_text("2\n1,0.5\n-1,0.9\n100\n")

        assert network.extremism == pytest.approx(0.7071, abs=1e-4)
        assert network.effort == (1.0, 1.0)
        assert network.effort_error is None
        assert network.has_effort

    def test_empty_network(self):
        network = parse_network_text("0\n7\n")

        assert network.agents == ()
        assert network.resources == 7
        assert network.extremism == 0.0
        assert network.effort == ()
        assert network.has_effort

    def test_agent_count_matches_header(self):
        text = "5\n" + "".join(f"{i},0.{i}\n" for i in range(5)) + "50\n"
        network = parse_network_text(text)

        assert len(network.agents) == 5
        assert len(network.effort) == len(network.agents)
        assert [a.opinion for a in network.agents] == [0, 1, 2, 3, 4]

    def test_lines_are_trimmed(self):
        network = parse_network_text("  2 \n 1,0.5 \n-1,0.9\t\n 100 \n")

        assert network.agent_count == 2
        assert network.resources == 100

    def test_crlf_line_endings(self):
        network = parse_network_text("1\r\n3,0.25\r\n9\r\n")

        assert network.agents == (Agent(3, 0.25),)
        assert network.resources == 9

    def test_trailing_content_ignored(self):
        network = parse_network_text("1\n1,0.5\n10\nnot part of the network\n")

        assert network.agent_count == 1
        assert network.resources == 10

    def test_missing_final_newline(self):
        network = parse_network_text("1\n1,0.5\n10")
        assert network.resources == 10

    def test_opinion_bounds(self):
        network = parse_network_text("2\n-128,0.0\n127,1.0\n1000\n")
        assert network.opinions == [-128, 127]

    def test_signed_and_exponent_numbers(self):
        network = parse_network_text("2\n+3,1e-1\n-4,.25\n100\n")

        assert network.opinions == [3, -4]
        assert network.receptivities == [0.1, 0.25]

    def test_large_resources(self):
        network = parse_network_text(f"0\n{2 ** 64 - 1}\n")
        assert network.resources == 2 ** 64 - 1

    def test_reads_stream(self):
        stream = io.StringIO("1\n-2,0.5\n4\n")
        network = parse_network(stream)

        assert network.agents == (Agent(-2, 0.5),)

    def test_reads_file(self, tmp_path):
        path = tmp_path / "net.txt"
        path.write_text("1\n-2,0.5\n4\n", encoding="utf-8")

        network = parse_network_file(str(path))
        assert network.resources == 4

    def test_file_and_text_split_lines_alike(self, tmp_path):
        text = "1\r3,0.5\n10\n"
        path = tmp_path / "cr.txt"
        path.write_bytes(text.encode("utf-8"))

        with pytest.raises(ParseError, match="invalid agent count"):
            parse_network_text(text)
        with pytest.raises(ParseError, match="invalid agent count"):
            parse_network_file(str(path))

    def test_deterministic(self):
        text = "3\n5,0.1\n-7,0.3\n2,0.9\n40\n"
        assert parse_network_text(text) == parse_network_text(text)

    def test_round_trip_through_text(self):
        network = parse_network_text("3\n5,0.1\n-7,0.3\n2,0.9\n40\n")
        assert parse_network_text(network.to_text()) == network

    def test_agent_line_round_trip(self):
        network = parse_network_text("1\n-42,0.123456789\n1000\n")
        agent = network.agents[0]

        assert agent.to_line() == "-42,0.123456789"


class TestParseErrors:
    """Tests for malformed network text."""

    @pytest.mark.parametrize("text, message", [
        ("", "stream empty or malformed"),
        ("abc\n", "invalid agent count"),
        ("-1\n5\n", "invalid agent count"),
        ("2.5\n", "invalid agent count"),
        ("2\n1,0.5\n100\n", "insufficient agent lines"),
        ("2\n1,0.5\n", "insufficient agent lines"),
        ("1\nabc,0.5\n10\n", "invalid opinion"),
        ("1\n128,0.5\n10\n", "invalid opinion"),
        ("1\n-129,0.5\n10\n", "invalid opinion"),
        ("1\n1.5,0.5\n10\n", "invalid opinion"),
        ("1\n1,abc\n10\n", "invalid receptivity"),
        ("1\n1,nan\n10\n", "invalid receptivity"),
        ("1\n1,inf\n10\n", "invalid receptivity"),
        ("1\n1, 0.5\n10\n", "invalid receptivity"),
        ("1\n1,1e999\n10\n", "invalid receptivity"),
        ("1\n1,0.5,3\n10\n", "malformed line"),
        ("1\n1;0.5\n10\n", "malformed line"),
        ("1\n\n10\n", "malformed line"),
        ("1\n1,0.5\n", "missing resources value"),
        ("1\n1,0.5\n-5\n", "invalid resources value"),
        ("1\n1,0.5\nten\n", "invalid resources value"),
        ("0\n1_000\n", "invalid resources value"),
        (f"0\n{2 ** 64}\n", "invalid resources value"),
    ])
    def test_error_messages(self, text, message):
        with pytest.raises(ParseError) as exc_info:
            parse_network_text(text)

        assert str(exc_info.value).startswith(message)

    def test_malformed_line_includes_raw_line(self):
        with pytest.raises(ParseError, match="malformed line: 1,2,3"):
            parse_network_text("1\n1,2,3\n10\n")

    def test_error_line_number(self):
        with pytest.raises(ParseError) as exc_info:
            parse_network_text("1\nabc,0.5\n10\n")

        assert exc_info.value.line_number == 2
        assert "(line 2)" in str(exc_info.value)

    def test_empty_stream_has_no_line_number(self):
        with pytest.raises(ParseError) as exc_info:
            parse_network(io.StringIO(""))

        assert exc_info.value.line_number is None
        assert str(exc_info.value) == "stream empty or malformed"

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_network_text("x\n")


class TestEffortFailure:
    """An effort failure keeps the network but records why."""

    def test_insufficient_resources_keeps_network(self, caplog):
        with caplog.at_level(logging.WARNING, logger="modex.network.parser"):
            network = parse_network_text("1\n10,0.0\n5\n")

        assert isinstance(network, Network)
        assert network.agents == (Agent(10, 0.0),)
        assert network.extremism == pytest.approx(10.0)
        assert network.effort == ()
        assert "resources" in network.effort_error
        assert not network.has_effort
        assert "Effort computation failed" in caplog.text

    def test_exact_budget_is_enough(self):
        network = parse_network_text("1\n10,0.0\n10\n")

        assert network.effort == (10.0,)
        assert network.effort_error is None
