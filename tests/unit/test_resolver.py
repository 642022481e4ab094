"""Tests for destination resolution."""

from pathlib import Path

import pytest

from fontgen.config.options import Configuration
from fontgen.errors import ConfigurationError
from fontgen.pipeline.host import DirectoryChoice, Payload
from fontgen.pipeline.resolver import resolve_options

INPUT = Path("/d/fonts/foo.ttf")


def test_no_prompt_without_ask(host):
    """Test the payload passes through untouched when no override is asked."""
    payload = Payload(INPUT, Configuration(destination="out"))
    assert resolve_options(payload, host) is payload
    assert host.prompts == []


def test_ask_replaces_destination(host_with_choice):
    """Test a chosen directory overrides the configured destination."""
    host = host_with_choice(DirectoryChoice(cancelled=False, path="/picked"))
    payload = Payload(INPUT, Configuration(ask=True, destination="out", formats=["ttf"]))

    resolved = resolve_options(payload, host)

    assert host.prompts == [Path("/d/fonts")]
    assert resolved.options.destination == "/picked"
    assert resolved.options.formats == ("ttf",)
    assert payload.options.destination == "out"


def test_modifier_forces_prompt(host_with_choice):
    """Test the invocation modifier prompts even when ask is off."""
    host = host_with_choice(DirectoryChoice(cancelled=False, path=Path("/picked")))
    resolved = resolve_options(Payload(INPUT), host, modifier=True)
    assert len(host.prompts) == 1
    assert resolved.options.destination == "/picked"


def test_cancel_aborts(host):
    """Test a cancelled prompt resolves to None."""
    payload = Payload(INPUT, Configuration(ask=True))
    assert resolve_options(payload, host) is None


@pytest.mark.parametrize("bad_path", [None, "", "   ", 42])
def test_unusable_prompt_result(host_with_choice, bad_path):
    """Test a non-path prompt result is a configuration error."""
    host = host_with_choice(DirectoryChoice(cancelled=False, path=bad_path))
    with pytest.raises(ConfigurationError, match="invalid destination"):
        resolve_options(Payload(INPUT, Configuration(ask=True)), host)
