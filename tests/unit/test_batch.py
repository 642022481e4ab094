"""Tests for batch orchestration."""

from pathlib import Path

from fontgen.config.options import Configuration
from fontgen.errors import ConfigurationError
from fontgen.pipeline.batch import run_batch
from fontgen.pipeline.host import DirectoryChoice, JobStatus, Payload


def _inputs(tmp_path, *names) -> list[Path]:
    paths = []
    for name in names:
        path = tmp_path / name
        path.write_bytes(name.encode())
        paths.append(path)
    return paths


def test_batch_collects_failures(tmp_path, host_with_choice, fake_engine):
    """Test one bad input does not stop the others."""
    good, bad = _inputs(tmp_path, "good.ttf", "bad.xyz")
    options = Configuration(formats=["woff"])
    hosts = {}

    def factory(payload):
        hosts[payload.input_path] = host_with_choice()
        return hosts[payload.input_path]

    summary = run_batch([Payload(good, options), Payload(bad, options)], factory, engine=fake_engine)

    assert summary.succeeded == 1
    assert summary.failed == 1
    assert isinstance(summary.errors[bad], ConfigurationError)
    assert hosts[good].outputs == [tmp_path / "good.woff"]


def test_batch_prompts_before_converting(tmp_path, host_with_choice, fake_engine):
    """Test every prompt is answered before any font is loaded."""
    first, second = _inputs(tmp_path, "one.ttf", "two.ttf")
    events = []

    class Host(host_with_choice):
        def prompt_directory(self, start):
            events.append(("prompt", len(fake_engine.loaded)))
            return DirectoryChoice(cancelled=False, path=str(start / "out"))

    options = Configuration(ask=True, formats=["ttf"])
    summary = run_batch(
        [Payload(first, options), Payload(second, options)],
        lambda payload: Host(),
        jobs=2,
        engine=fake_engine,
    )

    assert events == [("prompt", 0), ("prompt", 0)]
    assert summary.succeeded == 2
    assert (tmp_path / "out" / "one.ttf").exists()
    assert (tmp_path / "out" / "two.ttf").exists()


def test_batch_counts_aborts(tmp_path, host_with_choice, fake_engine):
    """Test cancelled prompts are reported as aborted, not failed."""
    (path,) = _inputs(tmp_path, "one.ttf")
    summary = run_batch(
        [Payload(path, Configuration(ask=True, formats=["ttf"]))],
        lambda payload: host_with_choice(),
        engine=fake_engine,
    )
    assert summary.aborted == 1
    assert summary.failed == 0
    assert summary.results[path].status is JobStatus.ABORTED
    assert fake_engine.loaded == []
