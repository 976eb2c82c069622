#tests/test_collector.py
import pytest

from liberadebt.collector import collect_response
from liberadebt.errors import GenerationError


def failing_stream():
    yield "Pay the "
    yield "card first"
    raise ConnectionError("server went away")


def test_accumulates_and_mirrors_in_order():
    seen = []
    buffer = collect_response(["Pay ", "Card A", " first.", "\n"], seen.append)
    assert buffer.text == "Pay Card A first.\n"
    assert seen == ["Pay ", "Card A", " first.", "\n"]
    assert buffer.complete


def test_no_dedup_or_coalescing():
    seen = []
    buffer = collect_response(["a", "a", "a"], seen.append)
    assert buffer.chunks == ["a", "a", "a"]
    assert seen == ["a", "a", "a"]


def test_empty_chunks_ignored():
    seen = []
    buffer = collect_response(["x", "", "y"], seen.append)
    assert buffer.text == "xy"
    assert seen == ["x", "y"]


def test_mid_stream_error_raises_after_mirroring():
    seen = []
    with pytest.raises(GenerationError) as exc:
        collect_response(failing_stream(), seen.append)
    assert seen == ["Pay the ", "card first"]
    assert isinstance(exc.value.__cause__, ConnectionError)


def test_default_sink_is_stdout(capsys):
    collect_response(["hello ", "world"])
    assert capsys.readouterr().out == "hello world"
