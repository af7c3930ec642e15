import io

import pytest

from qwhtml.sink import OutputSink, StreamSink, StringSink


def test_sinks_implement_output_sink():
    assert isinstance(StringSink(), OutputSink)
    assert isinstance(StreamSink(io.StringIO()), OutputSink)
    assert not isinstance(object(), OutputSink)


def test_string_sink_collects_chunks():
    sink = StringSink()
    sink.write_str("a")
    sink.write_str("b")
    assert sink.chunks == ["a", "b"]
    assert sink.getvalue() == "ab"


def test_stream_sink_forwards_to_stream():
    stream = io.StringIO()
    sink = StreamSink(stream)
    sink.write_str("<p>")
    sink.flush()
    assert stream.getvalue() == "<p>"


def test_stream_errors_propagate_unchanged():
    stream = io.StringIO()
    stream.close()
    with pytest.raises(ValueError):
        StreamSink(stream).write_str("x")
