"""Tests for FileSink."""

import pytest

from vslog.models import Event, Kind, Severity
from vslog.storage import FileSink


def make_event(seq: int, message: str = "msg") -> Event:
    return Event(Kind.INFO, Severity.LOW, seq * 10, 0, seq, 0, message)


class TestFileSinkAppend:
    """Tests for FileSink.append()."""

    def test_append_writes_line(self, log_path, read_lines):
        """Test that one append yields one parsed line."""
        sink = FileSink(log_path)
        assert sink.append(make_event(1, "hello")) is True

        records = read_lines()
        assert len(records) == 1
        assert records[0].sequence_id == 1
        assert records[0].message == "hello"
        sink.close()

    def test_append_is_flushed(self, log_path):
        """Test that the line is visible before the sink is closed."""
        sink = FileSink(log_path, fsync=False)
        sink.append(make_event(1))

        assert log_path.read_text(encoding="utf-8").endswith("-- msg\n")
        sink.close()

    def test_appends_to_existing_file(self, log_path, read_lines):
        """Test that reopening a destination appends instead of truncating."""
        first = FileSink(log_path)
        first.append(make_event(1))
        first.close()

        second = FileSink(log_path)
        second.append(make_event(2))
        second.close()

        assert [r.sequence_id for r in read_lines()] == [1, 2]

    def test_append_after_close_fails(self, log_path):
        """Test that appending to a closed sink reports failure."""
        sink = FileSink(log_path)
        sink.close()
        assert sink.append(make_event(1)) is False

    def test_write_error_is_contained(self, log_path, caplog):
        """Test that a failing write returns False and logs."""
        sink = FileSink(log_path)

        class BrokenFile:
            def write(self, data):
                raise OSError("disk full")

            def close(self):
                pass

        sink._file = BrokenFile()
        assert sink.append(make_event(1)) is False
        assert "disk full" in caplog.text

    def test_unencodable_message_is_contained(self, log_path):
        """Test that a lone surrogate does not raise out of append."""
        sink = FileSink(log_path)
        assert sink.append(make_event(1, "bad \udc80")) is False
        assert sink.append(make_event(2, "good")) is True
        sink.close()


class TestFileSinkOpen:
    """Tests for FileSink construction."""

    def test_unopenable_destination(self, tmp_path):
        """Test that a missing directory raises at construction."""
        with pytest.raises(OSError):
            FileSink(tmp_path / "missing" / "events.log")


class TestFileSinkLineSplitting:
    """Tests that one event is one line for any line splitter."""

    def test_splitlines_sees_one_line_per_event(self, log_path, read_lines):
        """Test a file holding Unicode line separators."""
        sink = FileSink(log_path)
        sink.append(make_event(1, "first half"))
        sink.append(make_event(2, "next\u0085 part"))
        sink.close()

        assert len(log_path.read_text(encoding="utf-8").splitlines()) == 2
        assert [r.message for r in read_lines()] == ["first half", "next\u0085 part"]
