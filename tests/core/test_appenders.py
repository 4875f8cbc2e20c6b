from __future__ import annotations

import asyncio
import io
import json
import threading
from pathlib import Path

import pytest

from logsmith.core.appenders import (
    CsvFileAppender,
    DefaultConsoleAppender,
    DefaultFileAppender,
    DefaultMemoryAppender,
    EventEntryType,
    JsonFileAppender,
    WindowsEventAppender,
    XmlFileAppender,
)
from logsmith.core.errors import InvalidArgumentError
from logsmith.core.logger import Logger
from logsmith.core.manager import LogManager
from logsmith.core.models import LogLevel


class FakeEventSink:
    def __init__(self, sources: set[str] | None = None, deny_create: bool = False) -> None:
        self.sources = sources if sources is not None else {"Application"}
        self.deny_create = deny_create
        self.created: list[tuple[str, str]] = []
        self.entries: list[tuple[str, str, str, EventEntryType]] = []

    def source_exists(self, source: str) -> bool:
        return source in self.sources

    def create_source(self, source: str, log_name: str) -> None:
        if self.deny_create:
            raise PermissionError("admin required")
        self.created.append((source, log_name))
        self.sources.add(source)

    def write_entry(self, log_name: str, source: str, message: str, entry_type: EventEntryType) -> None:
        self.entries.append((log_name, source, message, entry_type))


# Base contract


def test_valid_export_rejects_none(recording_appender) -> None:
    with pytest.raises(InvalidArgumentError):
        recording_appender().valid_export(None)


def test_level_set_is_membership_not_threshold(recording_appender, make_log) -> None:
    appender = recording_appender(log_levels=[LogLevel.TRACE, LogLevel.ERROR])

    assert appender.valid_export(make_log(level=LogLevel.TRACE))
    assert not appender.valid_export(make_log(level=LogLevel.WARNING))
    assert appender.valid_export(make_log(level=LogLevel.ERROR))


def test_add_and_remove_levels(recording_appender, make_log) -> None:
    appender = recording_appender(log_levels=[])
    appender.add_log_level(LogLevel.INFO)

    assert appender.valid_export(make_log(level=LogLevel.INFO))

    appender.remove_log_level(LogLevel.INFO)
    assert not appender.valid_export(make_log(level=LogLevel.INFO))


def test_disabled_appender_rejects(recording_appender, make_log) -> None:
    appender = recording_appender(enabled=False)

    assert not appender.valid_export(make_log())


def test_none_settings_rejected(recording_appender) -> None:
    appender = recording_appender()

    with pytest.raises(InvalidArgumentError):
        appender.log_levels = None
    with pytest.raises(InvalidArgumentError):
        appender.format = None  # type: ignore[assignment]


# Console


def test_console_routes_by_level(make_log) -> None:
    out = io.StringIO()
    traces: list[str] = []
    debugs: list[str] = []
    appender = DefaultConsoleAppender(
        "%l:%c", stream=out, trace_sink=traces.append, debug_sink=debugs.append
    )

    appender.export_log(make_log("t", LogLevel.TRACE))
    appender.export_log(make_log("d", LogLevel.DEBUG))
    appender.export_log(make_log("i", LogLevel.INFO))
    appender.export_log(make_log("e", LogLevel.ERROR))

    assert traces == ["Trace:t"]
    assert debugs == ["Debug:d"]
    assert out.getvalue() == "Info:i\nError:e\n"


def test_console_defaults_to_stdout(make_log, capsys) -> None:
    appender = DefaultConsoleAppender()

    appender.export_log(make_log("hello", LogLevel.WARNING, "ctx"))

    assert capsys.readouterr().out == "[01/02/2024 03:04:05]\t[Warning](ctx)\t-\thello\n"


@pytest.mark.asyncio
async def test_console_async_matches_sync(make_log) -> None:
    out = io.StringIO()
    appender = DefaultConsoleAppender("%c", stream=out)

    await appender.export_log_async(make_log("async"))

    assert out.getvalue() == "async\n"


# Text and CSV files


def test_file_appender_appends_lines(tmp_path: Path, make_log) -> None:
    path = tmp_path / "app.log"
    path.write_text("existing\n", encoding="utf-8")

    with DefaultFileAppender(path, format="%l %c") as appender:
        appender.export_log(make_log("one", LogLevel.INFO))
        appender.export_log(make_log("two", LogLevel.ERROR))

    assert path.read_text(encoding="utf-8") == "existing\nInfo one\nError two\n"
    assert appender.is_open is False


def test_file_appender_rejects_none_path() -> None:
    with pytest.raises(InvalidArgumentError):
        DefaultFileAppender(None)  # type: ignore[arg-type]


def test_file_appender_open_failure_suppressed(tmp_path: Path, make_log) -> None:
    path = tmp_path / "missing" / "app.log"

    appender = DefaultFileAppender(path)
    appender.export_log(make_log())

    assert appender.is_open is False
    assert not path.exists()


def test_file_appender_open_failure_raised(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        DefaultFileAppender(tmp_path / "missing" / "app.log", throw_errors=True)


def test_file_appender_reopens_after_failed_open(tmp_path: Path, make_log) -> None:
    folder = tmp_path / "later"
    appender = DefaultFileAppender(folder / "app.log", format="%c")
    folder.mkdir()

    appender.export_log(make_log("late"))
    appender.close()

    assert (folder / "app.log").read_text(encoding="utf-8") == "late\n"


def test_concurrent_writers_do_not_interleave(tmp_path: Path, make_log) -> None:
    path = tmp_path / "app.log"
    appender = DefaultFileAppender(path, format="%c")

    def _write(tag: str) -> None:
        for i in range(50):
            appender.export_log(make_log(f"{tag}-{i}"))

    threads = [threading.Thread(target=_write, args=(t,)) for t in "abcd"]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    appender.close()

    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 200
    assert all(line.split("-")[0] in "abcd" for line in lines)


@pytest.mark.asyncio
async def test_file_appender_async(tmp_path: Path, make_log) -> None:
    path = tmp_path / "app.log"
    appender = DefaultFileAppender(path, format="%c")

    await appender.export_log_async(make_log("a"))
    appender.export_log(make_log("b"))
    await appender.export_log_async(make_log("c", LogLevel.TRACE))
    appender.close()

    assert path.read_text(encoding="utf-8") == "a\nb\nc\n"


def test_export_after_close_is_dropped(tmp_path: Path, make_log) -> None:
    path = tmp_path / "app.log"
    appender = DefaultFileAppender(path, format="%c")
    appender.export_log(make_log("before"))
    appender.close()

    appender.export_log(make_log("after"))

    assert path.read_text(encoding="utf-8") == "before\n"
    assert appender.is_open is False
    assert appender.closed is True


def test_export_after_close_raises_with_throw_errors(tmp_path: Path, make_log) -> None:
    appender = DefaultFileAppender(tmp_path / "app.log", throw_errors=True)
    appender.close()

    with pytest.raises(ValueError, match="closed"):
        appender.export_log(make_log())
    assert appender.is_open is False


@pytest.mark.asyncio
@pytest.mark.parametrize("cls", [DefaultFileAppender, JsonFileAppender])
async def test_many_concurrent_async_exports_complete(cls, tmp_path: Path, make_log) -> None:
    appender = cls(tmp_path / "app.out")

    await asyncio.wait_for(
        asyncio.gather(*(appender.export_log_async(make_log(str(i))) for i in range(64))),
        timeout=30,
    )
    appender.close()

    if cls is JsonFileAppender:
        assert sorted(int(log.content) for log in appender.read_logs()) == list(range(64))
    else:
        assert len((tmp_path / "app.out").read_text(encoding="utf-8").splitlines()) == 64


@pytest.mark.asyncio
@pytest.mark.parametrize("cls", [DefaultFileAppender, JsonFileAppender])
async def test_concurrent_async_logger_calls(cls, tmp_path: Path) -> None:
    appender = cls(tmp_path / "app.out")
    log = Logger("svc", LogManager(appenders=[appender]))

    await asyncio.wait_for(
        asyncio.gather(*(log.info_async(str(i)) for i in range(8))), timeout=30
    )

    assert len(log.log_manager) == 8
    appender.close()


def test_csv_row(tmp_path: Path, make_log) -> None:

    path = tmp_path / "app.csv"

    with CsvFileAppender(path, delimiter=";") as appender:
        appender.export_log(make_log("hello", LogLevel.INFO, "ctx"))
        appender.export_log(make_log('say "hi"', LogLevel.ERROR))

    assert path.read_text(encoding="utf-8").splitlines() == [
        '01/02/2024 03:04:05;Info;"ctx";"hello"',
        '01/02/2024 03:04:05;Error;"";"say ""hi"""',
    ]


def test_csv_flags_select_columns(tmp_path: Path, make_log) -> None:
    appender = CsvFileAppender(tmp_path / "a.csv", append_date=False, append_context=False)

    assert appender.format_log(make_log("x", LogLevel.DEBUG, "c")) == 'Debug,"x"'
    appender.close()


@pytest.mark.parametrize("bad", ["", ";;"])
def test_csv_delimiter_single_char(tmp_path: Path, bad: str) -> None:
    with pytest.raises(InvalidArgumentError):
        CsvFileAppender(tmp_path / "a.csv", delimiter=bad)


# JSON and XML documents


@pytest.mark.parametrize("cls", [JsonFileAppender, XmlFileAppender])
def test_document_appender_accumulates(cls, tmp_path: Path, make_log) -> None:
    path = tmp_path / "logs.doc"
    appender = cls(path)

    appender.export_log(make_log("first", LogLevel.INFO, "web"))
    appender.export_log(make_log("second", LogLevel.ERROR))

    logs = appender.read_logs()
    assert [(log.content, log.level, log.context) for log in logs] == [
        ("first", LogLevel.INFO, "web"),
        ("second", LogLevel.ERROR, None),
    ]
    assert logs[0].log_date == make_log().log_date


def test_json_document_shape(tmp_path: Path, make_log) -> None:
    path = tmp_path / "logs.json"

    JsonFileAppender(path).export_log(make_log("hi", LogLevel.WARNING, "ctx"))

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["logs"][0]["level"] == "Warning"
    assert data["logs"][0]["content"] == "hi"


def test_xml_document_shape(tmp_path: Path, make_log) -> None:
    path = tmp_path / "logs.xml"

    XmlFileAppender(path).export_log(make_log("hi", LogLevel.WARNING))

    text = path.read_text(encoding="utf-8")
    assert text.startswith('<?xml version="1.0" encoding="utf-8"?>')
    assert "<LogLevel>Warning</LogLevel>" in text
    assert "<Context" not in text


def test_document_corrupt_file_suppressed(tmp_path: Path, make_log) -> None:
    path = tmp_path / "logs.json"
    path.write_text("{not json", encoding="utf-8")

    JsonFileAppender(path).export_log(make_log())

    assert path.read_text(encoding="utf-8") == "{not json"
    with pytest.raises(ValueError):
        JsonFileAppender(path, throw_errors=True).export_log(make_log())


@pytest.mark.asyncio
@pytest.mark.parametrize("cls", [JsonFileAppender, XmlFileAppender])
async def test_document_appender_async(cls, tmp_path: Path, make_log) -> None:
    appender = cls(tmp_path / "logs.doc")

    await appender.export_log_async(make_log("a"))
    await appender.export_log_async(make_log("b"))

    assert [log.content for log in appender.read_logs()] == ["a", "b"]


# Memory


def test_memory_unbounded_by_default(make_log) -> None:
    appender = DefaultMemoryAppender()

    for i in range(5):
        appender.export_log(make_log(str(i)))

    assert len(appender) == 5


def test_memory_cap_evicts_oldest_and_raises_removed(make_log) -> None:
    appender = DefaultMemoryAppender(2)
    removed = []
    appender.log_removed.subscribe(removed.append)
    logs = [make_log(str(i)) for i in range(3)]

    for log in logs:
        appender.export_log(log)

    assert appender.get_logs() == logs[1:]
    assert removed == [logs[0]]


def test_memory_ignores_none_and_filtered(make_log) -> None:
    appender = DefaultMemoryAppender(log_levels=[LogLevel.ERROR])

    appender.export_log(None)
    appender.export_log(make_log(level=LogLevel.INFO))

    assert len(appender) == 0


def test_memory_rejects_negative_cap() -> None:
    with pytest.raises(InvalidArgumentError):
        DefaultMemoryAppender(-1)


def test_memory_queries_and_clears(make_log) -> None:
    appender = DefaultMemoryAppender()
    events: list[tuple] = []
    appender.logs_retrieved.subscribe(lambda logs: events.append(("retrieved", len(logs))))
    appender.logs_cleared_by_context.subscribe(lambda ctx: events.append(("context", ctx)))
    appender.logs_cleared.subscribe(lambda: events.append(("all",)))
    web = make_log("a", LogLevel.INFO, "web")
    db = make_log("b", LogLevel.INFO, "db")
    appender.export_log(web)
    appender.export_log(db)

    assert appender.get_logs(LogLevel.INFO, "web") == [web]
    appender.clear_logs(context="web")
    assert appender.get_logs() == [db]
    appender.remove_log(db)
    appender.clear_logs()

    assert events == [("retrieved", 1), ("context", "web"), ("retrieved", 1), ("all",)]
    assert len(appender) == 0


# Event log


def test_event_appender_writes_with_entry_type(make_log) -> None:
    sink = FakeEventSink()
    appender = WindowsEventAppender("MyLog", "MyApp", sink=sink)

    appender.export_log(make_log("boom", LogLevel.ERROR, "db"))
    appender.export_log(make_log("note", LogLevel.DEBUG))

    assert sink.created == [("MyApp", "MyLog")]
    assert sink.entries == [
        ("MyLog", "MyApp", "[Error](db)\t-\tboom", EventEntryType.ERROR),
        ("MyLog", "MyApp", "[Debug]()\t-\tnote", EventEntryType.INFORMATION),
    ]


def test_event_appender_falls_back_without_privilege(make_log) -> None:
    sink = FakeEventSink(deny_create=True)

    appender = WindowsEventAppender("MyLog", "MyApp", sink=sink)

    assert appender.event_source == "Application"


def test_event_appender_defaults_to_application_source() -> None:
    appender = WindowsEventAppender("MyLog", sink=FakeEventSink())

    assert appender.event_source == "Application"


def test_event_appender_rejects_none_name() -> None:
    with pytest.raises(InvalidArgumentError):
        WindowsEventAppender(None, sink=FakeEventSink())  # type: ignore[arg-type]


def test_event_appender_default_sink_uses_logging(make_log, caplog) -> None:
    appender = WindowsEventAppender("MyLog", "Application")

    with caplog.at_level("INFO", logger="logsmith.events"):
        appender.export_log(make_log("hello", LogLevel.WARNING))

    assert caplog.records[-1].name == "logsmith.events.MyLog.Application"
    assert caplog.records[-1].levelname == "WARNING"


def test_xml_document_keeps_carriage_returns(tmp_path: Path, make_log) -> None:
    appender = XmlFileAppender(tmp_path / "logs.xml")

    appender.export_log(make_log("line one\r\nline two", LogLevel.INFO, "a\rb"))

    [log] = appender.read_logs()
    assert log.content == "line one\r\nline two"
    assert log.context == "a\rb"
