"""Whole-document file appenders (JSON and XML).

Each export reads the existing document, appends the entry and rewrites the
file, so a write costs O(n) in the number of stored entries. These appenders
suit small, human-readable logs, not high-volume output.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from abc import abstractmethod
from datetime import datetime
from pathlib import Path

from ..models import Log, LogRecord, LogRoot
from ..xmltext import escape_carriage_returns
from .file import FileAppender

_DOCUMENT_ERRORS = (OSError, ValueError, SyntaxError)


class DocumentFileAppender(FileAppender):
    """Read-modify-write appender over a serialized LogRoot document."""

    @abstractmethod
    def load_document(self, text: str) -> LogRoot:
        """Parse file contents into a LogRoot."""

    @abstractmethod
    def dump_document(self, root: LogRoot) -> str:
        """Serialize a LogRoot to file contents."""

    def _parse(self, text: str | None) -> LogRoot:
        if not text or not text.strip():
            return LogRoot()
        return self.load_document(text)

    def _read_text(self) -> str | None:
        try:
            return Path(self.file_path).read_text(encoding=self.encoding)
        except FileNotFoundError:
            return None

    def read_logs(self) -> list[Log]:
        """Return the entries currently stored in the file."""
        with self._lock:
            return [record.to_log() for record in self._parse(self._read_text()).logs]

    def export_log(self, log: Log) -> None:
        if not self.valid_export(log):
            return

        with self._lock:
            try:
                root = self._parse(self._read_text())
                root.logs.append(LogRecord.from_log(log))
                Path(self.file_path).write_text(
                    self.dump_document(root) + "\n", encoding=self.encoding
                )
            except _DOCUMENT_ERRORS as exc:
                self._handle_error(exc)


class JsonFileAppender(DocumentFileAppender):
    """Persist entries as a JSON LogRoot document."""

    def load_document(self, text: str) -> LogRoot:
        return LogRoot.model_validate_json(text)

    def dump_document(self, root: LogRoot) -> str:
        return root.model_dump_json(indent=2)


class XmlFileAppender(DocumentFileAppender):
    """Persist entries as an XML LogRoot document."""

    def load_document(self, text: str) -> LogRoot:
        element = ET.fromstring(text)
        if element.tag != "LogRoot":
            raise ValueError(f"unexpected root element: {element.tag}")

        records: list[LogRecord] = []
        for node in element.iterfind("Logs/Log"):
            records.append(
                LogRecord(
                    log_date=datetime.fromisoformat(node.findtext("LogDate", "")),
                    level=node.findtext("LogLevel", ""),
                    context=node.findtext("Context"),
                    content=node.findtext("Content", ""),
                )
            )
        return LogRoot(logs=records)

    def dump_document(self, root: LogRoot) -> str:
        element = ET.Element("LogRoot")
        logs = ET.SubElement(element, "Logs")
        for record in root.logs:
            node = ET.SubElement(logs, "Log")
            ET.SubElement(node, "LogDate").text = record.log_date.isoformat()
            ET.SubElement(node, "LogLevel").text = record.level.value
            if record.context is not None:
                ET.SubElement(node, "Context").text = record.context
            ET.SubElement(node, "Content").text = record.content
        ET.indent(element)
        declaration = f'<?xml version="1.0" encoding="{self.encoding}"?>\n'
        body = ET.tostring(element, encoding="unicode")
        return declaration + escape_carriage_returns(body)
