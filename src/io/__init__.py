"""Session cache, persisted lookup history and export encoders."""

from src.io.cache import ResultCache
from src.io.export import encode_csv, encode_spreadsheet_xml, export_filename
from src.io.history import HistoryManager, JsonFileStore, MemoryStore

__all__ = [
    "HistoryManager",
    "JsonFileStore",
    "MemoryStore",
    "ResultCache",
    "encode_csv",
    "encode_spreadsheet_xml",
    "export_filename",
]
