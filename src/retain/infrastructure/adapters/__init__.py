# Infrastructure Adapters Package
from .csv_source import CsvCardSource
from .yaml_store import YamlStateStore

__all__ = ["CsvCardSource", "YamlStateStore"]
