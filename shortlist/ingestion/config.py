from dataclasses import dataclass


@dataclass(frozen=True)
class IngestionConfig:
    """
    Configuration for importing provider CSV exports.
    """

    default_source: str = "csv"
    tag_separators: str = ",;"
    encoding: str = "utf-8"


DEFAULT_INGESTION_CONFIG = IngestionConfig()
