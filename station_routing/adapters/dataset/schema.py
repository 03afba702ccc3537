"""Schema of one station record and the shared record parser."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Tuple

from pydantic import BaseModel, ConfigDict, ValidationError

from ...domain.errors import DataIntegrityError, DatasetFormatError


class StationRecord(BaseModel):
    """One station as declared in the dataset.

    Attributes:
        name: Human-readable station name
        edges: Codes of the stations directly reachable from this one
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    edges: Tuple[str, ...] = ()


def parse_station_records(
    pairs: Iterable[Tuple[str, Any]],
    source: str,
) -> Dict[str, StationRecord]:
    """Validate raw ``(code, body)`` pairs into station records.

    Pairs are taken as an iterable rather than a mapping so that a code
    declared twice is still visible here.

    Raises:
        DatasetFormatError: If a body does not match StationRecord.
        DataIntegrityError: If a station code is declared twice.
    """
    records: Dict[str, StationRecord] = {}
    for code, body in pairs:
        if not isinstance(code, str):
            raise DatasetFormatError(
                f"Station code must be a string, got {type(code).__name__}",
                source=source,
            )
        if code in records:
            raise DataIntegrityError(
                f"Duplicate station code: {code!r}",
                station_code=code,
            )
        try:
            records[code] = StationRecord.model_validate(body)
        except ValidationError as e:
            raise DatasetFormatError(
                f"Invalid record for station {code!r}",
                source=source,
                cause=e,
            )
    return records
