"""
PLANETSEARCH Gazetteer Loader

Reads one CSV gazetteer export per celestial body into typed FeatureRecord
instances, preserving source row order.

Column headers are matched ignoring case and whitespace, so "Feature Name",
"FeatureName" and "feature name" all land on the same field. Columns outside
the recognized set (Target, Feature Type Code, Last Updated, ...) are
dropped. A bad cell never fails the load: unparsable numbers become NaN and
rows with nothing usable in them are skipped. Only an unreadable file or a
stream-level parse error raises.
"""

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import pandas as pd

from planetsearch.exceptions import SourceUnreadableError
from planetsearch.logging_config import get_logger
from planetsearch.types import Degrees, Kilometers
from services.features.coordinates import CoordinateSystem

logger = get_logger(__name__)


# Normalized source header -> FeatureRecord field
RECOGNIZED_COLUMNS = {
    "featurename": "name",
    "name": "name",
    "diameter": "diameter",
    "centerlatitude": "center_latitude",
    "centerlongitude": "center_longitude",
    "coordinatesystem": "coordinate_system",
    "featuretype": "feature_type",
    "approvaldate": "approval_date",
    "approvalstatus": "approval_status",
    "origin": "origin",
}

NUMERIC_FIELDS = ("diameter", "center_latitude", "center_longitude", "approval_date")


@dataclass(frozen=True)
class FeatureRecord:
    """A named surface feature on one celestial body.

    Coordinates are stored exactly as the source gives them; see
    services.features.coordinates for the canonical conversion.
    feature_type is None only when the source has no feature type column;
    a blank cell in that column is kept as "".
    """
    name: str
    diameter: Kilometers
    center_latitude: Degrees
    center_longitude: Degrees
    coordinate_system: CoordinateSystem = CoordinateSystem.UNSPECIFIED
    origin: str = ""
    feature_type: Optional[str] = None
    approval_date: Optional[float] = None
    approval_status: Optional[str] = None

    @property
    def has_finite_position(self) -> bool:
        return math.isfinite(self.center_latitude) and math.isfinite(self.center_longitude)


def normalize_header(header: str) -> Optional[str]:
    """Map a raw CSV header to a FeatureRecord field name, or None to drop it."""
    key = "".join(str(header).split()).lower()
    return RECOGNIZED_COLUMNS.get(key)


def body_id_from_path(path: str | Path) -> str:
    """Body identifier for a source file: base name without suffix, lowercased.

    Example:
        >>> body_id_from_path("data/Mars.csv")
        'mars'
    """
    return Path(path).stem.lower()


def _read_frame(path: Path, header_skip: int) -> pd.DataFrame:
    """Read the raw table with every cell as text.

    Rows with more cells than the header are truncated to the header width
    instead of failing the whole file.
    """
    try:
        try:
            width = len(pd.read_csv(path, skiprows=header_skip, nrows=0).columns)
        except pd.errors.EmptyDataError:
            # Nothing after the preamble: the body exists with no features
            return pd.DataFrame()

        def _truncate(bad_line: list[str]) -> list[str]:
            logger.debug(f"{path.name}: truncating over-long row {bad_line[:1]}")
            return bad_line[:width]

        return pd.read_csv(
            path,
            skiprows=header_skip,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            skipinitialspace=True,
            index_col=False,
            engine="python",
            on_bad_lines=_truncate,
        )
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as e:
        raise SourceUnreadableError(
            f"Cannot read feature source: {e}",
            path=str(path),
            body_id=body_id_from_path(path),
        ) from e


def _select_columns(frame: pd.DataFrame) -> pd.DataFrame:
    """Keep recognized columns under their field names.

    When two headers map to the same field, the first one wins.
    """
    renamed = {}
    for column in frame.columns:
        field = normalize_header(column)
        if field is not None and field not in renamed.values():
            renamed[column] = field
    return frame[list(renamed)].rename(columns=renamed)


def _optional_text(value: object) -> Optional[str]:
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def load_features(path: str | Path, header_skip: int = 0) -> list[FeatureRecord]:
    """Load every usable feature row from one gazetteer CSV.

    Args:
        path: CSV file for a single celestial body
        header_skip: Number of leading non-data lines to skip before the
            header row (descriptive preambles in some exports)

    Returns:
        FeatureRecord list in source row order

    Raises:
        SourceUnreadableError: If the file cannot be opened or parsed.
    """
    path = Path(path)
    frame = _select_columns(_read_frame(path, header_skip))
    total_rows = len(frame)

    if "name" not in frame.columns:
        logger.warning(f"{path.name}: no feature name column, nothing loaded")
        return []

    # Short rows come back as NaN in the missing cells
    frame = frame.fillna("").apply(lambda column: column.str.strip())

    # Rows with no non-empty recognized value at all (trailing blank lines,
    # rows that only carried dropped columns)
    frame = frame[(frame != "").any(axis=1)]
    frame = frame[frame["name"] != ""].copy()

    for field in NUMERIC_FIELDS:
        if field in frame.columns:
            frame[field] = pd.to_numeric(frame[field], errors="coerce")
        elif field != "approval_date":
            frame[field] = math.nan

    records = [
        FeatureRecord(
            name=row["name"],
            diameter=float(row["diameter"]),
            center_latitude=float(row["center_latitude"]),
            center_longitude=float(row["center_longitude"]),
            coordinate_system=CoordinateSystem.parse(row.get("coordinate_system")),
            origin=row.get("origin") or "",
            feature_type=row.get("feature_type"),
            approval_date=float(row["approval_date"]) if "approval_date" in row else None,
            approval_status=_optional_text(row.get("approval_status")),
        )
        for row in frame.to_dict(orient="records")
    ]

    dropped = total_rows - len(records)
    logger.debug(f"{path.name}: loaded {len(records)} features, dropped {dropped} rows")
    return records
