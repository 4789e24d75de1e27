"""
Gazetteer CSV fixtures for PLANETSEARCH tests.

Rows follow the column layout of IAU planetary nomenclature exports,
including columns the loader is expected to drop (Target, Feature Type Code).
"""

from pathlib import Path
from typing import Sequence

HEADER = (
    "Feature Name,Target,Diameter,Center Latitude,Center Longitude,"
    "Coordinate System,Feature Type,Feature Type Code,Approval Status,Approval Date,Origin"
)

WEST = '"Planetographic, +West, 0 - 360"'
EAST = '"Planetographic, +East, 0 - 360"'
CENTRIC = '"Planetocentric, +East, 0 - 360"'

MARS_ROWS = [
    f"Olympus Mons,Mars,648.0,18.65,226.2,{CENTRIC},Mons,MO,Adopted by IAU,1973,Classical albedo feature name.",
    f"Gale,Mars,154.73,-5.37,137.81,{CENTRIC},Crater,AA,Adopted by IAU,1991,Walter F. Gale; Australian astronomer.",
    f"Galle,Mars,230.0,-50.6,329.3,{CENTRIC},Crater,AA,Adopted by IAU,1973,Johann G. Galle; German astronomer.",
    f"Valles Marineris,Mars,4000.0,-13.91,300.8,{CENTRIC},Valles,VA,Adopted by IAU,1973,Named for Mariner 9.",
]

VENUS_ROWS = [
    f"Mead,Venus,270.0,12.5,30,{WEST},Crater,AA,Adopted by IAU,1991,Margaret Mead; American anthropologist.",
    f"Maxwell Montes,Venus,797.0,65.2,3.3,{EAST},Montes,MN,Adopted by IAU,1979,James Clerk Maxwell.",
]


def write_source(
    directory: Path,
    name: str,
    rows: Sequence[str],
    header: str = HEADER,
    preamble: Sequence[str] = (),
) -> Path:
    """Write a gazetteer CSV and return its path."""
    path = Path(directory) / name
    lines = [*preamble, header, *rows]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
