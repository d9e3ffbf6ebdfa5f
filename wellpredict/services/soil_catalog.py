"""Static reference table of soil and rock formations."""

import pandas as pd

CATALOG_COLUMNS = [
    "id", "name", "type", "category", "water_retention",
    "drilling_difficulty", "permeability", "description", "suitability",
]

_RECORDS = [
    (1, "Clay Soil", "soil", "Fine-grained", "High", "Medium", "Low",
     "Fine particles with high water retention capacity", 85),
    (2, "Sandy Soil", "soil", "Coarse-grained", "Low", "Easy", "High",
     "Large particles with good drainage properties", 45),
    (3, "Loamy Soil", "soil", "Mixed", "Medium", "Easy", "Medium",
     "Balanced mixture of sand, silt, and clay", 75),
    (4, "Sedimentary Rock", "rock", "Layered", "High", "Medium", "Medium",
     "Formed by deposition and compression of sediments", 90),
    (5, "Igneous Rock", "rock", "Crystalline", "Low", "Hard", "Low",
     "Formed from cooled and solidified magma", 35),
    (6, "Metamorphic Rock", "rock", "Transformed", "Medium", "Hard", "Low",
     "Formed by heat and pressure transformation", 55),
    (7, "Limestone", "rock", "Carbonate", "High", "Medium", "High",
     "Porous rock excellent for groundwater storage", 95),
    (8, "Sandstone", "rock", "Clastic", "Medium", "Medium", "High",
     "Porous sedimentary rock with good water flow", 80),
]

CATALOG_KINDS = ("all", "soil", "rock")


def load_catalog() -> pd.DataFrame:
    return pd.DataFrame(_RECORDS, columns=CATALOG_COLUMNS)


def filter_catalog(search: str = "", kind: str = "all") -> pd.DataFrame:
    """Rows whose name or description contains ``search`` and whose type is ``kind``."""
    if kind not in CATALOG_KINDS:
        raise ValueError(f"Unknown catalog kind {kind!r}, expected one of {CATALOG_KINDS}")

    df = load_catalog()
    term = search.strip().lower()
    if term:
        mask = (
            df["name"].str.lower().str.contains(term, regex=False)
            | df["description"].str.lower().str.contains(term, regex=False)
        )
        df = df[mask]
    if kind != "all":
        df = df[df["type"] == kind]
    return df.reset_index(drop=True)


def suitability_band(score: int) -> str:
    if score >= 80:
        return "high"
    if score >= 60:
        return "medium"
    return "low"
