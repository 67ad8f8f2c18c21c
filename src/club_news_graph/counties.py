"""Static county gazetteer and adjacency table.

Used by relationship detection (PROXIMITY) and by metadata normalization to
canonicalize county names. This is configuration data, not derived at runtime.
"""

from __future__ import annotations

COUNTY_ADJACENCY: dict[str, tuple[str, ...]] = {
    "Dublin": ("Meath", "Kildare", "Wicklow"),
    "Meath": ("Dublin", "Kildare", "Westmeath", "Offaly", "Louth", "Cavan"),
    "Kildare": ("Dublin", "Meath", "Wicklow", "Carlow", "Laois", "Offaly", "Westmeath"),
    "Wicklow": ("Dublin", "Kildare", "Carlow", "Wexford"),
    "Carlow": ("Kildare", "Wicklow", "Wexford", "Kilkenny", "Laois"),
    "Wexford": ("Carlow", "Wicklow", "Kilkenny", "Waterford"),
    "Kilkenny": ("Carlow", "Wexford", "Waterford", "Tipperary", "Laois"),
    "Waterford": ("Wexford", "Kilkenny", "Tipperary", "Cork", "Limerick"),
    "Cork": ("Waterford", "Kerry", "Limerick", "Tipperary"),
    "Kerry": ("Cork", "Limerick"),
    "Limerick": ("Kerry", "Cork", "Waterford", "Tipperary", "Clare"),
    "Tipperary": ("Kilkenny", "Waterford", "Cork", "Limerick", "Clare", "Offaly", "Laois"),
    "Clare": ("Limerick", "Tipperary", "Galway", "Roscommon"),
    "Laois": ("Kildare", "Carlow", "Kilkenny", "Tipperary", "Offaly", "Westmeath"),
    "Offaly": ("Meath", "Kildare", "Laois", "Tipperary", "Westmeath", "Roscommon"),
    "Westmeath": ("Meath", "Kildare", "Offaly", "Roscommon", "Longford"),
    "Roscommon": ("Offaly", "Westmeath", "Longford", "Leitrim", "Sligo", "Galway", "Clare"),
    "Galway": ("Clare", "Roscommon", "Mayo"),
    "Mayo": ("Galway", "Roscommon", "Sligo"),
    "Sligo": ("Roscommon", "Mayo", "Leitrim", "Donegal"),
    "Leitrim": ("Roscommon", "Sligo", "Donegal", "Cavan", "Longford"),
    "Longford": ("Westmeath", "Roscommon", "Leitrim", "Cavan"),
    "Cavan": ("Meath", "Louth", "Monaghan", "Fermanagh", "Tyrone", "Longford", "Leitrim"),
    "Monaghan": ("Cavan", "Louth", "Armagh", "Tyrone", "Fermanagh"),
    "Louth": ("Meath", "Cavan", "Monaghan", "Armagh", "Down"),
    "Armagh": ("Monaghan", "Louth", "Down", "Tyrone"),
    "Down": ("Louth", "Armagh", "Antrim"),
    "Tyrone": ("Cavan", "Monaghan", "Armagh", "Fermanagh", "Donegal"),
    "Fermanagh": ("Cavan", "Monaghan", "Tyrone", "Donegal"),
    "Donegal": ("Sligo", "Leitrim", "Fermanagh", "Tyrone"),
    "Antrim": ("Down", "Derry"),
    "Derry": ("Antrim", "Tyrone"),
}

UNKNOWN_COUNTY = "Unknown"

_CANONICAL: dict[str, str] = {name.lower(): name for name in COUNTY_ADJACENCY}

# Lower-cased, symmetric view. The table above is not perfectly symmetric
# (Derry lists Tyrone but not vice versa), adjacency is a mutual relation.
_NEIGHBORS: dict[str, set[str]] = {}
for _county, _adjacent in COUNTY_ADJACENCY.items():
    for _other in _adjacent:
        _NEIGHBORS.setdefault(_county.lower(), set()).add(_other.lower())
        _NEIGHBORS.setdefault(_other.lower(), set()).add(_county.lower())


def canonical_county(name: str | None) -> str:
    """Return the gazetteer spelling for `name`, or the trimmed input if unknown."""
    if name is None:
        return UNKNOWN_COUNTY
    trimmed = name.strip()
    if not trimmed:
        return UNKNOWN_COUNTY
    return _CANONICAL.get(trimmed.lower(), trimmed)


def are_neighbors(county_a: str, county_b: str) -> bool:
    a = county_a.strip().lower()
    b = county_b.strip().lower()
    if not a or not b or a == b:
        return False
    return b in _NEIGHBORS.get(a, ())


def neighboring_counties(county: str) -> list[str]:
    key = county.strip().lower()
    return sorted(_CANONICAL[n] for n in _NEIGHBORS.get(key, ()))


def all_counties() -> list[str]:
    return sorted(COUNTY_ADJACENCY)
