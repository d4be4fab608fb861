from __future__ import annotations

from typing import Dict, List

from .regions import MapData, Region

_SAMPLES: Dict[str, MapData] = {
    "australia": MapData(
        regions=[
            Region("wa", "Western Australia", "M10,60 L60,40 L70,120 L20,150 Z", None, ["nt", "sa"]),
            Region("nt", "Northern Territory", "M60,40 L120,40 L110,100 L70,120 Z", None, ["wa", "sa", "qld"]),
            Region("sa", "South Australia", "M70,120 L110,100 L140,140 L100,180 Z", None, ["wa", "nt", "qld", "nsw", "vic"]),
            Region("qld", "Queensland", "M110,100 L120,40 L200,50 L170,130 L140,140 Z", None, ["nt", "sa", "nsw"]),
            Region("nsw", "New South Wales", "M140,140 L170,130 L190,160 L150,180 Z", None, ["sa", "qld", "vic"]),
            Region("vic", "Victoria", "M140,180 L150,180 L180,190 L130,190 Z", None, ["sa", "nsw", "tas"]),
            Region(
                "tas",
                "Tasmania",
                "M150,210 C150,210 160,200 170,210 C180,220 160,230 150,220 C140,210 150,210 150,210 Z",
                None,
                ["vic"],
            ),
        ]
    ),
    "usa": MapData(
        regions=[
            Region("west", "West Coast", "M20,40 L60,20 L80,100 L40,120 Z", None, ["mountain", "southwest"]),
            Region("mountain", "Mountain", "M60,20 L120,30 L130,110 L80,100 Z", None, ["west", "midwest", "southwest"]),
            Region("midwest", "Midwest", "M120,30 L200,40 L190,100 L130,110 Z", None, ["mountain", "northeast", "south"]),
            Region("northeast", "Northeast", "M200,40 L240,50 L220,90 L190,100 Z", None, ["midwest", "south"]),
            Region(
                "southwest",
                "Southwest",
                "M40,120 L80,100 L130,110 L120,160 L60,150 Z",
                None,
                ["west", "mountain", "south"],
            ),
            Region(
                "south",
                "South",
                "M130,110 L190,100 L220,90 L200,150 L120,160 Z",
                None,
                ["midwest", "northeast", "southwest"],
            ),
        ]
    ),
    # Empty starting point for user-built maps.
    "custom": MapData(regions=[]),
}


def sample_names() -> List[str]:
    return list(_SAMPLES.keys())


def sample_map(name: str) -> MapData:
    """Return an independent copy of a built-in map."""
    try:
        return _SAMPLES[name.strip().lower()].copy()
    except KeyError as e:
        raise KeyError(f"Unknown sample map {name!r}. Choose one of: {', '.join(_SAMPLES)}") from e
