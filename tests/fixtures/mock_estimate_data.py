"""Mock estimate data for testing.

Raw model answers as they arrive from the vision call (plain dicts), plus
job inputs covering the four job types.
"""

import json
from typing import Any, Dict


# =============================================================================
# JOB INPUTS
# =============================================================================

BRICKWORK_INPUTS: Dict[str, Any] = {
    "jobType": "Brickwork",
    "anchorType": "length",
    "anchorValue": 4.5,
    "difficulty": "Standard",
    "hasOpenings": False,
}

REPOINTING_INPUTS: Dict[str, Any] = {
    "jobType": "Repointing",
    "anchorType": "height",
    "anchorValue": 1.8,
    "difficulty": "Easy",
    "hasOpenings": False,
    "jobDescription": "Front garden wall, mortar crumbling along the top courses",
}

DEMO_REBUILD_INPUTS: Dict[str, Any] = {
    "jobType": "Demo+Rebuild",
    "anchorType": "length",
    "anchorValue": 12,
    "difficulty": "Tricky",
    "hasOpenings": True,
    "pricing": {
        "method": "per_1000_bricks",
        "ratePer1000": 550,
        "materialMarkup": 15,
        "includeVAT": True,
        "vatRate": 20,
    },
}


# =============================================================================
# MODEL ANSWERS
# =============================================================================

GARDEN_WALL_ESTIMATE: Dict[str, Any] = {
    "image_analysis": "Open gap between two fence panels along a garden boundary",
    "area_m2": 9.5,
    "brick_count_range": [540, 620],
    "materials": {
        "sand_kg_range": [450, 520],
        "cement_bags_range": [4, 5],
        "other": ["Wall ties", "DPC roll"],
    },
    "labour_hours_range": [36, 44],
    "recommended_price_gbp_range": [1400, 1750],
    "assumptions": [
        "Wall height of 2.1m",
        "Half-brick wall in stretcher bond",
    ],
    "exclusions": ["Footings", "Skip hire"],
    "notes": ["Check the boundary line with the neighbour"],
}

# Every number zero: the model could not see a wall
ZERO_AREA_ESTIMATE: Dict[str, Any] = {
    "area_m2": 0,
    "brick_count_range": [0, 0],
    "materials": {
        "sand_kg_range": [0, 0],
        "cement_bags_range": [0, 0],
        "other": [],
    },
    "labour_hours_range": [0, 0],
    "recommended_price_gbp_range": [0, 0],
    "assumptions": [],
    "exclusions": [],
    "notes": ["Unable to identify the work area"],
}

# Quantities present but no price
ZERO_PRICE_ESTIMATE: Dict[str, Any] = {
    **GARDEN_WALL_ESTIMATE,
    "recommended_price_gbp_range": [0, 0],
}

# Repointing: no new bricks, still a usable answer
REPOINTING_ESTIMATE: Dict[str, Any] = {
    "area_m2": 12,
    "brick_count_range": [0, 0],
    "materials": {
        "sand_kg_range": [60, 80],
        "cement_bags_range": [1, 2],
        "other": ["Lime"],
    },
    "labour_hours_range": [24, 32],
    "recommended_price_gbp_range": [800, 1000],
}


def as_response_text(estimate: Dict[str, Any]) -> str:
    """Serialize an estimate the way the model returns it."""
    return json.dumps(estimate)
