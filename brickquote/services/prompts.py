"""Prompts for the vision estimate call."""

from typing import Dict

from brickquote.models.job import JobInputs, JobType


SYSTEM_MESSAGE = """You are BrickEstimateAI. You analyse a single job photo plus minimal inputs and produce a practical estimate for a UK bricklayer. Return STRICT JSON ONLY.

CRITICAL CONTEXT BY JOB TYPE:
- Brickwork/Blockwork: Photo shows EMPTY SPACE (garden, foundation, gap, fence line) where NEW wall will be built. Measure the space/gap, not existing bricks.
- Repointing: Photo shows EXISTING wall with old/damaged mortar joints that need raking out and repointing.
- Demo+Rebuild: Photo shows EXISTING damaged/old wall to demolish and rebuild.

Use the anchor dimension provided to calibrate scale. Look for reference objects (doors ~2m, fence panels ~1.8m, wheelie bins ~1.1m, people ~1.7m).

If the photo is unclear, widen ranges and list assumptions. Never invent precise dimensions. Standard UK brick is 215x102.5x65mm with 10mm mortar joints."""


JOB_CONTEXT: Dict[JobType, str] = {
    JobType.BRICKWORK: """This is a NEW BUILD job. The photo shows an EMPTY SPACE where a brick wall will be constructed. Look for:
- The gap/space to be filled with brickwork
- Ground level, fence lines, or existing structures marking boundaries
- Any foundations or footings already in place
- Reference objects to gauge scale (doors, fences, bins, people)""",
    JobType.BLOCKWORK: """This is a NEW BUILD job using concrete blocks. The photo shows an EMPTY SPACE where blocks will be laid. Look for:
- The area to be filled with blockwork
- Foundation lines or string lines if visible
- Reference objects for scale
Note: Blocks are larger than bricks (440x215x100mm standard), so fewer units needed.""",
    JobType.REPOINTING: """This is a REPAIR job on an EXISTING wall. The photo shows a brick/stone wall with deteriorated mortar joints. Look for:
- The extent of damaged/crumbling mortar
- Wall dimensions to calculate joint area
- Depth of raking out needed (typically 15-20mm)
Note: No new bricks needed. Labour-intensive work. Price per m² of wall face.""",
    JobType.DEMO_REBUILD: """This is a DEMOLITION and REBUILD job. The photo shows an EXISTING wall that will be knocked down and rebuilt. Look for:
- Current wall dimensions (this is what gets demolished AND rebuilt)
- Wall condition and thickness
- Access for skip/waste removal
Note: Include demolition labour + disposal + new build materials and labour.""",
}

RESPONSE_SHAPE = """{
  "image_analysis": string,
  "area_m2": number,
  "brick_count_range": [number, number],
  "materials": {
    "sand_kg_range": [number, number],
    "cement_bags_range": [number, number],
    "other": string[]
  },
  "labour_hours_range": [number, number],
  "recommended_price_gbp_range": [number, number],
  "assumptions": string[],
  "exclusions": string[],
  "notes": string[]
}"""


def build_user_message(inputs: JobInputs) -> str:
    """Build the structured user prompt for one job."""
    job_context = JOB_CONTEXT.get(
        inputs.job_type,
        "Analyse the photo to determine the scope of brickwork required."
    )
    description = ""
    if inputs.job_description:
        description = f"- Customer Description: {inputs.job_description}\n"

    return f"""INPUTS:
- Job Type: {inputs.job_type.value}
- Anchor: {inputs.anchor_type.value}={inputs.anchor_value:g} meters
- Difficulty: {inputs.difficulty.value}
- Has Openings: {"Yes" if inputs.has_openings else "No"}
{description}
WHAT TO LOOK FOR:
{job_context}

TASKS:
1) Describe what you see in the photo in "image_analysis".
2) Estimate the area in m² using the anchor dimension and photo analysis.
3) Provide ranges for:
   - brick_count (or blocks if Blockwork)
   - sand_kg
   - cement_bags
   - labour_hours
   - recommended_price_gbp (materials + labour, UK rates)
4) Range widths: ±10–15% Easy, ±15–25% Standard, ±25–35% Tricky.
5) List realistic assumptions (wall height, courses, bond pattern).
6) List exclusions (footings, foundations, skip hire, scaffolding, special features).
7) For Repointing: no new bricks needed, focus on joint area and labour.
8) Return JSON matching:

{RESPONSE_SHAPE}

PHOTO BELOW."""
