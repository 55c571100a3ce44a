"""Concrete Staircase Quantity Calculator.
Turns the eight staircase dimensions into a takeoff of:
- Flights & Landings (switch-back layout, bottom to top)
- Concrete volume (waist slabs, steps, landings)
- Formwork area (soffit + stringer sides, landing soffits, risers)

Lengths are entered in millimetres except the total height (metres).
Every quantity in the report is in metres, m² or m³.

Usage:
    python stair_calculator.py [--height 4.0] [--riser 180] [--tread 280]
"""
import math
import argparse
import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

# Default Configuration (the values a fresh form starts with)
DEFAULT_CONFIG = {
    "height": 4.0,
    "stairWidth": 1950.0,
    "riser": 180.0,
    "tread": 280.0,
    "slabThick": 150.0,
    "landingLength": 4100.0,
    "landingDepth": 1495.0,
    "landingThick": 200.0,
}

MM_PER_M = 1000.0

# Height bands: (inclusive upper bound in m, number of flights)
FLIGHT_BANDS = (
    (5.7, 2),
    (8.0, 4),
    (12.0, 6),
)
# Above the last band the flight count falls back to riser capacity
MAX_RISERS_PER_FLIGHT = 18
# Beyond this the rise/riser ratio is not a buildable stair
MAX_TOTAL_RISERS = 100_000


class StairInputParams(BaseModel):
    """Raw form values. Accepts the form's camelCase keys or snake_case."""
    model_config = ConfigDict(populate_by_name=True)

    height: float = DEFAULT_CONFIG["height"]
    stair_width: float = Field(DEFAULT_CONFIG["stairWidth"], alias="stairWidth")
    riser: float = DEFAULT_CONFIG["riser"]
    tread: float = DEFAULT_CONFIG["tread"]
    slab_thick: float = Field(DEFAULT_CONFIG["slabThick"], alias="slabThick")
    landing_length: float = Field(DEFAULT_CONFIG["landingLength"], alias="landingLength")
    landing_depth: float = Field(DEFAULT_CONFIG["landingDepth"], alias="landingDepth")
    landing_thick: float = Field(DEFAULT_CONFIG["landingThick"], alias="landingThick")

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_zero(cls, value):
        # A cleared or half-typed field reads as 0, same as the form does
        if value is None:
            return 0.0
        try:
            number = float(str(value).strip()) if isinstance(value, str) else float(value)
        except (ValueError, TypeError):
            return 0.0
        if not math.isfinite(number):
            return 0.0
        return number


class FlightData(BaseModel):
    """One straight run of steps. Lengths in metres."""
    model_config = ConfigDict(frozen=True)

    risers: int
    treads: int
    run: float
    rise: float
    inclined_length: float


class StairMetrics(BaseModel):
    num_flights: int = 0
    num_landings: int = 0
    total_risers: int = 0
    total_treads: int = 0
    total_inclined_length: float = 0.0
    total_volume: float = 0.0
    total_formwork_area: float = 0.0
    formwork_bottom_slab: float = 0.0
    formwork_landing_bottom: float = 0.0
    formwork_risers: float = 0.0
    formwork_above_slab: float = 0.0
    volume_waist_slabs: float = 0.0
    volume_landings: float = 0.0
    volume_steps: float = 0.0
    flights_data: list[FlightData] = []

    # Normalised constants echoed for the drawing
    riser: float = 0.0
    tread: float = 0.0
    slab_thick: float = 0.0
    landing_depth: float = 0.0
    landing_thick: float = 0.0

    @classmethod
    def zero(cls, dims: dict) -> "StairMetrics":
        """Empty takeoff that still carries the normalised constants."""
        return cls(
            riser=dims["riser"],
            tread=dims["tread"],
            slab_thick=dims["slab_thick"],
            landing_depth=dims["landing_depth"],
            landing_thick=dims["landing_thick"],
        )


def normalize_params(params: StairInputParams) -> dict:
    """Convert every millimetre dimension to metres. Height passes through."""
    return {
        "height": params.height,
        "stair_width": params.stair_width / MM_PER_M,
        "riser": params.riser / MM_PER_M,
        "tread": params.tread / MM_PER_M,
        "slab_thick": params.slab_thick / MM_PER_M,
        "landing_length": params.landing_length / MM_PER_M,
        "landing_depth": params.landing_depth / MM_PER_M,
        "landing_thick": params.landing_thick / MM_PER_M,
    }


def is_valid(riser: float, height: float, tread: float) -> bool:
    return not (riser <= 0 or height <= 0 or tread <= 0)


def round_half_up(value: float) -> int:
    """Nearest integer, ties go up (built-in round() ties to even)."""
    return int(math.floor(value + 0.5))


def flight_count(height: float, total_risers: int) -> int:
    """Number of flights for a stair of the given height (m).

    Inside the height bands the count is fixed; above them it is the
    minimum number of flights that keeps every flight at or below
    MAX_RISERS_PER_FLIGHT. Never exceeds the riser count.
    """
    if total_risers <= 0:
        return 0

    num_flights: Optional[int] = None
    for upper_bound, flights in FLIGHT_BANDS:
        if height <= upper_bound:
            num_flights = flights
            break
    if num_flights is None:
        num_flights = math.ceil(total_risers / MAX_RISERS_PER_FLIGHT)

    # A flight needs at least one riser
    return min(num_flights, total_risers)


def distribute_risers(total_risers: int, num_flights: int) -> list[int]:
    """Split risers as evenly as possible, remainder on the lowest flights.

    Flights that would get no riser are left out.
    """
    if num_flights <= 0:
        return []
    base, extra = divmod(total_risers, num_flights)
    counts = [base + (1 if i < extra else 0) for i in range(num_flights)]
    return [c for c in counts if c > 0]


def make_flight(risers: int, riser: float, tread: float) -> FlightData:
    treads = risers - 1
    run = treads * tread
    rise = risers * riser
    return FlightData(
        risers=risers,
        treads=treads,
        run=run,
        rise=rise,
        inclined_length=math.sqrt(run ** 2 + rise ** 2),
    )


def calculate_stair_metrics(params: StairInputParams) -> StairMetrics:
    """Compute flights, landings, concrete volume and formwork area.

    Invalid dimensions (riser, height or tread <= 0) give the zero report,
    never an exception. So does a height/riser ratio that overflows or
    exceeds MAX_TOTAL_RISERS.
    """
    dims = normalize_params(params)
    H = dims["height"]
    SW = dims["stair_width"]
    R = dims["riser"]
    T = dims["tread"]
    ST = dims["slab_thick"]
    LL = dims["landing_length"]
    LD = dims["landing_depth"]
    LT = dims["landing_thick"]

    if not is_valid(R, H, T):
        logger.debug("Invalid dimensions R=%s H=%s T=%s, returning zero report", R, H, T)
        return StairMetrics.zero(dims)

    # A subnormal riser or huge height overflows the quotient
    quotient = H / R
    if not math.isfinite(quotient) or quotient > MAX_TOTAL_RISERS:
        logger.debug("H/R=%s out of range, returning zero report", quotient)
        return StairMetrics.zero(dims)

    # 1. Flights & landings
    total_risers = round_half_up(quotient)
    num_flights = flight_count(H, total_risers)
    num_landings = num_flights - 1 if num_flights > 0 else 0
    logger.debug("H=%.3f m: %d risers over %d flights", H, total_risers, num_flights)

    # 2. Risers per flight
    flights_data = [make_flight(n, R, T) for n in distribute_risers(total_risers, num_flights)]

    # 3. Per-flight components
    total_inclined_length = 0.0
    volume_waist_slabs = 0.0
    volume_steps = 0.0
    total_treads = 0
    for flight in flights_data:
        total_inclined_length += flight.inclined_length
        volume_waist_slabs += flight.inclined_length * SW * ST
        volume_steps += (SW * T * R / 2) * flight.treads
        total_treads += flight.treads

    # Soffit plus stringer sides, both over the total stringer length
    formwork_bottom_slab = (total_inclined_length * SW) + (total_inclined_length * ST)

    formwork_landing_bottom = LL * LD * num_landings
    volume_landings = (LL * LD * LT) * num_landings

    # Every riser in the stair, not per flight
    formwork_risers = ((R * SW) + (R * T / 2)) * total_risers

    # Tread tops are finished, not formed
    formwork_above_slab = 0.0

    return StairMetrics(
        num_flights=num_flights,
        num_landings=num_landings,
        total_risers=total_risers,
        total_treads=total_treads,
        total_inclined_length=total_inclined_length,
        total_volume=volume_waist_slabs + volume_steps + volume_landings,
        total_formwork_area=formwork_bottom_slab + formwork_landing_bottom + formwork_risers,
        formwork_bottom_slab=formwork_bottom_slab,
        formwork_landing_bottom=formwork_landing_bottom,
        formwork_risers=formwork_risers,
        formwork_above_slab=formwork_above_slab,
        volume_waist_slabs=volume_waist_slabs,
        volume_landings=volume_landings,
        volume_steps=volume_steps,
        flights_data=flights_data,
        riser=R,
        tread=T,
        slab_thick=ST,
        landing_depth=LD,
        landing_thick=LT,
    )


if __name__ == "__main__":
    from bom_export import format_results

    parser = argparse.ArgumentParser()
    parser.add_argument("--height", type=float, default=DEFAULT_CONFIG["height"])
    parser.add_argument("--width", type=float, default=DEFAULT_CONFIG["stairWidth"])
    parser.add_argument("--riser", type=float, default=DEFAULT_CONFIG["riser"])
    parser.add_argument("--tread", type=float, default=DEFAULT_CONFIG["tread"])
    parser.add_argument("--slab", type=float, default=DEFAULT_CONFIG["slabThick"])
    parser.add_argument("--landing_length", type=float, default=DEFAULT_CONFIG["landingLength"])
    parser.add_argument("--landing_depth", type=float, default=DEFAULT_CONFIG["landingDepth"])
    parser.add_argument("--landing_thick", type=float, default=DEFAULT_CONFIG["landingThick"])
    args = parser.parse_args()

    metrics = calculate_stair_metrics(StairInputParams(
        height=args.height,
        stair_width=args.width,
        riser=args.riser,
        tread=args.tread,
        slab_thick=args.slab,
        landing_length=args.landing_length,
        landing_depth=args.landing_depth,
        landing_thick=args.landing_thick,
    ))

    for label, value in format_results(metrics).items():
        print(f"{label:>24}: {value}")
