"""Side-view drawing of a calculated staircase.

Builds the 2D section of the switch-back stair (steps, waist slabs,
landings, floor slabs, step numbers, stringer labels, rise dimensions)
from a StairMetrics report and renders it as DXF (ezdxf) or SVG.

Drawing coordinates are millimetres, X to the right, Y up, with the
origin at the foot of the first flight.
"""
import io
import math
import logging

import ezdxf
from ezdxf import units
from ezdxf.enums import TextEntityAlignment

from stair_calculator import StairMetrics

logger = logging.getLogger(__name__)

MM_PER_M = 1000.0

# SVG palette (dark drafting board)
C_BACKGROUND = "#1A202C"
C_FILL       = "#384252"
C_OUTLINE    = "#FBBF24"  # Amber
C_TREAD      = "#34D399"  # Green
C_SOFFIT     = "#60A5FA"  # Blue
C_STEP_NO    = "#EF4444"  # Red
C_LABEL      = "#A0AEC0"
C_DIM        = "#6b7280"

PADDING = {"top": 40, "right": 80, "bottom": 40, "left": 80}
MIN_ZOOM = 0.2
MAX_ZOOM = 10.0

# DXF layers and ACI colours
DXF_LAYERS = {
    "FLIGHTS": 7,
    "TREADS": 3,
    "SOFFITS": 5,
    "LANDINGS": 7,
    "FLOOR_SLABS": 8,
    "STEP_NUMBERS": 1,
    "LABELS": 9,
    "DIMENSIONS": 8,
}


def _empty_view():
    return {
        "flights": [],
        "treads": [],
        "soffits": [],
        "landings": [],
        "floor_slabs": [],
        "step_numbers": [],
        "stringer_labels": [],
        "rise_dims": [],
        "extents": None,
    }


def _rect(x, y_top, w, depth):
    """Rectangle hanging down from (x, y_top), w may be negative."""
    x0, x1 = sorted((x, x + w))
    return [(x0, y_top), (x1, y_top), (x1, y_top - depth), (x0, y_top - depth)]


def build_side_view(metrics: StairMetrics) -> dict:
    """Compute every primitive of the side view, in mm.

    Flights alternate direction: even flights climb in +X from x=0,
    odd flights climb in -X from the longest run back towards x=0.
    """
    view = _empty_view()
    flights = metrics.flights_data
    if not flights or metrics.riser == 0 or metrics.tread == 0:
        return view

    R = metrics.riser * MM_PER_M
    T = metrics.tread * MM_PER_M
    ST = metrics.slab_thick * MM_PER_M
    LD = metrics.landing_depth * MM_PER_M
    LT = metrics.landing_thick * MM_PER_M

    total_rise = sum(f.rise for f in flights) * MM_PER_M
    max_run = max(f.run for f in flights) * MM_PER_M
    if max_run + LD == 0 or total_rise == 0:
        return view

    # Bottom floor slab, behind the first riser
    view["floor_slabs"].append(_rect(0.0, 0.0, -LD, LT))

    current_y = 0.0
    direction = 1
    tread_no = 0
    final_x = final_y = 0.0
    final_direction = 1

    for f_idx, flight in enumerate(flights):
        run = flight.run * MM_PER_M
        rise = flight.rise * MM_PER_M
        start_x = 0.0 if direction == 1 else max_run
        start_y = current_y

        # 1. Stepped top profile
        profile = [(start_x, start_y)]
        x, y = start_x, start_y
        for i in range(flight.risers):
            y += R
            profile.append((x, y))
            if i < flight.treads:
                view["treads"].append(((x, y), (x + T * direction, y)))
                x += T * direction
                profile.append((x, y))

        top_x = start_x + run * direction
        top_y = start_y + rise

        # 2. Waist slab, offset perpendicular to the pitch
        angle = math.atan2(rise, run)
        off_x = math.sin(angle) * ST * direction
        off_y = math.cos(angle) * ST
        waist_top = (top_x + off_x, top_y - off_y)
        waist_bottom = (start_x + off_x, start_y - off_y)
        view["flights"].append(profile + [waist_top, waist_bottom])
        view["soffits"].append((waist_bottom, waist_top))

        # 3. Landing at the head of every flight but the last
        if f_idx < metrics.num_landings:
            view["landings"].append(_rect(top_x, top_y, LD * direction, LT))

        # 4. Step numbers, counted across the whole stair
        num_x, num_y = start_x, start_y
        for i in range(flight.treads):
            view["step_numbers"].append({
                "text": f"{tread_no + i + 1:02d}",
                "x": num_x + T * direction * 0.7,
                "y": num_y + R * 0.3,
                "size": R * 0.4,
            })
            num_x += T * direction
            num_y += R
        tread_no += flight.treads

        # 5. Stringer length along the soffit
        mid_x = (waist_bottom[0] + waist_top[0]) / 2
        mid_y = (waist_bottom[1] + waist_top[1]) / 2
        view["stringer_labels"].append({
            "text": f"L = {flight.inclined_length:.2f} m",
            "x": mid_x - off_x * 0.25,
            "y": mid_y + off_y * 0.25,
            "size": ST * 0.6,
            "rotation": math.degrees(angle) * direction,
        })

        # 6. Rise dimension on the side the flight starts from
        dim_offset = R * 0.4 * 3
        view["rise_dims"].append({
            "text": f"{rise:.0f}",
            "x": -dim_offset if direction == 1 else max_run + dim_offset,
            "y1": start_y,
            "y2": top_y,
            "ref_x1": 0.0 if direction == 1 else max_run,
            "ref_x2": max_run if direction == 1 else 0.0,
            "size": R * 0.4,
        })

        final_x, final_y, final_direction = top_x, top_y, direction
        current_y = top_y
        direction *= -1

    # Top floor slab, beyond the head of the last flight
    view["floor_slabs"].append(_rect(final_x, final_y, LD * final_direction, LT))

    view["extents"] = {
        "width": max_run + LD,
        "height": total_rise,
        "max_run": max_run,
    }
    return view


# ===========================================================================
# DXF
# ===========================================================================

def export_side_view_dxf(metrics: StairMetrics) -> str:
    """Render the side view into a DXF document and return its text."""
    view = build_side_view(metrics)

    doc = ezdxf.new("R2010", setup=True)
    doc.units = units.MM
    for name, color in DXF_LAYERS.items():
        doc.layers.add(name, color=color)
    msp = doc.modelspace()

    for pts in view["flights"]:
        msp.add_lwpolyline(pts, close=True, dxfattribs={"layer": "FLIGHTS"})
    for start, end in view["treads"]:
        msp.add_line(start, end, dxfattribs={"layer": "TREADS"})
    for start, end in view["soffits"]:
        msp.add_line(start, end, dxfattribs={"layer": "SOFFITS"})
    for pts in view["landings"]:
        msp.add_lwpolyline(pts, close=True, dxfattribs={"layer": "LANDINGS"})
    for pts in view["floor_slabs"]:
        msp.add_lwpolyline(pts, close=True, dxfattribs={"layer": "FLOOR_SLABS"})

    for label in view["step_numbers"]:
        msp.add_text(label["text"], dxfattribs={
            "layer": "STEP_NUMBERS",
            "height": label["size"],
        }).set_placement((label["x"], label["y"]), align=TextEntityAlignment.MIDDLE_CENTER)

    for label in view["stringer_labels"]:
        msp.add_text(label["text"], dxfattribs={
            "layer": "LABELS",
            "height": label["size"],
            "rotation": label["rotation"],
        }).set_placement((label["x"], label["y"]), align=TextEntityAlignment.BOTTOM_CENTER)

    for dim in view["rise_dims"]:
        msp.add_linear_dim(
            base=(dim["x"], dim["y1"]),
            p1=(dim["ref_x1"], dim["y1"]),
            p2=(dim["ref_x2"], dim["y2"]),
            angle=90,
            text=dim["text"],
            override={"dimtxt": dim["size"], "dimasz": dim["size"] * 0.4},
            dxfattribs={"layer": "DIMENSIONS"},
        ).render()

    logger.debug("DXF side view: %d flights, %d landings",
                 len(view["flights"]), len(view["landings"]))

    dxf_buffer = io.StringIO()
    doc.write(dxf_buffer)
    return dxf_buffer.getvalue()


# ===========================================================================
# SVG
# ===========================================================================

def clamp_zoom(zoom: float) -> float:
    return max(MIN_ZOOM, min(zoom, MAX_ZOOM))


def render_side_view_svg(metrics: StairMetrics, width: int = 800, height: int = 600,
                         zoom: float = 1.0, offset=(0.0, 0.0), scale_factor: float = 1.0) -> str:
    """Render the side view as a standalone SVG.

    The stair is fitted into the padded viewport at 90 %, then scaled by
    zoom and panned by offset (screen pixels). scale_factor enlarges the
    output image without changing the layout, for high-resolution export.
    """
    view = build_side_view(metrics)
    zoom = clamp_zoom(zoom)

    svg_lines = [
        f'<svg width="{width * scale_factor:g}" height="{height * scale_factor:g}" '
        f'viewBox="0 0 {width} {height}" xmlns="http://www.w3.org/2000/svg">',
        f'<rect x="0" y="0" width="{width}" height="{height}" fill="{C_BACKGROUND}" />',
    ]

    extents = view["extents"]
    if extents is None:
        svg_lines.append('</svg>')
        return "\n".join(svg_lines)

    canvas_w = width - PADDING["left"] - PADDING["right"]
    canvas_h = height - PADDING["top"] - PADDING["bottom"]
    scale = min(canvas_w / extents["width"], canvas_h / extents["height"]) * 0.9 * zoom
    origin_x = offset[0] + PADDING["left"]
    origin_y = offset[1] + height - PADDING["bottom"]
    line_w = 1.5 / zoom

    def sx(x):
        return origin_x + x * scale

    def sy(y):
        return origin_y - y * scale

    def points(pts):
        return " ".join(f"{sx(x):.2f},{sy(y):.2f}" for x, y in pts)

    def polygon(pts):
        return (f'<polygon points="{points(pts)}" fill="{C_FILL}" '
                f'stroke="{C_OUTLINE}" stroke-width="{line_w:.3f}" />')

    def line(start, end, color, w, dash=None):
        dash_attr = f' stroke-dasharray="{dash}"' if dash else ""
        return (f'<line x1="{sx(start[0]):.2f}" y1="{sy(start[1]):.2f}" '
                f'x2="{sx(end[0]):.2f}" y2="{sy(end[1]):.2f}" '
                f'stroke="{color}" stroke-width="{w:.3f}"{dash_attr} />')

    def text(label, color, rotation=0.0, weight="bold"):
        x, y = sx(label["x"]), sy(label["y"])
        size = max(1.0, label["size"] * scale)
        rotate = f' transform="rotate({-rotation:.2f} {x:.2f} {y:.2f})"' if rotation else ""
        return (f'<text x="{x:.2f}" y="{y:.2f}" font-size="{size:.2f}" '
                f'font-family="sans-serif" font-weight="{weight}" fill="{color}" '
                f'text-anchor="middle" dominant-baseline="middle"{rotate}>{label["text"]}</text>')

    for pts in view["floor_slabs"]:
        svg_lines.append(polygon(pts))
    for pts in view["flights"]:
        svg_lines.append(polygon(pts))
    for pts in view["landings"]:
        svg_lines.append(polygon(pts))

    for start, end in view["treads"]:
        svg_lines.append(line(start, end, C_TREAD, 2 / zoom))
    for start, end in view["soffits"]:
        svg_lines.append(line(start, end, C_SOFFIT, 2 / zoom))

    for label in view["step_numbers"]:
        svg_lines.append(text(label, C_STEP_NO))
    for label in view["stringer_labels"]:
        svg_lines.append(text(label, C_LABEL, rotation=label["rotation"]))

    # Rise dimensions: dimension line, end ticks, dashed extension lines
    dash = f"{max(1.0, 10 * scale):.2f},{max(1.0, 15 * scale):.2f}"
    dim_w = max(0.5, 2 * scale)
    for dim in view["rise_dims"]:
        top, bottom = (dim["x"], dim["y2"]), (dim["x"], dim["y1"])
        tick = dim["size"] * 0.4
        svg_lines.append(line(bottom, top, C_DIM, dim_w))
        svg_lines.append(line((dim["x"] - tick, dim["y1"]), (dim["x"] + tick, dim["y1"]), C_DIM, dim_w))
        svg_lines.append(line((dim["x"] - tick, dim["y2"]), (dim["x"] + tick, dim["y2"]), C_DIM, dim_w))
        svg_lines.append(line(bottom, (dim["ref_x1"], dim["y1"]), C_DIM, dim_w, dash))
        svg_lines.append(line(top, (dim["ref_x2"], dim["y2"]), C_DIM, dim_w, dash))
        svg_lines.append(text({
            "text": dim["text"],
            "x": dim["x"] - dim["size"] * 1.5,
            "y": (dim["y1"] + dim["y2"]) / 2,
            "size": dim["size"],
        }, C_LABEL, rotation=90.0, weight="normal"))

    svg_lines.append('</svg>')
    return "\n".join(svg_lines)


if __name__ == "__main__":
    from stair_calculator import calculate_stair_metrics, StairInputParams

    metrics = calculate_stair_metrics(StairInputParams())
    with open("staircase_side_view.svg", "w", encoding="utf-8") as f:
        f.write(render_side_view_svg(metrics))
    print("Saved preview to staircase_side_view.svg")
    with open("staircase_side_view.dxf", "w", encoding="utf-8") as f:
        f.write(export_side_view_dxf(metrics))
    print("Saved drawing to staircase_side_view.dxf")
