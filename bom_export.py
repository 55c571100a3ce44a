import io
import csv

from stair_calculator import StairMetrics

# Display labels for the breakdown rows, in panel order
FORMWORK_ROWS = [
    ("formwork_bottom_slab", "Bottom Slab"),
    ("formwork_landing_bottom", "Landing Bottom"),
    ("formwork_risers", "Risers"),
]
VOLUME_ROWS = [
    ("volume_waist_slabs", "Waist Slabs"),
    ("volume_landings", "Landings"),
    ("volume_steps", "Steps"),
]


def fmt_area(value: float) -> str:
    return f"{value:.2f} m²"


def fmt_volume(value: float) -> str:
    return f"{value:.3f} m³"


def stringer_lengths(metrics: StairMetrics) -> str:
    """Per-flight stringer lengths, e.g. 'F1: 3.43m | F2: 3.43m'."""
    parts = [f"F{i + 1}: {f.inclined_length:.2f}m" for i, f in enumerate(metrics.flights_data)]
    return " | ".join(parts) or "N/A"


def format_results(metrics: StairMetrics) -> dict:
    """Display strings for the results panel.

    Formwork areas to 2 decimals, volumes to 3, counts as integers.
    """
    display = {
        "total_formwork": fmt_area(metrics.total_formwork_area),
        "total_volume": fmt_volume(metrics.total_volume),
        "flights": str(metrics.num_flights),
        "landings": str(metrics.num_landings),
        "total_treads": str(metrics.total_treads),
        "stringer_lengths": stringer_lengths(metrics),
    }
    for key, _ in FORMWORK_ROWS:
        display[key] = fmt_area(getattr(metrics, key))
    for key, _ in VOLUME_ROWS:
        display[key] = fmt_volume(getattr(metrics, key))
    return display


def generate_csv(metrics):
    """
    Writes the staircase takeoff as a bill-of-quantities CSV.

    Args:
        metrics (StairMetrics): The calculator report.

    Returns:
        str: A formatted CSV string.
    """
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(["Item", "Category", "Quantity", "Unit"])

    for key, label in FORMWORK_ROWS:
        writer.writerow([label, "Formwork", f"{getattr(metrics, key):.2f}", "m2"])
    writer.writerow(["Total Formwork", "Formwork", f"{metrics.total_formwork_area:.2f}", "m2"])

    for key, label in VOLUME_ROWS:
        writer.writerow([label, "Concrete", f"{getattr(metrics, key):.3f}", "m3"])
    writer.writerow(["Total Volume", "Concrete", f"{metrics.total_volume:.3f}", "m3"])

    writer.writerow(["Flights", "Count", metrics.num_flights, "nr"])
    writer.writerow(["Landings", "Count", metrics.num_landings, "nr"])
    writer.writerow(["Risers", "Count", metrics.total_risers, "nr"])
    writer.writerow(["Treads", "Count", metrics.total_treads, "nr"])

    for i, flight in enumerate(metrics.flights_data):
        writer.writerow([f"Stringer F{i + 1}", "Length", f"{flight.inclined_length:.2f}", "m"])

    return output.getvalue()


if __name__ == "__main__":
    from stair_calculator import calculate_stair_metrics, StairInputParams
    print(generate_csv(calculate_stair_metrics(StairInputParams())))
