"""Elevation profile chart generation."""

import io

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend for server
import matplotlib.pyplot as plt

from gpx_track_analyzer.models import GPXData
from gpx_track_analyzer.profile import DEFAULT_SAMPLE_INTERVAL_MILES, sample_profile
from gpx_track_analyzer.units import feet_to_meters

FILL_COLOR = '#93c5fd'
LINE_COLOR = '#2563eb'
PEAK_COLOR = '#e55a00'


def _figure_to_png(fig) -> bytes:
    buf = io.BytesIO()
    fig.savefig(buf, format='png', dpi=100, facecolor='white', edgecolor='none')
    plt.close(fig)
    buf.seek(0)
    return buf.getvalue()


def generate_placeholder_chart(message: str, aspect_ratio: float = 3.5) -> bytes:
    """Blank chart with a centered message, for missing routes or elevation data."""
    fig_height = 4
    fig, ax = plt.subplots(figsize=(fig_height * aspect_ratio, fig_height), facecolor='white')
    ax.text(0.5, 0.5, message, ha='center', va='center', fontsize=14, color='#999')
    ax.axis('off')
    return _figure_to_png(fig)


def generate_elevation_chart(
    data: GPXData,
    imperial: bool = True,
    interval_miles: float = DEFAULT_SAMPLE_INTERVAL_MILES,
    aspect_ratio: float = 3.5,
) -> bytes:
    """Render the elevation profile as a filled area chart.

    Args:
        data: Analyzed track.
        imperial: Miles/feet axes if True, kilometers/meters otherwise.
        interval_miles: Display sampling interval; 0 plots every point.
        aspect_ratio: Width/height ratio of the figure.

    Returns PNG image as bytes.
    """
    if not data.has_elevation:
        return generate_placeholder_chart('No elevation data', aspect_ratio)

    profile = sample_profile(data.elevation_profile, interval_miles)
    if imperial:
        xs = [entry.distance for entry in profile]
        ys = [entry.elevation for entry in profile]
        x_label, y_label = 'Distance (mi)', 'Elevation (ft)'
        y_min, y_max = data.min_elevation, data.max_elevation
    else:
        xs = [entry.distance_km for entry in profile]
        ys = [entry.elevation_m for entry in profile]
        x_label, y_label = 'Distance (km)', 'Elevation (m)'
        y_min, y_max = feet_to_meters(data.min_elevation), feet_to_meters(data.max_elevation)

    fig_height = 4
    fig, ax = plt.subplots(figsize=(fig_height * aspect_ratio, fig_height), facecolor='white')

    # Pad the y range so flat tracks still get a visible band
    pad = max((y_max - y_min) * 0.1, 10.0)
    floor = y_min - pad
    ax.fill_between(xs, floor, ys, color=FILL_COLOR, alpha=0.6, linewidth=0)
    ax.plot(xs, ys, color=LINE_COLOR, linewidth=1.2)

    peak_index = ys.index(max(ys))
    ax.plot([xs[peak_index]], [ys[peak_index]], marker='^', color=PEAK_COLOR, markersize=8)

    ax.set_xlim(0, xs[-1] if xs[-1] > 0 else 1)
    ax.set_ylim(floor, y_max + pad)
    ax.set_xlabel(x_label, fontsize=10)
    ax.set_ylabel(y_label, fontsize=10)
    ax.set_title(data.name, fontsize=12)
    ax.spines['top'].set_visible(False)
    ax.spines['right'].set_visible(False)
    ax.grid(axis='y', alpha=0.3, linestyle='-', linewidth=0.5)
    fig.tight_layout()

    return _figure_to_png(fig)
