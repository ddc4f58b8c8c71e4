# render/map_preview.py
import numpy as np
import matplotlib
matplotlib.use("Agg")  # off-screen backend for PNG writing
import matplotlib.pyplot as plt
from matplotlib.patches import Polygon as MplPoly

FOOTPRINT_COLOR = "#1976d2"
PATH_COLOR = "#9c27b0"


def _lnglat(polygon):
    """[lat, lng] pairs -> (x=lng, y=lat) pairs for plotting."""
    return [(lng, lat) for lat, lng in polygon]


def draw_campus(ax, footprints, polylines, bounds=None, show_markers=True, show_polygons=True):
    """Draw building footprints, center markers, path polylines and the campus boundary."""
    ax.clear()
    ax.set_aspect('equal', adjustable='datalim')

    # campus boundary (visual reference)
    if bounds is not None:
        ne, sw = bounds.north_east, bounds.south_west
        ax.plot([sw.longitude, ne.longitude, ne.longitude, sw.longitude, sw.longitude],
                [sw.latitude, sw.latitude, ne.latitude, ne.latitude, sw.latitude],
                color="black", linewidth=1.0, linestyle="--")

    if show_polygons:
        for fp in footprints:
            ax.add_patch(MplPoly(_lnglat(fp.polygon), closed=True, fill=True,
                                 facecolor=FOOTPRINT_COLOR, edgecolor=FOOTPRINT_COLOR,
                                 alpha=0.4, linewidth=2))

    if show_markers:
        for fp in footprints:
            ax.plot(fp.center.longitude, fp.center.latitude, marker='o', markersize=5, color="red")
            if fp.code:
                ax.annotate(fp.code, (fp.center.longitude, fp.center.latitude),
                            textcoords="offset points", xytext=(4, 4), fontsize=7)

    for path in polylines:
        lats, lngs = zip(*path.positions)
        ax.plot(lngs, lats, linewidth=3, alpha=0.7, color=PATH_COLOR)

    # fit everything drawn (patches do not autoscale on their own)
    pts = [p for fp in footprints for p in fp.polygon]
    pts += [p for path in polylines for p in path.positions]
    if bounds is not None:
        pts += [[bounds.north_east.latitude, bounds.north_east.longitude],
                [bounds.south_west.latitude, bounds.south_west.longitude]]
    if pts:
        arr = np.asarray(pts, dtype=float)
        arr = arr[np.isfinite(arr).all(axis=1)]
        if len(arr):
            pad = max(float(np.ptp(arr[:, 0])), float(np.ptp(arr[:, 1])), 1e-4) * 0.05
            ax.set_xlim(arr[:, 1].min() - pad, arr[:, 1].max() + pad)
            ax.set_ylim(arr[:, 0].min() - pad, arr[:, 0].max() + pad)

    ax.set_xlabel("longitude [deg]")
    ax.set_ylabel("latitude [deg]")
    ax.set_title("Campus map")


def save_campus_png(footprints, polylines, out_path, bounds=None, show_markers=True,
                    show_polygons=True):
    fig, ax = plt.subplots(figsize=(8, 8))
    draw_campus(ax, footprints, polylines, bounds=bounds,
                show_markers=show_markers, show_polygons=show_polygons)
    fig.savefig(out_path, dpi=150, bbox_inches="tight")
    plt.close(fig)


def save_building_png(footprint, out_path):
    """
    Single-building preview: footprint, center marker, and a title with the
    dimensions and rotation.
    """
    fig, ax = plt.subplots(figsize=(6, 6))
    draw_campus(ax, [footprint], [])
    ax.set_title(f"{footprint.name} ({footprint.code})\n"
                 f"Width x Height: {footprint.width_meters:g}m x {footprint.height_meters:g}m, "
                 f"Rotation: {footprint.rotation_degrees:g}°")
    fig.savefig(out_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
